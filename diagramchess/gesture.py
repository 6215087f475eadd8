"""Pointer gestures that pick up a piece, carry it and drop it on a square."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Optional, Union

from .board import Point
from .moves import Piece, Role, Square


@dataclass(frozen=True)
class Promotion:
    """Promotion of a dropped piece: not applicable, still to choose, or a role."""

    applicable: bool = True
    role: Optional[Role] = None

    NOT_APPLICABLE: ClassVar["Promotion"]
    NONE: ClassVar["Promotion"]

    def __post_init__(self) -> None:
        if not self.applicable and self.role is not None:
            raise ValueError("a promotion that does not apply takes no role")

    def comp_move(self, role: Optional[Role]) -> bool:
        """Whether a move with the given promotion role matches this choice."""
        if not self.applicable:
            return True
        return self.role == role


Promotion.NOT_APPLICABLE = Promotion(applicable=False)
Promotion.NONE = Promotion()


@dataclass(frozen=True)
class StateStart:
    from_square: Square
    piece: Piece


@dataclass(frozen=True)
class StateMoving:
    position: Point
    from_square: Square
    piece: Piece


@dataclass(frozen=True)
class StateEnd:
    from_square: Square
    piece: Piece
    to: Square
    promotion: Promotion


GestureState = Union[StateStart, StateMoving, StateEnd, None]


@dataclass(frozen=True)
class Gesture:
    """The current gesture; each step returns the next gesture."""

    state: GestureState = None

    def start(self, from_square: Square, piece: Piece) -> "Gesture":
        return Gesture(StateStart(from_square, piece))

    def restart(self) -> "Gesture":
        """Back to the start state, keeping the picked piece."""
        if isinstance(self.state, (StateMoving, StateEnd)):
            return Gesture(StateStart(self.state.from_square, self.state.piece))
        return self

    def moving(self, position: Point) -> "Gesture":
        if isinstance(self.state, StateStart):
            return Gesture(StateMoving(position, self.state.from_square, self.state.piece))
        if isinstance(self.state, StateMoving):
            return Gesture(replace(self.state, position=position))
        return self

    def end(self, to: Square) -> "Gesture":
        """Drop the carried piece; a pawn reaching the last rank waits for a promotion."""
        state = self.state
        if not isinstance(state, StateMoving):
            return self
        promotes = state.piece.role is Role.PAWN and to.rank() in (0, 7)
        promotion = Promotion.NONE if promotes else Promotion.NOT_APPLICABLE
        return Gesture(StateEnd(state.from_square, state.piece, to, promotion))

    def promote(self, role: Role) -> "Gesture":
        if isinstance(self.state, StateEnd):
            return Gesture(replace(self.state, promotion=Promotion(True, role)))
        return self

    def need_promotion(self) -> bool:
        return isinstance(self.state, StateEnd) and self.state.promotion == Promotion.NONE