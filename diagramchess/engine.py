"""Engine commands, messages, scores and search information."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from .moves import Move


@dataclass(frozen=True)
class EngineState:
    """What the engine is doing; the move states carry the move."""

    IDLE: ClassVar[str] = "idle"
    COMPUTING: ClassVar[str] = "computing"
    PENDING_MOVE: ClassVar[str] = "pending_move"
    MOVE: ClassVar[str] = "move"

    kind: str = "idle"
    move: Optional[Move] = None

    def __post_init__(self) -> None:
        with_move = (self.PENDING_MOVE, self.MOVE)
        if self.kind not in (self.IDLE, self.COMPUTING) + with_move:
            raise ValueError(f"unknown engine state: {self.kind!r}")
        if self.kind in with_move and self.move is None:
            raise ValueError(f"engine state {self.kind!r} needs a move")
        if self.kind not in with_move and self.move is not None:
            raise ValueError(f"engine state {self.kind!r} takes no move")


@dataclass(frozen=True)
class Go:
    fen: str
    depth: int


@dataclass(frozen=True)
class NewGame:
    pass


@dataclass(frozen=True)
class Stop:
    pass


EngineCommand = Union[Go, NewGame, Stop]


@dataclass(frozen=True)
class CentiPawns:
    score: int
    pv: Tuple[str, ...]


@dataclass(frozen=True)
class Mate:
    moves: int


@dataclass(frozen=True)
class NoScore:
    pass


Score = Union[CentiPawns, Mate, NoScore]


@dataclass(frozen=True)
class EngineId:
    name: str


@dataclass(frozen=True)
class BestMove:
    move: Move
    score: Score


EngineMessage = Union[EngineId, BestMove]


@dataclass(frozen=True)
class UciInfoScore:
    cp: Optional[int] = None
    mate: Optional[int] = None
    lower_bound: bool = False
    upper_bound: bool = False


@dataclass(frozen=True)
class UciInfo:
    score: Optional[UciInfoScore] = None
    pv: Tuple[str, ...] = ()
    depth: Optional[int] = None
    seldepth: Optional[int] = None
    multipv: Optional[int] = None
    nodes: Optional[int] = None


def score_from_info(info: UciInfo) -> Score:
    """Score of a search info line; a mate wins over centipawns."""
    if info.score is None:
        return NoScore()
    if info.score.mate is not None:
        return Mate(info.score.mate)
    if info.score.cp is not None:
        return CentiPawns(info.score.cp, tuple(info.pv))
    return NoScore()