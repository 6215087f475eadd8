"""The diagram application's controller: pointer input, keys, moves and title."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .board import Point, Rect, square_at
from .engine import CentiPawns, Mate
from .game import GameState
from .gesture import Gesture, StateEnd, StateStart
from .moves import Color, Move, Square
from .position import IllegalMoveError, Position, move_classic_to, ucimovelist_to_sanlist
from .promotion import handle_promotion_click

log = logging.getLogger(__name__)

ELLIPSIS = "…"


class BoardMode(Enum):
    PLAY = "play"
    SETUP = "setup"


class PointerMode(Enum):
    DRAG = "drag"
    CLICK = "click"


def _format_pawns(centipawns: int) -> str:
    text = repr(centipawns / 100.0)
    return text[:-2] if text.endswith(".0") else text


def _pv_text(state: GameState, pv) -> str:
    game = Position()
    for move in state.moves[:-1]:
        try:
            game = game.play(move)
        except IllegalMoveError:
            pass
    start = game.fullmoves
    sanlist = ucimovelist_to_sanlist(game, list(pv))
    if game.turn is Color.BLACK:
        sanlist = [ELLIPSIS, *sanlist]
    pairs: List[str] = []
    for i, first in enumerate(range(0, len(sanlist), 2)):
        pair = sanlist[first:first + 2]
        if len(pair) == 2:
            pairs.append(f"{start + i}.{pair[0]} {pair[1]}")
        else:
            pairs.append(f"{i + 1}.{pair[0]} {ELLIPSIS}")
    return "  ".join(pairs)


class DiagramApp:
    """Turns pointer and key events into gestures, moves and engine requests."""

    def __init__(
        self,
        game: GameState,
        engine,
        container: Rect,
        board_mode: BoardMode = BoardMode.PLAY,
        pointer_mode: PointerMode = PointerMode.DRAG,
    ):
        self.game = game
        self.engine = engine
        self.container = container
        self.board_mode = board_mode
        self.pointer_mode = pointer_mode
        self.gesture = Gesture()
        self.fullscreen = False
        self.closed = False

    def new_game(self) -> None:
        with self.game.lock:
            self.game.moves = []
            self.game.game = Position()
            self.engine.new_game()

    def set_board_mode(self, mode: BoardMode) -> None:
        self.board_mode = mode
        if mode is BoardMode.PLAY:
            with self.game.lock:
                fen = self.game.game.to_fen()
            self.engine.play(fen)

    def toggle_pointer_mode(self) -> None:
        self.gesture = Gesture()
        self.pointer_mode = (
            PointerMode.CLICK if self.pointer_mode is PointerMode.DRAG else PointerMode.DRAG
        )

    def title(self) -> Optional[str]:
        """Outcome, mate announcement, evaluation with its line, or opening name."""
        state = self.game
        with state.lock:
            outcome = state.game.outcome()
            if outcome is not None:
                return str(outcome)
            score = state.score
            if isinstance(score, Mate):
                return f"Mate in {score.moves}"
            if isinstance(score, CentiPawns):
                return f"[{_format_pawns(score.score)}]  {_pv_text(state, score.pv)}"
            eco = state.opening
            if eco is not None and len(eco.moves) >= len(state.moves):
                return eco.name
            return None

    def highlight_square(self) -> Optional[Square]:
        """The picked square while choosing a destination in click mode."""
        if self.pointer_mode is PointerMode.CLICK and isinstance(self.gesture.state, StateStart):
            return self.gesture.state.from_square
        return None

    def _pick(self, position: Point) -> None:
        from_square = square_at(self.container, position)
        if from_square is None:
            return
        with self.game.lock:
            piece = self.game.game.piece_at(from_square)
        if piece is not None:
            log.info("start with %s from %s", piece, from_square)
            self.gesture = self.gesture.start(from_square, piece)

    def _drag_enabled(self) -> bool:
        return self.pointer_mode is PointerMode.DRAG and not self.gesture.need_promotion()

    def press(self, position: Point) -> None:
        if self._drag_enabled() and self.gesture.state is None:
            self._pick(position)

    def drag(self, position: Point) -> None:
        if self._drag_enabled():
            self.gesture = self.gesture.moving(position)

    def release(self, position: Point) -> None:
        if not self._drag_enabled():
            return
        to = square_at(self.container, position)
        if to is not None:
            self.gesture = self.gesture.end(to)

    def click(self, position: Point) -> None:
        """A primary click: a promotion choice, or a pick and drop in click mode."""
        if self.gesture.need_promotion():
            self.gesture = handle_promotion_click(self.container, self.gesture, position)
            return
        if self.pointer_mode is not PointerMode.CLICK:
            return
        state = self.gesture.state
        if state is None:
            self._pick(position)
        elif isinstance(state, StateStart):
            to = square_at(self.container, position)
            if to is None:
                return
            if to != state.from_square:
                self.gesture = self.gesture.moving(position).end(to)
            else:
                self.gesture = Gesture()

    def resolve_gesture(self) -> Optional[Move]:
        """Play the move of a finished gesture; returns the move played, if any."""
        if self.gesture.need_promotion():
            return None
        state = self.gesture.state
        if not isinstance(state, StateEnd):
            return None
        with self.game.lock:
            if self.game.game.turn is not state.piece.color:
                return None
            move = next(
                (
                    m for m in self.game.game.legal_moves()
                    if move_classic_to(m) == state.to
                    and m.from_square == state.from_square
                    and state.promotion.comp_move(getattr(m, "promotion", None))
                ),
                None,
            )
            self.gesture = Gesture()
            if move is None:
                return None
            log.info("We got a move %s", move)
            self.game.clear_score()
            self.game.make_move(move)
            if self.board_mode is BoardMode.PLAY:
                book = self.game.openings.find_move(self.game.game)
                if book is not None:
                    self.game.make_move(book[0])
                else:
                    self.engine.play(self.game.game.to_fen())
            return move

    def key_released(self, key: str) -> None:
        """Handle a released key: F, Q, N, S, P or I."""
        key = key.upper()
        if key == "F":
            self.fullscreen = not self.fullscreen
        elif key == "Q":
            self.closed = True
        elif key == "N":
            self.new_game()
        elif key == "S":
            self.set_board_mode(BoardMode.SETUP)
        elif key == "P":
            self.set_board_mode(BoardMode.PLAY)
        elif key == "I":
            self.toggle_pointer_mode()