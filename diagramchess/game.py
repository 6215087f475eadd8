"""Game state shared by the board and the engine, and the opening book."""

from __future__ import annotations

import logging
import random
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from .eco import Eco, EcoTable
from .engine import NoScore, Score
from .moves import Color, Move
from .position import IllegalMoveError, Position

log = logging.getLogger(__name__)

OpeningItem = Tuple[List[Move], str]


class Openings:
    """Book moves keyed by position, built from a selection of openings."""

    def __init__(
        self,
        table: EcoTable,
        opening: Optional[str] = None,
        eco_codes: Sequence[str] = (),
    ):
        log.info("Init openings")
        if opening is not None:
            variants = table.lookup_by_name(opening)
        elif eco_codes:
            variants = [eco for code in eco_codes for eco in table.lookup_by_code(code)]
        else:
            variants = table.all()

        self._index: Dict[str, OpeningItem] = {}
        for variant in variants:
            self._add_variant(variant)
        log.info("Openings ready")

    def _add_variant(self, variant: Eco) -> None:
        game = Position()
        # The last move of a variant is not offered as a book move.
        for move in variant.moves[:-1]:
            fen = game.to_fen()
            if game.is_legal(move):
                game = game.play(move)
                current = self._index.get(fen)
                moves = [*current[0], move] if current is not None else [move]
                self._index[fen] = (moves, variant.name)

    def find_move(
        self, position: Position, rng: Optional[random.Random] = None
    ) -> Optional[Tuple[Move, str]]:
        """A random book move for the position with its opening name, or None."""
        item = self._index.get(position.to_fen())
        if item is None or not item[0]:
            return None
        moves, name = item
        chooser = rng if rng is not None else random
        return chooser.choice(moves), name


def _parse_position(fen: Optional[str]) -> Position:
    if fen is None:
        return Position()
    try:
        return Position.from_fen(fen)
    except ValueError:
        return Position()


class GameState:
    """The game being played; guard changes from other threads with ``lock``."""

    def __init__(
        self,
        engine_color: Color,
        position: Optional[str] = None,
        openings: Optional[Openings] = None,
        eco_table: Optional[EcoTable] = None,
    ):
        self.engine_color = engine_color
        self.moves: List[Move] = []
        self.game = _parse_position(position)
        self.eco_table = eco_table
        if openings is None:
            openings = Openings(eco_table if eco_table is not None else EcoTable({}))
        self.openings = openings
        self.opening: Optional[Eco] = None
        self.score: Score = NoScore()
        self.lock = threading.RLock()

    def make_move(self, move: Move) -> None:
        """Play the move if it is legal; an illegal move leaves the state as it was."""
        try:
            new_game = self.game.play(move)
        except IllegalMoveError:
            return
        self.moves.append(move)
        self.opening = (
            self.eco_table.find_from_moves(self.moves) if self.eco_table is not None else None
        )
        self.game = new_game

    def clear_score(self) -> None:
        self.score = NoScore()

    def set_score(self, score: Score) -> None:
        self.score = score