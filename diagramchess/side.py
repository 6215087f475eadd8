"""Text of the side panel: opening name and numbered move pairs."""

from __future__ import annotations

from typing import List

from .game import GameState

_WHITE_COLUMN = 10


def move_list_lines(state: GameState) -> List[str]:
    """The opening name (if known) followed by one line per move pair.

    Moves are written in SAN as seen from the current position.
    """
    lines: List[str] = []
    if state.opening is not None:
        lines.append(state.opening.name)
    game = state.game
    for number, start in enumerate(range(0, len(state.moves), 2), start=1):
        pair = state.moves[start:start + 2]
        white = game.san(pair[0])
        if len(pair) == 2:
            spacing = " " * max(0, _WHITE_COLUMN - len(white))
            lines.append(f"{number}. {white}{spacing}{game.san(pair[1])}")
        else:
            lines.append(f"{number}. {white}  ...")
    return lines