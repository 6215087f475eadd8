"""Promotion picker: the buttons beside the promotion square and their clicks."""

from __future__ import annotations

from typing import List, Tuple

from .board import Point, Rect, board_rect, square_rect
from .gesture import Gesture, StateEnd
from .moves import Color, Role

PROMOTION_ROLES = (Role.QUEEN, Role.ROOK, Role.BISHOP, Role.KNIGHT)


def promotion_buttons(container: Rect, state: StateEnd) -> List[Tuple[Rect, Role]]:
    """Button rectangles, queen first, in a column running from the target square."""
    board = board_rect(container)
    size = board.width() / 8.0
    target = square_rect(board, state.to)
    top = target.min_y - (3.0 * size if state.piece.color is Color.BLACK else 0.0)
    return [
        (Rect.from_min_size(target.min_x, top + i * size, size, size), role)
        for i, role in enumerate(PROMOTION_ROLES)
    ]


def handle_promotion_click(container: Rect, gesture: Gesture, position: Point) -> Gesture:
    """The gesture after a click: promoted if a button was hit, unchanged otherwise."""
    if not isinstance(gesture.state, StateEnd):
        return gesture
    for rect, role in promotion_buttons(container, gesture.state):
        if rect.contains(position):
            return gesture.promote(role)
    return gesture