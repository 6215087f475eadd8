"""Board geometry: the board's rectangle, square rectangles and hit testing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .moves import Square

MARGIN = 64.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle given by its minimum and maximum corners."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @staticmethod
    def from_min_size(x: float, y: float, width: float, height: float) -> "Rect":
        return Rect(x, y, x + width, y + height)

    def width(self) -> float:
        return self.max_x - self.min_x

    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        """True when the point lies inside or on the border."""
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def expand(self, amount: float) -> "Rect":
        """Grow by the amount on every side; a negative amount shrinks."""
        return Rect(
            self.min_x - amount,
            self.min_y - amount,
            self.max_x + amount,
            self.max_y + amount,
        )


def board_rect(rect: Rect) -> Rect:
    """The largest centred square in the rectangle, less the margin for labels."""
    if rect.width() > rect.height():
        size = rect.height()
        whole = Rect.from_min_size(
            rect.min_x + (rect.width() - size) / 2.0, rect.min_y, size, size
        )
    else:
        size = rect.width()
        whole = Rect.from_min_size(
            rect.min_x, rect.min_y + (rect.height() - size) / 2.0, size, size
        )
    return whole.expand(-MARGIN)


def _check_index(index: int, what: str) -> None:
    if not 0 <= index < 8:
        raise ValueError(f"{what} out of range {index}")


def rank_from_index(index: int) -> int:
    """Rank of a screen row; row 0 is the eighth rank."""
    _check_index(index, "rank")
    return 7 - index


def file_from_index(index: int) -> int:
    """File of a screen column; column 0 is the a file."""
    _check_index(index, "file")
    return index


def rank_to_index(rank: int) -> int:
    _check_index(rank, "rank")
    return 7 - rank


def file_to_index(file: int) -> int:
    _check_index(file, "file")
    return file


def is_light_square(rank_index: int, file_index: int) -> bool:
    """Colour of the square at a screen row and column; the top left one is light."""
    _check_index(rank_index, "rank")
    _check_index(file_index, "file")
    return (rank_index + file_index) % 2 == 0


def square_rect(board: Rect, square: Square) -> Rect:
    """Screen rectangle of a square on a board rectangle."""
    size = board.width() / 8.0
    left = file_to_index(square.file()) * size + board.min_x
    top = rank_to_index(square.rank()) * size + board.min_y
    return Rect.from_min_size(left, top, size, size)


def square_at(container: Rect, pos: Point) -> Optional[Square]:
    """The square under a point of the container, or None off the board."""
    board = board_rect(container)
    if not board.contains(pos):
        return None
    column = math.floor((pos.x - board.min_x) * 8.0 / board.width())
    row = math.floor((pos.y - board.min_y) * 8.0 / board.height())
    # A point on the far border belongs to the last row or column.
    column, row = min(column, 7), min(row, 7)
    return Square.from_coords(file_from_index(column), rank_from_index(row))