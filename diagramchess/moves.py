"""Chess primitives (colours, roles, squares, pieces, moves) and their JSON form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional, Union


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    def other(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Role(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def char(self) -> str:
        """Lower case letter of the role: p, n, b, r, q, k."""
        return _ROLE_CHARS[self]

    @staticmethod
    def from_char(char: str) -> "Role":
        try:
            return _CHAR_ROLES[char.lower()]
        except (KeyError, AttributeError):
            raise ValueError(f"invalid role character: {char!r}") from None


_ROLE_CHARS = {
    Role.PAWN: "p",
    Role.KNIGHT: "n",
    Role.BISHOP: "b",
    Role.ROOK: "r",
    Role.QUEEN: "q",
    Role.KING: "k",
}
_CHAR_ROLES = {c: r for r, c in _ROLE_CHARS.items()}


class Square(IntEnum):
    A1 = 0; B1 = 1; C1 = 2; D1 = 3; E1 = 4; F1 = 5; G1 = 6; H1 = 7  # noqa: E702
    A2 = 8; B2 = 9; C2 = 10; D2 = 11; E2 = 12; F2 = 13; G2 = 14; H2 = 15  # noqa: E702
    A3 = 16; B3 = 17; C3 = 18; D3 = 19; E3 = 20; F3 = 21; G3 = 22; H3 = 23  # noqa: E702
    A4 = 24; B4 = 25; C4 = 26; D4 = 27; E4 = 28; F4 = 29; G4 = 30; H4 = 31  # noqa: E702
    A5 = 32; B5 = 33; C5 = 34; D5 = 35; E5 = 36; F5 = 37; G5 = 38; H5 = 39  # noqa: E702
    A6 = 40; B6 = 41; C6 = 42; D6 = 43; E6 = 44; F6 = 45; G6 = 46; H6 = 47  # noqa: E702
    A7 = 48; B7 = 49; C7 = 50; D7 = 51; E7 = 52; F7 = 53; G7 = 54; H7 = 55  # noqa: E702
    A8 = 56; B8 = 57; C8 = 58; D8 = 59; E8 = 60; F8 = 61; G8 = 62; H8 = 63  # noqa: E702

    def file(self) -> int:
        """File index, 0 for a through 7 for h."""
        return int(self) % 8

    def rank(self) -> int:
        """Rank index, 0 for the first rank through 7 for the eighth."""
        return int(self) // 8

    @staticmethod
    def from_coords(file: int, rank: int) -> "Square":
        if not (0 <= file < 8 and 0 <= rank < 8):
            raise ValueError(f"coordinates out of range: {file}, {rank}")
        return Square(rank * 8 + file)

    @staticmethod
    def parse(name: str) -> "Square":
        if len(name) != 2 or name[0].lower() not in "abcdefgh" or name[1] not in "12345678":
            raise ValueError(f"invalid square name: {name!r}")
        return Square.from_coords("abcdefgh".index(name[0].lower()), int(name[1]) - 1)

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Piece:
    color: Color
    role: Role

    def char(self) -> str:
        """Role letter, upper case for white and lower case for black."""
        c = self.role.char()
        return c.upper() if self.color is Color.WHITE else c

    @staticmethod
    def from_char(char: str) -> "Piece":
        role = Role.from_char(char)
        return Piece(Color.WHITE if char.isupper() else Color.BLACK, role)


@dataclass(frozen=True)
class NormalMove:
    role: Role
    from_square: Square
    capture: Optional[Role]
    to: Square
    promotion: Optional[Role] = None


@dataclass(frozen=True)
class EnPassantMove:
    from_square: Square
    to: Square


@dataclass(frozen=True)
class CastleMove:
    king: Square
    rook: Square

    @property
    def from_square(self) -> Square:
        return self.king

    @property
    def to(self) -> Square:
        return self.rook


@dataclass(frozen=True)
class PutMove:
    role: Role
    to: Square

    @property
    def from_square(self) -> None:
        return None


Move = Union[NormalMove, EnPassantMove, CastleMove, PutMove]


def _role_name(role: Optional[Role]) -> Optional[str]:
    return None if role is None else role.name.capitalize()


def _role_value(name: Any) -> Optional[Role]:
    if name is None:
        return None
    try:
        return Role[str(name).upper()]
    except KeyError:
        raise ValueError(f"invalid role: {name!r}") from None


def _square_value(name: Any) -> Square:
    try:
        return Square[str(name).upper()]
    except KeyError:
        raise ValueError(f"invalid square: {name!r}") from None


def move_to_dict(move: Move) -> dict:
    """Serialise a move into a tagged mapping."""
    if isinstance(move, NormalMove):
        return {
            "_tag": "Normal",
            "role": _role_name(move.role),
            "from": move.from_square.name,
            "capture": _role_name(move.capture),
            "to": move.to.name,
            "promotion": _role_name(move.promotion),
        }
    if isinstance(move, EnPassantMove):
        return {"_tag": "EnPassant", "from": move.from_square.name, "to": move.to.name}
    if isinstance(move, CastleMove):
        return {"_tag": "Castle", "king": move.king.name, "rook": move.rook.name}
    if isinstance(move, PutMove):
        return {"_tag": "Put", "role": _role_name(move.role), "to": move.to.name}
    raise TypeError(f"not a move: {move!r}")


def move_from_dict(data: dict) -> Move:
    """Read a move from its tagged mapping."""
    try:
        tag = data["_tag"]
        if tag == "Normal":
            role = _role_value(data["role"])
            if role is None:
                raise ValueError("missing role")
            return NormalMove(
                role,
                _square_value(data["from"]),
                _role_value(data.get("capture")),
                _square_value(data["to"]),
                _role_value(data.get("promotion")),
            )
        if tag == "EnPassant":
            return EnPassantMove(_square_value(data["from"]), _square_value(data["to"]))
        if tag == "Castle":
            return CastleMove(_square_value(data["king"]), _square_value(data["rook"]))
        if tag == "Put":
            role = _role_value(data["role"])
            if role is None:
                raise ValueError("missing role")
            return PutMove(role, _square_value(data["to"]))
    except KeyError as exc:
        raise ValueError(f"missing field {exc}") from None
    raise ValueError(f"unknown move tag: {data.get('_tag')!r}")


def color_to_str(color: Color) -> str:
    return color.value


def color_from_str(text: str) -> Color:
    try:
        return Color(text)
    except ValueError:
        raise ValueError(f"invalid color: {text!r}") from None