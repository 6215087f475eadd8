import pytest

from diagramchess.moves import (
    CastleMove,
    Color,
    EnPassantMove,
    NormalMove,
    Piece,
    PutMove,
    Role,
    Square,
    color_from_str,
    color_to_str,
    move_from_dict,
    move_to_dict,
)

MOVES = [
    NormalMove(Role.PAWN, Square.E2, None, Square.E4, None),
    NormalMove(Role.PAWN, Square.B7, Role.ROOK, Square.A8, Role.QUEEN),
    EnPassantMove(Square.E5, Square.D6),
    CastleMove(Square.E1, Square.H1),
    PutMove(Role.KNIGHT, Square.F3),
]


@pytest.mark.parametrize("move", MOVES)
def test_move_dict_round_trip(move):
    assert move_from_dict(move_to_dict(move)) == move


def test_normal_move_tag_and_fields():
    d = move_to_dict(MOVES[0])
    assert d["_tag"] == "Normal"
    assert d["from"] == Square.E2.name
    assert d["capture"] is None


def test_unknown_tag_rejected():
    with pytest.raises(ValueError):
        move_from_dict({"_tag": "Teleport"})


def test_missing_field_rejected():
    with pytest.raises(ValueError):
        move_from_dict({"_tag": "Castle", "king": "E1"})


def test_color_strings():
    assert color_to_str(Color.WHITE) == "white"
    assert color_from_str("black") is Color.BLACK
    with pytest.raises(ValueError):
        color_from_str("green")


@pytest.mark.parametrize(
    "color, expected",
    [(Color.WHITE, Color.BLACK), (Color.BLACK, Color.WHITE)],
)
def test_color_other(color, expected):
    assert Color.other(color) is expected
    assert Color.other(Color.other(color)) is color
    assert color_to_str(Color.other(color)) == color_to_str(expected)


@pytest.mark.parametrize("role", list(Role))
def test_role_char_round_trip(role):
    assert Role.from_char(role.char()) is role


def test_role_from_char_invalid():
    with pytest.raises(ValueError):
        Role.from_char("x")


@pytest.mark.parametrize("sq", list(Square))
def test_square_coords_and_parse_round_trip(sq):
    assert Square.from_coords(sq.file(), sq.rank()) is sq
    assert Square.parse(str(sq)) is sq


def test_square_parse_invalid():
    with pytest.raises(ValueError):
        Square.parse("i9")
    with pytest.raises(ValueError):
        Square.from_coords(8, 0)


def test_piece_chars():
    assert Piece(Color.WHITE, Role.KING).char() == "K"
    assert Piece(Color.BLACK, Role.KING).char() == "k"
    for color in Color:
        for role in Role:
            p = Piece(color, role)
            assert Piece.from_char(p.char()) == p