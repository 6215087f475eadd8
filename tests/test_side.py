from diagramchess.eco import Eco, EcoTable
from diagramchess.game import GameState
from diagramchess.moves import Color
from diagramchess.side import move_list_lines


def _play(state, ucis):
    for uci in ucis:
        state.make_move(state.game.parse_uci(uci))


def test_empty_game_has_no_lines():
    assert move_list_lines(GameState(Color.BLACK)) == []


def test_move_pairs_and_pending_black_move():
    state = GameState(Color.BLACK)
    _play(state, ["e2e4", "e7e5", "g1f3"])
    assert move_list_lines(state) == ["1. e4" + " " * 8 + "e5", "2. Nf3  ..."]


def test_complete_pairs_only():
    state = GameState(Color.BLACK)
    _play(state, ["d2d4", "d7d5"])
    lines = move_list_lines(state)
    assert len(lines) == 1
    assert lines[0].startswith("1. d4")
    assert lines[0].endswith("d5")
    assert len(lines[0]) == len("1. ") + 10 + len("d5")


def test_opening_name_comes_first():
    state0 = GameState(Color.BLACK)
    moves = []
    for uci in ["e2e4", "e7e5"]:
        move = state0.game.parse_uci(uci)
        moves.append(move)
        state0.make_move(move)
    table = EcoTable({"e2e4e7e5": Eco("C20", "Open Game", state0.game.to_fen(), tuple(moves), "")})
    state = GameState(Color.BLACK, eco_table=table)
    _play(state, ["e2e4", "e7e5", "g1f3"])
    lines = move_list_lines(state)
    assert lines[0] == "Open Game"
    assert lines[1:] == ["1. e4" + " " * 8 + "e5", "2. Nf3  ..."]