import pytest

from diagramchess.app import BoardMode, DiagramApp, PointerMode
from diagramchess.board import Point, Rect, board_rect, square_rect
from diagramchess.eco import Eco, EcoTable
from diagramchess.engine import CentiPawns, Mate, NoScore
from diagramchess.game import GameState, Openings
from diagramchess.gesture import StateEnd, StateStart
from diagramchess.moves import Color, NormalMove, Role, Square
from diagramchess.position import Position
from diagramchess.promotion import promotion_buttons

CONTAINER = Rect.from_min_size(0, 0, 800, 600)


class FakeEngine:
    def __init__(self):
        self.played = []
        self.new_games = 0

    def play(self, fen):
        self.played.append(fen)

    def new_game(self):
        self.new_games += 1


def center(square):
    r = square_rect(board_rect(CONTAINER), square)
    return Point((r.min_x + r.max_x) / 2, (r.min_y + r.max_y) / 2)


def make_app(fen=None, openings=None, **kwargs):
    state = GameState(Color.BLACK, fen, openings=openings)
    engine = FakeEngine()
    return DiagramApp(state, engine, CONTAINER, **kwargs), engine


E4 = NormalMove(Role.PAWN, Square.E2, None, Square.E4)
E5 = NormalMove(Role.PAWN, Square.E7, None, Square.E5)
NF3 = NormalMove(Role.KNIGHT, Square.G1, None, Square.F3)


def drag_move(app, from_sq, to_sq):
    app.press(center(from_sq))
    app.drag(center(to_sq))
    app.release(center(to_sq))
    return app.resolve_gesture()


def test_defaults():
    app, _ = make_app()
    assert app.gesture.state is None
    assert app.board_mode is BoardMode.PLAY
    assert app.pointer_mode is PointerMode.DRAG


def test_drag_move_asks_engine():
    app, engine = make_app()
    move = drag_move(app, Square.E2, Square.E4)
    assert move == E4
    assert app.game.moves == [E4]
    assert engine.played == [app.game.game.to_fen()]
    assert app.gesture.state is None


def test_book_move_answers_without_engine():
    eco = Eco("C40", "King's Knight", "", (E4, E5, NF3), "")
    openings = Openings(EcoTable({"x": eco}))
    app, engine = make_app(openings=openings)
    drag_move(app, Square.E2, Square.E4)
    assert app.game.moves == [E4, E5]
    assert engine.played == []


def test_wrong_color_keeps_gesture():
    app, engine = make_app()
    assert drag_move(app, Square.E7, Square.E5) is None
    assert app.game.moves == []
    assert isinstance(app.gesture.state, StateEnd)
    assert engine.played == []


def test_illegal_target_resets_gesture():
    app, _ = make_app()
    assert drag_move(app, Square.E2, Square.E5) is None
    assert app.game.moves == []
    assert app.gesture.state is None


def test_press_on_empty_square_does_nothing():
    app, _ = make_app()
    app.press(center(Square.E4))
    assert app.gesture.state is None


def test_setup_mode_does_not_ask_engine():
    app, engine = make_app()
    app.set_board_mode(BoardMode.SETUP)
    drag_move(app, Square.E2, Square.E4)
    assert app.game.moves == [E4]
    assert engine.played == []


def test_click_mode_pick_and_drop():
    app, _ = make_app()
    app.toggle_pointer_mode()
    assert app.pointer_mode is PointerMode.CLICK
    app.click(center(Square.E2))
    assert isinstance(app.gesture.state, StateStart)
    assert app.highlight_square() == Square.E2
    app.click(center(Square.E2))
    assert app.gesture.state is None
    app.click(center(Square.E2))
    app.click(center(Square.E4))
    assert app.resolve_gesture() == E4


def test_drag_mode_ignores_click_and_has_no_highlight():
    app, _ = make_app()
    app.click(center(Square.E2))
    assert app.gesture.state is None
    app.press(center(Square.E2))
    assert app.highlight_square() is None


def test_promotion_flow():
    app, _ = make_app("7k/P7/8/8/8/8/8/K7 w - - 0 1", board_mode=BoardMode.SETUP)
    app.press(center(Square.A7))
    app.drag(center(Square.A8))
    app.release(center(Square.A8))
    assert app.gesture.need_promotion()
    assert app.resolve_gesture() is None
    rect, role = promotion_buttons(CONTAINER, app.gesture.state)[0]
    app.click(Point((rect.min_x + rect.max_x) / 2, (rect.min_y + rect.max_y) / 2))
    move = app.resolve_gesture()
    assert move.promotion is role
    assert app.game.game.piece_at(Square.A8).role is role


def test_title_none_without_score():
    app, _ = make_app()
    app.game.score = NoScore()
    assert app.title() is None


def test_title_mate():
    app, _ = make_app()
    app.game.set_score(Mate(3))
    assert app.title() == "Mate in 3"


def test_title_outcome():
    fen = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
    app, _ = make_app(fen)
    app.game.set_score(Mate(1))
    assert app.title() == "0-1"


def test_title_centipawns():
    app, _ = make_app(board_mode=BoardMode.SETUP)
    app.game.make_move(E4)
    app.game.set_score(CentiPawns(35, ("e2e4", "e7e5")))
    assert app.title() == "[0.35]  1.e4 e5"


@pytest.mark.parametrize("key", ["N", "n"])
def test_key_new_game(key):
    app, engine = make_app(board_mode=BoardMode.SETUP)
    app.game.make_move(E4)
    app.key_released(key)
    assert app.game.moves == []
    assert app.game.game == Position()
    assert engine.new_games == 1


def test_keys_modes_and_window():
    app, engine = make_app()
    app.key_released("S")
    assert app.board_mode is BoardMode.SETUP
    app.key_released("P")
    assert app.board_mode is BoardMode.PLAY
    assert engine.played == [Position().to_fen()]
    app.key_released("I")
    assert app.pointer_mode is PointerMode.CLICK
    app.key_released("F")
    assert app.fullscreen is True
    app.key_released("F")
    assert app.fullscreen is False
    app.key_released("Q")
    assert app.closed is True


def test_toggle_pointer_resets_gesture():
    app, _ = make_app()
    app.press(center(Square.E2))
    app.toggle_pointer_mode()
    assert app.gesture.state is None
    app.toggle_pointer_mode()
    assert app.pointer_mode is PointerMode.DRAG