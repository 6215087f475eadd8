import io
import queue

import pytest

from diagramchess.engine import (
    BestMove,
    CentiPawns,
    EngineId,
    Go,
    Mate,
    NewGame,
    NoScore,
    Stop,
    UciInfo,
    UciInfoScore,
)
from diagramchess.moves import Color
from diagramchess.position import Position
from diagramchess.uci import (
    CompScore,
    EngineConnection,
    UciEngine,
    comp_score,
    connect_engine,
    get_score,
    parse_bestmove,
    parse_id_name,
    parse_info,
)

START_FEN = Position().to_fen()
E4 = Position().parse_uci("e2e4")


def make_engine(output, options=()):
    reader = io.StringIO(output)
    writer = io.StringIO()
    commands = queue.Queue()
    messages = queue.Queue()
    engine = UciEngine(reader, writer, commands, messages, options, newgame_delay=0)
    return engine, writer, commands, messages


def test_parse_info():
    info = parse_info("info depth 12 seldepth 18 multipv 1 score cp 35 nodes 100 nps 5 pv e2e4 e7e5")
    assert info.depth == 12
    assert info.seldepth == 18
    assert info.score == UciInfoScore(cp=35)
    assert info.pv == ("e2e4", "e7e5")


def test_parse_info_mate_and_bounds():
    info = parse_info("info score mate 3 lowerbound pv d1h5")
    assert info.score == UciInfoScore(mate=3, lower_bound=True)
    assert info.pv == ("d1h5",)


def test_parse_info_rejects():
    assert parse_info("bestmove e2e4") is None
    assert parse_info("info depth x") is None
    assert parse_info("info score cp") is None


def test_parse_bestmove_and_id():
    assert parse_bestmove("bestmove e2e4 ponder e7e5") == "e2e4"
    assert parse_bestmove("info depth 1") is None
    assert parse_id_name("id name Fake Fish 1") == "Fake Fish 1"
    assert parse_id_name("id author someone") is None


def test_comp_score_mate_preferred():
    assert comp_score(UciInfoScore(mate=2), UciInfoScore(cp=900), Color.WHITE) is CompScore.LEFT
    assert comp_score(UciInfoScore(cp=900), UciInfoScore(mate=2), Color.WHITE) is CompScore.RIGHT
    assert comp_score(UciInfoScore(mate=2), UciInfoScore(mate=2), Color.WHITE) is CompScore.EQUAL


def test_comp_score_cp_by_color():
    a, b = UciInfoScore(cp=30), UciInfoScore(cp=10)
    assert comp_score(a, b, Color.WHITE) is CompScore.LEFT
    assert comp_score(a, b, Color.BLACK) is CompScore.RIGHT
    assert comp_score(a, a, Color.WHITE) is CompScore.RIGHT
    assert comp_score(UciInfoScore(), UciInfoScore(), Color.WHITE) is CompScore.EQUAL


def test_get_score_longest_pv():
    infos = [
        UciInfo(UciInfoScore(cp=10), ("e2e4",)),
        UciInfo(UciInfoScore(cp=30), ("e2e4", "e7e5")),
        UciInfo(UciInfoScore(cp=50), ("d2d4", "d7d5", "c2c4")),
        UciInfo(None, ("e2e4", "e7e5", "g1f3")),
    ]
    assert get_score(infos, Color.WHITE, "e2e4") == CentiPawns(30, ("e2e4", "e7e5"))


def test_get_score_black_prefers_lower():
    infos = [
        UciInfo(UciInfoScore(cp=30), ("e7e5", "g1f3")),
        UciInfo(UciInfoScore(cp=10), ("e7e5", "d2d4")),
    ]
    assert get_score(infos, Color.BLACK, "e7e5") == CentiPawns(10, ("e7e5", "d2d4"))
    assert get_score(infos, Color.WHITE, "e7e5") == CentiPawns(30, ("e7e5", "g1f3"))


def test_get_score_mates():
    infos = [
        UciInfo(UciInfoScore(cp=100), ("e2e4", "e7e5")),
        UciInfo(UciInfoScore(mate=2), ("e2e4", "f7f6")),
        UciInfo(UciInfoScore(mate=5), ("e2e4", "g7g5")),
    ]
    assert get_score(infos, Color.WHITE, "e2e4") == Mate(5)


def test_get_score_none():
    assert get_score([], Color.WHITE, "e2e4") == NoScore()
    infos = [UciInfo(UciInfoScore(cp=5), ("d2d4",))]
    assert get_score(infos, Color.WHITE, "e2e4") == NoScore()


def test_send_id():
    engine, writer, _, messages = make_engine("info string hello\nid name Fakefish\nuciok\n")
    engine.send_id()
    assert messages.get_nowait() == EngineId("Fakefish")
    assert writer.getvalue() == "uci\n"


def test_send_id_default_on_eof():
    engine, _, _, messages = make_engine("")
    engine.send_id()
    assert messages.get_nowait() == EngineId("UCI Engine")


def test_go_reports_best_move():
    output = (
        "info depth 1 score cp 10 pv e2e4\n"
        "info depth 2 score cp 25 pv e2e4 e7e5\n"
        "bestmove e2e4 ponder e7e5\n"
    )
    engine, writer, _, messages = make_engine(output)
    engine.go(START_FEN, 3)
    assert messages.get_nowait() == BestMove(E4, CentiPawns(25, ("e2e4", "e7e5")))
    assert writer.getvalue().splitlines() == [f"position fen {START_FEN}", "go depth 3"]


def test_go_invalid_fen_and_illegal_move():
    engine, writer, _, messages = make_engine("bestmove e2e5\n")
    engine.go("not a fen", 3)
    assert writer.getvalue() == ""
    engine.go(START_FEN, 3)
    assert messages.empty()


def test_start_serves_commands():
    engine, writer, commands, _ = make_engine("", options=[("Threads", "2"), ("Clear Hash", None)])
    commands.put(NewGame())
    commands.put(Stop())
    engine.start()
    assert writer.getvalue().splitlines() == [
        "setoption name Threads value 2",
        "setoption name Clear Hash value ",
        "ucinewgame",
    ]


def test_connection_without_id():
    commands = queue.Queue()
    connection = EngineConnection(commands, queue.Queue(), None)
    assert connection.name() == "-"
    connection.go(START_FEN, 4)
    connection.new_game()
    assert commands.get_nowait() == Go(START_FEN, 4)
    assert commands.get_nowait() == NewGame()


def test_connect_engine_full_exchange():
    output = (
        "id name Fakefish\n"
        "uciok\n"
        "info depth 1 score cp 20 pv e2e4 e7e5\n"
        "bestmove e2e4\n"
    )
    reader, writer = io.StringIO(output), io.StringIO()
    connection = connect_engine(reader, writer, [("Threads", "2")])
    assert connection.name() == "Fakefish"
    connection.go(START_FEN, 5)
    message = connection.recv()
    assert message == BestMove(E4, CentiPawns(20, ("e2e4", "e7e5")))
    assert writer.getvalue().splitlines() == [
        "uci",
        "setoption name Threads value 2",
        f"position fen {START_FEN}",
        "go depth 5",
    ]
    connection.stop()
    with pytest.raises(ConnectionError):
        connection.recv()


def test_connect_engine_closed_stream():
    reader, writer = io.StringIO(""), io.StringIO()
    connection = connect_engine(reader, writer, [])
    assert connection.name() == "UCI Engine"
    connection.stop()
    with pytest.raises(ConnectionError):
        connection.recv()
    with pytest.raises(ConnectionError):
        connection.recv()
    assert writer.getvalue().splitlines() == ["uci"]