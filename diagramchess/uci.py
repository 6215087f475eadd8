"""UCI engine driver over text streams, and the selection of a search score."""

from __future__ import annotations

import logging
import queue
import threading
import time
from enum import Enum
from functools import reduce
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple

from .engine import (
    BestMove,
    EngineId,
    EngineMessage,
    Go,
    NewGame,
    NoScore,
    Score,
    Stop,
    UciInfo,
    UciInfoScore,
    score_from_info,
)
from .moves import Color
from .position import IllegalMoveError, Position

log = logging.getLogger(__name__)

DEFAULT_NAME = "UCI Engine"

_INT_FIELDS = {"depth", "seldepth", "multipv", "nodes"}
_SKIPPED_FIELDS = {
    "time", "nps", "tbhits", "sbhits", "cpuload", "hashfull", "currmove", "currmovenumber",
}
_REST_OF_LINE = {"string", "refutation", "currline"}

_CLOSED = object()


class CompScore(Enum):
    LEFT = "left"
    RIGHT = "right"
    EQUAL = "equal"


def parse_info(line: str) -> Optional[UciInfo]:
    """Parse an ``info`` line; None for other or malformed lines."""
    tokens = line.split()
    if not tokens or tokens[0] != "info":
        return None
    fields = {}
    score: Optional[UciInfoScore] = None
    pv: Tuple[str, ...] = ()
    it = iter(tokens[1:])
    try:
        for token in it:
            if token in _INT_FIELDS:
                fields[token] = int(next(it))
            elif token in _SKIPPED_FIELDS:
                next(it)
            elif token == "score":
                kind = next(it)
                value = int(next(it))
                if kind == "cp":
                    score = UciInfoScore(cp=value)
                elif kind == "mate":
                    score = UciInfoScore(mate=value)
                else:
                    return None
            elif token == "lowerbound" and score is not None:
                score = UciInfoScore(score.cp, score.mate, True, score.upper_bound)
            elif token == "upperbound" and score is not None:
                score = UciInfoScore(score.cp, score.mate, score.lower_bound, True)
            elif token == "pv":
                pv = tuple(it)
            elif token in _REST_OF_LINE:
                break
    except (StopIteration, ValueError):
        return None
    return UciInfo(score=score, pv=pv, **fields)


def parse_bestmove(line: str) -> Optional[str]:
    """The move of a ``bestmove`` line, or None."""
    tokens = line.split()
    if len(tokens) >= 2 and tokens[0] == "bestmove":
        return tokens[1]
    return None


def parse_id_name(line: str) -> Optional[str]:
    """The engine name of an ``id name`` line, or None."""
    tokens = line.split()
    if len(tokens) >= 2 and tokens[0] == "id" and tokens[1] == "name":
        return " ".join(tokens[2:])
    return None


def comp_score(a: UciInfoScore, b: UciInfoScore, color: Color) -> CompScore:
    """Which of two scores the side to move prefers."""
    if a.mate is not None and b.mate is None:
        return CompScore.LEFT
    if a.mate is None and b.mate is not None:
        return CompScore.RIGHT
    if a.mate is not None and b.mate is not None:
        if a.mate > b.mate:
            return CompScore.LEFT
        if a.mate < b.mate:
            return CompScore.RIGHT
        return CompScore.EQUAL
    if a.cp is not None and b.cp is None:
        return CompScore.LEFT
    if a.cp is None and b.cp is not None:
        return CompScore.RIGHT
    if a.cp is not None and b.cp is not None:
        better = a.cp < b.cp if color is Color.BLACK else a.cp > b.cp
        return CompScore.LEFT if better else CompScore.RIGHT
    return CompScore.EQUAL


def get_score(infos: Sequence[UciInfo], color: Color, best_move: str) -> Score:
    """Pick the score of the longest principal variations starting with the best move."""
    candidates = [
        info for info in infos
        if info.score is not None and info.pv and info.pv[0] == best_move
    ]
    if not candidates:
        return NoScore()
    max_len = max(len(info.pv) for info in candidates)
    longest = [info for info in candidates if len(info.pv) == max_len]
    chosen = reduce(
        lambda acc, info: info
        if comp_score(acc.score, info.score, color) is CompScore.RIGHT
        else acc,
        longest,
    )
    return score_from_info(chosen)


class UciEngine:
    """Drives a UCI engine reached through a pair of text streams."""

    def __init__(
        self,
        reader: TextIO,
        writer: TextIO,
        commands: "queue.Queue",
        messages: "queue.Queue",
        options: Iterable[Tuple[str, Optional[str]]] = (),
        newgame_delay: float = 0.1,
    ):
        self._reader = reader
        self._writer = writer
        self._commands = commands
        self._messages = messages
        self._options = list(options)
        self._newgame_delay = newgame_delay

    def _send(self, command: str) -> None:
        self._writer.write(command + "\n")
        self._writer.flush()

    def _command_and_wait_for(self, command: str, prefix: str) -> List[str]:
        self._send(command)
        lines = []
        while True:
            line = self._reader.readline()
            if not line:
                raise EOFError(f"engine closed while waiting for {prefix!r}")
            line = line.rstrip("\r\n")
            lines.append(line)
            if line.startswith(prefix):
                return lines

    def send_id(self) -> None:
        """Ask the engine for its name and report it as an EngineId message."""
        name = DEFAULT_NAME
        try:
            lines = self._command_and_wait_for("uci", "id name")
        except (EOFError, OSError):
            lines = []
        for line in lines:
            found = parse_id_name(line)
            if found is not None:
                name = found
                break
            log.debug("<engine> %s", line)
        self._messages.put(EngineId(name))

    def set_options(self) -> None:
        for option_id, value in self._options:
            try:
                self._send(f"setoption name {option_id} value {value or ''}")
            except OSError:
                log.error("failed to set engine option %s", option_id)

    def new_game(self) -> None:
        try:
            self._send("ucinewgame")
        except OSError:
            return
        time.sleep(self._newgame_delay)

    def go(self, fen: str, depth: int) -> None:
        """Search the position to the given depth and report the best move."""
        try:
            game = Position.from_fen(fen)
        except ValueError:
            log.error("<uci-engine> failed to produce a position from fen string: %r", fen)
            return
        try:
            self._send(f"position fen {' '.join(fen.split())}")
            lines = self._command_and_wait_for(f"go depth {depth}", "bestmove")
        except (EOFError, OSError):
            return
        infos: List[UciInfo] = []
        for line in lines:
            best = parse_bestmove(line)
            if best is not None:
                self._update_move(best, game, get_score(infos, game.turn, best))
                continue
            info = parse_info(line)
            if info is not None:
                infos.append(info)

    def _update_move(self, best_move: str, game: Position, score: Score) -> None:
        try:
            move = game.parse_uci(best_move)
        except IllegalMoveError as exc:
            log.error("<uci-engine> failed to produce a bestmove from %s: %s", best_move, exc)
            return
        self._messages.put(BestMove(move, score))

    def start(self) -> None:
        """Apply the options, then serve commands until Stop."""
        self.set_options()
        while True:
            command = self._commands.get()
            if isinstance(command, NewGame):
                self.new_game()
            elif isinstance(command, Go):
                self.go(command.fen, command.depth)
            elif isinstance(command, Stop):
                break


class EngineConnection:
    """The caller's side of an engine running in a worker thread."""

    def __init__(self, commands: "queue.Queue", messages: "queue.Queue",
                 engine_id: Optional[str]):
        self._commands = commands
        self._messages = messages
        self._closed = False
        self.engine_id = engine_id

    def name(self) -> str:
        return self.engine_id if self.engine_id is not None else "-"

    def new_game(self) -> None:
        self._commands.put(NewGame())

    def stop(self) -> None:
        self._commands.put(Stop())

    def go(self, fen: str, depth: int) -> None:
        self._commands.put(Go(fen, depth))

    def recv(self) -> EngineMessage:
        """Wait for the next message; ConnectionError once the engine is gone."""
        if self._closed:
            raise ConnectionError("engine disconnected")
        message = self._messages.get()
        if message is _CLOSED:
            self._closed = True
            raise ConnectionError("engine disconnected")
        return message


def connect_engine(
    reader: TextIO,
    writer: TextIO,
    options: Iterable[Tuple[str, Optional[str]]],
) -> EngineConnection:
    """Start the engine worker on the streams and wait for the engine's name."""
    commands: queue.Queue = queue.Queue()
    messages: queue.Queue = queue.Queue()
    options = list(options)

    def run() -> None:
        try:
            engine = UciEngine(reader, writer, commands, messages, options)
            engine.send_id()
            engine.start()
        except Exception:
            log.exception("engine worker failed")
        finally:
            messages.put(_CLOSED)

    threading.Thread(target=run, name="uci-engine", daemon=True).start()
    connection = EngineConnection(commands, messages, None)
    try:
        first = connection.recv()
    except ConnectionError:
        return connection
    connection.engine_id = first.name if isinstance(first, EngineId) else "NN"
    return connection