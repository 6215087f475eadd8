"""Forwards commands to an engine from a worker thread and applies its moves."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional

from .engine import BestMove, Go, NewGame, Stop
from .game import GameState
from .position import move_to_uci

log = logging.getLogger(__name__)


class Proxy:
    """The application's handle on the engine worker."""

    def __init__(self, commands: "queue.Queue", depth: int):
        self._commands = commands
        self.depth = depth

    def new_game(self) -> None:
        self._commands.put(NewGame())

    def stop(self) -> None:
        self._commands.put(Stop())

    def play(self, fen: str) -> None:
        """Ask the engine to play in the position."""
        self._commands.put(Go(fen, self.depth))


def start_engine(
    state: GameState,
    engine,
    depth: int,
    on_update: Optional[Callable[[], None]] = None,
) -> Proxy:
    """Serve engine commands in a worker; a best move is played into the state."""
    commands: queue.Queue = queue.Queue()

    def run() -> None:
        while True:
            command = commands.get()
            if isinstance(command, NewGame):
                engine.new_game()
            elif isinstance(command, Stop):
                engine.stop()
            elif isinstance(command, Go):
                engine.go(command.fen, command.depth)
                try:
                    message = engine.recv()
                except ConnectionError:
                    continue
                if isinstance(message, BestMove):
                    log.info("Engine played %s", move_to_uci(message.move))
                    with state.lock:
                        state.make_move(message.move)
                        state.set_score(message.score)
                    if on_update is not None:
                        on_update()

    threading.Thread(target=run, name="engine-proxy", daemon=True).start()
    return Proxy(commands, depth)