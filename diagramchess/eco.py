"""Opening (ECO) table: lookup by played moves, by name or by code."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .moves import Move, move_from_dict
from .position import move_to_uci

MAX_MOVES = 36


@dataclass(frozen=True)
class Eco:
    code: str
    name: str
    fen: str
    moves: Tuple[Move, ...]
    pgn: str


def _eco_from_dict(data: Any) -> Eco:
    try:
        return Eco(
            str(data["code"]),
            str(data["name"]),
            str(data["fen"]),
            tuple(move_from_dict(m) for m in data["moves"]),
            str(data["pgn"]),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"invalid eco entry: {exc}") from None


def _patterns(pattern: str) -> List[str]:
    tokens = (t.strip() for t in pattern.lower().split(" "))
    return [t for t in tokens if t]


class EcoTable:
    """Openings keyed by the concatenated UCI text of their moves."""

    def __init__(self, entries: Dict[str, Eco]):
        self._entries = dict(entries)

    @classmethod
    def from_json(cls, text: str) -> "EcoTable":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("eco table must be a JSON object")
        return cls({str(key): _eco_from_dict(value) for key, value in data.items()})

    @classmethod
    def load(cls, path: Union[str, Path]) -> "EcoTable":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def __len__(self) -> int:
        return len(self._entries)

    def find_from_moves(self, moves: Sequence[Move]) -> Optional[Eco]:
        """The opening matching the longest prefix of the moves (at most MAX_MOVES)."""
        ucis = [move_to_uci(m) for m in moves]
        for length in range(min(MAX_MOVES, len(ucis)), -1, -1):
            eco = self._entries.get("".join(ucis[:length]))
            if eco is not None:
                return eco
        return None

    def _lookup(self, pattern: str, by_code: bool) -> List[Eco]:
        patterns = _patterns(pattern)
        found = []
        for eco in self._entries.values():
            text = (eco.code if by_code else eco.name).lower()
            if all(p in text for p in patterns):
                found.append(eco)
        return found

    def lookup_by_name(self, pattern: str) -> List[Eco]:
        """Openings whose name holds every space separated word of the pattern."""
        return self._lookup(pattern, by_code=False)

    def lookup_by_code(self, pattern: str) -> List[Eco]:
        """Openings whose code holds every space separated word of the pattern."""
        return self._lookup(pattern, by_code=True)

    def all(self) -> List[Eco]:
        return list(self._entries.values())