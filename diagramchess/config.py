"""Command line configuration of the diagram application."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .moves import Color, color_from_str

DEFAULT_ENGINE_DEPTH = 32

# Options whose value may itself start with a hyphen.
_HYPHEN_VALUE_OPTIONS = ("--engine-args", "--engine-color")


@dataclass(frozen=True)
class Config:
    engine: str
    fullscreen: bool = False
    engine_args: Optional[str] = None
    engine_color: Color = Color.BLACK
    engine_depth: int = DEFAULT_ENGINE_DEPTH
    uci_option: Tuple[str, ...] = ()
    opening: Optional[str] = None
    eco: Tuple[str, ...] = ()

    def engine_args_list(self) -> Optional[List[str]]:
        """The engine arguments, split on ";", or None when none were given."""
        if self.engine_args is None:
            return None
        return self.engine_args.split(";")

    def engine_options(self) -> List[Tuple[str, Optional[str]]]:
        """UCI options as (id, value) pairs; the value is None when absent."""
        options = []
        for option in self.uci_option:
            parts = option.split(":")[:2]
            options.append((parts[0], parts[1] if len(parts) > 1 else None))
        return options


def _depth(text: str) -> int:
    value = int(text)
    if not 0 <= value <= 255:
        raise ValueError(f"depth out of range: {value}")
    return value


_depth.__name__ = "depth"


def _color(text: str) -> Color:
    return color_from_str(text)


_color.__name__ = "color"


def _join_hyphen_values(argv: Sequence[str]) -> List[str]:
    joined: List[str] = []
    it = iter(argv)
    for arg in it:
        if arg in _HYPHEN_VALUE_OPTIONS:
            value = next(it, None)
            joined.append(arg if value is None else f"{arg}={value}")
        else:
            joined.append(arg)
    return joined


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="diagramchess", allow_abbrev=False)
    parser.add_argument("--fullscreen", action="store_true",
                        help="Start in fullscreen mode")
    parser.add_argument("--engine", required=True, metavar="ENGINE",
                        help="Path to a UCI engine")
    parser.add_argument("--engine-args", metavar="ARGS",
                        help='Optional arguments to pass to the engine (separated by ";")')
    parser.add_argument("--engine-color", type=_color, default=Color.BLACK,
                        metavar="ENGINE COLOR", help="Engine color")
    parser.add_argument("--engine-depth", type=_depth, default=DEFAULT_ENGINE_DEPTH,
                        metavar="ENGINE DEPTH", help="Engine search depth")
    parser.add_argument("--uci-option", action="append",
                        help='UCI option of the form "ID[:VALUE]"; may be repeated')
    parser.add_argument("--opening", help="Force moves into this opening (name pattern)")
    parser.add_argument("--eco", action="append",
                        help="Force moves into these openings (ECO code pattern)")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Config:
    """Parse the command line; argparse exits on invalid input."""
    args = sys.argv[1:] if argv is None else list(argv)
    ns = _parser().parse_args(_join_hyphen_values(args))
    return Config(
        engine=ns.engine,
        fullscreen=ns.fullscreen,
        engine_args=ns.engine_args,
        engine_color=ns.engine_color,
        engine_depth=ns.engine_depth,
        uci_option=tuple(ns.uci_option or ()),
        opening=ns.opening,
        eco=tuple(ns.eco or ()),
    )