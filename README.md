# diagramchess

The logic behind a diagram-style chess board, with no dependencies outside
the standard library: a legal-move chess position, an opening book built
from an ECO table, a UCI engine client, the pointer gesture state machine
and the geometry that maps window points to squares.

## Modules

- `diagramchess.moves` – `Color`, `Role`, `Square`, `Piece` and the four
  move kinds `NormalMove`, `EnPassantMove`, `CastleMove` and `PutMove`.
  `move_to_dict` / `move_from_dict` convert a move to and from a tagged
  mapping such as
  `{"_tag": "Normal", "role": "Pawn", "from": "E2", "capture": None, "to": "E4", "promotion": None}`;
  `color_to_str` / `color_from_str` convert to and from `"white"` / `"black"`.
- `diagramchess.position` – `Position`, a standard chess position.
  `Position()` is the starting position; `Position.from_fen`, `to_fen`,
  `piece_at`, `legal_moves`, `is_legal`, `play` (returns a new position),
  `san` (without check marks), `parse_uci` and `outcome` (an `Outcome` or
  `None`; checkmate, stalemate and insufficient material are detected).
  Illegal moves raise `IllegalMoveError`. Helpers: `move_to_uci`,
  `move_classic_to` (for castling, the king's standard destination square)
  and `ucimovelist_to_sanlist` (stops at the first move that does not apply).
- `diagramchess.eco` – `Eco` entries and `EcoTable`, loaded with
  `EcoTable.from_json` or `EcoTable.load`. `find_from_moves` returns the
  opening matching the longest prefix of a move list (at most 36 moves);
  `lookup_by_name` and `lookup_by_code` return the openings whose name or
  code contains every space-separated word of a pattern, case-insensitively;
  `all` returns every entry.
- `diagramchess.engine` – engine commands (`Go`, `NewGame`, `Stop`),
  messages (`EngineId`, `BestMove`), scores (`CentiPawns`, `Mate`,
  `NoScore`), `EngineState`, the search info records `UciInfo` /
  `UciInfoScore`, and `score_from_info`.
- `diagramchess.uci` – parsing of `info`, `bestmove` and `id name` lines
  (`parse_info`, `parse_bestmove`, `parse_id_name`), score comparison
  (`comp_score`, `CompScore`) and selection (`get_score`), the `UciEngine`
  driver and `connect_engine`, which returns an `EngineConnection`.
- `diagramchess.gesture` – `Gesture` with its states `StateStart`,
  `StateMoving` and `StateEnd`, and `Promotion`. Each step (`start`,
  `moving`, `end`, `promote`, `restart`) returns a new gesture; a pawn
  dropped on the first or last rank waits for a promotion
  (`need_promotion`).
- `diagramchess.board` – `Point`, `Rect`, `board_rect` (the centred square
  board less a 64-unit margin), `square_rect`, `square_at`,
  `is_light_square` and conversions between screen rows/columns and
  ranks/files.
- `diagramchess.promotion` – `promotion_buttons` (queen, rook, bishop,
  knight in a column from the target square) and `handle_promotion_click`.
- `diagramchess.config` – `parse_args`, which reads the command-line options
  `--engine` (required), `--fullscreen`, `--engine-args`, `--engine-color`
  (default `black`), `--engine-depth` (default 32, 0–255), `--uci-option`
  (repeatable, `ID[:VALUE]`), `--opening` and `--eco` (repeatable) into a
  `Config`. `Config.engine_args_list` splits the engine arguments on `;` and
  `Config.engine_options` returns `(id, value)` pairs.
- `diagramchess.game` – `GameState` (position, played moves, current
  opening, score and a `lock` for sharing with a worker thread) and
  `Openings`, a book that picks a random known continuation for a position
  from the openings selected by name, by codes, or all of them.
- `diagramchess.proxy` – `start_engine`, which serves commands to an engine
  in a worker thread and plays its best moves into a `GameState`, returning
  a `Proxy` with `new_game`, `stop` and `play`.
- `diagramchess.side` – `move_list_lines`, the opening name followed by
  numbered move pairs.
- `diagramchess.app` – `DiagramApp`, the controller: `press`, `drag`,
  `release` and `click` drive the gesture in `PointerMode.DRAG` or
  `PointerMode.CLICK`; `resolve_gesture` plays the finished move and, in
  `BoardMode.PLAY`, answers from the opening book or asks the engine;
  `key_released` handles F (toggles `fullscreen`), Q (sets `closed`), N, S,
  P and I; `title` gives the outcome, a mate announcement, the evaluation
  with its principal variation, or the opening name; `highlight_square`
  gives the picked square in click mode.

## A short tour

```python
from diagramchess.position import Position

start = Position()
move = start.parse_uci("e2e4")
print(start.san(move))      # e4
after = start.play(move)
print(after.to_fen())       # rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1
```

An opening table is a JSON object keyed by the concatenated UCI text of an
opening's moves; each value holds `code`, `name`, `fen`, `moves` (tagged
move mappings as above) and `pgn`:

```python
from diagramchess.eco import EcoTable

table = EcoTable.load("eco-table.json")
for eco in table.lookup_by_name("french"):
    print(eco.code, eco.name)
```

Board geometry is plain arithmetic on rectangles:

```python
from diagramchess.board import Point, Rect, square_at

window = Rect.from_min_size(0, 0, 800, 600)
print(square_at(window, Point(400, 300)))   # e4
```

## Engines

`connect_engine(reader, writer, options)` takes a readable and a writable
text stream already connected to a UCI engine and a list of
`(name, value)` options to set. It starts a worker thread, asks for the
engine's name and returns an `EngineConnection`; `go(fen, depth)` searches
the position to a fixed depth and `recv()` returns the `BestMove` with its
score, raising `ConnectionError` once the engine is gone.

## What the package does not do

- It draws nothing and opens no window: there are no piece images and no
  screen. `DiagramApp` takes already-decoded pointer positions and key
  names, and records fullscreen and quit requests as the `fullscreen` and
  `closed` attributes for a drawing layer to act on.
- It starts no engine process; the caller connects the streams.
- It ships no ECO table; load one with `EcoTable.load` or
  `EcoTable.from_json`. Without a table the opening book is empty.
- It installs no command; `config.parse_args` only parses options.

## Tests

The test suite uses pytest; install the `test` extra to get it.