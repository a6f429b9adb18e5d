# xiangqi_tui

Building blocks for a terminal Chinese chess (xiangqi) client: the board
model with full move legality, FEN reading and writing, UCI/ICCS
coordinates, game-over detection, a `key=value` settings file, and the
geometry and text rendering of a character-cell board.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Coordinates (`xiangqi_tui.uci`)

Moves are four-character UCI/ICCS strings: files `a`–`i`, ranks `0`–`9`,
with red's back rank as `0` (the central cannon opening is `h2e2`).
Internally a square is `(file, rank)` where rank `0` is black's back rank.

```python
from xiangqi_tui.uci import parse_uci_coords, uci_from_coords, uci_cell_label

parse_uci_coords("h2e2")      # (7, 7, 7, 4)  -> (r1, c1, r2, c2)
parse_uci_coords("z9a0")      # None
uci_from_coords(7, 7, 7, 4)   # "h2e2"
uci_cell_label(0, 9)          # "a0"
```

`screen_to_internal`, `internal_to_screen` and `cursor_delta_internal`
map squares and cursor steps between screen and board coordinates when the
board is shown rotated; UCI strings never change with rotation.

## Board and rules

`xiangqi_tui.side.Side` is an enum with `RED` and `BLACK`
(`from_fen_turn_field`, `fen_turn_char`, `is_red`, `other`).

`xiangqi_tui.board.Board` holds 90 cells and offers `startpos`,
`from_fen`, `from_fen_with_side`, `to_fen`, `get`, `is_empty`,
`is_red_piece`, `piece_side`, `is_own_for`, `has_king`, `in_check`,
`apply_uci`, `copy` and `legal_ucis_for_side`.

```python
from xiangqi_tui.board import Board
from xiangqi_tui.side import Side
from xiangqi_tui.rules import (
    uci_is_fully_legal,
    try_apply_fully_legal_uci,
    game_over_message,
)

board = Board.startpos()
"h2e2" in board.legal_ucis_for_side(Side.RED)   # True
start = board.to_fen(Side.RED)
# 'rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1'

uci_is_fully_legal(start, "h2e2")                       # True
next_fen = try_apply_fully_legal_uci(start, "h2e2")     # black to move
game_over_message(Board.from_fen(next_fen), Side.BLACK) # None: play goes on
```

- `Board.from_fen` raises `InvalidFenError` (a `ValueError`) on malformed
  input; a missing side field means red to move.
- `Board.apply_uci` moves whatever stands on the source square without
  checking legality, and raises `ValueError` for text that is not a move.
- `try_apply_fully_legal_uci` raises `IllegalMoveError` when the move is
  not legal; the returned FEN always ends in `- - 0 1`.
- Legality covers piece geometry, the flying-general rule and leaving one's
  own king in check.
- `game_over_message` reports, in Chinese, a missing king, checkmate or
  stalemate — each a loss for the side to move — and `None` otherwise.

## Settings (`xiangqi_tui.settings`)

`SettingsStore` reads and writes a plain `key=value` file
(`xiangqi_tui.conf` in the working directory by default; pass another path
as the first argument). Each `load_*` method falls back to a default when
the key is missing or unparsable and clamps numbers to their range:

| setting | default | range |
|---|---|---|
| engine threads | 4 | 1–64 |
| engine hash (MB) | 512 | 64–8192 |
| engine skill | 20 | at most 20 |
| engine MultiPV | 1 | 1–5 |
| move time (ms) | 3000 | 100–86 400 000 |
| search depth | 12 | 1–64 |
| search nodes | 500 000 | 1 000–500 000 000 |
| book max half-moves | 999 | — |

The local book is enabled and the cloud book disabled by default; the book
pick mode is `optimal` unless it is `positive_random`. Each `save_*`
rewrites one line and keeps the other non-blank lines; numeric saves raise
`ValueError` for values outside their storable width.

```python
from xiangqi_tui.settings import SettingsStore, EngineProtocol

store = SettingsStore("my_settings.conf")
store.save_engine_protocol(EngineProtocol.UCCI)
store.load_engine_protocol()     # EngineProtocol.UCCI
store.load_engine_threads()      # 4 unless set
```

The `XIANGQI_ENGINE_PATH` environment variable, when non-blank, takes
precedence over the stored engine path. The helpers `parse_key`,
`set_line`, `parse_bool` and `normalize_book_pick_mode` are public too.

## Board geometry and drawing

- `xiangqi_tui.regions`: `Rect` (with `right`, `bottom`, `inner`) and
  `point_in`.
- `xiangqi_tui.grid`: fits a 10×9 board into a character area at close to a
  9:10 aspect ratio (`fit_board_cells`, `GridMetrics.from_area`), maps
  terminal positions back to squares (`hit_board_cell`) and squares to
  their centre (`cell_hit_point_in_grid`), and can recover cell sizes from
  a text capture (`parse_capture_grid_cells`).
- `xiangqi_tui.board_render`: `render_board_lines(board, area, rotated,
  overlay)` returns the board as lines of styled `Span`s, with the river,
  axis labels, and highlights from a `BoardOverlay` (last and pending
  `BoardArrow`, selected square, keyboard cursor).
- `xiangqi_tui.pieces.piece_label` gives the traditional glyph of a piece
  and whether it is red.
- `xiangqi_tui.numfmt.format_count_k` shortens counts, e.g. `1500` →
  `"1.5k"`, `7675653` → `"7676k"`.

## What this package does not do

There is no interactive application: no terminal screen, key or mouse
handling, and no command to run. It does not start or talk to a chess
engine, and it has no opening book lookup; the settings for those are only
stored and read back. `render_board_lines` produces styled text, and
drawing it to a terminal is left to the caller.