"""Geometry of the grid board: cell sizing, centring and mouse hit mapping.

The board is 10x9 squares drawn with box characters, fitted to the terminal
area and centred inside it.  Axis labels use global UCI coordinates; a rotated
board only flips the pieces and the hit mapping.
"""

from __future__ import annotations

from dataclasses import dataclass

from wcwidth import wcwidth

from .regions import Rect, point_in
from .uci import screen_to_internal

AXIS_W = 2
# Display width / height of one terminal character (about 8x16 px).
TERMINAL_CHAR_WH_RATIO = 0.5
# Target outer aspect of the board: 9 files over 10 ranks.
TARGET_BOARD_ASPECT = 9.0 / 10.0
# A piece block fills this share of its cell, in width and in height.
PIECE_FILL_PERCENT = 80
# The river is drawn after this screen row.
RIVER_AFTER_SCREEN_ROW = 4

_LEFT_EDGE = 1


@dataclass(frozen=True)
class GridMetrics:
    """Cell, piece and padding sizes of a board fitted to an area."""

    cell_w: int
    cell_h: int
    piece_w: int
    piece_h: int
    piece_pad_w: int
    piece_pad_h: int
    glyph_sub: int
    pad_left: int
    pad_top: int

    @classmethod
    def from_area(cls, inner: Rect) -> GridMetrics:
        """Fit the grid into the inside of the board's frame."""
        inner_w = max(inner.width, 12)
        inner_h = max(inner.height, 12)
        max_cell_w = max(max(inner_w - (AXIS_W + 1 + 8 + 1), 0) // 9, 2)
        max_cell_h = max_cell_h_for_inner_h(inner_h)
        cell_w, cell_h = fit_board_cells(inner_w, inner_h, max_cell_w, max_cell_h)
        piece_w, piece_h, piece_pad_w, piece_pad_h, glyph_sub = piece_layout_in_cell(
            cell_w, cell_h
        )
        pad_left = max(inner_w - line_cols_for_cell_w(cell_w), 0) // 2
        pad_top = max(inner_h - grid_line_count(cell_h), 0) // 2
        return cls(
            cell_w=cell_w,
            cell_h=cell_h,
            piece_w=piece_w,
            piece_h=piece_h,
            piece_pad_w=piece_pad_w,
            piece_pad_h=piece_pad_h,
            glyph_sub=glyph_sub,
            pad_left=pad_left,
            pad_top=pad_top,
        )

    def line_cols(self) -> int:
        """Width of the drawn grid in columns."""
        return line_cols_for_cell_w(self.cell_w)


def grid_pixel_aspect(cell_w: int, cell_h: int) -> float:
    """Width over height of the grid in terminal pixels."""
    cols = line_cols_for_cell_w(cell_w)
    lines = grid_line_count(cell_h)
    return cols * TERMINAL_CHAR_WH_RATIO / lines


def fit_board_cells(
    inner_w: int, inner_h: int, max_cell_w: int, max_cell_h: int
) -> tuple[int, int]:
    """Pick ``(cell_w, cell_h)`` closest to the 9:10 aspect, then fewest lines, then largest."""
    candidates = (
        (cell_w, cell_h)
        for cell_h in range(1, max_cell_h + 1)
        for cell_w in range(2, max_cell_w + 1)
        if line_cols_for_cell_w(cell_w) <= inner_w and grid_line_count(cell_h) <= inner_h
    )

    def rank(cells: tuple[int, int]) -> tuple[float, int, int]:
        cell_w, cell_h = cells
        err = abs(grid_pixel_aspect(cell_w, cell_h) - TARGET_BOARD_ASPECT)
        return err, grid_line_count(cell_h), -(cell_w * cell_h)

    return min(candidates, key=rank, default=(2, 1))


def piece_layout_in_cell(cell_w: int, cell_h: int) -> tuple[int, int, int, int, int]:
    """``(piece_w, piece_h, pad_w, pad_h, glyph_sub)`` for a piece centred in a cell."""
    piece_w = min(max(cell_w * PIECE_FILL_PERCENT // 100, 2), cell_w)
    piece_h = min(max(cell_h * PIECE_FILL_PERCENT // 100, 1), cell_h)
    piece_pad_w = (cell_w - piece_w) // 2
    piece_pad_h = (cell_h - piece_h) // 2
    glyph_sub = piece_pad_h + piece_h // 2
    return piece_w, piece_h, piece_pad_w, piece_pad_h, glyph_sub


def river_sep_lines(cell_h: int) -> int:
    """Lines taken by the river band, its two borders included."""
    return cell_h + 2


def grid_line_count(cell_h: int) -> int:
    """Total lines of the drawn grid, file axis included."""
    return 1 + 10 * cell_h + 8 + river_sep_lines(cell_h) + 1 + 1


def max_cell_h_for_inner_h(inner_h: int) -> int:
    """The tallest cell height whose grid still fits ``inner_h`` lines (at least 1)."""
    h = 1
    while grid_line_count(h + 1) <= inner_h:
        h += 1
    return h


def line_cols_for_cell_w(cell_w: int) -> int:
    """Total columns of the drawn grid, rank axis included."""
    return AXIS_W + 1 + cell_w * 9 + 8 + 1


def river_inner_w(cell_w: int) -> int:
    """Width of the river band between its outer vertical lines."""
    return cell_w * 9 + 8


def _display_width(text: str) -> int:
    return sum(w if (w := wcwidth(ch)) >= 0 else 1 for ch in text)


def fit_display(text: str, width: int) -> str:
    """Centre ``text`` in ``width`` display columns; wider text is returned unchanged."""
    w = _display_width(text)
    if w >= width:
        return text
    pad = width - w
    left = pad // 2
    return " " * left + text + " " * (pad - left)


def file_at_column(metrics: GridMetrics, rel_col: int) -> int | None:
    """The screen file under a grid column; a separator counts for the cell on its left."""
    origin = AXIS_W + _LEFT_EDGE
    if rel_col < origin:
        return None
    x = rel_col - origin
    span = metrics.cell_w
    for file in range(9):
        if x < span:
            return file
        x = max(x - span, 0)
        if file == 8:
            break
        if x == 0:
            return file
        x = max(x - 1, 0)
    return None


def screen_row_at_line(metrics: GridMetrics, rel_row: int) -> int | None:
    """The screen row under a grid line, or ``None`` on borders and the river."""
    ch = metrics.cell_h
    line = 1
    for screen_row in range(10):
        if line <= rel_row < line + ch:
            return screen_row
        line += ch
        if screen_row == RIVER_AFTER_SCREEN_ROW:
            line += river_sep_lines(ch)
        else:
            line += 1
    return None


def _metrics_for_board_area(area: Rect) -> GridMetrics:
    return GridMetrics.from_area(area.inner())


def hit_board_cell(area: Rect, column: int, row: int, rotated: bool) -> tuple[int, int] | None:
    """The internal ``(file, rank)`` under a terminal cell of the board area."""
    inner = area.inner()
    m = GridMetrics.from_area(inner)
    if not point_in(inner, column, row):
        return None
    rel_col = max(column - (inner.x + m.pad_left), 0)
    rel_row = max(row - (inner.y + m.pad_top), 0)
    if rel_col >= m.line_cols() or rel_row >= grid_line_count(m.cell_h):
        return None
    screen_row = screen_row_at_line(m, rel_row)
    if screen_row is None:
        return None
    file = file_at_column(m, rel_col)
    if file is None:
        return None
    return screen_to_internal(file, screen_row, rotated)


def _column_center_for_file(m: GridMetrics, file: int) -> int | None:
    if not 0 <= file < 9:
        return None
    return AXIS_W + 1 + file * (m.cell_w + 1) + m.cell_w // 2


def _line_center_for_screen_row(m: GridMetrics, screen_row: int) -> int | None:
    ch = m.cell_h
    line = 1
    for sr in range(10):
        if sr == screen_row:
            return line + ch // 2
        line += ch
        line += river_sep_lines(ch) if sr == RIVER_AFTER_SCREEN_ROW else 1
    return None


def cell_hit_point_in_grid(area: Rect, file: int, screen_row: int) -> tuple[int, int] | None:
    """Terminal ``(column, row)`` of the centre of a screen square."""
    inner = area.inner()
    m = GridMetrics.from_area(inner)
    rel_col = _column_center_for_file(m, file)
    rel_row = _line_center_for_screen_row(m, screen_row)
    if rel_col is None or rel_row is None:
        return None
    return inner.x + m.pad_left + rel_col, inner.y + m.pad_top + rel_row


def battle_board_pixel_aspect(term_w: int, term_h: int) -> float:
    """Pixel aspect of the fitted board for a terminal of the given size."""
    board_area_h = max(term_h - (3 + 3 + 5), 0)
    inner_w = max(max(int(term_w * 0.72) - 2, 0), 12)
    inner_h = max(max(board_area_h - 2, 0), 12)
    max_cell_w = max(max(inner_w - (AXIS_W + 1 + 8 + 1), 0) // 9, 2)
    max_cell_h = max_cell_h_for_inner_h(inner_h)
    cell_w, cell_h = fit_board_cells(inner_w, inner_h, max_cell_w, max_cell_h)
    return grid_pixel_aspect(cell_w, cell_h)


def _is_board_top_border(line: str) -> bool:
    start = line.find("┌")
    while start != -1:
        if line[start:].count("┬") >= 8:
            return True
        start = line.find("┌", start + 1)
    return False


def _cell_w_from_top_line(line: str) -> int | None:
    start = line.find("┌")
    if start == -1:
        return None
    tail = line[start + 1:]
    if tail.count("┬") < 8:
        return None
    dashes = len(tail) - len(tail.lstrip("─"))
    return dashes if dashes >= 2 else None


def parse_capture_grid_cells(capture: str) -> tuple[int, int] | None:
    """Recover ``(cell_w, cell_h)`` from a text capture of the drawn board."""
    lines = capture.splitlines()
    top = next((i for i, line in enumerate(lines) if _is_board_top_border(line)), None)
    bottoms = [
        i for i, line in enumerate(lines) if "└" in line and line.count("┴") >= 8
    ]
    if top is None or not bottoms:
        return None
    bottom = bottoms[-1]
    if bottom + 1 < len(lines):
        file_labels = sum(1 for ch in lines[bottom + 1] if "a" <= ch <= "i")
        if file_labels >= 3:
            bottom += 1
    if bottom < top:
        return None
    cell_w = _cell_w_from_top_line(lines[top])
    if cell_w is None:
        return None
    total = bottom - top + 1
    for cell_h in range(1, 9):
        expected = grid_line_count(cell_h)
        if expected in (total, total + 1):
            return cell_w, cell_h
    return None