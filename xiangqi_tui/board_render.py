"""Drawing the grid board as styled text lines.

Each square is a block of ``cell_w`` x ``cell_h`` characters between box
lines; a piece fills 80% of its square with the glyph centred in it.  Axis
labels are global UCI coordinates; ``rotated`` flips only the pieces.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import NamedTuple, Optional, Tuple, Union

from .board import Board
from .grid import (
    AXIS_W,
    RIVER_AFTER_SCREEN_ROW,
    GridMetrics,
    fit_display,
    river_inner_w,
)
from .pieces import piece_label
from .regions import Rect
from .uci import screen_to_internal

Color = Union[str, Tuple[int, int, int]]

GRID_STROKE: Color = (171, 93, 22)
# Last move / hint highlight, red mover.
HIGHLIGHT_RED: Color = (205, 125, 45)
HIGHLIGHT_RED_PENDING: Color = (230, 145, 55)
# Last move / hint highlight, black mover.
HIGHLIGHT_BLACK: Color = (32, 58, 105)
HIGHLIGHT_BLACK_PENDING: Color = (45, 75, 135)
# Selection and cursor only brighten the grid lines around a square.
GRID_SELECTED: Color = (120, 220, 140)
GRID_CURSOR: Color = (255, 220, 80)
PIECE_RED_BG: Color = (188, 51, 40)
PIECE_BLACK_BG: Color = (52, 52, 52)

RIVER_TEXT = "楚河      77象棋      漢界"


@dataclass(frozen=True)
class Style:
    """Terminal text attributes of a span."""

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    dim: bool = False


class Span(NamedTuple):
    """A run of text drawn in one style."""

    text: str
    style: Style


_PLAIN = Style()
_DIM = Style(dim=True)


@dataclass(frozen=True)
class BoardArrow:
    """A move drawn on the board, in internal file/rank coordinates."""

    from_file: int
    from_rank: int
    to_file: int
    to_rank: int

    def touches(self, file: int, rank: int) -> bool:
        return (self.from_file, self.from_rank) == (file, rank) or (
            self.to_file,
            self.to_rank,
        ) == (file, rank)


@dataclass(frozen=True)
class BoardOverlay:
    """Move arrows, the selected square and the keyboard cursor (internal coordinates)."""

    last_arrow: Optional[BoardArrow] = None
    pending_arrow: Optional[BoardArrow] = None
    selected: Optional[Tuple[int, int]] = None
    keyboard: Optional[Tuple[int, int]] = None


def _piece_cell_style(red: bool) -> Style:
    return Style(fg="white", bg=PIECE_RED_BG if red else PIECE_BLACK_BG, bold=True)


def _grid_stroke_style(highlight: Optional[Color]) -> Style:
    if highlight is None:
        return Style(fg=GRID_STROKE)
    return Style(fg=highlight, bold=True)


def _cell_grid_highlight(overlay: BoardOverlay, file: int, rank: int) -> Optional[Color]:
    if overlay.selected == (file, rank):
        return GRID_SELECTED
    if overlay.keyboard == (file, rank):
        return GRID_CURSOR
    return None


def _cell_highlight_at_screen(
    overlay: BoardOverlay, rotated: bool, screen_file: int, screen_row: int
) -> Optional[Color]:
    file, rank = screen_to_internal(screen_file, screen_row, rotated)
    return _cell_grid_highlight(overlay, file, rank)


def _arrow_mover_is_red(board: Board, arrow: BoardArrow) -> bool:
    if not board.is_empty(arrow.to_file, arrow.to_rank):
        return board.is_red_piece(arrow.to_file, arrow.to_rank)
    if not board.is_empty(arrow.from_file, arrow.from_rank):
        return board.is_red_piece(arrow.from_file, arrow.from_rank)
    return True


def _side_highlight_bg(red: bool, pending: bool) -> Color:
    if red:
        return HIGHLIGHT_RED_PENDING if pending else HIGHLIGHT_RED
    return HIGHLIGHT_BLACK_PENDING if pending else HIGHLIGHT_BLACK


def _move_highlight(
    board: Board, file: int, rank: int, overlay: BoardOverlay
) -> Optional[Tuple[Color, bool]]:
    for arrow, pending in ((overlay.pending_arrow, True), (overlay.last_arrow, False)):
        if arrow is not None and arrow.touches(file, rank):
            red = _arrow_mover_is_red(board, arrow)
            return _side_highlight_bg(red, pending), pending
    return None


def _apply_highlights(
    style: Style, board: Board, file: int, rank: int, overlay: BoardOverlay
) -> Style:
    hit = _move_highlight(board, file, rank, overlay)
    if hit is None:
        return style
    bg, bold = hit
    style = replace(style, bg=bg)
    return replace(style, bold=True) if bold else style


def _empty_cell_style(board: Board, file: int, rank: int, overlay: BoardOverlay) -> Style:
    hit = _move_highlight(board, file, rank, overlay)
    if hit is None:
        return _DIM
    bg, bold = hit
    return Style(bg=bg, bold=bold)


def _cell_spans(
    m: GridMetrics,
    board: Board,
    cell: int,
    file: int,
    rank: int,
    sub: int,
    overlay: BoardOverlay,
) -> list[Span]:
    label = piece_label(cell)
    if label is None:
        return [Span(fit_display("", m.cell_w), _empty_cell_style(board, file, rank, overlay))]

    if not m.piece_pad_h <= sub < m.piece_pad_h + m.piece_h:
        return [Span(fit_display("", m.cell_w), _DIM)]

    glyph, red = label
    show_glyph = sub == m.glyph_sub
    style = _apply_highlights(_piece_cell_style(red), board, file, rank, overlay)
    pad_style = style if show_glyph else _DIM
    right_w = max(m.cell_w - (m.piece_pad_w + m.piece_w), 0)

    spans = []
    if m.piece_pad_w > 0:
        spans.append(Span(fit_display("", m.piece_pad_w), pad_style))
    spans.append(Span(fit_display(glyph if show_glyph else "", m.piece_w), style))
    if right_w > 0:
        spans.append(Span(fit_display("", right_w), pad_style))
    return spans


def _rank_block(
    m: GridMetrics, board: Board, screen_row: int, rotated: bool, overlay: BoardOverlay
) -> list[list[Span]]:
    _, irank = screen_to_internal(0, screen_row, rotated)
    axis = 9 - irank
    first = screen_to_internal(0, screen_row, rotated)
    last = screen_to_internal(8, screen_row, rotated)
    lines = []
    for sub in range(m.cell_h):
        label = f"{axis:>{AXIS_W}}" if sub == 0 else " " * AXIS_W
        spans = [
            Span(label, _DIM),
            Span("│", _grid_stroke_style(_cell_grid_highlight(overlay, *first))),
        ]
        for file in range(9):
            ifile, irank_cell = screen_to_internal(file, screen_row, rotated)
            cell = board.get(ifile, irank_cell)
            spans.extend(_cell_spans(m, board, cell, ifile, irank_cell, sub, overlay))
            if file != 8:
                neighbour = screen_to_internal(file + 1, screen_row, rotated)
                joint = _cell_grid_highlight(overlay, ifile, irank_cell) or _cell_grid_highlight(
                    overlay, *neighbour
                )
                spans.append(Span("│", _grid_stroke_style(joint)))
        spans.append(Span("│", _grid_stroke_style(_cell_grid_highlight(overlay, *last))))
        lines.append(spans)
    return lines


def _border_line(
    m: GridMetrics,
    left: str,
    mid: str,
    right: str,
    dash_highlight: Callable[[int], Optional[Color]],
) -> list[Span]:
    joint_stroke = _grid_stroke_style(None)
    spans = [Span(" " * AXIS_W, _PLAIN), Span(left, joint_stroke)]
    for file in range(9):
        spans.append(Span("─" * m.cell_w, _grid_stroke_style(dash_highlight(file))))
        spans.append(Span(right if file == 8 else mid, joint_stroke))
    return spans


def _river_block(m: GridMetrics, overlay: BoardOverlay, rotated: bool) -> list[list[Span]]:
    inner_w = river_inner_w(m.cell_w)
    stroke = _grid_stroke_style(None)
    lines = [
        _border_line(
            m,
            "├",
            "┴",
            "┤",
            lambda file: _cell_highlight_at_screen(
                overlay, rotated, file, RIVER_AFTER_SCREEN_ROW
            ),
        )
    ]
    for sub in range(m.cell_h):
        is_text_row = sub == m.glyph_sub
        inner = fit_display(RIVER_TEXT if is_text_row else "", inner_w)
        lines.append(
            [
                Span(" " * AXIS_W, _PLAIN),
                Span("│", stroke),
                Span(inner, replace(stroke, bold=True) if is_text_row else stroke),
                Span("│", stroke),
            ]
        )
    above_row = RIVER_AFTER_SCREEN_ROW + 1
    lines.append(
        _border_line(
            m,
            "├",
            "┬",
            "┤",
            lambda file: _cell_highlight_at_screen(overlay, rotated, file, above_row),
        )
    )
    return lines


def _file_axis_line(m: GridMetrics, rotated: bool) -> list[Span]:
    stroke = Style(fg=GRID_STROKE)
    spans = [Span(" " * AXIS_W, _PLAIN), Span(" ", stroke)]
    for file in range(9):
        ifile, _ = screen_to_internal(file, 9, rotated)
        spans.append(Span(fit_display(chr(ord("a") + ifile), m.cell_w), _DIM))
        if file != 8:
            spans.append(Span("│", stroke))
    return spans


def render_board_lines(
    board: Board,
    area: Rect,
    rotated: bool,
    overlay: Optional[BoardOverlay] = None,
) -> list[list[Span]]:
    """The grid lines of ``board`` fitted to the framed ``area``, top to bottom.

    The lines are to be drawn at ``(pad_left, pad_top)`` inside the frame's
    inner area, as given by ``GridMetrics.from_area(area.inner())``.
    """
    if overlay is None:
        overlay = BoardOverlay()
    m = GridMetrics.from_area(area.inner())

    lines = [
        _border_line(
            m, "┌", "┬", "┐", lambda file: _cell_highlight_at_screen(overlay, rotated, file, 0)
        )
    ]
    for screen_row in range(10):
        lines.extend(_rank_block(m, board, screen_row, rotated, overlay))
        if screen_row == 9:
            break
        if screen_row == RIVER_AFTER_SCREEN_ROW:
            lines.extend(_river_block(m, overlay, rotated))
        else:
            below, above = screen_row, screen_row + 1
            lines.append(
                _border_line(
                    m,
                    "├",
                    "┼",
                    "┤",
                    lambda file, below=below, above=above: _cell_highlight_at_screen(
                        overlay, rotated, file, below
                    )
                    or _cell_highlight_at_screen(overlay, rotated, file, above),
                )
            )
    lines.append(
        _border_line(
            m, "└", "┴", "┘", lambda file: _cell_highlight_at_screen(overlay, rotated, file, 9)
        )
    )
    lines.append(_file_axis_line(m, rotated))
    return lines