import pytest
from wcwidth import wcswidth

from xiangqi_tui.board import Board
from xiangqi_tui.board_render import (
    GRID_CURSOR,
    GRID_SELECTED,
    HIGHLIGHT_BLACK,
    HIGHLIGHT_RED,
    HIGHLIGHT_RED_PENDING,
    BoardArrow,
    BoardOverlay,
    render_board_lines,
)
from xiangqi_tui.grid import GridMetrics, grid_line_count
from xiangqi_tui.regions import Rect

AREA = Rect(0, 0, 86, 45)
GLYPHS = "帥將仕士相象傌馬俥車炮砲兵卒"


def text_of(line):
    return "".join(span.text for span in line)


def metrics():
    return GridMetrics.from_area(AREA.inner())


@pytest.fixture
def start_lines():
    return render_board_lines(Board.startpos(), AREA, False, BoardOverlay())


def test_line_count_matches_grid_geometry(start_lines):
    assert len(start_lines) == grid_line_count(metrics().cell_h)


def test_top_and_bottom_borders(start_lines):
    top = text_of(start_lines[0])
    assert top.lstrip().startswith("┌")
    assert top.count("┬") == 8
    assert top.endswith("┐")
    bottom = text_of(start_lines[-2])
    assert bottom.lstrip().startswith("└")
    assert bottom.count("┴") == 8


def test_river_joins_ranks(start_lines):
    joined = "\n".join(text_of(line) for line in start_lines)
    assert "楚河" in joined and "漢界" in joined
    assert "┴" in joined and "┬" in joined


def test_all_pieces_shown_once(start_lines):
    joined = "".join(text_of(line) for line in start_lines)
    assert sum(joined.count(g) for g in GLYPHS) == 32
    for glyph in "車俥將帥":
        assert glyph in joined


def test_file_axis_order(start_lines):
    axis = [c for c in text_of(start_lines[-1]) if "a" <= c <= "i"]
    assert "".join(axis) == "abcdefghi"
    rotated = render_board_lines(Board.startpos(), AREA, True, BoardOverlay())
    axis_rot = [c for c in text_of(rotated[-1]) if "a" <= c <= "i"]
    assert "".join(axis_rot) == "ihgfedcba"


def test_rank_axis_labels_follow_rotation(start_lines):
    assert text_of(start_lines[1]).startswith(" 9")
    rotated = render_board_lines(Board.startpos(), AREA, True, BoardOverlay())
    assert text_of(rotated[1]).startswith(" 0")


def test_grid_lines_have_uniform_width(start_lines):
    m = metrics()
    for line in start_lines[:-1]:
        assert wcswidth(text_of(line)) == m.line_cols()
    assert wcswidth(text_of(start_lines[-1])) == m.line_cols() - 1


def test_rotation_moves_kings():
    plain = render_board_lines(Board.startpos(), AREA, False)
    rotated = render_board_lines(Board.startpos(), AREA, True)
    first_plain = "".join(text_of(line) for line in plain[:5])
    first_rot = "".join(text_of(line) for line in rotated[:5])
    assert "將" in first_plain and "帥" not in first_plain
    assert "帥" in first_rot and "將" not in first_rot


def test_selected_square_highlights_surrounding_dashes():
    overlay = BoardOverlay(selected=(0, 0))
    lines = render_board_lines(Board.startpos(), AREA, False, overlay)
    top = lines[0]
    dashes = [span for span in top if span.text.startswith("─")]
    assert dashes[0].style.fg == GRID_SELECTED
    assert dashes[1].style.fg != GRID_SELECTED
    # Joints are never coloured.
    assert top[1].style.fg != GRID_SELECTED


def test_keyboard_cursor_uses_cursor_colour():
    overlay = BoardOverlay(keyboard=(8, 9))
    lines = render_board_lines(Board.startpos(), AREA, False, overlay)
    bottom = lines[-2]
    dashes = [span for span in bottom if span.text.startswith("─")]
    assert dashes[8].style.fg == GRID_CURSOR


def test_selection_wins_over_cursor_on_same_square():
    overlay = BoardOverlay(selected=(0, 0), keyboard=(0, 0))
    lines = render_board_lines(Board.startpos(), AREA, False, overlay)
    dashes = [span for span in lines[0] if span.text.startswith("─")]
    assert dashes[0].style.fg == GRID_SELECTED


def test_pending_arrow_highlights_mover_and_target():
    arrow = BoardArrow(from_file=7, from_rank=7, to_file=4, to_rank=7)
    overlay = BoardOverlay(pending_arrow=arrow, last_arrow=arrow)
    lines = render_board_lines(Board.startpos(), AREA, False, overlay)
    spans = [span for line in lines for span in line]
    pending = [s for s in spans if s.style.bg == HIGHLIGHT_RED_PENDING]
    assert any("炮" in s.text for s in pending)
    assert all(s.style.bold for s in pending)
    assert not any(s.style.bg == HIGHLIGHT_RED for s in spans)


def test_last_arrow_red_and_black():
    red_arrow = BoardArrow(7, 7, 4, 7)
    lines = render_board_lines(Board.startpos(), AREA, False, BoardOverlay(last_arrow=red_arrow))
    spans = [span for line in lines for span in line]
    assert any(s.style.bg == HIGHLIGHT_RED and not s.style.bold for s in spans)

    black_arrow = BoardArrow(7, 2, 4, 2)
    lines = render_board_lines(
        Board.startpos(), AREA, False, BoardOverlay(last_arrow=black_arrow)
    )
    spans = [span for line in lines for span in line]
    assert any(s.style.bg == HIGHLIGHT_BLACK for s in spans)
    assert not any(s.style.bg == HIGHLIGHT_RED for s in spans)


def test_empty_board_has_no_glyphs():
    lines = render_board_lines(Board(), AREA, False)
    joined = "".join(text_of(line) for line in lines)
    assert not any(g in joined for g in GLYPHS)
    assert len(lines) == grid_line_count(metrics().cell_h)


def test_arrow_on_empty_squares_defaults_to_red():
    arrow = BoardArrow(0, 4, 0, 5)
    lines = render_board_lines(Board(), AREA, False, BoardOverlay(last_arrow=arrow))
    spans = [span for line in lines for span in line]
    assert any(s.style.bg == HIGHLIGHT_RED for s in spans)