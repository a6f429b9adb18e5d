import pytest

from xiangqi_tui.board import Board
from xiangqi_tui.pieces import piece_label


def test_kings():
    assert piece_label(5) == ("帥", True)
    assert piece_label(13) == ("將", False)


def test_rooks_differ_by_side():
    assert piece_label(1) == ("俥", True)
    assert piece_label(9) == ("車", False)


@pytest.mark.parametrize("cell", [0, 8, 16, 255, -1])
def test_non_piece_codes_have_no_label(cell):
    assert piece_label(cell) is None


def test_side_flag_matches_board_colour():
    board = Board.startpos()
    for rank in range(10):
        for file in range(9):
            label = piece_label(board.get(file, rank))
            if board.is_empty(file, rank):
                assert label is None
            else:
                assert label[1] == board.is_red_piece(file, rank)


def test_all_fourteen_glyphs_are_distinct():
    labels = {piece_label(code)[0] for code in [*range(1, 8), *range(9, 16)]}
    assert len(labels) == 14