import pytest

from xiangqi_tui.numfmt import format_count_k


@pytest.mark.parametrize(
    "value, expected",
    [
        (7675653, "7676k"),
        (5994685, "5995k"),
        (500, "500"),
        (1500, "1.5k"),
    ],
)
def test_compact_k_only(value, expected):
    assert format_count_k(value) == expected


def test_below_thousand_is_plain():
    assert format_count_k(999) == "999"
    assert format_count_k(0) == "0"


def test_thousand_and_up_ends_with_k():
    for value in (1_000, 12_345, 99_999, 100_000, 10**9):
        assert format_count_k(value).endswith("k")