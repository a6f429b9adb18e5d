"""Chinese glyphs for the pieces."""

from __future__ import annotations

# Indexed by piece kind (1..7): (red glyph, black glyph).
_LABELS = {
    1: ("俥", "車"),
    2: ("傌", "馬"),
    3: ("相", "象"),
    4: ("仕", "士"),
    5: ("帥", "將"),
    6: ("炮", "砲"),
    7: ("兵", "卒"),
}


def piece_label(cell: int) -> tuple[str, bool] | None:
    """The glyph for a board cell code and whether it is red; ``None`` if empty or invalid."""
    if 1 <= cell <= 7:
        kind, red = cell, True
    elif 9 <= cell <= 15:
        kind, red = cell - 8, False
    else:
        return None
    red_label, black_label = _LABELS[kind]
    return (red_label if red else black_label), red