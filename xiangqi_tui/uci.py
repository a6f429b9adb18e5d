"""UCI/ICCS coordinates: files ``a``-``i``, ranks ``0``-``9`` with red's back rank at ``0``.

Internally a square is ``(file, rank)`` where rank ``0`` is the top (black) row.
Rotating the board only changes the screen mapping, never a UCI string.
"""

from __future__ import annotations

_DIGITS = "0123456789"


def _file_index(ch: str) -> int | None:
    offset = ord(ch) - ord("a")
    return offset if offset >= 0 else None


def parse_uci_coords(uci: str) -> tuple[int, int, int, int] | None:
    """Parse a move like ``h2e2`` into ``(r1, c1, r2, c2)`` internal rows and columns.

    Returns ``None`` when the text is not a move on the 9x10 board.
    """
    if len(uci) < 4:
        return None
    f1, d1, f2, d2 = uci[:4]
    if d1 not in _DIGITS or d2 not in _DIGITS:
        return None
    c1 = _file_index(f1)
    c2 = _file_index(f2)
    if c1 is None or c2 is None:
        return None
    r1 = 9 - int(d1)
    r2 = 9 - int(d2)
    if c1 < 9 and c2 < 9:
        return r1, c1, r2, c2
    return None


def uci_from_coords(r1: int, c1: int, r2: int, c2: int) -> str:
    """Format internal rows and columns as a UCI move."""
    return f"{chr(ord('a') + c1)}{9 - r1}{chr(ord('a') + c2)}{9 - r2}"


def uci_cell_label(file: int, rank: int) -> str:
    """The UCI name of an internal square, e.g. ``(0, 9)`` is ``a0``."""
    return f"{chr(ord('a') + file)}{9 - rank}"


def screen_to_internal(file: int, screen_row: int, rotated: bool) -> tuple[int, int]:
    """Map a screen square to an internal square."""
    if rotated:
        return 8 - file, 9 - screen_row
    return file, screen_row


def internal_to_screen(file: int, rank: int, rotated: bool) -> tuple[int, int]:
    """Map an internal square to its screen square."""
    if rotated:
        return 8 - file, 9 - rank
    return file, rank


def cursor_delta_internal(screen_dfile: int, screen_drank: int, rotated: bool) -> tuple[int, int]:
    """Turn an on-screen cursor step into an internal ``(dfile, drank)`` step."""
    if rotated:
        return -screen_dfile, -screen_drank
    return screen_dfile, screen_drank