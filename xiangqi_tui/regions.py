"""Screen rectangles for clickable regions and point hit testing."""

from __future__ import annotations

from dataclasses import dataclass

_COORD_MAX = 0xFFFF


@dataclass(frozen=True)
class Rect:
    """A terminal rectangle in character cells."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def right(self) -> int:
        """The first column past the rectangle."""
        return min(self.x + self.width, _COORD_MAX)

    def bottom(self) -> int:
        """The first row past the rectangle."""
        return min(self.y + self.height, _COORD_MAX)

    def inner(self) -> Rect:
        """The area left inside a one-cell border on every side."""
        x = min(self.x + 1, self.right())
        y = min(self.y + 1, self.bottom())
        width = max(self.width - 2, 0)
        height = max(self.height - 2, 0)
        return Rect(x, y, width, height)


def point_in(rect: Rect, column: int, row: int) -> bool:
    """Whether the cell at ``(column, row)`` lies inside ``rect``."""
    return rect.x <= column < rect.right() and rect.y <= row < rect.bottom()