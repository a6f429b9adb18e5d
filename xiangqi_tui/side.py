"""The two sides of a xiangqi game."""

from __future__ import annotations

from enum import Enum


class Side(Enum):
    """A player: red moves first and is written ``w`` in FEN."""

    RED = "red"
    BLACK = "black"

    @classmethod
    def from_fen_turn_field(cls, text: str) -> Side:
        """Read the side-to-move field of a FEN; anything but ``b`` means red."""
        return cls.BLACK if text.lower() == "b" else cls.RED

    def fen_turn_char(self) -> str:
        """The FEN side-to-move letter for this side."""
        return "w" if self is Side.RED else "b"

    def is_red(self) -> bool:
        return self is Side.RED

    def other(self) -> Side:
        return Side.BLACK if self is Side.RED else Side.RED