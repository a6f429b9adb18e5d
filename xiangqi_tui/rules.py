"""Full-rule legality, move application and game-over detection."""

from __future__ import annotations

from .board import Board, InvalidFenError
from .side import Side


class IllegalMoveError(ValueError):
    """Raised when a move is not fully legal in the given position."""


def uci_is_fully_legal(fen: str, uci: str) -> bool:
    """Whether ``uci`` is legal (geometry, flying kings, check) in ``fen``."""
    try:
        board, side = Board.from_fen_with_side(fen.strip())
    except InvalidFenError:
        return False
    return uci in board.legal_ucis_for_side(side)


def try_apply_fully_legal_uci(fen: str, uci: str) -> str:
    """Play a legal move and return the new FEN with the other side to move."""
    fen = fen.strip()
    if not uci_is_fully_legal(fen, uci):
        raise IllegalMoveError(f"illegal move {uci!r}")
    board, side = Board.from_fen_with_side(fen)
    board.apply_uci(uci)
    return board.to_fen(side.other())


def game_over_message(board: Board, side_to_move: Side) -> str | None:
    """A description of the result if ``side_to_move`` has lost, else ``None``."""
    defender, winner = ("红方", "黑方") if side_to_move.is_red() else ("黑方", "红方")
    if not board.has_king(side_to_move):
        return f"{defender}已无将/帅，{winner}胜"
    if board.legal_ucis_for_side(side_to_move):
        return None
    if board.in_check(side_to_move):
        return f"{defender}被将死，{winner}胜"
    return f"{defender}困毙，{winner}胜"