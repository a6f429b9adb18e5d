"""The xiangqi board: 90 compact cells, FEN I/O and legal move generation.

Cell codes: ``0`` empty, red ``1..7``, black ``9..15`` (kind + 8), with kinds
rook 1, knight 2, bishop 3, advisor 4, king 5, cannon 6, pawn 7.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .side import Side
from .uci import parse_uci_coords, uci_from_coords

STARTPOS_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"

EMPTY = 0
RANKS = 10
FILES = 9


class InvalidFenError(ValueError):
    """Raised when a FEN string does not describe a board."""


class _Kind(IntEnum):
    ROOK = 1
    KNIGHT = 2
    BISHOP = 3
    ADVISOR = 4
    KING = 5
    CANNON = 6
    PAWN = 7


_FEN_LETTERS = {
    _Kind.ROOK: "R",
    _Kind.KNIGHT: "N",
    _Kind.BISHOP: "B",
    _Kind.ADVISOR: "A",
    _Kind.KING: "K",
    _Kind.CANNON: "C",
    _Kind.PAWN: "P",
}
_FEN_CODES = {letter: int(kind) for kind, letter in _FEN_LETTERS.items()}
_FEN_CODES.update({letter.lower(): int(kind) + 8 for kind, letter in _FEN_LETTERS.items()})

_RED_KING = int(_Kind.KING)
_BLACK_KING = int(_Kind.KING) + 8


def _is_red_code(cell: int) -> bool:
    return 1 <= cell <= 7


def _is_side(cell: int, side_red: bool) -> bool:
    if cell == EMPTY:
        return False
    return _is_red_code(cell) if side_red else 9 <= cell <= 15


def _piece_kind(cell: int) -> int:
    if cell == EMPTY:
        return 0
    return cell if cell <= 7 else cell - 8


def _in_board(r: int, c: int) -> bool:
    return 0 <= r < RANKS and 0 <= c < FILES


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def _in_palace(side_red: bool, r: int, c: int) -> bool:
    if not 3 <= c <= 5:
        return False
    return 7 <= r <= 9 if side_red else 0 <= r <= 2


@dataclass
class Board:
    """A 10x9 board, row 0 at the top (black's back rank)."""

    cells: list[int] = field(default_factory=lambda: [EMPTY] * (RANKS * FILES))

    @classmethod
    def startpos(cls) -> Board:
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> Board:
        return cls.from_fen_with_side(fen)[0]

    @classmethod
    def from_fen_with_side(cls, fen: str) -> tuple[Board, Side]:
        """Parse the board and side-to-move fields of a FEN."""
        parts = fen.split()
        if not parts:
            raise InvalidFenError("empty FEN")
        side = Side.from_fen_turn_field(parts[1]) if len(parts) >= 2 else Side.RED
        rows = parts[0].split("/")
        if len(rows) != RANKS:
            raise InvalidFenError(f"expected {RANKS} ranks, got {len(rows)}")
        cells = [EMPTY] * (RANKS * FILES)
        for r, row_text in enumerate(rows):
            c = 0
            for ch in row_text:
                if ch in "0123456789":
                    n = int(ch)
                    if n == 0 or c + n > FILES:
                        raise InvalidFenError(f"bad empty run {ch!r} in rank {r}")
                    c += n
                    continue
                if c >= FILES:
                    raise InvalidFenError(f"rank {r} is too long")
                code = _FEN_CODES.get(ch)
                if code is None:
                    raise InvalidFenError(f"unknown piece letter {ch!r}")
                cells[r * FILES + c] = code
                c += 1
            if c != FILES:
                raise InvalidFenError(f"rank {r} has {c} files")
        return cls(cells), side

    def _at(self, r: int, c: int) -> int:
        return self.cells[r * FILES + c]

    def get(self, file: int, rank: int) -> int:
        return self.cells[rank * FILES + file]

    def is_empty(self, file: int, rank: int) -> bool:
        return self.get(file, rank) == EMPTY

    def is_red_piece(self, file: int, rank: int) -> bool:
        return _is_red_code(self.get(file, rank))

    def piece_side(self, file: int, rank: int) -> Side | None:
        """The owner of the piece on a square, or ``None`` if it is empty."""
        cell = self.get(file, rank)
        if cell == EMPTY:
            return None
        return Side.RED if _is_red_code(cell) else Side.BLACK

    def is_own_for(self, file: int, rank: int, side: Side) -> bool:
        return self.piece_side(file, rank) is side

    def has_king(self, side: Side) -> bool:
        return (_RED_KING if side.is_red() else _BLACK_KING) in self.cells

    def in_check(self, side: Side) -> bool:
        return self._side_in_check(side.is_red())

    def to_fen(self, side: Side) -> str:
        rows = []
        for r in range(RANKS):
            row = ""
            empty_run = 0
            for c in range(FILES):
                cell = self._at(r, c)
                if cell == EMPTY:
                    empty_run += 1
                    continue
                if empty_run:
                    row += str(empty_run)
                    empty_run = 0
                row += _piece_to_fen_char(cell)
            if empty_run:
                row += str(empty_run)
            rows.append(row)
        return f"{'/'.join(rows)} {side.fen_turn_char()} - - 0 1"

    def apply_uci(self, uci: str) -> None:
        """Move whatever stands on the source square to the target square."""
        coords = parse_uci_coords(uci)
        if coords is None:
            raise ValueError(f"not a UCI move: {uci!r}")
        r1, c1, r2, c2 = coords
        piece = self._at(r1, c1)
        self.cells[r1 * FILES + c1] = EMPTY
        self.cells[r2 * FILES + c2] = piece

    def copy(self) -> Board:
        return Board(list(self.cells))

    def legal_ucis_for_side(self, side: Side) -> list[str]:
        """All fully legal moves for ``side``, sorted."""
        side_red = side.is_red()
        legal = set()
        for uci in self._pseudo_legal_ucis(side_red):
            scratch = self.copy()
            scratch.apply_uci(uci)
            if scratch._kings_face_each_other() or scratch._side_in_check(side_red):
                continue
            legal.add(uci)
        return sorted(legal)

    def _squares_of(self, side_red: bool):
        for r1 in range(RANKS):
            for c1 in range(FILES):
                if _is_side(self._at(r1, c1), side_red):
                    yield r1, c1

    def _pseudo_legal_ucis(self, side_red: bool) -> list[str]:
        moves = {
            uci_from_coords(r1, c1, r2, c2)
            for r1, c1 in self._squares_of(side_red)
            for r2 in range(RANKS)
            for c2 in range(FILES)
            if (r1, c1) != (r2, c2) and self._legal_move_geometry(side_red, r1, c1, r2, c2)
        }
        return sorted(moves)

    def _legal_move_geometry(self, side_red: bool, r1: int, c1: int, r2: int, c2: int) -> bool:
        if not _in_board(r2, c2):
            return False
        if _is_side(self._at(r2, c2), side_red):
            return False
        src = self._at(r1, c1)
        if src == EMPTY:
            return False
        kind = _piece_kind(src)
        if kind not in _FEN_LETTERS:
            return False
        return self._geometry_for_kind(side_red, _Kind(kind), r1, c1, r2, c2)

    def _count_between(self, r1: int, c1: int, r2: int, c2: int) -> int:
        if r1 == r2:
            lo, hi = sorted((c1, c2))
            return sum(1 for c in range(lo + 1, hi) if self._at(r1, c) != EMPTY)
        if c1 == c2:
            lo, hi = sorted((r1, r2))
            return sum(1 for r in range(lo + 1, hi) if self._at(r, c1) != EMPTY)
        return 0

    def _geometry_for_kind(
        self, side_red: bool, kind: _Kind, r1: int, c1: int, r2: int, c2: int
    ) -> bool:
        dr = r2 - r1
        dc = c2 - c1
        adr = abs(dr)
        adc = abs(dc)
        if kind is _Kind.ROOK:
            return (r1 == r2 or c1 == c2) and self._count_between(r1, c1, r2, c2) == 0
        if kind is _Kind.CANNON:
            if not (r1 == r2 or c1 == c2):
                return False
            between = self._count_between(r1, c1, r2, c2)
            target_empty = self._at(r2, c2) == EMPTY
            return (between == 0 and target_empty) or (between == 1 and not target_empty)
        if kind is _Kind.KNIGHT:
            if not ((adr == 2 and adc == 1) or (adr == 1 and adc == 2)):
                return False
            if adr == 2:
                leg = (r1 + _sign(dr), c1)
            else:
                leg = (r1, c1 + _sign(dc))
            return self._at(*leg) == EMPTY
        if kind is _Kind.BISHOP:
            if not (adr == 2 and adc == 2):
                return False
            if self._at(r1 + dr // 2, c1 + dc // 2) != EMPTY:
                return False
            return r2 >= 5 if side_red else r2 <= 4
        if kind is _Kind.ADVISOR:
            return adr == 1 and adc == 1 and _in_palace(side_red, r2, c2)
        if kind is _Kind.KING:
            return adr + adc == 1 and _in_palace(side_red, r2, c2)
        # Pawn
        forward = -1 if side_red else 1
        crossed = r1 <= 4 if side_red else r1 >= 5
        return (dr == forward and dc == 0) or (crossed and dr == 0 and adc == 1)

    def _find_king_positions(self) -> tuple[tuple[int, int] | None, tuple[int, int] | None]:
        red = black = None
        for r in range(RANKS):
            for c in range(FILES):
                cell = self._at(r, c)
                if cell == _RED_KING:
                    red = (r, c)
                elif cell == _BLACK_KING:
                    black = (r, c)
        return red, black

    def _kings_face_each_other(self) -> bool:
        red, black = self._find_king_positions()
        if red is None or black is None:
            return False
        (r1, c1), (r2, c2) = red, black
        if c1 != c2:
            return False
        return self._count_between(r1, c1, r2, c2) == 0

    def _side_in_check(self, side_red: bool) -> bool:
        king_code = _RED_KING if side_red else _BLACK_KING
        king = None
        for r in range(RANKS):
            for c in range(FILES):
                if self._at(r, c) == king_code:
                    king = (r, c)
                    break
        if king is None:
            return False
        return self._is_square_attacked(*king, not side_red)

    def _is_square_attacked(self, tr: int, tc: int, attacker_red: bool) -> bool:
        if not _in_board(tr, tc):
            return False
        return any(
            self._legal_move_geometry(attacker_red, r1, c1, tr, tc)
            for r1, c1 in self._squares_of(attacker_red)
        )


def _piece_to_fen_char(cell: int) -> str:
    if cell == EMPTY:
        return "."
    kind = _piece_kind(cell)
    letter = _FEN_LETTERS.get(_Kind(kind), ".") if kind in _FEN_LETTERS else "."
    return letter if _is_red_code(cell) else letter.lower()