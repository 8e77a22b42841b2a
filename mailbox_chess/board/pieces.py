"""
Pieces, Colors and Squares

Colors follow the python-chess convention (WHITE = True, BLACK = False) so
that "the other side" is simply ``not color``.

A square holds either ``None`` (empty) or a ``Piece``. A Piece always has
both a color and a kind, so asking an occupied square "is this White" or
"what kind is this" never needs range comparisons.

Square Indexing:
    index = rank * 8 + file
    0 = a1, 7 = h1, 56 = a8, 63 = h8
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Dict

Color = bool
WHITE: Color = True
BLACK: Color = False

FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


class PieceKind(IntEnum):
    """Piece kinds. ``kind - 1`` indexes the material weights."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def symbol(self) -> str:
        return "pnbrqk"[self - 1]


PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)


class CastlingRights(IntFlag):
    """4-bit castling rights set."""

    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8

    WHITE = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE | BLACK


@dataclass(frozen=True)
class Piece:
    """An occupied square's content: color and kind."""

    color: Color
    kind: PieceKind

    @property
    def symbol(self) -> str:
        """FEN letter, upper case for White."""
        letter = self.kind.symbol
        return letter.upper() if self.color == WHITE else letter

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        """
        Parse a FEN piece letter.

        Raises:
            ValueError: If the letter is not one of PNBRQK/pnbrqk
        """
        try:
            return _PIECES_BY_SYMBOL[symbol]
        except KeyError:
            raise ValueError(f"Invalid piece symbol: {symbol!r}") from None

    def __str__(self) -> str:
        return self.symbol


_PIECES_BY_SYMBOL: Dict[str, Piece] = {}
for _kind in PieceKind:
    for _color in (WHITE, BLACK):
        _piece = Piece(_color, _kind)
        _PIECES_BY_SYMBOL[_piece.symbol] = _piece


def square(file: int, rank: int) -> int:
    """Square index from 0-based file and rank."""
    return rank * 8 + file


def square_file(sq: int) -> int:
    return sq & 7


def square_rank(sq: int) -> int:
    return sq >> 3


def square_name(sq: int) -> str:
    """Algebraic name, e.g. 0 -> 'a1'."""
    return FILE_NAMES[square_file(sq)] + RANK_NAMES[square_rank(sq)]


def parse_square(name: str) -> int:
    """
    Parse an algebraic square name.

    Raises:
        ValueError: If the name is not a valid square
    """
    if len(name) != 2 or name[0] not in FILE_NAMES or name[1] not in RANK_NAMES:
        raise ValueError(f"Invalid square: {name!r}")
    return square(FILE_NAMES.index(name[0]), RANK_NAMES.index(name[1]))


def mirror_square(sq: int) -> int:
    """Square seen from the other side of the board (table index for Black)."""
    return 63 - sq
