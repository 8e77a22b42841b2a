"""
Move Type and UCI Move Text

UCI move text is origin + destination square names plus an optional
lower-case promotion letter: ``e2e4``, ``e7e8q``. The null move is ``0000``.
"""

from dataclasses import dataclass, field
from typing import Optional

from mailbox_chess.board.pieces import (
    Piece,
    PieceKind,
    parse_square,
    square_name,
    square_rank,
)

PROMOTION_LETTERS = {
    "q": PieceKind.QUEEN,
    "r": PieceKind.ROOK,
    "b": PieceKind.BISHOP,
    "n": PieceKind.KNIGHT,
}


@dataclass(frozen=True)
class Move:
    """
    A move from one square to another.

    ``captured`` is what the generator saw on the destination square. It is
    only used for move ordering and does not take part in equality; the
    mutator works out the real captured piece itself (en passant removes a
    pawn that is not on the destination square).
    """

    from_square: int
    to_square: int
    promotion: Optional[PieceKind] = None
    captured: Optional[Piece] = field(default=None, compare=False)

    @classmethod
    def null(cls) -> "Move":
        return cls(0, 0)

    def __bool__(self) -> bool:
        return self.from_square != self.to_square

    def uci(self) -> str:
        """
        Encode as UCI text.

        The promotion letter is only written when the destination is on the
        first or last rank.
        """
        if not self:
            return "0000"
        text = square_name(self.from_square) + square_name(self.to_square)
        if self.promotion is not None and square_rank(self.to_square) in (0, 7):
            text += self.promotion.symbol
        return text

    def __str__(self) -> str:
        return self.uci()


def parse_uci(text: str) -> Move:
    """
    Decode UCI move text into a bare Move (no legality check).

    An unknown fifth character is ignored, so ``e7e8x`` decodes like
    ``e7e8``.

    Raises:
        ValueError: If the squares cannot be parsed
    """
    if len(text) < 4:
        raise ValueError(f"Move text too short: {text!r}")
    from_square = parse_square(text[0:2])
    to_square = parse_square(text[2:4])
    promotion = PROMOTION_LETTERS.get(text[4:5].lower()) if len(text) >= 5 else None
    return Move(from_square, to_square, promotion)
