"""
Position and Attack Queries

The Position is the mutable game state: a 64-entry mailbox board plus side
to move, halfmove clock, en passant target and castling rights.

Everything in this module is a pure query except the constructors
(``set_start_pos`` / ``set_fen``). Moves are applied by
``mailbox_chess.board.mutator`` only.

Wraparound:
    A flat index step like +1 or +9 silently wraps from the h-file to the
    a-file of the next rank. Every ray step therefore compares the files of
    two consecutive squares and stops when they differ by more than one.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from mailbox_chess.board.pieces import (
    BLACK,
    WHITE,
    CastlingRights,
    Color,
    Piece,
    PieceKind,
    parse_square,
    square_file,
    square_name,
    square_rank,
)

logger = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

KNIGHT_OFFSETS = (17, 15, 10, 6, -6, -10, -15, -17)
KING_OFFSETS = (8, -8, 1, -1, 9, 7, -7, -9)
DIAGONAL_STEPS = (9, 7, -7, -9)
ORTHOGONAL_STEPS = (8, -8, 1, -1)

_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

_CASTLING_SYMBOLS = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def ray(start: int, step: int):
    """
    Yield squares from ``start`` (exclusive) along ``step`` until the edge.

    Stops on leaving the 0-63 range and on file wraparound between two
    consecutive squares.
    """
    current = start
    while True:
        previous = current
        current += step
        if current < 0 or current > 63:
            return
        if abs(square_file(current) - square_file(previous)) > 1:
            return
        yield current


def leaper_targets(start: int, offsets, distance: int):
    """
    Yield on-board targets of a fixed-offset mover (knight or king).

    ``distance`` is the required Chebyshev distance between start and
    target: 2 for a knight jump, 1 for a king step. Anything else is a
    wrapped offset and is rejected.
    """
    start_file = square_file(start)
    start_rank = square_rank(start)
    for offset in offsets:
        target = start + offset
        if target < 0 or target > 63:
            continue
        file_delta = abs(square_file(target) - start_file)
        rank_delta = abs(square_rank(target) - start_rank)
        if max(file_delta, rank_delta) != distance:
            continue
        yield target


@dataclass
class Position:
    """
    Mutable game state.

    Attributes:
        board: 64 squares, ``None`` for empty, index = rank * 8 + file
        turn: Side to move (WHITE / BLACK)
        halfmove_clock: Plies since the last capture or pawn move
        ep_square: En passant target, only set right after a double push
        castling: Remaining castling rights
        fullmove_number: FEN move number, incremented after Black moves
    """

    board: List[Optional[Piece]] = field(default_factory=lambda: [None] * 64)
    turn: Color = WHITE
    halfmove_clock: int = 0
    ep_square: Optional[int] = None
    castling: CastlingRights = CastlingRights.NONE
    fullmove_number: int = 1

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def starting(cls) -> "Position":
        """Standard start position."""
        position = cls()
        position.set_start_pos()
        return position

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        """
        Build a position from a FEN string.

        Raises:
            ValueError: If the FEN is malformed
        """
        position = cls()
        position.set_fen(fen)
        return position

    def set_start_pos(self) -> None:
        """Reset to the standard start position."""
        self.board = [None] * 64
        for file, kind in enumerate(_BACK_RANK):
            self.board[file] = Piece(WHITE, kind)
            self.board[56 + file] = Piece(BLACK, kind)
            self.board[8 + file] = Piece(WHITE, PieceKind.PAWN)
            self.board[48 + file] = Piece(BLACK, PieceKind.PAWN)
        self.turn = WHITE
        self.halfmove_clock = 0
        self.ep_square = None
        self.castling = CastlingRights.ALL
        self.fullmove_number = 1

    def set_fen(self, fen: str) -> None:
        """
        Load the six standard FEN fields.

        Piece counts and king presence are not validated; a position without
        a king only triggers a warning in the log. The position is left
        untouched when the FEN cannot be parsed.

        Args:
            fen: placement, active color, castling, en passant, halfmove,
                fullmove

        Raises:
            ValueError: If the FEN does not have six fields or a field
                cannot be parsed
        """
        fields = fen.split()
        if len(fields) != 6:
            raise ValueError(f"FEN must have 6 fields, got {len(fields)}: {fen!r}")
        placement, active, castling_field, ep_field, halfmove_field, fullmove_field = fields

        board = _parse_placement(placement)

        if active not in ("w", "b"):
            raise ValueError(f"Invalid active color in FEN: {active!r}")

        castling = CastlingRights.NONE
        if castling_field != "-":
            for char in castling_field:
                for symbol, right in _CASTLING_SYMBOLS:
                    if char == symbol:
                        castling |= right
                        break
                else:
                    raise ValueError(f"Invalid castling field in FEN: {castling_field!r}")

        ep_square = None if ep_field == "-" else parse_square(ep_field)

        try:
            halfmove_clock = int(halfmove_field)
            fullmove_number = int(fullmove_field)
        except ValueError:
            raise ValueError(f"Invalid move counters in FEN: {fen!r}") from None
        if halfmove_clock < 0 or fullmove_number < 1:
            raise ValueError(f"Invalid move counters in FEN: {fen!r}")

        self.board = board
        self.turn = active == "w"
        self.castling = castling
        self.ep_square = ep_square
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

        for color in (WHITE, BLACK):
            kings = sum(1 for p in board if p == Piece(color, PieceKind.KING))
            if kings != 1:
                logger.warning(
                    f"FEN has {kings} {'white' if color else 'black'} king(s): {fen}"
                )

    def copy(self) -> "Position":
        """Independent copy; the board list is duplicated."""
        return Position(
            board=list(self.board),
            turn=self.turn,
            halfmove_clock=self.halfmove_clock,
            ep_square=self.ep_square,
            castling=self.castling,
            fullmove_number=self.fullmove_number,
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def board_fen(self) -> str:
        """Piece placement field of the FEN."""
        rows = []
        for rank in range(7, -1, -1):
            row = ""
            empty = 0
            for file in range(8):
                piece = self.board[rank * 8 + file]
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece.symbol
            if empty:
                row += str(empty)
            rows.append(row)
        return "/".join(rows)

    def fen(self) -> str:
        """Full six-field FEN."""
        castling = "".join(s for s, right in _CASTLING_SYMBOLS if self.castling & right)
        return " ".join([
            self.board_fen(),
            "w" if self.turn == WHITE else "b",
            castling or "-",
            square_name(self.ep_square) if self.ep_square is not None else "-",
            str(self.halfmove_clock),
            str(self.fullmove_number),
        ])

    def __str__(self) -> str:
        lines = []
        for rank in range(7, -1, -1):
            cells = []
            for file in range(8):
                piece = self.board[rank * 8 + file]
                cells.append(piece.symbol if piece else ".")
            lines.append(" ".join(cells))
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def piece_at(self, sq: int) -> Optional[Piece]:
        return self.board[sq]

    def king_square(self, color: Color) -> Optional[int]:
        """Square of ``color``'s king, or None if there is no king."""
        king = Piece(color, PieceKind.KING)
        for sq, piece in enumerate(self.board):
            if piece == king:
                return sq
        return None

    def is_square_attacked(self, sq: int, by_color: Color) -> bool:
        """
        Check whether ``by_color`` attacks ``sq``.

        Order: pawns, knights, diagonal sliders, orthogonal sliders, king.
        """
        board = self.board
        file = square_file(sq)
        rank = square_rank(sq)

        # Pawns attack diagonally forward, so look one rank "behind" the target
        pawn_rank = rank - 1 if by_color == WHITE else rank + 1
        if 0 <= pawn_rank < 8:
            pawn = Piece(by_color, PieceKind.PAWN)
            for pawn_file in (file - 1, file + 1):
                if 0 <= pawn_file < 8 and board[pawn_rank * 8 + pawn_file] == pawn:
                    return True

        knight = Piece(by_color, PieceKind.KNIGHT)
        for target in leaper_targets(sq, KNIGHT_OFFSETS, 2):
            if board[target] == knight:
                return True

        diagonal_attackers = (Piece(by_color, PieceKind.BISHOP), Piece(by_color, PieceKind.QUEEN))
        for step in DIAGONAL_STEPS:
            for target in ray(sq, step):
                piece = board[target]
                if piece is None:
                    continue
                if piece in diagonal_attackers:
                    return True
                break

        orthogonal_attackers = (Piece(by_color, PieceKind.ROOK), Piece(by_color, PieceKind.QUEEN))
        for step in ORTHOGONAL_STEPS:
            for target in ray(sq, step):
                piece = board[target]
                if piece is None:
                    continue
                if piece in orthogonal_attackers:
                    return True
                break

        king = Piece(by_color, PieceKind.KING)
        for target in leaper_targets(sq, KING_OFFSETS, 1):
            if board[target] == king:
                return True

        return False

    def is_in_check(self, color: Color) -> bool:
        """
        Check whether ``color``'s king is attacked.

        Returns False when ``color`` has no king on the board.
        """
        king_sq = self.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, not color)

    def is_check(self) -> bool:
        """Is the side to move in check."""
        return self.is_in_check(self.turn)


def _parse_placement(placement: str) -> List[Optional[Piece]]:
    """Parse the FEN placement field (rank 8 first) into a board list."""
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"FEN placement must have 8 ranks: {placement!r}")

    board: List[Optional[Piece]] = [None] * 64
    for row_index, row in enumerate(rows):
        rank = 7 - row_index
        file = 0
        for char in row:
            if char.isdigit():
                file += int(char)
                continue
            if file >= 8:
                raise ValueError(f"Too many squares on rank {rank + 1}: {placement!r}")
            board[rank * 8 + file] = Piece.from_symbol(char)
            file += 1
        if file != 8:
            raise ValueError(f"Rank {rank + 1} does not have 8 squares: {placement!r}")
    return board
