"""
Make / Unmake

``make_move`` is the only place the board is mutated by play. It returns an
UndoRecord holding exactly what ``unmake_move`` needs to put every field
back. For any move produced by ``generate_legal_moves`` on a position,

    undo = make_move(position, move)
    unmake_move(position, move, undo)

leaves the position equal to what it was before, field for field.

A diagonal pawn move that captures nothing (neither an enemy piece on the
destination nor en passant) raises IllegalMoveError before anything is
touched. The generator never produces such a move; the check protects the
board from malformed external input.
"""

from dataclasses import dataclass
from typing import Optional

from mailbox_chess.board.move import Move
from mailbox_chess.board.pieces import (
    BLACK,
    WHITE,
    CastlingRights,
    Piece,
    PieceKind,
    square_file,
    square_rank,
)
from mailbox_chess.board.position import Position

# Rook home squares and the right lost when that rook moves or is captured
ROOK_HOME_RIGHTS = {
    0: CastlingRights.WHITE_QUEENSIDE,
    7: CastlingRights.WHITE_KINGSIDE,
    56: CastlingRights.BLACK_QUEENSIDE,
    63: CastlingRights.BLACK_KINGSIDE,
}

# King destination -> (rook from, rook to), keyed by king home square
CASTLE_ROOK_MOVES = {
    4: {6: (7, 5), 2: (0, 3)},
    60: {62: (63, 61), 58: (56, 59)},
}


class IllegalMoveError(ValueError):
    """Raised when a move cannot be applied to the position."""


@dataclass
class UndoRecord:
    """Snapshot needed to reverse one make_move."""

    captured: Optional[Piece]
    halfmove_clock: int
    ep_square: Optional[int]
    castling: CastlingRights
    fullmove_number: int
    moved_piece: Piece
    ep_capture_square: Optional[int] = None
    rook_from: Optional[int] = None
    rook_to: Optional[int] = None
    rook_piece: Optional[Piece] = None

    @property
    def was_en_passant(self) -> bool:
        return self.ep_capture_square is not None

    @property
    def was_castle(self) -> bool:
        return self.rook_from is not None


def make_move(position: Position, move: Move) -> UndoRecord:
    """
    Apply ``move`` to ``position`` in place.

    Args:
        position: Position to mutate
        move: Move to apply, normally taken from generate_legal_moves

    Returns:
        UndoRecord for unmake_move

    Raises:
        IllegalMoveError: If the origin square is empty or the move is a
            diagonal pawn step that captures nothing
    """
    board = position.board
    piece = board[move.from_square]
    if piece is None:
        raise IllegalMoveError(f"No piece on origin square of {move.uci()}")

    is_pawn = piece.kind == PieceKind.PAWN
    captured = board[move.to_square]
    ep_capture_square = None

    if is_pawn and move.to_square == position.ep_square and captured is None:
        ep_capture_square = move.to_square - 8 if piece.color == WHITE else move.to_square + 8
        captured = board[ep_capture_square]

    if is_pawn and abs(square_file(move.from_square) - square_file(move.to_square)) == 1:
        enemy_capture = captured is not None and captured.color != piece.color
        if not enemy_capture:
            raise IllegalMoveError(f"Diagonal pawn move {move.uci()} captures nothing")

    undo = UndoRecord(
        captured=captured,
        halfmove_clock=position.halfmove_clock,
        ep_square=position.ep_square,
        castling=position.castling,
        fullmove_number=position.fullmove_number,
        moved_piece=piece,
        ep_capture_square=ep_capture_square,
    )

    position.ep_square = None

    if captured is not None or is_pawn:
        position.halfmove_clock = 0
    else:
        position.halfmove_clock += 1

    if ep_capture_square is not None:
        board[ep_capture_square] = None

    board[move.from_square] = None
    if move.promotion is not None:
        board[move.to_square] = Piece(piece.color, move.promotion)
    else:
        board[move.to_square] = piece

    if is_pawn and abs(move.to_square - move.from_square) == 16:
        position.ep_square = (move.from_square + move.to_square) // 2

    castling = position.castling
    if piece.kind == PieceKind.KING:
        castling &= ~(CastlingRights.WHITE if piece.color == WHITE else CastlingRights.BLACK)
    if piece.kind == PieceKind.ROOK and move.from_square in ROOK_HOME_RIGHTS:
        if _home_color(move.from_square) == piece.color:
            castling &= ~ROOK_HOME_RIGHTS[move.from_square]
    if (
        captured is not None
        and captured.kind == PieceKind.ROOK
        and move.to_square in ROOK_HOME_RIGHTS
        and _home_color(move.to_square) == captured.color
    ):
        castling &= ~ROOK_HOME_RIGHTS[move.to_square]
    position.castling = castling

    if piece.kind == PieceKind.KING:
        rook_moves = CASTLE_ROOK_MOVES.get(move.from_square, {})
        if move.to_square in rook_moves and _home_color(move.from_square) == piece.color:
            rook_from, rook_to = rook_moves[move.to_square]
            undo.rook_from = rook_from
            undo.rook_to = rook_to
            undo.rook_piece = board[rook_from]
            board[rook_to] = board[rook_from]
            board[rook_from] = None

    if piece.color == BLACK:
        position.fullmove_number += 1
    position.turn = not position.turn
    return undo


def unmake_move(position: Position, move: Move, undo: UndoRecord) -> None:
    """Reverse ``make_move(position, move)`` using its UndoRecord."""
    board = position.board

    position.turn = not position.turn
    position.halfmove_clock = undo.halfmove_clock
    position.ep_square = undo.ep_square
    position.castling = undo.castling
    position.fullmove_number = undo.fullmove_number

    if undo.was_castle:
        board[undo.rook_from] = undo.rook_piece
        board[undo.rook_to] = None

    board[move.from_square] = undo.moved_piece
    board[move.to_square] = undo.captured

    if undo.was_en_passant:
        board[undo.ep_capture_square] = undo.captured
        board[move.to_square] = None


def _home_color(sq: int) -> bool:
    """Which side's back rank ``sq`` is on (only used for rank 1 / rank 8)."""
    return square_rank(sq) == 0
