"""
Move Generation

Two stages:

1. ``generate_pseudo_legal`` follows each piece's movement rule and may
   leave the mover's king attacked.
2. ``generate_legal_moves`` plays every pseudo-legal move on a scratch copy
   and keeps it only if the mover is not in check afterwards. This handles
   pins and discovered checks without a separate pin pass.

Castling is the exception: the king's square, transit squares and
destination are checked for attacks at generation time, as the rules
require.

Moves come out in board-scan order (a1..h8), per piece in offset order.
"""

from typing import List

from mailbox_chess.board.move import Move
from mailbox_chess.board.mutator import CASTLE_ROOK_MOVES, make_move, unmake_move
from mailbox_chess.board.pieces import (
    BLACK,
    PROMOTION_KINDS,
    WHITE,
    CastlingRights,
    Piece,
    PieceKind,
    square_file,
    square_rank,
)
from mailbox_chess.board.position import (
    DIAGONAL_STEPS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    ORTHOGONAL_STEPS,
    Position,
    leaper_targets,
    ray,
)

SLIDER_STEPS = {
    PieceKind.BISHOP: DIAGONAL_STEPS,
    PieceKind.ROOK: ORTHOGONAL_STEPS,
    PieceKind.QUEEN: ORTHOGONAL_STEPS + DIAGONAL_STEPS,
}

# (color, right, king home, king destination, squares that must be empty,
#  squares the king passes or lands on)
CASTLING_PATHS = (
    (WHITE, CastlingRights.WHITE_KINGSIDE, 4, 6, (5, 6), (5, 6)),
    (WHITE, CastlingRights.WHITE_QUEENSIDE, 4, 2, (3, 2, 1), (3, 2)),
    (BLACK, CastlingRights.BLACK_KINGSIDE, 60, 62, (61, 62), (61, 62)),
    (BLACK, CastlingRights.BLACK_QUEENSIDE, 60, 58, (59, 58, 57), (59, 58)),
)


def generate_pseudo_legal(position: Position) -> List[Move]:
    """
    Generate moves that obey piece movement rules.

    Args:
        position: Position to generate for (not modified)

    Returns:
        List of pseudo-legal moves for the side to move
    """
    moves: List[Move] = []
    board = position.board
    color = position.turn

    for sq in range(64):
        piece = board[sq]
        if piece is None or piece.color != color:
            continue

        if piece.kind == PieceKind.PAWN:
            _pawn_moves(position, sq, piece, moves)
        elif piece.kind == PieceKind.KNIGHT:
            _leaper_moves(board, sq, piece, KNIGHT_OFFSETS, 2, moves)
        elif piece.kind == PieceKind.KING:
            _leaper_moves(board, sq, piece, KING_OFFSETS, 1, moves)
            _castling_moves(position, sq, piece, moves)
        else:
            _slider_moves(board, sq, piece, SLIDER_STEPS[piece.kind], moves)

    return moves


def generate_legal_moves(position: Position) -> List[Move]:
    """
    Generate fully legal moves.

    Each pseudo-legal move is made and unmade on one scratch copy of the
    position; ``position`` itself is not modified.
    """
    scratch = position.copy()
    mover = position.turn
    legal = []
    for move in generate_pseudo_legal(position):
        undo = make_move(scratch, move)
        if not scratch.is_in_check(mover):
            legal.append(move)
        unmake_move(scratch, move, undo)
    return legal


def _pawn_moves(position: Position, sq: int, pawn: Piece, moves: List[Move]) -> None:
    board = position.board
    direction = 8 if pawn.color == WHITE else -8
    home_rank = 1 if pawn.color == WHITE else 6
    last_rank = 7 if pawn.color == WHITE else 0
    file = square_file(sq)

    one = sq + direction
    if not 0 <= one < 64:
        return
    promotes = square_rank(one) == last_rank

    if board[one] is None:
        _add_pawn_move(sq, one, None, promotes, moves)
        two = one + direction
        if square_rank(sq) == home_rank and board[two] is None:
            moves.append(Move(sq, two))

    for file_delta in (-1, 1):
        if not 0 <= file + file_delta < 8:
            continue
        target = one + file_delta
        victim = board[target]
        if victim is not None and victim.color != pawn.color:
            _add_pawn_move(sq, target, victim, promotes, moves)
        elif victim is None and target == position.ep_square:
            # Only a real en passant if the passed-over pawn is behind the target
            passed = board[target - direction]
            if passed == Piece(not pawn.color, PieceKind.PAWN):
                moves.append(Move(sq, target))


def _add_pawn_move(from_sq, to_sq, victim, promotes, moves: List[Move]) -> None:
    if promotes:
        for kind in PROMOTION_KINDS:
            moves.append(Move(from_sq, to_sq, kind, victim))
    else:
        moves.append(Move(from_sq, to_sq, None, victim))


def _leaper_moves(board, sq: int, piece: Piece, offsets, distance: int, moves: List[Move]) -> None:
    for target in leaper_targets(sq, offsets, distance):
        occupant = board[target]
        if occupant is None or occupant.color != piece.color:
            moves.append(Move(sq, target, None, occupant))


def _slider_moves(board, sq: int, piece: Piece, steps, moves: List[Move]) -> None:
    for step in steps:
        for target in ray(sq, step):
            occupant = board[target]
            if occupant is None:
                moves.append(Move(sq, target))
                continue
            if occupant.color != piece.color:
                moves.append(Move(sq, target, None, occupant))
            break


def _castling_moves(position: Position, sq: int, king: Piece, moves: List[Move]) -> None:
    board = position.board
    enemy = not king.color
    for color, right, home, destination, empty, transit in CASTLING_PATHS:
        if color != king.color or sq != home or not position.castling & right:
            continue
        rook_from, _ = CASTLE_ROOK_MOVES[home][destination]
        if board[rook_from] != Piece(king.color, PieceKind.ROOK):
            continue
        if any(board[s] is not None for s in empty):
            continue
        if position.is_square_attacked(home, enemy):
            continue
        if any(position.is_square_attacked(s, enemy) for s in transit):
            continue
        moves.append(Move(home, destination))
