"""
Board Module

The rules engine: a 64-square mailbox position, attack queries, move
generation and reversible move application.

Key Components:
    - Position: mutable game state with FEN import/export and attack queries
    - Move / parse_uci: move value type and UCI move text
    - generate_pseudo_legal / generate_legal_moves: move generator
    - make_move / unmake_move: the only board mutation, exactly reversible

Data Flow:
    FEN → Position → generate_legal_moves() → make_move() → ... → unmake_move()
"""

from mailbox_chess.board.move import Move, parse_uci
from mailbox_chess.board.movegen import generate_legal_moves, generate_pseudo_legal
from mailbox_chess.board.mutator import IllegalMoveError, UndoRecord, make_move, unmake_move
from mailbox_chess.board.pieces import (
    BLACK,
    WHITE,
    CastlingRights,
    Piece,
    PieceKind,
    parse_square,
    square_name,
)
from mailbox_chess.board.position import STARTING_FEN, Position

__all__ = [
    'BLACK',
    'WHITE',
    'CastlingRights',
    'IllegalMoveError',
    'Move',
    'Piece',
    'PieceKind',
    'Position',
    'STARTING_FEN',
    'UndoRecord',
    'generate_legal_moves',
    'generate_pseudo_legal',
    'make_move',
    'parse_square',
    'parse_uci',
    'square_name',
    'unmake_move',
]
