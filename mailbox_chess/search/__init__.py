"""
Search Module

This module implements the fixed-depth negamax alpha-beta search and the
Engine facade used by the UCI adapter and the trainer.

Key Components:
    - alphabeta: Core negamax search with alpha-beta pruning
    - search / best_move: Root-level search with optional exploration
    - order_moves: Captures-first move ordering
    - Engine: Weights + evaluator + search in one object
"""

from mailbox_chess.search.alphabeta import (
    DRAW_SCORE,
    INFINITY,
    SearchResult,
    alphabeta,
    best_move,
    order_moves,
    search,
)
from mailbox_chess.search.engine import Engine

__all__ = [
    'DRAW_SCORE',
    'INFINITY',
    'Engine',
    'SearchResult',
    'alphabeta',
    'best_move',
    'order_moves',
    'search',
]
