"""
Negamax Alpha-Beta Search

Fixed-depth alpha-beta in negamax form: every node maximizes the negated
score of its children, so there is a single code path for both sides.

Key Concepts:
    - Negamax: score(node) = max(-score(child)), leaf = eval for side to move
    - Alpha-Beta: stop searching a node once a child proves it >= beta
    - Move Ordering: captures first (stable), so cutoffs come early
    - Exploration: at the root, optionally play a uniformly random legal
      move with a given probability (self-play diversity)

No transposition table, iterative deepening, quiescence or time control:
a call always finishes its full depth.

A node without legal moves scores DRAW_SCORE (0) whether it is checkmate
or stalemate.

Randomness is always passed in explicitly (``rng``), never taken from
global state, so a fixed seed reproduces a search exactly.

References:
    - Negamax: https://www.chessprogramming.org/Negamax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from mailbox_chess.board import (
    Move,
    Position,
    generate_legal_moves,
    make_move,
    unmake_move,
)
from mailbox_chess.evaluation.base import Evaluator

INFINITY = 1_000_000_000
DRAW_SCORE = 0


@dataclass
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move: Chosen move (Move.null() if there is no legal move)
        score: Score of the move for the side to move, None if the move was
            picked by exploration or no move exists
        nodes: Number of nodes visited
        explored: True if the move was picked at random
    """

    move: Move
    score: Optional[int]
    nodes: int
    explored: bool = False


def order_moves(moves: List[Move]) -> List[Move]:
    """
    Order moves captures first, keeping generation order otherwise.

    Uses the generator's capture annotation, so en passant captures
    (annotated with nothing on the destination) sort with quiet moves.
    """
    return sorted(moves, key=lambda move: move.captured is None)


def alphabeta(
    position: Position,
    depth: int,
    alpha: int,
    beta: int,
    evaluator: Evaluator,
    nodes: Optional[List[int]] = None,
) -> int:
    """
    Negamax alpha-beta search.

    The position is mutated during the search with make/unmake pairs and is
    back to its original state on return.

    Args:
        position: Position to search (side to move is the maximizer)
        depth: Remaining depth in plies
        alpha: Lower bound
        beta: Upper bound
        evaluator: Position evaluation function
        nodes: Optional mutable list [count] to track visited nodes

    Returns:
        int: Score for the side to move, clipped to [alpha, beta]
    """
    if nodes is not None:
        nodes[0] += 1

    if depth <= 0:
        return evaluator.evaluate_relative(position)

    moves = generate_legal_moves(position)
    if not moves:
        return DRAW_SCORE

    for move in order_moves(moves):
        undo = make_move(position, move)
        score = -alphabeta(position, depth - 1, -beta, -alpha, evaluator, nodes)
        unmake_move(position, move, undo)

        if score >= beta:
            return beta
        if score > alpha:
            alpha = score

    return alpha


def search(
    position: Position,
    depth: int,
    evaluator: Evaluator,
    exploration_rate: float = 0.0,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Find the best move in the current position.

    Args:
        position: Current position (not modified; the search works on a copy)
        depth: Search depth (higher = stronger but slower)
        evaluator: Position evaluation function
        exploration_rate: Probability of returning a random legal move
        rng: Random source; exploration is off without one

    Returns:
        SearchResult with the chosen move. Ties go to the first move in
        generation order.
    """
    root = position.copy()
    moves = generate_legal_moves(root)
    if not moves:
        return SearchResult(Move.null(), None, 0)

    if rng is not None and exploration_rate > 0.0:
        if rng.random() < exploration_rate:
            return SearchResult(moves[rng.randrange(len(moves))], None, 0, explored=True)

    nodes = [0]
    best_move = moves[0]
    best_score = -INFINITY

    for move in moves:
        undo = make_move(root, move)
        score = -alphabeta(root, depth - 1, -INFINITY, INFINITY, evaluator, nodes)
        unmake_move(root, move, undo)

        if score > best_score:
            best_score = score
            best_move = move

    return SearchResult(best_move, best_score, nodes[0])


def best_move(
    position: Position,
    depth: int,
    evaluator: Evaluator,
    exploration_rate: float = 0.0,
    rng: Optional[random.Random] = None,
) -> Move:
    """Best move only; Move.null() if there is no legal move."""
    return search(position, depth, evaluator, exploration_rate, rng).move
