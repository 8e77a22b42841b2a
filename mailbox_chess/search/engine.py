"""
Engine

Bundles a weight set with the evaluator and search. This is the whole
surface the trainer and benchmark need: evaluate, pick a move, and build an
engine from a flat parameter vector.
"""

import random
from typing import Optional

import numpy as np

from mailbox_chess.board import Move, Position
from mailbox_chess.evaluation import WeightedEvaluator, Weights
from mailbox_chess.evaluation.params import unflatten
from mailbox_chess.search.alphabeta import SearchResult, best_move, search


class Engine:
    """
    Evaluation weights plus fixed-depth search.

    Attributes:
        weights: Evaluation weights
        evaluator: WeightedEvaluator built from the weights
    """

    def __init__(self, weights: Weights = None):
        self.weights = weights if weights is not None else Weights.default()
        self.evaluator = WeightedEvaluator(self.weights)

    @classmethod
    def from_vector(cls, vector: np.ndarray) -> "Engine":
        """Build an engine from a flat 134-value parameter vector (clamped)."""
        return cls(unflatten(vector))

    def eval(self, position: Position) -> int:
        """White-relative evaluation in centipawns."""
        return self.evaluator.evaluate(position)

    def best_move(
        self,
        position: Position,
        depth: int,
        exploration_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ) -> Move:
        return best_move(position, depth, self.evaluator, exploration_rate, rng)

    def search(
        self,
        position: Position,
        depth: int,
        exploration_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ) -> SearchResult:
        return search(position, depth, self.evaluator, exploration_rate, rng)

    def __repr__(self) -> str:
        return f"Engine({self.evaluator!r})"
