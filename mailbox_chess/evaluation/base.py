"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between
evaluators without modifying the search algorithm.

Key Principles:
    1. Evaluators do not modify the position
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Terminal positions are not scored here; the search decides what a
       position without legal moves is worth

Convention:
    - Material values in centipawns (1/100th of a pawn, pawn = 100, queen = 900)
    - Return 0 for perfectly equal positions
    - Return values are integers from White's perspective (negate for Black)
"""

import math
from abc import ABC, abstractmethod

from mailbox_chess.board import WHITE, Position


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(position): Returns position evaluation in centipawns
        evaluate_relative(position): Same, from the side to move's view
    """

    @abstractmethod
    def evaluate(self, position: Position) -> int:
        """
        Evaluate a position from White's perspective.

        Args:
            position: Position to evaluate

        Returns:
            int: Evaluation in centipawns

        Raises:
            NotImplementedError: If subclass doesn't implement this method
        """
        pass

    def evaluate_relative(self, position: Position) -> int:
        """Evaluation from the side to move's perspective (negamax leaf value)."""
        score = self.evaluate(position)
        return score if position.turn == WHITE else -score

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (keeps -x == -(x))."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
