"""
Evaluation Module

This module provides position evaluation functions for the chess engine.
The key design principle is that evaluators are SWAPPABLE - the search
algorithm should work with any evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - WeightedEvaluator: Material + pawn/knight square tables from Weights
    - Weights: Tunable parameter vector and its text file format

Data Flow:
    Position → evaluator.evaluate() → int (centipawns)
                                      Positive = White advantage
                                      Negative = Black advantage
"""

from mailbox_chess.evaluation.base import Evaluator
from mailbox_chess.evaluation.classical import WeightedEvaluator
from mailbox_chess.evaluation.weights import Weights

__all__ = ['Evaluator', 'WeightedEvaluator', 'Weights']
