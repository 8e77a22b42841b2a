"""
Weighted Material + Square Table Evaluation

Score = sum over occupied squares of
    material[kind]
    + pst_pawn[sq]    (pawns only)
    + pst_knight[sq]  (knights only)
negated for Black pieces. Black pieces read the tables at ``63 - sq``.

Only pawns and knights get a positional bonus. All values come from the
Weights, so the trainer can tune them without touching this code.
"""

from mailbox_chess.board import BLACK, PieceKind, Position
from mailbox_chess.board.pieces import mirror_square
from mailbox_chess.evaluation.base import Evaluator, round_half_away
from mailbox_chess.evaluation.weights import Weights


class WeightedEvaluator(Evaluator):
    """
    Material and pawn/knight square tables, all driven by Weights.

    Attributes:
        weights: The parameter vector in use
    """

    def __init__(self, weights: Weights = None):
        """
        Args:
            weights: Evaluation weights (default: Weights.default())
        """
        self.weights = weights if weights is not None else Weights.default()
        self._refresh()

    def _refresh(self) -> None:
        # Plain lists index faster than numpy arrays one element at a time
        self._material = self.weights.material.tolist()
        self._pst_pawn = self.weights.pst_pawn.tolist()
        self._pst_knight = self.weights.pst_knight.tolist()

    def set_weights(self, weights: Weights) -> None:
        """Replace the whole weight set."""
        self.weights = weights
        self._refresh()

    def evaluate(self, position: Position) -> int:
        """
        Evaluate position using material + square tables.

        Args:
            position: Position to evaluate

        Returns:
            int: Evaluation in centipawns (White's perspective)
        """
        score = 0.0
        for sq, piece in enumerate(position.board):
            if piece is None:
                continue

            value = self._material[piece.kind - 1]
            table_sq = mirror_square(sq) if piece.color == BLACK else sq
            if piece.kind == PieceKind.PAWN:
                value += self._pst_pawn[table_sq]
            elif piece.kind == PieceKind.KNIGHT:
                value += self._pst_knight[table_sq]

            if piece.color == BLACK:
                score -= value
            else:
                score += value

        return round_half_away(score)

    def __repr__(self) -> str:
        material = ", ".join(f"{v:g}" for v in self._material)
        return f"WeightedEvaluator(material=[{material}])"
