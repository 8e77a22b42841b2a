"""
Evaluation Weights

The tunable parameter set of the evaluator:

    material    6 values   P, N, B, R, Q, K (centipawns)
    pst_pawn   64 values   pawn bonus per square (a1 = 0, White's view)
    pst_knight 64 values   knight bonus per square

Weight File Format (text):
    line 1: 6 material values
    line 2: 64 pawn table values
    line 3: 64 knight table values
Values are whitespace separated. Blank lines are skipped; each remaining
line must hold exactly its own count.

Weights are loaded once per engine, read-only during search, and replaced
wholesale by the trainer between iterations.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL = (100.0, 320.0, 330.0, 500.0, 900.0, 0.0)

# (name, value count) per line of a weight file
WEIGHT_LINES = (("material", 6), ("pst_pawn", 64), ("pst_knight", 64))

#fmt: off
# Simplified Evaluation Function tables (row 0 = rank 8, row 7 = rank 1)
# https://www.chessprogramming.org/Simplified_Evaluation_Function
SIMPLIFIED_PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8
    [ 50,  50,  50,  50,  50,  50,  50,  50],  # Rank 7
    [ 10,  10,  20,  30,  30,  20,  10,  10],  # Rank 6
    [  5,   5,  10,  25,  25,  10,   5,   5],  # Rank 5
    [  0,   0,   0,  20,  20,   0,   0,   0],  # Rank 4
    [  5,  -5, -10,   0,   0, -10,  -5,   5],  # Rank 3
    [  5,  10,  10, -20, -20,  10,  10,   5],  # Rank 2
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
], dtype=np.float64)

# "Knights on the rim are dim"
SIMPLIFIED_KNIGHT_TABLE = np.array([
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20,   0,   0,   0,   0, -20, -40],
    [-30,   0,  10,  15,  15,  10,   0, -30],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-30,   0,  15,  20,  20,  15,   0, -30],
    [-30,   5,  10,  15,  15,  10,   5, -30],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
], dtype=np.float64)
#fmt: on


def table_to_squares(table: np.ndarray) -> np.ndarray:
    """Convert an 8x8 table (row 0 = rank 8) to 64 entries indexed a1 = 0."""
    return np.flipud(table).reshape(64).copy()


@dataclass
class Weights:
    """
    Evaluation parameter vector.

    Attributes:
        material: Piece values, shape (6,), indexed by PieceKind - 1
        pst_pawn: Pawn square bonus, shape (64,)
        pst_knight: Knight square bonus, shape (64,)
    """

    material: np.ndarray = field(default_factory=lambda: np.array(DEFAULT_MATERIAL))
    pst_pawn: np.ndarray = field(default_factory=lambda: np.zeros(64))
    pst_knight: np.ndarray = field(default_factory=lambda: np.zeros(64))

    def __post_init__(self):
        """Coerce to float arrays and validate shapes."""
        self.material = np.asarray(self.material, dtype=np.float64)
        self.pst_pawn = np.asarray(self.pst_pawn, dtype=np.float64)
        self.pst_knight = np.asarray(self.pst_knight, dtype=np.float64)

        if self.material.shape != (6,):
            raise ValueError(f"material must have 6 values, got shape {self.material.shape}")
        if self.pst_pawn.shape != (64,):
            raise ValueError(f"pst_pawn must have 64 values, got shape {self.pst_pawn.shape}")
        if self.pst_knight.shape != (64,):
            raise ValueError(f"pst_knight must have 64 values, got shape {self.pst_knight.shape}")

    @classmethod
    def default(cls) -> "Weights":
        """Standard material values, empty square tables."""
        return cls()

    @classmethod
    def simplified(cls) -> "Weights":
        """Standard material values with the Simplified Evaluation pawn/knight tables."""
        return cls(
            pst_pawn=table_to_squares(SIMPLIFIED_PAWN_TABLE),
            pst_knight=table_to_squares(SIMPLIFIED_KNIGHT_TABLE),
        )

    def copy(self) -> "Weights":
        return Weights(self.material.copy(), self.pst_pawn.copy(), self.pst_knight.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Weights):
            return NotImplemented
        return (
            np.array_equal(self.material, other.material)
            and np.array_equal(self.pst_pawn, other.pst_pawn)
            and np.array_equal(self.pst_knight, other.pst_knight)
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Weights":
        """
        Load weights from a weight file.

        Args:
            path: Weight file path

        Returns:
            Loaded Weights

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not three lines of 6, 64 and 64 numbers
        """
        lines = [line for line in Path(path).read_text().splitlines() if line.strip()]
        if len(lines) != len(WEIGHT_LINES):
            raise ValueError(
                f"Weight file {path} has {len(lines)} lines, expected {len(WEIGHT_LINES)}"
            )

        rows = []
        for number, (line, (name, expected)) in enumerate(zip(lines, WEIGHT_LINES), start=1):
            try:
                values = np.array(line.split(), dtype=np.float64)
            except ValueError:
                raise ValueError(
                    f"Weight file {path} line {number} contains non-numeric values"
                ) from None
            if values.size != expected:
                raise ValueError(
                    f"Weight file {path} line {number} ({name}) has {values.size} values, "
                    f"expected {expected}"
                )
            rows.append(values)

        return cls(*rows)

    @classmethod
    def load_or_default(cls, path: Union[str, Path], fallback: "Weights" = None) -> "Weights":
        """
        Load weights, keeping ``fallback`` (default weights) if the file is missing.

        A malformed file still raises ValueError.
        """
        try:
            weights = cls.load(path)
        except FileNotFoundError:
            logger.warning(f"Weight file {path} not found, using default weights")
            return fallback.copy() if fallback is not None else cls.default()
        logger.info(f"Loaded weights from {path}")
        return weights

    def save(self, path: Union[str, Path]) -> None:
        """Write the three-line weight file."""
        lines = [
            " ".join(_format_value(v) for v in self.material),
            " ".join(_format_value(v) for v in self.pst_pawn),
            " ".join(_format_value(v) for v in self.pst_knight),
        ]
        Path(path).write_text("\n".join(lines) + "\n")
        logger.debug(f"Saved weights to {path}")


def _format_value(value: float) -> str:
    """Integral values without a decimal point, others in shortest repr."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
