"""
Flat Parameter View of Weights

The trainer works on a flat float vector:

    x[0:6]     material (P, N, B, R, Q, K)
    x[6:70]    pawn square table
    x[70:134]  knight square table

``unflatten`` rounds every value to an integer and clamps it into a sane
range, so any vector the optimizer produces maps to a playable weight set.
"""

import numpy as np

from mailbox_chess.evaluation.weights import Weights

NUM_PARAMS = 6 + 64 + 64

# (low, high) per material entry; the king is pinned to 0
MATERIAL_BOUNDS = np.array([
    (60.0, 200.0),
    (200.0, 500.0),
    (200.0, 500.0),
    (300.0, 800.0),
    (600.0, 1500.0),
    (0.0, 0.0),
])
PAWN_TABLE_BOUNDS = (-80.0, 120.0)
KNIGHT_TABLE_BOUNDS = (-120.0, 120.0)


def flatten(weights: Weights) -> np.ndarray:
    """Concatenate the weights into one float64 vector of NUM_PARAMS values."""
    return np.concatenate([weights.material, weights.pst_pawn, weights.pst_knight]).astype(np.float64)


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Element-wise rounding with halves away from zero."""
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def unflatten(vector: np.ndarray) -> Weights:
    """
    Turn a parameter vector back into (rounded, clamped) Weights.

    Raises:
        ValueError: If the vector does not have NUM_PARAMS values
    """
    x = np.asarray(vector, dtype=np.float64)
    if x.shape != (NUM_PARAMS,):
        raise ValueError(f"Parameter vector must have {NUM_PARAMS} values, got shape {x.shape}")

    x = round_half_away(x)
    material = np.clip(x[:6], MATERIAL_BOUNDS[:, 0], MATERIAL_BOUNDS[:, 1])
    pst_pawn = np.clip(x[6:70], *PAWN_TABLE_BOUNDS)
    pst_knight = np.clip(x[70:134], *KNIGHT_TABLE_BOUNDS)
    return Weights(material, pst_pawn, pst_knight)
