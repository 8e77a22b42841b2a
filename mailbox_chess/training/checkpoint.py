"""
Trainer Checkpoints

Binary layout (little endian):
    uint32   n
    float64  x[0] .. x[n-1]

Written every few iterations so a long optimization run can resume after
an interruption.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

COUNT_DTYPE = np.dtype("<u4")
VALUE_DTYPE = np.dtype("<f8")


def save_checkpoint(path: Union[str, Path], vector: np.ndarray) -> None:
    """Write the parameter vector to ``path``."""
    values = np.asarray(vector, dtype=VALUE_DTYPE).ravel()
    with open(path, "wb") as f:
        f.write(np.array([values.size], dtype=COUNT_DTYPE).tobytes())
        f.write(values.tobytes())
    logger.debug(f"Checkpoint saved: {path} ({values.size} values)")


def load_checkpoint(path: Union[str, Path]) -> Optional[np.ndarray]:
    """
    Read a parameter vector.

    Returns:
        The vector, or None if the file does not exist

    Raises:
        ValueError: If the file is empty, has a zero count or is truncated
    """
    path = Path(path)
    if not path.exists():
        return None

    data = path.read_bytes()
    if len(data) < COUNT_DTYPE.itemsize:
        raise ValueError(f"Checkpoint {path} is too short")

    count = int(np.frombuffer(data, dtype=COUNT_DTYPE, count=1)[0])
    if count == 0:
        raise ValueError(f"Checkpoint {path} holds no values")

    expected = COUNT_DTYPE.itemsize + count * VALUE_DTYPE.itemsize
    if len(data) < expected:
        raise ValueError(f"Checkpoint {path} is truncated: {len(data)} of {expected} bytes")

    return np.frombuffer(data, dtype=VALUE_DTYPE, count=count, offset=COUNT_DTYPE.itemsize).copy()
