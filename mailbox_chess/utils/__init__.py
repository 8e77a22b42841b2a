"""
Utilities Module

This module provides move generator verification tools.

Key Components:
    - perft: Leaf count of the legal move tree
    - divide: Perft split by root move, to locate a wrong subtree
    - run_perft_suite: Published counts for six reference positions

Testing Methodology:
    Perft counts are exact. A single missing or extra move anywhere in the
    tree changes the count, so matching counts at depth 2-3 on the reference
    positions catch nearly every rules bug (castling through check, en
    passant pins, promotions).
"""

from mailbox_chess.utils.testing import (
    PERFT_POSITIONS,
    divide,
    perft,
    run_perft_suite,
)

__all__ = [
    'PERFT_POSITIONS',
    'divide',
    'perft',
    'run_perft_suite',
]
