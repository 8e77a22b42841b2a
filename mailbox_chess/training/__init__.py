"""
Weight tuning module.

This module provides the self-play SPSA tuning infrastructure:
- Self-play games and matches between weight sets
- Benchmark matches (trained vs baseline weights)
- Binary checkpoints for resumable runs
- The SPSA training loop
"""

from mailbox_chess.training.checkpoint import load_checkpoint, save_checkpoint
from mailbox_chess.training.config import SPSAConfig
from mailbox_chess.training.match import (
    BENCH_MATCH,
    TRAINING_MATCH,
    BenchResult,
    MatchSettings,
    match_score,
    play_game,
    run_bench,
)
from mailbox_chess.training.trainer import SPSATrainer, TrainingResult, export_checkpoint

__all__ = [
    "BENCH_MATCH",
    "TRAINING_MATCH",
    "BenchResult",
    "MatchSettings",
    "SPSAConfig",
    "SPSATrainer",
    "TrainingResult",
    "export_checkpoint",
    "load_checkpoint",
    "match_score",
    "play_game",
    "run_bench",
    "save_checkpoint",
]
