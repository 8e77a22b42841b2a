"""
SPSA training of evaluation weights.

Provides SPSATrainer, which tunes the flat weight vector from noisy
self-play results with simultaneous perturbation stochastic approximation.

Iteration k:
    a_k = a / (A + k + 1)^alpha
    c_k = c / (k + 1)^gamma
    delta = random ±1 per parameter
    s+ = score(x + c_k delta vs x - c_k delta)
    s- = score(x - c_k delta vs x + c_k delta)
    x += a_k * (s+ - s-) / (2 c_k) * delta

After each step the current weights play the base weights. A result above
the best so far is re-checked with a larger match before it is saved.
"""

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from tqdm import tqdm

from mailbox_chess.evaluation import Weights
from mailbox_chess.evaluation.params import flatten, unflatten
from mailbox_chess.training.checkpoint import load_checkpoint, save_checkpoint
from mailbox_chess.training.config import SPSAConfig
from mailbox_chess.training.match import match_score

logger = logging.getLogger(__name__)


@dataclass
class TrainingResult:
    """Summary of a finished SPSA run."""

    iterations: int
    best_score: float
    vector: np.ndarray
    best_vector: np.ndarray

    @property
    def best_weights(self) -> Weights:
        return unflatten(self.best_vector)


class SPSATrainer:
    """SPSA tuning loop.

    Handles:
        - Resuming from a checkpoint
        - Paired perturbation matches and the gradient step
        - Periodic logging and checkpointing
        - Verified saving of new best weights
    """

    def __init__(self, config: SPSAConfig):
        """Initialize trainer.

        Args:
            config: Training configuration
        """
        self.config = config
        seed = config.seed if config.seed is not None else time.time_ns()
        self.rng = random.Random(seed)

        self.base = Weights.load_or_default(config.weights_path)
        self.x = flatten(self.base)
        self._resume()

        self.best_x = self.x.copy()
        self.best_score = 0.5

        logger.info(f"Trainer initialized (seed={seed})")
        logger.info(repr(config))

    def _resume(self) -> None:
        """Continue from the checkpoint if it matches the parameter count."""
        path = self.config.checkpoint_path
        try:
            saved = load_checkpoint(path)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable checkpoint: {e}")
            return

        if saved is None:
            return
        if saved.size != self.x.size:
            logger.warning(
                f"Ignoring checkpoint {path}: {saved.size} values, expected {self.x.size}"
            )
            return

        self.x = saved
        logger.info(f"[Resume] Loaded {path}")

    def gains(self, k: int):
        """Step size a_k and perturbation size c_k for iteration k (0-based)."""
        cfg = self.config
        ak = cfg.a / (cfg.big_a + k + 1.0) ** cfg.alpha
        ck = cfg.c / (k + 1.0) ** cfg.gamma
        return ak, ck

    def step(self, k: int) -> dict:
        """Run SPSA iteration k and update ``self.x``.

        Returns:
            Dictionary with the match scores and gains of this iteration
        """
        cfg = self.config
        ak, ck = self.gains(k)

        delta = np.array([self.rng.choice((-1.0, 1.0)) for _ in range(self.x.size)])
        w_plus = unflatten(self.x + ck * delta)
        w_minus = unflatten(self.x - ck * delta)

        # Both orders, to cancel first-move noise
        s_plus = match_score(w_plus, w_minus, cfg.games_per_eval, cfg.depth, self.rng, cfg.match)
        s_minus = match_score(w_minus, w_plus, cfg.games_per_eval, cfg.depth, self.rng, cfg.match)
        y_diff = s_plus - s_minus

        ghat = (y_diff / (2.0 * ck)) * delta
        self.x = self.x + ak * ghat

        current = unflatten(self.x)
        score_vs_base = match_score(current, self.base, cfg.games_per_eval, cfg.depth, self.rng, cfg.match)

        return {
            "s_plus": s_plus,
            "s_minus": s_minus,
            "y_diff": y_diff,
            "score_vs_base": score_vs_base,
            "ak": ak,
            "ck": ck,
        }

    def maybe_save_best(self, score_vs_base: float) -> bool:
        """Verify and save the current weights if they beat the best so far.

        Returns:
            True if new best weights were written
        """
        if score_vs_base <= self.best_score:
            return False

        cfg = self.config
        current = unflatten(self.x)
        verify = match_score(current, self.base, cfg.verify_games, cfg.depth, self.rng, cfg.match)
        if verify <= self.best_score:
            logger.debug(f"Candidate rejected on verification ({verify:.3f} <= {self.best_score:.3f})")
            return False

        self.best_score = verify
        self.best_x = self.x.copy()
        current.save(cfg.weights_path)

        material = ",".join(f"{v:g}" for v in current.material[:5])
        logger.info(f"  >> VERIFIED new best saved (bestScore={self.best_score:.3f})")
        logger.info(
            f"     material=[{material}] "
            f"pstPawn(min,max)=({current.pst_pawn.min():g},{current.pst_pawn.max():g}) "
            f"pstKnight(min,max)=({current.pst_knight.min():g},{current.pst_knight.max():g})"
        )
        return True

    def train(self) -> TrainingResult:
        """Run all iterations.

        Returns:
            TrainingResult with the final and best vectors
        """
        cfg = self.config
        logger.info("SPSA training start")

        pbar = tqdm(range(cfg.iterations), desc="SPSA", disable=not cfg.show_progress)
        for k in pbar:
            stats = self.step(k)
            pbar.set_postfix(vs_base=f"{stats['score_vs_base']:.3f}", best=f"{self.best_score:.3f}")

            if (k + 1) % cfg.print_every == 0 or k == 0:
                logger.info(
                    f"iter {k + 1} sPlus={stats['s_plus']:.3f} sMinus={stats['s_minus']:.3f} "
                    f"yDiff={stats['y_diff']:.3f} scoreVsBase={stats['score_vs_base']:.3f} "
                    f"ak={stats['ak']:.4f} ck={stats['ck']:.4f} x0={self.x[0]:.3f}"
                )

            if (k + 1) % cfg.checkpoint_every == 0:
                save_checkpoint(cfg.checkpoint_path, self.x)

            self.maybe_save_best(stats["score_vs_base"])

        save_checkpoint(cfg.checkpoint_path, self.x)
        logger.info(f"Training done. Best scoreVsBase={self.best_score:.3f}")

        return TrainingResult(cfg.iterations, self.best_score, self.x.copy(), self.best_x.copy())


def export_checkpoint(checkpoint_path: Union[str, Path], out_path: Union[str, Path]) -> Weights:
    """Write the weights stored in a checkpoint as a weight file.

    Raises:
        FileNotFoundError: If the checkpoint does not exist
        ValueError: If the checkpoint is unreadable or has the wrong size
    """
    vector = load_checkpoint(checkpoint_path)
    if vector is None:
        raise FileNotFoundError(f"Cannot load {checkpoint_path}")

    weights = unflatten(vector)
    weights.save(out_path)
    logger.info(f"Exported {out_path} from {checkpoint_path}")
    return weights
