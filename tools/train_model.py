#!/usr/bin/env python3
"""
Tune evaluation weights with SPSA self-play.

Usage:
    python tools/train_model.py \\
        --iterations 12000 \\
        --games 25 \\
        --depth 2 \\
        --verify-games 200
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mailbox_chess.training.config import SPSAConfig
from mailbox_chess.training.trainer import SPSATrainer


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    """Main training script."""
    parser = argparse.ArgumentParser(
        description="Tune evaluation weights with SPSA self-play",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Run length
    parser.add_argument(
        "--iterations",
        type=int,
        default=20000,
        help="Number of SPSA iterations",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=200,
        help="Games per match",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Search depth in self-play games",
    )
    parser.add_argument(
        "--verify-games",
        type=int,
        default=400,
        help="Games used to confirm a new best before saving",
    )

    # SPSA gains
    parser.add_argument("--a", type=float, default=8.0, help="Step size numerator")
    parser.add_argument("--c", type=float, default=10.0, help="Perturbation size numerator")
    parser.add_argument("--big-a", type=float, default=200.0, help="Stability constant A")
    parser.add_argument("--alpha", type=float, default=0.602, help="Step size decay exponent")
    parser.add_argument("--gamma", type=float, default=0.101, help="Perturbation decay exponent")

    # Files
    parser.add_argument(
        "--weights",
        type=str,
        default="weights.txt",
        help="Starting weights; new best weights are written here",
    )
    parser.add_argument(
        "--checkpoint",
        type=str,
        default="checkpoint.bin",
        help="Checkpoint file used for resuming",
    )

    # Cadence
    parser.add_argument(
        "--print-every",
        type=int,
        default=20,
        help="Log progress every N iterations",
    )
    parser.add_argument(
        "--checkpoint-every",
        type=int,
        default=50,
        help="Save checkpoint every N iterations",
    )

    # Logging
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # Random seed
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for reproducibility (0 for time based)",
    )

    args = parser.parse_args()

    # Setup logging
    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = SPSAConfig(
            iterations=args.iterations,
            games_per_eval=args.games,
            depth=args.depth,
            verify_games=args.verify_games,
            a=args.a,
            c=args.c,
            big_a=args.big_a,
            alpha=args.alpha,
            gamma=args.gamma,
            print_every=args.print_every,
            checkpoint_every=args.checkpoint_every,
            weights_path=Path(args.weights),
            checkpoint_path=Path(args.checkpoint),
            seed=args.seed if args.seed > 0 else None,
            show_progress=not args.no_progress,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    trainer = SPSATrainer(config)

    # Train
    try:
        result = trainer.train()
    except KeyboardInterrupt:
        logger.warning("\n\nTraining interrupted by user")
        logger.info(f"Best scoreVsBase: {trainer.best_score:.3f}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"\n\nTraining failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    # Print final results
    logger.info("\n" + "=" * 60)
    logger.info("Training completed successfully!")
    logger.info(f"Best scoreVsBase: {result.best_score:.3f}")
    logger.info(f"Weights: {config.weights_path}  Checkpoint: {config.checkpoint_path}")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
