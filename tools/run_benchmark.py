#!/usr/bin/env python3
"""
Trained vs Baseline Benchmark Runner

Plays the trained weights against the default weights at one or more
depths and reports W/D/L and score for the trained side.

Usage:
    python tools/run_benchmark.py [--games 200] [--depths 2,4] [--weights weights.txt]
"""

import sys
import argparse
import logging
import random
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mailbox_chess.evaluation import Weights
from mailbox_chess.training.match import run_bench


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_benchmark(weights_path: str, games: int, depths: list[int], seed: int):
    """
    Run the trained-vs-baseline match at multiple depths.

    Args:
        weights_path: Trained weight file
        games: Games per depth
        depths: List of depths to test
        seed: Random seed (0 for time based)
    """
    trained = Weights.load(weights_path)
    baseline = Weights.default()
    rng = random.Random(seed if seed > 0 else time.time_ns())

    print("=" * 80)
    print("BENCHMARK - MailboxChess trained vs baseline weights")
    print("=" * 80)
    print(f"Trained: {weights_path}  material={trained.material.tolist()}")
    print(f"Baseline: default     material={baseline.material.tolist()}")
    print(f"Games per depth: {games}  Depths: {depths}")
    print("=" * 80)

    all_results = []

    for depth in depths:
        print(f"\n{'=' * 80}")
        print(f"DEPTH {depth}")
        print("=" * 80)

        result = run_bench(trained, baseline, games, depth, rng)
        all_results.append((depth, result))

        print(f"  W/D/L : {result.wins}/{result.draws}/{result.losses}")
        print(f"  Score : {result.score:.4f}")
        print(f"  Time  : {format_time(result.elapsed)}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Depth':<8} {'W/D/L':<16} {'Score':<8} {'Time':<12}")
    print("-" * 80)

    for depth, r in all_results:
        wdl = f"{r.wins}/{r.draws}/{r.losses}"
        print(f"{depth:<8} {wdl:<16} {r.score:<8.4f} {format_time(r.elapsed):<12}")

    print("=" * 80)

    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Play trained weights against the baseline weights"
    )
    parser.add_argument(
        "--weights",
        type=str,
        default="weights.txt",
        help="Trained weight file (default: weights.txt)"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=200,
        help="Games per depth (default: 200)"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="4",
        help="Comma-separated list of depths to test (default: 4)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0 = time based)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress every 20 games"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
    except ValueError:
        print("Error: depths must be comma-separated integers")
        sys.exit(1)

    try:
        run_benchmark(args.weights, args.games, depths, args.seed)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n\nError running benchmark: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
