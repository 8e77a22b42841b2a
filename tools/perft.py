#!/usr/bin/env python3
"""
Perft runner.

Usage:
    python tools/perft.py --suite [--max-depth 3]
    python tools/perft.py --fen "<FEN>" --depth 3 [--divide]
"""

import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mailbox_chess.board import STARTING_FEN, Position
from mailbox_chess.utils.testing import divide, perft, run_perft_suite


def main():
    parser = argparse.ArgumentParser(
        description="Count legal move tree leaves",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--suite", action="store_true", help="Run the reference position suite")
    parser.add_argument("--max-depth", type=int, default=2, help="Suite depth limit")
    parser.add_argument("--fen", type=str, default=STARTING_FEN, help="Position to count")
    parser.add_argument("--depth", type=int, default=3, help="Depth for --fen")
    parser.add_argument("--divide", action="store_true", help="Print counts per root move")
    args = parser.parse_args()

    if args.suite:
        result = run_perft_suite(max_depth=args.max_depth, verbose=True)
        sys.exit(0 if result['score'] == result['total'] else 1)

    try:
        position = Position.from_fen(args.fen)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    start_time = time.time()
    if args.divide:
        counts = divide(position, args.depth)
        for move_text in sorted(counts):
            print(f"{move_text}: {counts[move_text]}")
        nodes = sum(counts.values())
    else:
        nodes = perft(position, args.depth)
    elapsed = time.time() - start_time

    print(f"\nNodes: {nodes:,}")
    print(f"Time: {elapsed:.2f}s ({nodes / elapsed if elapsed > 0 else 0:,.0f} nodes/s)")


if __name__ == "__main__":
    main()
