#!/usr/bin/env python3
"""
Export a trainer checkpoint as a weight file.

Usage:
    python tools/export_checkpoint.py [--checkpoint checkpoint.bin] [--output weights_ckpt.txt]
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mailbox_chess.training.trainer import export_checkpoint


def main():
    parser = argparse.ArgumentParser(
        description="Write the weights stored in a checkpoint to a weight file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--checkpoint", type=str, default="checkpoint.bin", help="Checkpoint file")
    parser.add_argument("--output", type=str, default="weights_ckpt.txt", help="Weight file to write")
    args = parser.parse_args()

    try:
        weights = export_checkpoint(args.checkpoint, args.output)
    except (FileNotFoundError, ValueError) as e:
        print(f"Cannot export checkpoint: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"[OK] exported {args.output} from {args.checkpoint}")
    print(
        f"material[0]={weights.material[0]:g} "
        f"pawnPST0={weights.pst_pawn[0]:g} "
        f"knightPST0={weights.pst_knight[0]:g}"
    )


if __name__ == "__main__":
    main()
