#!/usr/bin/env python3
"""
Generate queens puzzles with a deductively provable unique solution.

Produces:
- puzzles.jsonl (one board per line: size, packed color map as hex, difficulty)
- receipts.jsonl (per-board generation stats for analysis)

Usage:
    python scripts/generate_puzzles.py --size=8 --count=20 --seed=0
    python scripts/generate_puzzles.py --size=6 --count=5 --output=runs/six
"""

import sys
import json
import argparse
from pathlib import Path
from datetime import datetime

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from queens_engine import (
    generate_with_stats, generation_receipt,
    pack_color_map, format_board, log_receipt,
    in_size_range, MIN_BOARD_SIZE, MAX_BOARD_SIZE,
)


def validate_board_size(value: str) -> int:
    """argparse type for --size: an integer in the supported range."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Board size must be an integer, got {value!r}")
    if not in_size_range(n):
        raise argparse.ArgumentTypeError(
            f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {n}")
    return n


def generate_puzzles(size: int, count: int, output_dir: str, seed=None, verbose: bool = True):
    """
    Generate `count` boards of side `size` and write puzzles.jsonl.

    Returns:
        List of difficulties, one per generated board
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    puzzles_path = Path(output_dir) / "puzzles.jsonl"
    rng = np.random.default_rng(seed)

    if verbose:
        print("=" * 70)
        print("Queens Engine - Puzzle Generation")
        print(f"Size: {size}x{size}")
        print(f"Count: {count}")
        print(f"Seed: {seed}")
        print(f"Output: {output_dir}")
        print("=" * 70)

    difficulties = []
    with open(puzzles_path, "a") as f:
        for idx in range(1, count + 1):
            board, result, stats = generate_with_stats(size, rng)
            difficulties.append(result.difficulty)

            puzzle = {
                "size": size,
                "colors": pack_color_map(board.colors).hex(),
                "difficulty": float(result.difficulty),
            }
            f.write(json.dumps(puzzle, sort_keys=True) + "\n")

            receipt = generation_receipt(board, result, stats)
            receipt["index"] = idx
            log_receipt(receipt, out_dir=output_dir)

            if verbose:
                print(f"[{idx}/{count}] difficulty={result.difficulty:g} "
                      f"attempts={stats['attempts']} "
                      f"({stats['timing_ms']['total']:.0f} ms)")
                print(format_board(board, show_status=False))
                print()

    if verbose:
        print("=" * 70)
        print(f"COMPLETE: {count} puzzles, mean difficulty {np.mean(difficulties):.2f}")
        print(f"Puzzles: {puzzles_path}")
        print(f"Receipts: {Path(output_dir) / 'receipts.jsonl'}")
        print("=" * 70)

    return difficulties


def main():
    parser = argparse.ArgumentParser(description="Generate uniquely solvable queens puzzles")
    parser.add_argument(
        "--size",
        type=validate_board_size,
        default=8,
        help=f"Board side, {MIN_BOARD_SIZE}-{MAX_BOARD_SIZE} (default: 8)"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of puzzles to generate"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: fresh entropy)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory (default: runs/YYYY-MM-DD)"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress messages"
    )

    args = parser.parse_args()

    # Default output directory
    if args.output is None:
        date_str = datetime.now().strftime("%Y-%m-%d")
        output_dir = f"runs/{date_str}"
    else:
        output_dir = args.output

    generate_puzzles(args.size, args.count, output_dir, seed=args.seed, verbose=not args.quiet)


if __name__ == "__main__":
    main()
