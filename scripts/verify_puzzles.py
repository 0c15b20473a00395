#!/usr/bin/env python3
"""
Verify a puzzles.jsonl file produced by generate_puzzles.py.

Each board is decoded, solved again deductively and checked against the
exhaustive enumerator. A board passes when the solver proves it, the
enumerator finds exactly one solution, both agree on the stars and the
recomputed difficulty matches the stored one.

Usage:
    python scripts/verify_puzzles.py --input=runs/2026-10-19/puzzles.jsonl
"""

import sys
import json
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from queens_engine import (
    unpack_color_map, board_from_color_map, solve, count_solutions,
    board_sha, log_receipt, SOLVED,
)


def verify_puzzle(record: dict):
    """
    Check one puzzle record.

    Returns:
        (problems, receipt) where problems is empty if the puzzle passes
    """
    size = record["size"]
    board = board_from_color_map(unpack_color_map(bytes.fromhex(record["colors"]), size))

    problems = []
    solutions = count_solutions(board, limit=2)
    if len(solutions) != 1:
        problems.append(f"enumerator found {len(solutions)} solution(s)")

    work = board.copy()
    result = solve(work)
    if result.verdict != SOLVED:
        problems.append(f"solver verdict {result.verdict}")
    elif len(solutions) == 1 and work.stars() != solutions[0].stars():
        problems.append("solver and enumerator disagree on the stars")

    if "difficulty" in record and result.difficulty != record["difficulty"]:
        problems.append(f"difficulty {result.difficulty:g} != stored {record['difficulty']:g}")

    receipt = {
        "size": size,
        "board_sha": board_sha(board.colors),
        "verdict": result.verdict,
        "difficulty": float(result.difficulty),
        "solutions": len(solutions),
        "problems": problems,
    }
    return problems, receipt


def verify_puzzles(input_path: str, output_dir: str, verbose: bool = True):
    """
    Verify every puzzle in a JSONL file.

    Returns:
        (passed, total)
    """
    with open(input_path) as f:
        records = [json.loads(line) for line in f if line.strip()]

    if verbose:
        print("=" * 70)
        print("Queens Engine - Puzzle Verification")
        print(f"Input: {input_path}")
        print(f"Receipts: {output_dir}")
        print(f"Puzzles: {len(records)}")
        print("=" * 70)

    passed = 0
    for idx, record in enumerate(records, 1):
        problems, receipt = verify_puzzle(record)
        receipt["index"] = idx
        log_receipt(receipt, out_dir=output_dir)

        if not problems:
            passed += 1
        elif verbose:
            print(f"[{idx}/{len(records)}] FAIL {receipt['board_sha'][:12]}: {'; '.join(problems)}")

    if verbose:
        print("=" * 70)
        print(f"COMPLETE: {passed}/{len(records)} puzzles verified")
        print("=" * 70)

    return passed, len(records)


def main():
    parser = argparse.ArgumentParser(description="Verify generated queens puzzles")
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Path to puzzles.jsonl"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Receipt directory (default: <input dir>/verify)"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress messages"
    )

    args = parser.parse_args()

    output_dir = args.output or str(Path(args.input).parent / "verify")

    passed, total = verify_puzzles(args.input, output_dir, verbose=not args.quiet)

    # Exit code: 0 only if every puzzle verified
    sys.exit(0 if passed == total else 1)


if __name__ == "__main__":
    main()
