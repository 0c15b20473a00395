#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Queens Engine - Puzzle Generation
=================================

Generate-and-verify loop:
1. Grid graph of n² single-cell regions
2. Weighted contraction down to n regions
3. Materialize the color map and a fresh board
4. Solve a copy deductively; keep the board only if the solver proves it

Boards the solver cannot finish (contradiction or exhausted) are discarded
and a new one is drawn. There is no internal retry bound; callers that need
one pass max_attempts.
"""

import time
import numpy as np
from typing import Dict, Optional, Tuple

from .types import Board, SolverResult, GenerationError, CONTRADICTION, EXHAUSTED
from .region_graph import build_grid_graph, contract_regions
from .materialize import board_from_graph
from .solver_engine import solve
from .exhaustive import count_solutions
from .utils import board_sha


def generate_one_board(size: int, rng=None) -> Board:
    """One random, unverified board of side `size`."""
    rng = np.random.default_rng(rng)
    graph, _ = contract_regions(build_grid_graph(size), size, rng)
    return board_from_graph(graph)


def _new_stats(size: int) -> Dict:
    return {
        "size": size,
        "attempts": 0,
        "contradictions": 0,
        "exhausted": 0,
        "timing_ms": {"generate": 0.0, "solve": 0.0, "total": 0.0},
    }


def generate_with_stats(size: int,
                        rng=None,
                        *,
                        max_attempts: Optional[int] = None) -> Tuple[Board, SolverResult, Dict]:
    """
    Generate a board with a deductively provable unique solution.

    Args:
        size: Board side (the engine assumes 4..10 was validated upstream)
        rng: numpy Generator, seed, or None
        max_attempts: Optional bound on boards drawn; GenerationError when exceeded

    Returns:
        (board, solver_result, stats) where board is fresh (all cells valid) and
        stats = {"attempts", "contradictions", "exhausted", "timing_ms"}
    """
    rng = np.random.default_rng(rng)
    stats = _new_stats(size)
    t_start = time.perf_counter()

    while max_attempts is None or stats["attempts"] < max_attempts:
        stats["attempts"] += 1

        t0 = time.perf_counter()
        board = generate_one_board(size, rng)
        t1 = time.perf_counter()
        result = solve(board.copy())
        t2 = time.perf_counter()

        stats["timing_ms"]["generate"] += 1000 * (t1 - t0)
        stats["timing_ms"]["solve"] += 1000 * (t2 - t1)

        if result.solved:
            stats["timing_ms"]["total"] = 1000 * (time.perf_counter() - t_start)
            return board, result, stats
        if result.verdict == CONTRADICTION:
            stats["contradictions"] += 1
        elif result.verdict == EXHAUSTED:
            stats["exhausted"] += 1

    raise GenerationError(f"No provable {size}x{size} board in {max_attempts} attempts "
                          f"({stats['contradictions']} contradictions, {stats['exhausted']} exhausted).")


def generate(size: int, rng=None) -> Tuple[Board, float]:
    """Generate a uniquely solvable board; returns (board, difficulty)."""
    board, result, _ = generate_with_stats(size, rng)
    return board, result.difficulty


def generate_valid_board_recursive(size: int,
                                   rng=None,
                                   *,
                                   max_attempts: Optional[int] = None) -> Tuple[Board, Dict]:
    """
    Generate a board whose uniqueness is checked by exhaustive search instead
    of deduction. Slower and carries no difficulty; used for cross-checks.
    """
    rng = np.random.default_rng(rng)
    stats = _new_stats(size)
    stats["multiple"] = 0
    t_start = time.perf_counter()

    while max_attempts is None or stats["attempts"] < max_attempts:
        stats["attempts"] += 1
        board = generate_one_board(size, rng)
        found = len(count_solutions(board, limit=2))
        if found == 1:
            stats["timing_ms"]["total"] = 1000 * (time.perf_counter() - t_start)
            return board, stats
        if found == 0:
            stats["contradictions"] += 1
        else:
            stats["multiple"] += 1

    raise GenerationError(f"No unique {size}x{size} board in {max_attempts} attempts.")


def generation_receipt(board: Board, result: SolverResult, stats: Dict) -> Dict:
    """JSON-serializable receipt of one generation run."""
    return {
        "size": board.n,
        "board_sha": board_sha(board.colors),
        "difficulty": float(result.difficulty),
        "verdict": result.verdict,
        "solver_iters": result.iterations,
        "rules_fired": sorted(set(result.rules_fired)),
        "attempts": stats["attempts"],
        "rejected": {"contradiction": stats["contradictions"], "exhausted": stats["exhausted"]},
        "timing_ms": {k: round(v, 3) for k, v in stats["timing_ms"].items()},
    }
