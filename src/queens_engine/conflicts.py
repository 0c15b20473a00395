#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Queens Engine - Conflict Relation & Causes
==========================================

Two cells conflict iff they share exactly one of row/column, share a color
(and are distinct), or touch diagonally. A star invalidates every cell it
conflicts with; each invalidated cell remembers which star (or "human")
caused it, and reverts to valid once its causes are gone.
"""

import numpy as np
from typing import List, Set

from .types import Board, Coord, Cause, VALID, INVALID, STAR, ERROR

# =============================================================================
# Conflict Relation
# =============================================================================

def conflicts(board: Board, a: Coord, b: Coord) -> bool:
    """Symmetric, irreflexive conflict test between two cells."""
    (r1, c1), (r2, c2) = a, b
    if (r1 == r2) != (c1 == c2):
        return True
    if abs(r1 - r2) == 1 and abs(c1 - c2) == 1:
        return True
    return a != b and bool(board.colors[r1, c1] == board.colors[r2, c2])


def conflict_mask(board: Board, r: int, c: int) -> np.ndarray:
    """Boolean n×n mask of every cell that conflicts with (r, c)."""
    rows, cols = np.indices((board.n, board.n))
    same_row = rows == r
    same_col = cols == c
    m = same_row ^ same_col
    m |= (np.abs(rows - r) == 1) & (np.abs(cols - c) == 1)
    m |= board.colors == board.colors[r, c]
    m[r, c] = False
    return m


def conflicting_cells(board: Board, r: int, c: int) -> Set[Coord]:
    """Set of coordinates conflicting with (r, c)."""
    return {(int(i), int(j)) for i, j in np.argwhere(conflict_mask(board, r, c))}

# =============================================================================
# Cause Bookkeeping
# =============================================================================

def auto_invalidate_one_cell(board: Board, cause: Cause, r: int, c: int):
    """Invalidate (r, c) because of `cause`; a star hit this way becomes an error."""
    if board.status[r, c] != STAR:
        board.status[r, c] = INVALID
        board.causes[r][c].append(cause)
    else:
        board.status[r, c] = ERROR


def auto_invalidate_conflicts(board: Board, r: int, c: int) -> List[Coord]:
    """Invalidate every cell conflicting with a star at (r, c). Returns the cells touched."""
    touched = sorted(conflicting_cells(board, r, c))
    for rr, cc in touched:
        auto_invalidate_one_cell(board, (r, c), rr, cc)
    return touched


def remove_invalidation_cause(board: Board, cause: Cause):
    """
    Drop `cause` from every cell; cells left without causes revert to valid.

    Only cells that actually carried the cause are considered, so cells
    invalidated by deduction (no recorded cause) stay invalid.
    """
    for r in range(board.n):
        for c in range(board.n):
            cs = board.causes[r][c]
            if cause not in cs:
                continue
            board.causes[r][c] = [x for x in cs if x != cause]
            if not board.causes[r][c] and board.status[r, c] == INVALID:
                board.status[r, c] = VALID


def reverse_errors(board: Board, r: int, c: int):
    """Stars flagged as errors by a removed star at (r, c) become stars again."""
    for rr, cc in conflicting_cells(board, r, c):
        if board.status[rr, cc] == ERROR:
            board.status[rr, cc] = STAR

# =============================================================================
# Solution Validation
# =============================================================================

def validate_solution(board: Board) -> bool:
    """
    A board is solved iff it has exactly n stars and no two stars conflict.

    One star per row plus pairwise non-conflict forces one star per column
    and per color (n stars over n columns / n colors).
    """
    stars = board.stars()
    if len(stars) != board.n:
        return False
    for i in range(len(stars) - 1):
        for j in range(i + 1, len(stars)):
            if conflicts(board, stars[i], stars[j]):
                return False
    return True
