"""
Exhaustive enumerator (validation aid).

Row-by-row backtracking: star every valid cell of the current row in turn,
invalidate its conflicts (recording the star as cause), recurse into the
next row, then undo by removing the cause. Independent of the deduction
rules, so it serves as ground truth for uniqueness.
"""

import itertools
from typing import List, Optional

from .types import Board, STAR, VALID
from .conflicts import (
    conflicts, auto_invalidate_conflicts, remove_invalidation_cause,
    reverse_errors, validate_solution,
)


def _search(board: Board, row: int, out: List[Board], limit: Optional[int]):
    if limit is not None and len(out) >= limit:
        return
    if row == board.n:
        if validate_solution(board):
            out.append(board.copy())
        return

    if (board.status[row] == STAR).any():
        _search(board, row + 1, out, limit)
        return

    for col in range(board.n):
        if board.status[row, col] != VALID:
            continue
        board.status[row, col] = STAR
        auto_invalidate_conflicts(board, row, col)
        _search(board, row + 1, out, limit)
        remove_invalidation_cause(board, (row, col))
        reverse_errors(board, row, col)
        board.status[row, col] = VALID


def count_solutions(board: Board, limit: Optional[int] = None) -> List[Board]:
    """
    All solutions of a board, as solved board snapshots.

    Stars already on the board are kept; their conflicts are invalidated on
    the private copy before searching, and a board whose stars already
    conflict has no solutions. The input board is not modified. `limit`
    stops the search early once that many solutions are found.
    """
    work = board.copy()
    stars = work.stars()
    if any(conflicts(work, a, b) for a, b in itertools.combinations(stars, 2)):
        return []
    for r, c in stars:
        auto_invalidate_conflicts(work, r, c)

    solutions: List[Board] = []
    _search(work, 0, solutions, limit)
    return solutions


def has_unique_solution(board: Board) -> bool:
    return len(count_solutions(board, limit=2)) == 1
