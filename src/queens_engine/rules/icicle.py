"""
Icicle rules (locked candidates over row/column windows).

Take a window of i rows (or columns). Its i stars must come from i distinct
colors, so:

- icicle: if the window's valid cells use exactly i colors, those colors are
  locked into the window and every cell of theirs outside it is invalid;
- reverse icicle: if exactly i colors lie entirely inside the window (and the
  window holds more colors than that), those colors fill the window's i
  stars and every other color's cells in the window are invalid.

Both rules cost i.
"""

from typing import List, Optional, Set

from ..types import Board, BoardGroups, Coord, Change, RuleOutcome
from ..groups import mark_invalid_cell


MAX_WINDOW = 3


def window_index_sets(n: int, size: int) -> List[List[int]]:
    """
    Index windows of `size` lines out of n.

    Contiguous runs first; for size 2 the gapped pairs (k, k+2) follow.

    >>> window_index_sets(5, 2)
    [[0, 1], [1, 2], [2, 3], [3, 4], [0, 2], [1, 3], [2, 4]]
    """
    sets = [list(range(k, k + size)) for k in range(n - size + 1)]
    if size == 2:
        sets += [[k, k + 2] for k in range(n - 2)]
    return sets


def merged_line_groups(groups: BoardGroups, n: int, size: int) -> List[Set[Coord]]:
    """Merged valid cells of every unresolved row window, then every unresolved column window."""
    merged_rows, merged_cols = [], []
    for idx_set in window_index_sets(n, size):
        if not any(groups.rows[i].resolved for i in idx_set):
            merged_rows.append(set().union(*(groups.rows[i].cells for i in idx_set)))
        if not any(groups.columns[i].resolved for i in idx_set):
            merged_cols.append(set().union(*(groups.columns[i].cells for i in idx_set)))
    return merged_rows + merged_cols


def apply_icicle_rule(board: Board, groups: BoardGroups) -> Optional[RuleOutcome]:
    """Icicle and reverse icicle over windows of 1..MAX_WINDOW lines, smallest first."""
    n = board.n
    for i in range(1, MAX_WINDOW + 1):
        for window in merged_line_groups(groups, n, i):
            colors = {board.color_of(r, c) for r, c in window}

            if len(colors) == i:
                locked = set().union(*(groups.colors[color].cells for color in colors))
                if len(locked) > len(window):
                    changes: List[Change] = []
                    for cell in sorted(locked - window):
                        mark_invalid_cell(board, groups, cell, changes)
                    return RuleOutcome(changes, i, "icicle")

            enclosed = {color for color in colors if groups.colors[color].cells <= window}
            if len(enclosed) == i and len(colors) > i:
                changes = []
                for cell in sorted(window):
                    if board.color_of(*cell) not in enclosed:
                        mark_invalid_cell(board, groups, cell, changes)
                return RuleOutcome(changes, i, "reverse_icicle")
    return None
