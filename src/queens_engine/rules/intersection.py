"""
Intersection of invalidated sets.

Whichever cell of a group ends up holding the star, every cell it conflicts
with is invalid. So a cell that conflicts with *all* of a group's valid cells
is invalid no matter what.
"""

from functools import reduce
from typing import List, Optional

from ..types import Board, BoardGroups, Group, Change, RuleOutcome
from ..groups import mark_invalid_cell
from ..conflicts import conflicting_cells


MAX_LINE_GROUP = 3


def mark_intersection_of_invalidated_sets(board: Board, groups: BoardGroups,
                                          group: Group) -> List[Change]:
    conflict_sets = [conflicting_cells(board, r, c) for r, c in group.cells]
    shared = reduce(lambda a, b: a & b, conflict_sets)
    changes: List[Change] = []
    for cell in sorted(shared):
        mark_invalid_cell(board, groups, cell, changes)
    return changes


def apply_intersection_rule(board: Board, groups: BoardGroups) -> Optional[RuleOutcome]:
    """
    Color groups first (smallest first, cost = group size), then row/column
    groups of 1..3 cells (smallest first, cost = group size + 1).
    """
    color_groups = sorted((g for g in groups.colors if g.cells), key=lambda g: len(g.cells))
    for group in color_groups:
        size = len(group.cells)
        changes = mark_intersection_of_invalidated_sets(board, groups, group)
        if changes:
            return RuleOutcome(changes, size, "intersection")

    line_groups = sorted((g for g in [*groups.rows, *groups.columns]
                          if 0 < len(g.cells) <= MAX_LINE_GROUP),
                         key=lambda g: len(g.cells))
    for group in line_groups:
        size = len(group.cells)
        changes = mark_intersection_of_invalidated_sets(board, groups, group)
        if changes:
            return RuleOutcome(changes, size + 1, "intersection")
    return None
