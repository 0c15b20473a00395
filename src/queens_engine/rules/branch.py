"""
Branch rule: bounded lookahead on a two-cell group.

One of the group's two cells holds the star. Star each candidate on its own
copy of the board, run a few non-branching solver steps on every copy, and
keep whatever invalidations all copies agree on: they follow no matter which
candidate is right.
"""

from typing import List, Optional

from ..types import Board, BoardGroups, Change, RuleOutcome, INVALID, VALID
from ..groups import mark_star_cell, mark_invalid_cell


BRANCH_LOOKAHEAD = 3
BRANCH_DIFFICULTY = 5


def _shared_invalidations(change_lists: List[List[Change]]) -> List[Change]:
    """Invalidations present in every branch, in first-branch order."""
    first, rest = change_lists[0], [set(cl) for cl in change_lists[1:]]
    shared, seen = [], set()
    for change in first:
        if change[2] == INVALID and change not in seen and all(change in cl for cl in rest):
            shared.append(change)
            seen.add(change)
    return shared


def apply_branch_rule(board: Board, groups: BoardGroups,
                      lookahead: int = BRANCH_LOOKAHEAD) -> Optional[RuleOutcome]:
    from ..solver_engine import solve_one_iteration, RULES_WITHOUT_BRANCHING

    pair = next((g for g in groups.all_groups() if len(g.cells) == 2 and not g.resolved), None)
    if pair is None:
        return None

    branches = []
    for cell in sorted(pair.cells):
        branch_board = board.copy()
        branch_groups = groups.copy()
        mark_star_cell(branch_board, branch_groups, cell)
        branches.append((branch_board, branch_groups, []))

    for step in range(lookahead):
        for branch_board, branch_groups, change_list in branches:
            result = solve_one_iteration(branch_board, branch_groups, RULES_WITHOUT_BRANCHING)
            if isinstance(result, RuleOutcome):
                change_list.extend(result.changes)

        forced = _shared_invalidations([cl for _, _, cl in branches])
        changes: List[Change] = []
        for r, c, _ in forced:
            if board.status[r, c] == VALID:
                mark_invalid_cell(board, groups, (r, c), changes)
        if changes:
            return RuleOutcome(changes, BRANCH_DIFFICULTY * (step + 1), "branch")
    return None
