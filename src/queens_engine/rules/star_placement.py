"""Star placement: a group with a single valid cell left must hold the star there."""

from typing import Optional

from ..types import Board, BoardGroups, RuleOutcome
from ..groups import mark_star_cell


def apply_star_placement_rule(board: Board, groups: BoardGroups) -> Optional[RuleOutcome]:
    for group in groups.all_groups():
        if len(group.cells) == 1 and not group.resolved:
            cell = next(iter(group.cells))
            return RuleOutcome(mark_star_cell(board, groups, cell), 0, "star_placement")
    return None
