"""Queens Engine - Deduction Rules"""

from .star_placement import apply_star_placement_rule
from .icicle import apply_icicle_rule, window_index_sets, merged_line_groups, MAX_WINDOW
from .intersection import apply_intersection_rule, mark_intersection_of_invalidated_sets
from .branch import apply_branch_rule, BRANCH_LOOKAHEAD, BRANCH_DIFFICULTY

__all__ = [
    # Single-step deductions
    'apply_star_placement_rule',
    'apply_icicle_rule', 'window_index_sets', 'merged_line_groups', 'MAX_WINDOW',
    'apply_intersection_rule', 'mark_intersection_of_invalidated_sets',
    # Lookahead
    'apply_branch_rule', 'BRANCH_LOOKAHEAD', 'BRANCH_DIFFICULTY',
]
