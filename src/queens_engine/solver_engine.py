"""
Fixed-Point Deduction Engine for the Queens puzzle.

Rule-based solver:
- Rules are tried in fixed priority order; the first one that fires is
  applied and evaluation restarts from the top
- Every firing adds its difficulty to the running score
- Stops when the board is solved, contradictory, or no rule applies
"""

from typing import List, Callable, Optional, Union

from .types import (
    Board, BoardGroups, RuleOutcome, SolverResult,
    SOLVED, CONTRADICTION, EXHAUSTED,
)
from .groups import split_board_into_groups, is_board_impossible
from .conflicts import validate_solution
from .rules import (
    apply_star_placement_rule,
    apply_icicle_rule,
    apply_intersection_rule,
    apply_branch_rule,
)


# Maximum solver iterations before giving up on a board
DEFAULT_MAX_ITERS = 100

Rule = Callable[[Board, BoardGroups], Optional[RuleOutcome]]

RULES_WITHOUT_BRANCHING: List[Rule] = [
    apply_star_placement_rule,
    apply_icicle_rule,
    apply_intersection_rule,
]

RULES_WITH_BRANCHING: List[Rule] = RULES_WITHOUT_BRANCHING + [apply_branch_rule]


# ==============================================================================
# One Iteration
# ==============================================================================

def solve_one_iteration(board: Board,
                        groups: BoardGroups,
                        rules: List[Rule]) -> Union[RuleOutcome, str]:
    """
    Run one solver step.

    Returns:
        CONTRADICTION if some group can no longer hold its star,
        SOLVED if the board already is a solution,
        the outcome of the first rule that fires,
        or EXHAUSTED if none does.
    """
    if is_board_impossible(groups):
        return CONTRADICTION
    if validate_solution(board):
        return SOLVED
    for rule in rules:
        outcome = rule(board, groups)
        if outcome is not None:
            return outcome
    return EXHAUSTED


# ==============================================================================
# Fixed-Point Driver
# ==============================================================================

def solve(board: Board,
          *,
          rules: Optional[List[Rule]] = None,
          max_iters: int = DEFAULT_MAX_ITERS) -> SolverResult:
    """
    Solve a board deductively, mutating it in place.

    Pass board.copy() to keep the original untouched.

    Stars already on the board are trusted: they resolve their groups but are
    not checked against each other. Conflicting stars never validate, so such
    a board ends EXHAUSTED unless some group runs empty (CONTRADICTION).
    Use count_solutions to check a partially starred board.

    Args:
        board: Board to solve (statuses are updated as rules fire)
        rules: Rule list in priority order (default: all rules incl. branching)
        max_iters: Iteration cap; hitting it yields EXHAUSTED

    Returns:
        SolverResult with verdict, accumulated difficulty and the change trace
    """
    if rules is None:
        rules = RULES_WITH_BRANCHING
    groups = split_board_into_groups(board)
    result = SolverResult(EXHAUSTED)

    for iteration in range(max_iters):
        step = solve_one_iteration(board, groups, rules)
        if not isinstance(step, RuleOutcome):
            result.verdict = step
            result.iterations = iteration
            return result
        result.difficulty += step.difficulty
        result.changes.extend(step.changes)
        result.rules_fired.append(step.rule)

    # Cap reached: settle the verdict without firing another rule
    result.iterations = max_iters
    if is_board_impossible(groups):
        result.verdict = CONTRADICTION
    elif validate_solution(board):
        result.verdict = SOLVED
    return result
