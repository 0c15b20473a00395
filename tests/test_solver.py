"""
Tests for the conflict relation, the solver driver and the exhaustive
enumerator, including cross-checks between the two solvers.
"""

import itertools
import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from queens_engine import (
    G, Board, board_from_color_map,
    conflicts, conflict_mask, conflicting_cells,
    auto_invalidate_conflicts, remove_invalidation_cause, reverse_errors,
    validate_solution,
    split_board_into_groups, is_board_impossible,
    solve, count_solutions, has_unique_solution, generate_one_board,
    VALID, INVALID, STAR, ERROR, HUMAN,
    SOLVED, CONTRADICTION, EXHAUSTED,
)


# ==============================================================================
# Helper Functions
# ==============================================================================

QUADRANTS_4 = G([
    [0, 0, 1, 1],
    [0, 0, 1, 1],
    [2, 2, 3, 3],
    [2, 2, 3, 3],
])

QUADRANT_SOLUTIONS = [
    [(0, 1), (1, 3), (2, 0), (3, 2)],
    [(0, 2), (1, 0), (2, 3), (3, 1)],
]


def place_star(board: Board, r: int, c: int):
    """Star a cell the way a player with auto-placement would."""
    board.status[r, c] = STAR
    auto_invalidate_conflicts(board, r, c)


def all_coords(n):
    return [(r, c) for r in range(n) for c in range(n)]


# ==============================================================================
# Board Arena
# ==============================================================================

def test_board_copy_shares_nothing_mutable():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 1)
    dup = board.copy()

    dup.status[3, 3] = STAR
    dup.causes[0][0].append(HUMAN)

    assert board.status[3, 3] == VALID
    assert board.causes[0][0] == [(0, 1)]
    assert dup != board


def test_board_cell_snapshot():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 1)

    cell = board.cell(1, 0)
    assert (cell.color, cell.player_status, cell.row, cell.column) == (0, INVALID, 1, 0)
    assert cell.causes == [(0, 1)]
    assert board.cells_with_status(STAR) == [(0, 1)]


# ==============================================================================
# Conflict Relation
# ==============================================================================

def test_conflict_relation_basic_cases():
    board = board_from_color_map(QUADRANTS_4)

    assert conflicts(board, (0, 0), (0, 3)), "same row"
    assert conflicts(board, (0, 0), (3, 0)), "same column"
    assert conflicts(board, (0, 0), (1, 1)), "diagonal neighbor / same color"
    assert conflicts(board, (1, 2), (2, 1)), "anti-diagonal neighbor"
    assert conflicts(board, (2, 2), (3, 3)), "same color"
    assert not conflicts(board, (0, 0), (2, 3))
    assert not conflicts(board, (0, 1), (2, 0)), "knight move is fine"
    assert not conflicts(board, (1, 1), (1, 1)), "a cell never conflicts with itself"


@pytest.mark.parametrize("seed", range(3))
def test_conflict_relation_is_symmetric(seed):
    board = generate_one_board(6, np.random.default_rng(seed))

    for a, b in itertools.product(all_coords(6), repeat=2):
        assert conflicts(board, a, b) == conflicts(board, b, a)


def test_conflict_mask_matches_pairwise_relation():
    board = generate_one_board(5, np.random.default_rng(4))

    for a in all_coords(5):
        mask = conflict_mask(board, *a)
        assert not mask[a]
        for b in all_coords(5):
            assert bool(mask[b]) == conflicts(board, a, b)
        assert conflicting_cells(board, *a) == {b for b in all_coords(5) if mask[b]}


# ==============================================================================
# Causes
# ==============================================================================

def test_star_causes_are_recorded_and_removed():
    board = board_from_color_map(QUADRANTS_4)
    board.status[2, 3] = INVALID
    board.causes[2][3].append(HUMAN)

    place_star(board, 1, 1)

    assert board.status[0, 0] == INVALID
    assert board.causes[0][0] == [(1, 1)]
    # (2,3) is not touched by (1,1)
    assert board.causes[2][3] == [HUMAN]

    place_star(board, 3, 3)
    assert board.causes[2][2] == [(1, 1), (3, 3)]

    board.status[1, 1] = VALID
    remove_invalidation_cause(board, (1, 1))

    assert board.status[0, 0] == VALID and board.causes[0][0] == []
    assert board.status[2, 2] == INVALID and board.causes[2][2] == [(3, 3)]
    assert board.status[2, 3] == INVALID and board.causes[2][3] == [HUMAN, (3, 3)]


def test_conflicting_star_becomes_error_and_recovers():
    board = board_from_color_map(QUADRANTS_4)
    board.status[0, 0] = STAR

    place_star(board, 0, 1)
    assert board.status[0, 0] == ERROR

    reverse_errors(board, 0, 1)
    assert board.status[0, 0] == STAR


# ==============================================================================
# Solution Validation & Group Index
# ==============================================================================

def test_validate_solution():
    board = board_from_color_map(QUADRANTS_4)
    assert not validate_solution(board)

    for r, c in QUADRANT_SOLUTIONS[0]:
        board.status[r, c] = STAR
    assert validate_solution(board)

    board.status[3, 2] = VALID
    board.status[3, 3] = STAR  # shares column 3 with (1,3)
    assert not validate_solution(board)


def test_group_index_tracks_valid_cells_and_stars():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 1)
    groups = split_board_into_groups(board)

    assert groups.rows[0].resolved and groups.rows[0].cells == set()
    assert groups.columns[1].resolved and groups.colors[0].resolved
    assert groups.rows[1].cells == {(1, 3)}
    assert not groups.rows[1].resolved
    assert not is_board_impossible(groups)


def test_empty_color_group_is_impossible():
    board = board_from_color_map(np.zeros((4, 4), dtype=int))
    groups = split_board_into_groups(board)

    assert is_board_impossible(groups)


# ==============================================================================
# Solver Driver
# ==============================================================================

def test_quadrants_with_one_star_solve_by_star_placement_only():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 1)

    result = solve(board)

    assert result.verdict == SOLVED
    assert result.difficulty == 0
    assert set(result.rules_fired) == {"star_placement"}
    assert board.stars() == QUADRANT_SOLUTIONS[0]


def test_solving_a_solved_board_is_idempotent():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 1)
    first = solve(board)
    snapshot = board.copy()

    second = solve(board)

    assert first.verdict == second.verdict == SOLVED
    assert second.difficulty == 0
    assert second.changes == []
    assert board == snapshot


def test_contradiction_verdict():
    board = board_from_color_map(np.zeros((4, 4), dtype=int))

    result = solve(board)

    assert result.verdict == CONTRADICTION
    assert result.iterations == 0


def test_exhausted_when_no_rule_fires():
    board = board_from_color_map(QUADRANTS_4)

    result = solve(board, rules=[])

    assert result.verdict == EXHAUSTED
    assert (board.status == VALID).all()


def test_exhausted_at_iteration_cap():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 1)

    result = solve(board, max_iters=1)

    assert result.verdict == EXHAUSTED
    assert result.iterations == 1
    assert len(board.stars()) == 2


def test_stars_passed_in_are_trusted():
    board = board_from_color_map(QUADRANTS_4)
    board.status[0, 0] = STAR
    board.status[1, 1] = STAR  # same color as (0,0)

    result = solve(board)

    assert result.verdict == EXHAUSTED
    assert board.stars() == [(0, 0), (1, 1)]
    assert count_solutions(board) == []


def test_quadrants_are_not_provably_unique():
    # two solutions exist, so no sound deduction can finish the board
    result = solve(board_from_color_map(QUADRANTS_4))

    assert result.verdict != SOLVED


# ==============================================================================
# Exhaustive Enumerator
# ==============================================================================

def test_enumerator_finds_both_quadrant_solutions():
    board = board_from_color_map(QUADRANTS_4)

    solutions = count_solutions(board)

    assert sorted(s.stars() for s in solutions) == QUADRANT_SOLUTIONS
    assert all(validate_solution(s) for s in solutions)
    assert (board.status == VALID).all(), "Input board must be left untouched"
    assert not has_unique_solution(board)


def test_enumerator_respects_existing_stars():
    board = board_from_color_map(QUADRANTS_4)
    place_star(board, 0, 2)

    solutions = count_solutions(board)

    assert [s.stars() for s in solutions] == [QUADRANT_SOLUTIONS[1]]


@pytest.mark.parametrize("star, expected", [((0, 1), 0), ((1, 3), 0), ((1, 0), 1)])
def test_enumerator_handles_stars_set_without_invalidation(star, expected):
    board = board_from_color_map(QUADRANTS_4)
    board.status[star] = STAR

    solutions = count_solutions(board)

    assert [s.stars() for s in solutions] == [QUADRANT_SOLUTIONS[expected]]
    assert all(validate_solution(s) for s in solutions)
    assert all(not (s.status == ERROR).any() for s in solutions)
    assert board.causes[0][0] == [], "Input board must be left untouched"


def test_enumerator_rejects_conflicting_stars():
    board = board_from_color_map(QUADRANTS_4)
    board.status[0, 0] = STAR
    board.status[1, 1] = STAR

    assert count_solutions(board) == []
    assert not has_unique_solution(board)


def test_enumerator_limit():
    board = board_from_color_map(QUADRANTS_4)
    assert len(count_solutions(board, limit=1)) == 1


def test_unsolvable_board_has_no_solutions():
    board = board_from_color_map(np.zeros((4, 4), dtype=int))
    assert count_solutions(board) == []


@pytest.mark.parametrize("seed", range(12))
def test_solver_and_enumerator_agree(seed):
    """Whenever deduction proves a board, the enumerator finds that one solution."""
    board = generate_one_board(5, np.random.default_rng(seed))
    solutions = count_solutions(board)

    work = board.copy()
    result = solve(work)

    if result.verdict == SOLVED:
        assert len(solutions) == 1
        assert work.stars() == solutions[0].stars()
        assert validate_solution(work)
    if solutions:
        assert result.verdict != CONTRADICTION, "Sound deductions never refute a solvable board"
