"""
Queens Engine - region-coloring puzzle generator and deductive solver.

An n×n grid is split into n connected color regions; a solution places one
star per row, column and region with no two stars touching, even diagonally.
"""

from .types import (
    Grid, Coord, Cell, Board, Group, BoardGroups, RuleOutcome, SolverResult,
    VALID, INVALID, STAR, ERROR, HUMAN,
    SOLVED, CONTRADICTION, EXHAUSTED,
    InvariantViolation, GenerationError,
)
from .utils import (
    G, format_board, board_sha, log_receipt,
    in_size_range, MIN_BOARD_SIZE, MAX_BOARD_SIZE,
)
from .conflicts import (
    conflicts, conflict_mask, conflicting_cells,
    auto_invalidate_one_cell, auto_invalidate_conflicts,
    remove_invalidation_cause, reverse_errors,
    validate_solution,
)
from .region_graph import (
    RegionNode, RegionGraph, build_grid_graph,
    sample_edge, merge_nodes, contract_regions, inverse_power,
)
from .materialize import color_map_from_graph, board_from_color_map, board_from_graph
from .groups import (
    split_board_into_groups, is_board_impossible,
    mark_invalid_cell, mark_star_cell,
)
from .solver_engine import (
    solve, solve_one_iteration, DEFAULT_MAX_ITERS,
    RULES_WITHOUT_BRANCHING, RULES_WITH_BRANCHING,
)
from .exhaustive import count_solutions, has_unique_solution
from .generator import (
    generate, generate_with_stats, generate_one_board,
    generate_valid_board_recursive, generation_receipt,
)
from .codec import pack_color_map, unpack_color_map

__all__ = [
    # Types
    'Grid', 'Coord', 'Cell', 'Board', 'Group', 'BoardGroups', 'RuleOutcome', 'SolverResult',
    'VALID', 'INVALID', 'STAR', 'ERROR', 'HUMAN',
    'SOLVED', 'CONTRADICTION', 'EXHAUSTED',
    'InvariantViolation', 'GenerationError',

    # Utils
    'G', 'format_board', 'board_sha', 'log_receipt',
    'in_size_range', 'MIN_BOARD_SIZE', 'MAX_BOARD_SIZE',

    # Conflicts
    'conflicts', 'conflict_mask', 'conflicting_cells',
    'auto_invalidate_one_cell', 'auto_invalidate_conflicts',
    'remove_invalidation_cause', 'reverse_errors',
    'validate_solution',

    # Region graph
    'RegionNode', 'RegionGraph', 'build_grid_graph',
    'sample_edge', 'merge_nodes', 'contract_regions', 'inverse_power',
    'color_map_from_graph', 'board_from_color_map', 'board_from_graph',

    # Solver
    'split_board_into_groups', 'is_board_impossible',
    'mark_invalid_cell', 'mark_star_cell',
    'solve', 'solve_one_iteration', 'DEFAULT_MAX_ITERS',
    'RULES_WITHOUT_BRANCHING', 'RULES_WITH_BRANCHING',

    # Enumeration
    'count_solutions', 'has_unique_solution',

    # Generation
    'generate', 'generate_with_stats', 'generate_one_board',
    'generate_valid_board_recursive', 'generation_receipt',

    # Storage codec
    'pack_color_map', 'unpack_color_map',
]
