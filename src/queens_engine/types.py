#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Queens Engine - Type Definitions
================================

Core types used throughout the engine:
- Grid: 2D integer array (color map)
- Board: arena of cells (colors + player status + invalidation causes)
- Group / BoardGroups: row, column and color membership of still-valid cells
- RuleOutcome / SolverResult: what rules and the solver hand back
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Tuple, Union, Set

# =============================================================================
# Core Types
# =============================================================================

Grid = np.ndarray          # dtype=int, shape (n, n)
Coord = Tuple[int, int]    # (row, column)
Cause = Union[str, Coord]  # "human" or the coordinates of a star

# Player status of a cell
VALID = "valid"
INVALID = "invalid"
STAR = "star"
ERROR = "error"

HUMAN = "human"

# Solver verdicts
SOLVED = "solved"
CONTRADICTION = "contradiction"
EXHAUSTED = "exhausted"


class InvariantViolation(RuntimeError):
    """Internal consistency failure (a bug, never a property of a puzzle)."""


class GenerationError(RuntimeError):
    """Raised when a caller-imposed attempt bound runs out."""


@dataclass
class Cell:
    """Snapshot of one board cell."""
    color: int
    player_status: str
    row: int
    column: int
    causes: List[Cause] = field(default_factory=list)


class Board:
    """
    n×n puzzle board stored as an arena indexed by (row, column).

    Implementation:
        colors: int array, fixed for the lifetime of the board
        status: string array of player statuses (valid / invalid / star / error)
        causes: nested list, causes[r][c] is the list of causes for (r, c)
    """

    def __init__(self, colors: Grid):
        colors = np.array(colors, dtype=int)
        if colors.ndim != 2 or colors.shape[0] != colors.shape[1]:
            raise ValueError(f"Board must be square, got shape {colors.shape}.")
        self.n = colors.shape[0]
        self.colors = colors
        self.colors.flags.writeable = False
        self.status = np.full((self.n, self.n), VALID, dtype='<U7')
        self.causes: List[List[List[Cause]]] = [[[] for _ in range(self.n)] for _ in range(self.n)]

    @property
    def size(self) -> int:
        return self.n

    def copy(self) -> 'Board':
        """Structural copy; shares nothing mutable with the original."""
        B = Board.__new__(Board)
        B.n = self.n
        B.colors = self.colors  # read-only, safe to share
        B.status = self.status.copy()
        B.causes = [[list(cs) for cs in row] for row in self.causes]
        return B

    def cell(self, r: int, c: int) -> Cell:
        return Cell(int(self.colors[r, c]), str(self.status[r, c]), r, c, list(self.causes[r][c]))

    def color_of(self, r: int, c: int) -> int:
        return int(self.colors[r, c])

    def stars(self) -> List[Coord]:
        """Coordinates of all starred cells in row-major order."""
        return self.cells_with_status(STAR)

    def cells_with_status(self, status: str) -> List[Coord]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.status == status)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.n == other.n
                and np.array_equal(self.colors, other.colors)
                and np.array_equal(self.status, other.status))

    def __repr__(self) -> str:
        return f"Board(n={self.n}, stars={len(self.stars())})"


@dataclass
class Group:
    """Still-valid cells of one row, column or color, plus whether it holds its star."""
    cells: Set[Coord] = field(default_factory=set)
    resolved: bool = False


@dataclass
class BoardGroups:
    """Row, column and color groups of a board."""
    rows: List[Group]
    columns: List[Group]
    colors: List[Group]

    def all_groups(self) -> List[Group]:
        """Rows, then columns, then colors."""
        return [*self.rows, *self.columns, *self.colors]

    def copy(self) -> 'BoardGroups':
        def dup(gs):
            return [Group(set(g.cells), g.resolved) for g in gs]
        return BoardGroups(dup(self.rows), dup(self.columns), dup(self.colors))


Change = Tuple[int, int, str]  # (row, column, new_status)


@dataclass
class RuleOutcome:
    """Side effects of one rule firing."""
    changes: List[Change]
    difficulty: float
    rule: str = ""


@dataclass
class SolverResult:
    """
    Verdict of the deductive solver.

    - verdict: SOLVED, CONTRADICTION or EXHAUSTED
    - difficulty: accumulated rule difficulty (final score when SOLVED)
    - iterations: solver iterations consumed
    - changes: every change applied, in order
    - rules_fired: names of the rules that fired, in order
    """
    verdict: str
    difficulty: float = 0
    iterations: int = 0
    changes: List[Change] = field(default_factory=list)
    rules_fired: List[str] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.verdict == SOLVED
