"""
Group index: which still-valid cells belong to each row, column and color.

Built once per solve from the board's statuses, then kept in sync
incrementally as rules star and invalidate cells.
"""

from typing import List

from .types import Board, BoardGroups, Group, Change, Coord, VALID, INVALID, STAR
from .conflicts import conflicting_cells


def split_board_into_groups(board: Board) -> BoardGroups:
    n = board.n
    groups = BoardGroups([Group() for _ in range(n)],
                         [Group() for _ in range(n)],
                         [Group() for _ in range(n)])
    for r in range(n):
        for c in range(n):
            color = board.color_of(r, c)
            status = board.status[r, c]
            if status == VALID:
                groups.rows[r].cells.add((r, c))
                groups.columns[c].cells.add((r, c))
                groups.colors[color].cells.add((r, c))
            elif status == STAR:
                groups.rows[r].resolved = True
                groups.columns[c].resolved = True
                groups.colors[color].resolved = True
    return groups


def is_board_impossible(groups: BoardGroups) -> bool:
    """True if some group has no valid cells left and no star yet."""
    return any(not g.cells and not g.resolved for g in groups.all_groups())


def remove_cell_from_groups(board: Board, groups: BoardGroups, cell: Coord):
    r, c = cell
    groups.rows[r].cells.discard(cell)
    groups.columns[c].cells.discard(cell)
    groups.colors[board.color_of(r, c)].cells.discard(cell)


def mark_invalid_cell(board: Board, groups: BoardGroups, cell: Coord, changes: List[Change]):
    """Invalidate a valid cell, record the change and drop it from its groups."""
    r, c = cell
    if board.status[r, c] == VALID:
        board.status[r, c] = INVALID
        changes.append((r, c, INVALID))
        remove_cell_from_groups(board, groups, cell)


def mark_star_cell(board: Board, groups: BoardGroups, cell: Coord) -> List[Change]:
    """
    Star a cell, resolve its row/column/color and invalidate all its conflicts.

    Each invalidated cell records the star's coordinates as its cause.
    """
    r, c = cell
    changes: List[Change] = [(r, c, STAR)]
    board.status[r, c] = STAR
    board.causes[r][c] = []
    remove_cell_from_groups(board, groups, cell)
    groups.rows[r].resolved = True
    groups.columns[c].resolved = True
    groups.colors[board.color_of(r, c)].resolved = True

    for other in sorted(conflicting_cells(board, r, c)):
        rr, cc = other
        if board.status[rr, cc] == VALID:
            board.causes[rr][cc].append((r, c))
        mark_invalid_cell(board, groups, other, changes)
    return changes
