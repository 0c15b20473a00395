"""Board materialization: contracted region graph -> color map -> board."""

import numpy as np

from .types import Grid, Board, InvariantViolation
from .region_graph import RegionGraph


def color_map_from_graph(graph: RegionGraph) -> Grid:
    """
    Scatter each region's cells back onto an n×n color map.

    Regions are colored 0..n-1 in node order; cell index idx lands at
    (idx // n, idx % n).
    """
    n = len(graph)
    cmap = np.full((n, n), -1, dtype=int)
    for color, node in enumerate(graph.nodes.values()):
        for idx in node.cells:
            cmap[idx // n, idx % n] = color
    if (cmap < 0).any():
        raise InvariantViolation(f"Contracted graph does not cover the {n}x{n} grid.")
    return cmap


def board_from_color_map(cmap) -> Board:
    """
    Build a fresh board (all cells valid, no causes) from a color map.

    Raises ValueError if the map is not square or uses colors outside [0, n).
    """
    cmap = np.array(cmap, dtype=int)
    if cmap.ndim != 2 or cmap.shape[0] != cmap.shape[1]:
        raise ValueError(f"Color map must be square, got shape {cmap.shape}.")
    n = cmap.shape[0]
    if cmap.size and (cmap.min() < 0 or cmap.max() >= n):
        raise ValueError(f"Colors must lie in [0, {n}), got range [{cmap.min()}, {cmap.max()}].")
    return Board(cmap)


def board_from_graph(graph: RegionGraph) -> Board:
    return board_from_color_map(color_map_from_graph(graph))
