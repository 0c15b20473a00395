"""
Region graph and weighted randomized contraction.

Every cell starts as its own region; adjacent regions are joined by weighted
edges. Contraction repeatedly samples an edge with probability 1 / w^6 and
merges its endpoints until n regions remain. Small regions produce light
edges, so they keep growing while big ones stall, which yields irregular,
elongated regions.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Callable

from .types import InvariantViolation


INITIAL_EDGE_WEIGHT = 2
WEIGHT_EXPONENT = 6


@dataclass
class RegionNode:
    """A region under construction: its cell indices (row*n+col) and size."""
    cells: List[int] = field(default_factory=list)
    size: int = 1


Edge = Tuple[int, int]


def _key(u: int, v: int) -> Edge:
    return (u, v) if u < v else (v, u)


class RegionGraph:
    """
    Undirected graph of regions.

    Nodes keep insertion order (the materializer colors them in that order).
    Edge weights only bias sampling; they are not distances.
    """

    def __init__(self):
        self.nodes: Dict[int, RegionNode] = {}
        self.adj: Dict[int, set] = {}
        self.weights: Dict[Edge, int] = {}

    def add_node(self, idx: int, node: RegionNode):
        self.nodes[idx] = node
        self.adj.setdefault(idx, set())

    def has_node(self, idx: int) -> bool:
        return idx in self.nodes

    def set_edge(self, u: int, v: int, weight: int):
        self.weights[_key(u, v)] = weight
        self.adj[u].add(v)
        self.adj[v].add(u)

    def has_edge(self, u: int, v: int) -> bool:
        return _key(u, v) in self.weights

    def remove_edge(self, u: int, v: int):
        del self.weights[_key(u, v)]
        self.adj[u].discard(v)
        self.adj[v].discard(u)

    def remove_node(self, idx: int):
        for nb in list(self.adj[idx]):
            self.remove_edge(idx, nb)
        del self.adj[idx]
        del self.nodes[idx]

    def neighbors(self, idx: int) -> List[int]:
        return sorted(self.adj[idx])

    def edges(self) -> List[Edge]:
        return list(self.weights.keys())

    def weight(self, e: Edge) -> int:
        return self.weights[_key(*e)]

    def copy(self) -> 'RegionGraph':
        g = RegionGraph()
        for idx, node in self.nodes.items():
            g.add_node(idx, RegionNode(list(node.cells), node.size))
        for (u, v), w in self.weights.items():
            g.set_edge(u, v, w)
        return g

    def __len__(self) -> int:
        return len(self.nodes)


# ==============================================================================
# Construction
# ==============================================================================

def build_grid_graph(n: int) -> RegionGraph:
    """
    Graph of n² single-cell regions, indexed row*n+col, with a weight-2 edge
    between every pair of horizontally or vertically adjacent cells.
    """
    g = RegionGraph()
    for i in range(n):
        for j in range(n):
            idx = n * i + j
            g.add_node(idx, RegionNode([idx], 1))

    for i in range(n):
        for j in range(n):
            idx = n * i + j
            if i < n - 1:
                g.set_edge(idx, idx + n, INITIAL_EDGE_WEIGHT)
            if j < n - 1:
                g.set_edge(idx, idx + 1, INITIAL_EDGE_WEIGHT)
    return g


# ==============================================================================
# Sampling & Merging
# ==============================================================================

def inverse_power(w, exponent: int = WEIGHT_EXPONENT):
    """Sampling bias f(w) = 1 / w^exponent."""
    return 1.0 / np.power(np.asarray(w, dtype=float), exponent)


def sample_edge(graph: RegionGraph,
                rng: np.random.Generator,
                probability_fn: Callable = inverse_power) -> Optional[Edge]:
    """
    Single-pass weighted selection over the current edge list.

    Draws r ~ U(0, C) with C the total probability and returns the first edge
    whose cumulative probability exceeds r. Returns None if there are no edges.
    """
    edges = graph.edges()
    if not edges:
        return None
    probs = probability_fn(np.array([graph.weights[e] for e in edges]))
    cum = np.cumsum(probs)
    r = rng.random() * cum[-1]
    i = int(np.searchsorted(cum, r, side='right'))
    return edges[min(i, len(edges) - 1)]


def merge_nodes(graph: RegionGraph, stay: int, elim: int):
    """
    Merge `elim` into `stay`.

    stay absorbs elim's cells and size; the stay-elim edge disappears; every
    other neighbor of elim is (re)connected to stay with weight
    neighbor.size + stay.size (post-merge); elim is removed.
    """
    if not graph.has_node(stay) or not graph.has_node(elim):
        raise InvariantViolation(f"Cannot merge {elim} into {stay}: both nodes must exist.")

    if graph.has_edge(stay, elim):
        graph.remove_edge(stay, elim)

    s, e = graph.nodes[stay], graph.nodes[elim]
    s.cells.extend(e.cells)
    s.size += e.size

    for nb in graph.neighbors(elim):
        if nb != stay:
            graph.set_edge(stay, nb, graph.nodes[nb].size + s.size)

    graph.remove_node(elim)


def contract_regions(graph: RegionGraph,
                     n: int,
                     rng: Optional[np.random.Generator] = None,
                     probability_fn: Callable = inverse_power) -> Tuple[RegionGraph, int]:
    """
    Contract a grid graph down to n regions.

    Works on a copy; returns (contracted_graph, merges_performed). Performs
    exactly n² - n merges on an n×n grid graph.
    """
    if rng is None:
        rng = np.random.default_rng()
    g = graph.copy()

    merges = 0
    for _ in range(n * n - n):
        edge = sample_edge(g, rng, probability_fn)
        if edge is None:
            raise InvariantViolation(f"Graph ran out of edges with {len(g)} regions left.")
        stay, elim = edge
        merge_nodes(g, stay, elim)
        merges += 1

    return g, merges
