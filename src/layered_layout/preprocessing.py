"""
Graph preprocessing utilities.

Helpers that run before and after crossing minimization:
- Cycle detection and removal, so that every edge can point downward
- Longest-path layer assignment
- Crossing counting for a layered ordering

All functions take a node count and a sequence of links. Links may be Link
objects, dicts with "source" and "target" keys, or anything else for which
`get_source` and `get_target` return node indices. Links whose endpoints are
out of range are ignored.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Iterator, Optional, Sequence

import numpy as np

from .types import LinkLike

_Accessor = Optional[Callable[[Any], int]]


def _endpoint_index(value: Any) -> int:
    return value if isinstance(value, int) else int(value.index)


def _default_get_source(link: Any) -> int:
    """Default function to extract source index from a link."""
    return _endpoint_index(link["source"] if isinstance(link, dict) else link.source)


def _default_get_target(link: Any) -> int:
    """Default function to extract target index from a link."""
    return _endpoint_index(link["target"] if isinstance(link, dict) else link.target)


def _edges(
    n: int,
    links: Sequence[LinkLike],
    get_source: _Accessor,
    get_target: _Accessor,
) -> Iterator[tuple[int, int, int]]:
    """Yield (link index, source, target) for every link inside [0, n)."""
    get_source = get_source or _default_get_source
    get_target = get_target or _default_get_target
    for i, link in enumerate(links):
        src = get_source(link)
        tgt = get_target(link)
        if 0 <= src < n and 0 <= tgt < n:
            yield i, src, tgt


def _depth_first(
    n: int,
    adjacency: list[list[tuple[int, int]]],
    on_back_edge: Callable[[list[int], int, int], bool],
) -> None:
    """
    Iterative depth-first search over all nodes in index order.

    `on_back_edge(path, target, link_index)` is called for every edge into a
    node on the current path; returning True stops the search.
    """
    # 0=unvisited, 1=on path, 2=done
    state = [0] * n
    for start in range(n):
        if state[start]:
            continue
        state[start] = 1
        path = [start]
        cursors = [0]
        while path:
            node = path[-1]
            cursor = cursors[-1]
            if cursor == len(adjacency[node]):
                state[node] = 2
                path.pop()
                cursors.pop()
                continue
            cursors[-1] = cursor + 1
            neighbor, link_index = adjacency[node][cursor]
            if state[neighbor] == 1:
                if on_back_edge(path, neighbor, link_index):
                    return
            elif state[neighbor] == 0:
                state[neighbor] = 1
                path.append(neighbor)
                cursors.append(0)


def _adjacency(
    n: int,
    links: Sequence[LinkLike],
    get_source: _Accessor,
    get_target: _Accessor,
) -> list[list[tuple[int, int]]]:
    adjacency: list[list[tuple[int, int]]] = [[] for _ in range(n)]
    for i, src, tgt in _edges(n, links, get_source, get_target):
        adjacency[src].append((tgt, i))
    return adjacency


# =============================================================================
# Cycle Detection and Removal
# =============================================================================


def detect_cycle(
    n: int,
    links: Sequence[LinkLike],
    get_source: _Accessor = None,
    get_target: _Accessor = None,
) -> Optional[list[int]]:
    """
    Find a directed cycle.

    Args:
        n: Number of nodes
        links: Directed edges
        get_source: Function to extract source index from link (default: link['source'])
        get_target: Function to extract target index from link (default: link['target'])

    Returns:
        Node indices along the first cycle found, with the first node repeated
        at the end, or None if the graph is acyclic.

    Example:
        >>> links = [{'source': 0, 'target': 1}, {'source': 1, 'target': 2},
        ...          {'source': 2, 'target': 0}]
        >>> detect_cycle(3, links)
        [0, 1, 2, 0]
    """
    found: list[list[int]] = []

    def keep_first(path: list[int], target: int, link_index: int) -> bool:
        found.append(path[path.index(target) :] + [target])
        return True

    _depth_first(n, _adjacency(n, links, get_source, get_target), keep_first)
    return found[0] if found else None


def has_cycle(
    n: int,
    links: Sequence[LinkLike],
    get_source: _Accessor = None,
    get_target: _Accessor = None,
) -> bool:
    """True if the directed graph contains a cycle (self-loops included)."""
    return detect_cycle(n, links, get_source, get_target) is not None


def remove_cycles(
    n: int,
    links: Sequence[LinkLike],
    get_source: _Accessor = None,
    get_target: _Accessor = None,
) -> tuple[list[dict[str, int]], set[int]]:
    """
    Make a graph acyclic by reversing the back edges of a depth-first search.

    Args:
        n: Number of nodes
        links: Directed edges
        get_source: Function to extract source index from link
        get_target: Function to extract target index from link

    Returns:
        Tuple of (new_links, reversed_indices) where:
        - new_links: One {"source", "target"} dict per valid input link, with
          back edges reversed
        - reversed_indices: Indices of the input links that were reversed

    Example:
        >>> links = [{'source': 0, 'target': 1}, {'source': 1, 'target': 0}]
        >>> new_links, reversed = remove_cycles(2, links)
        >>> reversed
        {1}
    """
    reversed_indices: set[int] = set()

    def reverse(path: list[int], target: int, link_index: int) -> bool:
        reversed_indices.add(link_index)
        return False

    _depth_first(n, _adjacency(n, links, get_source, get_target), reverse)

    new_links: list[dict[str, int]] = []
    for i, src, tgt in _edges(n, links, get_source, get_target):
        if i in reversed_indices:
            src, tgt = tgt, src
        new_links.append({"source": src, "target": tgt})
    return new_links, reversed_indices


# =============================================================================
# Layer Assignment
# =============================================================================


def assign_layers_longest_path(
    n: int,
    links: Sequence[LinkLike],
    get_source: _Accessor = None,
    get_target: _Accessor = None,
) -> list[list[int]]:
    """
    Assign every node to a layer one below its deepest predecessor.

    Nodes without predecessors go to layer 0, so every edge of a DAG points
    to a later layer. Nodes on a cycle, or downstream of one, are
    placed in layer 0; run remove_cycles() first.

    Args:
        n: Number of nodes
        links: Directed edges
        get_source: Function to extract source index from link
        get_target: Function to extract target index from link

    Returns:
        Layers of node indices, each in ascending index order.

    Example:
        >>> links = [{'source': 0, 'target': 1}, {'source': 0, 'target': 2},
        ...          {'source': 1, 'target': 3}]
        >>> assign_layers_longest_path(4, links)
        [[0], [1, 2], [3]]
    """
    if n == 0:
        return []

    outgoing: list[list[int]] = [[] for _ in range(n)]
    in_degree = [0] * n
    for _, src, tgt in _edges(n, links, get_source, get_target):
        outgoing[src].append(tgt)
        in_degree[tgt] += 1

    # Kahn's order finalizes every predecessor before its successors
    node_layer = [0] * n
    queue = deque(i for i in range(n) if in_degree[i] == 0)
    while queue:
        node = queue.popleft()
        for child in outgoing[node]:
            node_layer[child] = max(node_layer[child], node_layer[node] + 1)
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)
    for i in range(n):
        if in_degree[i] > 0:
            node_layer[i] = 0

    layers: list[list[int]] = [[] for _ in range(max(node_layer) + 1)]
    for i in range(n):
        layers[node_layer[i]].append(i)
    return layers


# =============================================================================
# Crossing Counting
# =============================================================================


def count_crossings(
    layers: list[list[int]],
    links: Sequence[LinkLike],
    get_source: _Accessor = None,
    get_target: _Accessor = None,
) -> int:
    """
    Count pairwise edge crossings of a layered ordering.

    Edges are grouped by the pair of layers they connect; two edges of the
    same group cross when their endpoints are ordered oppositely in the two
    layers. Edges sharing an endpoint never cross. Links to nodes that are
    not in any layer are ignored.

    Args:
        layers: Node indices per layer, in drawing order
        links: Directed edges
        get_source: Function to extract source index from link
        get_target: Function to extract target index from link

    Returns:
        Number of edge crossings.
    """
    node_layer: dict[int, int] = {}
    node_pos: dict[int, int] = {}
    for layer_idx, layer in enumerate(layers):
        for pos, node in enumerate(layer):
            node_layer[node] = layer_idx
            node_pos[node] = pos

    n = max(node_layer, default=-1) + 1
    groups: dict[tuple[int, int], list[tuple[int, int]]] = {}
    for _, src, tgt in _edges(n, links, get_source, get_target):
        if src not in node_layer or tgt not in node_layer:
            continue
        if node_layer[src] > node_layer[tgt]:
            src, tgt = tgt, src
        key = (node_layer[src], node_layer[tgt])
        groups.setdefault(key, []).append((node_pos[src], node_pos[tgt]))

    return sum(_pair_crossings(edges) for edges in groups.values())


def _pair_crossings(edges: Sequence[tuple[int, int]]) -> int:
    """Count crossings among edges given as (upper position, lower position)."""
    if len(edges) < 2:
        return 0
    positions = np.asarray(edges, dtype=np.int64)
    du = positions[:, 0, None] - positions[None, :, 0]
    dl = positions[:, 1, None] - positions[None, :, 1]
    return int(np.count_nonzero(np.triu(du * dl < 0, k=1)))


__all__ = [
    "detect_cycle",
    "has_cycle",
    "remove_cycles",
    "assign_layers_longest_path",
    "count_crossings",
]
