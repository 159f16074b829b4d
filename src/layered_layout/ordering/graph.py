"""
Layered graph container used by the crossing minimization phase.

A LayeredGraph holds real nodes and the dummy nodes inserted for edges that
span several layers, the current order of every layer, and directed
adjacency lists. Nodes are addressed by their integer index, which is the
handle the ordering heuristics sort.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence

from ..preprocessing import _default_get_source, _default_get_target
from ..types import LinkLike, Node, NodeKind
from ..validation import (
    DummyChainCycleError,
    InvalidLayeringError,
    InvalidLinkError,
    validate_layering,
)


class LayeredGraph:
    """
    Directed graph whose nodes are assigned to ordered layers.

    Attributes:
        nodes: All nodes, real ones first, indexed by handle
        layers: Node handles per layer; the order within a layer is the
            drawing order and is mutated by crossing minimization
        incoming: For every node, the sources of its incoming edges
        outgoing: For every node, the targets of its outgoing edges

    Example:
        nodes = [Node(), Node(), Node()]
        graph = LayeredGraph.from_layering(
            nodes,
            links=[{"source": 0, "target": 2}, {"source": 1, "target": 2}],
            layers=[[0], [1], [2]],
        )
        graph.layers  # [[0], [1, 3], [2]], node 3 is a long-edge dummy
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        layers: Sequence[Sequence[int]],
        edges: Iterable[tuple[int, int]] = (),
    ) -> None:
        self.nodes: list[Node] = list(nodes)
        self.layers: list[list[int]] = [list(layer) for layer in layers]
        self.incoming: list[list[int]] = [[] for _ in self.nodes]
        self.outgoing: list[list[int]] = [[] for _ in self.nodes]
        self._layer_index: dict[int, int] = validate_layering(self.layers, len(self.nodes))

        for i, node in enumerate(self.nodes):
            if node.index is None:
                node.index = i
        for src, tgt in edges:
            self.add_edge(src, tgt)

    @classmethod
    def from_layering(
        cls,
        nodes: Sequence[Node],
        links: Sequence[LinkLike],
        layers: Sequence[Sequence[int]],
        get_source: Optional[Callable[[Any], int]] = None,
        get_target: Optional[Callable[[Any], int]] = None,
    ) -> LayeredGraph:
        """
        Build a layered graph, splitting long edges into dummy chains.

        Every edge spanning k > 1 layers is replaced by a path through k - 1
        LONG_EDGE dummy nodes, one per intermediate layer. Dummies are
        appended to the end of their layer.

        Args:
            nodes: Real nodes of the graph
            links: Directed edges between real nodes
            layers: Layer assignment, each layer a list of node indices
            get_source: Function to extract source index from link
            get_target: Function to extract target index from link

        Returns:
            The layered graph including dummy nodes.

        Raises:
            InvalidLinkError: If a link references a missing node
            InvalidLayeringError: If a link does not point to a later layer
        """
        if get_source is None:
            get_source = _default_get_source
        if get_target is None:
            get_target = _default_get_target

        graph = cls(nodes, layers)
        n = len(graph.nodes)

        for i, link in enumerate(links):
            src = get_source(link)
            tgt = get_target(link)
            if not (0 <= src < n and 0 <= tgt < n):
                raise InvalidLinkError(f"Link {i}: {src} -> {tgt} references a missing node")
            src_layer = graph.layer_of(src)
            tgt_layer = graph.layer_of(tgt)
            if src_layer >= tgt_layer:
                raise InvalidLayeringError(
                    f"Link {i}: edge {src} -> {tgt} goes from layer {src_layer} "
                    f"to layer {tgt_layer}"
                )

            previous = src
            for layer_idx in range(src_layer + 1, tgt_layer):
                dummy = graph.add_node(Node(kind=NodeKind.LONG_EDGE, link=i), layer_idx)
                graph.add_edge(previous, dummy)
                previous = dummy
            graph.add_edge(previous, tgt)

        return graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_node(self, node: Node, layer_idx: int) -> int:
        """Append a node to the end of a layer and return its handle."""
        handle = len(self.nodes)
        node.index = handle
        self.nodes.append(node)
        self.incoming.append([])
        self.outgoing.append([])
        self.layers[layer_idx].append(handle)
        self._layer_index[handle] = layer_idx
        return handle

    def add_edge(self, src: int, tgt: int) -> None:
        """Add a directed edge between two existing nodes."""
        self.outgoing[src].append(tgt)
        self.incoming[tgt].append(src)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def layer_of(self, node: int) -> int:
        """Index of the layer containing `node`."""
        return self._layer_index[node]

    def is_dummy(self, node: int) -> bool:
        """True if `node` was inserted by layering rather than given as input."""
        return self.nodes[node].is_dummy

    def positions(self) -> dict[int, int]:
        """Current position of every node within its layer."""
        return {node: pos for layer in self.layers for pos, node in enumerate(layer)}

    def real_layers(self) -> list[list[int]]:
        """Current layer orders restricted to real nodes."""
        return [[node for node in layer if not self.is_dummy(node)] for layer in self.layers]

    def actual_source(self, node: int) -> Optional[int]:
        """
        Follow incoming edges through chain dummies to the first real endpoint.

        Only the first incoming edge of each node is followed. Returns None
        if the walk reaches a node without incoming edges before finding a
        node that is not a chain dummy.

        Raises:
            DummyChainCycleError: If the walk revisits a node.
        """
        return self._walk_chain(node, self.incoming)

    def actual_target(self, node: int) -> Optional[int]:
        """
        Follow outgoing edges through chain dummies to the first real endpoint.

        Mirror image of actual_source().
        """
        return self._walk_chain(node, self.outgoing)

    def _walk_chain(self, node: int, adjacency: list[list[int]]) -> Optional[int]:
        visited = {node}
        current = node
        while adjacency[current]:
            current = adjacency[current][0]
            if not self.nodes[current].kind.is_chain_dummy:
                return current
            if current in visited:
                raise DummyChainCycleError(
                    f"Dummy chain starting at node {node} revisits node {current}"
                )
            visited.add(current)
        return None

    def __repr__(self) -> str:
        return f"LayeredGraph(nodes={len(self.nodes)}, layers={len(self.layers)})"


__all__ = ["LayeredGraph"]
