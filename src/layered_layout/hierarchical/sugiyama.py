"""
Sugiyama layered graph layout algorithm.

Based on the framework from:
"Methods for Visual Understanding of Hierarchical System Structures"
by Sugiyama, Tagawa, and Toda (1981)

This algorithm produces layered layouts for directed graphs with the
following phases:
1. Cycle removal
2. Layer assignment and long edge splitting
3. Crossing minimization (order-constrained barycenter heuristic)
4. Coordinate assignment
"""

from __future__ import annotations

import warnings
from operator import itemgetter
from typing import Any, Callable, Optional, Sequence

from ..base import StaticLayout
from ..ordering import (
    ConstrainedBarycenterHeuristic,
    LaneBarycenterHeuristic,
    LayeredGraph,
    ModelOrderBarycenterHeuristic,
)
from ..preprocessing import assign_layers_longest_path, count_crossings, remove_cycles
from ..types import (
    Event,
    EventType,
    LinkLike,
    Node,
    NodeLike,
    SizeType,
)
from ..validation import validate_iterations, validate_lanes

_ORIENTATIONS = {"top-to-bottom", "bottom-to-top", "left-to-right", "right-to-left"}
_ORDERINGS = {"barycenter", "model-order", "lane"}

_first = itemgetter(0)
_second = itemgetter(1)


def _fit(separation: float, extent: float, count: int) -> float:
    """Shrink a separation so `count` evenly spaced items fit in `extent`."""
    if count < 2:
        return 0.0
    if extent <= 0:
        return separation
    return min(separation, extent / (count - 1))


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


class SugiyamaLayout(StaticLayout):
    """
    Sugiyama layered layout.

    Arranges nodes in layers with edges flowing downward and orders each
    layer to reduce edge crossings. The order within a layer can be
    constrained:

    - "barycenter": order by barycenter only
    - "model-order": real nodes with a model_order never change their
      relative order
    - "lane": nodes are grouped by lane, lower lanes first

    Example:
        layout = SugiyamaLayout(
            nodes=[{"lane": 0}, {"lane": 1}, {"lane": 0}, {"lane": 1}],
            links=[
                {'source': 0, 'target': 2},
                {'source': 0, 'target': 3},
                {'source': 1, 'target': 2},
            ],
            size=(800, 600),
            ordering="lane",
        )
        layout.run()
        layout.layers  # [[0, 1], [2, 3]]
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        size: SizeType = (1.0, 1.0),
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # Sugiyama-specific parameters
        layer_separation: float = 100.0,
        node_separation: float = 50.0,
        orientation: str = "top-to-bottom",
        crossing_iterations: int = 24,
        ordering: str = "barycenter",
        thoroughness: int = 1,
        corrective_sort: bool = False,
    ) -> None:
        """
        Initialize Sugiyama layout.

        Args:
            nodes: List of nodes
            links: List of links
            size: Canvas size as (width, height)
            random_seed: Random seed for reproducible layouts
            on_start: Callback for start event
            on_tick: Callback fired after every crossing minimization sweep
            on_end: Callback for end event
            layer_separation: Vertical separation between layers.
            node_separation: Horizontal separation between nodes in same layer.
            orientation: Layout direction - 'top-to-bottom', 'bottom-to-top',
                'left-to-right', or 'right-to-left'.
            crossing_iterations: Number of sweeps for crossing minimization.
            ordering: Constraint on the order within layers - 'barycenter',
                'model-order', or 'lane'.
            thoroughness: Number of crossing minimization attempts. Attempts
                after the first start from a randomized first layer; the
                ordering with the fewest crossings wins.
            corrective_sort: Run a full sort after the insertion sort of each
                layer (lane ordering only).
        """
        super().__init__(
            nodes=nodes,
            links=links,
            size=size,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        # Sugiyama-specific configuration
        self._layer_separation: float = float(layer_separation)
        self._node_separation: float = float(node_separation)
        if orientation not in _ORIENTATIONS:
            raise ValueError(f"orientation must be one of {_ORIENTATIONS}")
        self._orientation: str = orientation
        self._crossing_iterations: int = max(1, int(crossing_iterations))
        if ordering not in _ORDERINGS:
            raise ValueError(f"ordering must be one of {_ORDERINGS}")
        self._ordering: str = ordering
        self._thoroughness: int = validate_iterations(int(thoroughness))
        self._corrective_sort: bool = bool(corrective_sort)

        # Internal state
        self._graph: Optional[LayeredGraph] = None
        self._crossings: int = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def layer_separation(self) -> float:
        """Get vertical separation between layers."""
        return self._layer_separation

    @layer_separation.setter
    def layer_separation(self, value: float) -> None:
        """Set vertical separation between layers."""
        self._layer_separation = float(value)

    @property
    def node_separation(self) -> float:
        """Get horizontal separation between nodes in same layer."""
        return self._node_separation

    @node_separation.setter
    def node_separation(self, value: float) -> None:
        """Set horizontal separation between nodes in same layer."""
        self._node_separation = float(value)

    @property
    def orientation(self) -> str:
        """Get layout orientation."""
        return self._orientation

    @orientation.setter
    def orientation(self, value: str) -> None:
        """Set layout orientation."""
        if value not in _ORIENTATIONS:
            raise ValueError(f"orientation must be one of {_ORIENTATIONS}")
        self._orientation = value

    @property
    def crossing_iterations(self) -> int:
        """Get number of crossing minimization sweeps."""
        return self._crossing_iterations

    @crossing_iterations.setter
    def crossing_iterations(self, value: int) -> None:
        """Set number of crossing minimization sweeps."""
        self._crossing_iterations = max(1, int(value))

    @property
    def ordering(self) -> str:
        """Get the in-layer ordering constraint."""
        return self._ordering

    @ordering.setter
    def ordering(self, value: str) -> None:
        """Set the in-layer ordering constraint."""
        if value not in _ORDERINGS:
            raise ValueError(f"ordering must be one of {_ORDERINGS}")
        self._ordering = value

    @property
    def thoroughness(self) -> int:
        """Get number of crossing minimization attempts."""
        return self._thoroughness

    @thoroughness.setter
    def thoroughness(self, value: int) -> None:
        """Set number of crossing minimization attempts."""
        self._thoroughness = validate_iterations(int(value))

    @property
    def corrective_sort(self) -> bool:
        """Get whether lane ordering runs a full corrective sort."""
        return self._corrective_sort

    @corrective_sort.setter
    def corrective_sort(self, value: bool) -> None:
        """Set whether lane ordering runs a full corrective sort."""
        self._corrective_sort = bool(value)

    @property
    def layers(self) -> list[list[int]]:
        """Final order of real nodes in every layer (empty before run())."""
        if self._graph is None:
            return []
        return self._graph.real_layers()

    @property
    def layered_graph(self) -> Optional[LayeredGraph]:
        """Layered graph including dummy nodes (None before run())."""
        return self._graph

    @property
    def crossings(self) -> int:
        """Number of edge crossings of the final ordering."""
        return self._crossings

    # -------------------------------------------------------------------------
    # Phase 1: Cycle Removal
    # -------------------------------------------------------------------------

    def _break_cycles(self) -> list[tuple[int, int]]:
        """Return the edge list with self-loops dropped and cycles broken."""
        edges = [(self._get_source_index(link), self._get_target_index(link)) for link in self._links]

        self_loops = sum(1 for src, tgt in edges if src == tgt)
        if self_loops:
            warnings.warn(
                f"Ignoring {self_loops} self-loop(s); layered layout does not route them.",
                GraphStructureWarning,
                stacklevel=4,
            )
            edges = [(src, tgt) for src, tgt in edges if src != tgt]

        new_links, reversed_indices = remove_cycles(
            len(self._nodes), edges, get_source=_first, get_target=_second
        )
        if reversed_indices:
            warnings.warn(
                f"Reversed {len(reversed_indices)} edge(s) to break cycles. "
                "Sugiyama layout is designed for DAGs; results may be suboptimal.",
                GraphStructureWarning,
                stacklevel=4,
            )
        return [(link["source"], link["target"]) for link in new_links]

    # -------------------------------------------------------------------------
    # Phase 2: Layer Assignment
    # -------------------------------------------------------------------------

    def _build_layered_graph(self, edges: list[tuple[int, int]]) -> LayeredGraph:
        """Assign layers by longest path and split long edges into dummies."""
        layers = assign_layers_longest_path(
            len(self._nodes), edges, get_source=_first, get_target=_second
        )

        if self._ordering == "model-order":
            # Layers must start out in model order
            for layer in layers:
                layer.sort(key=self._model_order_key)

        return LayeredGraph.from_layering(
            self._nodes, edges, layers, get_source=_first, get_target=_second
        )

    def _model_order_key(self, node: int) -> tuple[bool, int]:
        order = self._nodes[node].model_order
        return (order is None, order if order is not None else 0)

    # -------------------------------------------------------------------------
    # Phase 3: Crossing Minimization
    # -------------------------------------------------------------------------

    def _create_heuristic(self, graph: LayeredGraph) -> ConstrainedBarycenterHeuristic:
        """Create the per-layer heuristic for the configured ordering."""
        if self._ordering == "model-order":
            return ModelOrderBarycenterHeuristic(graph, random_seed=self._random_seed)
        if self._ordering == "lane":
            validate_lanes(self._nodes)
            return LaneBarycenterHeuristic(
                graph,
                corrective_sort=self._corrective_sort,
                random_seed=self._random_seed,
            )
        return ConstrainedBarycenterHeuristic(graph, random_seed=self._random_seed)

    def _minimize_crossings(self, graph: LayeredGraph) -> None:
        """Sweep the layers with the heuristic, keeping the best ordering."""
        edges = [(src, tgt) for src, targets in enumerate(graph.outgoing) for tgt in targets]

        def crossings() -> int:
            return count_crossings(graph.layers, edges, get_source=_first, get_target=_second)

        heuristic = self._create_heuristic(graph)
        initial = [list(layer) for layer in graph.layers]
        best_layers = [list(layer) for layer in initial]
        best: Optional[int] = None

        for attempt in range(self._thoroughness):
            graph.layers[:] = [list(layer) for layer in initial]

            for iteration in range(self._crossing_iterations):
                if iteration % 2 == 0:
                    # Sweep down; the first layer is only ordered at the start
                    if iteration == 0:
                        heuristic.minimize_crossings(
                            graph.layers[0],
                            pre_ordered=attempt == 0,
                            randomize=attempt > 0,
                            forward=True,
                        )
                    for layer_idx in range(1, len(graph.layers)):
                        heuristic.minimize_crossings(
                            graph.layers[layer_idx], pre_ordered=True, randomize=False, forward=True
                        )
                else:
                    # Sweep up
                    for layer_idx in range(len(graph.layers) - 2, -1, -1):
                        heuristic.minimize_crossings(
                            graph.layers[layer_idx], pre_ordered=True, randomize=False, forward=False
                        )

                current = crossings()
                self.trigger(
                    {
                        "type": EventType.tick,
                        "attempt": attempt,
                        "iteration": iteration,
                        "crossings": current,
                    }
                )
                if best is None or current < best:
                    best = current
                    best_layers = [list(layer) for layer in graph.layers]
                if current == 0:
                    break

            if best == 0:
                break

        graph.layers[:] = best_layers
        self._crossings = best if best is not None else crossings()

    # -------------------------------------------------------------------------
    # Phase 4: Coordinate Assignment
    # -------------------------------------------------------------------------

    def _assign_coordinates(self, graph: LayeredGraph) -> None:
        """
        Place real nodes on an evenly spaced grid of layers and slots.

        Dummy nodes keep their slot, so long edges get a column of their own,
        but receive no coordinates. Separations shrink to fit the canvas.
        """
        padding = 50.0
        width, height = self._canvas_size
        vertical = self._orientation in ("top-to-bottom", "bottom-to-top")
        # Extent available along the layer axis and along the slot axis
        layer_extent = (height if vertical else width) - 2 * padding
        slot_extent = (width if vertical else height) - 2 * padding

        n_layers = len(graph.layers)
        widest = max(len(layer) for layer in graph.layers)
        layer_sep = _fit(self._layer_separation, layer_extent, n_layers)
        slot_sep = _fit(self._node_separation, slot_extent, widest)

        for layer_idx, layer in enumerate(graph.layers):
            along = layer_idx * layer_sep if n_layers > 1 else max(layer_extent, 0.0) / 2
            start = (slot_extent - (len(layer) - 1) * slot_sep) / 2
            for slot, node_idx in enumerate(layer):
                if graph.is_dummy(node_idx):
                    continue
                across = start + slot * slot_sep
                self._place(self._nodes[node_idx], padding + along, padding + across)

    def _place(self, node: Node, along: float, across: float) -> None:
        """Set coordinates from the layer axis and slot axis offsets."""
        width, height = self._canvas_size
        if self._orientation == "top-to-bottom":
            node.x, node.y = across, along
        elif self._orientation == "bottom-to-top":
            node.x, node.y = across, height - along
        elif self._orientation == "left-to-right":
            node.x, node.y = along, across
        else:
            node.x, node.y = width - along, across

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute Sugiyama layout."""
        self._graph = None
        self._crossings = 0
        if not self._nodes:
            return

        # Phase 1: Cycle removal
        edges = self._break_cycles()

        # Phase 2: Layer assignment
        graph = self._build_layered_graph(edges)

        # Phase 3: Crossing minimization
        self._minimize_crossings(graph)

        # Phase 4: Coordinate assignment
        self._assign_coordinates(graph)

        self._graph = graph


__all__ = ["SugiyamaLayout", "GraphStructureWarning"]
