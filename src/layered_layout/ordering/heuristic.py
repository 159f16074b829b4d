"""
Order-constrained barycenter heuristic for single-layer crossing reduction.

The heuristic orders one layer at a time. Nodes are sorted by barycenter
value, except where a partial order (model order or lanes) dictates their
relative position. Mixing a partial order with barycenter values makes the
comparison depend on earlier decisions, so the layer is sorted with an
insertion sort backed by an OrderConstraintTracker that is created for the
call and torn down when it ends.

Example:
    graph = LayeredGraph.from_layering(nodes, links, layers)
    heuristic = LaneBarycenterHeuristic(graph)
    for layer in graph.layers[1:]:
        heuristic.minimize_crossings(layer, pre_ordered=True, randomize=False, forward=True)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

from .barycenter import BarycenterCalculator
from .comparator import OrderComparator
from .constraints import ConstraintResolver, SuccessorConstraintResolver
from .graph import LayeredGraph
from .sorting import comparison_sort, insertion_sort
from .strategies import LaneStrategy, ModelOrderStrategy, PartialOrderStrategy
from .tracker import OrderConstraintTracker


class ConstrainedBarycenterHeuristic:
    """
    Barycenter crossing minimization honoring an optional partial order.

    The heuristic keeps no per-call state, so a single instance may order
    different layers from several threads at once, with two limits:
    - Barycenters read the positions of the neighboring layer, so a layer
      must not be ordered while its neighbor is being reordered (and calls
      on the same layer must not overlap)
    - The calculator's random generator is shared, so synthesized and
      randomized values depend on how concurrent calls interleave; only
      layers whose nodes all have neighbors order deterministically

    Args:
        graph: Layered graph the layers belong to
        strategy: Partial order taking precedence over barycenters. None
            sorts by barycenter only.
        calculator: Source of barycenter values. Defaults to a
            BarycenterCalculator over `graph`.
        constraint_resolver: Hard constraint post-processing run after
            sorting. None skips it.
        corrective_sort: Run a second, full sort after the insertion sort
        random_seed: Seed for the default calculator
    """

    def __init__(
        self,
        graph: LayeredGraph,
        strategy: Optional[PartialOrderStrategy] = None,
        *,
        calculator: Optional[BarycenterCalculator] = None,
        constraint_resolver: Optional[ConstraintResolver] = None,
        corrective_sort: bool = False,
        random_seed: Optional[int] = None,
    ) -> None:
        self._graph = graph
        self._strategy = strategy
        self._calculator = calculator or BarycenterCalculator(graph, random_seed=random_seed)
        self._constraint_resolver = constraint_resolver
        self._corrective_sort = bool(corrective_sort)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> LayeredGraph:
        """Get the layered graph."""
        return self._graph

    @property
    def strategy(self) -> Optional[PartialOrderStrategy]:
        """Get the partial order strategy."""
        return self._strategy

    @property
    def constraint_resolver(self) -> Optional[ConstraintResolver]:
        """Get the hard constraint resolver."""
        return self._constraint_resolver

    @property
    def corrective_sort(self) -> bool:
        """Get whether a full corrective sort follows the insertion sort."""
        return self._corrective_sort

    @corrective_sort.setter
    def corrective_sort(self, value: bool) -> None:
        """Set whether a full corrective sort follows the insertion sort."""
        self._corrective_sort = bool(value)

    # -------------------------------------------------------------------------
    # Crossing Minimization
    # -------------------------------------------------------------------------

    def minimize_crossings(
        self,
        layer: list[int],
        pre_ordered: bool,
        randomize: bool,
        forward: bool,
    ) -> None:
        """
        Reorder a layer in place to reduce crossings with its fixed neighbor.

        Args:
            layer: Node handles of the layer, reordered in place
            pre_ordered: Whether the current order of the layer is meaningful;
                controls how missing barycenters are synthesized
            randomize: Use random barycenters instead of computed ones
            forward: Sweep direction; True orders against the previous layer
        """
        if self._strategy is not None:
            self._strategy.arrange(layer)
        barycenters = self.compute_barycenters(layer, pre_ordered, randomize, forward)

        if len(layer) <= 1:
            return

        with self._sort_pass(barycenters) as compare:
            insertion_sort(layer, compare)

        if self._corrective_sort:
            with self._sort_pass(barycenters) as compare:
                comparison_sort(layer, compare)

        if self._constraint_resolver is not None:
            self._constraint_resolver.process_constraints(layer)

    def compute_barycenters(
        self,
        layer: list[int],
        pre_ordered: bool,
        randomize: bool,
        forward: bool,
    ) -> dict[int, Optional[float]]:
        """Barycenter value per node of the layer, as used for sorting."""
        if randomize:
            states = self._calculator.randomize(layer)
        else:
            states = self._calculator.calculate(layer, forward)
            self._calculator.fill_in_unknown(layer, states, pre_ordered)
        return {node: state.barycenter for node, state in states.items()}

    @contextmanager
    def _sort_pass(self, barycenters: Mapping[int, Optional[float]]) -> Iterator[OrderComparator]:
        tracker = OrderConstraintTracker()
        try:
            yield OrderComparator(tracker, barycenters, self._strategy)
        finally:
            tracker.reset()


class ModelOrderBarycenterHeuristic(ConstrainedBarycenterHeuristic):
    """
    Barycenter heuristic that never violates the model order of real nodes.

    Real nodes with a model order are first put into model order among the
    positions they occupy, then sorted. Dummy nodes and real nodes without a model order float freely by
    barycenter.
    """

    def __init__(
        self,
        graph: LayeredGraph,
        *,
        calculator: Optional[BarycenterCalculator] = None,
        constraint_resolver: Optional[ConstraintResolver] = None,
        corrective_sort: bool = False,
        random_seed: Optional[int] = None,
    ) -> None:
        super().__init__(
            graph,
            ModelOrderStrategy(graph),
            calculator=calculator,
            constraint_resolver=constraint_resolver,
            corrective_sort=corrective_sort,
            random_seed=random_seed,
        )


class LaneBarycenterHeuristic(ConstrainedBarycenterHeuristic):
    """
    Barycenter heuristic that keeps lanes contiguous, lower lanes first.

    Sorted layers are handed to a SuccessorConstraintResolver unless another
    resolver is given.
    """

    def __init__(
        self,
        graph: LayeredGraph,
        *,
        calculator: Optional[BarycenterCalculator] = None,
        constraint_resolver: Optional[ConstraintResolver] = None,
        corrective_sort: bool = False,
        random_seed: Optional[int] = None,
    ) -> None:
        super().__init__(
            graph,
            LaneStrategy(graph),
            calculator=calculator,
            constraint_resolver=constraint_resolver or SuccessorConstraintResolver(graph),
            corrective_sort=corrective_sort,
            random_seed=random_seed,
        )


__all__ = [
    "ConstrainedBarycenterHeuristic",
    "ModelOrderBarycenterHeuristic",
    "LaneBarycenterHeuristic",
]
