"""
Online transitive closure of ordering decisions.

While a layer is being sorted, every strict decision the comparator makes is
recorded here. Later comparisons consult the tracker first, so a decision
that follows from earlier ones by transitivity is never contradicted, even
when the heuristic values alone would answer differently.
"""

from __future__ import annotations

from collections.abc import Hashable

from ..validation import ContradictoryOrderError


class OrderConstraintTracker:
    """
    Transitively closed "greater than" relation over the nodes of one layer.

    For every touched node two sets are kept: the nodes it is known to be
    greater than and the nodes it is known to be less than. Both are updated
    eagerly on each record() so that relation_of() is a constant time lookup.

    A tracker is only valid for a single sort pass: the relations it holds
    reflect the barycenter values and partial order at that moment. Create a
    fresh tracker (or call reset()) before sorting again.

    Example:
        tracker = OrderConstraintTracker()
        tracker.record(3, 2)
        tracker.record(2, 1)
        tracker.relation_of(3, 1)  # 1, i.e. 3 > 1
    """

    def __init__(self) -> None:
        self._greater_than: dict[Hashable, set[Hashable]] = {}
        self._less_than: dict[Hashable, set[Hashable]] = {}

    def __len__(self) -> int:
        """Number of nodes that take part in at least one relation."""
        return len(self._greater_than.keys() | self._less_than.keys())

    def relation_of(self, a: Hashable, b: Hashable) -> int:
        """
        Look up the recorded relation between two nodes.

        Returns:
            1 if a > b is recorded, -1 if a < b is recorded, 0 if unknown.
        """
        below_a = self._greater_than.get(a)
        if below_a is not None and b in below_a:
            return 1
        above_a = self._less_than.get(a)
        if above_a is not None and b in above_a:
            return -1
        return 0

    def record(self, greater: Hashable, lesser: Hashable) -> None:
        """
        Record greater > lesser and close the relation transitively.

        Every node already known to be at least `greater` becomes greater than
        every node already known to be at most `lesser`.

        Raises:
            ContradictoryOrderError: If lesser > greater is already recorded,
                or if both arguments are the same node.
        """
        if greater == lesser:
            raise ContradictoryOrderError(f"Cannot order node {greater!r} against itself")

        relation = self.relation_of(greater, lesser)
        if relation > 0:
            return
        if relation < 0:
            raise ContradictoryOrderError(
                f"Cannot record {greater!r} > {lesser!r}: the opposite is already recorded"
            )

        # Frontiers are taken from the state before this call
        upper = set(self._less_than.get(greater, ()))
        upper.add(greater)
        lower = set(self._greater_than.get(lesser, ()))
        lower.add(lesser)

        for node in upper:
            self._greater_than.setdefault(node, set()).update(lower)
        for node in lower:
            self._less_than.setdefault(node, set()).update(upper)

    def greater_than(self, node: Hashable) -> frozenset[Hashable]:
        """Nodes that `node` is known to be greater than."""
        return frozenset(self._greater_than.get(node, ()))

    def less_than(self, node: Hashable) -> frozenset[Hashable]:
        """Nodes that `node` is known to be less than."""
        return frozenset(self._less_than.get(node, ()))

    def reset(self) -> None:
        """Forget every recorded relation."""
        self._greater_than = {}
        self._less_than = {}


__all__ = ["OrderConstraintTracker"]
