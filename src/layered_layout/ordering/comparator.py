"""
Three-tier node comparator for order-constrained barycenter sorting.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .strategies import PartialOrderStrategy
from .tracker import OrderConstraintTracker


class OrderComparator:
    """
    Compares two nodes of the layer being sorted.

    Tiers, in order of precedence:
    1. Relations already recorded in the tracker are returned as is.
    2. If the partial order strategy constrains the pair and separates the
       nodes, its answer is recorded and returned.
    3. Barycenters: a node with a value sorts before one without; two values
       compare numerically; two missing values are equal. A strict answer is
       recorded before it is returned.

    Comparing and recording are one operation, so the comparator's answers
    depend on the order in which pairs are compared. Use it only with
    insertion_sort(), which never moves a node past one it was ordered after.

    Args:
        tracker: Relations recorded during the current sort pass
        barycenters: Barycenter value per node; None means no information
        strategy: Partial order taking precedence over barycenters, if any
    """

    def __init__(
        self,
        tracker: OrderConstraintTracker,
        barycenters: Mapping[int, Optional[float]],
        strategy: Optional[PartialOrderStrategy] = None,
    ) -> None:
        self.tracker = tracker
        self.barycenters = barycenters
        self.strategy = strategy

    def __call__(self, a: int, b: int) -> int:
        relation = self.tracker.relation_of(a, b)
        if relation != 0:
            return relation

        if self.strategy is not None and self.strategy.constrains(a, b):
            value = self.strategy.compare(a, b)
            if value != 0:
                return self._commit(a, b, value)

        return self._commit(a, b, self._compare_barycenters(a, b))

    def _compare_barycenters(self, a: int, b: int) -> int:
        value_a = self.barycenters.get(a)
        value_b = self.barycenters.get(b)
        if value_a is not None and value_b is not None:
            return (value_a > value_b) - (value_a < value_b)
        if value_a is not None:
            return -1
        if value_b is not None:
            return 1
        return 0

    def _commit(self, a: int, b: int, value: int) -> int:
        if value < 0:
            self.tracker.record(b, a)
        elif value > 0:
            self.tracker.record(a, b)
        return value


__all__ = ["OrderComparator"]
