"""
Hard in-layer constraints applied after a layer has been sorted.
"""

from __future__ import annotations

import heapq
from abc import ABC, abstractmethod

from ..validation import ConstraintCycleError
from .graph import LayeredGraph


class ConstraintResolver(ABC):
    """Post-processes a sorted layer; its reordering is authoritative."""

    @abstractmethod
    def process_constraints(self, layer: list[int]) -> None:
        """Reorder `layer` in place so that all hard constraints hold."""
        pass


class NullConstraintResolver(ConstraintResolver):
    """Resolver for graphs without hard in-layer constraints."""

    def process_constraints(self, layer: list[int]) -> None:
        return None


class SuccessorConstraintResolver(ConstraintResolver):
    """
    Enforces in-layer successor constraints.

    A node listing another node of the same layer in its
    `in_layer_successors` must be placed before it. Successors in other
    layers are ignored. Among the orders satisfying the constraints, the one
    closest to the current order is chosen: nodes are emitted in current
    position order, except that a node waits until all nodes constrained to
    precede it have been emitted.
    """

    def __init__(self, graph: LayeredGraph) -> None:
        self._graph = graph

    def process_constraints(self, layer: list[int]) -> None:
        position = {node: pos for pos, node in enumerate(layer)}
        successors: dict[int, list[int]] = {node: [] for node in layer}
        pending = dict.fromkeys(layer, 0)

        constrained = False
        for node in layer:
            for succ in self._graph.nodes[node].in_layer_successors:
                if succ in position and succ != node:
                    successors[node].append(succ)
                    pending[succ] += 1
                    constrained = True
        if not constrained:
            return

        ready = [(position[node], node) for node in layer if pending[node] == 0]
        heapq.heapify(ready)
        result: list[int] = []
        while ready:
            _, node = heapq.heappop(ready)
            result.append(node)
            for succ in successors[node]:
                pending[succ] -= 1
                if pending[succ] == 0:
                    heapq.heappush(ready, (position[succ], succ))

        if len(result) != len(layer):
            stuck = sorted(node for node in layer if pending[node] > 0)
            raise ConstraintCycleError(f"In-layer successor constraints form a cycle among {stuck}")

        layer[:] = result


__all__ = [
    "ConstraintResolver",
    "NullConstraintResolver",
    "SuccessorConstraintResolver",
]
