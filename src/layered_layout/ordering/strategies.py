"""
Partial orders that take precedence over barycenter values.

A strategy answers two questions about a pair of nodes in the layer being
sorted: whether the pair is constrained at all, and if so, which node must
come first. The comparator consults it before falling back to barycenters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..types import NodeKind
from ..validation import MissingModelOrderError, UnresolvedLaneError
from .graph import LayeredGraph


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class PartialOrderStrategy(ABC):
    """Abstract partial order over the nodes of a layered graph."""

    def __init__(self, graph: LayeredGraph) -> None:
        self._graph = graph

    @property
    def graph(self) -> LayeredGraph:
        """The graph whose nodes are compared."""
        return self._graph

    @abstractmethod
    def constrains(self, a: int, b: int) -> bool:
        """Whether this partial order says anything about the pair."""
        pass

    @abstractmethod
    def compare(self, a: int, b: int) -> int:
        """
        Compare two constrained nodes.

        Returns:
            -1 if a must precede b, 1 if b must precede a, 0 if the partial
            order places them together.
        """
        pass

    def arrange(self, layer: list[int]) -> None:
        """
        Reorder a layer in place so that it starts out consistent with the
        partial order. Called before sorting; the default leaves it as is.
        """


class ModelOrderStrategy(PartialOrderStrategy):
    """
    Keeps real nodes in their externally given model order.

    Only pairs of NORMAL nodes that both carry a model_order are constrained;
    every other pair is left to the barycenter values.

    The insertion sort keeps constrained nodes in order only if they arrive
    in order, so arrange() sorts them among the slots they occupy first.
    """

    def constrains(self, a: int, b: int) -> bool:
        return self._model_order(a) is not None and self._model_order(b) is not None

    def compare(self, a: int, b: int) -> int:
        return _sign(self.model_order_of(a) - self.model_order_of(b))

    def arrange(self, layer: list[int]) -> None:
        slots = [i for i, node in enumerate(layer) if self._model_order(node) is not None]
        ordered = sorted((layer[i] for i in slots), key=self.model_order_of)
        for slot, node in zip(slots, ordered):
            layer[slot] = node

    def model_order_of(self, node: int) -> int:
        """
        Model order index of a node.

        Raises:
            MissingModelOrderError: If the node is a dummy or has no index.
        """
        order = self._model_order(node)
        if order is None:
            raise MissingModelOrderError(f"Node {node} has no model order")
        return order

    def _model_order(self, node: int) -> Optional[int]:
        data = self._graph.nodes[node]
        return data.model_order if data.kind is NodeKind.NORMAL else None


class LaneStrategy(PartialOrderStrategy):
    """
    Groups nodes by lane, lower lanes first.

    Every node resolves to a lane, so every pair is constrained:
    - NORMAL nodes use their own lane
    - LONG_EDGE dummies use the larger lane of the edge's real endpoints
    - other dummies use the lane of their real source
    """

    def constrains(self, a: int, b: int) -> bool:
        return True

    def compare(self, a: int, b: int) -> int:
        return _sign(self.lane_of(a) - self.lane_of(b))

    def lane_of(self, node: int) -> int:
        """
        Resolve the lane of a node.

        Raises:
            UnresolvedLaneError: If the node, or the real endpoint its dummy
                chain leads to, has no lane.
        """
        kind = self._graph.nodes[node].kind
        if kind is NodeKind.NORMAL:
            return self._own_lane(node)
        if kind is NodeKind.LONG_EDGE:
            source = self._own_lane(self._endpoint(node, self._graph.actual_source(node)))
            target = self._own_lane(self._endpoint(node, self._graph.actual_target(node)))
            return max(source, target)
        return self._own_lane(self._endpoint(node, self._graph.actual_source(node)))

    def _own_lane(self, node: int) -> int:
        lane = self._graph.nodes[node].lane
        if lane is None:
            raise UnresolvedLaneError(f"Node {node} has no lane")
        return lane

    @staticmethod
    def _endpoint(node: int, endpoint: Optional[int]) -> int:
        if endpoint is None:
            raise UnresolvedLaneError(
                f"Dummy chain through node {node} does not end in a real node"
            )
        return endpoint


__all__ = ["PartialOrderStrategy", "ModelOrderStrategy", "LaneStrategy"]
