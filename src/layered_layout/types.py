"""
Common types for layered graph layout.

This module provides the fundamental types used across the package:
- NodeKind: Role of a node in a layered graph (real node or dummy)
- Node: Graph vertex with position, layering and ordering properties
- Link: Directed edge between two nodes
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Optional, Sequence, TypedDict, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout computation has begun
    - tick: Fired once per crossing minimization sweep
    - end: Layout is complete
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """
    Event payload passed to event listeners.

    Tick events carry the attempt and sweep they report on and the number
    of crossings after that sweep.
    """

    type: EventType
    attempt: int
    iteration: int
    crossings: int


class NodeKind(Enum):
    """
    Role of a node inside a layered graph.

    - NORMAL: A real node of the input graph
    - LONG_EDGE: Dummy node carrying one segment of an edge spanning layers
    - LABEL: Dummy node holding an edge label
    - NORTH_SOUTH_PORT: Dummy node for ports on the north or south side
    - EXTERNAL_PORT: Dummy node representing a port of the enclosing graph
    """

    NORMAL = "normal"
    LONG_EDGE = "long_edge"
    LABEL = "label"
    NORTH_SOUTH_PORT = "north_south_port"
    EXTERNAL_PORT = "external_port"

    @property
    def is_chain_dummy(self) -> bool:
        """True for dummies that dummy-chain walks pass through."""
        return self in (NodeKind.LONG_EDGE, NodeKind.LABEL)


class Node:
    """
    Graph node with position and ordering properties.

    Attributes:
        index: Handle of the node; its position in the node list
        x: X coordinate, assigned by the layout
        y: Y coordinate, assigned by the layout
        kind: Role of the node in the layered graph (NodeKind or its value)
        model_order: Externally mandated rank among real nodes, if any
        lane: Lane (swimlane) the node belongs to, if any
        in_layer_successors: Handles of nodes that must follow this node
            when they share its layer

    Any other keyword argument is stored as an attribute of the same name.
    """

    def __init__(self, **kwargs: Any) -> None:
        self.index: Optional[int] = kwargs.pop("index", None)
        self.x: float = kwargs.pop("x", 0.0)
        self.y: float = kwargs.pop("y", 0.0)
        self.kind: NodeKind = NodeKind(kwargs.pop("kind", NodeKind.NORMAL))
        self.model_order: Optional[int] = kwargs.pop("model_order", None)
        self.lane: Optional[int] = kwargs.pop("lane", None)
        self.in_layer_successors: list[int] = list(kwargs.pop("in_layer_successors", None) or ())

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def is_dummy(self) -> bool:
        """True if this node was not part of the input graph."""
        return self.kind is not NodeKind.NORMAL

    def __repr__(self) -> str:
        if self.kind is NodeKind.NORMAL:
            return f"Node(index={self.index}, x={self.x:.2f}, y={self.y:.2f})"
        return f"Node(index={self.index}, kind={self.kind.value})"


class Link:
    """
    Directed edge from `source` to `target`.

    Endpoints are Node objects or node indices. Extra keyword arguments are
    stored as attributes.

    Raises:
        ValueError: If source or target is None
    """

    def __init__(self, source: Union[Node, int], target: Union[Node, int], **kwargs: Any) -> None:
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.source = source
        self.target = target
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        src = self.source if isinstance(self.source, int) else self.source.index
        tgt = self.target if isinstance(self.target, int) else self.target.index
        return f"Link({src} -> {tgt})"


NodeLike = Union[Node, dict[str, Any], Any]
"""Input type for nodes: Node objects, dicts, or objects with node attributes."""

LinkLike = Union[Link, dict[str, Any], Any]
"""Input type for links: Link objects, dicts, or objects with source/target."""

SizeType = Union[tuple[float, float], list[float], Sequence[float]]
"""Canvas size: (width, height) tuple, list, or sequence."""


__all__ = [
    "EventType",
    "Event",
    "NodeKind",
    "Node",
    "Link",
    "NodeLike",
    "LinkLike",
    "SizeType",
]
