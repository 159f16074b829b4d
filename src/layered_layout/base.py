"""
Base classes for layout algorithms.

- BaseLayout: Input normalization, canvas, events and validation
- StaticLayout: Single-pass layouts with a start/compute/end lifecycle
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .preprocessing import _endpoint_index
from .types import (
    Event,
    EventType,
    Link,
    LinkLike,
    Node,
    NodeLike,
    SizeType,
)
from .validation import (
    validate_canvas_size,
    validate_link_indices,
)

EventCallback = Callable[[Optional[Event]], None]

# Attributes read from arbitrary node objects
_NODE_ATTRIBUTES = ("index", "x", "y", "kind", "model_order", "lane", "in_layer_successors")


def _to_node(data: NodeLike) -> Node:
    if isinstance(data, Node):
        return data
    if isinstance(data, dict):
        return Node(**data)
    return Node(
        **{
            attr: getattr(data, attr)
            for attr in _NODE_ATTRIBUTES
            if getattr(data, attr, None) is not None
        }
    )


def _to_link(data: LinkLike) -> Link:
    if isinstance(data, Link):
        return data
    if isinstance(data, dict):
        return Link(**data)
    return Link(getattr(data, "source", None), getattr(data, "target", None))


class BaseLayout(ABC):
    """
    Abstract base class for layouts.

    Nodes and links may be given as Node/Link objects, dicts, or any objects
    exposing the same attributes; they are normalized on assignment. After
    run() the computed coordinates are on `layout.nodes`.

    Example:
        layout = SugiyamaLayout(nodes=[{}, {}], links=[{"source": 0, "target": 1}])
        for node in layout.run().nodes:
            print(node.index, node.x, node.y)
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        size: SizeType = (1.0, 1.0),
        random_seed: Optional[int] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            nodes: Nodes (Node objects, dicts, or objects with node attributes)
            links: Links (Link objects, dicts, or objects with source/target)
            size: Canvas size as (width, height)
            random_seed: Seed for every randomized step of the layout
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
        """
        self._nodes: list[Node] = [_to_node(n) for n in nodes or ()]
        self._links: list[Link] = [_to_link(link) for link in links or ()]
        self._canvas_size: tuple[float, float] = validate_canvas_size(size)
        self._random_seed: Optional[int] = random_seed
        self._events: dict[EventType, EventCallback] = {}

        for event_type, callback in (
            (EventType.start, on_start),
            (EventType.tick, on_tick),
            (EventType.end, on_end),
        ):
            if callback is not None:
                self._events[event_type] = callback

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes from Node objects, dicts, or objects."""
        self._nodes = [_to_node(n) for n in value]

    @property
    def links(self) -> list[Link]:
        """Get the list of links."""
        return self._links

    @links.setter
    def links(self, value: Sequence[LinkLike]) -> None:
        """Set links from Link objects, dicts, or objects."""
        self._links = [_to_link(link) for link in value]

    @property
    def size(self) -> tuple[float, float]:
        """Get canvas size as (width, height)."""
        return self._canvas_size

    @size.setter
    def size(self, value: SizeType) -> None:
        """
        Set canvas size.

        Raises:
            InvalidCanvasSizeError: If width or height is not positive.
        """
        self._canvas_size = validate_canvas_size(value)

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible layouts."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed for reproducible layouts."""
        self._random_seed = value

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event, replacing any earlier callback.

        Args:
            event: Event type (EventType enum or its name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Call the callback registered for the event's type, if any."""
        callback = self._events.get(event.get("type"))  # type: ignore[arg-type]
        if callback is not None:
            callback(event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Check that every link points at an existing node.

        Called by run(); call it earlier to fail fast.

        Returns:
            self (for chaining)

        Raises:
            InvalidLinkError: If any link references an invalid node index.
        """
        validate_link_indices(self._links, len(self._nodes), strict=True)
        return self

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _initialize_indices(self) -> None:
        """Give every node without an index its position in the node list."""
        for i, node in enumerate(self._nodes):
            if node.index is None:
                node.index = i

    def _center_graph(self) -> None:
        """Translate all nodes so their bounding box is centered on the canvas."""
        if not self._nodes:
            return
        xs = [n.x for n in self._nodes]
        ys = [n.y for n in self._nodes]
        dx = self._canvas_size[0] / 2 - (min(xs) + max(xs)) / 2
        dy = self._canvas_size[1] / 2 - (min(ys) + max(ys)) / 2
        for node in self._nodes:
            node.x += dx
            node.y += dy

    def _get_source_index(self, link: Link) -> int:
        """Get source node index from a link."""
        return _endpoint_index(link.source)

    def _get_target_index(self, link: Link) -> int:
        """Get target node index from a link."""
        return _endpoint_index(link.target)


class StaticLayout(BaseLayout):
    """
    Base class for layouts computed in a single pass.

    run() assigns missing indices, validates, fires the start event, calls
    _compute(), centers the result unless `center_graph=False` is passed,
    and fires the end event.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Args:
            **kwargs: Passed on to _compute(); `center_graph` (default True)
                controls centering

        Returns:
            self (for chaining)
        """
        self._initialize_indices()
        self.validate()
        self.trigger({"type": EventType.start})

        self._compute(**kwargs)

        if kwargs.get("center_graph", True):
            self._center_graph()

        self.trigger({"type": EventType.end})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """Compute node positions."""
        pass


__all__ = [
    "BaseLayout",
    "StaticLayout",
]
