"""
Input validation and error types for layered layout.

Provides centralized validation functions for nodes, links, layerings, canvas
size and other layout parameters, together with the exceptions raised when
the crossing minimization core detects a violated precondition. All errors
derive from ValidationError so callers can catch them in one place.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when canvas dimensions are invalid."""

    pass


class InvalidNodeError(ValidationError):
    """Raised when a node is malformed."""

    pass


class InvalidLinkError(ValidationError):
    """Raised when a link references invalid nodes."""

    pass


class InvalidLayeringError(ValidationError):
    """Raised when a layer assignment is inconsistent with the graph."""

    pass


class OrderingError(ValidationError):
    """Base exception for faults detected while ordering a layer."""

    pass


class ContradictoryOrderError(OrderingError):
    """Raised when a relation contradicts one that is already recorded."""

    pass


class UnresolvedLaneError(OrderingError):
    """Raised when a node's lane cannot be determined."""

    pass


class MissingModelOrderError(OrderingError):
    """Raised when a model order comparison involves a node without one."""

    pass


class DummyChainCycleError(OrderingError):
    """Raised when walking a chain of dummy nodes revisits a node."""

    pass


class ConstraintCycleError(OrderingError):
    """Raised when in-layer successor constraints cannot all be satisfied."""

    pass


def validate_canvas_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate canvas size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidCanvasSizeError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidCanvasSizeError(
            f"Canvas size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if width <= 0:
        raise InvalidCanvasSizeError(f"Canvas width must be positive, got {width}")
    if height <= 0:
        raise InvalidCanvasSizeError(f"Canvas height must be positive, got {height}")

    return width, height


def validate_link_indices(
    links: Sequence[Any],
    node_count: int,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all link source/target indices are within bounds.

    Args:
        links: Sequence of Link objects or dicts with source/target
        node_count: Number of nodes in the graph
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (link_index, issue_description) tuples

    Raises:
        InvalidLinkError: If strict=True and invalid links found
    """
    issues: list[tuple[int, str]] = []

    for i, link in enumerate(links):
        src = _get_index(link, "source")
        tgt = _get_index(link, "target")

        if src is None:
            issues.append((i, f"Link {i}: source is None"))
        elif src < 0 or src >= node_count:
            issues.append((i, f"Link {i}: source index {src} out of bounds [0, {node_count})"))

        if tgt is None:
            issues.append((i, f"Link {i}: target is None"))
        elif tgt < 0 or tgt >= node_count:
            issues.append((i, f"Link {i}: target index {tgt} out of bounds [0, {node_count})"))

    if strict and issues:
        msg = "Invalid link indices:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidLinkError(msg)

    return issues


def validate_layering(
    layers: Sequence[Sequence[int]],
    node_count: int,
    links: Sequence[Any] = (),
) -> dict[int, int]:
    """
    Validate that a layering places every node in exactly one layer.

    When links are given, every edge must also point from a lower layer to a
    strictly higher one.

    Args:
        layers: Sequence of layers, each a sequence of node indices
        node_count: Number of nodes that must be layered
        links: Optional directed edges to check against the layering

    Returns:
        Mapping from node index to layer index

    Raises:
        InvalidLayeringError: If a node is missing, duplicated or out of
            bounds, or if an edge does not point to a later layer
    """
    layer_of: dict[int, int] = {}
    for layer_idx, layer in enumerate(layers):
        for node in layer:
            if node < 0 or node >= node_count:
                raise InvalidLayeringError(
                    f"Layer {layer_idx}: node index {node} out of bounds [0, {node_count})"
                )
            if node in layer_of:
                raise InvalidLayeringError(
                    f"Node {node} appears in layers {layer_of[node]} and {layer_idx}"
                )
            layer_of[node] = layer_idx

    missing = [i for i in range(node_count) if i not in layer_of]
    if missing:
        raise InvalidLayeringError(f"Nodes without a layer: {missing}")

    for i, link in enumerate(links):
        src = _get_index(link, "source")
        tgt = _get_index(link, "target")
        if src is None or tgt is None:
            raise InvalidLayeringError(f"Link {i}: missing endpoint")
        if layer_of[src] >= layer_of[tgt]:
            raise InvalidLayeringError(
                f"Link {i}: edge {src} -> {tgt} goes from layer {layer_of[src]} "
                f"to layer {layer_of[tgt]}"
            )

    return layer_of


def validate_lanes(nodes: Sequence[Any]) -> None:
    """
    Validate that every real node carries an integer lane.

    Args:
        nodes: Sequence of Node objects

    Raises:
        InvalidNodeError: If a real node has no lane or a non-integer lane
    """
    for i, node in enumerate(nodes):
        if getattr(node, "is_dummy", False):
            continue
        lane = getattr(node, "lane", None)
        if lane is None:
            raise InvalidNodeError(f"Node {i}: lane is required for lane ordering")
        if isinstance(lane, bool) or not isinstance(lane, int):
            raise InvalidNodeError(f"Node {i}: lane must be an integer, got {lane!r}")


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        ValidationError: If iterations < 1
    """
    if iterations < 1:
        raise ValidationError(f"iterations must be >= 1, got {iterations}")
    return iterations


def _get_index(obj: Any, attr: str) -> Optional[int]:
    """Extract index from int, Node, or object with index attribute."""
    if hasattr(obj, attr):
        val = getattr(obj, attr, None)
    elif isinstance(obj, dict):
        val = obj.get(attr)
    else:
        val = None

    if val is None:
        return None
    if isinstance(val, int):
        return val
    if hasattr(val, "index"):
        return int(val.index)
    return None


__all__ = [
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidNodeError",
    "InvalidLinkError",
    "InvalidLayeringError",
    "OrderingError",
    "ContradictoryOrderError",
    "UnresolvedLaneError",
    "MissingModelOrderError",
    "DummyChainCycleError",
    "ConstraintCycleError",
    "validate_canvas_size",
    "validate_link_indices",
    "validate_layering",
    "validate_lanes",
    "validate_iterations",
]
