"""
layered-layout: Layered (Sugiyama-style) graph layout in Python.

This package lays out directed graphs in layers and orders the nodes of
every layer to reduce edge crossings, optionally honoring a model order for
real nodes or grouping nodes into lanes.

Available modules:
- hierarchical: SugiyamaLayout, the complete layered layout
- ordering: Order-constrained barycenter crossing minimization per layer
- preprocessing: Cycle removal, layer assignment and crossing counting
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    StaticLayout,
)

# Hierarchical layouts
from .hierarchical import (
    GraphStructureWarning,
    SugiyamaLayout,
)

# Crossing minimization
from .ordering import (
    BarycenterCalculator,
    ConstrainedBarycenterHeuristic,
    LaneBarycenterHeuristic,
    LaneStrategy,
    LayeredGraph,
    ModelOrderBarycenterHeuristic,
    ModelOrderStrategy,
    OrderComparator,
    OrderConstraintTracker,
    SuccessorConstraintResolver,
    insertion_sort,
)

# Preprocessing utilities
from .preprocessing import (
    assign_layers_longest_path,
    count_crossings,
    detect_cycle,
    has_cycle,
    remove_cycles,
)

# Shared types
from .types import (
    Event,
    EventType,
    Link,
    LinkLike,
    Node,
    NodeKind,
    NodeLike,
    SizeType,
)

# Validation utilities
from .validation import (
    ContradictoryOrderError,
    InvalidCanvasSizeError,
    InvalidLayeringError,
    InvalidLinkError,
    InvalidNodeError,
    MissingModelOrderError,
    OrderingError,
    UnresolvedLaneError,
    ValidationError,
    validate_canvas_size,
    validate_layering,
    validate_link_indices,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Node",
    "NodeKind",
    "Link",
    "EventType",
    "Event",
    # Type aliases for API
    "NodeLike",
    "LinkLike",
    "SizeType",
    # Base classes
    "BaseLayout",
    "StaticLayout",
    # Hierarchical layouts
    "SugiyamaLayout",
    "GraphStructureWarning",
    # Crossing minimization
    "LayeredGraph",
    "OrderConstraintTracker",
    "OrderComparator",
    "ModelOrderStrategy",
    "LaneStrategy",
    "insertion_sort",
    "BarycenterCalculator",
    "SuccessorConstraintResolver",
    "ConstrainedBarycenterHeuristic",
    "ModelOrderBarycenterHeuristic",
    "LaneBarycenterHeuristic",
    # Validation
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidNodeError",
    "InvalidLinkError",
    "InvalidLayeringError",
    "OrderingError",
    "ContradictoryOrderError",
    "UnresolvedLaneError",
    "MissingModelOrderError",
    "validate_canvas_size",
    "validate_link_indices",
    "validate_layering",
    # Preprocessing
    "detect_cycle",
    "has_cycle",
    "remove_cycles",
    "assign_layers_longest_path",
    "count_crossings",
]
