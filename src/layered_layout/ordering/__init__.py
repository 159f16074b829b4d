"""
Order-constrained crossing minimization for layered layouts.

This module provides the pieces used to order the nodes of one layer:
- OrderConstraintTracker: Transitively closed record of ordering decisions
- OrderComparator: Tracker, partial order and barycenter comparison in one
- ModelOrderStrategy / LaneStrategy: Partial orders over layer nodes
- insertion_sort: Sort that is safe for history-dependent comparators
- ConstrainedBarycenterHeuristic: Per-layer driver, with model order and
  lane variants
"""

from .barycenter import BarycenterCalculator, BarycenterState
from .comparator import OrderComparator
from .constraints import (
    ConstraintResolver,
    NullConstraintResolver,
    SuccessorConstraintResolver,
)
from .graph import LayeredGraph
from .heuristic import (
    ConstrainedBarycenterHeuristic,
    LaneBarycenterHeuristic,
    ModelOrderBarycenterHeuristic,
)
from .sorting import comparison_sort, insertion_sort
from .strategies import LaneStrategy, ModelOrderStrategy, PartialOrderStrategy
from .tracker import OrderConstraintTracker

__all__ = [
    "LayeredGraph",
    "OrderConstraintTracker",
    "OrderComparator",
    "PartialOrderStrategy",
    "ModelOrderStrategy",
    "LaneStrategy",
    "insertion_sort",
    "comparison_sort",
    "BarycenterState",
    "BarycenterCalculator",
    "ConstraintResolver",
    "NullConstraintResolver",
    "SuccessorConstraintResolver",
    "ConstrainedBarycenterHeuristic",
    "ModelOrderBarycenterHeuristic",
    "LaneBarycenterHeuristic",
]
