"""
Hierarchical graph layout algorithms.

This module provides layered layouts for directed graphs:
- SugiyamaLayout: Layered layout with constrained crossing minimization
"""

from .sugiyama import GraphStructureWarning, SugiyamaLayout

__all__ = [
    "SugiyamaLayout",
    "GraphStructureWarning",
]
