"""
Barycenter values for one layer sweep step.

The barycenter of a node is the mean position of its neighbors in the
adjacent layer that is held fixed during the current sweep: the previous
layer when sweeping forward, the next layer when sweeping backward.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .graph import LayeredGraph


@dataclass
class BarycenterState:
    """Barycenter bookkeeping for a single node."""

    node: int
    summed_weight: float = 0.0
    degree: int = 0
    barycenter: Optional[float] = None


class BarycenterCalculator:
    """
    Computes, completes and randomizes barycenter values.

    States are returned as fresh dictionaries on each call and never stored
    on the calculator, so one calculator can serve several layers at once.

    Args:
        graph: Layered graph whose current layer orders define positions
        random_seed: Seed for randomized and filled-in values
    """

    def __init__(self, graph: LayeredGraph, random_seed: Optional[int] = None) -> None:
        self._graph = graph
        self._random = random.Random(random_seed)

    def calculate(self, layer: Sequence[int], forward: bool) -> dict[int, BarycenterState]:
        """
        Compute the barycenter of every node in a layer.

        Args:
            layer: Node handles of the layer being ordered
            forward: True to use predecessors in the previous layer, False to
                use successors in the next layer

        Returns:
            Mapping from node to its state. Nodes with no neighbor in the
            fixed layer get a barycenter of None.
        """
        positions = self._graph.positions()
        adjacency = self._graph.incoming if forward else self._graph.outgoing
        step = -1 if forward else 1

        states: dict[int, BarycenterState] = {}
        for node in layer:
            state = BarycenterState(node)
            fixed_layer = self._graph.layer_of(node) + step
            for neighbor in adjacency[node]:
                if self._graph.layer_of(neighbor) != fixed_layer:
                    continue
                state.summed_weight += positions[neighbor]
                state.degree += 1
            if state.degree > 0:
                state.barycenter = state.summed_weight / state.degree
            states[node] = state
        return states

    def fill_in_unknown(
        self,
        layer: Sequence[int],
        states: dict[int, BarycenterState],
        pre_ordered: bool,
    ) -> None:
        """
        Give nodes without a barycenter a synthesized one.

        If the layer is already ordered, a missing value is placed halfway
        between its left neighbor's value and the next known value to the
        right, so the node tends to keep its place. Otherwise a random value
        spanning the range of known values is used.
        """
        if pre_ordered:
            last_value = -1.0
            for i, node in enumerate(layer):
                state = states[node]
                current = state.barycenter
                if current is None:
                    next_value = last_value + 1.0
                    for following in layer[i + 1 :]:
                        value = states[following].barycenter
                        if value is not None:
                            next_value = value
                            break
                    current = (last_value + next_value) / 2.0
                    self._assign(state, current)
                last_value = current
        else:
            max_value = 0.0
            for node in layer:
                value = states[node].barycenter
                if value is not None:
                    max_value = max(max_value, value)
            max_value += 2.0
            for node in layer:
                state = states[node]
                if state.barycenter is None:
                    self._assign(state, self._random.random() * max_value - 1.0)

    def randomize(self, layer: Sequence[int]) -> dict[int, BarycenterState]:
        """Assign every node of the layer a uniform random value in [0, 1)."""
        states: dict[int, BarycenterState] = {}
        for node in layer:
            state = BarycenterState(node)
            self._assign(state, self._random.random())
            states[node] = state
        return states

    @staticmethod
    def _assign(state: BarycenterState, value: float) -> None:
        state.barycenter = value
        state.summed_weight = value
        state.degree = 1


__all__ = ["BarycenterState", "BarycenterCalculator"]
