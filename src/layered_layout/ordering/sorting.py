"""
Sorting routines for history-dependent comparators.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, MutableSequence, TypeVar

T = TypeVar("T")


def insertion_sort(layer: MutableSequence[T], compare: Callable[[T, T], int]) -> None:
    """
    Stable in-place insertion sort.

    Each element moves left one position at a time, past neighbors the
    comparator ranks strictly after it. Because moves are only ever between
    adjacent positions, a relation the comparator commits to while sorting
    is honored before either node is compared against anything further away.
    Elements that compare equal keep their input order.

    Args:
        layer: Sequence to sort in place
        compare: Three-way comparator returning <0, 0 or >0
    """
    for i in range(1, len(layer)):
        current = layer[i]
        j = i
        while j > 0 and compare(layer[j - 1], current) > 0:
            layer[j] = layer[j - 1]
            j -= 1
        layer[j] = current


def comparison_sort(layer: MutableSequence[T], compare: Callable[[T, T], int]) -> None:
    """
    Stable in-place sort with the built-in sorting algorithm.

    Only safe when the comparator is consistent with a total preorder.
    """
    layer[:] = sorted(layer, key=cmp_to_key(compare))


__all__ = ["insertion_sort", "comparison_sort"]
