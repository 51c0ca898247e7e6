"""
Sort Validators
===============
Functions to check that a sort result is a correct, stable ordering of
its input.  Used by the benchmark runner as a sanity check and by tests.
"""

from __future__ import annotations

from collections import Counter
from functools import cmp_to_key
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from qpxt.comparison import Comparator, compare_by

E = TypeVar("E")
K = TypeVar("K")


def validate_sort(
    original: Sequence[E],
    result: Sequence[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
) -> Tuple[bool, str]:
    """
    Check that *result* is a stable sort of *original*.
    Returns: (bool, reason)
    """
    if not is_permutation(original, result):
        return False, "Not a permutation of the input"

    index = first_order_violation(result, key_of, compare)
    if index is not None:
        return False, f"Out of order at index {index}"

    if not is_stable(original, result, key_of, compare):
        return False, "Equal keys reordered"

    return True, "OK"


def is_permutation(original: Sequence[E], result: Sequence[E]) -> bool:
    """True iff both sequences hold the same multiset of elements."""
    if len(original) != len(result):
        return False
    try:
        return Counter(original) == Counter(result)
    except TypeError:
        # Unhashable elements: match one by one.
        remaining: List[E] = list(original)
        for element in result:
            try:
                remaining.remove(element)
            except ValueError:
                return False
        return not remaining


def first_order_violation(
    result: Sequence[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
) -> Optional[int]:
    """
    Return the first index i where result[i] orders after result[i+1],
    or None if the keys are non-decreasing.
    """
    for i in range(len(result) - 1):
        if compare(key_of(result[i]), key_of(result[i + 1])) > 0:
            return i
    return None


def is_stable(
    original: Sequence[E],
    result: Sequence[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
) -> bool:
    """
    Whether elements with equal keys appear in *result* in the same
    relative order as in *original*.

    The built-in ``sorted()`` is stable, so it serves as the oracle.
    """
    expected = sorted(original, key=cmp_to_key(compare_by(compare, key_of)))
    if len(expected) != len(result):
        return False
    return all(a is b or a == b for a, b in zip(expected, result))
