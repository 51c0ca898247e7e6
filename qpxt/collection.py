"""
Collection
==========
Ordering helpers for any iterable: sorted copies, sortedness checks,
key-based extremes and fixed-size slicing.

Helpers that fall back to natural ordering when no comparator is given
are overloaded so that only keys supporting ``<`` are accepted without one.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Callable, Iterable, Iterator, List, Optional, TypeVar, overload

from qpxt.comparison import Comparator, SupportsLessThan, resolve_comparator
from qpxt.sorting.merge_sort import merge_sort_by, sort_by
from qpxt.sorting.sort_errors import check_at_least

T = TypeVar("T")
K = TypeVar("K")
C = TypeVar("C", bound=SupportsLessThan)

__all__ = [
    "sort",
    "sort_by",
    "is_sorted",
    "is_sorted_by",
    "min_by",
    "max_by",
    "slices",
]


@overload
def sort(elements: Iterable[C], compare: None = None) -> List[C]: ...


@overload
def sort(elements: Iterable[T], compare: Comparator[T]) -> List[T]: ...


def sort(elements: Iterable[T], compare: Optional[Comparator[Any]] = None) -> List[T]:
    """
    Creates a sorted list of the elements of the iterable, ordered by
    *compare* (natural ordering when omitted).

    >>> sort([3, 1, 2])
    [1, 2, 3]
    """
    items: List[T] = list(elements)
    merge_sort_by(items, _identity, resolve_comparator(compare))
    return items


@overload
def is_sorted(elements: Iterable[C], compare: None = None) -> bool: ...


@overload
def is_sorted(elements: Iterable[T], compare: Comparator[T]) -> bool: ...


def is_sorted(elements: Iterable[T], compare: Optional[Comparator[Any]] = None) -> bool:
    """
    Whether earlier elements always compare smaller than or equal to later
    elements.  An empty or single-element iterable is trivially sorted.
    """
    return _is_sorted_by(elements, _identity, resolve_comparator(compare))


@overload
def is_sorted_by(elements: Iterable[T], key_of: Callable[[T], C], compare: None = None) -> bool: ...


@overload
def is_sorted_by(elements: Iterable[T], key_of: Callable[[T], K], compare: Comparator[K]) -> bool: ...


def is_sorted_by(
    elements: Iterable[T],
    key_of: Callable[[T], Any],
    compare: Optional[Comparator[Any]] = None,
) -> bool:
    """Whether the keys of the elements are in non-decreasing order."""
    return _is_sorted_by(elements, key_of, resolve_comparator(compare))


@overload
def min_by(elements: Iterable[T], key_of: Callable[[T], C], compare: None = None) -> T: ...


@overload
def min_by(elements: Iterable[T], key_of: Callable[[T], K], compare: Comparator[K]) -> T: ...


def min_by(
    elements: Iterable[T],
    key_of: Callable[[T], Any],
    compare: Optional[Comparator[Any]] = None,
) -> T:
    """The first element with the smallest key.  Raises on empty input."""
    return _extreme_by(elements, key_of, resolve_comparator(compare), 1)


@overload
def max_by(elements: Iterable[T], key_of: Callable[[T], C], compare: None = None) -> T: ...


@overload
def max_by(elements: Iterable[T], key_of: Callable[[T], K], compare: Comparator[K]) -> T: ...


def max_by(
    elements: Iterable[T],
    key_of: Callable[[T], Any],
    compare: Optional[Comparator[Any]] = None,
) -> T:
    """The first element with the largest key.  Raises on empty input."""
    return _extreme_by(elements, key_of, resolve_comparator(compare), -1)


def slices(elements: Iterable[T], length: int) -> Iterator[List[T]]:
    """
    Contiguous slices of *elements*, each *length* long except for the
    last one, which may be shorter.

    The check on *length* happens at call time, not on first iteration.

    >>> list(slices([1, 2, 3, 4, 5], 2))
    [[1, 2], [3, 4], [5]]
    """
    check_at_least(length, 1, "length")
    return _slices(iter(elements), length)


def _slices(iterator: Iterator[T], length: int) -> Iterator[List[T]]:
    for first in iterator:
        yield [first, *islice(iterator, length - 1)]


def _is_sorted_by(
    elements: Iterable[T],
    key_of: Callable[[T], Any],
    compare: Comparator[Any],
) -> bool:
    iterator = iter(elements)
    try:
        previous_key = key_of(next(iterator))
    except StopIteration:
        return True
    for element in iterator:
        key = key_of(element)
        if compare(previous_key, key) > 0:
            return False
        previous_key = key
    return True


def _extreme_by(elements, key_of, compare, sign):
    iterator = iter(elements)
    try:
        best = next(iterator)
    except StopIteration:
        raise ValueError("No element") from None
    best_key = key_of(best)
    for element in iterator:
        key = key_of(element)
        # Strict comparison keeps the first of several equal extremes.
        if compare(best_key, key) * sign > 0:
            best = element
            best_key = key
    return best


def _identity(element: T) -> T:
    return element
