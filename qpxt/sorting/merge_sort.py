"""
Merge Sort
==========
Stable, generic, key-based merge sort.

Elements are ordered by a key derived from each element, so the elements
themselves never need to be orderable.  Equal keys keep their original
relative order.

Partitions shorter than the insertion threshold are placed with a binary
insertion sort.  Larger ranges are split at the midpoint: the second half
is sorted into a scratch list, the first half is sorted into the tail of
the source range (the source doubles as its own second scratch area), and
the two runs are merged back into place.  Only one scratch list of half
the range is allocated per top-level call.

Precondition: ``compare`` must be a total order for the duration of the
call.  A non-transitive or non-deterministic comparator yields an
unspecified (but complete) ordering; it is not detected.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, TypeVar, overload

from qpxt.comparison import Comparator, SupportsLessThan, resolve_comparator
from qpxt.sorting.sort_errors import check_valid_range, resolve_insertion_threshold

logger = logging.getLogger(__name__)

E = TypeVar("E")
K = TypeVar("K")
C = TypeVar("C", bound=SupportsLessThan)


@overload
def sort_by(
    elements: Iterable[E],
    key_of: Callable[[E], C],
    compare: None = None,
    *,
    insertion_threshold: Optional[int] = None,
) -> List[E]: ...


@overload
def sort_by(
    elements: Iterable[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
    *,
    insertion_threshold: Optional[int] = None,
) -> List[E]: ...


def sort_by(
    elements: Iterable[E],
    key_of: Callable[[E], Any],
    compare: Optional[Comparator[Any]] = None,
    *,
    insertion_threshold: Optional[int] = None,
) -> List[E]:
    """
    Return a new list of *elements* stably sorted by ``key_of(element)``.

    Parameters
    ----------
    elements : iterable
        Any finite iterable.  It is copied, never mutated.
    key_of : callable
        Pure function mapping an element to its sort key.
    compare : callable, optional
        Three-way comparator on keys.  When omitted the keys are ordered
        naturally, and their type must support ``<``.
    insertion_threshold : int, optional
        Partition size below which insertion sort is used.  See
        :func:`qpxt.sorting.sort_errors.resolve_insertion_threshold`.

    Returns
    -------
    list
        A fresh list ordered ascending by key.
    """
    items: List[E] = list(elements)
    merge_sort_by(
        items,
        key_of,
        resolve_comparator(compare),
        insertion_threshold=insertion_threshold,
    )
    return items


@overload
def merge_sort(seq: Iterable[C], *, key: None = None, compare: None = None) -> List[C]: ...


@overload
def merge_sort(seq: Iterable[E], *, key: Callable[[E], C], compare: None = None) -> List[E]: ...


@overload
def merge_sort(seq: Iterable[E], *, key: None = None, compare: Comparator[E]) -> List[E]: ...


@overload
def merge_sort(seq: Iterable[E], *, key: Callable[[E], K], compare: Comparator[K]) -> List[E]: ...


def merge_sort(
    seq: Iterable[E],
    *,
    key: Optional[Callable[[E], Any]] = None,
    compare: Optional[Comparator[Any]] = None,
) -> List[E]:
    """
    Return a new list containing items from *seq* in ascending order.

    Same keyword semantics as ``sorted(…, key=…)``; without *key* the
    elements are compared directly.
    """
    if key is None:
        key = _identity
    items: List[E] = list(seq)
    merge_sort_by(items, key, resolve_comparator(compare))
    return items


def merge_sort_by(
    elements: List[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
    *,
    start: int = 0,
    end: Optional[int] = None,
    insertion_threshold: Optional[int] = None,
) -> None:
    """
    Sort ``elements[start:end]`` in place, stably, by ``key_of``.

    Raises :class:`~qpxt.sorting.sort_errors.InvalidRangeError` if
    ``[start, end)`` is not a range of *elements*.  Errors raised by
    *key_of* or *compare* propagate unchanged.
    """
    end = check_valid_range(start, end, len(elements))
    # Ranges below 2 are trivially sorted, so a threshold of 1 acts as 2.
    threshold = max(resolve_insertion_threshold(insertion_threshold), 2)
    length = end - start
    logger.debug(
        "merge_sort_by: %d elements in [%d, %d), insertion threshold %d",
        length,
        start,
        end,
        threshold,
    )
    if length < 2:
        return
    if length < threshold:
        _moving_insertion_sort(elements, key_of, compare, start, end, elements, start)
        return

    middle = start + (length >> 1)
    first_length = middle - start
    second_length = end - middle
    scratch: List[E] = list(elements[middle:end])
    _merge_sort(elements, key_of, compare, middle, end, scratch, 0, threshold)

    first_target = end - first_length
    _merge_sort(elements, key_of, compare, start, middle, elements, first_target, threshold)
    _merge(
        key_of,
        compare,
        elements,
        first_target,
        end,
        scratch,
        0,
        second_length,
        elements,
        start,
    )


def _identity(element: E) -> E:
    return element


def _moving_insertion_sort(
    source: List[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
    start: int,
    end: int,
    target: List[E],
    target_offset: int,
) -> None:
    """
    Insertion-sort ``source[start:end]`` into ``target`` at *target_offset*.

    The target range must either be disjoint from the source range or be
    the very same range.  Each element is placed after every equal key
    already placed, which keeps the sort stable.
    """
    length = end - start
    if length == 0:
        return
    target[target_offset] = source[start]
    for i in range(1, length):
        element = source[start + i]
        element_key = key_of(element)
        lo = target_offset
        hi = target_offset + i
        while lo < hi:
            mid = lo + ((hi - lo) >> 1)
            if compare(element_key, key_of(target[mid])) < 0:
                hi = mid
            else:
                lo = mid + 1
        target[lo + 1 : target_offset + i + 1] = target[lo : target_offset + i]
        target[lo] = element


def _merge_sort(
    source: List[E],
    key_of: Callable[[E], K],
    compare: Comparator[K],
    start: int,
    end: int,
    target: List[E],
    target_offset: int,
    threshold: int,
) -> None:
    """
    Sort ``source[start:end]`` into ``target`` at *target_offset*.

    The target range must not overlap the source range.  The source range
    is clobbered.
    """
    length = end - start
    if length < threshold:
        _moving_insertion_sort(source, key_of, compare, start, end, target, target_offset)
        return

    middle = start + (length >> 1)
    first_length = middle - start
    second_length = end - middle
    # Second half goes to the back of the target, first half to the
    # (already consumed) second half of the source.
    target_middle = target_offset + first_length
    _merge_sort(source, key_of, compare, middle, end, target, target_middle, threshold)
    _merge_sort(source, key_of, compare, start, middle, source, middle, threshold)
    _merge(
        key_of,
        compare,
        source,
        middle,
        middle + first_length,
        target,
        target_middle,
        target_middle + second_length,
        target,
        target_offset,
    )


def _merge(
    key_of: Callable[[E], K],
    compare: Comparator[K],
    first: List[E],
    first_start: int,
    first_end: int,
    second: List[E],
    second_start: int,
    second_end: int,
    target: List[E],
    target_offset: int,
) -> None:
    """
    Merge two sorted, non-empty runs into ``target`` at *target_offset*.

    The second run may live in the target itself, right after the region
    being written.  On equal keys the element of the first run is emitted
    first.
    """
    cursor1 = first_start + 1
    cursor2 = second_start + 1
    first_element = first[first_start]
    first_key = key_of(first_element)
    second_element = second[second_start]
    second_key = key_of(second_element)

    while True:
        if compare(first_key, second_key) <= 0:
            target[target_offset] = first_element
            target_offset += 1
            if cursor1 == first_end:
                break
            first_element = first[cursor1]
            first_key = key_of(first_element)
            cursor1 += 1
        else:
            target[target_offset] = second_element
            target_offset += 1
            if cursor2 != second_end:
                second_element = second[cursor2]
                second_key = key_of(second_element)
                cursor2 += 1
                continue
            # Second run exhausted: flush the pending first element and the rest.
            target[target_offset] = first_element
            target_offset += 1
            remaining = first_end - cursor1
            target[target_offset : target_offset + remaining] = first[cursor1:first_end]
            return

    # First run exhausted.
    target[target_offset] = second_element
    target_offset += 1
    remaining = second_end - cursor2
    target[target_offset : target_offset + remaining] = second[cursor2:second_end]
