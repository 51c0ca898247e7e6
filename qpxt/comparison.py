"""
Comparison
==========
Three-way comparators and the combinators used to build them.

A comparator takes two values and returns a negative number, zero or a
positive number when the first value orders before, together with, or
after the second.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Comparator = Callable[[T, T], int]


class SupportsLessThan(Protocol):
    """Values with a natural ordering (anything usable with ``sorted()``)."""

    def __lt__(self, other: Any, /) -> bool: ...


C = TypeVar("C", bound=SupportsLessThan)


def natural_order(a: C, b: C) -> int:
    """Compare two values by their natural ``<`` ordering."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def resolve_comparator(compare: Optional[Comparator[Any]]) -> Comparator[Any]:
    """*compare*, or :func:`natural_order` when it is ``None``."""
    if compare is None:
        return natural_order
    return compare


def inverse(compare: Comparator[T]) -> Comparator[T]:
    """The inverse ordering of *compare*."""

    def inverted(a: T, b: T) -> int:
        return compare(b, a)

    return inverted


def compare_by(compare: Comparator[T], key_of: Callable[[R], T]) -> Comparator[R]:
    """
    Make a comparator on ``R`` values from a comparator on their keys.

    ``compare_by(natural_order, len)("ab", "c")`` compares the lengths.
    """

    def by_key(a: R, b: R) -> int:
        return compare(key_of(a), key_of(b))

    return by_key


def then(compare: Comparator[T], tie_breaker: Comparator[T]) -> Comparator[T]:
    """
    Combine comparators sequentially.

    Orders values the same way as *compare*, except that values it
    considers equal are ordered by *tie_breaker* instead.
    """

    def combined(a: T, b: T) -> int:
        result = compare(a, b)
        if result == 0:
            result = tie_breaker(a, b)
        return result

    return combined
