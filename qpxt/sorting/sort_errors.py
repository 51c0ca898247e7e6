"""
Sort errors and limits.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_INSERTION_THRESHOLD = 32
INSERTION_THRESHOLD_ENV = "QPXT_INSERTION_THRESHOLD"
INVALID_RANGE_MESSAGE = "Invalid range"


class InvalidRangeError(IndexError):
    """
    Raised when a start/end pair or a length argument does not describe a
    valid range of the collection it is applied to.
    """

    def __init__(
        self,
        message: str = INVALID_RANGE_MESSAGE,
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
        length: Optional[int] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.length = length
        self.name = name


def check_valid_range(start: int, end: Optional[int], length: int) -> int:
    """
    Check that ``[start, end)`` is a valid range of a collection of
    *length* elements and return the resolved end.

    ``end=None`` means "up to the end of the collection".
    """
    if start < 0 or start > length:
        raise InvalidRangeError(
            f"{INVALID_RANGE_MESSAGE}: start {start} not in [0, {length}]",
            start=start,
            end=end,
            length=length,
            name="start",
        )
    if end is None:
        return length
    if end < start or end > length:
        raise InvalidRangeError(
            f"{INVALID_RANGE_MESSAGE}: end {end} not in [{start}, {length}]",
            start=start,
            end=end,
            length=length,
            name="end",
        )
    return end


def check_not_negative(value: int, name: str = "value") -> int:
    """Return *value* unchanged, or raise if it is negative."""
    return check_at_least(value, 0, name)


def check_at_least(value: int, minimum: int, name: str = "value") -> int:
    """Return *value* unchanged, or raise if it is below *minimum*."""
    if value < minimum:
        raise InvalidRangeError(
            f"{INVALID_RANGE_MESSAGE}: {name} must be >= {minimum}, got {value}",
            length=value,
            name=name,
        )
    return value


def resolve_insertion_threshold(explicit: Optional[int] = None) -> int:
    """
    Resolve the partition size below which the merge sort switches to
    binary insertion sort.

    Priority:
    1) explicit argument (must be >= 1)
    2) env QPXT_INSERTION_THRESHOLD
    3) DEFAULT_INSERTION_THRESHOLD
    """
    if explicit is not None:
        if explicit < 1:
            raise ValueError(f"insertion_threshold must be >= 1, got {explicit}")
        return explicit

    raw = os.getenv(INSERTION_THRESHOLD_ENV)
    if raw is None:
        return DEFAULT_INSERTION_THRESHOLD

    try:
        threshold = int(raw)
        if threshold > 0:
            return threshold
    except (TypeError, ValueError):
        pass
    logger.debug(
        "Ignoring %s=%r, using default %d",
        INSERTION_THRESHOLD_ENV,
        raw,
        DEFAULT_INSERTION_THRESHOLD,
    )
    return DEFAULT_INSERTION_THRESHOLD
