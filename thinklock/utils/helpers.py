# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Common utility functions used across the application
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timezone
from typing import Hashable, Iterable, List, TypeVar
import math

T = TypeVar("T", bound=Hashable)


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def unique_in_order(items: Iterable[T]) -> List[T]:
    """
    Drop duplicates while keeping first-seen order.

    Example:
        >>> unique_in_order(["b", "a", "b"])
        ['b', 'a']
    """
    return list(dict.fromkeys(items))


def ceil_amount(total: float) -> int:
    """
    Round a money total up to a whole unit.

    The total is first rounded to cents so float noise
    (``19.99 + 10.01``) never adds a unit.
    """
    return math.ceil(round(total, 2))


def to_minor_units(amount: int) -> int:
    """Convert a whole-unit amount to cents."""
    return amount * 100
