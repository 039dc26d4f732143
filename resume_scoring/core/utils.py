from __future__ import annotations

import math
from typing import Iterable, TypeVar

T = TypeVar("T")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, unlike round()'s banker's rounding."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def unique_in_order(items: Iterable[T]) -> list[T]:
    seen: set[T] = set()
    ordered: list[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        ordered.append(item)
    return ordered
