"""Small shared value types and numeric helpers."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

MAX_SORT_LENGTH = 250_000

_rng = random.Random()


@dataclass(frozen=True)
class Vector2:
    """An integer 2D vector, used for grid and screen coordinates."""

    x: int
    y: int

    def __add__(self, other: object) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Vector3:
    """An integer 3-component vector, used mainly for RGB colours."""

    x: int
    y: int
    z: int


def seed_rng(seed: int | None = None) -> None:
    """Seed the shared random generator; with no seed, use system entropy."""
    _rng.seed(seed)


def random_range(low: int, high: int) -> int:
    """Return a random integer from low to high, both inclusive."""
    if high < low:
        raise ValueError(f"empty range: {low}..{high}")
    return _rng.randint(low, high)


def sort_list(values: Iterable[int]) -> list[int]:
    """Return the values in ascending order.

    Lists longer than MAX_SORT_LENGTH are returned unsorted, as a copy.
    """
    items = list(values)
    if len(items) > MAX_SORT_LENGTH:
        return items
    return sorted(items)


def num_to_power(num: int, power: int) -> int:
    """Raise num to power; a power below 1 leaves num unchanged."""
    return num ** max(power, 1)