"""Small mapping and sequence helpers."""

from __future__ import annotations

import random
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
from typing import TypeVar

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


def pick(mapping: Mapping[K, V], *keys: K) -> dict[K, V]:
    """Return a new dict with only the given keys.

    Keys missing from ``mapping`` are skipped.
    """
    return {key: mapping[key] for key in keys if key in mapping}


def map_values(mapping: Mapping[K, V], fn: Callable[[V, K, Mapping[K, V]], R]) -> dict[K, R]:
    """Return a new dict with the same keys and ``fn(value, key, mapping)`` as values."""
    return {key: fn(value, key, mapping) for key, value in mapping.items()}


def random_item(items: Sequence[Any]) -> Any:
    """Pick a random element.

    Raises:
        IndexError: If ``items`` is empty.
    """
    return random.choice(items)
