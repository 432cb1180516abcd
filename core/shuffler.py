"""Shuffling strategies used when dealing tiles.

The engine never shuffles on its own: it asks a Shuffler, so tests can
inject a deterministic one and hosts can seed a random one.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, Optional


class Shuffler(ABC):
    """Abstract base class for list shuffling strategies."""

    @abstractmethod
    def shuffle(self, items: list[Any], seed: int) -> None:
        """Shuffle a list in place.

        Args:
            items: The list to shuffle.
            seed: A seed distinguishing the lists shuffled by one game.
        """
        pass


class CannedShuffler(Shuffler):
    """Deterministic Fisher-Yates shuffle with a fixed swap formula.

    The same list and seed always produce the same permutation, on every
    platform and interpreter version.
    """

    def shuffle(self, items: list[Any], seed: int) -> None:
        for i in range(len(items), 1, -1):
            j = ((i + 7) * (seed + 5) * 119) % i
            items[i - 1], items[j] = items[j], items[i - 1]


class RandomShuffler(Shuffler):
    """Shuffler backed by a seeded random.Random instance.

    Two shufflers built with the same seed shuffle identically.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def shuffle(self, items: list[Any], seed: int) -> None:
        self._rng.shuffle(items)
