"""
Unbounded stream of uniformly distributed integers.
"""

from __future__ import annotations

import random


class RandomSignal:
    """
    Infinite iterator over integers drawn uniformly from ``[lower, upper)``.

    Every ``next()`` consumes one sample. A generator cannot be rewound;
    build a new one (or pass a seeded ``random.Random``) to restart.
    """

    def __init__(
        self,
        lower: int,
        upper: int,
        *,
        rng: random.Random | None = None,
        seed: int | None = None,
    ):
        """
        :param lower: Inclusive lower bound.
        :type lower: int

        :param upper: Exclusive upper bound.
        :type upper: int

        :param rng: Entropy source to draw from.
        :type rng: random.Random, optional

        :param seed: Seed for a private entropy source when ``rng`` is None.
        :type seed: int, optional
        """
        self.lower = lower
        self.upper = upper
        self._rng = rng if rng is not None else random.Random(seed)

    def __iter__(self) -> RandomSignal:
        return self

    def __next__(self) -> int:
        return self._rng.randrange(self.lower, self.upper)

    def take(self, count: int) -> list[int]:
        """Draw ``count`` samples."""
        return [next(self) for _ in range(count)]
