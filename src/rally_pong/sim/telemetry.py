"""
Rolling window of sampled signal values shown after a win.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator

from rally_pong.constants import TELEMETRY_CAPACITY


class TelemetryBuffer:
    """
    Fixed-capacity FIFO. New samples enter at the front and the oldest
    sample falls off the back, so the length never changes once full.
    """

    def __init__(
        self,
        samples: Iterable[int] = (),
        capacity: int = TELEMETRY_CAPACITY,
    ):
        """
        :param samples: Initial contents, front first.
        :type samples: Iterable[int]

        :param capacity: Maximum number of samples kept.
        :type capacity: int
        """
        self.capacity = capacity
        self._data: Deque[int] = deque(samples, maxlen=capacity)

    def push(self, value: int) -> int | None:
        """
        Insert ``value`` at the front, evicting the oldest sample if full.

        :return: The evicted sample, if any.
        :rtype: int | None
        """
        evicted = None
        if len(self._data) == self.capacity:
            evicted = self._data.pop()
        self._data.appendleft(value)
        return evicted

    def to_list(self) -> list[int]:
        """Copy of the contents, newest first."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __getitem__(self, index: int) -> int:
        return self._data[index]
