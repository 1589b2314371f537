"""
Horizontal extents of entities and the straddle overlap test.
"""

from __future__ import annotations

from typing import NamedTuple


class HorizontalBounds(NamedTuple):
    """
    Closed horizontal interval ``[left, right]``.

    :ivar left (float): Left edge.
    :ivar right (float): Right edge.
    """

    left: float
    right: float

    @classmethod
    def centered(cls, x: float, width: float) -> HorizontalBounds:
        """Interval of ``width`` centred on ``x``."""
        return cls(x - width / 2.0, x + width / 2.0)

    def contains(self, value: float) -> bool:
        """Whether ``value`` lies strictly inside the interval."""
        return self.left < value < self.right

    def straddles(self, other: HorizontalBounds) -> bool:
        """
        Whether either edge of this interval lies strictly inside ``other``.

        :param other: The interval to test against (usually a paddle).
        :type other: HorizontalBounds

        :return: True on overlap.
        :rtype: bool
        """
        return other.contains(self.left) or other.contains(self.right)
