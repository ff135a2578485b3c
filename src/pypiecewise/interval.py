"""Closed real intervals used for domains and bound queries."""

from __future__ import annotations

import math
from typing import Iterator, Tuple


class Interval:
    """A closed interval ``[min, max]`` on the real line.

    Intervals are immutable values.  An interval with zero extent is called
    *empty* (it still holds a single point); this is the convention used by
    :meth:`Piecewise.set_domain` and :func:`bounds_local`.

    Parameters
    ----------
    a : float
        One end point.
    b : float, optional
        The other end point.  Defaults to ``a`` (a single point).  The ends
        are sorted, so ``Interval(2, 1) == Interval(1, 2)``.

    Examples
    --------
    >>> Interval(3, 1)
    Interval(1.0, 3.0)
    >>> Interval(0, 1).union(Interval(4)).extent
    4.0
    """

    __slots__ = ("_min", "_max")

    def __init__(self, a: float, b: float | None = None):
        a = float(a)
        b = a if b is None else float(b)
        if math.isnan(a) or math.isnan(b):
            raise ValueError("Interval end points must not be NaN")
        self._min, self._max = (a, b) if a <= b else (b, a)

    @property
    def min(self) -> float:
        """Lower end point."""
        return self._min

    @property
    def max(self) -> float:
        """Upper end point."""
        return self._max

    @property
    def extent(self) -> float:
        """Length ``max - min``."""
        return self._max - self._min

    @property
    def middle(self) -> float:
        return 0.5 * (self._min + self._max)

    @property
    def is_empty(self) -> bool:
        """True when the interval has zero extent."""
        return self._min == self._max

    def contains(self, x) -> bool:
        """Return True if *x* (a float or an Interval) lies inside."""
        if isinstance(x, Interval):
            return self._min <= x.min and x.max <= self._max
        return self._min <= x <= self._max

    def intersects(self, other: "Interval") -> bool:
        return self._min <= other.max and other.min <= self._max

    def union(self, other) -> "Interval":
        """Smallest interval containing both *self* and *other* (Interval or float)."""
        if not isinstance(other, Interval):
            other = Interval(other)
        return Interval(min(self._min, other.min), max(self._max, other.max))

    __or__ = union

    def __iter__(self) -> Iterator[float]:
        return iter((self._min, self._max))

    def as_tuple(self) -> Tuple[float, float]:
        return (self._min, self._max)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._min == other.min and self._max == other.max

    def __hash__(self) -> int:
        return hash((self._min, self._max))

    def __repr__(self) -> str:
        return f"Interval({self._min!r}, {self._max!r})"
