"""Piecewise functions built from elementary segments.

A :class:`Piecewise` joins segments end to end over a real domain.  Segment
``i`` is defined on the local parameter range ``[0, 1]`` and covers the
global range ``[cuts[i], cuts[i + 1]]``.  Evaluation routes a global time to
its segment by binary search over the cuts, like the knot routing of a
Chebyshev spline.
"""

from __future__ import annotations

import bisect
from typing import Iterator, List, Sequence

import numpy as np

from pypiecewise._algebra import _is_scalar
from pypiecewise.interval import Interval
from pypiecewise.segment import Offsettable, Segment, require_capability


class Piecewise:
    """Ordered concatenation of segments over a real domain.

    Parameters
    ----------
    segment : Segment or output value, optional
        ``None`` (default) builds the empty function.  A segment builds a
        one-segment function on ``[0, 1]``.  Any other value is treated as
        an output value and wrapped with ``segment_type.constant(value)``.
    segment_type : type, optional
        Segment class used for constant values.  Defaults to
        :class:`~pypiecewise.chebyshev.ChebyshevSegment`.

    Attributes
    ----------
    cuts : list of float
        Strictly increasing domain boundaries, one more than ``segs``
        (or both empty).
    segs : list of Segment
        The segments.  Segments are immutable values and may be shared
        between piecewise functions.

    Examples
    --------
    >>> from pypiecewise import ChebyshevSegment
    >>> f = Piecewise.from_segments(
    ...     [ChebyshevSegment.linear(0, 1), ChebyshevSegment.linear(1, 0)],
    ...     [0.0, 1.0, 2.0],
    ... )
    >>> f(0.5), f(1.5)
    (0.5, 0.5)
    >>> f.domain
    Interval(0.0, 2.0)
    """

    # numpy scalars on the left defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, segment=None, segment_type=None):
        self.cuts: List[float] = []
        self.segs: List[Segment] = []
        if segment is None:
            return
        if not isinstance(segment, Segment):
            if segment_type is None:
                from pypiecewise.chebyshev import ChebyshevSegment
                segment_type = ChebyshevSegment
            segment = segment_type.constant(segment)
        self.push_cut(0.0)
        self.push(segment, 1.0)

    @classmethod
    def from_segments(cls, segs: Sequence[Segment], cuts: Sequence[float]) -> "Piecewise":
        """Build from ``len(segs) + 1`` strictly increasing *cuts*.

        Raises
        ------
        ValueError
            If the counts do not match or the cuts are not increasing.
        TypeError
            If an element of *segs* is not a :class:`Segment`.
        """
        segs = list(segs)
        cuts = list(cuts)
        if not segs and not cuts:
            return cls()
        if len(cuts) != len(segs) + 1:
            raise ValueError(
                f"Expected {len(segs) + 1} cuts for {len(segs)} segments, "
                f"got {len(cuts)}"
            )
        obj = cls()
        obj.push_cut(cuts[0])
        for seg, to in zip(segs, cuts[1:]):
            obj.push(seg, to)
        return obj

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def push(self, seg: Segment, to: float) -> None:
        """Append a segment ending at cut *to*."""
        if len(self.cuts) != len(self.segs) + 1:
            raise ValueError("push() needs a starting cut; call push_cut() first")
        self.push_seg(seg)
        self.push_cut(to)

    def push_cut(self, c: float) -> None:
        """Append a cut, which must be greater than the last one."""
        c = float(c)
        if self.cuts and not c > self.cuts[-1]:
            raise ValueError(
                f"Cut {c} must be greater than the previous cut {self.cuts[-1]}"
            )
        self.cuts.append(c)

    def push_seg(self, seg: Segment) -> None:
        """Append a segment without a closing cut."""
        if not isinstance(seg, Segment):
            raise TypeError(f"Expected a Segment, got {type(seg).__name__}")
        self.segs.append(seg)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of segments."""
        return len(self.segs)

    @property
    def is_empty(self) -> bool:
        return not self.segs

    def __len__(self) -> int:
        return len(self.segs)

    def __getitem__(self, i: int) -> Segment:
        return self.segs[i]

    def __setitem__(self, i: int, seg: Segment) -> None:
        if not isinstance(seg, Segment):
            raise TypeError(f"Expected a Segment, got {type(seg).__name__}")
        self.segs[i] = seg

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segs)

    def copy(self) -> "Piecewise":
        """Copy with independent cut and segment lists."""
        ret = Piecewise()
        ret.cuts = list(self.cuts)
        ret.segs = list(self.segs)
        return ret

    __copy__ = copy

    def invariants(self) -> bool:
        """True if the segment count and cut ordering invariants hold."""
        if not (len(self.segs) + 1 == len(self.cuts) or (not self.segs and not self.cuts)):
            return False
        return all(self.cuts[i] < self.cuts[i + 1] for i in range(len(self.segs)))

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def seg_index(self, t: float, low: int = 0, high: int | None = None) -> int:
        """Index of the segment owning global time *t*.

        Times before the domain map to the first segment and times after it
        to the last.  A time equal to an interior cut belongs to the segment
        that starts at that cut.  *low* and *high* narrow the search to
        segments ``low .. high``.
        """
        n = len(self.segs)
        if n == 0:
            raise ValueError("Cannot locate a segment in an empty piecewise function")
        if t < self.cuts[0]:
            return 0
        if t >= self.cuts[n]:
            return n - 1
        high = n if high is None else min(high, n)
        idx = bisect.bisect_right(self.cuts, t, low, high + 1) - 1
        return min(max(idx, 0), n - 1)

    def seg_time(self, t: float, i: int | None = None) -> float:
        """Local parameter of global time *t* within segment *i*.

        The result lies outside ``[0, 1]`` when *t* is outside the segment.
        """
        if i is None:
            i = self.seg_index(t)
        return (t - self.cuts[i]) / (self.cuts[i + 1] - self.cuts[i])

    def map_to_domain(self, t: float, i: int) -> float:
        """Global time of local parameter *t* in segment *i*."""
        return (1 - t) * self.cuts[i] + t * self.cuts[i + 1]

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def value_at(self, t: float):
        """Evaluate at global time *t*, extrapolating outside the domain."""
        n = self.seg_index(t)
        return self.segs[n](self.seg_time(t, n))

    def _eval_batch(self, t: np.ndarray) -> np.ndarray:
        """Evaluate many times at once, grouping them by segment."""
        if self.is_empty:
            raise ValueError("Cannot evaluate an empty piecewise function")
        cuts = np.asarray(self.cuts)
        idx = np.searchsorted(cuts, t, side="right") - 1
        np.clip(idx, 0, len(self.segs) - 1, out=idx)
        results = np.empty(t.shape)
        for i in np.unique(idx):
            mask = idx == i
            local = (t[mask] - cuts[i]) / (cuts[i + 1] - cuts[i])
            results[mask] = self.segs[i](local)
        return results

    def __call__(self, t):
        """Evaluate at *t*, or compose when *t* is a segment or a piecewise function.

        Parameters
        ----------
        t : float, array_like, Segment or Piecewise
            Global time(s).  Arrays are evaluated elementwise.  Passing a
            function ``g`` returns ``compose(self, g)``.
        """
        if isinstance(t, (Segment, Piecewise)):
            from pypiecewise._compose import compose
            return compose(self, t)
        if np.ndim(t) == 0:
            return self.value_at(float(t))
        return self._eval_batch(np.asarray(t, dtype=float))

    # ------------------------------------------------------------------
    # Domain transforms
    # ------------------------------------------------------------------

    @property
    def domain(self) -> Interval:
        """The interval ``[cuts[0], cuts[-1]]``."""
        if not self.cuts:
            raise ValueError("An empty piecewise function has no domain")
        return Interval(self.cuts[0], self.cuts[-1])

    def offset_domain(self, o: float) -> None:
        """Shift every cut by *o*."""
        if o != 0:
            self.cuts = [c + o for c in self.cuts]

    def scale_domain(self, s: float) -> None:
        """Multiply every cut by *s*; ``s == 0`` leaves the function empty."""
        if s == 0:
            self.cuts = []
            self.segs = []
            return
        if s < 0:
            raise ValueError(f"Domain scale must be positive, got {s}")
        self.cuts = [c * s for c in self.cuts]

    def set_domain(self, dom: Interval) -> None:
        """Affinely remap the cuts so that the domain becomes *dom*.

        An interval of zero extent leaves the function empty.
        """
        if self.is_empty:
            return
        if not isinstance(dom, Interval):
            dom = Interval(*dom)
        if dom.is_empty:
            self.cuts = []
            self.segs = []
            return
        cf = self.cuts[0]
        o = dom.min
        s = dom.extent / (self.cuts[-1] - cf)
        cuts = [(c - cf) * s + o for c in self.cuts]
        cuts[0], cuts[-1] = dom.min, dom.max
        self.cuts = cuts

    def concat(self, other: "Piecewise") -> None:
        """Append *other*, shifted in time to start where this function ends.

        Values are not adjusted, so the result may jump at the join.
        """
        if other.is_empty:
            return
        if self.is_empty:
            self.cuts = list(other.cuts)
            self.segs = list(other.segs)
            return
        t = self.cuts[-1] - other.cuts[0]
        other_cuts = list(other.cuts[1:])
        self.segs.extend(list(other.segs))
        for c in other_cuts:
            self.push_cut(c + t)

    def continuous_concat(self, other: "Piecewise") -> None:
        """Like :meth:`concat`, but offsets *other* so the values meet at the join."""
        if other.is_empty:
            return
        require_capability(other.segs[0], Offsettable, "continuous_concat()")
        if self.is_empty:
            self.cuts = list(other.cuts)
            self.segs = list(other.segs)
            return
        y = self.segs[-1].at1() - other.segs[0].at0()
        t = self.cuts[-1] - other.cuts[0]
        for seg, c in zip(list(other.segs), list(other.cuts[1:])):
            self.push(seg + y, c + t)

    # ------------------------------------------------------------------
    # Restriction, bounds, calculus
    # ------------------------------------------------------------------

    def partition(self, cuts: Sequence[float]) -> "Piecewise":
        """See :func:`pypiecewise.partition`."""
        from pypiecewise._partition import partition
        return partition(self, cuts)

    def portion(self, from_: float, to: float) -> "Piecewise":
        """See :func:`pypiecewise.portion`."""
        from pypiecewise._partition import portion
        return portion(self, from_, to)

    def bounds_fast(self) -> Interval:
        from pypiecewise._bounds import bounds_fast
        return bounds_fast(self)

    def bounds_exact(self) -> Interval:
        from pypiecewise._bounds import bounds_exact
        return bounds_exact(self)

    def bounds_local(self, interval: Interval) -> Interval:
        from pypiecewise._bounds import bounds_local
        return bounds_local(self, interval)

    def derivative(self) -> "Piecewise":
        from pypiecewise._calculus import derivative
        return derivative(self)

    def integral(self) -> "Piecewise":
        from pypiecewise._calculus import integral
        return integral(self)

    def roots(self) -> np.ndarray:
        from pypiecewise._calculus import roots
        return roots(self)

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    def __neg__(self):
        from pypiecewise._algebra import negate
        return negate(self)

    def __add__(self, other):
        from pypiecewise import _algebra
        if isinstance(other, Piecewise):
            return _algebra.add(self, other)
        if isinstance(other, Segment):
            return NotImplemented
        return _algebra.offset(self, other)

    def __radd__(self, other):
        from pypiecewise import _algebra
        if isinstance(other, Segment):
            return NotImplemented
        return _algebra.offset(self, other)

    def __sub__(self, other):
        from pypiecewise import _algebra
        if isinstance(other, Piecewise):
            return _algebra.subtract(self, other)
        if isinstance(other, Segment):
            return NotImplemented
        return _algebra.offset_sub(self, other)

    def __rsub__(self, other):
        from pypiecewise import _algebra
        if isinstance(other, Segment):
            return NotImplemented
        return _algebra.offset(_algebra.negate(self), other)

    def __mul__(self, other):
        from pypiecewise import _algebra
        if isinstance(other, Piecewise):
            return _algebra.multiply(self, other)
        if not _is_scalar(other):
            return NotImplemented
        return _algebra.scale(self, other)

    def __rmul__(self, other):
        from pypiecewise import _algebra
        if not _is_scalar(other):
            return NotImplemented
        return _algebra.scale(self, other)

    def __truediv__(self, other):
        from pypiecewise import _algebra
        if isinstance(other, Piecewise):
            raise TypeError(
                "Division of two piecewise functions is not supported; "
                "use pypiecewise.divide() for a tolerance-based approximation"
            )
        if not _is_scalar(other):
            return NotImplemented
        return _algebra.divide_scalar(self, other)

    def _replace(self, other: "Piecewise") -> "Piecewise":
        self.cuts = other.cuts
        self.segs = other.segs
        return self

    def __iadd__(self, other):
        if _is_scalar(other) and self.is_empty:
            # An empty function gains the constant over [0, 1]
            return self._replace(Piecewise(other))
        result = self.__add__(other)
        if result is NotImplemented:
            return NotImplemented
        return self._replace(result)

    def __isub__(self, other):
        if _is_scalar(other) and self.is_empty:
            return self._replace(Piecewise(-other))
        result = self.__sub__(other)
        if result is NotImplemented:
            return NotImplemented
        return self._replace(result)

    def __imul__(self, other):
        result = self.__mul__(other)
        if result is NotImplemented:
            return NotImplemented
        return self._replace(result)

    def __itruediv__(self, other):
        result = self.__truediv__(other)
        if result is NotImplemented:
            return NotImplemented
        return self._replace(result)

    # ------------------------------------------------------------------
    # Comparison and printing
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Piecewise):
            return NotImplemented
        return (
            self.cuts == other.cuts
            and len(self.segs) == len(other.segs)
            and all(a == b for a, b in zip(self.segs, other.segs))
        )

    __hash__ = None

    def __repr__(self) -> str:
        if self.is_empty:
            return "Piecewise(empty)"
        return (
            f"Piecewise("
            f"segments={len(self.segs)}, "
            f"domain=[{self.cuts[0]}, {self.cuts[-1]}])"
        )

    def __str__(self) -> str:
        if self.is_empty:
            return "Piecewise (empty)"

        max_display = 6
        if len(self.cuts) > max_display:
            cuts_str = (
                "["
                + ", ".join(f"{c:g}" for c in self.cuts[:max_display])
                + ", ...]"
            )
        else:
            cuts_str = "[" + ", ".join(f"{c:g}" for c in self.cuts) + "]"

        seg_types = sorted({type(s).__name__ for s in self.segs})
        lines = [
            f"Piecewise ({len(self.segs)} segments)",
            f"  Cuts:        {cuts_str}",
            f"  Domain:      [{self.cuts[0]:g}, {self.cuts[-1]:g}]",
            f"  Segments:    {', '.join(seg_types)}",
        ]
        return "\n".join(lines)
