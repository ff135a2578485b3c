"""Composition of piecewise functions with elementary functions.

``compose(f, g)`` evaluates to ``f(g(t))``.  Where ``g`` crosses a cut of
``f`` the composite switches segment, so the general algorithm first
computes the *pullback* of ``f``'s interior cuts through ``g``: the sorted
times at which ``g`` meets one of those levels.  Between two consecutive
pullback times ``g`` stays inside a single segment of ``f`` and the pieces
compose segment by segment.
"""

from __future__ import annotations

from typing import List, Tuple

from pypiecewise.interval import Interval
from pypiecewise.segment import (
    Composable,
    Offsettable,
    Scalable,
    Segment,
    require_capability,
)

# Pullback times closer than this are treated as one crossing.
PULLBACK_MERGE_TOL = 1e-12


class CompositionError(RuntimeError):
    """The pullback of a composition is inconsistent.

    Raised when two consecutive pullback intervals map to segments of ``f``
    that are not neighbours, which means a crossing of ``g`` through one of
    ``f``'s cut levels was missed by the root finder.
    """


def _to_local(f, idx: int, g):
    """Remap the values of *g* from global time into segment *idx*'s ``[0, 1]``."""
    t0 = f.cuts[idx]
    width = f.cuts[idx + 1] - t0
    return (g - t0) / width


def compose_pullback(f, g) -> List[Tuple[float, int]]:
    """Pullback table of *f*'s interior cuts through *g*.

    Parameters
    ----------
    f : Piecewise
        Outer function, at least two segments.
    g : Segment
        Inner function on ``[0, 1]``.

    Returns
    -------
    list of (float, int)
        Sorted ``(time, segment_index)`` pairs starting at ``0.0`` and
        ending at ``1.0``.  Each index names the segment of *f* that is
        active on the interval starting at that time; the final entry
        carries the segment active at ``g(1)``.

    Raises
    ------
    CompositionError
        If two consecutive intervals are not on neighbouring segments.
    """
    times = [0.0, 1.0]
    for level in f.cuts[1:-1]:
        times.extend(float(r) for r in (g - level).roots())
    times.sort()

    merged = [times[0]]
    for t in times[1:]:
        if t - merged[-1] > PULLBACK_MERGE_TOL:
            merged.append(t)
    merged[-1] = 1.0

    table = []
    for t0, t1 in zip(merged, merged[1:]):
        table.append((t0, f.seg_index(g(0.5 * (t0 + t1)))))
    table.append((1.0, f.seg_index(g(1.0))))

    for (t0, idx0), (t1, idx1) in zip(table[:-1], table[1:-1]):
        if abs(idx1 - idx0) > 1:
            raise CompositionError(
                f"Pullback jumps from segment {idx0} to segment {idx1} at "
                f"t={t1:.17g}; a crossing of g through a cut level was missed"
            )
    return table


def compose(f, g):
    """Return the piecewise function ``t -> f(g(t))``.

    Parameters
    ----------
    f : Piecewise
        Outer function.  Its segments must provide ``compose``.
    g : Segment or Piecewise
        Inner function.  A segment covers ``[0, 1]`` and the result does
        too; a piecewise ``g`` is composed segment by segment and the
        result takes ``g``'s cuts (refined where needed).

    Returns
    -------
    Piecewise

    Raises
    ------
    CompositionError
        If the root finder missed a crossing of ``g`` through a cut of
        ``f`` (see :func:`compose_pullback`).

    Examples
    --------
    >>> from pypiecewise import ChebyshevSegment, Piecewise
    >>> f = Piecewise.from_segments(
    ...     [ChebyshevSegment.linear(0, 1), ChebyshevSegment.linear(1, 0)],
    ...     [0.0, 1.0, 2.0],
    ... )
    >>> h = compose(f, ChebyshevSegment.linear(0.0, 2.0))
    >>> len(h), round(h(0.25), 12), round(h(0.75), 12)
    (2, 0.5, 0.5)
    """
    from pypiecewise.piecewise import Piecewise

    if isinstance(g, Piecewise):
        return _compose_piecewise(f, g)
    if not isinstance(g, Segment):
        raise TypeError(f"compose() expects a Segment or Piecewise, got {type(g).__name__}")

    result = Piecewise()
    if f.is_empty:
        return result
    require_capability(f.segs[0], Composable, "compose()")
    require_capability(g, Offsettable, "compose()")
    require_capability(g, Scalable, "compose()")

    bs = g.bounds_fast()
    if bs.min == 0.0 and bs.max == 0.0:
        return Piecewise(type(f.segs[0]).constant(f(0.0)))
    if len(f) == 1:
        return Piecewise(f.segs[0].compose(_to_local(f, 0, g)))

    if f.cuts[0] > bs.max or bs.min > f.cuts[-1]:
        # g never enters the domain of f: extrapolate the nearest segment
        idx = 0 if bs.max < f.cuts[1] else len(f) - 1
        return Piecewise(f.segs[idx].compose(_to_local(f, idx, g)))

    table = compose_pullback(f, g)
    result.push_cut(0.0)
    for (t0, idx), (t1, _) in zip(table, table[1:]):
        sub_g = g.portion(t0, t1)
        result.push(f.segs[idx].compose(_to_local(f, idx, sub_g)), t1)
    return result


def _compose_piecewise(f, g):
    from pypiecewise.piecewise import Piecewise

    result = Piecewise()
    for i, seg in enumerate(g.segs):
        fgi = compose(f, seg)
        fgi.set_domain(Interval(g.cuts[i], g.cuts[i + 1]))
        result.concat(fgi)
    return result
