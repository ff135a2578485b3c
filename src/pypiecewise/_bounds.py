"""Interval bounds of piecewise functions."""

from __future__ import annotations

from pypiecewise.interval import Interval


def bounds_fast(pw) -> Interval:
    """Union of the cheap segment bounds; ``Interval(0)`` for an empty function."""
    if pw.is_empty:
        return Interval(0)
    ret = pw.segs[0].bounds_fast()
    for seg in pw.segs[1:]:
        ret = ret.union(seg.bounds_fast())
    return ret


def bounds_exact(pw) -> Interval:
    """Union of the tight segment bounds; ``Interval(0)`` for an empty function."""
    if pw.is_empty:
        return Interval(0)
    ret = pw.segs[0].bounds_exact()
    for seg in pw.segs[1:]:
        ret = ret.union(seg.bounds_exact())
    return ret


def bounds_local(pw, m: Interval) -> Interval:
    """Tight bounds of *pw* over the global sub-range *m*.

    The first and last touched segments are bounded over their partial
    ranges only; segments strictly between them contribute their exact
    bounds.

    Parameters
    ----------
    pw : Piecewise
        Function to bound.
    m : Interval or (float, float)
        Global range.  A range of zero extent gives the single value there.

    Returns
    -------
    Interval
    """
    if not isinstance(m, Interval):
        m = Interval(*m)
    if pw.is_empty:
        return Interval(0)
    if m.is_empty:
        return Interval(pw(m.min))

    fi = pw.seg_index(m.min)
    ti = pw.seg_index(m.max)
    ft = pw.seg_time(m.min, fi)
    tt = pw.seg_time(m.max, ti)

    if fi == ti:
        return pw.segs[fi].bounds_local(Interval(ft, tt))

    ret = pw.segs[fi].bounds_local(Interval(ft, 1.0))
    for i in range(fi + 1, ti):
        ret = ret.union(pw.segs[i].bounds_exact())
    if tt != 0.0:
        ret = ret.union(pw.segs[ti].bounds_local(Interval(0.0, tt)))
    return ret
