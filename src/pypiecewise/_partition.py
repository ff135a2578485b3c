"""Partition and portion: aligning and restricting piecewise functions.

Every binary operator funnels through :func:`partition`: given
``a`` and ``b``, ``partition(a, b.cuts)`` and ``partition(b, a.cuts)`` have
identical cut sequences, so their segments can be combined pairwise.
"""

from __future__ import annotations

from typing import Sequence


def elem_portion(pw, i: int, from_: float, to: float):
    """Restriction of segment *i* to the global range ``[from_, to]``.

    The range is converted to local coordinates of segment *i*; it may
    reach outside that segment, in which case the segment is extrapolated.
    """
    if not 0 <= i < len(pw):
        raise IndexError(f"Segment index {i} out of range [0, {len(pw) - 1}]")
    rwidth = 1.0 / (pw.cuts[i + 1] - pw.cuts[i])
    return pw.segs[i].portion((from_ - pw.cuts[i]) * rwidth, (to - pw.cuts[i]) * rwidth)


def partition(pw, cuts: Sequence[float], segment_type=None):
    """Subdivide *pw* so that it has a cut at every value of *cuts*.

    Values before the domain extend the first segment, values after it
    extend the last one, values equal to an existing cut change nothing,
    and values inside a segment split it.

    Parameters
    ----------
    pw : Piecewise
        Function to subdivide.
    cuts : sequence of float
        Extra cuts, sorted ascending.
    segment_type : type, optional
        Segment class used to fill an empty *pw* with zero segments.
        Defaults to :class:`~pypiecewise.chebyshev.ChebyshevSegment`.

    Returns
    -------
    Piecewise
        New function; *pw* is not modified.

    Raises
    ------
    ValueError
        If *cuts* is not sorted.

    Examples
    --------
    >>> from pypiecewise import ChebyshevSegment, Piecewise
    >>> f = Piecewise.from_segments(
    ...     [ChebyshevSegment.linear(0, 1), ChebyshevSegment.linear(1, 2)],
    ...     [0.0, 0.5, 1.0],
    ... )
    >>> partition(f, [0.25, 0.75]).cuts
    [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    from pypiecewise.piecewise import Piecewise

    c = [float(x) for x in cuts]
    if any(c[k + 1] < c[k] for k in range(len(c) - 1)):
        raise ValueError("partition() requires cuts sorted in ascending order")
    if not c:
        return pw.copy()

    ret = Piecewise()

    if pw.is_empty:
        if segment_type is None:
            from pypiecewise.chebyshev import ChebyshevSegment
            segment_type = ChebyshevSegment
        distinct = sorted(set(c))
        if len(distinct) < 2:
            return ret
        ret.push_cut(distinct[0])
        for to in distinct[1:]:
            ret.push(segment_type.constant(0.0), to)
        return ret

    n = len(c)
    si = 0  # segment index
    ci = 0  # cut index
    front = pw.cuts[0]

    # Cuts before the domain: portions of the extrapolated first segment
    while ci < n and c[ci] < front:
        start = c[ci]
        while ci < n and c[ci] <= start:
            ci += 1
        end = c[ci] if ci < n and c[ci] < front else front
        ret.push_cut(start)
        ret.push_seg(elem_portion(pw, 0, start, end))

    ret.push_cut(front)
    prev = front
    while si < len(pw):
        if ci == n and prev <= pw.cuts[si]:
            # Cuts exhausted: copy the remaining segments
            ret.segs.extend(pw.segs[si:])
            ret.cuts.extend(pw.cuts[si + 1:])
            return ret
        if ci == n or c[ci] >= pw.cuts[si + 1]:
            # No more cuts inside this segment: close it
            if prev > pw.cuts[si]:
                ret.push_seg(pw.segs[si].portion(pw.seg_time(prev, si), 1.0))
            else:
                ret.push_seg(pw.segs[si])
            ret.push_cut(pw.cuts[si + 1])
            prev = pw.cuts[si + 1]
            si += 1
        elif c[ci] <= prev:
            # Coincident with a cut already in place
            ci += 1
        else:
            ret.push(elem_portion(pw, si, prev, c[ci]), c[ci])
            prev = c[ci]
            ci += 1

    # Cuts past the domain: extend the last segment
    last = len(pw) - 1
    while ci < n:
        if c[ci] > prev:
            ret.push(elem_portion(pw, last, prev, c[ci]), c[ci])
            prev = c[ci]
        ci += 1
    return ret


def portion(pw, from_: float, to: float):
    """Restriction of *pw* to ``[min(from_, to), max(from_, to)]``.

    The end segments are cut down with the segment ``portion`` operation;
    segments in between are copied unchanged.  Either end may lie outside
    the domain, in which case the boundary segment is extrapolated.

    Returns
    -------
    Piecewise
        Empty if *pw* is empty or the range has zero length.
    """
    from pypiecewise.piecewise import Piecewise

    ret = Piecewise()
    if pw.is_empty or from_ == to:
        return ret

    from_, to = min(from_, to), max(from_, to)

    i = pw.seg_index(from_)
    ret.push_cut(from_)
    if i == len(pw) - 1 or to < pw.cuts[i + 1]:
        # Both ends in the same segment
        ret.push(elem_portion(pw, i, from_, to), to)
        return ret

    ret.push_seg(pw.segs[i].portion(pw.seg_time(from_, i), 1.0))
    i += 1
    fi = pw.seg_index(to, i)

    ret.segs.extend(pw.segs[i:fi])
    ret.cuts.extend(pw.cuts[i:fi + 1])

    if to != pw.cuts[fi]:
        ret.push_seg(pw.segs[fi].portion(0.0, pw.seg_time(to, fi)))
        ret.push_cut(to)
    assert ret.invariants(), "portion() produced inconsistent cuts"
    return ret


def remove_short_cuts(pw, tol: float):
    """Drop segments shorter than *tol*.

    Each kept segment is attached directly after the previous kept one and
    stretched over the gap, so the result may jump where a short segment
    was removed.
    """
    from pypiecewise.piecewise import Piecewise

    ret = Piecewise()
    if pw.is_empty:
        return ret
    ret.push_cut(pw.cuts[0])
    for i, seg in enumerate(pw.segs):
        if pw.cuts[i + 1] - pw.cuts[i] >= tol:
            ret.push(seg, pw.cuts[i + 1])
    if ret.is_empty:
        return Piecewise()
    return ret


def remove_short_cuts_extending(pw, tol: float):
    """Drop segments shorter than *tol*, extending the next kept segment over them.

    The kept segment is extrapolated backwards to the last kept cut, so the
    result stays continuous wherever *pw* is.
    """
    from pypiecewise.piecewise import Piecewise

    ret = Piecewise()
    if pw.is_empty:
        return ret
    ret.push_cut(pw.cuts[0])
    last = pw.cuts[0]
    for i in range(len(pw)):
        if pw.cuts[i + 1] - pw.cuts[i] >= tol:
            ret.push(elem_portion(pw, i, last, pw.cuts[i + 1]), pw.cuts[i + 1])
            last = pw.cuts[i + 1]
    if ret.is_empty:
        return Piecewise()
    return ret
