"""Calculus on piecewise functions: integral, derivative and roots.

Segments are parametrized over ``[0, 1]``, so segment ``i`` is the global
function composed with the affine map ``t -> cuts[i] + w_i t`` where
``w_i = cuts[i + 1] - cuts[i]``.  The chain rule turns segment derivatives
into global ones by dividing by ``w_i`` and segment antiderivatives into
global ones by multiplying by ``w_i``.
"""

from __future__ import annotations

import numpy as np


def integral(a):
    """Continuous antiderivative of *a*.

    Each segment's antiderivative is scaled by the segment width and offset
    so that it starts where the previous one ended.  The first segment
    starts at ``a.segs[0].at0()``.

    Parameters
    ----------
    a : Piecewise
        Integrand; its segments must be Scalable and Offsettable.

    Returns
    -------
    Piecewise
        Same cuts as *a*.
    """
    from pypiecewise.piecewise import Piecewise
    from pypiecewise.segment import Offsettable, Scalable, require_capability

    result = Piecewise()
    if a.is_empty:
        return result
    require_capability(a.segs[0], Scalable, "integral()")
    require_capability(a.segs[0], Offsettable, "integral()")

    result.cuts = list(a.cuts)
    c = a.segs[0].at0()
    for i, seg in enumerate(a.segs):
        piece = seg.integral() * (a.cuts[i + 1] - a.cuts[i])
        piece = piece + (c - piece.at0())
        result.segs.append(piece)
        c = piece.at1()
    return result


def derivative(a):
    """Derivative of *a*, segment by segment (discontinuous at the cuts in general)."""
    from pypiecewise.piecewise import Piecewise
    from pypiecewise.segment import Scalable, require_capability

    result = Piecewise()
    if a.is_empty:
        return result
    require_capability(a.segs[0], Scalable, "derivative()")

    result.cuts = list(a.cuts)
    for i, seg in enumerate(a.segs):
        result.segs.append(seg.derivative() / (a.cuts[i + 1] - a.cuts[i]))
    return result


def roots(pw) -> np.ndarray:
    """Roots of *pw* in global time.

    Segment roots are mapped from local ``[0, 1]`` onto each segment's cut
    span and concatenated in segment order.  A root lying exactly on a cut
    may be reported by both neighbouring segments.

    Returns
    -------
    ndarray
        Root times, in segment order.
    """
    found = []
    for i, seg in enumerate(pw.segs):
        width = pw.cuts[i + 1] - pw.cuts[i]
        for r in seg.roots():
            found.append(float(r) * width + pw.cuts[i])
    return np.array(found, dtype=float)
