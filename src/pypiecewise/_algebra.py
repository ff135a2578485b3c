"""Arithmetic on piecewise functions.

Unary operators (negation, scaling, offsetting) act segment by segment on
a copy of the cuts.  Binary operators first align both operands with
:func:`~pypiecewise.partition` so that they share one cut sequence, then
combine the segments pairwise.
"""

from __future__ import annotations

import numpy as np


def _is_scalar(value) -> bool:
    """Return True if *value* is a numeric scalar (int, float, or numpy scalar)."""
    return isinstance(value, (int, float, np.integer, np.floating))


def _map_segments(pw, func):
    """New piecewise with the cuts of *pw* and ``func(seg)`` for every segment."""
    from pypiecewise.piecewise import Piecewise

    ret = Piecewise()
    ret.cuts = list(pw.cuts)
    ret.segs = [func(seg) for seg in pw.segs]
    return ret


def _require(pw, capability, operation):
    from pypiecewise.segment import require_capability

    if not pw.is_empty:
        require_capability(pw.segs[0], capability, operation)


def _align(a, b):
    """Partition *a* and *b* by each other's cuts; both results share the same cuts."""
    from pypiecewise._partition import partition

    segment_type = type(a.segs[0]) if a.segs else (type(b.segs[0]) if b.segs else None)
    pa = partition(a, b.cuts, segment_type)
    pb = partition(b, a.cuts, segment_type)
    assert len(pa) == len(pb), "aligned operands must have the same segment count"
    return pa, pb


def _combine(a, b, op):
    from pypiecewise.piecewise import Piecewise

    pa, pb = _align(a, b)
    ret = Piecewise()
    ret.cuts = list(pa.cuts)
    ret.segs = [op(sa, sb) for sa, sb in zip(pa.segs, pb.segs)]
    return ret


# ----------------------------------------------------------------------
# Unary operators
# ----------------------------------------------------------------------

def negate(pw):
    """``-pw``."""
    from pypiecewise.segment import Scalable

    _require(pw, Scalable, "negation")
    return _map_segments(pw, lambda s: -s)


def scale(pw, factor):
    """``pw * factor`` for a scalar *factor*."""
    from pypiecewise.segment import Scalable

    _require(pw, Scalable, "scaling")
    return _map_segments(pw, lambda s: s * factor)


def divide_scalar(pw, divisor):
    """``pw / divisor`` for a non-zero scalar *divisor*."""
    from pypiecewise.segment import Scalable

    if divisor == 0:
        raise ZeroDivisionError("Cannot divide a piecewise function by zero")
    _require(pw, Scalable, "scalar division")
    return _map_segments(pw, lambda s: s / divisor)


def offset(pw, value):
    """``pw + value`` for an output value."""
    from pypiecewise.segment import Offsettable

    _require(pw, Offsettable, "offsetting")
    return _map_segments(pw, lambda s: s + value)


def offset_sub(pw, value):
    """``pw - value`` for an output value."""
    from pypiecewise.segment import Offsettable

    _require(pw, Offsettable, "offsetting")
    return _map_segments(pw, lambda s: s - value)


# ----------------------------------------------------------------------
# Binary operators
# ----------------------------------------------------------------------

def add(a, b):
    """Pointwise ``a + b`` over the union of both cut sequences."""
    from pypiecewise.segment import Addable

    _require(a, Addable, "addition")
    _require(b, Addable, "addition")
    return _combine(a, b, lambda sa, sb: sa + sb)


def subtract(a, b):
    """Pointwise ``a - b`` over the union of both cut sequences."""
    from pypiecewise.segment import Addable

    _require(a, Addable, "subtraction")
    _require(b, Addable, "subtraction")
    return _combine(a, b, lambda sa, sb: sa - sb)


def multiply(a, b):
    """Pointwise ``a * b`` over the union of both cut sequences."""
    from pypiecewise.segment import Multiplicable

    _require(a, Multiplicable, "multiplication")
    _require(b, Multiplicable, "multiplication")
    return _combine(a, b, lambda sa, sb: sa * sb)
