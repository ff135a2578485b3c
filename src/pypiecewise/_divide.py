"""Approximate division for Chebyshev piecewise functions.

Exact division of two piecewise polynomials is not a polynomial, so
``divide`` builds a piecewise interpolant of the quotient instead.  Each
aligned segment pair is interpolated with a fixed degree and bisected until
the residual ``a - b * q`` is below the tolerance.  Where the denominator
stays close to zero the quotient is truncated to ``a * sign(b) / zero``,
which keeps the result bounded around the zeros of ``b``.
"""

from __future__ import annotations

import warnings

import numpy as np

from pypiecewise.interval import Interval

# Bisection depth after which a piece is accepted as is.
MAX_DEPTH = 24


def _as_piecewise(x, name):
    from pypiecewise.chebyshev import ChebyshevSegment
    from pypiecewise.piecewise import Piecewise

    if isinstance(x, ChebyshevSegment):
        return Piecewise(x)
    if isinstance(x, Piecewise):
        for seg in x.segs:
            if not isinstance(seg, ChebyshevSegment):
                raise TypeError(
                    f"divide() supports ChebyshevSegment pieces only; "
                    f"{name} has a {type(seg).__name__}"
                )
        return x
    raise TypeError(
        f"divide() expects a ChebyshevSegment or Piecewise for {name}, "
        f"got {type(x).__name__}"
    )


def _truncated_quotient(a, b, degree, zero):
    """Interpolant of ``a / b`` with ``|b|`` clamped from below to *zero*."""
    from pypiecewise.chebyshev import ChebyshevSegment

    x = ChebyshevSegment.nodes(degree + 1)
    bx = b(x)
    sgn = np.where(bx < 0, -1.0, 1.0)
    clamped = np.where(np.abs(bx) < zero, sgn * zero, bx)
    return ChebyshevSegment.from_values(a(x) / clamped), bool(np.any(np.abs(bx) < zero))


def _divide_segment(a, b, tol, degree, zero, depth):
    """Quotient of two segments as a piecewise function on ``[0, 1]``.

    Returns the piecewise quotient and the number of truncated pieces.
    """
    from pypiecewise.piecewise import Piecewise

    bb = b.bounds_exact()
    if max(abs(bb.min), abs(bb.max)) < 2 * zero:
        sgn = -1.0 if b(0.5) < 0 else 1.0
        return Piecewise(a * (sgn / zero)), 1

    if bb.min > zero or bb.max < -zero:
        q = a.divide(b, degree)
        if tol is None or depth >= MAX_DEPTH:
            return Piecewise(q), 0
        residual = (a - b * q).bounds_exact()
        if max(abs(residual.min), abs(residual.max)) < tol:
            return Piecewise(q), 0
    elif depth >= MAX_DEPTH:
        q, truncated = _truncated_quotient(a, b, degree, zero)
        return Piecewise(q), int(truncated)

    c0, n0 = _divide_segment(a.portion(0.0, 0.5), b.portion(0.0, 0.5),
                             tol, degree, zero, depth + 1)
    c1, n1 = _divide_segment(a.portion(0.5, 1.0), b.portion(0.5, 1.0),
                             tol, degree, zero, depth + 1)
    c0.set_domain(Interval(0.0, 0.5))
    c1.set_domain(Interval(0.5, 1.0))
    c0.concat(c1)
    return c0, n0 + n1


def divide(a, b, tol: float | None = 1e-6, degree: int = 4, zero: float = 1e-3):
    """Approximate ``a / b`` as a piecewise Chebyshev function.

    The relative accuracy is about ``tol / |b|``; the result is not an
    exact quotient.  Wherever ``|b|`` stays below ``2 * zero`` on a piece,
    the quotient there is replaced by ``a * sign(b) / zero``.

    Parameters
    ----------
    a, b : ChebyshevSegment or Piecewise
        Numerator and denominator.  A single segment is treated as a
        piecewise function on ``[0, 1]``.
    tol : float or None, optional
        Bound on the residual ``|a - b * q|`` of every piece (default
        1e-6).  ``None`` accepts the first interpolant of every piece on
        which ``b`` keeps its sign.
    degree : int, optional
        Degree of the quotient interpolant on each piece (default 4).
    zero : float, optional
        Denominator magnitude treated as zero (default 1e-3).

    Returns
    -------
    Piecewise
        Quotient over the union of both domains and cut sequences.

    Raises
    ------
    TypeError
        If an operand is not built from :class:`ChebyshevSegment` pieces.
    ValueError
        If *degree* is negative or *zero* is not positive.

    Warns
    -----
    UserWarning
        When the quotient was truncated on at least one piece.
    """
    from pypiecewise._algebra import _align
    from pypiecewise.piecewise import Piecewise

    if degree < 0:
        raise ValueError(f"degree must be >= 0, got {degree}")
    if zero <= 0:
        raise ValueError(f"zero must be positive, got {zero}")

    a = _as_piecewise(a, "a")
    b = _as_piecewise(b, "b")
    result = Piecewise()
    if a.is_empty and b.is_empty:
        return result

    pa, pb = _align(a, b)
    truncated = 0
    for i in range(len(pa)):
        piece, n = _divide_segment(pa.segs[i], pb.segs[i], tol, degree, zero, 0)
        piece.set_domain(Interval(pa.cuts[i], pa.cuts[i + 1]))
        result.concat(piece)
        truncated += n

    if truncated:
        warnings.warn(
            f"divide(): |b| fell below zero={zero} on {truncated} piece(s); "
            f"the quotient is truncated to about a / zero there.",
            UserWarning,
            stacklevel=2,
        )
    return result
