"""Chebyshev-series segments on the local parameter range ``[0, 1]``.

A :class:`ChebyshevSegment` stores the coefficients ``c_k`` of

.. math::

    s(t) = \\sum_k c_k T_k(2t - 1), \\qquad t \\in [0, 1]

and implements the full :class:`~pypiecewise.segment.Segment` contract
plus the arithmetic, composition and approximate division used by the
piecewise operators.

References
----------
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 3 and 18.
- Good (1961), "The colleague matrix, a Chebyshev analogue of the companion
  matrix", Quarterly J. Mech. 14:195-196.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.polynomial import chebyshev as C
from numpy.polynomial.chebyshev import chebpts1

from pypiecewise._algebra import _is_scalar
from pypiecewise.interval import Interval
from pypiecewise.segment import Segment

# Imaginary-part tolerance for accepting a colleague-matrix eigenvalue as real.
ROOT_TOL = 1e-10


def _local_nodes(n: int) -> np.ndarray:
    """Chebyshev Type I nodes mapped onto ``[0, 1]``, ascending."""
    return np.sort(0.5 + 0.5 * chebpts1(n))


class ChebyshevSegment(Segment):
    """Polynomial segment in the Chebyshev basis over local ``[0, 1]``.

    Segments are immutable: the coefficient array is read-only and every
    operation returns a new segment.

    Parameters
    ----------
    coeffs : array_like
        Chebyshev coefficients ``c_0, c_1, ...`` with respect to the
        shifted variable ``u = 2t - 1``.  An empty sequence is treated as
        the zero function.

    Examples
    --------
    >>> s = ChebyshevSegment.linear(1.0, 3.0)
    >>> s(0.5)
    2.0
    >>> s.derivative()(0.2)
    2.0
    """

    output_type = float

    # numpy scalars on the left defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, coeffs=(0.0,)):
        c = np.array(coeffs, dtype=float).ravel()
        if c.size == 0:
            c = np.zeros(1)
        c.setflags(write=False)
        self._coeffs = c

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def constant(cls, value) -> "ChebyshevSegment":
        """Segment equal to *value* everywhere."""
        return cls([float(value)])

    @classmethod
    def linear(cls, v0: float, v1: float) -> "ChebyshevSegment":
        """Straight line with value *v0* at ``t = 0`` and *v1* at ``t = 1``."""
        return cls([0.5 * (v0 + v1), 0.5 * (v1 - v0)])

    @classmethod
    def identity(cls) -> "ChebyshevSegment":
        """The segment ``s(t) = t``."""
        return cls.linear(0.0, 1.0)

    @classmethod
    def from_values(cls, values) -> "ChebyshevSegment":
        """Interpolate values sampled at the Type I nodes of :meth:`nodes`.

        Uses DCT-II (``scipy.fft.dct``) to obtain the coefficients.

        Parameters
        ----------
        values : array_like of shape (n,)
            Function values at ``ChebyshevSegment.nodes(n)`` (ascending).

        Returns
        -------
        ChebyshevSegment
            Interpolant of degree ``n - 1``.
        """
        from scipy.fft import dct

        values = np.asarray(values, dtype=float)
        n = len(values)
        if n == 0:
            raise ValueError("from_values() needs at least one value")
        # Reverse to decreasing-node order for DCT-II convention
        coeffs = dct(values[::-1], type=2) / n
        coeffs[0] /= 2
        return cls(coeffs)

    @classmethod
    def from_function(cls, func: Callable[[float], float], degree: int) -> "ChebyshevSegment":
        """Interpolate *func* on ``[0, 1]`` with a polynomial of *degree*.

        Parameters
        ----------
        func : callable
            Scalar function of the local parameter.
        degree : int
            Polynomial degree (``degree + 1`` Type I nodes are sampled).
        """
        if degree < 0:
            raise ValueError(f"degree must be >= 0, got {degree}")
        return cls.from_values([func(float(x)) for x in cls.nodes(degree + 1)])

    @staticmethod
    def nodes(n: int) -> np.ndarray:
        """The *n* Chebyshev Type I nodes on ``[0, 1]`` in ascending order."""
        return _local_nodes(n)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def coeffs(self) -> np.ndarray:
        """Read-only Chebyshev coefficients."""
        return self._coeffs

    @property
    def degree(self) -> int:
        return len(self._coeffs) - 1

    def tail_error(self, k: int) -> float:
        """Upper bound of the error made by dropping coefficients ``k`` and above."""
        return float(np.sum(np.abs(self._coeffs[k:])))

    def is_zero(self, eps: float = 0.0) -> bool:
        """True if every coefficient is within *eps* of zero."""
        return bool(np.all(np.abs(self._coeffs) <= eps))

    def truncate(self, degree: int) -> "ChebyshevSegment":
        """Drop the coefficients above *degree*."""
        return ChebyshevSegment(self._coeffs[:degree + 1])

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def __call__(self, t):
        u = 2.0 * np.asarray(t, dtype=float) - 1.0
        value = C.chebval(u, self._coeffs)
        if np.ndim(value) == 0:
            return float(value)
        return value

    def at0(self) -> float:
        signs = np.where(np.arange(len(self._coeffs)) % 2 == 0, 1.0, -1.0)
        return float(np.dot(signs, self._coeffs))

    def at1(self) -> float:
        return float(np.sum(self._coeffs))

    # ------------------------------------------------------------------
    # Restriction and composition
    # ------------------------------------------------------------------

    def compose(self, g: "ChebyshevSegment") -> "ChebyshevSegment":
        """Return the segment ``t -> self(g(t))``.

        Runs the Clenshaw recurrence with coefficient-series arithmetic, so
        the result is exact up to rounding; its degree is
        ``self.degree * g.degree``.

        Parameters
        ----------
        g : ChebyshevSegment
            Inner function.  Its values are local parameters of *self*
            (values outside ``[0, 1]`` extrapolate).
        """
        if not isinstance(g, ChebyshevSegment):
            raise TypeError(
                f"compose() expects a ChebyshevSegment, got {type(g).__name__}"
            )
        c = self._coeffs
        if len(c) == 1:
            return ChebyshevSegment(c)
        # Inner function in the shifted variable u = 2 g - 1
        u = 2.0 * g.coeffs
        u[0] -= 1.0
        b1 = np.zeros(1)
        b2 = np.zeros(1)
        for ck in c[:0:-1]:
            b1, b2 = C.chebadd(C.chebsub(2.0 * C.chebmul(u, b1), b2), [ck]), b1
        return ChebyshevSegment(C.chebadd(C.chebsub(C.chebmul(u, b1), b2), [c[0]]))

    def portion(self, from_: float, to: float) -> "ChebyshevSegment":
        """Restriction to local ``[from_, to]``, reparametrized onto ``[0, 1]``.

        ``from_ > to`` reverses the direction of the parameter; values
        outside ``[0, 1]`` extrapolate the polynomial.
        """
        if from_ == 0.0 and to == 1.0:
            return self
        return self.compose(ChebyshevSegment.linear(from_, to))

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def bounds_fast(self) -> Interval:
        """Bound from ``|T_k| <= 1``: ``c_0 -+ sum_{k>=1} |c_k|``."""
        c0 = float(self._coeffs[0])
        spread = float(np.sum(np.abs(self._coeffs[1:])))
        return Interval(c0 - spread, c0 + spread)

    def bounds_exact(self) -> Interval:
        """Tight bound from the end points and the critical points in ``[0, 1]``."""
        candidates = np.concatenate([[0.0, 1.0], self.derivative().roots()])
        values = self(candidates)
        return Interval(float(np.min(values)), float(np.max(values)))

    def bounds_local(self, interval: Interval) -> Interval:
        """Tight bound over the local sub-range *interval*."""
        if interval.is_empty:
            return Interval(self(interval.min))
        return self.portion(interval.min, interval.max).bounds_exact()

    # ------------------------------------------------------------------
    # Calculus
    # ------------------------------------------------------------------

    def derivative(self) -> "ChebyshevSegment":
        """Derivative with respect to ``t`` (``d/dt = 2 d/du``)."""
        if len(self._coeffs) == 1:
            return ChebyshevSegment([0.0])
        return ChebyshevSegment(C.chebder(self._coeffs, scl=2.0))

    def integral(self) -> "ChebyshevSegment":
        """Antiderivative with respect to ``t``, zero at ``t = 0``."""
        return ChebyshevSegment(C.chebint(self._coeffs, lbnd=-1, scl=0.5))

    def roots(self) -> np.ndarray:
        """Sorted real roots in ``[0, 1]``.

        Roots are the real eigenvalues of the colleague matrix
        (``numpy.polynomial.chebyshev.chebroots``).  A segment that is
        identically zero has no isolated roots and returns an empty array.
        """
        # Rounding noise in the top coefficients would add spurious roots
        scale = float(np.max(np.abs(self._coeffs)))
        coeffs = C.chebtrim(self._coeffs, tol=1e-14 * scale)
        if len(coeffs) < 2:
            return np.array([], dtype=float)
        raw_roots = C.chebroots(coeffs)

        # Keep only real roots inside [-1, 1]
        tol = ROOT_TOL
        real_roots = []
        for r in np.atleast_1d(raw_roots):
            if abs(np.imag(r)) < tol:
                u = float(np.real(r))
                if -1.0 - tol <= u <= 1.0 + tol:
                    real_roots.append(min(max(u, -1.0), 1.0))

        if len(real_roots) == 0:
            return np.array([], dtype=float)

        local = np.sort(0.5 * (np.array(real_roots) + 1.0))
        if len(local) > 1:
            mask = np.concatenate([[True], np.diff(local) > 1e-12])
            local = local[mask]
        return local

    # ------------------------------------------------------------------
    # Division
    # ------------------------------------------------------------------

    def divide(self, other: "ChebyshevSegment", degree: int) -> "ChebyshevSegment":
        """Degree-*degree* interpolant of ``self / other``.

        Samples the quotient at Type I nodes, so *other* must not vanish at
        any of them; :func:`pypiecewise.divide` handles denominators that
        come close to zero.
        """
        x = _local_nodes(degree + 1)
        return ChebyshevSegment.from_values(self(x) / other(x))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    @staticmethod
    def _as_coeffs(other):
        if isinstance(other, ChebyshevSegment):
            return other.coeffs
        if _is_scalar(other):
            return np.array([float(other)])
        return None

    def __add__(self, other):
        oc = self._as_coeffs(other)
        if oc is None:
            return NotImplemented
        return ChebyshevSegment(C.chebadd(self._coeffs, oc))

    __radd__ = __add__

    def __sub__(self, other):
        oc = self._as_coeffs(other)
        if oc is None:
            return NotImplemented
        return ChebyshevSegment(C.chebsub(self._coeffs, oc))

    def __rsub__(self, other):
        oc = self._as_coeffs(other)
        if oc is None:
            return NotImplemented
        return ChebyshevSegment(C.chebsub(oc, self._coeffs))

    def __neg__(self):
        return ChebyshevSegment(-self._coeffs)

    def __mul__(self, other):
        if _is_scalar(other):
            return ChebyshevSegment(self._coeffs * float(other))
        if isinstance(other, ChebyshevSegment):
            return ChebyshevSegment(C.chebmul(self._coeffs, other.coeffs))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        if scalar == 0:
            raise ZeroDivisionError("Cannot divide a segment by zero")
        return ChebyshevSegment(self._coeffs / float(scalar))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChebyshevSegment):
            return NotImplemented
        return np.array_equal(self._coeffs, other.coeffs)

    __hash__ = None

    def __repr__(self) -> str:
        return f"ChebyshevSegment(degree={self.degree}, coeffs={self._coeffs.tolist()!r})"
