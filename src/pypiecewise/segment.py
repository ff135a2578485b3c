"""Capability contract for the elementary segments of a :class:`Piecewise`.

Every segment lives on the local parameter range ``[0, 1]``.  The container
only relies on the operations of :class:`Segment`; arithmetic operators
additionally need one of the optional capabilities below.  Operators check
the capability up front and raise ``TypeError`` before doing any work, so a
segment type that lacks e.g. scalar multiplication can never produce a
half-built result.
"""

from __future__ import annotations

import abc
from typing import Protocol, runtime_checkable

from pypiecewise.interval import Interval


class Segment(abc.ABC):
    """Abstract elementary function on the local parameter range ``[0, 1]``.

    Concrete types subclass this (or are registered with
    ``Segment.register``) and implement every abstract method.  Segments are
    treated as immutable values: operations return new segments.
    """

    @abc.abstractmethod
    def __call__(self, t):
        """Evaluate at local parameter *t* (scalar or array)."""

    @abc.abstractmethod
    def at0(self):
        """Value at ``t = 0``."""

    @abc.abstractmethod
    def at1(self):
        """Value at ``t = 1``."""

    @abc.abstractmethod
    def portion(self, from_: float, to: float) -> "Segment":
        """Restriction to local ``[from_, to]``, reparametrized onto ``[0, 1]``."""

    @abc.abstractmethod
    def bounds_fast(self) -> Interval:
        """Cheap (possibly loose) bound of the values over ``[0, 1]``."""

    @abc.abstractmethod
    def bounds_exact(self) -> Interval:
        """Tight bound of the values over ``[0, 1]``."""

    @abc.abstractmethod
    def bounds_local(self, interval: Interval) -> Interval:
        """Tight bound of the values over a local sub-range."""

    @abc.abstractmethod
    def derivative(self) -> "Segment":
        """Derivative with respect to the local parameter."""

    @abc.abstractmethod
    def integral(self) -> "Segment":
        """An antiderivative with respect to the local parameter."""

    @abc.abstractmethod
    def roots(self):
        """Sorted roots in ``[0, 1]``."""

    @classmethod
    @abc.abstractmethod
    def constant(cls, value) -> "Segment":
        """Segment that evaluates to *value* everywhere."""


@runtime_checkable
class Offsettable(Protocol):
    """Supports ``seg + value`` and ``seg - value`` with an output value."""

    def __add__(self, other): ...

    def __sub__(self, other): ...


@runtime_checkable
class Scalable(Protocol):
    """Supports ``seg * s``, ``seg / s`` and ``-seg`` with a scalar ``s``."""

    def __mul__(self, other): ...

    def __truediv__(self, other): ...

    def __neg__(self): ...


@runtime_checkable
class Addable(Protocol):
    """Supports ``seg + seg`` and ``seg - seg``."""

    def __add__(self, other): ...

    def __sub__(self, other): ...


@runtime_checkable
class Multiplicable(Protocol):
    """Supports ``seg * seg``."""

    def __mul__(self, other): ...


@runtime_checkable
class Composable(Protocol):
    """Supports ``seg.compose(g)`` for an elementary function ``g``."""

    def compose(self, g): ...


# Method names checked by require_capability, one entry per protocol above.
_REQUIRED_METHODS = {
    Offsettable: ("__add__", "__sub__"),
    Scalable: ("__mul__", "__truediv__", "__neg__"),
    Addable: ("__add__", "__sub__"),
    Multiplicable: ("__mul__",),
    Composable: ("compose",),
}


def require_capability(segment, capability, operation: str) -> None:
    """Raise ``TypeError`` unless *segment* provides *capability*.

    Parameters
    ----------
    segment : Segment or type
        A segment instance or a segment class.
    capability : type
        One of the capability protocols of this module.
    operation : str
        Name of the operation, used in the error message.
    """
    cls = segment if isinstance(segment, type) else type(segment)
    missing = [
        name for name in _REQUIRED_METHODS[capability]
        if getattr(cls, name, None) is None
    ]
    if missing:
        raise TypeError(
            f"{operation} requires {capability.__name__} segments; "
            f"{cls.__name__} does not provide {', '.join(missing)}"
        )
