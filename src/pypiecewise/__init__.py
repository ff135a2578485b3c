"""pypiecewise: piecewise-function algebra over elementary segments.

Provides the :class:`Piecewise` container, which joins segments valid on
sub-intervals of a real domain, together with the operations that combine,
restructure and analyse such functions: domain transforms, bounds, the
:func:`partition` / :func:`portion` alignment primitives, arithmetic,
composition, calculus and root extraction.  Segments follow the
:class:`Segment` capability contract; :class:`ChebyshevSegment` is the
bundled polynomial implementation.

Example
-------
>>> from pypiecewise import ChebyshevSegment, Piecewise, roots
>>> f = Piecewise.from_segments(
...     [ChebyshevSegment.linear(-1, 1), ChebyshevSegment.linear(1, -1)],
...     [0.0, 1.0, 2.0],
... )
>>> [round(r, 12) for r in roots(f)]
[0.5, 1.5]
"""

from pypiecewise._bounds import bounds_exact, bounds_fast, bounds_local
from pypiecewise._calculus import derivative, integral, roots
from pypiecewise._compose import CompositionError, compose, compose_pullback
from pypiecewise._divide import divide
from pypiecewise._partition import (
    elem_portion,
    partition,
    portion,
    remove_short_cuts,
    remove_short_cuts_extending,
)
from pypiecewise._version import __version__
from pypiecewise.chebyshev import ChebyshevSegment
from pypiecewise.interval import Interval
from pypiecewise.piecewise import Piecewise
from pypiecewise.segment import (
    Addable,
    Composable,
    Multiplicable,
    Offsettable,
    Scalable,
    Segment,
    require_capability,
)

__all__ = [
    "Addable",
    "ChebyshevSegment",
    "Composable",
    "CompositionError",
    "Interval",
    "Multiplicable",
    "Offsettable",
    "Piecewise",
    "Scalable",
    "Segment",
    "__version__",
    "bounds_exact",
    "bounds_fast",
    "bounds_local",
    "compose",
    "compose_pullback",
    "derivative",
    "divide",
    "elem_portion",
    "integral",
    "partition",
    "portion",
    "remove_short_cuts",
    "remove_short_cuts_extending",
    "require_capability",
    "roots",
]
