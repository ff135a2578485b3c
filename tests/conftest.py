"""Shared test fixtures for pypiecewise tests."""

import math

import numpy as np
import pytest

from pypiecewise import ChebyshevSegment, Piecewise


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def piecewise_from_function(func, cuts, degree):
    """Interpolate *func* on every interval between consecutive *cuts*."""
    segs = []
    for a, b in zip(cuts[:-1], cuts[1:]):
        segs.append(
            ChebyshevSegment.from_function(
                lambda s, a=a, b=b: func(a + (b - a) * s), degree
            )
        )
    return Piecewise.from_segments(segs, cuts)


def ramp_piecewise(x):
    """Continuous piecewise-linear reference: slopes 1, 2, -1 on [0,1], [1,2], [2,3]."""
    if x < 1.0:
        return x
    if x < 2.0:
        return 1.0 + 2.0 * (x - 1.0)
    return 3.0 - (x - 2.0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def pw_hat():
    """Hat function: 0 -> 1 on [0, 0.5], 1 -> 0 on [0.5, 1]."""
    return Piecewise.from_segments(
        [ChebyshevSegment.linear(0.0, 1.0), ChebyshevSegment.linear(1.0, 0.0)],
        [0.0, 0.5, 1.0],
    )


@pytest.fixture
def pw_square():
    """t**2 on [0, 3] as three exact quadratic segments with cuts [0, 1, 2, 3]."""
    return piecewise_from_function(lambda x: x * x, [0.0, 1.0, 2.0, 3.0], 2)


@pytest.fixture
def pw_ramp():
    """ramp_piecewise as three linear segments with cuts [0, 1, 2, 3]."""
    return Piecewise.from_segments(
        [
            ChebyshevSegment.linear(0.0, 1.0),
            ChebyshevSegment.linear(1.0, 3.0),
            ChebyshevSegment.linear(3.0, 2.0),
        ],
        [0.0, 1.0, 2.0, 3.0],
    )


@pytest.fixture
def pw_sin():
    """sin(x) on [0, pi], four pieces of degree 14."""
    return piecewise_from_function(math.sin, list(np.linspace(0.0, math.pi, 5)), 14)


@pytest.fixture
def pw_cos():
    """cos(x) on [0, pi], three pieces of degree 14."""
    return piecewise_from_function(math.cos, list(np.linspace(0.0, math.pi, 4)), 14)
