"""Quick start example: build a piecewise function, evaluate, integrate and find roots."""

import math

from pypiecewise import ChebyshevSegment, Piecewise


def f(x):
    """A smooth 1D function with three roots on [0, 3*pi]."""
    return math.sin(x) * math.exp(-0.1 * x)


# Six pieces of degree 16 over [0, 3*pi]
cuts = [k * math.pi / 2 for k in range(7)]
segs = [
    ChebyshevSegment.from_function(lambda s, a=a, b=b: f(a + (b - a) * s), 16)
    for a, b in zip(cuts[:-1], cuts[1:])
]
pw = Piecewise.from_segments(segs, cuts)
print(pw)

# Evaluate at a test point
x = 2.0
print(f"\nExact:  {f(x):.10f}")
print(f"Approx: {pw(x):.10f}")
print(f"Error:  {abs(pw(x) - f(x)):.2e}")

# Roots (a root on a cut is reported by both neighbouring pieces)
print(f"\nRoots: {sorted(set(round(r, 10) for r in pw.roots()))}")

# Bounds and the antiderivative
print(f"Bounds:   {pw.bounds_exact()}")
area = pw.integral()
print(f"Integral: {area(cuts[-1]) - area(cuts[0]):.10f}")
