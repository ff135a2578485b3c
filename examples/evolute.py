"""Evolute of a parabola: derivatives, products and approximate division."""

from pypiecewise import ChebyshevSegment, Piecewise, divide

# The parabola (t, t**2) on [-1, 1], in two pieces
x = Piecewise.from_segments(
    [ChebyshevSegment.linear(-1.0, 0.0), ChebyshevSegment.linear(0.0, 1.0)],
    [-1.0, 0.0, 1.0],
)
y = x * x

dx, dy = x.derivative(), y.derivative()
ddx, ddy = dx.derivative(), dy.derivative()

# Centres of curvature: x - y' (x'^2 + y'^2) / w and y + x' (x'^2 + y'^2) / w
speed2 = dx * dx + dy * dy
w = dx * ddy - dy * ddx
ratio = divide(speed2, w, tol=1e-10, degree=6)
ex = x - dy * ratio
ey = y + dx * ratio

print("Evolute of y = x**2 (exact: (-4 t**3, 1/2 + 3 t**2))")
for t in [-1.0, -0.5, 0.0, 0.5, 1.0]:
    print(f"  t={t:+.1f}  ({ex(t):+.8f}, {ey(t):+.8f})")
print(f"  pieces: {len(ex)}")
