"""
3D Vector Algebra and Quadratic Root Solver

Numba-compiled helpers shared by the ray tracer and the particle pusher.
Vectors are float64 arrays of shape (3,); addition, subtraction and
scaling are plain numpy operators.

All kernels use the numpy error model: division by zero produces
+/-inf or NaN instead of raising, so IEEE-754 values propagate through
every formula.
"""

import math

import numpy as np
from numba import njit


@njit(error_model="numpy")
def dot(a, b):
    """Dot product a · b."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@njit(error_model="numpy")
def cross(a, b):
    """Cross product a × b."""
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ], dtype=np.float64)


@njit(error_model="numpy")
def norm(a):
    """Euclidean length of a vector."""
    return math.sqrt(dot(a, a))


@njit(error_model="numpy")
def normalize(a):
    """
    Unit vector along a.

    A zero vector yields NaN components.
    """
    return a / norm(a)


@njit(error_model="numpy")
def outer(a, b):
    """Outer product a ⊗ b as a (3, 3) matrix."""
    m = np.empty((3, 3), dtype=np.float64)
    for i in range(3):
        for j in range(3):
            m[i, j] = a[i] * b[j]
    return m


@njit(error_model="numpy")
def quadratic_form(u, w, m):
    """Bilinear form u · M · w for a (3, 3) matrix M."""
    s = 0.0
    for i in range(3):
        for j in range(3):
            s += u[i] * m[i, j] * w[j]
    return s


@njit(error_model="numpy")
def move_by(position, velocity, t):
    """Position reached after moving with constant velocity for time t."""
    return position + velocity * t


@njit(error_model="numpy")
def solve_quadratic(a, b, c):
    """
    Solve a*t^2 + b*t + c = 0 for real roots.

    Uses the cancellation-free form q = -(b + sign(b)*sqrt(d)) / 2 with
    roots q/a and c/q (Ray Tracing Gems, ch. 7).

    Args:
        a, b, c: Coefficients

    Returns:
        found: True if two distinct real roots exist
        t1, t2: Roots ordered t1 <= t2 (NaN when not found)

    Note:
        A zero discriminant (tangent double root) counts as no roots:
        a zero-width interval carries no meaning for wall collisions.
        With a == 0 the equation is linear: c/q is its root and q/a is
        +/-inf, the time at which the quadratic root escapes.
    """
    d = b * b - 4.0 * a * c

    if d > 0.0:
        q = -0.5 * (b + math.copysign(math.sqrt(d), b))
        r1 = q / a
        r2 = c / q
        return True, min(r1, r2), max(r1, r2)

    return False, np.nan, np.nan


# ==================== TESTING ====================

if __name__ == "__main__":
    a = np.array([1.0, 0.0, 0.0])
    b = np.array([0.0, 1.0, 0.0])

    print(f"a · b      = {dot(a, b)}")
    print(f"a × b      = {cross(a, b)}")
    print(f"|(3,4,0)|  = {norm(np.array([3.0, 4.0, 0.0]))}")
    print(f"t^2 - 1    = 0 -> {solve_quadratic(1.0, 0.0, -1.0)}")
    print(f"t^2        = 0 -> {solve_quadratic(1.0, 0.0, 0.0)}")
