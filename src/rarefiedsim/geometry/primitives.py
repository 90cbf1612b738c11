"""
Ray/Primitive Intersection

Closed-form intersection of a particle trajectory X(t) = X0 + V*t with
the surface of each primitive. Substituting the trajectory into the
surface equation gives a linear (plane) or quadratic (sphere, cylinder,
cone) equation in t; its roots bound the time interval the particle
spends inside the primitive.

Each primitive yields a trace of at most one interval:

    Plane     [t, +inf) or (-inf, t]
    Sphere    [t1, t2]
    Cylinder  [t1, t2]
    Cone      [t1, t2], (-inf, t1] or [t2, +inf)

Degenerate configurations (ray parallel to a plane, tangent or missing
roots, both cone roots on the wrong nappe) give an empty trace.

References:
- Glassner (1989), "An Introduction to Ray Tracing", Ch. 2
- Eberly (2008), "Intersection of a Line and a Cone"
"""

import math

import numpy as np
from numba import njit

from ..vector import cross, dot, move_by, normalize, quadratic_form, solve_quadratic
from .bodies import Cone, Cylinder, Plane, Sphere
from .hits import HIT_NEGATIVE_INFINITY, HIT_POSITIVE_INFINITY, HitPoint


# Relative size of the t^2 coefficient below which a ray counts as
# parallel to a cone generatrix
GENERATRIX_TOLERANCE = 1e-12


# ==================== ROOT KERNELS ====================

@njit(error_model="numpy")
def plane_crossing(normal, distance, position, velocity):
    """
    Crossing of a trajectory with the plane n·x = distance.

    Returns:
        direction: +1 if the particle enters the halfspace (moves against
            the outward normal), -1 if it leaves, 0 if parallel
        t: Crossing time (NaN when parallel)
    """
    f = -dot(normal, velocity)

    if f == 0.0:
        return 0, np.nan

    t = (dot(position, normal) - distance) / f

    if f > 0.0:
        return 1, t
    return -1, t


@njit(error_model="numpy")
def sphere_roots(center, radius, position, velocity):
    """Roots of |X0 + V*t - c|^2 = r^2."""
    d = position - center
    return solve_quadratic(dot(velocity, velocity),
                           2.0 * dot(velocity, d),
                           dot(d, d) - radius * radius)


@njit(error_model="numpy")
def cylinder_roots(axis, center, radius, position, velocity):
    """Roots of |(X0 + V*t - c) × a|^2 = r^2 (axial component removed)."""
    d = cross(position - center, axis)
    e = cross(velocity, axis)
    return solve_quadratic(dot(e, e), 2.0 * dot(d, e), dot(d, d) - radius * radius)


@njit(error_model="numpy")
def _on_cone_nappe(axis, offset, position, velocity, t):
    if math.isinf(t):
        # The point at infinity lies on the nappe the velocity heads into
        return dot(axis, velocity) * t > 0.0
    return dot(move_by(position, velocity, t), axis) - offset > 0.0


@njit(error_model="numpy")
def cone_roots(axis, apex, matrix, offset, position, velocity):
    """
    Roots of (X - apex)·M·(X - apex) = 0 on the double cone.

    Returns:
        found: True if two roots exist
        t1, t2: Roots, t1 <= t2
        valid1, valid2: Whether each root's point lies on the body's
            nappe (axis·X - offset > 0), evaluated independently

    A ray parallel to a generatrix crosses the double cone once; its
    other root is +/-inf.
    """
    delta = position - apex
    c2 = quadratic_form(velocity, velocity, matrix)
    c1 = quadratic_form(velocity, delta, matrix)
    c0 = quadratic_form(delta, delta, matrix)

    if abs(c2) <= GENERATRIX_TOLERANCE * dot(velocity, velocity):
        c2 = 0.0

    found, t1, t2 = solve_quadratic(c2, 2.0 * c1, c0)
    if not found:
        return False, t1, t2, False, False

    valid1 = _on_cone_nappe(axis, offset, position, velocity, t1)
    valid2 = _on_cone_nappe(axis, offset, position, velocity, t2)

    return True, t1, t2, valid1, valid2


# ==================== SURFACE NORMALS ====================

@njit(error_model="numpy")
def sphere_normal(center, point):
    return normalize(point - center)


@njit(error_model="numpy")
def cylinder_normal(axis, center, point):
    h = point - center
    return normalize(h - axis * dot(h, axis))


@njit(error_model="numpy")
def cone_normal(axis, apex, tangent, point):
    """
    Outward cone normal at a surface point.

    The offset from the apex splits into axial and radial unit
    components; radial - axial * tan(h) is perpendicular to the
    generatrix.
    """
    h = point - apex
    axial = axis * dot(axis, h)
    ny = normalize(axial)
    nx = normalize(h - axial)
    return normalize(nx - ny * tangent)


# ==================== PRIMITIVE TRACES ====================

def trace_plane(body, position, velocity):
    direction, t = plane_crossing(body.normal, body.distance, position, velocity)

    if direction == 0:
        return []
    if direction > 0:
        return [(HitPoint(t, body.normal), HIT_POSITIVE_INFINITY)]
    return [(HIT_NEGATIVE_INFINITY, HitPoint(t, body.normal))]


def trace_sphere(body, position, velocity):
    found, t1, t2 = sphere_roots(body.center, body.radius, position, velocity)

    if not found:
        return []

    n1 = sphere_normal(body.center, move_by(position, velocity, t1))
    n2 = sphere_normal(body.center, move_by(position, velocity, t2))
    return [(HitPoint(t1, n1), HitPoint(t2, n2))]


def trace_cylinder(body, position, velocity):
    found, t1, t2 = cylinder_roots(body.axis, body.center, body.radius,
                                   position, velocity)

    if not found:
        return []

    n1 = cylinder_normal(body.axis, body.center, move_by(position, velocity, t1))
    n2 = cylinder_normal(body.axis, body.center, move_by(position, velocity, t2))
    return [(HitPoint(t1, n1), HitPoint(t2, n2))]


def trace_cone(body, position, velocity):
    found, t1, t2, valid1, valid2 = cone_roots(
        body.axis, body.apex, body.matrix, body.offset, position, velocity
    )

    if not found or not (valid1 or valid2):
        return []

    def hit(t):
        if math.isinf(t):
            return HIT_NEGATIVE_INFINITY if t < 0 else HIT_POSITIVE_INFINITY
        point = move_by(position, velocity, t)
        return HitPoint(t, cone_normal(body.axis, body.apex, body.tangent, point))

    if valid1 and valid2:
        return [(hit(t1), hit(t2))]
    if valid1:
        # Trajectory leaves the body through the first root and crosses
        # over to the opposite nappe
        return [(HIT_NEGATIVE_INFINITY, hit(t1))]
    return [(hit(t2), HIT_POSITIVE_INFINITY)]


def trace_primitive(body, position, velocity):
    """
    Trace of a trajectory on a primitive body.

    Args:
        body: Plane, Sphere, Cylinder or Cone
        position: Particle position, float64 array (3,) [m]
        velocity: Particle velocity, float64 array (3,) [m/s]

    Returns:
        trace: List of at most one (start, end) HitPoint pair
    """
    if isinstance(body, Plane):
        return trace_plane(body, position, velocity)
    if isinstance(body, Sphere):
        return trace_sphere(body, position, velocity)
    if isinstance(body, Cylinder):
        return trace_cylinder(body, position, velocity)
    if isinstance(body, Cone):
        return trace_cone(body, position, velocity)
    raise TypeError(f"Not a primitive body: {type(body).__name__}")
