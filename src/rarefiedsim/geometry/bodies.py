"""
Constructive Solid Geometry Bodies

A body is a finite tree of immutable variants: four primitives (plane
halfspace, sphere, infinite cylinder, cone) combined with union,
intersection and complement. Bodies are built once, before the
simulation, and shared read-only by every particle evaluation.

Example:
    >>> hull = intersect(sphere((0, 0, 0), 1.0), plane((0, 0, 1), 0.5))
    >>> hole = cylinder((0, 0, 1), (0, 0, 0), 0.2)
    >>> body = intersect(hull, complement(hole))
"""

import math
from typing import NamedTuple

import numpy as np

from ..vector import outer


# ==================== PRIMITIVES ====================

class Plane(NamedTuple):
    """Halfspace n·x <= distance, with outward unit normal n."""
    normal: np.ndarray
    distance: float


class Sphere(NamedTuple):
    center: np.ndarray
    radius: float


class Cylinder(NamedTuple):
    """Infinite cylinder: unit axis, a point on the axis and radius."""
    axis: np.ndarray
    center: np.ndarray
    radius: float


class Cone(NamedTuple):
    """
    Right circular cone (one nappe).

    Attributes:
        axis: Unit vector from the apex into the body
        apex: Apex point
        angle: Half-angle between axis and generatrix [rad]
        matrix: axis ⊗ axis - cos²(angle)·I
        tangent: tan(angle)
        offset: axis · apex, the apex plane offset
    """
    axis: np.ndarray
    apex: np.ndarray
    angle: float
    matrix: np.ndarray
    tangent: float
    offset: float


# ==================== COMPOSITES ====================

class Union(NamedTuple):
    left: "Body"
    right: "Body"


class Intersection(NamedTuple):
    left: "Body"
    right: "Body"


class Complement(NamedTuple):
    inner: "Body"


PRIMITIVE_TYPES = (Plane, Sphere, Cylinder, Cone)
BODY_TYPES = PRIMITIVE_TYPES + (Union, Intersection, Complement)


def is_body(value):
    return isinstance(value, BODY_TYPES)


# ==================== CONSTRUCTORS ====================

def _as_vector(value, name):
    vec = np.array(value, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"{name} must be a 3-vector, got shape {vec.shape}")
    return vec


def _as_unit_vector(value, name):
    vec = _as_vector(value, name)
    length = np.linalg.norm(vec)
    if not length > 0.0:
        raise ValueError(f"{name} must have non-zero length")
    return vec / length


def _check_body(value, name):
    if not is_body(value):
        raise TypeError(f"{name} must be a body, got {type(value).__name__}")
    return value


def plane(normal, distance):
    """
    Halfspace bounded by a plane.

    Args:
        normal: Outward normal (normalized here)
        distance: Signed distance of the plane from the origin along normal [m]
    """
    return Plane(_as_unit_vector(normal, "normal"), float(distance))


def sphere(center, radius):
    """Solid sphere from center point and radius [m]."""
    if not radius > 0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    return Sphere(_as_vector(center, "center"), float(radius))


def cylinder(axis, center, radius):
    """
    Infinite solid cylinder.

    Args:
        axis: Vector collinear with the axis (normalized here)
        center: Any point on the axis
        radius: Radius [m]
    """
    if not radius > 0:
        raise ValueError(f"Cylinder radius must be positive, got {radius}")
    return Cylinder(_as_unit_vector(axis, "axis"), _as_vector(center, "center"),
                    float(radius))


def cone(axis, apex, angle):
    """
    Solid right circular cone.

    Args:
        axis: Outward axis vector; the body extends from the apex in the
            opposite direction
        apex: Apex point
        angle: Half-angle between axis and generatrix, in (0, pi/2) [rad]
    """
    if not 0.0 < angle < 0.5 * math.pi:
        raise ValueError(f"Cone angle must lie in (0, pi/2), got {angle}")

    n = -_as_unit_vector(axis, "axis")
    apex = _as_vector(apex, "apex")
    cos_h = math.cos(angle)
    matrix = outer(n, n) - cos_h * cos_h * np.eye(3)

    return Cone(n, apex, float(angle), matrix, math.tan(angle), float(n @ apex))


def intersect(left, right):
    """Intersection of two bodies."""
    return Intersection(_check_body(left, "left"), _check_body(right, "right"))


def unite(left, right):
    """Union of two bodies."""
    return Union(_check_body(left, "left"), _check_body(right, "right"))


def complement(body):
    """Complement of a body (all normals flipped)."""
    return Complement(_check_body(body, "body"))
