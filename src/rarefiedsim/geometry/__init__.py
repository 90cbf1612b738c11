"""
Geometry module for rarefiedsim.

Constructive solid geometry bodies and the ray-casting routines used to
find where particles hit body surfaces.
"""

from .bodies import (
    Plane,
    Sphere,
    Cylinder,
    Cone,
    Union,
    Intersection,
    Complement,
    plane,
    sphere,
    cylinder,
    cone,
    intersect,
    unite,
    complement,
    is_body,
)
from .hits import HitPoint, HIT_NEGATIVE_INFINITY, HIT_POSITIVE_INFINITY
from .traces import trace, intersect_traces, unite_traces, complement_traces
from .queries import hit_point, inside, probe_direction

__all__ = [
    'Plane',
    'Sphere',
    'Cylinder',
    'Cone',
    'Union',
    'Intersection',
    'Complement',
    'plane',
    'sphere',
    'cylinder',
    'cone',
    'intersect',
    'unite',
    'complement',
    'is_body',
    'HitPoint',
    'HIT_NEGATIVE_INFINITY',
    'HIT_POSITIVE_INFINITY',
    'trace',
    'intersect_traces',
    'unite_traces',
    'complement_traces',
    'hit_point',
    'inside',
    'probe_direction',
]
