"""
Hit-point extraction and body membership.
"""

import numpy as np

from ..constants import INSIDE_PROBE_DIRECTIONS
from ..vector import cross, dot, norm, quadratic_form
from .bodies import Complement, Cone, Cylinder, Intersection, Plane, Union
from .hits import HitPoint
from .traces import intersect_traces, trace

# Below this a probe counts as parallel to a plane, cylinder axis or
# cone generatrix
PARALLEL_TOLERANCE = 1e-9


def hit_point(dt, body, particle):
    """
    First surface crossing of a particle during the last time step.

    The step is expressed in the particle's current time frame: it spans
    [-dt, 0], so the returned time is never positive. This is the
    primary ray-body query used by the collision resolver.

    Args:
        dt: Length of the elapsed step [s]
        body: Body to test
        particle: (position, velocity) pair after the step

    Returns:
        hit: Earliest HitPoint within the step, or None. Its normal is None
            when the particle was already inside at the start of the step.
    """
    last_step = [(HitPoint(-dt), HitPoint(0.0))]
    crossings = intersect_traces(last_step, trace(body, particle))

    if not crossings:
        return None
    return crossings[0][0]


def _primitives(body):
    if isinstance(body, (Union, Intersection)):
        yield from _primitives(body.left)
        yield from _primitives(body.right)
    elif isinstance(body, Complement):
        yield from _primitives(body.inner)
    else:
        yield body


def _parallel(primitive, direction):
    """True if the probe direction makes the primitive's trace degenerate."""
    if isinstance(primitive, Plane):
        return abs(dot(primitive.normal, direction)) <= PARALLEL_TOLERANCE
    if isinstance(primitive, Cylinder):
        return norm(cross(primitive.axis, direction)) <= PARALLEL_TOLERANCE
    if isinstance(primitive, Cone):
        return abs(quadratic_form(direction, direction, primitive.matrix)) <= PARALLEL_TOLERANCE
    return False


def probe_direction(body):
    """
    Membership probe direction for a body.

    The first of INSIDE_PROBE_DIRECTIONS that is not parallel to any
    plane, cylinder axis or cone generatrix of the body; the first one
    if every candidate is degenerate.
    """
    primitives = list(_primitives(body))
    for direction in INSIDE_PROBE_DIRECTIONS:
        if not any(_parallel(p, direction) for p in primitives):
            return direction
    return INSIDE_PROBE_DIRECTIONS[0]


def inside(body, point, direction=None):
    """
    True if a point lies inside the body (surface included).

    Membership does not depend on the probe direction as long as the
    ray is not parallel to a plane, cylinder axis or cone generatrix of
    the body; by default such directions are avoided.

    Args:
        body: Body to test
        point: Position, array (3,) [m]
        direction: Probe ray direction (default: probe_direction(body))
    """
    if direction is None:
        direction = probe_direction(body)

    now = [(HitPoint(0.0), HitPoint(0.0))]
    probe = (np.asarray(point, dtype=np.float64), np.asarray(direction, dtype=np.float64))

    return len(intersect_traces(trace(body, probe), now)) > 0
