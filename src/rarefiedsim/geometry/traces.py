"""
Trace Algebra for CSG Bodies

A trace of a linearly moving particle on a body is the list of time
intervals (hit segments) during which the particle is inside the body:

                       # - particle
                        \\
                         o------------
                     ---/ *           \\---
                   /       *  - trace      \\
                  (         *               )
                   \\         *             /
                     ---\\     *       /---
                          -----o------
                                \\

Traces are sorted ascending by start time and pairwise disjoint.
Primitive traces come from closed-form intersections; traces on
composite bodies are classified from the primitive traces with the
boolean operators below, each a linear merge-style scan.

Although every primitive is convex, compositions may be concave, which
is why a trace is a list rather than a single segment.
"""

import math

import numpy as np

from .bodies import Complement, Intersection, Union
from .hits import HIT_NEGATIVE_INFINITY, HIT_POSITIVE_INFINITY, earliest, latest
from .primitives import trace_primitive


# ==================== BOOLEAN OPERATORS ====================

def intersect_traces(first, second):
    """
    Intersection of two traces.

    Walks both lists; disjoint pairs advance past the interval that ends
    earlier, overlapping pairs emit their overlap and then advance past
    the interval that ends earlier (the other may still overlap the next
    interval of the opposite trace).
    """
    result = []
    i = 0
    j = 0

    while i < len(first) and j < len(second):
        start1, end1 = first[i]
        start2, end2 = second[j]

        if end1.time < start2.time:
            i += 1
        elif end2.time < start1.time:
            j += 1
        else:
            result.append((latest(start1, start2), earliest(end1, end2)))
            if end2.time < end1.time:
                j += 1
            else:
                i += 1

    return result


def _insert_segment(trace, segment):
    """Insert one segment into a trace, merging what it overlaps or touches."""
    start, end = segment
    result = []

    for k, (seg_start, seg_end) in enumerate(trace):
        if seg_end.time < start.time:
            result.append((seg_start, seg_end))
        elif seg_start.time > end.time:
            result.append((start, end))
            result.extend(trace[k:])
            return result
        else:
            start = earliest(seg_start, start)
            end = latest(seg_end, end)

    result.append((start, end))
    return result


def unite_traces(first, second):
    """Union of two traces."""
    result = list(first)
    for segment in second:
        result = _insert_segment(result, segment)
    return result


def _flip_segment(start, end):
    return (start.flipped(), end.flipped())


def complement_traces(trace):
    """
    Complement of a trace on the whole time line, normals flipped.

    Each gap between consecutive segments becomes a segment, plus the
    unbounded prefix and suffix when the trace starts or ends at a finite
    time.
    """
    if not trace:
        return [(HIT_NEGATIVE_INFINITY, HIT_POSITIVE_INFINITY)]

    result = []

    first_start = trace[0][0]
    if not math.isinf(first_start.time):
        result.append(_flip_segment(HIT_NEGATIVE_INFINITY, first_start))

    for (_, previous_end), (next_start, _) in zip(trace, trace[1:]):
        result.append(_flip_segment(previous_end, next_start))

    last_end = trace[-1][1]
    if not math.isinf(last_end.time):
        result.append(_flip_segment(last_end, HIT_POSITIVE_INFINITY))

    return result


# ==================== BODY TRACE ====================

def trace(body, particle):
    """
    Trace of a particle on a body.

    Args:
        body: Any body built with rarefiedsim.geometry constructors
        particle: (position, velocity) pair

    Returns:
        trace: Sorted list of disjoint (start, end) HitPoint pairs
    """
    position, velocity = particle
    position = np.asarray(position, dtype=np.float64)
    velocity = np.asarray(velocity, dtype=np.float64)
    return _trace(body, position, velocity)


def _trace(body, position, velocity):
    if isinstance(body, Intersection):
        return intersect_traces(_trace(body.left, position, velocity),
                                _trace(body.right, position, velocity))
    if isinstance(body, Union):
        return unite_traces(_trace(body.left, position, velocity),
                            _trace(body.right, position, velocity))
    if isinstance(body, Complement):
        return complement_traces(_trace(body.inner, position, velocity))
    return trace_primitive(body, position, velocity)
