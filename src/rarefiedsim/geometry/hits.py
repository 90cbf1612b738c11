"""
Hit points: boundaries of the time intervals a trajectory spends inside a body.
"""

import math


class HitPoint:
    """
    Time at which a particle crosses a body surface.

    Attributes:
        time: Crossing time relative to the particle's current time [s].
            May be -inf or +inf for unbounded traces.
        normal: Outward unit normal of the surface at the crossing, or
            None for a hit at infinity.

    Hit points compare by time only; normals are never compared.
    """

    __slots__ = ("time", "normal")

    def __init__(self, time, normal=None):
        self.time = float(time)
        self.normal = normal

    @property
    def is_finite(self):
        return math.isfinite(self.time)

    def flipped(self):
        """Same hit point with the normal reversed."""
        if self.normal is None:
            return HitPoint(self.time)
        return HitPoint(self.time, -self.normal)

    def __eq__(self, other):
        if not isinstance(other, HitPoint):
            return NotImplemented
        return self.time == other.time

    def __ne__(self, other):
        if not isinstance(other, HitPoint):
            return NotImplemented
        return self.time != other.time

    def __lt__(self, other):
        return self.time < other.time

    def __le__(self, other):
        return self.time <= other.time

    def __gt__(self, other):
        return self.time > other.time

    def __ge__(self, other):
        return self.time >= other.time

    def __hash__(self):
        return hash(self.time)

    def __repr__(self):
        if self.normal is None:
            return f"HitPoint({self.time})"
        n = self.normal
        return f"HitPoint({self.time}, normal=({n[0]:.6g}, {n[1]:.6g}, {n[2]:.6g}))"


# Sentinel ends of unbounded traces
HIT_NEGATIVE_INFINITY = HitPoint(-math.inf)
HIT_POSITIVE_INFINITY = HitPoint(math.inf)


def earliest(a, b):
    """Earlier of two hit points; on a tie the one with a normal wins."""
    if a.time < b.time:
        return a
    if b.time < a.time:
        return b
    return a if a.normal is not None else b


def latest(a, b):
    """Later of two hit points; on a tie the one with a normal wins."""
    if a.time > b.time:
        return a
    if b.time > a.time:
        return b
    return a if a.normal is not None else b
