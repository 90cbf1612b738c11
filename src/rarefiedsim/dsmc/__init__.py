"""
Direct Simulation Monte Carlo (DSMC) Module

Collisionless particle flow around solid bodies: free flight plus
specular reflection on body surfaces.
"""

from .mover import (
    push_particles_ballistic,
    free_flight,
)
from .surfaces import (
    specular_reflect_particle,
    resolve_body_collision,
    clip_body,
    advance,
)

__all__ = [
    "push_particles_ballistic",
    "free_flight",
    "specular_reflect_particle",
    "resolve_body_collision",
    "clip_body",
    "advance",
]
