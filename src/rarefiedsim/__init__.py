"""
rarefiedsim: Collisionless Rarefied Gas Flow around CSG Bodies

Particle-based simulation of free-molecular flow past solid obstacles
built with constructive solid geometry. Particles fly ballistically and
reflect specularly from body surfaces found by exact ray casting.

Version: 0.1.0
"""

__version__ = "0.1.0"

from .constants import kB, SPECIES, HIT_SHIFT
from .particles import Particle, ParticleEnsemble, make_particle
from .geometry import (
    plane,
    sphere,
    cylinder,
    cone,
    intersect,
    unite,
    complement,
    trace,
    hit_point,
    inside,
    HitPoint,
)
from .dsmc import advance

__all__ = [
    "Particle",
    "ParticleEnsemble",
    "make_particle",
    "plane",
    "sphere",
    "cylinder",
    "cone",
    "intersect",
    "unite",
    "complement",
    "trace",
    "hit_point",
    "inside",
    "HitPoint",
    "advance",
]
