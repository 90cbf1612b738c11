"""
DSMC Body Surface Interaction

Collisionless flow step around a CSG body:
1. Free flight of every particle for the timestep
2. Detection of the first body surface crossing during the step and
   specular reflection at the crossing point
3. Removal of particles which ended up inside the body

Every stage works on one particle at a time and only reads the shared
body, so particles may be processed in any order or partition.

References:
- Bird (1994), "Molecular Gas Dynamics", Ch. 11
"""

import logging

import numpy as np
from numba import njit

from ..constants import HIT_SHIFT
from ..geometry.queries import hit_point, inside
from ..particles import Particle, ParticleEnsemble
from ..vector import dot, move_by
from .mover import free_flight

logger = logging.getLogger(__name__)


# ==================== SPECULAR REFLECTION ====================

@njit(error_model="numpy")
def specular_reflect_particle(v_incident, wall_normal):
    """
    Specular (mirror) reflection.

    Parameters:
    -----------
    v_incident : ndarray (3,)
        Incident velocity [m/s]
    wall_normal : ndarray (3,)
        Unit surface normal

    Returns:
    --------
    v_reflected : ndarray (3,)
        Reflected velocity [m/s]

    Notes:
    ------
    v_refl = v_incident - 2 * (v_incident · n) * n
    Tangential component is preserved, normal component reversed.
    """
    return v_incident - 2.0 * dot(v_incident, wall_normal) * wall_normal


# ==================== BODY COLLISIONS ====================

def resolve_body_collision(dt, body, particle, hit_shift=HIT_SHIFT,
                           fly_remaining=False):
    """
    Particle after a possible collision with the body during the last step.

    Parameters:
    -----------
    dt : float
        Timestep just elapsed [s]
    body : Body
        Obstacle
    particle : Particle
        Particle after free flight
    hit_shift : float
        Time the particle flies after reflection to clear the surface [s]
    fly_remaining : bool
        If True, the reflected particle also flies the part of the step
        left after the crossing

    Returns:
    --------
    particle : Particle
        The same particle if no crossing happened, else the reflected one
    reflected : bool
        Whether a reflection was applied
    """
    hit = hit_point(dt, body, particle)

    # No normal: the particle was inside at the start of the step,
    # clipping takes care of it
    if hit is None or hit.normal is None:
        return particle, False

    position, velocity = particle
    at_hit = move_by(position, velocity, hit.time)
    v_reflected = specular_reflect_particle(velocity, hit.normal)

    flight = hit_shift - hit.time if fly_remaining else hit_shift

    return Particle(move_by(at_hit, v_reflected, flight), v_reflected), True


def clip_body(body, ensemble):
    """
    Remove particles which ended up inside the body.

    Returns:
    --------
    ensemble : ParticleEnsemble
        Particles outside the body
    n_removed : int
        Number of particles removed
    """
    outside = np.array([not inside(body, ensemble.x[i]) for i in range(len(ensemble))],
                       dtype=np.bool_)
    return ensemble.select(outside), int(len(ensemble) - np.count_nonzero(outside))


def advance(particles, dt, body, hit_shift=HIT_SHIFT, fly_remaining=False):
    """
    Collisionless flow simulation step.

    Moves every particle for dt, reflects the ones which hit the body
    surface during the step and drops the ones left inside the body.

    Parameters:
    -----------
    particles : ParticleEnsemble or iterable of (position, velocity)
        Particles at the start of the step
    dt : float
        Timestep [s]
    body : Body
        Obstacle, read-only
    hit_shift, fly_remaining :
        See resolve_body_collision

    Returns:
    --------
    ensemble : ParticleEnsemble
        Particles at the end of the step
    """
    if not isinstance(particles, ParticleEnsemble):
        particles = ParticleEnsemble.from_particles(particles)

    moved = free_flight(particles, dt)

    x = moved.x.copy()
    v = moved.v.copy()
    n_reflected = 0

    for i in range(len(moved)):
        particle, reflected = resolve_body_collision(
            dt, body, Particle(moved.x[i], moved.v[i]),
            hit_shift=hit_shift, fly_remaining=fly_remaining,
        )
        if reflected:
            x[i] = particle.position
            v[i] = particle.velocity
            n_reflected += 1

    result, n_clipped = clip_body(body, ParticleEnsemble(x, v))

    logger.debug("Step dt=%.3e: %d particles, %d reflected, %d clipped inside body",
                 dt, len(moved), n_reflected, n_clipped)

    return result
