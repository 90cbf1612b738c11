"""
DSMC Particle Motion (Free Flight)

Numba-compiled particle pusher. The model is collisionless: between wall
reflections particles move ballistically.
"""

import numpy as np
from numba import njit, prange

from ..particles import ParticleEnsemble


# ==================== BALLISTIC MOTION ====================

# No fastmath: positions must keep IEEE inf/NaN semantics
@njit(parallel=True)
def push_particles_ballistic(x, v, dt, n_particles):
    """
    Push particles ballistically (no forces).

    x_new = x_old + v * dt

    Args:
        x: Position array, shape (n, 3) [m]
        v: Velocity array, shape (n, 3) [m/s]
        dt: Timestep [s]
        n_particles: Number of particles to push

    Note:
        x is modified in-place. Uses parallel=True for automatic threading;
        every particle is independent.
    """
    for i in prange(n_particles):
        x[i, 0] += v[i, 0] * dt
        x[i, 1] += v[i, 1] * dt
        x[i, 2] += v[i, 2] * dt


def free_flight(ensemble, dt):
    """
    Ensemble after every particle flew for dt with constant velocity.

    Args:
        ensemble: ParticleEnsemble
        dt: Timestep [s]

    Returns:
        ensemble: New ParticleEnsemble (input untouched)
    """
    x = ensemble.x.copy()
    push_particles_ballistic(x, ensemble.v, dt, len(ensemble))
    return ParticleEnsemble(x, ensemble.v.copy())


# ==================== TESTING ====================

if __name__ == "__main__":
    import time

    print("Testing DSMC Mover (Numba)...")

    n_particles = 100_000
    dt = 1e-6

    rng = np.random.default_rng(0)
    ensemble = ParticleEnsemble(rng.random((n_particles, 3)),
                                rng.normal(0.0, 100.0, size=(n_particles, 3)))

    print("\nWarming up Numba JIT...")
    free_flight(ensemble, dt)

    n_steps = 1000
    start = time.time()
    for _ in range(n_steps):
        ensemble = free_flight(ensemble, dt)
    elapsed = time.time() - start

    print(f"\nResults:")
    print(f"  Particles:     {n_particles:,}")
    print(f"  Timesteps:     {n_steps:,}")
    print(f"  Performance:   {n_particles * n_steps / elapsed / 1e6:.1f} M particle-steps/sec")

    print("\n✅ DSMC mover tests passed!")
