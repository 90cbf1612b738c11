"""
Particle Values and Ensembles

Particles are immutable (position, velocity) values. An ensemble stores
many of them in Structure-of-Arrays (SoA) layout for the Numba kernels
and is rebuilt, never modified, by every simulation step.
"""

from typing import NamedTuple

import numpy as np

from .constants import thermal_velocity


class Particle(NamedTuple):
    """Point particle: position [m] and velocity [m/s]."""
    position: np.ndarray
    velocity: np.ndarray


def make_particle(position, velocity):
    """Build a Particle from any 3-sequences."""
    return Particle(np.array(position, dtype=np.float64),
                    np.array(velocity, dtype=np.float64))


class ParticleEnsemble:
    """
    Collection of particles in SoA layout.

    Attributes:
        x: Position vectors [n, 3] in meters
        v: Velocity vectors [n, 3] in m/s

    The arrays are owned by the ensemble and never written to by
    rarefiedsim; operations return new ensembles.
    """

    def __init__(self, x, v):
        """
        Args:
            x: Positions, shape (n, 3) or (3,) [m]
            v: Velocities, shape (n, 3) or (3,) [m/s]

        Raises:
            ValueError: If shapes are not (n, 3) or do not match
        """
        x = np.atleast_2d(np.array(x, dtype=np.float64))
        v = np.atleast_2d(np.array(v, dtype=np.float64))

        if x.ndim != 2 or x.shape[1] != 3:
            raise ValueError(f"Positions must have shape (n, 3), got {x.shape}")
        if x.shape != v.shape:
            raise ValueError(
                f"Position and velocity shapes differ: {x.shape} vs {v.shape}"
            )

        self.x = x
        self.v = v

    @classmethod
    def empty(cls):
        return cls(np.zeros((0, 3)), np.zeros((0, 3)))

    @classmethod
    def from_particles(cls, particles):
        """Build an ensemble from an iterable of (position, velocity) pairs."""
        particles = list(particles)
        if not particles:
            return cls.empty()

        x = np.array([p[0] for p in particles], dtype=np.float64)
        v = np.array([p[1] for p in particles], dtype=np.float64)
        return cls(x, v)

    @classmethod
    def concatenate(cls, ensembles):
        """Join ensembles in order."""
        ensembles = list(ensembles)
        if not ensembles:
            return cls.empty()

        x = np.concatenate([e.x for e in ensembles], axis=0)
        v = np.concatenate([e.v for e in ensembles], axis=0)
        return cls(x, v)

    def particle(self, i):
        """Particle value at index i (copies, safe to keep)."""
        return Particle(self.x[i].copy(), self.v[i].copy())

    def select(self, mask):
        """
        New ensemble with the particles where mask is True.

        Args:
            mask: Boolean array of shape (n,)
        """
        mask = np.asarray(mask, dtype=np.bool_)
        return ParticleEnsemble(self.x[mask], self.v[mask])

    def kinetic_energy(self, mass):
        """
        Total kinetic energy.

        Args:
            mass: Particle mass [kg]

        Returns:
            KE: Kinetic energy in Joules
        """
        return 0.5 * mass * np.sum(self.v**2)

    def momentum(self, mass):
        """
        Total momentum.

        Args:
            mass: Particle mass [kg]

        Returns:
            p: Momentum vector [px, py, pz] in kg·m/s
        """
        return mass * np.sum(self.v, axis=0)

    def __iter__(self):
        for i in range(len(self)):
            yield self.particle(i)

    def __len__(self):
        return self.x.shape[0]

    def __repr__(self):
        return f"ParticleEnsemble(n_particles={len(self)})"


# ==================== HELPER FUNCTIONS ====================

def sample_maxwellian_velocity(rng, T, mass, n_samples=1):
    """
    Sample velocity from 3D Maxwellian distribution.

    Args:
        rng: numpy.random.Generator
        T: Temperature [K]
        mass: Particle mass [kg]
        n_samples: Number of samples

    Returns:
        v: Velocity array of shape (n_samples, 3) in m/s
    """
    # Standard deviation of each velocity component
    v_th = thermal_velocity(T, mass)

    return rng.normal(0.0, v_th, size=(n_samples, 3))


def sample_shifted_maxwellian(rng, T, mass, v_bulk, n_samples=1):
    """
    Sample from Maxwellian shifted by a bulk flow velocity.

    Args:
        rng: numpy.random.Generator
        T: Temperature [K]
        mass: Particle mass [kg]
        v_bulk: Bulk velocity vector [vx, vy, vz] in m/s
        n_samples: Number of samples

    Returns:
        v: Velocity array of shape (n_samples, 3) in m/s
    """
    v_thermal = sample_maxwellian_velocity(rng, T, mass, n_samples)
    return v_thermal + np.atleast_2d(np.asarray(v_bulk, dtype=np.float64))


# ==================== TESTING ====================

if __name__ == "__main__":
    from .constants import SPECIES

    print("Testing ParticleEnsemble...")

    rng = np.random.default_rng(42)
    x = rng.random((100, 3)) * 0.1
    v = sample_shifted_maxwellian(rng, T=300, mass=SPECIES['N2'].mass,
                                  v_bulk=[500.0, 0.0, 0.0], n_samples=100)

    ensemble = ParticleEnsemble(x, v)
    print(f"\n{ensemble}")
    print(f"  Kinetic energy: {ensemble.kinetic_energy(SPECIES['N2'].mass):.3e} J")
    print(f"  Momentum: {ensemble.momentum(SPECIES['N2'].mass)} kg·m/s")

    fast = ensemble.select(ensemble.v[:, 0] > 500.0)
    print(f"  Faster than bulk: {len(fast)}")

    print("\n✅ ParticleEnsemble tests passed!")
