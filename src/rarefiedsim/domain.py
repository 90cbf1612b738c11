"""
Simulation Domain and Open Boundary Injection

Implements:
- Rectangular simulation domain
- Maxwellian particle spawning in a box
- Open boundary condition by injection from interface boxes
- Clipping of particles which left the domain

Random numbers always come from an explicit numpy Generator.

Reference: Bird (1994), "Molecular Gas Dynamics", Section 12.3
"""

from typing import NamedTuple

import numpy as np

from .particles import ParticleEnsemble, sample_shifted_maxwellian


class Domain(NamedTuple):
    """Rectangular box given by min/max value on every axis [m]."""
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    zmin: float
    zmax: float


class Flow(NamedTuple):
    """
    Free-stream gas state.

    Attributes:
        concentration: Simulated particles per unit volume [m^-3]
        temperature: Translational temperature [K]
        mass: Particle mass [kg]
        velocity: Bulk flow velocity (3,) [m/s]
    """
    concentration: float
    temperature: float
    mass: float
    velocity: tuple


def make_domain(center, width, length, height):
    """
    Domain centered at a point.

    Args:
        center: Center point (x, y, z) [m]
        width, length, height: Dimensions along x, y, z [m]
    """
    x, y, z = center
    return Domain(x - width / 2, x + width / 2,
                  y - length / 2, y + length / 2,
                  z - height / 2, z + height / 2)


def dimensions(domain):
    """Width, length and height (extents along x, y and z)."""
    return (domain.xmax - domain.xmin,
            domain.ymax - domain.ymin,
            domain.zmax - domain.zmin)


def center(domain):
    """Geometric center of a domain."""
    return ((domain.xmin + domain.xmax) / 2,
            (domain.ymin + domain.ymax) / 2,
            (domain.zmin + domain.zmax) / 2)


def volume(domain):
    w, l, h = dimensions(domain)
    return w * l * h


def spawn_particles(rng, domain, flow):
    """
    Sample new particles uniformly inside a domain.

    The particle count is concentration * volume, rounded. Velocity
    components are normal around the bulk velocity with standard
    deviation sqrt(kB * T / m).

    Args:
        rng: numpy.random.Generator
        domain: Box to fill
        flow: Gas state

    Returns:
        ensemble: New ParticleEnsemble
    """
    count = int(round(flow.concentration * volume(domain)))

    v = sample_shifted_maxwellian(rng, flow.temperature, flow.mass, flow.velocity, count)
    x = rng.uniform((domain.xmin, domain.ymin, domain.zmin),
                    (domain.xmax, domain.ymax, domain.zmax),
                    size=(count, 3))

    return ParticleEnsemble(x, v)


def initial_particles(rng, domain, flow):
    """Initial fill of the simulation domain with free-stream gas."""
    return spawn_particles(rng, domain, flow)


def interface_domains(domain, extrusion):
    """
    Six interface boxes built on the domain faces by extrusion along the
    outward face normals.

    In 2D projection:
             +-----------------+
             |    Interface1   |
          +--+-----------------+--+
          |I3|    Simulation   |I4|
          |  |      domain     |  |
          +--+-----------------+--+
             |        I2       |
             +-----------------+
    """
    w, l, h = dimensions(domain)
    cx, cy, cz = center(domain)
    ex = extrusion

    return [
        make_domain((cx - (w + ex) / 2, cy, cz), ex, l, h),
        make_domain((cx + (w + ex) / 2, cy, cz), ex, l, h),
        make_domain((cx, cy + (l + ex) / 2, cz), w, ex, h),
        make_domain((cx, cy - (l + ex) / 2, cz), w, ex, h),
        make_domain((cx, cy, cz - (h + ex) / 2), w, l, ex),
        make_domain((cx, cy, cz + (h + ex) / 2), w, l, ex),
    ]


def open_boundary_injection(rng, domain, extrusion, flow, ensemble):
    """
    Open boundary condition: add free-stream particles sampled in the
    interface boxes around the domain to an existing ensemble.

    Particles which fly into the domain during the next step model the
    inflow; the rest are removed by clip_to_domain.

    Args:
        rng: numpy.random.Generator
        domain: Simulation domain
        extrusion: Interface box thickness [m]
        flow: Free-stream gas state
        ensemble: Current particles

    Returns:
        ensemble: New particles followed by the existing ones
    """
    new = [spawn_particles(rng, d, flow) for d in interface_domains(domain, extrusion)]
    return ParticleEnsemble.concatenate(new + [ensemble])


def clip_to_domain(domain, ensemble):
    """Keep only particles inside the closed domain box."""
    x = ensemble.x
    mask = ((x[:, 0] >= domain.xmin) & (x[:, 0] <= domain.xmax) &
            (x[:, 1] >= domain.ymin) & (x[:, 1] <= domain.ymax) &
            (x[:, 2] >= domain.zmin) & (x[:, 2] <= domain.zmax))
    return ensemble.select(mask)
