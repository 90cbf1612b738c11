"""
Collisionless Flow Simulation Loop

Drives the DSMC step around a body inside an open rectangular domain:
inject free-stream particles at the boundary, advance, clip to the
domain, and sample macroscopic parameters once the flow has settled.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np

from .config import SimulationConfig, build_body
from .domain import Flow, clip_to_domain, initial_particles, make_domain, open_boundary_injection
from .dsmc.surfaces import advance, clip_body
from .macroscopic import MacroField, MacroSampler
from .mesh import UniformGrid
from .particles import ParticleEnsemble

logger = logging.getLogger(__name__)


class SimulationResult(NamedTuple):
    """
    Attributes:
        ensemble: Particles after the last step
        field: Averaged macroscopic field (None if sampling never completed)
        steps: Number of steps run
    """
    ensemble: ParticleEnsemble
    field: Optional[MacroField]
    steps: int


def run_simulation(config: SimulationConfig, body=None, rng=None) -> SimulationResult:
    """
    Run a collisionless flow simulation.

    Args:
        config: Simulation parameters
        body: Obstacle; built from config.body when omitted
        rng: numpy.random.Generator (default: seeded from config.seed)

    Returns:
        SimulationResult

    Raises:
        ValueError: If neither body nor config.body is given
    """
    if body is None:
        if config.body is None:
            raise ValueError("No body given and config has no body description")
        body = build_body(config.body)

    if rng is None:
        rng = np.random.default_rng(config.seed)

    domain = make_domain(config.domain_center, *config.domain_size)
    flow = Flow(config.concentration, config.temperature, config.mass,
                config.flow_velocity)
    sampler = MacroSampler(UniformGrid(domain, *config.grid), config.averaging_steps)

    ensemble, n_clipped = clip_body(body, initial_particles(rng, domain, flow))
    logger.info("Initial ensemble: %d particles (%d spawned inside body)",
                len(ensemble), n_clipped)

    for step in range(config.steps):
        ensemble = open_boundary_injection(rng, domain, config.extrusion, flow, ensemble)
        ensemble = advance(ensemble, config.dt, body,
                           hit_shift=config.hit_shift,
                           fly_remaining=config.fly_remaining)
        ensemble = clip_to_domain(domain, ensemble)

        if step >= config.sampling_start:
            sampler.update(ensemble)

        logger.debug("Step %d: %d particles", step, len(ensemble))
        if (step + 1) % max(1, config.steps // 10) == 0:
            logger.info("Step %d/%d: %d particles", step + 1, config.steps, len(ensemble))

    if not sampler.complete:
        logger.warning("Macroscopic sampling incomplete: %d of %d steps collected",
                       sampler.steps_done, sampler.averaging_steps)

    return SimulationResult(ensemble, sampler.field(), config.steps)
