"""Simulation configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, NamedTuple, Optional

import yaml

from .constants import HIT_SHIFT, SPECIES
from .geometry import complement, cone, cylinder, intersect, plane, sphere, unite


class SimulationConfig(NamedTuple):
    """Parameters of a collisionless flow run around a body."""

    dt: float = 1e-6
    steps: int = 100
    sampling_start: int = 50
    averaging_steps: int = 50
    hit_shift: float = HIT_SHIFT
    fly_remaining: bool = False
    seed: Optional[int] = None
    domain_center: tuple = (0.0, 0.0, 0.0)
    domain_size: tuple = (1.0, 1.0, 1.0)
    extrusion: float = 0.1
    concentration: float = 1e4
    temperature: float = 300.0
    species: str = "N2"
    flow_velocity: tuple = (0.0, 0.0, 0.0)
    grid: tuple = (10, 10, 10)
    body: Optional[Mapping[str, Any]] = None

    @property
    def mass(self) -> float:
        return SPECIES[self.species].mass


def _vector(value: Any, name: str) -> tuple:
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(values)}")
    return values


def config_from_mapping(raw: Mapping[str, Any]) -> SimulationConfig:
    """Build a :class:`SimulationConfig` from a parsed YAML mapping.

    Missing keys fall back to the defaults of :class:`SimulationConfig`.
    """

    defaults = SimulationConfig()
    simulation = raw.get("simulation", {}) or {}
    domain = raw.get("domain", {}) or {}
    flow = raw.get("flow", {}) or {}
    sampling = raw.get("sampling", {}) or {}

    species = str(flow.get("species", defaults.species))
    if species not in SPECIES:
        raise ValueError(f"Unknown species: {species}")

    seed = simulation.get("seed", defaults.seed)

    config = SimulationConfig(
        dt=float(simulation.get("dt", defaults.dt)),
        steps=int(simulation.get("steps", defaults.steps)),
        sampling_start=int(sampling.get("start", defaults.sampling_start)),
        averaging_steps=int(sampling.get("averaging_steps", defaults.averaging_steps)),
        hit_shift=float(simulation.get("hit_shift", defaults.hit_shift)),
        fly_remaining=bool(simulation.get("fly_remaining", defaults.fly_remaining)),
        seed=int(seed) if seed is not None else None,
        domain_center=_vector(domain.get("center", defaults.domain_center), "domain.center"),
        domain_size=_vector(domain.get("size", defaults.domain_size), "domain.size"),
        extrusion=float(domain.get("extrusion", defaults.extrusion)),
        concentration=float(flow.get("concentration", defaults.concentration)),
        temperature=float(flow.get("temperature", defaults.temperature)),
        species=species,
        flow_velocity=_vector(flow.get("velocity", defaults.flow_velocity), "flow.velocity"),
        grid=tuple(int(n) for n in sampling.get("grid", defaults.grid)),
        body=raw.get("body"),
    )

    if config.dt <= 0:
        raise ValueError(f"simulation.dt must be positive, got {config.dt}")
    if config.steps < 0:
        raise ValueError(f"simulation.steps must not be negative, got {config.steps}")
    if len(config.grid) != 3:
        raise ValueError(f"sampling.grid must have 3 entries, got {len(config.grid)}")

    return config


def load_config(path: str | Path) -> SimulationConfig:
    """Load a simulation configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        A :class:`SimulationConfig` populated from YAML.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        raw: Mapping[str, Any] = yaml.safe_load(handle) or {}

    return config_from_mapping(raw)


def build_body(description: Mapping[str, Any]):
    """Build a body from a nested mapping with exactly one key per node.

    Examples::

        {"sphere": {"center": [0, 0, 0], "radius": 0.1}}
        {"intersect": [{"sphere": ...}, {"complement": {"cylinder": ...}}]}
    """

    if not isinstance(description, Mapping) or len(description) != 1:
        raise ValueError(f"Body description must have exactly one key: {description!r}")

    (kind, args), = description.items()

    if kind == "plane":
        return plane(_vector(args["normal"], "plane.normal"), float(args["distance"]))
    if kind == "sphere":
        return sphere(_vector(args["center"], "sphere.center"), float(args["radius"]))
    if kind == "cylinder":
        return cylinder(_vector(args["axis"], "cylinder.axis"),
                        _vector(args["center"], "cylinder.center"),
                        float(args["radius"]))
    if kind == "cone":
        return cone(_vector(args["axis"], "cone.axis"),
                    _vector(args["apex"], "cone.apex"),
                    float(args["angle"]))
    if kind in ("intersect", "unite"):
        if len(args) < 2:
            raise ValueError(f"'{kind}' needs at least two bodies")
        combine = intersect if kind == "intersect" else unite
        body = build_body(args[0])
        for child in args[1:]:
            body = combine(body, build_body(child))
        return body
    if kind == "complement":
        return complement(build_body(args))

    raise ValueError(f"Unknown body kind: {kind}")
