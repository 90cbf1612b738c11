"""
Example 01: Free-Molecular Flow past a Bored Sphere

Demonstrates:
- Loading a YAML run configuration
- Building a CSG body from the configuration
- Running the collisionless flow loop with open-boundary injection
- Plotting the averaged number density around the body
"""

import logging
import sys
from pathlib import Path

from rarefiedsim.config import load_config, build_body
from rarefiedsim.logging_config import setup_logging
from rarefiedsim.macroscopic import number_density, temperature, plot_field_slice
from rarefiedsim.mesh import UniformGrid
from rarefiedsim.domain import make_domain
from rarefiedsim.simulation import run_simulation


def main(config_path):
    setup_logging(logging.INFO)

    config = load_config(config_path)
    body = build_body(config.body)

    print("\n" + "="*60)
    print("Example 01: Flow past a bored sphere")
    print("="*60)

    result = run_simulation(config, body)

    print(f"\n[OK] {result.steps} steps, {len(result.ensemble)} particles in domain")

    if result.field is None:
        print("Sampling incomplete, nothing to plot")
        return

    grid = UniformGrid(make_domain(config.domain_center, *config.domain_size), *config.grid)
    n = number_density(result.field, grid.cell_volume)
    T = temperature(result.field, config.mass)
    occupied = result.field.count > 0

    print(f"   mean number density: {n[occupied].mean():.3e} m^-3")
    print(f"   mean temperature:    {T[occupied].mean():.1f} K")

    plot_field_slice(result.field, grid, axis=2, quantity='count',
                     show=False, save_filename='sphere_flow_density.png')


if __name__ == "__main__":
    default = Path(__file__).with_name("sphere_flow.yml")
    main(sys.argv[1] if len(sys.argv) > 1 else default)
