"""
Macroscopic Parameters Sampling

Time-averaged cell sampling on a uniform grid. Sampling should start
after the particle system has reached steady state; samples are then
collected in every cell for a fixed number of time steps.

Per cell the sampler accumulates:
- particle count
- mean velocity
- mean square thermal velocity (relative to the cell mean velocity)

which post-process into number density, flow velocity, temperature and
pressure.
"""

import logging
from typing import NamedTuple

import numpy as np
from numba import njit

from .constants import kB

logger = logging.getLogger(__name__)


class MacroField(NamedTuple):
    """
    Averaged macroscopic parameters per cell.

    Attributes:
        centers: Cell central points (n_cells, 3) [m]
        count: Mean particle count per cell (n_cells,)
        velocity: Mean flow velocity (n_cells, 3) [m/s]
        thermal: Mean square thermal velocity (n_cells,) [m^2/s^2]
    """
    centers: np.ndarray
    count: np.ndarray
    velocity: np.ndarray
    thermal: np.ndarray


class MacroSampler:
    """
    Accumulates cell samples over a fixed number of steps.

    Each update adds the current step's cell parameters multiplied by
    1 / averaging_steps, so the sum is the time average once complete.
    """

    def __init__(self, grid, averaging_steps: int):
        """
        Args:
            grid: UniformGrid used for sampling
            averaging_steps: Number of steps to average over

        Raises:
            ValueError: If averaging_steps is not positive
        """
        if averaging_steps < 1:
            raise ValueError(f"averaging_steps must be positive, got {averaging_steps}")

        self.grid = grid
        self.averaging_steps = int(averaging_steps)
        self.steps_done = 0

        self.count = np.zeros(grid.n_cells, dtype=np.float64)
        self.velocity = np.zeros((grid.n_cells, 3), dtype=np.float64)
        self.thermal = np.zeros(grid.n_cells, dtype=np.float64)

    @property
    def complete(self):
        return self.steps_done >= self.averaging_steps

    def update(self, ensemble):
        """
        Gather samples from an ensemble.

        Args:
            ensemble: ParticleEnsemble at the current step

        Returns:
            complete: True once averaging_steps samples were collected.
                Updates after completion are ignored.
        """
        if self.complete:
            return True

        weight = 1.0 / self.averaging_steps
        cell_idx = self.grid.classify(ensemble.x)

        count, velocity, thermal = _sample_cells_numba(
            cell_idx, ensemble.v, self.grid.n_cells
        )

        self.count += count * weight
        self.velocity += velocity * weight
        self.thermal += thermal * weight
        self.steps_done += 1

        if self.complete:
            logger.info("Macroscopic sampling complete after %d steps", self.steps_done)

        return self.complete

    def field(self):
        """Averaged field, or None while sampling is incomplete."""
        if not self.complete:
            return None
        return MacroField(self.grid.cell_centers(), self.count.copy(),
                          self.velocity.copy(), self.thermal.copy())


@njit
def _sample_cells_numba(cell_idx, v, n_cells):
    """
    Per-cell count, mean velocity and mean square thermal velocity for
    one step. Empty cells get zeros.
    """
    count = np.zeros(n_cells, dtype=np.float64)
    v_sum = np.zeros((n_cells, 3), dtype=np.float64)

    for i in range(cell_idx.shape[0]):
        c = cell_idx[i]
        if c >= 0:
            count[c] += 1.0
            v_sum[c, 0] += v[i, 0]
            v_sum[c, 1] += v[i, 1]
            v_sum[c, 2] += v[i, 2]

    v_mean = np.zeros((n_cells, 3), dtype=np.float64)
    for c in range(n_cells):
        if count[c] > 0:
            v_mean[c, 0] = v_sum[c, 0] / count[c]
            v_mean[c, 1] = v_sum[c, 1] / count[c]
            v_mean[c, 2] = v_sum[c, 2] / count[c]

    c2_sum = np.zeros(n_cells, dtype=np.float64)
    for i in range(cell_idx.shape[0]):
        c = cell_idx[i]
        if c >= 0:
            du = v[i, 0] - v_mean[c, 0]
            dv = v[i, 1] - v_mean[c, 1]
            dw = v[i, 2] - v_mean[c, 2]
            c2_sum[c] += du * du + dv * dv + dw * dw

    thermal = np.zeros(n_cells, dtype=np.float64)
    for c in range(n_cells):
        if count[c] > 0:
            thermal[c] = c2_sum[c] / count[c]

    return count, v_mean, thermal


# ==================== POST-PROCESSING ====================

def number_density(field, cell_volume, particle_weight=1.0):
    """
    Number density per cell.

    Args:
        field: MacroField
        cell_volume: Volume of one cell [m^3]
        particle_weight: Real molecules per simulated particle

    Returns:
        n: Number density (n_cells,) [m^-3]
    """
    return field.count * particle_weight / cell_volume


def temperature(field, mass):
    """
    Translational temperature per cell: T = m * <c^2> / (3 * kB).

    Args:
        field: MacroField
        mass: Particle mass [kg]

    Returns:
        T: Temperature (n_cells,) [K]
    """
    return mass * field.thermal / (3.0 * kB)


def pressure(field, mass, cell_volume, particle_weight=1.0):
    """Scalar pressure p = n * kB * T per cell [Pa]."""
    return (number_density(field, cell_volume, particle_weight) * kB *
            temperature(field, mass))


def plot_field_slice(field, grid, axis=2, index=None, quantity='count',
                     show=True, save_filename=None):
    """
    Plot one grid layer of a macroscopic quantity.

    Args:
        field: MacroField
        grid: UniformGrid the field was sampled on
        axis: Axis normal to the plotted layer (0, 1 or 2)
        index: Layer index along axis (default: middle layer)
        quantity: 'count', 'thermal' or 'speed'
        show: Display plot interactively
        save_filename: Save figure to file (optional)

    Returns:
        fig: matplotlib Figure, or None when matplotlib is unavailable
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        logger.warning("Matplotlib not available for plotting")
        return None

    if quantity == 'count':
        values = field.count
    elif quantity == 'thermal':
        values = field.thermal
    elif quantity == 'speed':
        values = np.linalg.norm(field.velocity, axis=1)
    else:
        raise ValueError(f"Unknown quantity: {quantity}")

    nx, ny, nz = grid.shape
    # Cell index ix + nx*(iy + ny*iz) reshapes to [iz, iy, ix]
    cube = values.reshape(nz, ny, nx)
    if index is None:
        index = grid.shape[axis] // 2

    layer = np.take(cube, index, axis=2 - axis)
    labels = [a for k, a in enumerate(('x', 'y', 'z')) if k != axis]

    fig, ax = plt.subplots(figsize=(8, 6))
    image = ax.imshow(layer, origin='lower', aspect='auto')
    ax.set_xlabel(f'{labels[0]} cell', fontsize=12)
    ax.set_ylabel(f'{labels[1]} cell', fontsize=12)
    ax.set_title(f'{quantity} ({"xyz"[axis]} layer {index})', fontsize=14,
                 fontweight='bold')
    fig.colorbar(image, ax=ax)

    if save_filename:
        fig.savefig(save_filename, dpi=150, bbox_inches='tight')
        logger.info("Plot saved to %s", save_filename)
    if show:
        plt.show()

    return fig
