"""
Uniform 3D Grid for Macroscopic Sampling

Splits a rectangular domain into nx × ny × nz equal cells and maps
particle positions to cells.
"""

import numpy as np
from numba import njit


class UniformGrid:
    """
    Uniform grid over a domain.

    Cells are numbered ix + nx * (iy + ny * iz).

    Attributes:
        domain: Sampled Domain
        shape: (nx, ny, nz)
        n_cells: Total number of cells
        cell_size: Cell dimensions (dx, dy, dz) [m]
        cell_volume: Volume of one cell [m^3]
    """

    def __init__(self, domain, nx: int, ny: int, nz: int):
        """
        Args:
            domain: Domain to split
            nx, ny, nz: Number of cells along each axis

        Raises:
            ValueError: If any cell count is not positive
        """
        if min(nx, ny, nz) < 1:
            raise ValueError(f"Cell counts must be positive, got {(nx, ny, nz)}")

        self.domain = domain
        self.shape = (int(nx), int(ny), int(nz))
        self.n_cells = self.shape[0] * self.shape[1] * self.shape[2]

        self.origin = np.array([domain.xmin, domain.ymin, domain.zmin], dtype=np.float64)
        extent = np.array([domain.xmax, domain.ymax, domain.zmax]) - self.origin
        self.cell_size = extent / np.array(self.shape, dtype=np.float64)
        self.cell_volume = float(np.prod(self.cell_size))

    def cell_centers(self):
        """
        Central points of all cells.

        Returns:
            centers: Array (n_cells, 3) [m], ordered by cell index
        """
        nx, ny, nz = self.shape
        iz, iy, ix = np.meshgrid(np.arange(nz), np.arange(ny), np.arange(nx),
                                 indexing='ij')
        idx = np.stack([ix.ravel(), iy.ravel(), iz.ravel()], axis=1)
        return self.origin + (idx + 0.5) * self.cell_size

    def classify(self, x):
        """
        Cell index of every position.

        Args:
            x: Positions (n, 3) [m]

        Returns:
            cell_idx: Int array (n,), -1 for positions outside the grid
        """
        x = np.atleast_2d(np.asarray(x, dtype=np.float64))
        return _classify_numba(x, self.origin, self.cell_size,
                               np.array(self.shape, dtype=np.int64))

    def count_particles_per_cell(self, x):
        """Number of positions in each cell, shape (n_cells,)."""
        cell_idx = self.classify(x)
        return np.bincount(cell_idx[cell_idx >= 0], minlength=self.n_cells)

    def __repr__(self):
        return (f"UniformGrid(shape={self.shape}, "
                f"cell_size=({self.cell_size[0]:.3g}, {self.cell_size[1]:.3g}, "
                f"{self.cell_size[2]:.3g}) m)")


# ==================== NUMBA-COMPILED FUNCTIONS ====================

@njit
def _classify_numba(x, origin, cell_size, shape):
    """
    Map positions to flat cell indices (Numba-compiled).

    The upper domain face belongs to the last cell.
    """
    n = x.shape[0]
    cell_idx = np.full(n, -1, dtype=np.int64)

    for i in range(n):
        flat = 0
        stride = 1
        outside = False

        for k in range(3):
            s = (x[i, k] - origin[k]) / cell_size[k]
            if not (s >= 0.0 and s <= shape[k]):
                outside = True
                break
            c = int(s)
            if c == shape[k]:
                c -= 1
            flat += c * stride
            stride *= shape[k]

        if not outside:
            cell_idx[i] = flat

    return cell_idx


# ==================== TESTING ====================

if __name__ == "__main__":
    from .domain import make_domain

    grid = UniformGrid(make_domain((0.0, 0.0, 0.0), 1.0, 1.0, 1.0), 2, 2, 2)
    print(grid)
    print(f"Centers:\n{grid.cell_centers()}")
    print(f"Classify: {grid.classify([[-0.25, -0.25, -0.25], [0.25, 0.25, 0.25], [2.0, 0, 0]])}")
