"""
Physical Constants, Species Properties and Tracing Parameters

All units in SI unless otherwise noted.
"""

import numpy as np

# ==================== FUNDAMENTAL CONSTANTS ====================

kB = 1.380649e-23  # Boltzmann constant [J/K]
AMU = 1.66053906660e-27  # Atomic mass unit [kg]

# ==================== SPECIES DATABASE ====================

class SpeciesData:
    """
    Properties of a neutral gas species.

    Attributes:
        mass: Particle mass [kg]
    """

    def __init__(self, mass):
        self.mass = mass

    def __repr__(self):
        return f"SpeciesData(mass={self.mass:.4e} kg)"


SPECIES = {
    # Atomic oxygen
    'O': SpeciesData(mass=16.0 * AMU),

    # Molecular nitrogen
    'N2': SpeciesData(mass=28.014 * AMU),

    # Molecular oxygen
    'O2': SpeciesData(mass=32.0 * AMU),

    # Argon (common benchmark gas)
    'Ar': SpeciesData(mass=39.948 * AMU),
}

# ==================== RAY TRACING PARAMETERS ====================

# Time a particle keeps flying after a specular reflection so that the
# next step does not detect the same surface crossing again [s]
HIT_SHIFT = 1e-9

# Probe directions for point-in-body tests, pairwise non-collinear and
# skewed against the coordinate axes. The first one not parallel to any
# plane, cylinder axis or cone generatrix of the body is used.
INSIDE_PROBE_DIRECTIONS = (
    np.array([1.0, np.sqrt(2.0), np.sqrt(3.0)]) / np.sqrt(6.0),
    np.array([np.sqrt(3.0), -1.0, np.sqrt(2.0)]) / np.sqrt(6.0),
    np.array([-np.sqrt(2.0), np.sqrt(3.0), 1.0]) / np.sqrt(6.0),
)
INSIDE_PROBE_DIRECTION = INSIDE_PROBE_DIRECTIONS[0]

# ==================== UTILITY FUNCTIONS ====================

def thermal_velocity(T, mass):
    """
    Standard deviation of one velocity component in a Maxwellian gas.

    Args:
        T: Temperature [K]
        mass: Particle mass [kg]

    Returns:
        sigma: sqrt(kB * T / m) [m/s]
    """
    return np.sqrt(kB * T / mass)


# ==================== CONSTANTS SUMMARY ====================

if __name__ == "__main__":
    print("=" * 60)
    print("rarefiedsim Constants")
    print("=" * 60)

    print(f"\n  Boltzmann constant:    kB = {kB:.6e} J/K")
    print(f"  Atomic mass unit:      AMU = {AMU:.6e} kg")
    print(f"  Reflection hit shift:  {HIT_SHIFT:.1e} s")

    print("\nSpecies Database:")
    for name, data in SPECIES.items():
        print(f"  {name:4s}: m = {data.mass/AMU:6.2f} AMU, "
              f"sigma_v(300 K) = {thermal_velocity(300.0, data.mass):.1f} m/s")
    print("=" * 60)
