"""
rarefiedsim Test Suite

Tests organized by:
- test_vector.py: Vector algebra and quadratic solver
- test_primitives.py / test_traces.py / test_queries.py: CSG ray casting
- test_dsmc_mover.py / test_dsmc_surfaces.py: Free flight and body collisions
- test_particles.py, test_domain.py, test_mesh.py, test_macroscopic.py:
  Ensembles, injection and sampling
- test_config.py / test_simulation.py: Configuration and driving loop
"""
