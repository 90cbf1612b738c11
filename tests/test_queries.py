"""
Tests for hit-point extraction and body membership
"""

import math

import pytest
import numpy as np
from rarefiedsim.constants import INSIDE_PROBE_DIRECTIONS
from rarefiedsim.geometry import (
    hit_point,
    inside,
    probe_direction,
    sphere,
    plane,
    cylinder,
    cone,
    intersect,
    complement,
)
from rarefiedsim.particles import make_particle


class TestHitPoint:
    """Test first crossing during the last step."""

    def test_crossing_during_step(self):
        """Particle moved from (-1.5,0,0) to (-0.5,0,0) through the unit sphere."""
        body = sphere((0, 0, 0), 1.0)
        hit = hit_point(1.0, body, make_particle((-0.5, 0, 0), (1, 0, 0)))

        assert hit is not None
        assert hit.time == pytest.approx(-0.5)
        np.testing.assert_array_almost_equal(hit.normal, [-1.0, 0.0, 0.0])

    def test_no_crossing_before_reaching_body(self):
        body = sphere((0, 0, 0), 1.0)
        assert hit_point(1.0, body, make_particle((-3, 0, 0), (1, 0, 0))) is None

    def test_miss(self):
        body = sphere((0, 0, 0), 1.0)
        assert hit_point(1.0, body, make_particle((0, 5, 0), (1, 0, 0))) is None

    def test_plane_wall(self):
        """Halfspace x >= 0 entered half a step ago."""
        body = plane((-1, 0, 0), 0.0)
        hit = hit_point(1.0, body, make_particle((0.5, 0, 0), (1, 0, 0)))

        assert hit.time == pytest.approx(-0.5)
        np.testing.assert_array_equal(hit.normal, [-1.0, 0.0, 0.0])

    def test_inside_whole_step_has_no_normal(self):
        """Particle already inside at the start of the step."""
        body = sphere((0, 0, 0), 1.0)
        hit = hit_point(1.0, body, make_particle((0.2, 0, 0), (0.1, 0, 0)))

        assert hit is not None
        assert hit.time == -1.0
        assert hit.normal is None

    def test_hit_time_never_positive(self):
        rng = np.random.default_rng(7)
        body = intersect(sphere((0, 0, 0), 1.0), complement(cylinder((0, 0, 1), (0, 0, 0), 0.3)))

        for _ in range(50):
            p = make_particle(rng.uniform(-1.5, 1.5, 3), rng.normal(size=3))
            hit = hit_point(0.5, body, p)
            if hit is not None:
                assert -0.5 <= hit.time <= 0.0


class TestInside:
    """Test point membership."""

    def test_sphere(self):
        body = sphere((0, 0, 0), 1.0)

        assert inside(body, (0, 0, 0))
        assert inside(body, (0.5, 0.5, 0.5))
        assert not inside(body, (2, 0, 0))

    def test_plane_with_axis_aligned_normal(self):
        """Plane parallel to the x axis is still resolved."""
        body = plane((0, 1, 0), 0.0)

        assert inside(body, (0, -1, 0))
        assert not inside(body, (0, 1, 0))

    def test_infinite_cylinder(self):
        body = cylinder((0, 0, 1), (0, 0, 0), 1.0)

        assert inside(body, (0.5, 0, 100))
        assert not inside(body, (1.5, 0, 0))

    def test_cone(self):
        body = cone((0, 0, 1), (0, 0, 0), math.radians(30))

        assert inside(body, (0, 0, -1))
        assert not inside(body, (0, 0, 1))
        assert not inside(body, (2, 0, -1))

    def test_complement(self):
        body = complement(sphere((0, 0, 0), 1.0))

        assert not inside(body, (0, 0, 0))
        assert inside(body, (5, 0, 0))

    def test_shell_cavity(self):
        shell = intersect(sphere((0, 0, 0), 2.0), complement(sphere((0, 0, 0), 1.0)))

        assert not inside(shell, (0, 0, 0))
        assert inside(shell, (1.5, 0, 0))
        assert not inside(shell, (3, 0, 0))

    def test_explicit_direction(self):
        body = sphere((0, 0, 0), 1.0)

        assert inside(body, (0.5, 0, 0), direction=(1, 0, 0))
        assert not inside(body, (1.5, 0, 0), direction=(0, 0, 1))


class TestProbeDirection:
    """Test membership with bodies aligned to the default probe ray."""

    def setup_method(self):
        self.axis = INSIDE_PROBE_DIRECTIONS[0] * 3.0
        # Normal perpendicular to the first probe direction
        self.normal = np.array([np.sqrt(2.0), -1.0, 0.0])

    def test_default_when_nothing_is_parallel(self):
        body = sphere((0, 0, 0), 1.0)
        np.testing.assert_array_equal(probe_direction(body), INSIDE_PROBE_DIRECTIONS[0])

    def test_cylinder_along_probe(self):
        body = cylinder(self.axis, (0, 0, 0), 1.0)

        np.testing.assert_array_equal(probe_direction(body), INSIDE_PROBE_DIRECTIONS[1])
        assert inside(body, (0, 0, 0))
        assert not inside(body, (0, 0, 5))

    def test_complement_of_cylinder_along_probe(self):
        body = complement(cylinder(self.axis, (0, 0, 0), 1.0))

        assert not inside(body, (0, 0, 0))
        assert inside(body, (0, 0, 5))

    def test_plane_containing_probe(self):
        assert inside(plane(self.normal, 0.5), (0, 0, 0))
        assert not inside(plane(self.normal, -0.5), (0, 0, 0))

    def test_plane_in_composite(self):
        body = intersect(sphere((0, 0, 0), 2.0), plane(self.normal, 0.5))

        assert inside(body, (0, 0, 0))
        assert not inside(body, self.normal)

    def test_cone_generatrix_along_probe(self):
        """Half-angle 45 degrees: the first probe runs along a generatrix."""
        body = cone((0, 0, 1), (0, 0, 0), math.pi / 4)

        np.testing.assert_array_equal(probe_direction(body), INSIDE_PROBE_DIRECTIONS[1])
        assert inside(body, (0, 0, -1))
        assert not inside(body, (0, 0, 1))
