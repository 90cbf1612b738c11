"""
Tests for ray/primitive intersection

Validates:
- Closed-form traces for plane, sphere, cylinder and cone
- Normal polarity (outward unit normals)
- Degenerate cases (parallel, tangent, miss, wrong nappe)
"""

import math

import pytest
import numpy as np
from rarefiedsim.geometry import (
    plane,
    sphere,
    cylinder,
    cone,
    trace,
)
from rarefiedsim.particles import make_particle


def times(tr):
    return [(s.time, e.time) for s, e in tr]


class TestPlane:
    """Test halfspace traces."""

    def test_leaving_halfspace(self):
        """Particle inside x <= 0 moving +x leaves at t = 1."""
        body = plane((1, 0, 0), 0.0)
        tr = trace(body, make_particle((-1, 0, 0), (1, 0, 0)))

        assert len(tr) == 1
        start, end = tr[0]
        assert start.time == -math.inf
        assert start.normal is None
        assert end.time == 1.0
        np.testing.assert_array_equal(end.normal, [1.0, 0.0, 0.0])

    def test_entering_halfspace(self):
        """Particle outside moving -x enters at t = 1 and stays forever."""
        body = plane((1, 0, 0), 0.0)
        tr = trace(body, make_particle((1, 0, 0), (-1, 0, 0)))

        assert len(tr) == 1
        start, end = tr[0]
        assert start.time == 1.0
        np.testing.assert_array_equal(start.normal, [1.0, 0.0, 0.0])
        assert end.time == math.inf
        assert end.normal is None

    def test_parallel_ray_gives_empty_trace(self):
        body = plane((1, 0, 0), 0.0)
        assert trace(body, make_particle((-1, 0, 0), (0, 1, 0))) == []

    def test_normal_is_normalized(self):
        body = plane((2, 0, 0), 1.0)
        np.testing.assert_array_equal(body.normal, [1.0, 0.0, 0.0])

        tr = trace(body, make_particle((3, 0, 0), (-1, 0, 0)))
        assert times(tr) == [(2.0, math.inf)]

    def test_zero_normal_rejected(self):
        with pytest.raises(ValueError):
            plane((0, 0, 0), 1.0)


class TestSphere:
    """Test sphere traces."""

    def test_through_center(self):
        """Unit sphere, particle from (-2,0,0) moving +x."""
        body = sphere((0, 0, 0), 1.0)
        tr = trace(body, make_particle((-2, 0, 0), (1, 0, 0)))

        assert times(tr) == [(1.0, 3.0)]
        np.testing.assert_array_almost_equal(tr[0][0].normal, [-1.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(tr[0][1].normal, [1.0, 0.0, 0.0])

    def test_from_inside(self):
        body = sphere((0, 0, 0), 1.0)
        tr = trace(body, make_particle((0, 0, 0), (1, 0, 0)))

        assert times(tr) == [(-1.0, 1.0)]

    def test_miss(self):
        body = sphere((0, 0, 0), 1.0)
        assert trace(body, make_particle((-2, 2, 0), (1, 0, 0))) == []

    def test_tangent_is_empty(self):
        """Grazing ray (double root) yields no interval."""
        body = sphere((0, 0, 0), 1.0)
        assert trace(body, make_particle((-2, 1, 0), (1, 0, 0))) == []

    def test_normals_are_unit_and_outward(self):
        body = sphere((1, 2, 3), 2.0)
        p = make_particle((-4, 2.5, 3.3), (1.0, 0.1, -0.05))
        tr = trace(body, p)

        assert len(tr) == 1
        for hp in tr[0]:
            point = p.position + p.velocity * hp.time
            assert np.linalg.norm(hp.normal) == pytest.approx(1.0)
            assert np.dot(hp.normal, point - body.center) > 0

    def test_non_positive_radius_rejected(self):
        with pytest.raises(ValueError):
            sphere((0, 0, 0), 0.0)


class TestCylinder:
    """Test infinite cylinder traces."""

    def test_across_axis(self):
        body = cylinder((0, 0, 1), (0, 0, 0), 1.0)
        tr = trace(body, make_particle((-2, 0, 5), (1, 0, 0)))

        assert times(tr) == [(1.0, 3.0)]
        np.testing.assert_array_almost_equal(tr[0][0].normal, [-1.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(tr[0][1].normal, [1.0, 0.0, 0.0])

    def test_normal_has_no_axial_component(self):
        body = cylinder((0, 0, 2), (0, 0, 0), 1.0)
        tr = trace(body, make_particle((-2, 0.3, -1), (1, 0, 0.7)))

        assert len(tr) == 1
        for hp in tr[0]:
            assert hp.normal[2] == pytest.approx(0.0, abs=1e-12)
            assert np.linalg.norm(hp.normal) == pytest.approx(1.0)

    def test_parallel_to_axis_is_empty(self):
        body = cylinder((0, 0, 1), (0, 0, 0), 1.0)
        assert trace(body, make_particle((0.5, 0, 0), (0, 0, 1))) == []


class TestCone:
    """Test cone traces and nappe selection."""

    def setup_method(self):
        # Outward axis +z: the body is the downward nappe z <= -r
        self.body = cone((0, 0, 1), (0, 0, 0), math.pi / 4)

    def test_construction(self):
        np.testing.assert_array_equal(self.body.axis, [0.0, 0.0, -1.0])
        assert self.body.tangent == pytest.approx(1.0)
        assert self.body.offset == 0.0
        np.testing.assert_array_almost_equal(self.body.matrix,
                                             np.diag([-0.5, -0.5, 0.5]))

    def test_crossing_body_nappe(self):
        """Horizontal ray below the apex crosses the body twice."""
        tr = trace(self.body, make_particle((-2, 0, -1), (1, 0, 0)))

        assert len(tr) == 1
        assert (tr[0][0].time, tr[0][1].time) == pytest.approx((1.0, 3.0))
        s = 1.0 / math.sqrt(2.0)
        np.testing.assert_array_almost_equal(tr[0][0].normal, [-s, 0.0, s])
        np.testing.assert_array_almost_equal(tr[0][1].normal, [s, 0.0, s])

    def test_opposite_nappe_is_empty(self):
        """Same ray above the apex only meets the mirror nappe."""
        assert trace(self.body, make_particle((-2, 0, 1), (1, 0, 0))) == []

    def test_entering_from_opposite_nappe(self):
        """Downward ray: first root on the mirror nappe, second on the body."""
        tr = trace(self.body, make_particle((0.5, 0, 1), (0, 0, -1)))

        assert len(tr) == 1
        start, end = tr[0]
        assert start.time == pytest.approx(1.5)
        assert end.time == math.inf
        s = 1.0 / math.sqrt(2.0)
        np.testing.assert_array_almost_equal(start.normal, [s, 0.0, s])

    def test_leaving_toward_opposite_nappe(self):
        """Upward ray: inside the body until the first root."""
        tr = trace(self.body, make_particle((0.5, 0, -1), (0, 0, 1)))

        assert len(tr) == 1
        start, end = tr[0]
        assert start.time == -math.inf
        assert end.time == pytest.approx(0.5)

    def test_parallel_to_generatrix_entering(self):
        """One crossing, the body extends to infinity along the ray."""
        tr = trace(self.body, make_particle((1, 0, -3), (1, 0, -1)))

        assert len(tr) == 1
        start, end = tr[0]
        assert start.time == pytest.approx(-2.0)
        s = 1.0 / math.sqrt(2.0)
        np.testing.assert_array_almost_equal(start.normal, [-s, 0.0, s])
        assert end.time == math.inf
        assert end.normal is None

    def test_parallel_to_generatrix_leaving(self):
        tr = trace(self.body, make_particle((1, 0, -3), (-1, 0, 1)))

        assert len(tr) == 1
        start, end = tr[0]
        assert start.time == -math.inf
        assert end.time == pytest.approx(2.0)

    def test_normal_perpendicular_to_generatrix(self):
        """Normal is orthogonal to the surface line through the apex."""
        body = cone((0, 0, 1), (0, 0, 0), math.radians(30))
        tr = trace(body, make_particle((-3, 0.2, -2), (1, 0, 0)))

        assert len(tr) == 1
        for hp in tr[0]:
            point = np.array([-3.0 + hp.time, 0.2, -2.0])
            generatrix = point / np.linalg.norm(point)
            assert np.dot(hp.normal, generatrix) == pytest.approx(0.0, abs=1e-9)
            assert np.linalg.norm(hp.normal) == pytest.approx(1.0)

    def test_invalid_angle_rejected(self):
        with pytest.raises(ValueError):
            cone((0, 0, 1), (0, 0, 0), math.pi / 2)
