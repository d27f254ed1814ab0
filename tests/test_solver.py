"""
Test suite for the orbital position solver.

Tests cover:
- Eccentric anomaly and the ecliptic-to-scene transform
- Center-chain composition
- Roll accumulation
- Tolerance of unregistered bodies
"""

import pytest
import numpy as np
from orrery import (Body, BodyParams, BodyRegistry, OE, PositionSolver,
                    VisualEntity, config, orbital_position, absolute_position)
from orrery.solver import eccentric_anomaly

AU = config.AU_SCALE

STAR = BodyParams(name='Star', elements=None, period=25.0, radius=100.0)


def planet(a=1.0, e=0.0, i=0.0, M=0.0, period=2.0, center=Body.SUN):
    return BodyParams(name='Planet', elements=OE.static(N=0, i=i, w=0, a=a, e=e, M=M),
                      period=period, radius=5.0, tilt=10.0, center=center)


@pytest.fixture
def registry():
    """Star, a static planet at (1 AU, 0, 0) and a moon 90 degrees along its orbit."""
    catalog = {
        Body.SUN: STAR,
        Body.EARTH: planet(),
        Body.MOON: planet(a=0.01, M=90.0, period=4.0, center=Body.EARTH),
    }
    return BodyRegistry(catalog, rings={}, cloud_layers={})


class TestEccentricAnomaly:
    """Test the one-step eccentric anomaly."""

    def test_circular(self):
        assert eccentric_anomaly(1.2, 0.0) == 1.2

    def test_formula(self):
        """E = M + e sin M (1 + e cos M)."""
        M, e = 0.7, 0.3
        expected = M + e * np.sin(M) * (1 + e * np.cos(M))
        assert np.isclose(eccentric_anomaly(M, e), expected)

    def test_vectorized(self):
        M = np.linspace(0, 2 * np.pi, 5)
        assert eccentric_anomaly(M, 0.1).shape == (5,)


class TestOrbitalPosition:
    """Test the Kepler and frame transform."""

    def test_circular_in_plane(self):
        """e=0, i=0: (a cos M, 0, -a sin M)."""
        for M in (0.0, 30.0, 90.0, 200.0):
            oe = OE.static(N=0, i=0, w=0, a=2.0, e=0.0, M=M)
            m = np.radians(M)
            assert np.allclose(orbital_position(oe, 0.0),
                               [2.0 * np.cos(m), 0.0, -2.0 * np.sin(m)])

    def test_polar_orbit_rises_along_y(self):
        """i=90 puts the orbit in the x-y plane of the scene."""
        oe = OE.static(N=0, i=90.0, w=0, a=1.0, e=0.0, M=90.0)
        assert np.allclose(orbital_position(oe, 0.0), [0.0, 1.0, 0.0], atol=1e-12)

    def test_eccentric(self):
        """Position in the orbital plane uses the one-step eccentric anomaly."""
        e = 0.5
        oe = OE.static(N=0, i=0, w=0, a=1.0, e=e, M=90.0)
        E = np.pi / 2 + e
        expected = [np.cos(E) - e, 0.0, -np.sqrt(1 - e * e) * np.sin(E)]
        assert np.allclose(orbital_position(oe, 0.0), expected)

    def test_static_elements_constant(self):
        """Static elements give the same position for any day."""
        oe = OE.static(N=40, i=7, w=29, a=0.4, e=0.2, M=168)
        assert np.allclose(orbital_position(oe, -1000.0),
                           orbital_position(oe, 5000.0))

    def test_array_of_days(self):
        oe = OE(N1=0, i1=0, w1=0, a1=1.0, e1=0.0, M1=0.0, M2=1.0)
        positions = orbital_position(oe, np.arange(4.0))
        assert positions.shape == (4, 3)
        assert np.allclose(np.linalg.norm(positions, axis=1), 1.0)


class TestAbsolutePosition:
    """Test center-chain composition."""

    def test_planet(self, registry):
        assert np.allclose(absolute_position(registry, Body.EARTH, 0.0),
                           [AU, 0.0, 0.0])

    def test_moon_adds_center(self, registry):
        assert np.allclose(absolute_position(registry, Body.MOON, 0.0),
                           [AU, 0.0, -0.01 * AU], atol=1e-6)

    def test_primary_at_origin(self, registry):
        assert np.allclose(absolute_position(registry, Body.SUN, 10.0), 0.0)

    def test_custom_scale(self, registry):
        assert np.allclose(absolute_position(registry, Body.EARTH, 0.0, au_scale=1.0),
                           [1.0, 0.0, 0.0])

    def test_non_orbiting_body(self, registry):
        with pytest.raises(ValueError, match="not an orbiting body"):
            absolute_position(registry, Body.SATURN_RING, 0.0)


class TestPositionSolver:
    """Test the per-step solve pass."""

    def test_solve_all(self, registry):
        solver = PositionSolver(registry)
        solver.solve_all(0.0)
        assert np.allclose(registry.state(Body.EARTH).position, [AU, 0.0, 0.0])
        assert np.allclose(registry.state(Body.MOON).position,
                           [AU, 0.0, -0.01 * AU], atol=1e-6)
        assert np.allclose(registry.state(Body.SUN).position, 0.0)

    def test_matches_stateless_position(self):
        """The solve pass agrees with absolute_position on the real catalog."""
        registry = BodyRegistry()
        PositionSolver(registry).solve_all(1234.5)
        for body in (Body.MARS, Body.MOON, Body.PLUTO):
            assert np.allclose(registry.state(body).position,
                               absolute_position(registry, body, 1234.5))

    def test_static_positions_do_not_move(self, registry):
        solver = PositionSolver(registry)
        solver.solve_all(0.0)
        first = registry.state(Body.MOON).position
        solver.solve_all(500.0, 500.0)
        assert np.allclose(registry.state(Body.MOON).position, first)

    def test_roll_linear_and_unbounded(self, registry):
        """roll += delta / period * 360, never wrapped."""
        solver = PositionSolver(registry)
        solver.solve_all(0.0, 1.0)
        assert np.isclose(registry.state(Body.EARTH).roll, 180.0)
        assert np.isclose(registry.state(Body.SUN).roll, 360.0 / 25.0)
        solver.solve_all(10.0, 9.0)
        assert np.isclose(registry.state(Body.EARTH).roll, 1800.0)
        assert np.isclose(registry.state(Body.MOON).roll, 900.0)

    def test_mirrors_to_entity(self, registry):
        entity = VisualEntity()
        registry.bind(Body.EARTH, entity)
        PositionSolver(registry).solve(Body.EARTH, 0.0, 1.0)
        assert np.allclose(entity.translation, [AU, 0.0, 0.0])
        assert np.isclose(entity.roll, 180.0)

    def test_unregistered_body_skipped(self, registry):
        solver = PositionSolver(registry)
        solver.solve(Body.NEPTUNE, 0.0, 1.0)
        assert Body.NEPTUNE not in registry

    def test_au_scale(self, registry):
        assert PositionSolver(registry).au_scale == AU
        solver = PositionSolver(registry, au_scale=10.0)
        solver.solve_all(0.0)
        assert np.allclose(registry.state(Body.EARTH).position, [10.0, 0.0, 0.0])
