"""
Test suite for ring and cloud-layer placement.
"""

import pytest
import numpy as np
from orrery import (Body, BodyRegistry, DerivedGeometryUpdater, PositionSolver,
                    ScaleController, VisualEntity)
from orrery.geometry import CLOUD_ROLL_DIVISOR, RING_ROLL_DIVISOR, ROLL_DIVISORS


@pytest.fixture
def registry():
    registry = BodyRegistry()
    PositionSolver(registry).solve_all(2000.0, 3.0)
    return registry


@pytest.fixture
def scale(registry):
    return ScaleController(registry)


@pytest.fixture
def updater(registry, scale):
    return DerivedGeometryUpdater(registry, scale)


class TestDerivedGeometry:
    """Test dependents following their parent."""

    def test_ring_follows_planet(self, registry, updater):
        updater.update()
        saturn = registry.state(Body.SATURN)
        ring = registry.state(Body.SATURN_RING)
        assert np.array_equal(ring.position, saturn.position)
        assert ring.tilt == saturn.tilt
        assert np.isclose(ring.roll, saturn.roll / 10)

    def test_ring_radius(self, registry, updater):
        """(inner + outer) / 1.75 from the cached radii."""
        updater.update()
        expected = ((58.232 + 6.630) + (58.232 + 120.700)) / 1.75
        assert np.isclose(registry.state(Body.SATURN_RING).radius, expected)
        expected = ((25.362 + 2.0) + (25.362 + 40.0)) / 1.75
        assert np.isclose(registry.state(Body.URANUS_RING).radius, expected)

    def test_cloud(self, registry, updater):
        updater.update()
        earth = registry.state(Body.EARTH)
        cloud = registry.state(Body.EARTH_CLOUD)
        assert np.array_equal(cloud.position, earth.position)
        assert np.isclose(cloud.roll, earth.roll / 1.2)
        assert np.isclose(cloud.radius, 6.371 * 1.010)

    def test_after_rescale(self, registry, scale, updater):
        """Radii track the scaled parent and the scaled ring cache."""
        scale.set_scale(2.0)
        scale.apply_scale()
        updater.update()
        assert np.isclose(registry.state(Body.EARTH_CLOUD).radius,
                          2 * 6.371 * 1.010)
        expected = 2 * ((58.232 + 6.630) + (58.232 + 120.700)) / 1.75
        assert np.isclose(registry.state(Body.SATURN_RING).radius, expected)

    def test_roll_divisors(self, registry, updater):
        registry.state(Body.URANUS).roll = 100.0
        registry.state(Body.EARTH).roll = 12.0
        updater.update()
        assert np.isclose(registry.state(Body.URANUS_RING).roll, 10.0)
        assert np.isclose(registry.state(Body.EARTH_CLOUD).roll, 10.0)
        assert updater.roll_divisor(Body.SATURN_RING) == 10.0

    def test_roll_divisor_table(self, updater):
        """Every ring shares one divisor; the cloud has its own."""
        assert ROLL_DIVISORS[Body.SATURN_RING] == RING_ROLL_DIVISOR
        assert ROLL_DIVISORS[Body.URANUS_RING] == RING_ROLL_DIVISOR
        assert ROLL_DIVISORS[Body.EARTH_CLOUD] == CLOUD_ROLL_DIVISOR
        assert updater.roll_divisor(Body.EARTH_CLOUD) == CLOUD_ROLL_DIVISOR

    def test_reads_state_not_entity(self, registry, updater):
        """A moved parent entity does not drag its dependents along."""
        entity = VisualEntity()
        registry.bind(Body.SATURN, entity)
        entity.x = 999.0
        updater.update()
        assert registry.state(Body.SATURN_RING).x == registry.state(Body.SATURN).x

    def test_mirrors_dependent(self, registry, updater):
        entity = VisualEntity()
        registry.bind(Body.EARTH_CLOUD, entity)
        updater.update()
        cloud = registry.state(Body.EARTH_CLOUD)
        assert np.array_equal(entity.translation, cloud.position)
        assert entity.r == cloud.radius
        assert entity.tilt == cloud.tilt

    def test_unknown_dependent_skipped(self, updater):
        updater.update_dependent(Body.MARS)

    def test_cloud_modifier(self, registry, scale):
        updater = DerivedGeometryUpdater(registry, scale, cloud_modifier=1.5)
        updater.update()
        assert np.isclose(registry.state(Body.EARTH_CLOUD).radius, 6.371 * 1.5)
