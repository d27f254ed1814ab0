"""
Test suite for Ephemeris.

Tests cover:
- Evaluation on the built-in solar system
- Bounds and argument checking
- DataFrame export
- Plotting functions (smoke tests)
"""

import pytest
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from orrery import (Body, BodyRegistry, Ephemeris, Orrery, config,
                    temp_config)

AU = config.AU_SCALE


@pytest.fixture
def registry():
    return BodyRegistry()


@pytest.fixture
def earth(registry):
    return Ephemeris(registry, Body.EARTH, 0.0, 365.25)


class TestEvaluation:
    """Test positions along the path."""

    def test_earth_distance(self, earth):
        """Earth stays within its perihelion/aphelion band."""
        r = np.linalg.norm(earth.sample(200), axis=1)
        assert np.all(r > 0.98 * AU)
        assert np.all(r < 1.02 * AU)

    def test_earth_in_ecliptic(self, earth):
        """Earth's elements have zero inclination: y stays zero."""
        assert np.allclose(earth.sample(50)[:, 1], 0.0, atol=1e-6)

    def test_moon_around_earth(self, registry):
        """Moon minus Earth stays near the lunar semi-major axis."""
        moon = Ephemeris(registry, Body.MOON, 0.0, 30.0)
        earth = Ephemeris(registry, Body.EARTH, 0.0, 30.0)
        days = moon.get_days(60)
        offset = np.linalg.norm(moon.evaluate(days) - earth.evaluate(days), axis=1)
        a = 0.002569555 * AU
        assert np.all(offset > 0.94 * a)
        assert np.all(offset < 1.06 * a)

    def test_matches_engine(self):
        """The engine state at the start equals the ephemeris at day -0.5."""
        engine = Orrery()
        ephemeris = engine.ephemeris(Body.MARS, -0.5, 10.0)
        assert np.allclose(ephemeris(-0.5),
                           engine.body_state(Body.MARS).position)

    def test_scalar_and_array(self, earth):
        single = earth.evaluate(100.0)
        many = earth.evaluate([100.0, 200.0])
        assert single.shape == (3,)
        assert many.shape == (2, 3)
        assert np.allclose(many[0], single)
        assert np.allclose(earth(100.0), single)

    def test_primary(self, registry):
        sun = Ephemeris(registry, Body.SUN, 0.0, 10.0)
        assert np.allclose(sun.sample(5), 0.0)

    def test_orbit_days(self, registry):
        assert np.isclose(Ephemeris.orbit_days(registry, Body.MOON),
                          360.0 / 13.0649929509)
        assert Ephemeris.orbit_days(registry, Body.SUN) == 25.05


class TestBounds:
    """Test argument checking."""

    def test_day_outside_range(self, earth):
        with pytest.raises(ValueError, match="outside ephemeris bounds"):
            earth.position_at(400.0)
        with pytest.raises(ValueError, match="outside ephemeris bounds"):
            earth.evaluate([-1.0, 10.0])

    def test_contains_day(self, earth):
        assert earth.contains_day(0.0)
        assert earth.contains_day(365.25)
        assert not earth.contains_day(365.3)

    def test_too_few_points(self, earth):
        with pytest.raises(ValueError, match="at least 2"):
            earth.sample(1)

    def test_empty_range(self, registry):
        with pytest.raises(ValueError, match="must be <"):
            Ephemeris(registry, Body.EARTH, 10.0, 10.0)

    def test_non_orbiting_body(self, registry):
        with pytest.raises(ValueError, match="not an orbiting body"):
            Ephemeris(registry, Body.SATURN_RING, 0.0, 1.0)

    def test_properties(self, earth):
        assert earth.body == Body.EARTH
        assert earth.d0 == 0.0
        assert earth.d1 == 365.25
        assert earth.duration == 365.25
        assert np.array_equal(earth.get_days(3), [0.0, 182.625, 365.25])
        assert "EARTH" in repr(earth)
        assert "Earth" in str(earth)


class TestExport:
    """Test DataFrame export."""

    def test_to_dataframe(self, earth):
        df = earth.to_dataframe(n_points=25)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['day', 'x', 'y', 'z']
        assert len(df) == 25
        assert df['day'].iloc[-1] == 365.25

    def test_default_points_from_config(self, earth):
        with temp_config(DEFAULT_PLOT_POINTS=40):
            assert len(earth.to_dataframe()) == 40

    def test_specific_days(self, earth):
        df = earth.to_dataframe(days=[1.0, 2.0, 3.0])
        assert df['day'].tolist() == [1.0, 2.0, 3.0]


class TestPlotting:
    """Smoke tests for plotly output."""

    def test_plot_3d(self, earth):
        fig = earth.plot_3d(n_points=50)
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 2
        assert fig.data[0].name == 'Sun'
        assert fig.data[1].name == 'Earth'

    def test_plot_without_center(self, earth):
        fig = earth.plot_3d(n_points=50, show_center=False)
        assert len(fig.data) == 1
        assert fig.data[0].line.color == config.DEFAULT_TRAJ_COLOR

    def test_add_to_plot(self, registry, earth):
        fig = earth.plot_3d(n_points=20)
        mars = Ephemeris(registry, Body.MARS, 0.0, 700.0)
        returned = mars.add_to_plot(fig, n_points=20, color='orange')
        assert returned is fig
        assert len(fig.data) == 3
        assert fig.data[2].name == 'Mars'
