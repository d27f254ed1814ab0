"""
Test suite for day-count utilities and the validation policy helper.
"""

import pytest
import numpy as np
from datetime import datetime, timedelta
from orrery import temp_config
from orrery.utils import time_scale, universal_time, day_count, validation_error


class TestTimeScale:
    """Test the whole-day part of the day-count."""

    def test_epoch_midnight(self):
        """2000-01-01 00:00 UT is half a day before the epoch."""
        assert time_scale(2000, 1, 1) == -0.5

    def test_leap_day(self):
        """2000 is a leap year: 1 March is 60 days after 1 January."""
        assert time_scale(2000, 3, 1) == 59.5
        assert time_scale(2000, 3, 1) - time_scale(2000, 2, 28) == 2.0

    def test_year_length(self):
        """A leap year spans 366 days, a common year 365."""
        assert time_scale(2001, 1, 1) - time_scale(2000, 1, 1) == 366.0
        assert time_scale(2002, 1, 1) - time_scale(2001, 1, 1) == 365.0

    def test_consecutive_days(self):
        """Consecutive calendar days differ by exactly one."""
        day = datetime(1999, 12, 1)
        previous = time_scale(day.year, day.month, day.day)
        for _ in range(800):
            day += timedelta(days=1)
            current = time_scale(day.year, day.month, day.day)
            assert current - previous == 1.0
            previous = current


class TestUniversalTime:
    """Test the time-of-day fraction."""

    def test_noon(self):
        assert universal_time(12, 0, 0) == 0.5

    def test_minutes_and_seconds(self):
        """Minutes and seconds contribute their share of a day."""
        assert np.isclose(universal_time(6, 30, 0), 6.5 / 24)
        assert np.isclose(universal_time(0, 0, 1.5), 1.5 / 86400)


class TestDayCount:
    """Test the continuous day-count."""

    def test_epoch_is_zero(self):
        """Day 0 is 2000-01-01 12:00 UT."""
        assert day_count(datetime(2000, 1, 1, 12)) == 0.0

    def test_start_of_simulation(self):
        """The default start time is day -0.5."""
        assert day_count(datetime(2000, 1, 1)) == -0.5

    def test_monotonic_over_hours(self):
        """Day-count strictly increases hour by hour across a month boundary."""
        times = [datetime(2000, 1, 30) + timedelta(hours=h) for h in range(100)]
        days = np.array([day_count(t) for t in times])
        assert np.all(np.diff(days) > 0)
        assert np.allclose(np.diff(days), 1.0 / 24)

    def test_microseconds(self):
        """Fractional seconds are included."""
        base = datetime(2000, 1, 1, 12)
        later = base + timedelta(milliseconds=500)
        assert np.isclose(day_count(later) - day_count(base), 0.5 / 86400)


class TestValidationError:
    """Test the raise-or-warn policy."""

    def test_raises_when_strict(self):
        with pytest.raises(ValueError, match="bad value"):
            validation_error("bad value")

    def test_custom_error_class(self):
        with pytest.raises(TypeError, match="bad type"):
            validation_error("bad type", TypeError)

    def test_warns_when_not_strict(self):
        """Non-strict mode issues a UserWarning and returns."""
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="bad value"):
                validation_error("bad value")
