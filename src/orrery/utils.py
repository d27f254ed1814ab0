"""
Utility functions for the Orrery package.

Day-count helpers follow the "time scale" of Paul Schlyter's
"How to compute planetary positions" (http://www.stjarnhimlen.se/comp/ppcomp.html),
shifted so that day 0 is 2000-01-01 12:00 UT.
"""

import warnings
from datetime import datetime
from typing import Type
from .config import config

# Schlyter's integer formula gives 730530 at 2000 Jan 0.0 UT; the extra 1.5
# days move the origin to 2000 Jan 1.5 UT.
_EPOCH_OFFSET = 730531.5


def time_scale(year: int, month: int, day: int) -> float:
    """
    Whole-day part of the day-count for a calendar date at 00:00 UT.

    Valid from March 1900 to February 2100.

    Parameters
    ----------
    year, month, day : int
        Calendar date (Gregorian)

    Returns
    -------
    float
        Days since 2000-01-01 12:00 UT, evaluated at midnight of the date
    """
    return (367 * year
            - 7 * (year + (month + 9) // 12) // 4
            + 275 * month // 9
            + day
            - _EPOCH_OFFSET)


def universal_time(hours: int, minutes: int, seconds: float) -> float:
    """Fraction of a day elapsed at the given UT time of day."""
    return (hours + minutes / 60.0 + seconds / 3600.0) / 24.0


def day_count(when: datetime) -> float:
    """
    Continuous day-count of a calendar timestamp.

    Examples
    --------
    >>> day_count(datetime(2000, 1, 1, 12))
    0.0
    """
    seconds = when.second + when.microsecond / 1e6
    return (time_scale(when.year, when.month, when.day)
            + universal_time(when.hour, when.minute, seconds))


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from orrery.utils import validation_error
    >>> from orrery import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)
