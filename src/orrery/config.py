"""
Global Configuration for Orrery Package
=======================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, validation behavior, the simulated start date
and the visual tuning constants of the engine.

Examples
--------
View current configuration:

>>> import orrery
>>> print(orrery.config)

Modify settings:

>>> orrery.config.FOCUSED_MINIMUM_SCALE = 40.0
>>> orrery.config.START_YEAR = 2024

Reset to defaults:

>>> orrery.config.reset()

Temporarily modify settings:

>>> with orrery.temp_config(BURST_MAX=16.0):
...     engine = orrery.Orrery()

Notes
-----
An Orrery reads these values once, when it is constructed. Changing the
configuration afterwards only affects engines created later.
"""

from dataclasses import dataclass
from contextlib import contextmanager
import math


@dataclass
class OrreryConfig:
    """
    Global configuration for Orrery package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    HASH_DECIMALS : int
        Number of decimal places for rounding when computing hash values.
        Automatically computed to preserve hash contract
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    AU_SCALE : float
        Scene units per astronomical unit (thousands of km).
        Default: 149597.8707
    START_YEAR, START_MONTH, START_DAY, START_HOUR, START_MINUTE : int
        Calendar date/time the simulated clock starts from.
        Default: 2000-01-01 00:00 UT
    INITIAL_SPEED : float
        Simulated days per real second before set_speed() is called.
        Default: 0.0 (clock frozen)
    INITIAL_SCALE : float
        Visual scale before set_scale() is called.
        Default: 1.0
    FOCUSED_MINIMUM_SCALE : float
        Scale floor applied in focus mode.
        Default: 20.0
    BURST_STEP : float
        Factor applied by each burst toggle.
        Default: 2.0
    BURST_MAX : float
        Largest burst multiplier before wrapping back to 1.
        Default: 64.0
    EARTH_CLOUD_MODIFIER : float
        Cloud layer radius relative to the Earth radius.
        Default: 1.010
    SOLAR_DISTANCE : float
        Extent of the scene used by outer_radius() [scene units].
        Default: 2.5e6
    DEFAULT_ZOOM_LIMIT : float
        Default camera zoom limit for CameraController.
        Default: 1500.0
    DEFAULT_ZOOM_SPEED : float
        Default camera zoom speed for CameraController.
        Default: 1200.0
    DEFAULT_PLOT_POINTS : int
        Default number of points for ephemeris plotting.
        Default: 1000
    DEFAULT_BODY_COLOR : str
        Default color for the primary star in plots.
        Default: 'gold'
    DEFAULT_TRAJ_COLOR : str
        Default color for orbit lines in plots.
        Default: 'red'
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Distance scale
    AU_SCALE: float = 149597.8707

    # Simulated clock start
    START_YEAR: int = 2000
    START_MONTH: int = 1
    START_DAY: int = 1
    START_HOUR: int = 0
    START_MINUTE: int = 0

    # Time rate
    INITIAL_SPEED: float = 0.0
    BURST_STEP: float = 2.0
    BURST_MAX: float = 64.0

    # Visual scale
    INITIAL_SCALE: float = 1.0
    FOCUSED_MINIMUM_SCALE: float = 20.0
    EARTH_CLOUD_MODIFIER: float = 1.010
    SOLAR_DISTANCE: float = 2.5e6

    # Camera defaults
    DEFAULT_ZOOM_LIMIT: float = 1500.0
    DEFAULT_ZOOM_SPEED: float = 1200.0

    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 1000
    DEFAULT_BODY_COLOR: str = 'gold'
    DEFAULT_TRAJ_COLOR: str = 'red'

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Compute hash rounding decimals from equality tolerance.

        The hash rounding must be coarse enough that if two values
        are equal (within EQUALITY_ATOL), they hash to the same value.

        Formula: HASH_DECIMALS = -floor(log10(ATOL)) - 2

        Returns
        -------
        int
            Number of decimal places for hash rounding
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import orrery
        >>> orrery.config.BURST_MAX = 8.0
        >>> orrery.config.reset()
        >>> orrery.config.BURST_MAX
        64.0
        """
        defaults = OrreryConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["OrreryConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Clock:")
        lines.append(f"    START = {self.START_YEAR:04d}-{self.START_MONTH:02d}-"
                     f"{self.START_DAY:02d} {self.START_HOUR:02d}:"
                     f"{self.START_MINUTE:02d}")
        lines.append(f"    INITIAL_SPEED = {self.INITIAL_SPEED}")
        lines.append(f"    BURST_STEP = {self.BURST_STEP}")
        lines.append(f"    BURST_MAX = {self.BURST_MAX}")
        lines.append("  Scale:")
        lines.append(f"    AU_SCALE = {self.AU_SCALE}")
        lines.append(f"    INITIAL_SCALE = {self.INITIAL_SCALE}")
        lines.append(f"    FOCUSED_MINIMUM_SCALE = {self.FOCUSED_MINIMUM_SCALE}")
        lines.append(f"    EARTH_CLOUD_MODIFIER = {self.EARTH_CLOUD_MODIFIER}")
        lines.append(f"    SOLAR_DISTANCE = {self.SOLAR_DISTANCE}")
        lines.append("  Camera:")
        lines.append(f"    DEFAULT_ZOOM_LIMIT = {self.DEFAULT_ZOOM_LIMIT}")
        lines.append(f"    DEFAULT_ZOOM_SPEED = {self.DEFAULT_ZOOM_SPEED}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_BODY_COLOR = '{self.DEFAULT_BODY_COLOR}'")
        lines.append(f"    DEFAULT_TRAJ_COLOR = '{self.DEFAULT_TRAJ_COLOR}'")
        return "\n".join(lines)


# Global configuration instance
config = OrreryConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import orrery
    >>> with orrery.temp_config(STRICT_VALIDATION=False):
    ...     engine = orrery.Orrery(catalog)  # bad catalog only warns
    >>> orrery.config.STRICT_VALIDATION
    True

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"OrreryConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
