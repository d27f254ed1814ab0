'''Simulated time
SimulatedClock, BurstSpeed and TimeIntegrator class definitions'''

from datetime import datetime, timedelta
from typing import Dict, Optional
from .catalog import Body
from .config import config
from .registry import BodyRegistry
from .utils import day_count, validation_error


class SimulatedClock:
    """
    Calendar date/time of the simulation and its continuous day-count.

    The calendar timestamp is the source of truth; ``current_days`` is always
    recomputed from it.

    Parameters
    ----------
    start : datetime, optional
        Initial UT timestamp (default from config START_* fields)
    """
    # ========== CLASS CONSTANTS ==========
    # range of the day-count formula
    VALID_FROM = datetime(1900, 3, 1)
    VALID_UNTIL = datetime(2100, 3, 1)

    def __init__(self, start: Optional[datetime] = None):
        if start is None:
            start = datetime(config.START_YEAR, config.START_MONTH,
                             config.START_DAY, config.START_HOUR,
                             config.START_MINUTE)
        if not self.in_range(start):
            validation_error(
                f"Start time {start.isoformat()} is outside the supported "
                f"date range {self._range_text()}")
        self._time = start
        self._start_days = day_count(start)
        self._previous_days = self._start_days
        self._current_days = self._start_days
        self._delta_days = 0.0

    def advance(self, milliseconds: float) -> float:
        """
        Move the calendar forward and refresh the day-count.

        Parameters
        ----------
        milliseconds : float
            Simulated time to add [ms]

        Returns
        -------
        float
            Elapsed simulated days (``current_days - previous_days``)

        Raises
        ------
        ValueError
            If the new time falls outside [VALID_FROM, VALID_UNTIL) (warns
            and performs an empty step when config.STRICT_VALIDATION is False)
        """
        try:
            time = self._time + timedelta(milliseconds=milliseconds)
        except OverflowError:
            time = None
        if time is None or not self.in_range(time):
            validation_error(
                f"Advancing by {milliseconds} ms leaves the supported "
                f"date range {self._range_text()}")
            time = self._time
        self._time = time
        self._previous_days = self._current_days
        self._current_days = day_count(self._time)
        self._delta_days = self._current_days - self._previous_days
        return self._delta_days

    @classmethod
    def in_range(cls, time: datetime) -> bool:
        """True if the day-count formula is valid at ``time``"""
        return cls.VALID_FROM <= time < cls.VALID_UNTIL

    @classmethod
    def _range_text(cls) -> str:
        return f"[{cls.VALID_FROM:%Y-%m-%d}, {cls.VALID_UNTIL:%Y-%m-%d})"

    # ========== PROPERTY ACCESS ==========
    @property
    def time(self) -> datetime:
        """Current simulated UT timestamp"""
        return self._time

    @property
    def year(self) -> int:
        return self._time.year

    @property
    def month(self) -> int:
        return self._time.month

    @property
    def day(self) -> int:
        return self._time.day

    @property
    def hour(self) -> int:
        return self._time.hour

    @property
    def minute(self) -> int:
        return self._time.minute

    @property
    def second(self) -> float:
        """Seconds including the fractional part"""
        return self._time.second + self._time.microsecond / 1e6

    @property
    def start_days(self) -> float:
        """Day-count of the start timestamp"""
        return self._start_days

    @property
    def previous_days(self) -> float:
        return self._previous_days

    @property
    def current_days(self) -> float:
        return self._current_days

    @property
    def delta_days(self) -> float:
        """Simulated days elapsed in the most recent step"""
        return self._delta_days

    def __repr__(self):
        return (f"SimulatedClock(time={self._time.isoformat()}, "
                f"current_days={self._current_days:.6f})")


class BurstSpeed:
    """
    Temporary time acceleration cycling through powers of ``step``.

    With step 2 and ceiling 64, repeated toggles give
    1, 2, 4, 8, 16, 32, 64, 1, 2, ...

    Parameters
    ----------
    step : float, optional
        Factor applied per toggle (default config.BURST_STEP)
    ceiling : float, optional
        Largest allowed multiplier (default config.BURST_MAX)
    """
    def __init__(self, step: Optional[float] = None,
                 ceiling: Optional[float] = None):
        step = config.BURST_STEP if step is None else step
        ceiling = config.BURST_MAX if ceiling is None else ceiling
        if step <= 1:
            raise ValueError(f"Burst step must be greater than 1, got {step}")
        if ceiling < 1:
            raise ValueError(f"Burst ceiling must be at least 1, got {ceiling}")
        self._step = float(step)
        self._ceiling = float(ceiling)
        self._multiplier = 1.0

    def toggle(self) -> float:
        """Advance to the next multiplier, wrapping to 1 past the ceiling"""
        if self._multiplier * self._step <= self._ceiling:
            self._multiplier *= self._step
        else:
            self._multiplier = 1.0
        return self._multiplier

    def reset(self):
        self._multiplier = 1.0

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @property
    def step(self) -> float:
        return self._step

    @property
    def ceiling(self) -> float:
        return self._ceiling

    def __repr__(self):
        return (f"BurstSpeed(multiplier={self._multiplier}, step={self._step}, "
                f"ceiling={self._ceiling})")


class TimeIntegrator:
    """
    Advances the simulated clock at a rate chosen by the reference body.

    The whole-system view uses the flat speed. Individual bodies scale the
    speed by their period so that fast and slow bodies animate in comparable
    real time; the divisor per body comes from ``RATE_DIVISORS``.

    Parameters
    ----------
    registry : BodyRegistry
        Source of body periods
    clock : SimulatedClock, optional
        Clock to advance (default: new clock at the configured start)
    burst : BurstSpeed, optional
        Burst state machine (default: configured step and ceiling)
    speed : float, optional
        Simulated days per real second (default config.INITIAL_SPEED)
    """
    # ========== CLASS CONSTANTS ==========
    RATE_DIVISORS: Dict[Body, float] = {
        Body.MERCURY: 15000.0,
        Body.VENUS: 15000.0,
    }
    DEFAULT_RATE_DIVISOR = 100.0

    def __init__(
        self,
        registry: BodyRegistry,
        clock: Optional[SimulatedClock] = None,
        burst: Optional[BurstSpeed] = None,
        speed: Optional[float] = None
    ):
        self._registry = registry
        self._clock = SimulatedClock() if clock is None else clock
        self._burst = BurstSpeed() if burst is None else burst
        self._speed = 0.0
        self.set_speed(config.INITIAL_SPEED if speed is None else speed)
        self._days_per_step = 0.0

    def set_speed(self, days_per_second: float):
        """
        Set the base rate [simulated days per real second].

        Negative rates are rejected (the previous rate is kept when
        config.STRICT_VALIDATION is False). Large rates are accepted, but a
        step that leaves the clock's supported date range fails in
        SimulatedClock.advance.
        """
        if days_per_second < 0:
            validation_error(f"Speed must be non-negative, got {days_per_second}")
            return
        self._speed = float(days_per_second)

    def base_rate(self, reference: Body) -> float:
        """
        Base rate for a reference body, before the burst multiplier.

        Dependents use their parent's period; unknown references and the
        whole-system view use the flat speed.
        """
        if reference == Body.SOLAR_SYSTEM_VIEW:
            return self._speed
        parent = self._registry.parent(reference)
        body = reference if parent is None else parent
        params = self._registry.params(body)
        if params is None:
            return self._speed
        divisor = self.RATE_DIVISORS.get(body, self.DEFAULT_RATE_DIVISOR)
        return self._speed * params.period / divisor

    def days_per_step(self, reference: Body) -> float:
        """Base rate times the current burst multiplier"""
        return self.base_rate(reference) * self._burst.multiplier

    def advance(self, reference: Body, dt: float) -> float:
        """
        Advance the clock by one frame.

        Parameters
        ----------
        reference : Body
            Body the view is focused on (chooses the rate)
        dt : float
            Real frame time [s]; 0 gives an empty step

        Returns
        -------
        float
            Simulated days elapsed in this step
        """
        if dt < 0:
            validation_error(f"Frame time must be non-negative, got {dt}")
            return self._clock.advance(0.0)
        self._days_per_step = self.days_per_step(reference)
        return self._clock.advance(dt * 1000.0 * self._days_per_step)

    # ========== PROPERTY ACCESS ==========
    @property
    def clock(self) -> SimulatedClock:
        return self._clock

    @property
    def burst(self) -> BurstSpeed:
        return self._burst

    @property
    def speed(self) -> float:
        """Base rate [simulated days per real second]"""
        return self._speed

    @property
    def last_days_per_step(self) -> float:
        """Rate used by the most recent advance()"""
        return self._days_per_step
