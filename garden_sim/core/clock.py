"""Time system for the garden: a day counter plus a scaled time of day."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from garden_sim.core.config import (
    BASE_TIME_SCALE,
    DAY_START_HOUR,
    DAY_START_MINUTE,
    DEFAULT_SPEED_FACTOR,
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SPEED_FACTORS,
    START_DAY,
)
from garden_sim.viz.logger import GardenLogger, quiet_logger

HourListener = Callable[[int], None]
DayListener = Callable[[int], None]


@dataclass(frozen=True)
class SimTime:
    """An instant on the simulated calendar."""

    day: int = 0
    seconds_of_day: float = 0.0

    @property
    def hour(self) -> int:
        return int(self.seconds_of_day // SECONDS_PER_HOUR) % HOURS_PER_DAY

    @property
    def absolute_seconds(self) -> float:
        return self.day * SECONDS_PER_DAY + self.seconds_of_day

    @property
    def absolute_hours(self) -> int:
        return self.day * HOURS_PER_DAY + int(self.seconds_of_day // SECONDS_PER_HOUR)


@dataclass
class TimeData:
    """Persisted clock state."""

    current_time_in_seconds: float = DAY_START_HOUR * SECONDS_PER_HOUR + DAY_START_MINUTE * SECONDS_PER_MINUTE
    current_hour: int = DAY_START_HOUR
    current_minute: int = DAY_START_MINUTE
    current_day: int = START_DAY
    speed_factor: int = DEFAULT_SPEED_FACTOR

    def to_dict(self) -> dict:
        return {
            "current_time_in_seconds": self.current_time_in_seconds,
            "current_hour": self.current_hour,
            "current_minute": self.current_minute,
            "current_day": self.current_day,
            "speed_factor": self.speed_factor,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TimeData:
        return cls(
            current_time_in_seconds=float(data["current_time_in_seconds"]),
            current_hour=int(data["current_hour"]),
            current_minute=int(data["current_minute"]),
            current_day=int(data["current_day"]),
            speed_factor=int(data.get("speed_factor", DEFAULT_SPEED_FACTOR)),
        )


class GameClock:
    """Advances simulated time from real elapsed time and announces hour/day boundaries.

    One real second is ``BASE_TIME_SCALE * speed_factor`` in-game minutes. The clock is
    a plain object owned by whoever drives the simulation; pots read ``now`` from it
    after it has finished advancing for the frame.
    """

    def __init__(
        self,
        time_scale: float = BASE_TIME_SCALE,
        speed_factor: int = DEFAULT_SPEED_FACTOR,
        start_hour: int = DAY_START_HOUR,
        start_minute: int = DAY_START_MINUTE,
        logger: Optional[GardenLogger] = None,
    ) -> None:
        self.time_scale = time_scale
        self.speed_factor = DEFAULT_SPEED_FACTOR
        self.set_speed_factor(speed_factor)
        self.start_hour = max(0, min(HOURS_PER_DAY - 1, start_hour))
        self.start_minute = max(0, min(MINUTES_PER_HOUR - 1, start_minute))
        self.logger = logger or quiet_logger()

        self.day: int = START_DAY
        self.time_of_day_seconds: float = self._day_start_seconds()
        self.hour: int = self.start_hour
        self.minute: int = self.start_minute

        self._hour_listeners: list[HourListener] = []
        self._day_listeners: list[DayListener] = []

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------
    @property
    def scale(self) -> float:
        """In-game minutes per real second."""
        return self.time_scale * self.speed_factor

    @property
    def now(self) -> SimTime:
        return SimTime(self.day, self.time_of_day_seconds)

    @property
    def seconds_of_day(self) -> float:
        return self.time_of_day_seconds

    def time_string(self) -> str:
        """Day counter and 12-hour clock, e.g. ``"Day 3\\n09:05 PM"``."""
        display_hour = self.hour
        if display_hour >= 12:
            ampm = "PM"
            if display_hour > 12:
                display_hour -= 12
        else:
            ampm = "AM"
            if display_hour == 0:
                display_hour = 12
        return f"Day {self.day}\n{display_hour:02d}:{self.minute:02d} {ampm}"

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_hour_listener(self, listener: HourListener) -> None:
        self._hour_listeners.append(listener)

    def remove_hour_listener(self, listener: HourListener) -> None:
        if listener in self._hour_listeners:
            self._hour_listeners.remove(listener)

    def add_day_listener(self, listener: DayListener) -> None:
        self._day_listeners.append(listener)

    def remove_day_listener(self, listener: DayListener) -> None:
        if listener in self._day_listeners:
            self._day_listeners.remove(listener)

    def _emit_hour_changed(self) -> None:
        self.logger.log(GardenLogger.CLOCK, f"Hour changed to {self.hour:02d}:00", day=self.day)
        for listener in list(self._hour_listeners):
            listener(self.hour)

    def _emit_day_changed(self) -> None:
        self.logger.log(GardenLogger.CLOCK, f"New day: {self.day}", day=self.day)
        for listener in list(self._day_listeners):
            listener(self.day)

    def start(self) -> None:
        """Announce the starting hour and day to every listener."""
        self._emit_hour_changed()
        self._emit_day_changed()

    # ------------------------------------------------------------------
    # Advancing
    # ------------------------------------------------------------------
    def tick(self, real_delta_seconds: float) -> None:
        """
        Advances the clock by a frame of real time.

        At most one day boundary is handled per call: frames are expected to be far
        shorter than a simulated day. Any overshoot is kept and wraps on the next tick.
        """
        if real_delta_seconds <= 0:
            return

        old_hour = self.hour
        self.time_of_day_seconds += real_delta_seconds * SECONDS_PER_MINUTE * self.scale

        day_advanced = False
        if self.time_of_day_seconds >= SECONDS_PER_DAY:
            self.day += 1
            self.time_of_day_seconds -= SECONDS_PER_DAY
            day_advanced = True

        self._recalculate_time()

        if self.hour != old_hour:
            self._emit_hour_changed()
        if day_advanced:
            self._emit_day_changed()

    def _recalculate_time(self) -> None:
        self.hour = int(self.time_of_day_seconds // SECONDS_PER_HOUR) % HOURS_PER_DAY
        self.minute = int(self.time_of_day_seconds // SECONDS_PER_MINUTE) % MINUTES_PER_HOUR

    def _day_start_seconds(self) -> float:
        return float(self.start_hour * SECONDS_PER_HOUR + self.start_minute * SECONDS_PER_MINUTE)

    # ------------------------------------------------------------------
    # Direct control
    # ------------------------------------------------------------------
    def set_time(self, hour: int, minute: int) -> None:
        """Jump to an absolute time of day on the current day."""
        hour = max(0, min(HOURS_PER_DAY - 1, hour))
        minute = max(0, min(MINUTES_PER_HOUR - 1, minute))

        self.time_of_day_seconds = float(hour * SECONDS_PER_HOUR + minute * SECONDS_PER_MINUTE)
        self._recalculate_time()
        self._emit_hour_changed()

    def set_day(self, day: int) -> None:
        self.day = max(0, day)

    def skip_days(self, days_to_skip: int) -> None:
        """Move forward whole days, landing at the configured start of day."""
        if days_to_skip <= 0:
            self.logger.warn(f"Days to skip must be a positive number, got {days_to_skip}", day=self.day)
            return

        for _ in range(days_to_skip):
            self.day += 1
            self._emit_day_changed()

        self.time_of_day_seconds = self._day_start_seconds()
        self._recalculate_time()
        self._emit_hour_changed()

    def set_speed_factor(self, multiplier: float) -> None:
        """Snap to the nearest allowed speed factor; used from the next tick on."""
        self.speed_factor = min(SPEED_FACTORS, key=lambda f: (abs(f - multiplier), f))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def get_time_data(self) -> TimeData:
        return TimeData(
            current_time_in_seconds=self.time_of_day_seconds,
            current_hour=self.hour,
            current_minute=self.minute,
            current_day=self.day,
            speed_factor=self.speed_factor,
        )

    def set_time_data(self, data: Optional[TimeData]) -> None:
        if data is None:
            return

        self.time_of_day_seconds = max(0.0, min(float(SECONDS_PER_DAY) - 1e-6, data.current_time_in_seconds))
        self.day = max(0, data.current_day)
        self.set_speed_factor(data.speed_factor)
        self._recalculate_time()

        self._emit_hour_changed()
        self._emit_day_changed()
