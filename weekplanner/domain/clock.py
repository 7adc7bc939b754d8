"""
Wall-clock time of day with minute resolution.

A ``Time`` is a point on a 24 hour clock, not on a timeline: adding or
subtracting minutes wraps around midnight.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict

import pendulum
from pendulum import DateTime

from .exceptions import InvalidTimeFormat, InvalidTimeValue

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR
TIME_SEPARATOR = ":"


@dataclass(frozen=True, order=True)
class Time:
    """
    Immutable time of day.

    Invariant: 0 <= total_minutes < 1440.
    """
    total_minutes: int

    def __post_init__(self):
        if isinstance(self.total_minutes, bool) or not isinstance(self.total_minutes, int):
            raise InvalidTimeValue(f"Invalid minutes value: {self.total_minutes!r}")
        if not 0 <= self.total_minutes < MINUTES_PER_DAY:
            raise InvalidTimeValue(
                f"Invalid minutes value: {self.total_minutes}, "
                f"expected 0 <= minutes < {MINUTES_PER_DAY}"
            )

    @classmethod
    def from_components(cls, hours: int, minutes: int = 0) -> "Time":
        """
        Build a time from hours and minutes.

        Raises:
            InvalidTimeValue: If hours is not in [0, 24) or minutes not in [0, 60)
        """
        if isinstance(hours, bool) or not isinstance(hours, int) or not 0 <= hours < HOURS_PER_DAY:
            raise InvalidTimeValue(f"Invalid hours value: {hours!r}")
        if isinstance(minutes, bool) or not isinstance(minutes, int) or not 0 <= minutes < MINUTES_PER_HOUR:
            raise InvalidTimeValue(f"Invalid minutes value: {minutes!r}")
        return cls(hours * MINUTES_PER_HOUR + minutes)

    @classmethod
    def from_total_minutes(cls, total_minutes: int) -> "Time":
        """Build a time from the number of minutes since midnight."""
        return cls(total_minutes)

    @classmethod
    def from_dict(cls, value: Dict[str, int]) -> "Time":
        """Build a time from a ``{"hours": ..., "minutes": ...}`` record."""
        try:
            return cls.from_components(value["hours"], value.get("minutes", 0))
        except (KeyError, TypeError, AttributeError) as exc:
            raise InvalidTimeValue(f"Invalid time record: {value!r}") from exc

    @classmethod
    def from_datetime(cls, value: datetime) -> "Time":
        """Take the clock part of a datetime, dropping seconds."""
        return cls.from_components(value.hour, value.minute)

    @classmethod
    def now(cls, tz: str | None = None) -> "Time":
        """Current wall-clock time, truncated to the minute."""
        current = pendulum.now(tz) if tz else pendulum.now()
        return cls.from_datetime(current)

    @classmethod
    def parse(cls, value: str) -> "Time":
        """
        Parse a strict ``HH:MM`` string.

        Both fields must be exactly two digits.

        Raises:
            InvalidTimeFormat: If the string does not match HH:MM or is out of range
        """
        if not isinstance(value, str):
            raise InvalidTimeFormat(value)

        parts = value.split(TIME_SEPARATOR)
        if len(parts) != 2:
            raise InvalidTimeFormat(value)

        raw_hours, raw_minutes = parts
        if len(raw_hours) != 2 or len(raw_minutes) != 2:
            raise InvalidTimeFormat(value)
        # str.isdigit() alone would accept non-ASCII digits
        if not (raw_hours.isascii() and raw_hours.isdigit() and raw_minutes.isascii() and raw_minutes.isdigit()):
            raise InvalidTimeFormat(value)

        try:
            return cls.from_components(int(raw_hours), int(raw_minutes))
        except InvalidTimeValue as exc:
            raise InvalidTimeFormat(value) from exc

    @property
    def hours(self) -> int:
        return self.total_minutes // MINUTES_PER_HOUR

    @property
    def minutes(self) -> int:
        return self.total_minutes % MINUTES_PER_HOUR

    def compare_to(self, other: "Time") -> int:
        """Negative, zero or positive like a classic comparator."""
        return self.total_minutes - other.total_minutes

    def is_before(self, other: "Time") -> bool:
        return self.total_minutes < other.total_minutes

    def is_after(self, other: "Time") -> bool:
        return self.total_minutes > other.total_minutes

    def add(self, minutes: int) -> "Time":
        """Return a new time ``minutes`` later, wrapping at midnight."""
        return Time((self.total_minutes + minutes) % MINUTES_PER_DAY)

    def sub(self, minutes: int) -> "Time":
        """Return a new time ``minutes`` earlier, wrapping to the previous day's clock."""
        return Time((self.total_minutes - minutes) % MINUTES_PER_DAY)

    def to_datetime(self, on: datetime | None = None) -> DateTime:
        """
        Place this clock time on a calendar date.

        Args:
            on: Date to use, defaults to today in the local timezone

        Returns:
            DateTime with the date of ``on`` and the hour/minute of this time
        """
        base = pendulum.instance(on) if on is not None else pendulum.now()
        return base.set(hour=self.hours, minute=self.minutes, second=0, microsecond=0)

    def to_dict(self) -> Dict[str, int]:
        return {"hours": self.hours, "minutes": self.minutes}

    def format(self) -> str:
        """Zero padded ``HH:MM``."""
        return f"{self.hours:02d}{TIME_SEPARATOR}{self.minutes:02d}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Time({self.format()})"
