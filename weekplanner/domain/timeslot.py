"""
Timeslot: an immutable range between two clock times.

Holds the range algebra used by series and days: containment, overlap,
splitting a range at cut points and carving one range out of another.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Sequence, Tuple

from pendulum import DateTime

from .clock import Time
from .exceptions import (
    InvalidTimeFormat,
    InvalidTimeslotFormat,
    InvalidTimeslotRange,
    InvalidTimeValue,
    TimeslotsDoNotOverlap,
)

INTERVAL_SEPARATOR = "-"
DEFAULT_SLOT_MINUTES = 5
SLOT_GRANULARITY = 5


@dataclass(frozen=True, order=True)
class Timeslot:
    """
    Represents an immutable range of clock time.

    Invariant: start must not be after end. Zero length slots are valid.
    Ordering and equality are lexicographic on (start, end).
    """
    start: Time
    end: Time

    def __post_init__(self):
        if not isinstance(self.start, Time) or not isinstance(self.end, Time):
            raise InvalidTimeslotRange(self.start, self.end)
        if self.start.is_after(self.end):
            raise InvalidTimeslotRange(self.start, self.end)

    @classmethod
    def starting_at(cls, start: Time, minutes: int = DEFAULT_SLOT_MINUTES) -> "Timeslot":
        """Build a slot of ``minutes`` length beginning at ``start``."""
        return cls(start, start.add(minutes))

    @classmethod
    def from_dict(cls, value: Dict[str, Any]) -> "Timeslot":
        """
        Build a timeslot from a ``{"start": ..., "end": ...}`` record.

        Each bound may be a Time, an ``HH:MM`` string or a ``{hours, minutes}`` record.
        """
        try:
            start, end = value["start"], value["end"]
        except (KeyError, TypeError) as exc:
            raise InvalidTimeslotFormat(repr(value)) from exc
        return cls(_coerce_time(start), _coerce_time(end))

    @classmethod
    def parse(cls, value: str) -> "Timeslot":
        """
        Parse an ``HH:MM-HH:MM`` string.

        Raises:
            InvalidTimeslotFormat: On a malformed string or when start is after end
        """
        if not isinstance(value, str):
            raise InvalidTimeslotFormat(value)

        parts = value.split(INTERVAL_SEPARATOR)
        if len(parts) != 2:
            raise InvalidTimeslotFormat(value)

        try:
            start = Time.parse(parts[0])
            end = Time.parse(parts[1])
        except InvalidTimeFormat as exc:
            raise InvalidTimeslotFormat(value) from exc

        if start.is_after(end):
            raise InvalidTimeslotFormat(value)

        return cls(start, end)

    @property
    def duration(self) -> int:
        """Length of the slot in minutes."""
        return self.end.total_minutes - self.start.total_minutes

    def contains(self, other: "Time | Timeslot") -> bool:
        """Inclusive containment of a time or of a whole timeslot."""
        if isinstance(other, Time):
            return self.start <= other <= self.end
        return self.start <= other.start and self.end >= other.end

    def overlaps(self, other: "Timeslot") -> bool:
        """Strict overlap; slots that only touch at an endpoint do not overlap."""
        return self.start < other.end and self.end > other.start

    def compare_to(self, other: "Timeslot") -> int:
        if self < other:
            return -1
        if self > other:
            return 1
        return 0

    def is_before(self, other: "Timeslot", strict: bool = True) -> bool:
        return self < other if strict else self <= other

    def is_after(self, other: "Timeslot", strict: bool = True) -> bool:
        return self > other if strict else self >= other

    def to_datetimes(self, on: datetime | None = None) -> Tuple[DateTime, DateTime]:
        """Place both bounds on the calendar date of ``on``."""
        return self.start.to_datetime(on), self.end.to_datetime(on)

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    def format(self) -> str:
        return f"{self.start.format()}{INTERVAL_SEPARATOR}{self.end.format()}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Timeslot({self.format()})"

    @staticmethod
    def split(timeslot: "Timeslot", cut_points: Sequence[Time]) -> List["Timeslot"]:
        """
        Chop a timeslot at the given times.

        Example:
        09:00-11:00 cut at [09:30, 10:00, 10:30]
        -> [09:00-09:30, 09:30-10:00, 10:00-10:30, 10:30-11:00]

        Raises:
            InvalidTimeslotRange: If the cut points are not ascending within the slot
        """
        pieces: List[Timeslot] = []
        current = timeslot.start

        for boundary in [*cut_points, timeslot.end]:
            pieces.append(Timeslot(current, boundary))
            current = boundary

        return pieces

    @staticmethod
    def merge_timeslot_intersection(
        container: "Timeslot",
        timeslot: "Timeslot"
    ) -> Tuple["Timeslot", List["Timeslot"]]:
        """
        Carve ``timeslot`` out of ``container``.

        When one slot contains the other, the inner slot is the result and
        the parts of the outer slot before and after it are the leftovers.
        On a partial overlap the inserted slot is the result and the leftover
        is the strip of the container it does not cover.

        Example:
        container 06:00-11:00, timeslot 08:00-10:00
        -> (08:00-10:00, [06:00-08:00, 10:00-11:00])

        Returns:
            Tuple of the merged slot and the list of leftover slots

        Raises:
            TimeslotsDoNotOverlap: If the two slots share no time
        """
        if not container.overlaps(timeslot):
            raise TimeslotsDoNotOverlap(container, timeslot)

        if container.contains(timeslot) or timeslot.contains(container):
            if container.contains(timeslot):
                inner, outer = timeslot, container
            else:
                inner, outer = container, timeslot

            before = Timeslot(outer.start, inner.start)
            after = Timeslot(inner.end, outer.end)
            return inner, [piece for piece in (before, after) if piece.duration > 0]

        leftovers: List[Timeslot] = []
        if timeslot.start.is_after(container.start):
            leftovers.append(Timeslot(container.start, timeslot.start))
        if timeslot.end.is_before(container.end):
            leftovers.append(Timeslot(timeslot.end, container.end))

        return timeslot, leftovers

    @staticmethod
    def number_of_slots_in_range(timeslot_range: "Timeslot", slot_size: int) -> int:
        """
        Count how many ``slot_size`` minute slots fit in a range.

        Returns 0 when either size is not a multiple of five minutes or when
        the slot is not smaller than the range.
        """
        duration = timeslot_range.duration
        if slot_size <= 0 or slot_size % SLOT_GRANULARITY != 0:
            return 0
        if duration % SLOT_GRANULARITY != 0 or slot_size >= duration:
            return 0
        return duration // slot_size


def _coerce_time(value: Any) -> Time:
    if isinstance(value, Time):
        return value
    if isinstance(value, str):
        return Time.parse(value)
    if isinstance(value, dict):
        return Time.from_dict(value)
    raise InvalidTimeValue(f"Cannot build a time from {value!r}")


def coerce_timeslot(value: "Timeslot | str | Dict[str, Any]") -> Timeslot:
    """Accept a Timeslot, an ``HH:MM-HH:MM`` string or a ``{start, end}`` record."""
    if isinstance(value, Timeslot):
        return value
    if isinstance(value, str):
        return Timeslot.parse(value)
    return Timeslot.from_dict(value)
