"""
Day: the timeslots of one weekday, each optionally carrying a task.

A day starts out with free (unassigned) ranges. Inserting a task into part
of a free range splits that range: the task gets the requested slot and the
rest of the range stays free.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .exceptions import (
    InvalidDayFormat,
    NoContainingFreeTimeslot,
    OverlappingTimeslots,
    TimeslotOutOfLimit,
    UnknownDayLabel,
    UnknownTimeslot,
)
from .options import SeriesOptions
from .series import TimeslotSeries, compute_gaps
from .task import Task
from .timeslot import Timeslot, coerce_timeslot

logger = logging.getLogger(__name__)

DAY_LABELS: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
DAY_SEPARATOR = ";"


def resolve_day_label(value: "str | int") -> str:
    """
    Normalize a day label or a zero-based day index to its label.

    Raises:
        UnknownDayLabel: If the value names no weekday
    """
    if isinstance(value, bool):
        raise UnknownDayLabel(value)
    if isinstance(value, int):
        if 0 <= value < len(DAY_LABELS):
            return DAY_LABELS[value]
        raise UnknownDayLabel(value)
    if isinstance(value, str) and value.lower() in DAY_LABELS:
        return value.lower()
    raise UnknownDayLabel(value)


class Day:
    """
    Mapping of timeslots to optional tasks for one weekday.

    Invariant: every timeslot lies within the day limits of the options.
    Timeslots never overlap when built through the parsing constructors,
    ``insert`` or an overlap-enforcing ``set``.
    """

    def __init__(
        self,
        day_of_week: "str | int" = DAY_LABELS[0],
        options: Optional[SeriesOptions] = None
    ):
        self._day_of_week = resolve_day_label(day_of_week)
        self._options = options or SeriesOptions()
        self._entries: Dict[str, Optional[Task[Any]]] = {}
        self._timeslots: Dict[str, Timeslot] = {}

    @classmethod
    def from_label(cls, day_of_week: "str | int", options: Optional[SeriesOptions] = None) -> "Day":
        """Empty day for a label (``"monday"``) or index (``0``)."""
        return cls(day_of_week, options)

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any], options: Optional[SeriesOptions] = None) -> "Day":
        """
        Build a day of free timeslots from a ``{"dayOfWeek": ..., "timeslots": [...]}`` record.

        Timeslots may be Timeslot objects, strings or ``{start, end}`` records.

        Raises:
            OverlappingTimeslots: If two timeslots overlap
            TimeslotOutOfLimit: If a timeslot lies outside the day limits
        """
        day_of_week = descriptor.get("dayOfWeek", descriptor.get("day_of_week", DAY_LABELS[0]))
        timeslots = [coerce_timeslot(value) for value in descriptor.get("timeslots", [])]

        day = cls(day_of_week, options)
        for index, timeslot in enumerate(timeslots):
            for other in timeslots[index + 1:]:
                if other.overlaps(timeslot):
                    raise OverlappingTimeslots(other, timeslot)
            day._store(timeslot, None)
        return day

    @classmethod
    def from_copy(cls, other: "Day", options: Optional[SeriesOptions] = None) -> "Day":
        """
        Copy another day, sharing its task references.

        Passing ``options`` re-validates every timeslot against the new limits.
        """
        day = cls(other.day_of_week, options or other.options)
        for timeslot, task in other.entries():
            day._store(timeslot, task)
        return day

    @classmethod
    def from_timeslot_series(
        cls,
        series: TimeslotSeries,
        day_of_week: "str | int",
        options: Optional[SeriesOptions] = None
    ) -> "Day":
        """Day whose free timeslots are the members of ``series``."""
        return cls.from_descriptor(
            {"dayOfWeek": day_of_week, "timeslots": series.timeslots},
            options or series.options,
        )

    @classmethod
    def from_string(cls, value: str, options: Optional[SeriesOptions] = None) -> "Day":
        """
        Parse ``"<dayIndex>;<slot>,<slot>,..."``, e.g. ``"1;08:00-12:00,13:00-17:00"``.

        Raises:
            InvalidDayFormat: If the separator or the day index is malformed
            InvalidTimeslotFormat: If a timeslot is malformed
            OverlappingTimeslots: If two timeslots overlap
            TimeslotOutOfLimit: If a timeslot lies outside the day limits
        """
        if not isinstance(value, str) or value.count(DAY_SEPARATOR) != 1:
            raise InvalidDayFormat(value)

        raw_index, raw_timeslots = value.split(DAY_SEPARATOR)
        if not (raw_index.isascii() and raw_index.isdigit()):
            raise InvalidDayFormat(value)

        try:
            day_of_week = resolve_day_label(int(raw_index))
        except UnknownDayLabel as exc:
            raise InvalidDayFormat(value) from exc

        series = TimeslotSeries.from_string(raw_timeslots)
        return cls.from_descriptor({"dayOfWeek": day_of_week, "timeslots": series.timeslots}, options)

    @property
    def day_of_week(self) -> str:
        return self._day_of_week

    @property
    def day_index(self) -> int:
        return DAY_LABELS.index(self._day_of_week)

    @property
    def options(self) -> SeriesOptions:
        return self._options

    @property
    def timeslots(self) -> List[Timeslot]:
        """All timeslots, assigned or not, sorted by (start, end)."""
        return sorted(self._timeslots.values())

    @property
    def free_timeslots(self) -> List[Timeslot]:
        """Timeslots without a task, sorted by (start, end)."""
        return [timeslot for timeslot, task in self.entries() if task is None]

    @property
    def tasks(self) -> List[Task[Any]]:
        return [task for _, task in self.entries() if task is not None]

    @property
    def timeslot_series(self) -> TimeslotSeries:
        """Series view of all timeslots, regardless of task assignment."""
        return TimeslotSeries(self.timeslots, options=self._options)

    def entries(self) -> List[Tuple[Timeslot, Optional[Task[Any]]]]:
        return [(timeslot, self._entries[timeslot.format()]) for timeslot in self.timeslots]

    def get(self, timeslot: "Timeslot | str") -> Optional[Task[Any]]:
        """Task assigned to a timeslot, None when free or absent."""
        return self._entries.get(coerce_timeslot(timeslot).format())

    def has(self, timeslot: "Timeslot | str") -> bool:
        return coerce_timeslot(timeslot).format() in self._entries

    def set(self, timeslot: "Timeslot | str", task: Optional[Task[Any]] = None) -> "Day":
        """
        Assign a task (or None) directly to a timeslot.

        Unlike ``insert`` no free range is split. Sibling overlap is only
        rejected when ``enforce_overlapping_check`` is enabled.

        Raises:
            TimeslotOutOfLimit: If the timeslot lies outside the day limits
            OverlappingTimeslots: If enforcement is on and a sibling overlaps
        """
        timeslot = coerce_timeslot(timeslot)

        if self._options.enforce_overlapping_check:
            for sibling in self.timeslots:
                if sibling != timeslot and sibling.overlaps(timeslot):
                    raise OverlappingTimeslots(timeslot, sibling)

        self._store(timeslot, task)
        return self

    def insert(self, timeslot: "Timeslot | str", task: Task[Any]) -> Timeslot:
        """
        Schedule a task into part of a free timeslot.

        The free timeslot containing the request is removed, the requested
        slot gets the task and the uncovered remainder is added back as free.

        Example:
        Free 12:00-14:00, insert 12:00-13:00
        -> 12:00-13:00 -> task, 13:00-14:00 -> free

        Returns:
            The timeslot the task was assigned to

        Raises:
            NoContainingFreeTimeslot: If no free timeslot contains the request
        """
        timeslot = coerce_timeslot(timeslot)

        container = next(
            (
                candidate for candidate, assigned in self.entries()
                if assigned is None and candidate.contains(timeslot)
            ),
            None,
        )
        if container is None:
            raise NoContainingFreeTimeslot(timeslot, self._day_of_week)

        merged, leftovers = Timeslot.merge_timeslot_intersection(container, timeslot)

        self._remove(container)
        self._store(merged, task)
        for leftover in leftovers:
            self._store(leftover, None)

        logger.debug(
            "Inserted %s into %s on %s, leftover: %s",
            merged,
            container,
            self._day_of_week,
            ", ".join(str(leftover) for leftover in leftovers) or "none",
        )
        return merged

    def release(self, timeslot: "Timeslot | str") -> Timeslot:
        """
        Unassign the task of a timeslot.

        With ``allow_timeslot_merging`` the freed slot is joined with the whole
        chain of free timeslots touching it, undoing the splits made by
        ``insert``. Free timeslots outside that chain are left as they are.

        Returns:
            The resulting free timeslot

        Raises:
            UnknownTimeslot: If the day has no such timeslot
        """
        timeslot = coerce_timeslot(timeslot)
        if not self.has(timeslot):
            raise UnknownTimeslot(timeslot, self._day_of_week)

        self._entries[timeslot.format()] = None
        if not self._options.allow_timeslot_merging:
            return timeslot

        merged = timeslot
        neighbour = self._free_neighbour(merged)
        while neighbour is not None:
            self._remove(neighbour)
            self._remove(merged)
            merged = Timeslot(min(neighbour.start, merged.start), max(neighbour.end, merged.end))
            self._store(merged, None)
            neighbour = self._free_neighbour(merged)

        if merged != timeslot:
            logger.debug("Released %s on %s, merged into %s", timeslot, self._day_of_week, merged)
        return merged

    def delete(self, timeslot: "Timeslot | str") -> bool:
        """Remove a timeslot, returning whether it was present."""
        timeslot = coerce_timeslot(timeslot)
        if not self.has(timeslot):
            return False
        self._remove(timeslot)
        return True

    def get_empty_timeslots(self, extend_to_limit: bool = False) -> List[Timeslot]:
        """
        Ranges of the day covered by no timeslot, assigned or not.

        Raises:
            EmptySeries: If limits are requested on a day without timeslots
        """
        return compute_gaps(self.timeslots, self._options, extend_to_limit)

    def compare_to(self, other: "Day") -> int:
        """Order days by their position in the week."""
        return self.day_index - other.day_index

    def is_after(self, other: "Day") -> bool:
        return self.compare_to(other) > 0

    def equals(self, other: "Day") -> bool:
        """
        Same weekday and timeslots, same limits and the same tasks by id.

        ``allow_timeslot_merging`` and the overlap switch are not compared.
        """
        return (
            self.format() == other.format()
            and self._options.same_limits(other.options)
            and Counter(task.id for task in self.tasks) == Counter(task.id for task in other.tasks)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dayOfWeek": self._day_of_week,
            "timeslots": [timeslot.to_dict() for timeslot in self.timeslots],
        }

    def format(self, include_day: bool = True) -> str:
        timeslots = self.timeslot_series.format()
        if not include_day:
            return timeslots
        return self.format_string(self._day_of_week, timeslots)

    @staticmethod
    def format_string(day: "str | int", timeslots: str) -> str:
        """Join a day label or index with a series string: ``"6;06:30-07:30"``."""
        day_index = DAY_LABELS.index(resolve_day_label(day))
        return f"{day_index}{DAY_SEPARATOR}{timeslots}"

    def _store(self, timeslot: Timeslot, task: Optional[Task[Any]]) -> None:
        self._check_limits(timeslot)
        key = timeslot.format()
        self._timeslots[key] = timeslot
        self._entries[key] = task

    def _free_neighbour(self, timeslot: Timeslot) -> Optional[Timeslot]:
        """First free timeslot other than ``timeslot`` sharing one of its endpoints."""
        for candidate in self.free_timeslots:
            if candidate == timeslot:
                continue
            if candidate.end == timeslot.start or candidate.start == timeslot.end:
                return candidate
        return None

    def _remove(self, timeslot: Timeslot) -> None:
        key = timeslot.format()
        del self._timeslots[key]
        del self._entries[key]

    def _check_limits(self, timeslot: Timeslot) -> None:
        start_limit = self._options.default_start_limit
        end_limit = self._options.default_end_limit
        if timeslot.start.is_before(start_limit) or timeslot.end.is_after(end_limit):
            raise TimeslotOutOfLimit(timeslot, start_limit, end_limit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Day):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # mutable

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Timeslot]:
        return iter(self.timeslots)

    def __contains__(self, timeslot: object) -> bool:
        if not isinstance(timeslot, (Timeslot, str)):
            return False
        return self.has(timeslot)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Day({self.format()!r})"

