"""
TimeslotSeries: the occupied ranges of one day.

Members are keyed by their canonical ``HH:MM-HH:MM`` string so identical
ranges collapse, and are always exposed sorted by (start, end).
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from .clock import Time
from .exceptions import EmptySeries, OverlappingTimeslots
from .options import SeriesOptions
from .timeslot import Timeslot, coerce_timeslot

SERIES_SEPARATOR = ","


class TimeslotSeries:
    """
    Ordered set of timeslots with optional overlap enforcement.

    The parse path always rejects overlaps; ``set`` rejects them only when
    ``enforce_overlapping_check`` is enabled in the options.
    """

    def __init__(
        self,
        timeslots: Iterable[Timeslot] = (),
        options: Optional[SeriesOptions] = None
    ):
        self._options = options or SeriesOptions()
        self._timeslots: Dict[str, Timeslot] = {}
        for timeslot in timeslots:
            self._timeslots[timeslot.format()] = timeslot

    @classmethod
    def from_string(cls, value: str, options: Optional[SeriesOptions] = None) -> "TimeslotSeries":
        """
        Parse a comma separated list of timeslots.

        An empty string yields an empty series.

        Raises:
            InvalidTimeslotFormat: If a segment is not a valid timeslot
            OverlappingTimeslots: If any two segments overlap
        """
        if value == "":
            return cls(options=options)

        ranges = [Timeslot.parse(raw) for raw in value.split(SERIES_SEPARATOR)]
        _ensure_no_overlap(ranges)

        return cls(sorted(ranges), options=options)

    @classmethod
    def from_iterable(
        cls,
        values: Iterable["Timeslot | str | Dict[str, Any]"],
        options: Optional[SeriesOptions] = None
    ) -> "TimeslotSeries":
        """Build a series from timeslots, timeslot strings or ``{start, end}`` records."""
        return cls([coerce_timeslot(value) for value in values], options=options)

    @classmethod
    def from_dict(cls, value: Dict[str, Any], options: Optional[SeriesOptions] = None) -> "TimeslotSeries":
        """Build a series from a ``{"timeslots": [...]}`` record."""
        return cls.from_iterable(value.get("timeslots", []), options=options)

    @property
    def options(self) -> SeriesOptions:
        return self._options

    @property
    def timeslots(self) -> List[Timeslot]:
        """Members sorted by (start, end)."""
        return sorted(self._timeslots.values())

    @property
    def first(self) -> Timeslot:
        if not self._timeslots:
            raise EmptySeries("first timeslot")
        return self.timeslots[0]

    @property
    def last(self) -> Timeslot:
        if not self._timeslots:
            raise EmptySeries("last timeslot")
        return self.timeslots[-1]

    def set(self, timeslot: "Timeslot | str") -> "TimeslotSeries":
        """
        Add a timeslot to the series.

        Raises:
            OverlappingTimeslots: If enforcement is on and the slot overlaps a member
        """
        timeslot = coerce_timeslot(timeslot)

        if self._options.enforce_overlapping_check:
            overlapped = self.find_overlapping(timeslot)
            if overlapped is not None:
                raise OverlappingTimeslots(timeslot, overlapped)

        self._timeslots[timeslot.format()] = timeslot
        return self

    def has(self, timeslot: "Timeslot | str") -> bool:
        return _key(timeslot) in self._timeslots

    def delete(self, timeslot: "Timeslot | str") -> bool:
        """Remove a member, returning whether it was present."""
        return self._timeslots.pop(_key(timeslot), None) is not None

    def replace(self, old: "Timeslot | str", new: "Timeslot | str") -> "TimeslotSeries":
        """Swap ``old`` for ``new``; no-op when ``old`` is absent or ``new`` already present."""
        if not self.has(old) or self.has(new):
            return self
        removed = self._timeslots.pop(_key(old))
        try:
            return self.set(new)
        except OverlappingTimeslots:
            self._timeslots[removed.format()] = removed
            raise

    def find_overlapping(self, timeslot: Timeslot) -> Optional[Timeslot]:
        for member in self.timeslots:
            if member.overlaps(timeslot):
                return member
        return None

    def overlaps_with(self, timeslot: "Timeslot | str") -> bool:
        """Check if any member overlaps the given slot."""
        return self.find_overlapping(coerce_timeslot(timeslot)) is not None

    def contains(self, value: "Time | Timeslot", extract: bool = False) -> "bool | Timeslot | None":
        """
        Look for a member containing a time or a timeslot.

        Args:
            value: Time or Timeslot to look for
            extract: Return the containing member (or None) instead of a bool

        Returns:
            The first containing member when ``extract`` is set, otherwise a bool
        """
        found = next((member for member in self.timeslots if member.contains(value)), None)
        if extract:
            return found
        return found is not None

    def get_empty_timeslots(self, extend_to_limit: bool = False) -> List[Timeslot]:
        """
        Compute the uncovered ranges between members.

        Example:
        Members: [06:30-07:30, 08:30-10:30]
        Result: [07:30-08:30]
        With limits 00:00/23:59: [00:00-06:30, 07:30-08:30, 10:30-23:59]

        Touching members leave no gap.

        Raises:
            EmptySeries: If limits are requested on an empty series
        """
        return compute_gaps(self.timeslots, self._options, extend_to_limit)

    def copy(self) -> "TimeslotSeries":
        return TimeslotSeries(self._timeslots.values(), options=self._options)

    def to_dict(self) -> Dict[str, List[Dict[str, Dict[str, int]]]]:
        return {"timeslots": [timeslot.to_dict() for timeslot in self.timeslots]}

    def format(self) -> str:
        return SERIES_SEPARATOR.join(timeslot.format() for timeslot in self.timeslots)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"TimeslotSeries({self.format()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeslotSeries):
            return NotImplemented
        return self.format() == other.format()

    __hash__ = None  # mutable

    def __len__(self) -> int:
        return len(self._timeslots)

    def __iter__(self) -> Iterator[Timeslot]:
        return iter(self.timeslots)

    def __contains__(self, timeslot: object) -> bool:
        if not isinstance(timeslot, (Timeslot, str)):
            return False
        return self.has(timeslot)


def compute_gaps(
    sorted_timeslots: List[Timeslot],
    options: SeriesOptions,
    extend_to_limit: bool = False
) -> List[Timeslot]:
    """
    Gaps between consecutive sorted timeslots, optionally extended to the limits.

    Shared by series and days so both compute gaps the same way.
    """
    if not sorted_timeslots:
        if extend_to_limit:
            raise EmptySeries("empty timeslots up to the day limits")
        return []

    gaps: List[Timeslot] = []

    if extend_to_limit:
        first_start = sorted_timeslots[0].start
        if options.default_start_limit < first_start:
            gaps.append(Timeslot(options.default_start_limit, first_start))

    covered_until = sorted_timeslots[0].end
    for following in sorted_timeslots[1:]:
        if covered_until < following.start:
            gaps.append(Timeslot(covered_until, following.start))
        covered_until = max(covered_until, following.end)

    if extend_to_limit and covered_until < options.default_end_limit:
        gaps.append(Timeslot(covered_until, options.default_end_limit))

    return gaps


def _ensure_no_overlap(ranges: List[Timeslot]) -> None:
    for index, timeslot in enumerate(ranges):
        for other in ranges[index + 1:]:
            if other.overlaps(timeslot):
                raise OverlappingTimeslots(other, timeslot)


def _key(timeslot: "Timeslot | str") -> str:
    if isinstance(timeslot, Timeslot):
        return timeslot.format()
    return timeslot
