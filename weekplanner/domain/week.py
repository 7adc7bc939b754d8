"""
Week: one Day per weekday label.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .day import DAY_LABELS, Day, resolve_day_label
from .exceptions import InvalidDayFormat, UnknownDayLabel
from .options import SeriesOptions
from .series import TimeslotSeries
from .timeslot import Timeslot

WEEK_SEPARATOR = "|"


class Week:
    """
    Fixed mapping of the seven weekday labels to days.

    Reading a day that was never set creates an empty one and keeps it, so
    repeated reads return the same instance.
    """

    def __init__(
        self,
        days: Optional[Mapping[str, Day]] = None,
        options: Optional[SeriesOptions] = None
    ):
        self._options = options or SeriesOptions()
        self._days: Dict[str, Day] = {}
        for label, day in (days or {}).items():
            self.set(label, day)

    @classmethod
    def from_dict(cls, value: Mapping[str, Any], options: Optional[SeriesOptions] = None) -> "Week":
        """
        Build a week from ``{label: [timeslots]}``; missing labels get empty days.

        Timeslots may be Timeslot objects, strings or ``{start, end}`` records.
        """
        unknown = [label for label in value if label not in DAY_LABELS]
        if unknown:
            raise UnknownDayLabel(", ".join(unknown))

        week = cls(options=options)
        for label in DAY_LABELS:
            week.set(
                label,
                Day.from_descriptor({"dayOfWeek": label, "timeslots": value.get(label, [])}, options),
            )
        return week

    @classmethod
    def from_day(cls, day: Day) -> "Week":
        """Repeat the timeslots of one day on every day of the week."""
        return cls.from_dict({label: day.timeslots for label in DAY_LABELS}, day.options)

    @classmethod
    def from_timeslot_series(cls, series: TimeslotSeries) -> "Week":
        """Repeat a series on every day of the week."""
        return cls.from_dict({label: series.timeslots for label in DAY_LABELS}, series.options)

    @classmethod
    def from_string(cls, value: str, options: Optional[SeriesOptions] = None) -> "Week":
        """
        Parse seven ``|`` separated day strings.

        Raises:
            InvalidDayFormat: If the string does not hold one day string per weekday
        """
        raw_days = value.split(WEEK_SEPARATOR)
        if len(raw_days) != len(DAY_LABELS):
            raise InvalidDayFormat(value)

        week = cls(options=options)
        for raw_day in raw_days:
            day = Day.from_string(raw_day, options)
            if day.day_of_week in week._days:
                raise InvalidDayFormat(value)
            week.set(day.day_of_week, day)
        return week

    @property
    def options(self) -> SeriesOptions:
        return self._options

    def get(self, label: "str | int") -> Day:
        """Day for a label or index, created empty on first read."""
        label = resolve_day_label(label)
        day = self._days.get(label)
        if day is None:
            day = Day.from_label(label, self._options)
            self._days[label] = day
        return day

    def set(self, label: "str | int", day: Day) -> "Week":
        """
        Replace the day of a label.

        Raises:
            UnknownDayLabel: If the day belongs to another weekday
        """
        label = resolve_day_label(label)
        if day.day_of_week != label:
            raise UnknownDayLabel(f"{day.day_of_week} cannot be stored as {label}")
        self._days[label] = day
        return self

    @property
    def monday(self) -> Day:
        return self.get("monday")

    @property
    def tuesday(self) -> Day:
        return self.get("tuesday")

    @property
    def wednesday(self) -> Day:
        return self.get("wednesday")

    @property
    def thursday(self) -> Day:
        return self.get("thursday")

    @property
    def friday(self) -> Day:
        return self.get("friday")

    @property
    def saturday(self) -> Day:
        return self.get("saturday")

    @property
    def sunday(self) -> Day:
        return self.get("sunday")

    def to_tuple(self) -> Tuple[Day, ...]:
        """Days in week order, monday first."""
        return tuple(self.get(label) for label in DAY_LABELS)

    def items(self) -> List[Tuple[str, Day]]:
        return [(label, self.get(label)) for label in DAY_LABELS]

    def empty_timeslots(
        self,
        label: "str | int | None" = None,
        extend_to_limit: bool = False
    ) -> "List[Timeslot] | Dict[str, List[Timeslot]]":
        """Gaps of one day, or of every day keyed by label."""
        if label is not None:
            return self.get(label).get_empty_timeslots(extend_to_limit)
        return {
            day_label: day.get_empty_timeslots(extend_to_limit)
            for day_label, day in self.items()
        }

    def to_dict(self) -> Dict[str, List[Dict[str, Dict[str, int]]]]:
        return {label: day.to_dict()["timeslots"] for label, day in self.items()}

    def format(self) -> str:
        return WEEK_SEPARATOR.join(day.format() for day in self.to_tuple())

    def __getitem__(self, label: "str | int") -> Day:
        return self.get(label)

    def __setitem__(self, label: "str | int", day: Day) -> None:
        self.set(label, day)

    def __iter__(self):
        return iter(self.to_tuple())

    def __len__(self) -> int:
        return len(DAY_LABELS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Week):
            return NotImplemented
        return all(mine.equals(theirs) for mine, theirs in zip(self.to_tuple(), other.to_tuple()))

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Week({self.format()!r})"
