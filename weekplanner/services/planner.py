"""
Application service for scheduling tasks into a week.

The service builds a ``Week`` from configuration and delegates every range
operation to the domain layer. This keeps the CLI thin and lets tests drive
scheduling without touching YAML or the terminal.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..config import PlannerConfig
from ..domain.day import DAY_LABELS, Day
from ..domain.exceptions import NoContainingFreeTimeslot
from ..domain.series import TimeslotSeries
from ..domain.task import Task
from ..domain.timeslot import Timeslot, coerce_timeslot
from ..domain.week import Week

logger = logging.getLogger(__name__)


class PlannerService:
    """
    Orchestrates task scheduling over the days of a week.
    """

    def __init__(self, week: Week) -> None:
        self._week = week

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "PlannerService":
        return cls(build_week(config))

    @property
    def week(self) -> Week:
        return self._week

    def schedule(
        self,
        label: str | int,
        timeslot: Timeslot | str,
        data: Any,
        *,
        name: str = "",
    ) -> Task[Any]:
        """
        Wrap ``data`` in a task and insert it into a free range of a day.

        Raises:
            NoContainingFreeTimeslot: If no free range of the day contains the slot
        """
        day = self._week.get(label)
        task = Task(data=data, name=name)
        assigned = day.insert(timeslot, task)
        logger.info("Scheduled task %s at %s on %s", task, assigned, day.day_of_week)
        return task

    def unschedule(self, label: str | int, timeslot: Timeslot | str) -> Timeslot:
        """Free a booked slot again; returns the resulting free range."""
        day = self._week.get(label)
        freed = day.release(timeslot)
        logger.info("Released %s on %s", coerce_timeslot(timeslot), day.day_of_week)
        return freed

    def available_ranges(self, label: str | int, min_duration_minutes: int = 0) -> List[Timeslot]:
        """Free ranges of a day lasting at least ``min_duration_minutes``."""
        return [
            timeslot for timeslot in self._week.get(label).free_timeslots
            if timeslot.duration >= min_duration_minutes
        ]

    def book_first_available(
        self,
        label: str | int,
        duration_minutes: int,
        data: Any,
        *,
        name: str = "",
    ) -> Timeslot:
        """
        Book ``duration_minutes`` at the start of the earliest free range long enough.

        Returns:
            The booked timeslot

        Raises:
            ValueError: If the duration is not positive
            NoContainingFreeTimeslot: If no free range is long enough
        """
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be greater than zero")

        day = self._week.get(label)
        candidates = self.available_ranges(label, duration_minutes)
        if not candidates:
            raise NoContainingFreeTimeslot(f"{duration_minutes} minutes", day.day_of_week)

        start = candidates[0].start
        booked = Timeslot(start, start.add(duration_minutes))
        self.schedule(label, booked, data, name=name)
        return booked

    def free_time(
        self,
        label: str | int | None = None,
        extend_to_limit: bool = False,
    ) -> List[Timeslot] | Dict[str, List[Timeslot]]:
        """Uncovered ranges of one day, or of every day keyed by label."""
        return self._week.empty_timeslots(label, extend_to_limit)

    def slot_capacity(self, label: str | int, slot_size: int) -> int:
        """How many ``slot_size`` minute slots fit into the free ranges of a day."""
        return sum(
            Timeslot.number_of_slots_in_range(timeslot, slot_size)
            for timeslot in self._week.get(label).free_timeslots
        )


def build_week(config: PlannerConfig) -> Week:
    """
    Build the configured week: the daily pattern on every day, with per-day overrides.
    """
    options = config.limits.to_series_options()
    week = Week(options=options)

    for label in DAY_LABELS:
        series = TimeslotSeries.from_string(config.pattern_for(label), options)
        week.set(label, Day.from_timeslot_series(series, label, options))

    return week


def describe_day(day: Day) -> List[Dict[str, Optional[str]]]:
    """Rows of a day for display: range, duration and task name."""
    return [
        {
            "timeslot": timeslot.format(),
            "duration": str(timeslot.duration),
            "task": str(task) if task is not None else None,
        }
        for timeslot, task in day.entries()
    ]
