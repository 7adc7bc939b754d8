"""
Domain layer - Pure timeslot algebra without external I/O.
"""

from .clock import Time
from .day import DAY_LABELS, Day
from .options import SeriesOptions
from .series import TimeslotSeries
from .task import Task
from .timeslot import Timeslot
from .week import Week

__all__ = [
    "DAY_LABELS",
    "Day",
    "SeriesOptions",
    "Task",
    "Time",
    "Timeslot",
    "TimeslotSeries",
    "Week",
]
