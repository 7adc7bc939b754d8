"""
Options shared by timeslot series and days.
"""

from dataclasses import dataclass, field

from .clock import Time

DEFAULT_START_LIMIT = "00:00"
DEFAULT_END_LIMIT = "23:59"


@dataclass(frozen=True)
class SeriesOptions:
    """
    Configuration for a timeslot series or a day.

    The limits bound a day: gaps are extended to them and day entries must
    lie within them.
    """
    allow_timeslot_merging: bool = True
    default_start_limit: Time = field(default_factory=lambda: Time.parse(DEFAULT_START_LIMIT))
    default_end_limit: Time = field(default_factory=lambda: Time.parse(DEFAULT_END_LIMIT))
    enforce_overlapping_check: bool = False

    def same_limits(self, other: "SeriesOptions") -> bool:
        """Check whether two option sets bound the day identically."""
        return (
            self.default_start_limit == other.default_start_limit
            and self.default_end_limit == other.default_end_limit
        )
