"""
Domain-specific exception hierarchy for the week planner.
"""

TIME_FORMAT = "[0 <= HH < 24, 0 <= MM < 60] HH:MM"
TIMESLOT_FORMAT = f"{TIME_FORMAT}-{TIME_FORMAT}"
SERIES_FORMAT = f"{TIMESLOT_FORMAT},{TIMESLOT_FORMAT},..."
DAY_FORMAT = f"<day index 0-6>;{SERIES_FORMAT}"


def format_message(kind: str, expected: str, provided: object | None = None) -> str:
    """Build the standard "provided string does not match" message."""
    message = f"[{kind}]: Provided string does not meet the required format.\n[Format]: {expected}"
    if provided is not None:
        message += f"\n[Provided]: {provided}"
    return message


class PlannerError(Exception):
    """Base class for all week planner errors."""


class InvalidTimeValue(PlannerError, ValueError):
    """Raised when hours, minutes or total minutes are out of range."""


class InvalidTimeFormat(PlannerError, ValueError):
    """Raised when a string cannot be parsed as HH:MM."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(format_message("Time", TIME_FORMAT, value))


class InvalidTimeslotRange(PlannerError, ValueError):
    """Raised when a timeslot would start after it ends."""

    def __init__(self, start: object, end: object):
        self.start = start
        self.end = end
        super().__init__(f"Invalid timeslot range, start {start} cannot be after end {end}")


class InvalidTimeslotFormat(PlannerError, ValueError):
    """Raised when a string cannot be parsed as HH:MM-HH:MM."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(format_message("Timeslot", TIMESLOT_FORMAT, value))


class TimeslotsDoNotOverlap(PlannerError, ValueError):
    """Raised when merging two timeslots that share no time."""

    def __init__(self, container: object, timeslot: object):
        self.container = container
        self.timeslot = timeslot
        super().__init__(f"Cannot merge timeslots that do not overlap: {container} and {timeslot}")


class OverlappingTimeslots(PlannerError, ValueError):
    """Raised when a series or day would hold two overlapping timeslots."""

    def __init__(self, timeslot: object, existing: object):
        self.timeslot = timeslot
        self.existing = existing
        super().__init__(f"Cannot add {timeslot}, it overlaps with {existing}")


class TimeslotOutOfLimit(PlannerError, ValueError):
    """Raised when a timeslot falls outside the configured day limits."""

    def __init__(self, timeslot: object, start_limit: object, end_limit: object):
        self.timeslot = timeslot
        self.start_limit = start_limit
        self.end_limit = end_limit
        super().__init__(
            f"Timeslot {timeslot} is outside of the day limits {start_limit}-{end_limit}"
        )


class InvalidDayFormat(PlannerError, ValueError):
    """Raised when a string cannot be parsed as a day."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(format_message("Day", DAY_FORMAT, value))


class NoContainingFreeTimeslot(PlannerError, LookupError):
    """Raised when no unassigned timeslot can hold the requested one."""

    def __init__(self, timeslot: object, day: str | None = None):
        self.timeslot = timeslot
        self.day = day
        where = f" on {day}" if day else ""
        super().__init__(
            f"Cannot insert {timeslot}{where}. There is no free timeslot that can contain it."
        )


class UnknownTimeslot(PlannerError, LookupError):
    """Raised when a day does not hold the requested timeslot."""

    def __init__(self, timeslot: object, day: str | None = None):
        self.timeslot = timeslot
        self.day = day
        where = f" on {day}" if day else ""
        super().__init__(f"Timeslot {timeslot} does not exist{where}")


class UnknownDayLabel(PlannerError, LookupError):
    """Raised for a day label or index outside the seven week days."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Unknown day '{value}'. Use one of monday..sunday or an index between 0 and 6."
        )


class EmptySeries(PlannerError, LookupError):
    """Raised when a series or day has no timeslot to anchor an operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot compute {operation}: the timeslot series is empty")
