"""
Tests for the Time value.
"""

import pendulum
import pytest

from weekplanner.domain.clock import Time
from weekplanner.domain.exceptions import InvalidTimeFormat, InvalidTimeValue


class TestTimeConstruction:
    """Tests for building times."""

    def test_from_components(self):
        """Test hours and minutes are stored as total minutes."""
        t = Time.from_components(8, 30)

        assert t.total_minutes == 510
        assert t.hours == 8
        assert t.minutes == 30

    @pytest.mark.parametrize("hours, minutes", [(24, 0), (-1, 0), (0, 60), (0, -1)])
    def test_from_components_out_of_range(self, hours, minutes):
        """Test out of range components are rejected."""
        with pytest.raises(InvalidTimeValue):
            Time.from_components(hours, minutes)

    def test_from_total_minutes(self):
        """Test building from minutes since midnight."""
        assert Time.from_total_minutes(0) == Time.from_components(0, 0)
        assert Time.from_total_minutes(1439) == Time.from_components(23, 59)

    @pytest.mark.parametrize("total", [-1, 1440, 2000])
    def test_from_total_minutes_out_of_range(self, total):
        """Test total minutes outside a day are rejected."""
        with pytest.raises(InvalidTimeValue):
            Time.from_total_minutes(total)

    def test_from_dict(self):
        """Test building from a serializable record."""
        assert Time.from_dict({"hours": 7, "minutes": 5}) == Time.from_components(7, 5)
        assert Time.from_components(7, 5).to_dict() == {"hours": 7, "minutes": 5}

    def test_now_is_truncated_to_minute(self):
        """Test now() matches the clock of the current time."""
        before = pendulum.now()
        now = Time.now()
        after = pendulum.now()

        assert now in (Time.from_datetime(before), Time.from_datetime(after))


class TestTimeParsing:
    """Tests for parsing and formatting HH:MM strings."""

    @pytest.mark.parametrize("value", ["00:00", "07:05", "12:30", "23:59"])
    def test_parse_format_round_trip(self, value):
        """Test format is the inverse of parse."""
        assert Time.parse(value).format() == value
        assert Time.parse(Time.parse(value).format()) == Time.parse(value)

    def test_round_trip_every_minute(self):
        """Test parse(format(t)) == t for every minute of the day."""
        for total in range(24 * 60):
            t = Time.from_total_minutes(total)
            assert Time.parse(t.format()) == t

    @pytest.mark.parametrize(
        "value",
        ["", "8:30", "08:3", "08-30", "08:30:00", "ab:cd", "24:00", "12:60", "-1:30", "+1:30", " 8:30"],
    )
    def test_parse_rejects_malformed(self, value):
        """Test malformed or out of range strings are rejected."""
        with pytest.raises(InvalidTimeFormat, match=r"\[Time\]"):
            Time.parse(value)

    def test_str_is_zero_padded(self):
        """Test string output pads both fields."""
        assert str(Time.from_components(7, 5)) == "07:05"


class TestTimeComparison:
    """Tests for ordering times."""

    def test_ordering(self):
        """Test comparison helpers agree with operators."""
        early = Time.parse("08:00")
        late = Time.parse("09:15")

        assert early.is_before(late)
        assert late.is_after(early)
        assert early < late
        assert early.compare_to(late) < 0
        assert late.compare_to(early) > 0
        assert early.compare_to(Time.parse("08:00")) == 0
        assert early == Time.parse("08:00")


class TestTimeArithmetic:
    """Tests for cyclic clock arithmetic."""

    def test_add(self):
        """Test adding minutes."""
        assert Time.parse("08:00").add(90) == Time.parse("09:30")

    def test_add_wraps_at_midnight(self):
        """Test adding past midnight wraps around."""
        assert Time.parse("23:30").add(45) == Time.parse("00:15")
        assert Time.parse("10:00").add(24 * 60) == Time.parse("10:00")

    def test_sub(self):
        """Test subtracting minutes."""
        assert Time.parse("09:30").sub(90) == Time.parse("08:00")

    def test_sub_to_exactly_midnight_stays_zero(self):
        """Test a result of exactly zero does not wrap."""
        assert Time.parse("01:00").sub(60) == Time.parse("00:00")

    def test_sub_wraps_to_previous_day(self):
        """Test going negative wraps to the previous day's clock."""
        assert Time.parse("00:15").sub(30) == Time.parse("23:45")

    def test_arithmetic_returns_new_instance(self):
        """Test the original value is unchanged."""
        t = Time.parse("10:00")
        t.add(5)
        assert t == Time.parse("10:00")


class TestTimeCalendar:
    """Tests for placing a time on a date."""

    def test_to_datetime(self):
        """Test the clock is applied to the given date."""
        day = pendulum.datetime(2024, 11, 25, 17, 45, 12, tz="Europe/Berlin")

        result = Time.parse("09:30").to_datetime(day)

        assert result.year == 2024
        assert result.month == 11
        assert result.day == 25
        assert result.hour == 9
        assert result.minute == 30
        assert result.second == 0
