"""Tests for calendar arithmetic."""

from datetime import date, time

import pytest

from shiftclock.domain.calendar import (
    format_duration,
    minutes_to_hhmm,
    parse_date,
    parse_time_of_day,
    stamp,
    stamp_clock,
    stamp_minutes,
    time_to_minutes,
    week_dates,
    weekday_number,
)


class TestWeekDates:
    """Tests for week_dates."""

    def test_seven_consecutive_dates(self):
        """A week is seven days starting at week_start."""
        dates = week_dates(date(2025, 1, 6))
        assert len(dates) == 7
        assert dates[0] == date(2025, 1, 6)
        assert dates[-1] == date(2025, 1, 12)

    def test_crosses_month_boundary(self):
        """Weeks spanning two months keep going day by day."""
        dates = week_dates(date(2025, 3, 31))
        assert dates[1] == date(2025, 4, 1)

    def test_crosses_year_boundary(self):
        """Weeks spanning New Year keep going day by day."""
        dates = week_dates(date(2024, 12, 30))
        assert dates[2] == date(2025, 1, 1)
        assert dates[-1] == date(2025, 1, 5)


class TestWeekdayNumber:
    """Tests for weekday_number."""

    def test_monday_is_one(self):
        """2025-01-06 is a Monday."""
        assert weekday_number(date(2025, 1, 6)) == 1

    def test_sunday_is_seven(self):
        """2025-01-12 is a Sunday."""
        assert weekday_number(date(2025, 1, 12)) == 7

    def test_week_is_monday_through_sunday(self):
        """Every week_dates week numbers 1..7 in order."""
        numbers = [weekday_number(d) for d in week_dates(date(2024, 2, 26))]
        assert numbers == [1, 2, 3, 4, 5, 6, 7]

    def test_matches_isoweekday(self):
        """Agrees with the standard ISO weekday across a leap year."""
        d = date(2024, 1, 1)
        for offset in range(366):
            current = date.fromordinal(d.toordinal() + offset)
            assert weekday_number(current) == current.isoweekday()


class TestParsing:
    """Tests for date and time parsing."""

    def test_parse_date(self):
        assert parse_date("2025-01-06") == date(2025, 1, 6)

    def test_parse_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("06/01/2025")

    def test_parse_time_of_day(self):
        assert parse_time_of_day("07:30") == time(7, 30)

    def test_parse_time_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            parse_time_of_day("25:00")


class TestStamps:
    """Tests for minute and stamp conversions."""

    def test_time_to_minutes(self):
        assert time_to_minutes(time(14, 45)) == 885

    def test_minutes_to_hhmm_pads(self):
        assert minutes_to_hhmm(425) == "07:05"

    def test_minutes_to_hhmm_does_not_wrap(self):
        """Times past midnight keep counting hours."""
        assert minutes_to_hhmm(24 * 60 + 15) == "24:15"

    def test_stamp_shape(self):
        """Stamps are local, second resolution, with no zone."""
        assert stamp(date(2025, 1, 6), 425) == "2025-01-06T07:05:00"

    def test_stamp_clock_and_minutes(self):
        value = "2025-01-06T15:42:00"
        assert stamp_clock(value) == "15:42"
        assert stamp_minutes(value) == 942

    def test_format_duration(self):
        assert format_duration(2400) == "40h 0m"
        assert format_duration(487) == "8h 7m"
        assert format_duration(0) == "0h 0m"
