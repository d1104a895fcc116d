"""Calendar arithmetic for schedule weeks.

Weeks are Monday-first and weekdays are numbered Monday=1 through Sunday=7.
Weekday numbers are derived from the proleptic Gregorian day count, so the
result never depends on host locale or time zone settings.
"""

from datetime import date, datetime, time, timedelta

DAYS_PER_WEEK = 7
MINUTES_PER_HOUR = 60


def week_dates(week_start: date) -> list[date]:
    """Seven consecutive dates starting exactly at week_start."""
    return [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def weekday_number(d: date) -> int:
    """Weekday number for a date, Monday=1 ... Sunday=7."""
    # Ordinal 1 (0001-01-01) falls on a Monday.
    return (d.toordinal() - 1) % DAYS_PER_WEEK + 1


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid calendar date.
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse an HH:MM string into a time.

    Raises:
        ValueError: If the string is not a valid 24-hour time of day.
    """
    return datetime.strptime(value, "%H:%M").time()


def time_to_minutes(t: time) -> int:
    """Minutes from midnight for a time of day."""
    return t.hour * MINUTES_PER_HOUR + t.minute


def minutes_to_hhmm(total_minutes: int) -> str:
    """Format minutes from midnight as HH:MM.

    Values past midnight are not wrapped, matching the wall-clock stamps
    produced for a single work day.
    """
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{minutes:02d}"


def stamp(d: date, total_minutes: int) -> str:
    """Local datetime stamp (second resolution) for a date and minute offset."""
    return f"{d.isoformat()}T{minutes_to_hhmm(total_minutes)}:00"


def stamp_clock(value: str) -> str:
    """HH:MM part of a local datetime stamp."""
    return value.split("T", 1)[1][:5]


def stamp_minutes(value: str) -> int:
    """Minutes from midnight encoded in a local datetime stamp."""
    hours, minutes = value.split("T", 1)[1].split(":")[:2]
    return int(hours) * MINUTES_PER_HOUR + int(minutes)


def format_duration(total_minutes: int) -> str:
    """Format a duration as "<h>h <m>m"."""
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return f"{hours}h {minutes}m"
