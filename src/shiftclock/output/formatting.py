"""Totals and display formatting for generated weeks."""

from typing import Iterable

from shiftclock.domain.calendar import format_duration, stamp_clock, weekday_number
from shiftclock.domain.models import DailyScheduleRecord, DisplayRow, WeekTotals

# Weekday names indexed by weekday number - 1 (Monday first).
DAY_NAMES = {
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    "es": ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"],
}
DEFAULT_LOCALE = "en"


def day_name(record: DailyScheduleRecord, locale: str = DEFAULT_LOCALE) -> str:
    """Localized weekday name for a record's date.

    Raises:
        KeyError: If the locale has no day names.
    """
    return DAY_NAMES[locale][weekday_number(record.schedule_date) - 1]


def calculate_totals(records: Iterable[DailyScheduleRecord]) -> WeekTotals:
    """Sum worked minutes across records (lunch excluded on split days)."""
    return WeekTotals.from_records(list(records))


def format_record(record: DailyScheduleRecord, locale: str = DEFAULT_LOCALE) -> DisplayRow:
    """Human-readable row for one record."""
    return DisplayRow(
        date=record.schedule_date.isoformat(),
        day_name=day_name(record, locale),
        clock_in=stamp_clock(record.checkin),
        clock_out=stamp_clock(record.checkout),
        total=format_duration(record.worked_minutes),
        type=record.shift_type.value,
        raw=record,
    )


def format_for_display(
    records: Iterable[DailyScheduleRecord],
    locale: str = DEFAULT_LOCALE,
) -> list[DisplayRow]:
    """Display rows for a week of records, in the order given."""
    return [format_record(record, locale) for record in records]
