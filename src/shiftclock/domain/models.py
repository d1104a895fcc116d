"""Domain models for the attendance scheduling system.

This module contains the core data structures used throughout the
scheduler: the configuration supplied by the configuration store, the
date-scoped exceptions, and the per-day records and weekly totals produced
by a generation run.
"""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Optional

from shiftclock.domain.calendar import (
    MINUTES_PER_HOUR,
    format_duration,
    stamp_minutes,
    time_to_minutes,
)


@dataclass(frozen=True)
class TimeWindow:
    """A window of wall-clock times from which a random time is drawn.

    Attributes:
        start: Earliest time in the window (inclusive).
        end: Latest time in the window (inclusive).
    """

    start: time
    end: time

    @property
    def start_minutes(self) -> int:
        """Minutes from midnight when the window opens."""
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        """Minutes from midnight when the window closes."""
        return time_to_minutes(self.end)

    @property
    def is_degenerate(self) -> bool:
        """True if the window is zero-length or inverted."""
        return self.end_minutes <= self.start_minutes

    def __repr__(self) -> str:
        return f"TimeWindow({self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')})"


@dataclass(frozen=True)
class LunchDuration:
    """Range for the length of a split day's lunch break, in minutes."""

    min_minutes: int
    max_minutes: int


@dataclass(frozen=True)
class ScheduleConfig:
    """Configuration for one generation run.

    Attributes:
        weekly_hours: Default target hours for a full configured week.
        work_days: Weekday numbers (Monday=1 ... Sunday=7) normally worked.
        clock_in_range: Window from which clock-in is drawn.
        lunch_start_range: Window from which a split day's lunch start is drawn.
        lunch_duration: Range for a split day's lunch length.
        split_shift_days: Weekday numbers that get a lunch break by default.
        random_variance: Extra random offset added to clock-in, in minutes.
    """

    weekly_hours: float = 40.0
    work_days: frozenset[int] = frozenset({1, 2, 3, 4, 5})
    clock_in_range: TimeWindow = field(
        default_factory=lambda: TimeWindow(time(7, 0), time(7, 30))
    )
    lunch_start_range: TimeWindow = field(
        default_factory=lambda: TimeWindow(time(14, 0), time(15, 0))
    )
    lunch_duration: LunchDuration = field(
        default_factory=lambda: LunchDuration(min_minutes=45, max_minutes=60)
    )
    split_shift_days: frozenset[int] = frozenset({1, 2, 3})
    random_variance: int = 5

    @property
    def configured_work_day_count(self) -> int:
        """Number of weekdays in a normal configured week."""
        return len(self.work_days)


class ExceptionType(Enum):
    """Kinds of date-scoped exceptions.

    Every type except SPECIAL_WEEK removes the matched dates from work.
    SPECIAL_WEEK only overrides the weekly hours and split days of its week.
    """

    HOLIDAY = "holiday"
    VACATION = "vacation"
    SICK = "sick"
    OTHER = "other"
    SPECIAL_WEEK = "special_week"

    @property
    def excludes_work(self) -> bool:
        """Whether a match of this type makes the date a non-work day."""
        return self is not ExceptionType.SPECIAL_WEEK


@dataclass(frozen=True)
class ScheduleException:
    """A holiday, absence, or special-week record.

    Attributes:
        start_date: Date the exception applies from.
        exception_type: Kind of exception.
        end_date: Last date of a ranged exception (inclusive), if any.
        reason: Free-text note from the exceptions store.
        weekly_hours: Override weekly hours (special weeks only).
        split_days: Override split-shift weekdays (special weeks only).
            None inherits the global setting; an empty set means no split
            days that week.
    """

    start_date: date
    exception_type: ExceptionType
    end_date: Optional[date] = None
    reason: str = ""
    weekly_hours: Optional[float] = None
    split_days: Optional[frozenset[int]] = None

    @property
    def is_special_week(self) -> bool:
        return self.exception_type is ExceptionType.SPECIAL_WEEK

    def covers(self, d: date) -> bool:
        """Check if a date falls on or within this exception's range."""
        if d == self.start_date:
            return True
        if self.end_date is not None:
            return self.start_date <= d <= self.end_date
        return False


@dataclass(frozen=True)
class WeekOverrides:
    """Weekly hours and split days that apply to one generated week.

    Attributes:
        weekly_hours: Hours target for a full configured week.
        split_shift_days: Weekday numbers with a lunch break this week.
        special_week: The special-week exception that supplied the values,
            or None when the global configuration applies.
    """

    weekly_hours: float
    split_shift_days: frozenset[int]
    special_week: Optional[ScheduleException] = None

    @property
    def is_special(self) -> bool:
        return self.special_week is not None


class ShiftType(Enum):
    """Shape of a worked day."""

    SPLIT = "split"  # Two clocked segments around an unpaid lunch
    CONTINUOUS = "continuous"  # One clocked segment


@dataclass(frozen=True)
class DailyScheduleRecord:
    """Generated attendance for one worked date.

    Timestamps are local wall-clock strings (YYYY-MM-DDTHH:MM:00) with no
    zone information.

    Attributes:
        schedule_date: The worked date.
        shift_type: Split or continuous.
        checkin: Clock-in stamp.
        checkout: Clock-out stamp.
        lunch_start: Lunch start stamp (split days only).
        lunch_end: Lunch end stamp (split days only).
    """

    schedule_date: date
    shift_type: ShiftType
    checkin: str
    checkout: str
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None

    @property
    def is_split(self) -> bool:
        return self.shift_type is ShiftType.SPLIT

    @property
    def clock_in_minutes(self) -> int:
        return stamp_minutes(self.checkin)

    @property
    def clock_out_minutes(self) -> int:
        return stamp_minutes(self.checkout)

    @property
    def lunch_minutes(self) -> int:
        """Duration of the lunch break in minutes (0 for continuous days)."""
        if not self.is_split or self.lunch_start is None or self.lunch_end is None:
            return 0
        return stamp_minutes(self.lunch_end) - stamp_minutes(self.lunch_start)

    @property
    def worked_minutes(self) -> int:
        """Realized worked time: clock-out minus clock-in minus lunch."""
        return self.clock_out_minutes - self.clock_in_minutes - self.lunch_minutes

    def to_dict(self) -> dict:
        """Wire shape consumed by the submission collaborator."""
        result = {
            "date": self.schedule_date.isoformat(),
            "type": self.shift_type.value,
            "checkin": self.checkin,
        }
        if self.is_split:
            result["lunch_start"] = self.lunch_start
            result["lunch_end"] = self.lunch_end
        result["checkout"] = self.checkout
        return result


@dataclass(frozen=True)
class WeekTotals:
    """Summed worked time across a generated week."""

    hours: int
    minutes: int
    total_minutes: int
    formatted: str

    @classmethod
    def from_minutes(cls, total_minutes: int) -> "WeekTotals":
        hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
        return cls(
            hours=hours,
            minutes=minutes,
            total_minutes=total_minutes,
            formatted=format_duration(total_minutes),
        )

    @classmethod
    def from_records(cls, records: list[DailyScheduleRecord]) -> "WeekTotals":
        return cls.from_minutes(sum(r.worked_minutes for r in records))


@dataclass(frozen=True)
class DisplayRow:
    """Human-readable row for one generated day.

    Attributes:
        date: ISO date string.
        day_name: Localized weekday name.
        clock_in: Clock-in as HH:MM.
        clock_out: Clock-out as HH:MM.
        total: Worked time as "<h>h <m>m".
        type: "split" or "continuous".
        raw: The record the row was built from.
    """

    date: str
    day_name: str
    clock_in: str
    clock_out: str
    total: str
    type: str
    raw: DailyScheduleRecord


@dataclass
class WeeklySchedule:
    """Complete schedule output for a week.

    Attributes:
        week_start: Monday the week starts on.
        records: One record per worked date, in date order.
        overrides: Weekly hours and split days applied to this week.
        target_minutes: Exact worked minutes the week was reconciled to.
    """

    week_start: date
    records: list[DailyScheduleRecord] = field(default_factory=list)
    overrides: Optional[WeekOverrides] = None
    target_minutes: int = 0

    @property
    def totals(self) -> WeekTotals:
        return WeekTotals.from_records(self.records)

    @property
    def worked_dates(self) -> list[date]:
        return [r.schedule_date for r in self.records]

    def get_record(self, d: date) -> Optional[DailyScheduleRecord]:
        """Get the record for a date, if that date is worked."""
        for record in self.records:
            if record.schedule_date == d:
                return record
        return None
