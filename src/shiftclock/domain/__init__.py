"""Domain models, calendar arithmetic and policies for attendance scheduling."""

from shiftclock.domain.calendar import (
    week_dates,
    weekday_number,
)
from shiftclock.domain.models import (
    DailyScheduleRecord,
    DisplayRow,
    ExceptionType,
    LunchDuration,
    ScheduleConfig,
    ScheduleException,
    ShiftType,
    TimeWindow,
    WeeklySchedule,
    WeekOverrides,
    WeekTotals,
)
from shiftclock.domain.policies import (
    CollisionPolicy,
    DefaultCollisionPolicy,
    DefaultDistributionPolicy,
    DistributionPolicy,
    RandomSource,
)

__all__ = [
    # Calendar
    "week_dates",
    "weekday_number",
    # Models
    "DailyScheduleRecord",
    "DisplayRow",
    "ExceptionType",
    "LunchDuration",
    "ScheduleConfig",
    "ScheduleException",
    "ShiftType",
    "TimeWindow",
    "WeeklySchedule",
    "WeekOverrides",
    "WeekTotals",
    # Policies
    "CollisionPolicy",
    "DefaultCollisionPolicy",
    "DefaultDistributionPolicy",
    "DistributionPolicy",
    "RandomSource",
]
