"""Exception resolution for work days and special weeks.

Precedence rule: a date matched by any exception whose type excludes work
(holiday, vacation, sick, other) is never worked, regardless of how many
other exceptions match it or of their order. A special-week match never
excludes a date; it only changes the weekly hours and split days of the
week that contains its start date.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from shiftclock.domain.calendar import weekday_number
from shiftclock.domain.models import (
    ScheduleConfig,
    ScheduleException,
    WeekOverrides,
)

logger = logging.getLogger(__name__)


def matching_exceptions(
    d: date,
    exceptions: Iterable[ScheduleException],
) -> list[ScheduleException]:
    """All exceptions whose date or range contains d."""
    return [e for e in exceptions if e.covers(d)]


def is_work_day(
    d: date,
    work_days: Iterable[int],
    exceptions: Iterable[ScheduleException] = (),
) -> bool:
    """Determine whether a date is worked.

    Args:
        d: Date to classify.
        work_days: Weekday numbers normally worked.
        exceptions: Exceptions to apply.

    Returns:
        False if any excluding exception covers the date, otherwise whether
        the date's weekday number is a configured work day.
    """
    if any(e.exception_type.excludes_work for e in matching_exceptions(d, exceptions)):
        return False
    return weekday_number(d) in set(work_days)


def find_special_week(
    dates: list[date],
    exceptions: Iterable[ScheduleException],
) -> Optional[ScheduleException]:
    """Find the special-week exception whose start date lies in dates.

    When several match, the earliest start date wins (list order breaks
    remaining ties).
    """
    week = set(dates)
    candidates = [e for e in exceptions if e.is_special_week and e.start_date in week]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            "%d special weeks match week of %s, using the one dated %s",
            len(candidates),
            min(dates),
            min(c.start_date for c in candidates),
        )
    return min(candidates, key=lambda e: e.start_date)


def resolve_week_overrides(
    dates: list[date],
    exceptions: Iterable[ScheduleException],
    config: ScheduleConfig,
) -> WeekOverrides:
    """Weekly hours and split days that apply to a week.

    Args:
        dates: The seven dates of the week.
        exceptions: Exceptions to search for a special week.
        config: Global configuration used as fallback.

    Returns:
        WeekOverrides with the special week's values where present.
    """
    special = find_special_week(dates, exceptions)
    if special is None:
        return WeekOverrides(
            weekly_hours=config.weekly_hours,
            split_shift_days=frozenset(config.split_shift_days),
        )

    weekly_hours = (
        special.weekly_hours if special.weekly_hours is not None else config.weekly_hours
    )
    # An empty split_days set is an explicit "no split days"; only None inherits.
    split_days = (
        special.split_days if special.split_days is not None else config.split_shift_days
    )
    logger.debug(
        "Special week %s: %s hours, split days %s",
        special.start_date,
        weekly_hours,
        sorted(split_days),
    )
    return WeekOverrides(
        weekly_hours=weekly_hours,
        split_shift_days=frozenset(split_days),
        special_week=special,
    )
