"""Main scheduler interface.

This module provides the WeeklyScheduler class that runs the full pipeline:
week dates, exception resolution, time distribution, daily shift
generation and last-day reconciliation.
"""

import logging
import random
from datetime import date
from typing import Iterable, Optional

from shiftclock.domain.calendar import week_dates
from shiftclock.domain.models import (
    ScheduleConfig,
    ScheduleException,
    WeeklySchedule,
)
from shiftclock.domain.policies import (
    CollisionPolicy,
    DistributionPolicy,
    RandomSource,
)
from shiftclock.scheduling.distributor import TimeDistributor
from shiftclock.scheduling.exception_resolver import is_work_day, resolve_week_overrides
from shiftclock.scheduling.shift_generator import ShiftGenerator
from shiftclock.validation.validator import InputValidator

logger = logging.getLogger(__name__)


class WeeklyScheduler:
    """High-level scheduler for generating weekly attendance.

    The scheduler validates its inputs, then coordinates the distributor and
    the shift generator so that the generated week adds up exactly to its
    target. Prior days are measured from their generated timestamps, and the
    last work day is given whatever is left.

    The random source is injected; pass a seeded random.Random for
    reproducible output. A scheduler holds no state between calls other
    than its random source.

    Example:
        >>> scheduler = WeeklyScheduler(rng=random.Random(42))
        >>> schedule = scheduler.generate_schedule(date(2025, 1, 6), config, [])
        >>> schedule.totals.formatted
        '40h 0m'
    """

    def __init__(
        self,
        distribution_policy: Optional[DistributionPolicy] = None,
        collision_policy: Optional[CollisionPolicy] = None,
        rng: Optional[RandomSource] = None,
        validator: Optional[InputValidator] = None,
    ):
        """Initialize scheduler with policies.

        Args:
            distribution_policy: Rules for per-day budgets.
            collision_policy: Rule for breaking split-day minute ties.
            rng: Random source shared by the distributor and generator.
            validator: Boundary validator for inputs.
        """
        self.rng = rng if rng is not None else random.Random()
        self.distributor = TimeDistributor(policy=distribution_policy, rng=self.rng)
        self.shift_generator = ShiftGenerator(collision_policy=collision_policy, rng=self.rng)
        self.validator = validator or InputValidator()

    def generate_schedule(
        self,
        week_start: date,
        config: ScheduleConfig,
        exceptions: Iterable[ScheduleException] = (),
    ) -> WeeklySchedule:
        """Generate attendance for one week.

        Args:
            week_start: Monday the week starts on.
            config: Configuration for this run.
            exceptions: Holidays, absences and special weeks.

        Returns:
            WeeklySchedule with one record per worked date.

        Raises:
            ScheduleInputError: If the inputs fail boundary validation.
        """
        exceptions = list(exceptions)
        validation = self.validator.validate_request(week_start, config, exceptions)
        for warning in validation.warnings:
            logger.warning(warning)
        validation.raise_for_errors()

        dates = week_dates(week_start)
        overrides = resolve_week_overrides(dates, exceptions, config)
        work_days = [d for d in dates if is_work_day(d, config.work_days, exceptions)]

        plan = self.distributor.distribute_week(
            work_days,
            overrides.split_shift_days,
            overrides.weekly_hours,
            config.configured_work_day_count,
        )

        records = []
        consumed = 0
        for index, day in enumerate(plan.days):
            is_last = index == len(plan.days) - 1
            target = plan.remaining_minutes(consumed) if is_last else day.target_minutes
            record = self.shift_generator.generate_day(
                day.schedule_date,
                target,
                config,
                day.is_split,
                reconcile=is_last,
            )
            records.append(record)
            consumed += record.worked_minutes

        logger.info(
            "Generated %d days for week of %s (%d min target)",
            len(records),
            week_start,
            plan.total_target_minutes,
        )

        return WeeklySchedule(
            week_start=week_start,
            records=records,
            overrides=overrides,
            target_minutes=plan.total_target_minutes,
        )

    def generate_schedule_with_stats(
        self,
        week_start: date,
        config: ScheduleConfig,
        exceptions: Iterable[ScheduleException] = (),
    ) -> tuple[WeeklySchedule, dict]:
        """Generate a week and return statistics.

        Returns:
            Tuple of (schedule, stats_dict).
        """
        schedule = self.generate_schedule(week_start, config, exceptions)
        return schedule, self._calculate_stats(schedule, config)

    def _calculate_stats(self, schedule: WeeklySchedule, config: ScheduleConfig) -> dict:
        """Calculate schedule statistics."""
        records = schedule.records
        split_records = [r for r in records if r.is_split]
        daily = [r.worked_minutes for r in records]

        return {
            "week_start": schedule.week_start,
            "worked_days": len(records),
            "configured_days": config.configured_work_day_count,
            "split_days": len(split_records),
            "continuous_days": len(records) - len(split_records),
            "weekly_hours": schedule.overrides.weekly_hours if schedule.overrides else config.weekly_hours,
            "special_week": bool(schedule.overrides and schedule.overrides.is_special),
            "target_minutes": schedule.target_minutes,
            "total_work_minutes": schedule.totals.total_minutes,
            "total_lunch_minutes": sum(r.lunch_minutes for r in split_records),
            "min_day_minutes": min(daily) if daily else 0,
            "max_day_minutes": max(daily) if daily else 0,
        }
