"""Weekly time distribution.

This module turns a weekly-hours target into per-day minute budgets. The
weekly target scales with the number of days actually worked: 40 hours over
5 configured days means 8 hours per worked day on average, so a week with a
holiday targets 32 hours rather than squeezing 40 into four days.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from shiftclock.domain.calendar import MINUTES_PER_HOUR, weekday_number
from shiftclock.domain.policies import (
    DefaultDistributionPolicy,
    DistributionPolicy,
    RandomSource,
    draw_uniform,
    round_half_up,
)

logger = logging.getLogger(__name__)


def base_daily_minutes(weekly_hours: float, configured_work_days: int) -> int:
    """Average daily minutes of a full configured week."""
    return round_half_up(weekly_hours / configured_work_days * MINUTES_PER_HOUR)


def weekly_target_minutes(
    weekly_hours: float,
    configured_work_days: int,
    worked_days: int,
) -> int:
    """Exact worked minutes a week must add up to.

    Computed in hours first and rounded once, so the per-day average is
    never rounded before being multiplied out.
    """
    target_hours = worked_days * weekly_hours / configured_work_days
    return round_half_up(target_hours * MINUTES_PER_HOUR)


@dataclass(frozen=True)
class DayTarget:
    """Planned worked duration for one day.

    Attributes:
        schedule_date: The work date.
        is_split: Whether the day has a lunch break.
        target_minutes: Planned worked minutes.
    """

    schedule_date: date
    is_split: bool
    target_minutes: int


@dataclass
class WeekPlan:
    """Distribution of a week's target across its work days.

    Attributes:
        total_target_minutes: Exact total the week must add up to.
        base_daily_minutes: Average daily minutes of a full configured week.
        split_minutes: Budget per split day before variance.
        continuous_minutes: Budget per continuous day before variance.
        days: Day targets in date order; they sum to total_target_minutes.
    """

    total_target_minutes: int = 0
    base_daily_minutes: int = 0
    split_minutes: int = 0
    continuous_minutes: int = 0
    days: list[DayTarget] = field(default_factory=list)

    @property
    def split_day_count(self) -> int:
        return sum(1 for d in self.days if d.is_split)

    @property
    def continuous_day_count(self) -> int:
        return sum(1 for d in self.days if not d.is_split)

    def remaining_minutes(self, consumed_minutes: int) -> int:
        """Target for the last day given minutes realized by prior days."""
        return self.total_target_minutes - consumed_minutes


class TimeDistributor:
    """Computes per-day minute budgets with controlled randomness.

    Every day except the last gets its day-type budget plus a random
    offset; the last day absorbs the difference so that the week's total is
    exact.

    Example:
        >>> distributor = TimeDistributor(rng=random.Random(7))
        >>> plan = distributor.distribute_week(dates, {1, 2, 3}, 40, 5)
        >>> sum(d.target_minutes for d in plan.days)
        2400
    """

    def __init__(
        self,
        policy: Optional[DistributionPolicy] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.policy = policy or DefaultDistributionPolicy()
        self.rng = rng if rng is not None else random.Random()

    def day_type_budgets(
        self,
        total_minutes: int,
        base_minutes: int,
        split_days: int,
        continuous_days: int,
    ) -> tuple[int, int]:
        """Budget per split day and per continuous day.

        Args:
            total_minutes: Exact weekly target in minutes.
            base_minutes: Average daily minutes of a full configured week.
            split_days: Number of split days worked this week.
            continuous_days: Number of continuous days worked this week.

        Returns:
            Tuple of (split_minutes, continuous_minutes). A type with no
            days gets 0.
        """
        split_minutes = 0
        continuous_minutes = 0

        if split_days > 0 and continuous_days > 0:
            continuous_minutes = self.policy.continuous_minutes(base_minutes)
            split_total = total_minutes - continuous_days * continuous_minutes
            split_minutes = split_total // split_days
        elif split_days > 0:
            split_minutes = total_minutes // split_days
        elif continuous_days > 0:
            continuous_minutes = total_minutes // continuous_days

        return split_minutes, continuous_minutes

    def distribute_week(
        self,
        work_days: Iterable[date],
        split_shift_days: Iterable[int],
        weekly_hours: float,
        configured_work_days: int,
    ) -> WeekPlan:
        """Distribute a week's target across its work days.

        Args:
            work_days: Dates actually worked this week.
            split_shift_days: Weekday numbers that get a lunch break.
            weekly_hours: Hours target for a full configured week.
            configured_work_days: Number of work days in a configured week.

        Returns:
            WeekPlan whose day targets sum exactly to the weekly target.
            An empty plan when there are no work days.
        """
        dates = sorted(work_days)
        if not dates:
            return WeekPlan()

        split_weekdays = set(split_shift_days)
        base_minutes = base_daily_minutes(weekly_hours, configured_work_days)
        total_minutes = weekly_target_minutes(
            weekly_hours, configured_work_days, len(dates)
        )

        split_flags = [weekday_number(d) in split_weekdays for d in dates]
        split_count = sum(split_flags)
        split_minutes, continuous_minutes = self.day_type_budgets(
            total_minutes,
            base_minutes,
            split_count,
            len(dates) - split_count,
        )

        variance_low, variance_high = self.policy.day_variance_range()
        days = []
        planned = 0
        for index, (d, is_split) in enumerate(zip(dates, split_flags)):
            if index == len(dates) - 1:
                target = total_minutes - planned
            else:
                target = split_minutes if is_split else continuous_minutes
                target += draw_uniform(self.rng, variance_low, variance_high)
            planned += target
            days.append(DayTarget(schedule_date=d, is_split=is_split, target_minutes=target))

        logger.debug(
            "Planned %d min over %d days (split=%d min, continuous=%d min)",
            total_minutes,
            len(dates),
            split_minutes,
            continuous_minutes,
        )

        return WeekPlan(
            total_target_minutes=total_minutes,
            base_daily_minutes=base_minutes,
            split_minutes=split_minutes,
            continuous_minutes=continuous_minutes,
            days=days,
        )
