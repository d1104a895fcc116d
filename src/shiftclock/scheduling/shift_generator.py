"""Daily shift generation.

This module draws clock-in, clock-out and lunch times for a single work day
so that the day's worked minutes match a target duration.
"""

import random
from datetime import date
from typing import Optional

from shiftclock.domain.calendar import stamp
from shiftclock.domain.models import (
    DailyScheduleRecord,
    ScheduleConfig,
    ShiftType,
)
from shiftclock.domain.policies import (
    CollisionPolicy,
    DefaultCollisionPolicy,
    RandomSource,
    draw_uniform,
)


class ShiftGenerator:
    """Generates randomized attendance for one day.

    Clock-in is drawn from the configured window and then pushed later by up
    to random_variance minutes, so it can land past the nominal end of the
    window. Continuous days clock out exactly target minutes later. Split
    days draw their lunch from the configured lunch window and resume work
    after it for whatever the pre-lunch segment left of the target. When the
    target is met before the lunch window opens, lunch is taken as soon as
    the target is reached instead, so lunch_start may fall before
    lunch_start_range.

    Example:
        >>> generator = ShiftGenerator(rng=random.Random(3))
        >>> record = generator.generate_day(date(2025, 1, 9), 408, config, False)
        >>> record.worked_minutes
        408
    """

    def __init__(
        self,
        collision_policy: Optional[CollisionPolicy] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.collision_policy = collision_policy or DefaultCollisionPolicy()
        self.rng = rng if rng is not None else random.Random()

    def draw_clock_in(self, config: ScheduleConfig) -> int:
        """Clock-in in minutes from midnight."""
        window = config.clock_in_range
        clock_in = draw_uniform(self.rng, window.start_minutes, window.end_minutes)
        return clock_in + draw_uniform(self.rng, 0, config.random_variance)

    def generate_day(
        self,
        schedule_date: date,
        target_minutes: int,
        config: ScheduleConfig,
        is_split: bool,
        reconcile: bool = False,
    ) -> DailyScheduleRecord:
        """Generate the attendance record for one day.

        Args:
            schedule_date: The work date.
            target_minutes: Worked minutes to aim for.
            config: Time windows and lunch range.
            is_split: Whether the day gets a lunch break.
            reconcile: If True, the day's worked minutes must equal the
                target exactly (used for the last day of a week). A
                minute-collision nudge then lengthens the lunch instead of
                the afternoon, so the lunch can run up to 3 minutes past
                lunch_duration.max_minutes.

        Returns:
            A new DailyScheduleRecord.
        """
        clock_in = self.draw_clock_in(config)

        if not is_split:
            return DailyScheduleRecord(
                schedule_date=schedule_date,
                shift_type=ShiftType.CONTINUOUS,
                checkin=stamp(schedule_date, clock_in),
                checkout=stamp(schedule_date, clock_in + target_minutes),
            )

        window = config.lunch_start_range
        lunch_start = draw_uniform(self.rng, window.start_minutes, window.end_minutes)
        lunch_length = draw_uniform(
            self.rng,
            config.lunch_duration.min_minutes,
            config.lunch_duration.max_minutes,
        )

        work_before_lunch = lunch_start - clock_in
        if work_before_lunch > target_minutes:
            # Target is met before the lunch window opens: take lunch then.
            lunch_start = clock_in + target_minutes
            work_before_lunch = target_minutes
        work_after_lunch = max(0, target_minutes - work_before_lunch)

        lunch_end = lunch_start + lunch_length
        clock_out = lunch_end + work_after_lunch

        if clock_in % 60 == clock_out % 60:
            low, high = self.collision_policy.adjustment_range()
            adjustment = draw_uniform(self.rng, low, high)
            if reconcile:
                # Lunch absorbs the nudge so worked time is unchanged.
                lunch_end += adjustment
            clock_out += adjustment

        return DailyScheduleRecord(
            schedule_date=schedule_date,
            shift_type=ShiftType.SPLIT,
            checkin=stamp(schedule_date, clock_in),
            checkout=stamp(schedule_date, clock_out),
            lunch_start=stamp(schedule_date, lunch_start),
            lunch_end=stamp(schedule_date, lunch_end),
        )
