"""Tests for the weekly scheduler."""

import random
from datetime import date, time

import pytest

from shiftclock.domain.models import (
    ExceptionType,
    LunchDuration,
    ScheduleConfig,
    ScheduleException,
    ShiftType,
    TimeWindow,
)
from shiftclock.scheduling.scheduler import WeeklyScheduler
from shiftclock.validation.validator import (
    ScheduleInputError,
    ScheduleValidator,
    ValidationErrorType,
)

MONDAY = date(2025, 1, 6)


@pytest.fixture
def config():
    """Reference configuration with no extra clock-in variance."""
    return ScheduleConfig(
        weekly_hours=40,
        work_days=frozenset({1, 2, 3, 4, 5}),
        clock_in_range=TimeWindow(time(7, 0), time(7, 30)),
        lunch_start_range=TimeWindow(time(14, 0), time(15, 0)),
        lunch_duration=LunchDuration(min_minutes=45, max_minutes=60),
        split_shift_days=frozenset({1, 2, 3}),
        random_variance=0,
    )


@pytest.fixture
def scheduler():
    return WeeklyScheduler(rng=random.Random(42))


class TestReferenceWeeks:
    """Tests for the reference scenarios."""

    def test_regular_week(self, scheduler, config):
        """Mon-Wed split, Thu-Fri continuous, exactly 40h."""
        schedule = scheduler.generate_schedule(MONDAY, config, [])
        assert [r.schedule_date.day for r in schedule.records] == [6, 7, 8, 9, 10]
        assert [r.shift_type for r in schedule.records] == [
            ShiftType.SPLIT,
            ShiftType.SPLIT,
            ShiftType.SPLIT,
            ShiftType.CONTINUOUS,
            ShiftType.CONTINUOUS,
        ]
        assert schedule.totals.total_minutes == 2400
        assert schedule.totals.formatted == "40h 0m"

    def test_holiday_week(self, scheduler, config):
        """A Thursday holiday leaves four days and 32h."""
        holiday = ScheduleException(date(2025, 1, 9), ExceptionType.HOLIDAY)
        schedule = scheduler.generate_schedule(MONDAY, config, [holiday])
        assert date(2025, 1, 9) not in schedule.worked_dates
        assert len(schedule.records) == 4
        assert schedule.totals.total_minutes == 1920
        assert schedule.totals.hours == 32
        assert schedule.totals.minutes == 0

    def test_special_week(self, scheduler, config):
        """20h with no split days: five continuous days of 4h."""
        special = ScheduleException(
            MONDAY,
            ExceptionType.SPECIAL_WEEK,
            weekly_hours=20,
            split_days=frozenset(),
        )
        schedule = scheduler.generate_schedule(MONDAY, config, [special])
        assert all(r.shift_type is ShiftType.CONTINUOUS for r in schedule.records)
        assert schedule.totals.total_minutes == 1200
        assert schedule.overrides.is_special

    def test_all_days_excluded(self, scheduler, config):
        """A full-week vacation gives an empty schedule, not an error."""
        vacation = ScheduleException(
            MONDAY, ExceptionType.VACATION, end_date=date(2025, 1, 12)
        )
        schedule = scheduler.generate_schedule(MONDAY, config, [vacation])
        assert schedule.records == []
        assert schedule.totals.total_minutes == 0
        assert schedule.totals.formatted == "0h 0m"


class TestExactTotals:
    """The weekly total is exact for every random draw."""

    @pytest.mark.parametrize("seed", range(40))
    def test_default_config_any_seed(self, seed):
        scheduler = WeeklyScheduler(rng=random.Random(seed))
        schedule = scheduler.generate_schedule(MONDAY, ScheduleConfig())
        assert schedule.totals.total_minutes == 2400
        assert ScheduleValidator().validate_week(schedule).is_valid

    @pytest.mark.parametrize("seed", range(20))
    def test_split_last_day(self, seed, config):
        """Reconciliation also holds when the last day has a lunch."""
        all_split = ScheduleConfig(
            weekly_hours=37.5,
            work_days=config.work_days,
            clock_in_range=config.clock_in_range,
            lunch_start_range=config.lunch_start_range,
            lunch_duration=config.lunch_duration,
            split_shift_days=frozenset({1, 2, 3, 4, 5}),
            random_variance=10,
        )
        scheduler = WeeklyScheduler(rng=random.Random(seed))
        schedule = scheduler.generate_schedule(MONDAY, all_split)
        assert schedule.records[-1].is_split
        assert schedule.totals.total_minutes == 2250
        assert ScheduleValidator().validate_week(schedule).is_valid

    def test_same_seed_same_week(self, config):
        first = WeeklyScheduler(rng=random.Random(3)).generate_schedule(MONDAY, config)
        second = WeeklyScheduler(rng=random.Random(3)).generate_schedule(MONDAY, config)
        assert [r.to_dict() for r in first.records] == [r.to_dict() for r in second.records]


class TestBoundaryValidation:
    """Invalid requests fail before any generation."""

    def test_week_start_must_be_monday(self, scheduler, config):
        with pytest.raises(ScheduleInputError) as exc_info:
            scheduler.generate_schedule(date(2025, 1, 7), config)
        assert exc_info.value.errors[0].error_type is ValidationErrorType.WEEK_START_NOT_MONDAY

    def test_inverted_lunch_duration(self, scheduler):
        config = ScheduleConfig(lunch_duration=LunchDuration(min_minutes=60, max_minutes=30))
        with pytest.raises(ScheduleInputError, match="invalid_lunch_duration"):
            scheduler.generate_schedule(MONDAY, config)

    def test_no_work_days(self, scheduler):
        with pytest.raises(ScheduleInputError, match="no_work_days"):
            scheduler.generate_schedule(MONDAY, ScheduleConfig(work_days=frozenset()))


class TestStats:
    """Tests for generate_schedule_with_stats."""

    def test_stats(self, scheduler, config):
        schedule, stats = scheduler.generate_schedule_with_stats(MONDAY, config)
        assert stats["worked_days"] == 5
        assert stats["split_days"] == 3
        assert stats["continuous_days"] == 2
        assert stats["target_minutes"] == 2400
        assert stats["total_work_minutes"] == 2400
        assert stats["special_week"] is False
        assert stats["total_lunch_minutes"] == sum(r.lunch_minutes for r in schedule.records)
        assert stats["min_day_minutes"] <= stats["max_day_minutes"]


class TestShortSplitDays:
    """Split days whose budget ends before the lunch window opens."""

    @pytest.mark.parametrize("seed", range(20))
    def test_special_week_inheriting_split_days(self, seed):
        """20h with the default split days keeps every day sane and valid."""
        special = ScheduleException(MONDAY, ExceptionType.SPECIAL_WEEK, weekly_hours=20)
        scheduler = WeeklyScheduler(rng=random.Random(seed))
        schedule = scheduler.generate_schedule(MONDAY, ScheduleConfig(), [special])
        assert [r.is_split for r in schedule.records] == [True, True, True, False, False]
        assert schedule.totals.total_minutes == 1200
        assert all(r.worked_minutes > 0 for r in schedule.records)
        assert all(r.clock_out_minutes > r.clock_in_minutes for r in schedule.records)
        result = ScheduleValidator().validate_week(schedule)
        assert result.is_valid, [str(e) for e in result.errors]
