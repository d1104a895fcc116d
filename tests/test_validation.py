"""Tests for input and schedule validation."""

from datetime import date, time

import pytest

from shiftclock.domain.models import (
    DailyScheduleRecord,
    ExceptionType,
    LunchDuration,
    ScheduleConfig,
    ScheduleException,
    ShiftType,
    TimeWindow,
    WeeklySchedule,
)
from shiftclock.validation.validator import (
    InputValidator,
    ScheduleInputError,
    ScheduleValidator,
    ValidationErrorType,
    ValidationResult,
)

MONDAY = date(2025, 1, 6)


def error_types(result):
    return {e.error_type for e in result.errors}


def split_record(d, checkin, lunch_start, lunch_end, checkout):
    iso = d.isoformat()
    return DailyScheduleRecord(
        schedule_date=d,
        shift_type=ShiftType.SPLIT,
        checkin=f"{iso}T{checkin}:00",
        checkout=f"{iso}T{checkout}:00",
        lunch_start=f"{iso}T{lunch_start}:00",
        lunch_end=f"{iso}T{lunch_end}:00",
    )


def continuous_record(d, checkin, checkout):
    iso = d.isoformat()
    return DailyScheduleRecord(
        schedule_date=d,
        shift_type=ShiftType.CONTINUOUS,
        checkin=f"{iso}T{checkin}:00",
        checkout=f"{iso}T{checkout}:00",
    )


@pytest.fixture
def validator():
    return InputValidator()


class TestConfigValidation:
    """Tests for InputValidator.validate_config."""

    def test_default_config_is_valid(self, validator):
        result = validator.validate_config(ScheduleConfig())
        assert result.is_valid
        assert result.warnings == []

    def test_weekday_out_of_range(self, validator):
        result = validator.validate_config(ScheduleConfig(work_days=frozenset({0, 1, 8})))
        assert ValidationErrorType.INVALID_WEEKDAY in error_types(result)

    @pytest.mark.parametrize("hours", [0, -5, 169])
    def test_weekly_hours_out_of_range(self, validator, hours):
        result = validator.validate_config(ScheduleConfig(weekly_hours=hours))
        assert ValidationErrorType.INVALID_WEEKLY_HOURS in error_types(result)

    def test_negative_variance(self, validator):
        result = validator.validate_config(ScheduleConfig(random_variance=-1))
        assert ValidationErrorType.INVALID_VARIANCE in error_types(result)

    def test_negative_lunch(self, validator):
        config = ScheduleConfig(lunch_duration=LunchDuration(min_minutes=-5, max_minutes=30))
        assert not validator.validate_config(config).is_valid

    def test_degenerate_windows_only_warn(self, validator):
        """Inverted and zero-length windows are allowed, with warnings."""
        config = ScheduleConfig(
            clock_in_range=TimeWindow(time(8, 0), time(7, 0)),
            lunch_start_range=TimeWindow(time(14, 0), time(14, 0)),
        )
        result = validator.validate_config(config)
        assert result.is_valid
        assert len(result.warnings) == 2


class TestExceptionValidation:
    """Tests for InputValidator.validate_exceptions."""

    def test_inverted_range(self, validator):
        exception = ScheduleException(
            date(2025, 1, 10), ExceptionType.VACATION, end_date=date(2025, 1, 8)
        )
        result = validator.validate_exceptions([exception])
        assert ValidationErrorType.INVALID_DATE_RANGE in error_types(result)

    def test_special_week_needs_hours(self, validator):
        exception = ScheduleException(MONDAY, ExceptionType.SPECIAL_WEEK)
        result = validator.validate_exceptions([exception])
        assert ValidationErrorType.INVALID_WEEKLY_HOURS in error_types(result)

    def test_special_week_bad_split_days(self, validator):
        exception = ScheduleException(
            MONDAY, ExceptionType.SPECIAL_WEEK, weekly_hours=20, split_days=frozenset({9})
        )
        result = validator.validate_exceptions([exception])
        assert ValidationErrorType.INVALID_WEEKDAY in error_types(result)


class TestRequestValidation:
    """Tests for InputValidator.validate_request."""

    def test_valid_request(self, validator):
        assert validator.validate_request(MONDAY, ScheduleConfig(), []).is_valid

    def test_not_monday(self, validator):
        result = validator.validate_request(date(2025, 1, 8), ScheduleConfig())
        assert ValidationErrorType.WEEK_START_NOT_MONDAY in error_types(result)

    def test_two_special_weeks(self, validator):
        exceptions = [
            ScheduleException(MONDAY, ExceptionType.SPECIAL_WEEK, weekly_hours=20),
            ScheduleException(date(2025, 1, 8), ExceptionType.SPECIAL_WEEK, weekly_hours=30),
        ]
        result = validator.validate_request(MONDAY, ScheduleConfig(), exceptions)
        assert ValidationErrorType.MULTIPLE_SPECIAL_WEEKS in error_types(result)

    def test_raise_for_errors(self, validator):
        result = validator.validate_request(date(2025, 1, 8), ScheduleConfig())
        with pytest.raises(ScheduleInputError) as exc_info:
            result.raise_for_errors()
        assert isinstance(exc_info.value, ValueError)
        assert "week_start_not_monday" in str(exc_info.value)

    def test_merge(self):
        first = ValidationResult()
        second = ValidationResult()
        second.add_warning("careful")
        first.merge(second)
        assert first.is_valid
        assert first.warnings == ["careful"]


class TestScheduleValidator:
    """Tests for ScheduleValidator."""

    def test_valid_week(self):
        schedule = WeeklySchedule(
            week_start=MONDAY,
            records=[
                split_record(MONDAY, "07:00", "14:00", "14:45", "16:05"),
                continuous_record(date(2025, 1, 7), "07:15", "14:00"),
            ],
            target_minutes=905,
        )
        result = ScheduleValidator().validate_week(schedule)
        assert result.is_valid, [str(e) for e in result.errors]

    def test_total_mismatch(self):
        schedule = WeeklySchedule(
            week_start=MONDAY,
            records=[continuous_record(MONDAY, "07:00", "15:00")],
            target_minutes=481,
        )
        result = ScheduleValidator().validate_week(schedule)
        assert ValidationErrorType.WEEKLY_TOTAL_MISMATCH in error_types(result)
        assert result.errors[0].details == {"actual": 480, "expected": 481}

    def test_record_outside_week_and_duplicate(self):
        schedule = WeeklySchedule(
            week_start=MONDAY,
            records=[
                continuous_record(date(2025, 1, 13), "07:00", "15:00"),
                continuous_record(MONDAY, "07:00", "15:00"),
                continuous_record(MONDAY, "07:00", "15:00"),
            ],
            target_minutes=1440,
        )
        types = error_types(ScheduleValidator().validate_week(schedule))
        assert ValidationErrorType.RECORD_OUTSIDE_WEEK in types
        assert ValidationErrorType.DUPLICATE_DATE in types

    def test_split_minute_collision(self):
        record = split_record(MONDAY, "07:10", "14:00", "14:45", "16:10")
        result = ScheduleValidator().validate_record(record)
        assert ValidationErrorType.MINUTE_COLLISION in error_types(result)

    def test_continuous_same_minute_is_fine(self):
        record = continuous_record(MONDAY, "07:10", "15:10")
        assert ScheduleValidator().validate_record(record).is_valid

    def test_lunch_order(self):
        record = split_record(MONDAY, "07:00", "14:00", "14:00", "16:05")
        result = ScheduleValidator().validate_record(record)
        assert ValidationErrorType.INVALID_LUNCH_ORDER in error_types(result)

    def test_clock_out_before_lunch_end(self):
        record = split_record(MONDAY, "07:00", "14:00", "14:45", "14:30")
        result = ScheduleValidator().validate_record(record)
        assert ValidationErrorType.NEGATIVE_WORK_SEGMENT in error_types(result)

    def test_empty_week_is_valid(self):
        schedule = WeeklySchedule(week_start=MONDAY, target_minutes=0)
        assert ScheduleValidator().validate_week(schedule).is_valid
