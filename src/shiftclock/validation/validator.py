"""Validation for scheduler inputs and generated weeks.

Inputs are checked once at the boundary, before any generation work, so
malformed configuration fails fast with a descriptive error instead of
producing a silently wrong schedule. Generated weeks can be checked against
the scheduling invariants with ScheduleValidator.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from shiftclock.domain.calendar import stamp_minutes, week_dates, weekday_number
from shiftclock.domain.models import (
    DailyScheduleRecord,
    ScheduleConfig,
    ScheduleException,
    WeeklySchedule,
)

MAX_WEEKLY_HOURS = 168


class ValidationErrorType(Enum):
    """Types of validation errors."""

    INVALID_TIME = "invalid_time"
    INVALID_DATE = "invalid_date"
    INVALID_EXCEPTION_TYPE = "invalid_exception_type"
    WEEK_START_NOT_MONDAY = "week_start_not_monday"
    INVALID_WEEKDAY = "invalid_weekday"
    NO_WORK_DAYS = "no_work_days"
    INVALID_WEEKLY_HOURS = "invalid_weekly_hours"
    INVALID_LUNCH_DURATION = "invalid_lunch_duration"
    INVALID_VARIANCE = "invalid_variance"
    INVALID_DATE_RANGE = "invalid_date_range"
    MULTIPLE_SPECIAL_WEEKS = "multiple_special_weeks"
    WEEKLY_TOTAL_MISMATCH = "weekly_total_mismatch"
    RECORD_OUTSIDE_WEEK = "record_outside_week"
    DUPLICATE_DATE = "duplicate_date"
    NEGATIVE_WORK_SEGMENT = "negative_work_segment"
    INVALID_LUNCH_ORDER = "invalid_lunch_order"
    MINUTE_COLLISION = "minute_collision"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    schedule_date: Optional[date] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.schedule_date is not None:
            parts.append(f"{self.schedule_date.isoformat()}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of a validation pass."""

    is_valid: bool = True
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def merge(self, other: "ValidationResult") -> None:
        """Fold another result's errors and warnings into this one."""
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def raise_for_errors(self) -> None:
        """Raise ScheduleInputError if any error was recorded."""
        if not self.is_valid:
            raise ScheduleInputError(self.errors)


class ScheduleInputError(ValueError):
    """Raised when scheduler input fails boundary validation.

    Attributes:
        errors: The validation errors that caused the failure.
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class InputValidator:
    """Validates configuration, exceptions and the requested week.

    Example:
        >>> validator = InputValidator()
        >>> result = validator.validate_request(week_start, config, exceptions)
        >>> result.raise_for_errors()
    """

    def validate_config(self, config: ScheduleConfig) -> ValidationResult:
        """Check a configuration for values that would give wrong schedules."""
        result = ValidationResult()

        if not config.work_days:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.NO_WORK_DAYS,
                    message="At least one work day must be configured",
                )
            )
        self._check_weekdays(config.work_days, "work_days", result)
        self._check_weekdays(config.split_shift_days, "split_shift_days", result)
        self._check_weekly_hours(config.weekly_hours, "weekly_hours", result)

        lunch = config.lunch_duration
        if lunch.min_minutes < 0:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INVALID_LUNCH_DURATION,
                    message=f"Lunch duration minimum is negative ({lunch.min_minutes})",
                )
            )
        if lunch.min_minutes > lunch.max_minutes:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INVALID_LUNCH_DURATION,
                    message=(
                        f"Lunch duration minimum exceeds maximum "
                        f"({lunch.min_minutes} > {lunch.max_minutes})"
                    ),
                )
            )
        elif lunch.max_minutes == 0:
            result.add_warning("Lunch duration is zero; split days will have no break")

        if config.random_variance < 0:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INVALID_VARIANCE,
                    message=f"Random variance is negative ({config.random_variance})",
                )
            )

        for name, window in (
            ("clock_in_range", config.clock_in_range),
            ("lunch_start_range", config.lunch_start_range),
        ):
            if window.end_minutes < window.start_minutes:
                result.add_warning(f"{name} ends before it starts; its lower bound is always used")
            elif window.end_minutes == window.start_minutes:
                result.add_warning(f"{name} is zero-length; no randomness is drawn from it")

        return result

    def validate_exceptions(
        self,
        exceptions: Iterable[ScheduleException],
    ) -> ValidationResult:
        """Check each exception record on its own."""
        result = ValidationResult()

        for exception in exceptions:
            if exception.end_date is not None and exception.end_date < exception.start_date:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INVALID_DATE_RANGE,
                        message=f"Exception ends before it starts ({exception.end_date})",
                        schedule_date=exception.start_date,
                    )
                )
            if not exception.is_special_week:
                continue
            if exception.weekly_hours is None:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INVALID_WEEKLY_HOURS,
                        message="Special week has no weekly hours",
                        schedule_date=exception.start_date,
                    )
                )
            else:
                self._check_weekly_hours(
                    exception.weekly_hours, "special week hours", result, exception.start_date
                )
            if exception.split_days is not None:
                self._check_weekdays(exception.split_days, "special week split days", result)

        return result

    def validate_request(
        self,
        week_start: date,
        config: ScheduleConfig,
        exceptions: Iterable[ScheduleException] = (),
    ) -> ValidationResult:
        """Validate everything a weekly generation run needs."""
        exceptions = list(exceptions)
        result = ValidationResult()

        if weekday_number(week_start) != 1:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WEEK_START_NOT_MONDAY,
                    message=f"Week start must be a Monday (got {week_start.strftime('%A')})",
                    schedule_date=week_start,
                )
            )

        result.merge(self.validate_config(config))
        result.merge(self.validate_exceptions(exceptions))

        dates = set(week_dates(week_start))
        special = [e for e in exceptions if e.is_special_week and e.start_date in dates]
        if len(special) > 1:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.MULTIPLE_SPECIAL_WEEKS,
                    message=(
                        f"{len(special)} special weeks start in this week: "
                        + ", ".join(e.start_date.isoformat() for e in special)
                    ),
                    schedule_date=week_start,
                )
            )

        return result

    def _check_weekdays(
        self,
        weekdays: Iterable[int],
        name: str,
        result: ValidationResult,
    ) -> None:
        invalid = sorted(d for d in weekdays if not 1 <= d <= 7)
        if invalid:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INVALID_WEEKDAY,
                    message=f"{name} contains weekday numbers outside 1..7: {invalid}",
                )
            )

    def _check_weekly_hours(
        self,
        hours: float,
        name: str,
        result: ValidationResult,
        schedule_date: Optional[date] = None,
    ) -> None:
        if not 0 < hours <= MAX_WEEKLY_HOURS:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INVALID_WEEKLY_HOURS,
                    message=f"{name} must be in (0, {MAX_WEEKLY_HOURS}] (got {hours})",
                    schedule_date=schedule_date,
                )
            )


class ScheduleValidator:
    """Validates generated weeks against the scheduling invariants.

    Checks that the week adds up to its target exactly, that every record
    belongs to the week, and that split days have ordered, non-negative
    segments with distinct clock-in and clock-out minutes.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate_week(schedule)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def validate_week(self, schedule: WeeklySchedule) -> ValidationResult:
        """Validate a complete generated week."""
        result = ValidationResult()
        dates = set(week_dates(schedule.week_start))
        seen: set[date] = set()

        for record in schedule.records:
            if record.schedule_date not in dates:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.RECORD_OUTSIDE_WEEK,
                        message="Record falls outside the scheduled week",
                        schedule_date=record.schedule_date,
                    )
                )
            if record.schedule_date in seen:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.DUPLICATE_DATE,
                        message="More than one record for this date",
                        schedule_date=record.schedule_date,
                    )
                )
            seen.add(record.schedule_date)
            self.validate_record(record, result)

        total = schedule.totals.total_minutes
        if schedule.records and total != schedule.target_minutes:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WEEKLY_TOTAL_MISMATCH,
                    message=(
                        f"Week totals {total} min, expected {schedule.target_minutes} min"
                    ),
                    schedule_date=schedule.week_start,
                    details={"actual": total, "expected": schedule.target_minutes},
                )
            )

        return result

    def validate_record(
        self,
        record: DailyScheduleRecord,
        result: Optional[ValidationResult] = None,
    ) -> ValidationResult:
        """Validate a single day's record."""
        if result is None:
            result = ValidationResult()

        clock_in = record.clock_in_minutes
        clock_out = record.clock_out_minutes

        if not record.is_split:
            if clock_out < clock_in:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.NEGATIVE_WORK_SEGMENT,
                        message="Clock-out is before clock-in",
                        schedule_date=record.schedule_date,
                    )
                )
            return result

        if record.lunch_minutes <= 0:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.INVALID_LUNCH_ORDER,
                    message="Lunch does not end after it starts",
                    schedule_date=record.schedule_date,
                )
            )

        if stamp_minutes(record.lunch_start) < clock_in:
            result.add_warning(
                f"{record.schedule_date.isoformat()}: lunch starts before clock-in"
            )
        if clock_out < stamp_minutes(record.lunch_end):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.NEGATIVE_WORK_SEGMENT,
                    message="Clock-out is before lunch ends",
                    schedule_date=record.schedule_date,
                )
            )

        if clock_in % 60 == clock_out % 60:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.MINUTE_COLLISION,
                    message=f"Clock-in and clock-out share minute :{clock_in % 60:02d}",
                    schedule_date=record.schedule_date,
                )
            )

        return result
