"""Loading configuration and exceptions from JSON documents.

Documents use the external store's camelCase shape::

    {
        "weeklyHours": 40,
        "workDays": [1, 2, 3, 4, 5],
        "clockInRange": {"start": "07:00", "end": "07:30"},
        "lunchStartRange": {"start": "14:00", "end": "15:00"},
        "lunchDuration": {"min": 45, "max": 60},
        "splitShiftDays": [1, 2, 3],
        "randomVariance": 5
    }

Exceptions are a list of ``{"date", "endDate"?, "type", "reason"?,
"weeklyHours"?, "splitDays"?}`` objects. Missing configuration keys fall back
to ScheduleConfig defaults.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from shiftclock.domain.calendar import parse_date, parse_time_of_day
from shiftclock.domain.models import (
    ExceptionType,
    LunchDuration,
    ScheduleConfig,
    ScheduleException,
    TimeWindow,
)
from shiftclock.validation.validator import (
    ScheduleInputError,
    ValidationError,
    ValidationErrorType,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ScheduleConfig()


def _input_error(error_type: ValidationErrorType, message: str) -> ScheduleInputError:
    return ScheduleInputError([ValidationError(error_type=error_type, message=message)])


def _parse_time(value: Any, field_name: str):
    try:
        return parse_time_of_day(str(value))
    except ValueError:
        raise _input_error(
            ValidationErrorType.INVALID_TIME,
            f"{field_name} must be HH:MM (got {value!r})",
        ) from None


def _parse_date(value: Any, field_name: str):
    try:
        return parse_date(str(value))
    except ValueError:
        raise _input_error(
            ValidationErrorType.INVALID_DATE,
            f"{field_name} must be YYYY-MM-DD (got {value!r})",
        ) from None


def _parse_window(data: Optional[dict], field_name: str, default: TimeWindow) -> TimeWindow:
    if data is None:
        return default
    return TimeWindow(
        start=_parse_time(data.get("start"), f"{field_name}.start"),
        end=_parse_time(data.get("end"), f"{field_name}.end"),
    )


def _parse_weekdays(values: Any, field_name: str) -> frozenset[int]:
    try:
        return frozenset(int(v) for v in values)
    except (TypeError, ValueError):
        raise _input_error(
            ValidationErrorType.INVALID_WEEKDAY,
            f"{field_name} must be a list of weekday numbers (got {values!r})",
        ) from None


def _parse_number(value: Any, field_name: str, convert, error_type: ValidationErrorType):
    try:
        return convert(value)
    except (TypeError, ValueError):
        raise _input_error(
            error_type,
            f"{field_name} must be a number (got {value!r})",
        ) from None


def config_from_dict(data: dict) -> ScheduleConfig:
    """Build a ScheduleConfig from a store document.

    Raises:
        ScheduleInputError: If a time, weekday or numeric value cannot be parsed.
    """
    defaults = DEFAULT_CONFIG
    lunch = data.get("lunchDuration")
    lunch_duration = defaults.lunch_duration
    if lunch is not None:
        lunch_duration = LunchDuration(
            min_minutes=_parse_number(
                lunch.get("min", defaults.lunch_duration.min_minutes),
                "lunchDuration.min",
                int,
                ValidationErrorType.INVALID_LUNCH_DURATION,
            ),
            max_minutes=_parse_number(
                lunch.get("max", defaults.lunch_duration.max_minutes),
                "lunchDuration.max",
                int,
                ValidationErrorType.INVALID_LUNCH_DURATION,
            ),
        )

    return ScheduleConfig(
        weekly_hours=_parse_number(
            data.get("weeklyHours", defaults.weekly_hours),
            "weeklyHours",
            float,
            ValidationErrorType.INVALID_WEEKLY_HOURS,
        ),
        work_days=_parse_weekdays(data.get("workDays", defaults.work_days), "workDays"),
        clock_in_range=_parse_window(
            data.get("clockInRange"), "clockInRange", defaults.clock_in_range
        ),
        lunch_start_range=_parse_window(
            data.get("lunchStartRange"), "lunchStartRange", defaults.lunch_start_range
        ),
        lunch_duration=lunch_duration,
        split_shift_days=_parse_weekdays(
            data.get("splitShiftDays", defaults.split_shift_days), "splitShiftDays"
        ),
        random_variance=_parse_number(
            data.get("randomVariance", defaults.random_variance),
            "randomVariance",
            int,
            ValidationErrorType.INVALID_VARIANCE,
        ),
    )


def exception_from_dict(data: dict) -> ScheduleException:
    """Build a ScheduleException from a store record.

    Raises:
        ScheduleInputError: If the date, range or type cannot be parsed.
    """
    try:
        exception_type = ExceptionType(data.get("type"))
    except ValueError:
        raise _input_error(
            ValidationErrorType.INVALID_EXCEPTION_TYPE,
            f"Unknown exception type {data.get('type')!r}",
        ) from None

    end_date = None
    if data.get("endDate"):
        end_date = _parse_date(data["endDate"], "endDate")

    weekly_hours = None
    split_days = None
    if exception_type is ExceptionType.SPECIAL_WEEK:
        if data.get("weeklyHours") is not None:
            weekly_hours = _parse_number(
                data["weeklyHours"],
                "weeklyHours",
                float,
                ValidationErrorType.INVALID_WEEKLY_HOURS,
            )
        # Presence matters: an empty list overrides, a missing key inherits.
        if "splitDays" in data and data["splitDays"] is not None:
            split_days = _parse_weekdays(data["splitDays"], "splitDays")

    return ScheduleException(
        start_date=_parse_date(data.get("date"), "date"),
        exception_type=exception_type,
        end_date=end_date,
        reason=str(data.get("reason", "")),
        weekly_hours=weekly_hours,
        split_days=split_days,
    )


def config_to_dict(config: ScheduleConfig) -> dict:
    """Store document for a ScheduleConfig."""
    return {
        "weeklyHours": config.weekly_hours,
        "workDays": sorted(config.work_days),
        "clockInRange": {
            "start": config.clock_in_range.start.strftime("%H:%M"),
            "end": config.clock_in_range.end.strftime("%H:%M"),
        },
        "lunchStartRange": {
            "start": config.lunch_start_range.start.strftime("%H:%M"),
            "end": config.lunch_start_range.end.strftime("%H:%M"),
        },
        "lunchDuration": {
            "min": config.lunch_duration.min_minutes,
            "max": config.lunch_duration.max_minutes,
        },
        "splitShiftDays": sorted(config.split_shift_days),
        "randomVariance": config.random_variance,
    }


def load_config(path: Optional[Union[str, Path]] = None) -> ScheduleConfig:
    """Load configuration from a JSON file, or the defaults if path is None."""
    if path is None:
        logger.debug("No configuration file given, using defaults")
        return DEFAULT_CONFIG
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    logger.debug("Loaded configuration from %s", path)
    return config_from_dict(data)


def load_exceptions(path: Optional[Union[str, Path]] = None) -> list[ScheduleException]:
    """Load an exception list from a JSON file, or an empty list if path is None."""
    if path is None:
        return []
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("exceptions", [])
    exceptions = [exception_from_dict(item) for item in data]
    logger.debug("Loaded %d exceptions from %s", len(exceptions), path)
    return exceptions
