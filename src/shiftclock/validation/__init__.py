"""Validation module for scheduler inputs and generated weeks."""

from shiftclock.validation.validator import (
    InputValidator,
    ScheduleInputError,
    ScheduleValidator,
    ValidationError,
)

__all__ = [
    "InputValidator",
    "ScheduleInputError",
    "ScheduleValidator",
    "ValidationError",
]
