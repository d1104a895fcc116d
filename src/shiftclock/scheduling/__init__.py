"""Scheduling engine for generating weekly attendance."""

from shiftclock.scheduling.distributor import DayTarget, TimeDistributor, WeekPlan
from shiftclock.scheduling.exception_resolver import is_work_day, resolve_week_overrides
from shiftclock.scheduling.scheduler import WeeklyScheduler
from shiftclock.scheduling.shift_generator import ShiftGenerator

__all__ = [
    # Orchestration
    "WeeklyScheduler",
    # Pipeline stages
    "is_work_day",
    "resolve_week_overrides",
    "TimeDistributor",
    "ShiftGenerator",
    # Plan types
    "DayTarget",
    "WeekPlan",
]
