"""Policy definitions for schedule generation.

This module contains the tunable rules used by the distributor and the
shift generator, plus the random source abstraction. Policies are kept
separate from the scheduling engine to allow independent testing and easy
modification.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [a, b].

    random.Random satisfies this protocol, so a seeded instance gives
    reproducible schedules.
    """

    def randint(self, a: int, b: int) -> int:
        ...


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def draw_uniform(rng: RandomSource, low: int, high: int) -> int:
    """Draw a uniform integer in [low, high].

    A zero-length or inverted range collapses to low instead of raising.
    """
    if high <= low:
        return low
    return rng.randint(low, high)


class DistributionPolicy(ABC):
    """Abstract base class for weekly time distribution rules."""

    @abstractmethod
    def continuous_minutes(self, base_daily_minutes: int) -> int:
        """Budget for a continuous day in a week that also has split days.

        Args:
            base_daily_minutes: Average daily minutes of a full configured week.

        Returns:
            Minutes budgeted for each continuous day.
        """
        pass

    @abstractmethod
    def day_variance_range(self) -> tuple[int, int]:
        """Range of the random offset added to each non-final day's budget."""
        pass


class CollisionPolicy(ABC):
    """Abstract base class for the split-day minute-collision rule."""

    @abstractmethod
    def adjustment_range(self) -> tuple[int, int]:
        """Range of minutes added to break a clock-in/clock-out minute tie."""
        pass


@dataclass
class DefaultDistributionPolicy(DistributionPolicy):
    """Default distribution policy implementation.

    In mixed weeks continuous days are shortened to 85% of the average day
    and split days, which carry an unpaid lunch, absorb the remainder.
    Every day but the last gets an independent offset of up to ±15 minutes.
    """

    continuous_ratio: float = 0.85
    day_variance_minutes: int = 15

    def continuous_minutes(self, base_daily_minutes: int) -> int:
        return round_half_up(base_daily_minutes * self.continuous_ratio)

    def day_variance_range(self) -> tuple[int, int]:
        return (-self.day_variance_minutes, self.day_variance_minutes)


@dataclass
class DefaultCollisionPolicy(CollisionPolicy):
    """Default collision policy: nudge by 1 to 3 minutes."""

    min_adjustment: int = 1
    max_adjustment: int = 3

    def adjustment_range(self) -> tuple[int, int]:
        return (self.min_adjustment, self.max_adjustment)
