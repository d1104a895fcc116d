"""Plain-text output for generated weeks.

This module creates a text report showing:
- Per-day clock-in, lunch and clock-out times
- Weekly totals against the reconciled target
- Special-week overrides that were applied
"""

from pathlib import Path
from typing import Union

from shiftclock.domain.calendar import format_duration, stamp_clock
from shiftclock.domain.models import WeeklySchedule
from shiftclock.output.formatting import DEFAULT_LOCALE, format_for_display


class WeeklyReportGenerator:
    """Generates a human-readable text report for a week.

    Example:
        >>> generator = WeeklyReportGenerator(locale="es")
        >>> print(generator.generate_to_string(schedule))
    """

    def __init__(self, locale: str = DEFAULT_LOCALE, width: int = 72):
        self.locale = locale
        self.width = width

    def generate(self, schedule: WeeklySchedule, output_path: Union[str, Path]) -> str:
        """Generate the report and save it to a file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(schedule)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(self, schedule: WeeklySchedule) -> str:
        """Generate the report and return it as a string."""
        return self._generate_content(schedule)

    def _generate_content(self, schedule: WeeklySchedule) -> str:
        """Generate the full report content."""
        lines = []

        lines.append("=" * self.width)
        lines.append(f"WEEKLY ATTENDANCE - week of {schedule.week_start.isoformat()}")
        lines.append("=" * self.width)

        overrides = schedule.overrides
        if overrides is not None and overrides.is_special:
            split = ", ".join(str(d) for d in sorted(overrides.split_shift_days)) or "none"
            lines.append(
                f"Special week: {overrides.weekly_hours:g}h target, split days: {split}"
            )
        lines.append("")

        if not schedule.records:
            lines.append("No work days this week.")
        else:
            lines.append(
                f"{'Date':<10} {'Day':<10} {'In':>5} {'Lunch':^13} {'Out':>5} {'Total':>8}  Type"
            )
            lines.append("-" * self.width)
            for row in format_for_display(schedule.records, self.locale):
                record = row.raw
                if record.is_split:
                    lunch = f"{stamp_clock(record.lunch_start)}-{stamp_clock(record.lunch_end)}"
                else:
                    lunch = "-"
                lines.append(
                    f"{row.date:<10} {row.day_name:<10} {row.clock_in:>5} {lunch:^13} "
                    f"{row.clock_out:>5} {row.total:>8}  {row.type}"
                )

        lines.append("-" * self.width)
        totals = schedule.totals
        lines.append(f"Total worked: {totals.formatted} ({totals.total_minutes} min)")
        lines.append(
            f"Target:       {format_duration(schedule.target_minutes)} "
            f"({schedule.target_minutes} min)"
        )
        lines.append("=" * self.width)

        return "\n".join(lines)
