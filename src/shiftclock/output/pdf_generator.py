"""PDF generation for weekly timesheets.

This module creates a printable one-page timesheet showing:
- A timeline row per day of the week with work segments and lunch breaks
- Clock-in, clock-out and worked time per day
- Weekly totals against the reconciled target
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from shiftclock.domain.calendar import (
    MINUTES_PER_HOUR,
    format_duration,
    minutes_to_hhmm,
    stamp_minutes,
    week_dates,
    weekday_number,
)
from shiftclock.domain.models import DailyScheduleRecord, WeeklySchedule
from shiftclock.output.formatting import DAY_NAMES, DEFAULT_LOCALE

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "work": (0.4, 0.7, 0.4),  # Green
    "lunch": (1.0, 0.9, 0.5),  # Yellow
    "off": (0.95, 0.95, 0.95),  # Light gray
}


class TimesheetPDFGenerator:
    """Generates a printable PDF timesheet for one week.

    Example:
        >>> generator = TimesheetPDFGenerator()
        >>> generator.generate(schedule, "timesheet.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        locale: str = DEFAULT_LOCALE,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.locale = locale

    def generate(self, schedule: WeeklySchedule, output_path: Union[str, Path]) -> None:
        """Generate the timesheet and save it to a file."""
        try:
            from reportlab.lib.pagesizes import landscape, letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        c = canvas.Canvas(str(output_path), pagesize=landscape(letter))
        self._draw_timesheet(c, schedule)
        c.save()

    def generate_to_buffer(self, schedule: WeeklySchedule) -> BytesIO:
        """Generate the timesheet and return it as a bytes buffer."""
        try:
            from reportlab.lib.pagesizes import landscape, letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=landscape(letter))
        self._draw_timesheet(c, schedule)
        c.save()
        buffer.seek(0)
        return buffer

    def _timeline_bounds(self, schedule: WeeklySchedule) -> tuple[int, int]:
        """Whole-hour bounds (in minutes) covering every generated stamp."""
        if not schedule.records:
            return 6 * MINUTES_PER_HOUR, 20 * MINUTES_PER_HOUR
        earliest = min(r.clock_in_minutes for r in schedule.records)
        latest = max(r.clock_out_minutes for r in schedule.records)
        start = (earliest // MINUTES_PER_HOUR) * MINUTES_PER_HOUR
        end = -(-latest // MINUTES_PER_HOUR) * MINUTES_PER_HOUR
        return start, max(end, start + MINUTES_PER_HOUR)

    def _draw_timesheet(self, c, schedule: WeeklySchedule) -> None:
        """Draw the single timesheet page."""
        self._draw_header(c, schedule)

        day_start, day_end = self._timeline_bounds(schedule)
        timeline_left = self.margin + 150
        timeline_right = self.page_width - self.margin - 90
        timeline_width = timeline_right - timeline_left
        scale = timeline_width / (day_end - day_start)

        top = self.page_height - self.margin - 80
        self._draw_time_axis(c, day_start, day_end, timeline_left, top, scale)

        row_height = 40
        y = top - 10
        for d in week_dates(schedule.week_start):
            y -= row_height
            name = DAY_NAMES[self.locale][weekday_number(d) - 1]
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica-Bold", 10)
            c.drawString(self.margin, y + row_height / 2, name)
            c.setFont("Helvetica", 8)
            c.drawString(self.margin, y + row_height / 2 - 11, d.isoformat())

            record = schedule.get_record(d)
            c.setFillColorRGB(*COLORS["off"])
            c.rect(timeline_left, y + 6, timeline_width, row_height - 12, fill=1, stroke=0)
            if record is None:
                c.setFillColorRGB(0.5, 0.5, 0.5)
                c.setFont("Helvetica-Oblique", 9)
                c.drawString(timeline_right + 10, y + row_height / 2 - 3, "Off")
                continue

            self._draw_record_row(
                c, record, day_start, timeline_left, scale, y + 6, row_height - 12
            )
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 9)
            c.drawString(
                timeline_right + 10,
                y + row_height / 2 - 3,
                format_duration(record.worked_minutes),
            )

        self._draw_totals(c, schedule, y - 30)
        self._draw_legend(c, self.margin, self.margin + 10)
        c.showPage()

    def _draw_header(self, c, schedule: WeeklySchedule) -> None:
        """Draw page header with week and target."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Weekly Timesheet - week of {schedule.week_start.strftime('%B %d, %Y')}",
        )

        c.setFont("Helvetica", 10)
        subtitle = f"Work days: {len(schedule.records)}"
        if schedule.overrides is not None and schedule.overrides.is_special:
            subtitle += f"  |  Special week: {schedule.overrides.weekly_hours:g}h"
        c.drawString(self.margin, self.page_height - self.margin - 35, subtitle)

    def _draw_time_axis(
        self,
        c,
        day_start: int,
        day_end: int,
        x: float,
        y: float,
        scale: float,
    ) -> None:
        """Draw time axis with hour markers."""
        c.setFont("Helvetica", 8)
        c.setStrokeColorRGB(0.7, 0.7, 0.7)
        c.setFillColorRGB(0, 0, 0)

        for minutes in range(day_start, day_end + 1, MINUTES_PER_HOUR):
            tick_x = x + (minutes - day_start) * scale
            c.line(tick_x, y, tick_x, y - 5)
            c.drawCentredString(tick_x, y + 5, minutes_to_hhmm(minutes))

    def _draw_record_row(
        self,
        c,
        record: DailyScheduleRecord,
        day_start: int,
        timeline_x: float,
        scale: float,
        y: float,
        height: float,
    ) -> None:
        """Draw one day's work segments and lunch."""
        if record.is_split:
            lunch_start = stamp_minutes(record.lunch_start)
            lunch_end = stamp_minutes(record.lunch_end)
            segments = [
                (record.clock_in_minutes, lunch_start, "work"),
                (lunch_start, lunch_end, "lunch"),
                (lunch_end, record.clock_out_minutes, "work"),
            ]
        else:
            segments = [(record.clock_in_minutes, record.clock_out_minutes, "work")]

        for start, end, kind in segments:
            if end <= start:
                continue
            c.setFillColorRGB(*COLORS[kind])
            c.rect(
                timeline_x + (start - day_start) * scale,
                y,
                (end - start) * scale,
                height,
                fill=1,
                stroke=0,
            )

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 7)
        c.drawString(
            timeline_x + (record.clock_in_minutes - day_start) * scale + 2,
            y + height / 2 - 3,
            minutes_to_hhmm(record.clock_in_minutes),
        )
        c.drawRightString(
            timeline_x + (record.clock_out_minutes - day_start) * scale - 2,
            y + height / 2 - 3,
            minutes_to_hhmm(record.clock_out_minutes),
        )

        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.setLineWidth(0.5)
        c.rect(
            timeline_x + (record.clock_in_minutes - day_start) * scale,
            y,
            (record.clock_out_minutes - record.clock_in_minutes) * scale,
            height,
            fill=0,
            stroke=1,
        )

    def _draw_totals(self, c, schedule: WeeklySchedule, y: float) -> None:
        """Draw weekly totals."""
        totals = schedule.totals
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, f"Total worked: {totals.formatted}")
        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin + 200,
            y,
            f"Target: {format_duration(schedule.target_minutes)}",
        )

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        c.setFont("Helvetica", 7)
        current_x = x + 45
        for key, label in (("work", "Work"), ("lunch", "Lunch"), ("off", "Off")):
            c.setFillColorRGB(*COLORS[key])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 70
