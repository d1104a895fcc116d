"""Output generation for schedules (display rows, reports, PDF, submission)."""

from shiftclock.output.formatting import calculate_totals, format_for_display
from shiftclock.output.pdf_generator import TimesheetPDFGenerator
from shiftclock.output.report_generator import WeeklyReportGenerator
from shiftclock.output.submission import build_submission_payload, to_shift_segments

__all__ = [
    "calculate_totals",
    "format_for_display",
    "to_shift_segments",
    "build_submission_payload",
    "TimesheetPDFGenerator",
    "WeeklyReportGenerator",
]
