"""Tests for text reports and PDF timesheets."""

import random
from datetime import date

import pytest

from shiftclock.domain.models import ExceptionType, ScheduleConfig, ScheduleException, WeeklySchedule
from shiftclock.output.pdf_generator import TimesheetPDFGenerator
from shiftclock.output.report_generator import WeeklyReportGenerator
from shiftclock.scheduling.scheduler import WeeklyScheduler

MONDAY = date(2025, 1, 6)


@pytest.fixture
def schedule():
    scheduler = WeeklyScheduler(rng=random.Random(8))
    holiday = ScheduleException(date(2025, 1, 9), ExceptionType.HOLIDAY)
    return scheduler.generate_schedule(MONDAY, ScheduleConfig(), [holiday])


class TestWeeklyReportGenerator:
    """Tests for the text report."""

    def test_report_content(self, schedule):
        text = WeeklyReportGenerator().generate_to_string(schedule)
        assert "WEEKLY ATTENDANCE - week of 2025-01-06" in text
        assert "Monday" in text
        assert "Thursday" not in text
        assert "Total worked: 32h 0m (1920 min)" in text
        assert "split" in text and "continuous" in text

    def test_spanish_report(self, schedule):
        text = WeeklyReportGenerator(locale="es").generate_to_string(schedule)
        assert "Lunes" in text

    def test_special_week_line(self):
        special = ScheduleException(
            MONDAY, ExceptionType.SPECIAL_WEEK, weekly_hours=20, split_days=frozenset()
        )
        schedule = WeeklyScheduler(rng=random.Random(1)).generate_schedule(
            MONDAY, ScheduleConfig(), [special]
        )
        text = WeeklyReportGenerator().generate_to_string(schedule)
        assert "Special week: 20h target, split days: none" in text

    def test_empty_week(self):
        text = WeeklyReportGenerator().generate_to_string(WeeklySchedule(week_start=MONDAY))
        assert "No work days this week." in text

    def test_write_file(self, schedule, tmp_path):
        path = tmp_path / "week.txt"
        content = WeeklyReportGenerator().generate(schedule, path)
        assert path.read_text(encoding="utf-8") == content


class TestTimesheetPDFGenerator:
    """Tests for the PDF timesheet."""

    def test_buffer_is_pdf(self, schedule):
        pytest.importorskip("reportlab")
        buffer = TimesheetPDFGenerator().generate_to_buffer(schedule)
        assert buffer.read(4) == b"%PDF"

    def test_empty_week_pdf(self, tmp_path):
        pytest.importorskip("reportlab")
        path = tmp_path / "empty.pdf"
        TimesheetPDFGenerator(locale="es").generate(WeeklySchedule(week_start=MONDAY), path)
        assert path.read_bytes().startswith(b"%PDF")
