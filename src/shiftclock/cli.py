"""Command-line interface for the shiftclock attendance generator."""

import argparse
import json
import logging
import random
import sys
from datetime import date, time, timedelta
from typing import Optional

from shiftclock.config import load_config, load_exceptions
from shiftclock.domain.calendar import parse_date, weekday_number
from shiftclock.domain.models import (
    ExceptionType,
    LunchDuration,
    ScheduleConfig,
    ScheduleException,
    TimeWindow,
    WeeklySchedule,
)
from shiftclock.output.formatting import DAY_NAMES
from shiftclock.output.pdf_generator import TimesheetPDFGenerator
from shiftclock.output.report_generator import WeeklyReportGenerator
from shiftclock.output.submission import build_submission_payload
from shiftclock.scheduling.scheduler import WeeklyScheduler
from shiftclock.validation.validator import ScheduleInputError, ScheduleValidator

logger = logging.getLogger(__name__)


def current_monday(today: Optional[date] = None) -> date:
    """Monday of the week containing today."""
    today = today or date.today()
    return today - timedelta(days=weekday_number(today) - 1)


def parse_week(value: Optional[str]) -> date:
    """Parse --week, defaulting to the current week's Monday."""
    if value is None:
        return current_monday()
    try:
        return parse_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid week start {value!r}, expected YYYY-MM-DD"
        ) from None


def build_scheduler(seed: Optional[int]) -> WeeklyScheduler:
    """Scheduler with a seeded random source when a seed is given."""
    return WeeklyScheduler(rng=random.Random(seed))


def print_validation(schedule: WeeklySchedule) -> None:
    """Print the output validation verdict."""
    result = ScheduleValidator().validate_week(schedule)
    if result.is_valid:
        print("\nValidation: PASSED")
    else:
        print(f"\nValidation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")
    for warning in result.warnings[:3]:
        print(f"    warning: {warning}")


def run_generate(
    week: Optional[str],
    config_path: Optional[str],
    exceptions_path: Optional[str],
    seed: Optional[int] = None,
    locale: str = "en",
    as_json: bool = False,
    pdf_path: Optional[str] = None,
    report_path: Optional[str] = None,
) -> None:
    """Generate and print one week of attendance."""
    week_start = parse_week(week)
    config = load_config(config_path)
    exceptions = load_exceptions(exceptions_path)

    scheduler = build_scheduler(seed)
    schedule = scheduler.generate_schedule(week_start, config, exceptions)

    if as_json:
        print(json.dumps(
            {
                "weekStart": week_start.isoformat(),
                "records": [r.to_dict() for r in schedule.records],
                "totals": {
                    "hours": schedule.totals.hours,
                    "minutes": schedule.totals.minutes,
                    "totalMinutes": schedule.totals.total_minutes,
                    "formatted": schedule.totals.formatted,
                },
            },
            indent=2,
        ))
    else:
        report = WeeklyReportGenerator(locale=locale)
        print(report.generate_to_string(schedule))
        print_validation(schedule)

    if report_path:
        WeeklyReportGenerator(locale=locale).generate(schedule, report_path)
        print(f"\nReport written to {report_path}", file=sys.stderr)

    if pdf_path:
        TimesheetPDFGenerator(locale=locale).generate(schedule, pdf_path)
        print(f"\nPDF written to {pdf_path}", file=sys.stderr)


def run_shifts(
    week: Optional[str],
    config_path: Optional[str],
    exceptions_path: Optional[str],
    seed: Optional[int] = None,
    timezone: Optional[str] = None,
) -> None:
    """Print the zone-qualified shift segments for one week as JSON."""
    week_start = parse_week(week)
    scheduler = build_scheduler(seed)
    schedule = scheduler.generate_schedule(
        week_start,
        load_config(config_path),
        load_exceptions(exceptions_path),
    )
    print(json.dumps(build_submission_payload(schedule.records, timezone), indent=2))


def run_demo(seed: Optional[int] = None, locale: str = "en") -> None:
    """Generate three sample weeks: plain, with a holiday, and a special week."""
    week_start = date(2025, 1, 6)
    config = ScheduleConfig(
        weekly_hours=40,
        work_days=frozenset({1, 2, 3, 4, 5}),
        clock_in_range=TimeWindow(time(7, 0), time(7, 30)),
        lunch_start_range=TimeWindow(time(14, 0), time(15, 0)),
        lunch_duration=LunchDuration(min_minutes=45, max_minutes=60),
        split_shift_days=frozenset({1, 2, 3}),
        random_variance=0,
    )

    scenarios = [
        ("Regular week", []),
        (
            "Holiday on Thursday",
            [ScheduleException(date(2025, 1, 9), ExceptionType.HOLIDAY, reason="demo")],
        ),
        (
            "Special week: 20h, no split days",
            [
                ScheduleException(
                    week_start,
                    ExceptionType.SPECIAL_WEEK,
                    weekly_hours=20,
                    split_days=frozenset(),
                )
            ],
        ),
    ]

    scheduler = build_scheduler(seed)
    report = WeeklyReportGenerator(locale=locale)
    for title, exceptions in scenarios:
        print(f"\n{title}")
        schedule = scheduler.generate_schedule(week_start, config, exceptions)
        print(report.generate_to_string(schedule))
        print_validation(schedule)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="shiftclock - Weekly Attendance Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                                  Run three sample weeks
  %(prog)s generate --week 2025-01-06            Generate with default settings
  %(prog)s generate -c config.json -e exc.json   Use stored config and exceptions
  %(prog)s generate --seed 7 --pdf week.pdf      Reproducible week plus PDF
  %(prog)s shifts --timezone Europe/Madrid       Zone-qualified shift segments
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_week_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--week", "-w",
            type=str,
            help="Week start date, a Monday (default: this week)",
        )
        sub.add_argument(
            "--config", "-c",
            type=str,
            help="Configuration JSON file (default: built-in defaults)",
        )
        sub.add_argument(
            "--exceptions", "-e",
            type=str,
            help="Exceptions JSON file",
        )
        sub.add_argument(
            "--seed", "-s",
            type=int,
            help="Random seed for reproducible output",
        )

    generate_parser = subparsers.add_parser("generate", help="Generate a week of attendance")
    add_week_arguments(generate_parser)
    generate_parser.add_argument(
        "--locale", "-l",
        type=str,
        default="en",
        choices=sorted(DAY_NAMES),
        help="Language for day names (default: en)",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print raw records and totals as JSON",
    )
    generate_parser.add_argument(
        "--pdf",
        type=str,
        help="Output PDF timesheet path",
    )
    generate_parser.add_argument(
        "--report", "-o",
        type=str,
        help="Output text report path",
    )

    shifts_parser = subparsers.add_parser(
        "shifts",
        help="Print zone-qualified shift segments for submission",
    )
    add_week_arguments(shifts_parser)
    shifts_parser.add_argument(
        "--timezone", "-t",
        type=str,
        help="IANA time zone name (default: host local zone)",
    )

    demo_parser = subparsers.add_parser("demo", help="Run sample weeks")
    demo_parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Random seed for reproducible output",
    )
    demo_parser.add_argument(
        "--locale", "-l",
        type=str,
        default="en",
        choices=sorted(DAY_NAMES),
        help="Language for day names (default: en)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "generate":
            run_generate(
                args.week,
                args.config,
                args.exceptions,
                seed=args.seed,
                locale=args.locale,
                as_json=args.json,
                pdf_path=args.pdf,
                report_path=args.report,
            )
            return 0
        elif args.command == "shifts":
            run_shifts(
                args.week,
                args.config,
                args.exceptions,
                seed=args.seed,
                timezone=args.timezone,
            )
            return 0
        elif args.command == "demo":
            run_demo(seed=args.seed, locale=args.locale)
            return 0
        else:
            parser.print_help()
            return 1
    except (
        ScheduleInputError,
        argparse.ArgumentTypeError,
        json.JSONDecodeError,
        OSError,
    ) as exc:
        logger.debug("Input rejected", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
