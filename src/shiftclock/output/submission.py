"""Shift segments for the submission collaborator.

Generated records carry local wall-clock stamps only. Before transmission,
each worked day becomes one clocked segment (continuous days) or two
(split days: check-in to lunch start, lunch end to check-out), and every
stamp is qualified with the UTC offset of the employee's time zone.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo

from shiftclock.domain.calendar import stamp_minutes
from shiftclock.domain.models import DailyScheduleRecord


@dataclass(frozen=True)
class ShiftSegment:
    """One clocked segment, with zone-qualified ISO 8601 stamps."""

    schedule_date: date
    clock_in: str
    clock_out: str

    def to_dict(self) -> dict:
        return {
            "date": self.schedule_date.isoformat(),
            "clockIn": self.clock_in,
            "clockOut": self.clock_out,
        }


def resolve_timezone(tz: Optional[Union[str, tzinfo]] = None) -> Optional[tzinfo]:
    """Turn a zone name into a tzinfo.

    None stays None and means the host's local zone, whose offset is looked
    up per stamp so dates on either side of a DST change get their own.
    """
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def qualify_stamp(schedule_date: date, value: str, tz: Optional[tzinfo] = None) -> str:
    """Attach the zone's UTC offset to a local stamp.

    Stamps past midnight roll over onto the next calendar day.
    """
    local = datetime.combine(schedule_date, time()) + timedelta(minutes=stamp_minutes(value))
    if tz is None:
        return local.astimezone().isoformat()
    return local.replace(tzinfo=tz).isoformat()


def to_shift_segments(
    record: DailyScheduleRecord,
    tz: Optional[Union[str, tzinfo]] = None,
) -> list[ShiftSegment]:
    """Clocked segments for one record."""
    zone = resolve_timezone(tz)
    d = record.schedule_date

    if record.is_split:
        bounds = [
            (record.checkin, record.lunch_start),
            (record.lunch_end, record.checkout),
        ]
    else:
        bounds = [(record.checkin, record.checkout)]

    return [
        ShiftSegment(
            schedule_date=d,
            clock_in=qualify_stamp(d, start, zone),
            clock_out=qualify_stamp(d, end, zone),
        )
        for start, end in bounds
    ]


def build_submission_payload(
    records: Iterable[DailyScheduleRecord],
    tz: Optional[Union[str, tzinfo]] = None,
) -> list[dict]:
    """JSON-ready segment dicts for a week of records."""
    zone = resolve_timezone(tz)
    return [
        segment.to_dict()
        for record in records
        for segment in to_shift_segments(record, zone)
    ]
