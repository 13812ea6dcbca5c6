"""
slot_utils.py
-------------
Helpers to turn one availability window into fixed-length appointment slots,
plus the small time rules around them (overlap test, day parsing, the booking
query range and the cancellation cutoff).

Nothing in here touches the database or reads the clock.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone as dt_timezone

from django.utils.dateparse import parse_date

CANCELLATION_CUTOFF_HOURS = 24


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime
    available: bool

    def as_dict(self):
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "available": self.available,
        }


def parse_clock(value) -> time:
    """
    Accept a time or an 'HH:MM' / 'HH:MM:SS' string.
    Seconds are dropped so the grid is always minute-aligned.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    parts = (value or "").strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid clock time: {value!r}")
    return time(int(parts[0]), int(parts[1]))


def parse_day(value) -> date:
    """
    Convert 'YYYY-MM-DD' (or an ISO datetime, trimmed to its date part)
    into a date. Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = (value or "").strip()
    if "T" in text:
        text = text.split("T", 1)[0].strip()
    elif " " in text:
        text = text.split(" ", 1)[0].strip()

    try:
        day = parse_date(text)
    except ValueError:
        day = None
    if day is None:
        raise ValueError("Invalid date format. Use YYYY-MM-DD.")
    return day


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    # Half-open intervals: touching ends do not collide.
    return start_a < end_b and start_b < end_a


def _instant(day: date, clock: time, tz) -> datetime:
    return datetime.combine(day, clock, tzinfo=tz).astimezone(dt_timezone.utc)


def generate_time_slots(
    day: date,
    start_time,
    end_time,
    duration_minutes: int,
    booked=(),
    tz=dt_timezone.utc,
):
    """
    Partition the window [start_time, end_time) on `day` into back-to-back
    slots of `duration_minutes`.

    Args:
        day: calendar day of the window
        start_time, end_time: wall-clock times in `tz` (time or 'HH:MM[:SS]')
        duration_minutes: positive slot length
        booked: iterable of (start, end) aware datetimes already reserved
        tz: time zone the wall-clock times belong to

    Returns:
        list[Slot] in chronological order. A trailing slot that would run past
        the window end is not emitted. Slot instants are UTC.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be a positive number of minutes.")

    window_start = _instant(day, parse_clock(start_time), tz)
    window_end = _instant(day, parse_clock(end_time), tz)
    step = timedelta(minutes=duration_minutes)
    intervals = [(b_start, b_end) for b_start, b_end in booked]

    slots = []
    current = window_start
    while current + step <= window_end:
        slot_end = current + step
        taken = any(overlaps(current, slot_end, b_start, b_end) for b_start, b_end in intervals)
        slots.append(Slot(start=current, end=slot_end, available=not taken))
        current = slot_end

    return slots


def booking_query_range(day: date, tz=dt_timezone.utc):
    """
    Bounds used to fetch a day's bookings: the UTC calendar day
    [00:00:00Z, 23:59:59Z], widened to cover the local calendar day in `tz`.
    """
    utc_start = datetime.combine(day, time.min, tzinfo=dt_timezone.utc)
    utc_end = datetime.combine(day, time(23, 59, 59), tzinfo=dt_timezone.utc)
    local_start = _instant(day, time.min, tz)
    local_end = _instant(day + timedelta(days=1), time.min, tz)
    return min(utc_start, local_start), max(utc_end, local_end)


def can_cancel(starts_at: datetime, now: datetime) -> bool:
    """True when at least 24 whole hours remain before `starts_at`."""
    return (starts_at - now) // timedelta(hours=1) >= CANCELLATION_CUTOFF_HOURS
