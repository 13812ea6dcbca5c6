"""
schedule.py
-----------
Availability bookkeeping for the dashboard.

- parse_hours turns "09:00-12:00, 13:00-17:00" into ordered (start, end) pairs.
- generate_weekly_availability replaces a barber's future windows with the
  ones produced by a weekly template for the next N weeks.
"""

import logging
from datetime import timedelta

from django.db import transaction

from booking.services.slot_utils import parse_clock
from .models import Availability

logger = logging.getLogger(__name__)

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_hours(text):
    """
    Parse comma-separated 'HH:MM-HH:MM' ranges.

    Raises:
        ValueError: malformed range, start not before end, or overlapping ranges.
    """
    ranges = []
    for chunk in (text or "").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "-" not in chunk:
            raise ValueError(f"Use HH:MM-HH:MM, got {chunk!r}.")
        start_raw, end_raw = chunk.split("-", 1)
        start, end = parse_clock(start_raw), parse_clock(end_raw)
        if start >= end:
            raise ValueError(f"{chunk}: start must be before end.")
        ranges.append((start, end))

    ranges.sort()
    for (_, prev_end), (next_start, _) in zip(ranges, ranges[1:]):
        if next_start < prev_end:
            raise ValueError("Time ranges on the same day must not overlap.")
    return ranges


def windows_overlap(barber, day, start_time, end_time, exclude_pk=None) -> bool:
    qs = Availability.objects.filter(
        barber=barber,
        date=day,
        start_time__lt=end_time,
        end_time__gt=start_time,
    )
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


@transaction.atomic
def generate_weekly_availability(barber, weekly, start_day, weeks=4):
    """
    Replace the barber's availability from `start_day` on with windows built
    from `weekly` ({weekday index 0=Mon: [(start, end), ...]}) for `weeks` weeks.

    Returns:
        int: number of windows created

    Raises:
        ValueError: if the template has no enabled day.
    """
    entries = []
    for offset in range(weeks * 7):
        day = start_day + timedelta(days=offset)
        for start, end in weekly.get(day.weekday(), []):
            entries.append(Availability(barber=barber, date=day, start_time=start, end_time=end))

    if not entries:
        raise ValueError("Please enable at least one day in your weekly schedule.")

    Availability.objects.filter(barber=barber, date__gte=start_day).delete()
    Availability.objects.bulk_create(entries)
    logger.info(
        "Generated %d availability window(s) for barber %s from %s (%d weeks)",
        len(entries), barber.pk, start_day, weeks,
    )
    return len(entries)
