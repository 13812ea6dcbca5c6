# booking/tests/test_slot_utils.py

from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from booking.services.slot_utils import (
    Slot,
    booking_query_range,
    can_cancel,
    generate_time_slots,
    overlaps,
    parse_clock,
    parse_day,
)

UTC = dt_timezone.utc
DAY = date(2030, 6, 10)


def utc(hour, minute=0, day=DAY):
    return datetime.combine(day, time(hour, minute), tzinfo=UTC)


class GenerateTimeSlotsTests(SimpleTestCase):
    def test_full_day_window_without_bookings(self):
        slots = generate_time_slots(DAY, "09:00", "18:00", 45)

        self.assertEqual(slots[0], Slot(start=utc(9), end=utc(9, 45), available=True))
        self.assertEqual(len(slots), 12)
        self.assertEqual(slots[-1].start, utc(17, 15))
        self.assertTrue(all(s.end <= utc(18) for s in slots))
        self.assertTrue(all(s.available for s in slots))

    def test_booked_slot_and_short_remainder(self):
        slots = generate_time_slots(DAY, "09:00", "10:00", 45, booked=[(utc(9), utc(9, 45))])

        # 09:45 + 45min runs past 10:00, so only one slot
        self.assertEqual(slots, [Slot(start=utc(9), end=utc(9, 45), available=False)])

    def test_slots_are_contiguous(self):
        slots = generate_time_slots(DAY, time(8, 0), time(12, 0), 30)
        for prev, nxt in zip(slots, slots[1:]):
            self.assertEqual(prev.end, nxt.start)
            self.assertEqual(nxt.end - nxt.start, timedelta(minutes=30))

    def test_partial_overlap_blocks_slot(self):
        # Booking 09:30-10:00 hits both 09:00-09:45 and 09:45-10:30
        slots = generate_time_slots(DAY, "09:00", "11:15", 45, booked=[(utc(9, 30), utc(10))])
        self.assertEqual([s.available for s in slots], [False, False, True])

    def test_touching_booking_does_not_block(self):
        slots = generate_time_slots(DAY, "09:00", "10:30", 45, booked=[(utc(8), utc(9))])
        self.assertTrue(all(s.available for s in slots))

    def test_window_shorter_than_duration(self):
        self.assertEqual(generate_time_slots(DAY, "09:00", "09:30", 45), [])

    def test_seconds_are_ignored(self):
        slots = generate_time_slots(DAY, "09:00:59", "10:00:10", 30)
        self.assertEqual([s.start for s in slots], [utc(9), utc(9, 30)])

    def test_same_input_same_output(self):
        booked = [(utc(10), utc(10, 30))]
        self.assertEqual(
            generate_time_slots(DAY, "09:00", "12:00", 30, booked=booked),
            generate_time_slots(DAY, "09:00", "12:00", 30, booked=booked),
        )

    def test_inverted_window_is_empty(self):
        self.assertEqual(generate_time_slots(DAY, "12:00", "09:00", 30), [])

    def test_rejects_non_positive_duration(self):
        with self.assertRaises(ValueError):
            generate_time_slots(DAY, "09:00", "10:00", 0)

    def test_local_wall_clock_is_converted_to_utc(self):
        tz = ZoneInfo("America/New_York")
        slots = generate_time_slots(DAY, "09:00", "10:00", 60, tz=tz)
        # June: EDT, UTC-4
        self.assertEqual(slots, [Slot(start=utc(13), end=utc(14), available=True)])

    def test_dst_spring_forward_keeps_real_durations(self):
        tz = ZoneInfo("America/New_York")
        transition = date(2030, 3, 10)
        slots = generate_time_slots(transition, "00:00", "04:00", 60, tz=tz)

        # 00:00 EST .. 04:00 EDT is three real hours
        self.assertEqual(len(slots), 3)
        for slot in slots:
            self.assertEqual(slot.end - slot.start, timedelta(hours=1))
        self.assertEqual(slots[0].start, utc(5, day=transition))
        self.assertEqual(slots[-1].end, utc(8, day=transition))


class OverlapTests(SimpleTestCase):
    def test_half_open_intervals(self):
        self.assertTrue(overlaps(utc(9), utc(10), utc(9, 30), utc(11)))
        self.assertTrue(overlaps(utc(9), utc(12), utc(10), utc(11)))
        self.assertFalse(overlaps(utc(9), utc(10), utc(10), utc(11)))
        self.assertFalse(overlaps(utc(10), utc(11), utc(9), utc(10)))


class ParsingTests(SimpleTestCase):
    def test_parse_day(self):
        self.assertEqual(parse_day("2030-06-10"), DAY)
        self.assertEqual(parse_day("2030-06-10T15:00:00Z"), DAY)
        self.assertEqual(parse_day(" 2030-06-10 08:00 "), DAY)
        self.assertEqual(parse_day(utc(12)), DAY)

    def test_parse_day_rejects_garbage(self):
        for value in ("", "tomorrow", "2030-13-01", "10/06/2030", None):
            with self.subTest(value=value):
                with self.assertRaisesMessage(ValueError, "Invalid date format. Use YYYY-MM-DD."):
                    parse_day(value)

    def test_parse_clock(self):
        self.assertEqual(parse_clock("09:30"), time(9, 30))
        self.assertEqual(parse_clock("09:30:45"), time(9, 30))
        self.assertEqual(parse_clock(time(9, 30, 5)), time(9, 30))
        with self.assertRaises(ValueError):
            parse_clock("0930")
        with self.assertRaises(ValueError):
            parse_clock("25:00")


class BookingQueryRangeTests(SimpleTestCase):
    def test_utc_site_covers_whole_utc_day(self):
        start, end = booking_query_range(DAY)
        self.assertEqual(start, utc(0))
        self.assertGreaterEqual(end, utc(23, 59) + timedelta(seconds=59))

    def test_local_day_is_included(self):
        tz = ZoneInfo("America/New_York")
        start, end = booking_query_range(DAY, tz)
        self.assertEqual(start, utc(0))
        # local midnight of the next day, 04:00Z during EDT
        self.assertEqual(end, utc(4, day=DAY + timedelta(days=1)))


class CanCancelTests(SimpleTestCase):
    def test_cutoff_boundaries(self):
        now = utc(9)
        self.assertTrue(can_cancel(now + timedelta(hours=24), now))
        self.assertTrue(can_cancel(now + timedelta(hours=24, minutes=30), now))
        self.assertFalse(can_cancel(now + timedelta(hours=23, minutes=59, seconds=59), now))
        self.assertFalse(can_cancel(now + timedelta(hours=1), now))
        self.assertFalse(can_cancel(now - timedelta(hours=1), now))
