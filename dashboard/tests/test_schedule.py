# dashboard/tests/test_schedule.py

from datetime import date, time, timedelta

from django.test import SimpleTestCase, TestCase

from booking.tests.helpers import make_barber, open_window
from dashboard.models import Availability
from dashboard.schedule import generate_weekly_availability, parse_hours, windows_overlap


class ParseHoursTests(SimpleTestCase):
    def test_multiple_ranges_sorted(self):
        self.assertEqual(
            parse_hours("13:00-17:00, 09:00-12:00"),
            [(time(9), time(12)), (time(13), time(17))],
        )

    def test_blank_is_no_ranges(self):
        self.assertEqual(parse_hours(""), [])
        self.assertEqual(parse_hours(" , "), [])

    def test_invalid(self):
        for text in ("9-5", "09:00", "12:00-09:00", "09:00-12:00, 11:00-13:00", "aa:bb-cc:dd"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_hours(text)


class WeeklyGenerationTests(TestCase):
    def setUp(self):
        self.barber = make_barber()
        self.monday = date(2030, 6, 10)

    def test_generates_each_enabled_day(self):
        weekly = {0: [(time(9), time(12)), (time(13), time(17))], 4: [(time(10), time(14))]}

        count = generate_weekly_availability(self.barber, weekly, start_day=self.monday, weeks=2)

        self.assertEqual(count, 6)
        days = sorted({w.date.weekday() for w in Availability.objects.filter(barber=self.barber)})
        self.assertEqual(days, [0, 4])

    def test_replaces_future_windows_only(self):
        past = open_window(self.barber, self.monday - timedelta(days=1), "09:00", "10:00")
        open_window(self.barber, self.monday + timedelta(days=2), "08:00", "09:00")

        generate_weekly_availability(self.barber, {0: [(time(9), time(17))]}, start_day=self.monday, weeks=1)

        remaining = Availability.objects.filter(barber=self.barber).order_by("date")
        self.assertEqual([w.pk for w in remaining][0], past.pk)
        self.assertEqual(remaining.count(), 2)

    def test_empty_template_is_rejected(self):
        with self.assertRaises(ValueError):
            generate_weekly_availability(self.barber, {}, start_day=self.monday, weeks=4)

    def test_windows_overlap(self):
        window = open_window(self.barber, self.monday, "09:00", "12:00")
        self.assertTrue(windows_overlap(self.barber, self.monday, time(11), time(13)))
        self.assertFalse(windows_overlap(self.barber, self.monday, time(12), time(13)))
        self.assertFalse(windows_overlap(self.barber, self.monday, time(9), time(12), exclude_pk=window.pk))
