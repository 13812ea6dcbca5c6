# dashboard/tests/test_api.py

from datetime import timedelta
from unittest import mock

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from booking.tests.helpers import future_day, make_barber, open_window
from dashboard.models import Availability

URL = "/api/dashboard/availability/"


@override_settings(TIME_ZONE="UTC")
class AvailabilityApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.barber = make_barber(username="owner")
        self.other = make_barber(slug="other", username="other")
        self.day = future_day()

    def test_anonymous_is_forbidden(self):
        self.assertEqual(self.client.get(URL).status_code, 403)

    def test_lists_only_own_windows(self):
        open_window(self.barber, self.day, "09:00", "12:00")
        open_window(self.other, self.day, "09:00", "12:00")
        self.client.force_authenticate(self.barber.user)

        resp = self.client.get(URL)

        self.assertEqual(resp.status_code, 200)
        self.assertEqual([w["barber"] for w in resp.json()], [self.barber.pk])

    def test_create_sets_owner(self):
        self.client.force_authenticate(self.barber.user)
        resp = self.client.post(URL, {
            "date": self.day.isoformat(), "start_time": "10:00", "end_time": "14:00", "barber": self.other.pk,
        }, format="json")

        self.assertEqual(resp.status_code, 201)
        window = Availability.objects.get(pk=resp.json()["id"])
        self.assertEqual(window.barber, self.barber)

    def test_rejects_inverted_and_overlapping(self):
        open_window(self.barber, self.day, "09:00", "12:00")
        self.client.force_authenticate(self.barber.user)

        inverted = self.client.post(URL, {"date": self.day.isoformat(), "start_time": "14:00", "end_time": "13:00"}, format="json")
        overlap = self.client.post(URL, {"date": self.day.isoformat(), "start_time": "11:30", "end_time": "13:00"}, format="json")

        self.assertEqual(inverted.status_code, 400)
        self.assertEqual(overlap.status_code, 400)
        self.assertEqual(Availability.objects.filter(barber=self.barber).count(), 1)

    def test_update_own_window(self):
        window = open_window(self.barber, self.day, "09:00", "12:00")
        self.client.force_authenticate(self.barber.user)

        resp = self.client.patch(f"{URL}{window.pk}/", {"end_time": "13:00"}, format="json")

        self.assertEqual(resp.status_code, 200)
        window.refresh_from_db()
        self.assertEqual(window.end_time.hour, 13)

    def test_cannot_touch_other_barbers_window(self):
        theirs = open_window(self.other, self.day)
        self.client.force_authenticate(self.barber.user)

        self.assertEqual(self.client.delete(f"{URL}{theirs.pk}/").status_code, 404)
        self.assertTrue(Availability.objects.filter(pk=theirs.pk).exists())

    def test_filters_by_date(self):
        open_window(self.barber, self.day, "09:00", "12:00")
        open_window(self.barber, self.day + timedelta(days=1), "09:00", "12:00")
        self.client.force_authenticate(self.barber.user)

        resp = self.client.get(URL, {"date": self.day.isoformat()})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual([w["date"] for w in resp.json()], [self.day.isoformat()])

    def test_malformed_date_filter_is_a_client_error(self):
        self.client.force_authenticate(self.barber.user)

        resp = self.client.get(URL, {"date": "garbage"})

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"date": "Invalid date format. Use YYYY-MM-DD."})

    def test_seconds_are_dropped(self):
        self.client.force_authenticate(self.barber.user)

        resp = self.client.post(URL, {
            "date": self.day.isoformat(), "start_time": "09:00:30", "end_time": "12:00:45",
        }, format="json")

        self.assertEqual(resp.status_code, 201)
        window = Availability.objects.get(pk=resp.json()["id"])
        self.assertEqual((window.start_time.second, window.end_time.second), (0, 0))

    def test_past_date_is_rejected(self):
        self.client.force_authenticate(self.barber.user)
        yesterday = timezone.localdate() - timedelta(days=1)

        resp = self.client.post(URL, {
            "date": yesterday.isoformat(), "start_time": "09:00", "end_time": "12:00",
        }, format="json")

        self.assertEqual(resp.status_code, 400)
        self.assertFalse(Availability.objects.exists())

    def test_duplicate_start_that_slips_past_overlap_check_is_a_conflict(self):
        open_window(self.barber, self.day, "09:00", "12:00")
        self.client.force_authenticate(self.barber.user)

        with mock.patch("dashboard.serializers.windows_overlap", return_value=False):
            resp = self.client.post(URL, {
                "date": self.day.isoformat(), "start_time": "09:00", "end_time": "10:00",
            }, format="json")

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"detail": "This window already exists."})
        self.assertEqual(Availability.objects.filter(barber=self.barber).count(), 1)
