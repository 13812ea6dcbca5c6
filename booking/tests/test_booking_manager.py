# booking/tests/test_booking_manager.py

from datetime import timedelta
from unittest import mock

from django.core import mail
from django.test import TestCase, override_settings

from booking.exceptions import CancellationNotAllowed, InvalidRequest, NotFound, SlotUnavailable
from booking.models import Booking
from booking.services.booking_manager import BookingManager
from booking.services.stores import DatabaseStore
from notifications.models import Notification
from .helpers import at, book, future_day, make_barber, make_service, open_window


@override_settings(TIME_ZONE="UTC")
class CreateBookingTests(TestCase):
    def setUp(self):
        self.barber = make_barber()
        self.service = make_service(self.barber, duration=45)
        self.day = future_day()
        open_window(self.barber, self.day, "09:00", "12:00")
        self.manager = BookingManager(store=DatabaseStore())

    def _create(self, starts_at, **extra):
        return self.manager.create_booking(
            barber_id=self.barber.pk,
            service_id=self.service.pk,
            starts_at=starts_at,
            customer_name="  Sam Customer ",
            customer_email="sam@example.com",
            **extra,
        )

    def test_books_an_open_slot(self):
        booking = self._create(at(self.day, 9, 45), customer_phone="5551234567")

        self.assertIsNotNone(booking.pk)
        self.assertEqual(booking.status, Booking.STATUS_CONFIRMED)
        self.assertEqual(booking.ends_at, at(self.day, 10, 30))
        self.assertEqual(booking.customer_name, "Sam Customer")
        self.assertTrue(booking.cancellation_token)

    def test_confirmation_is_sent_and_recorded(self):
        with self.captureOnCommitCallbacks(execute=True):
            self._create(at(self.day, 9))

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["sam@example.com"])
        self.assertIn("confirmed", mail.outbox[0].body)
        self.assertTrue(Notification.objects.filter(recipient="sam@example.com", sent=True).exists())

    def test_taken_slot_is_rejected(self):
        book(self.barber, self.service, at(self.day, 9))

        with self.assertRaises(SlotUnavailable):
            self._create(at(self.day, 9))
        self.assertEqual(Booking.objects.count(), 1)

    def test_off_grid_time_is_rejected(self):
        with self.assertRaisesMessage(InvalidRequest, "Selected time is not an offered slot."):
            self._create(at(self.day, 9, 10))

    def test_time_outside_availability_is_rejected(self):
        with self.assertRaises(InvalidRequest):
            self._create(at(self.day, 15))

    def test_past_time_is_rejected(self):
        with self.assertRaises(InvalidRequest):
            self._create(at(self.day, 9), now=at(self.day, 10))

    def test_end_must_match_slot(self):
        with self.assertRaises(InvalidRequest):
            self._create(at(self.day, 9), ends_at=at(self.day, 10))
        booking = self._create(at(self.day, 9), ends_at=at(self.day, 9, 45))
        self.assertEqual(booking.ends_at, at(self.day, 9, 45))

    def test_unknown_service(self):
        with self.assertRaises(NotFound):
            self.manager.create_booking(
                barber_id=self.barber.pk,
                service_id=123456,
                starts_at=at(self.day, 9),
                customer_name="Sam",
                customer_email="sam@example.com",
            )

    def test_store_rejects_overlapping_insert(self):
        book(self.barber, self.service, at(self.day, 9))

        with self.assertRaises(SlotUnavailable):
            DatabaseStore().create_booking(
                barber_id=self.barber.pk,
                service_id=self.service.pk,
                starts_at=at(self.day, 9, 30),
                ends_at=at(self.day, 10, 15),
                customer_name="Late",
                customer_email="late@example.com",
            )

    def test_unique_constraint_backs_up_the_overlap_check(self):
        book(self.barber, self.service, at(self.day, 9))

        # Two writers that both passed the re-check: only the constraint is left.
        with mock.patch("django.db.models.query.QuerySet.exists", return_value=False):
            with self.assertRaises(SlotUnavailable):
                DatabaseStore().create_booking(
                    barber_id=self.barber.pk,
                    service_id=self.service.pk,
                    starts_at=at(self.day, 9),
                    ends_at=at(self.day, 9, 45),
                    customer_name="Racer",
                    customer_email="racer@example.com",
                )
        self.assertEqual(Booking.objects.filter(starts_at=at(self.day, 9)).count(), 1)

    def test_cancelled_booking_frees_the_slot(self):
        book(self.barber, self.service, at(self.day, 9), status=Booking.STATUS_CANCELLED)

        booking = self._create(at(self.day, 9))

        self.assertEqual(Booking.objects.filter(starts_at=at(self.day, 9)).count(), 2)
        self.assertEqual(booking.status, Booking.STATUS_CONFIRMED)


@override_settings(TIME_ZONE="UTC")
class CancelBookingTests(TestCase):
    def setUp(self):
        self.barber = make_barber(username="barber", email="owner@example.com")
        self.service = make_service(self.barber)
        self.day = future_day()
        self.booking = book(self.barber, self.service, at(self.day, 9))
        self.manager = BookingManager(store=DatabaseStore())
        mail.outbox = []

    def test_cancel_more_than_24h_ahead(self):
        booking = self.manager.cancel_booking(self.booking.cancellation_token)

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.STATUS_CANCELLED)
        self.assertIsNotNone(self.booking.cancelled_at)
        self.assertTrue(booking.is_cancelled)

    def test_cancellation_notifies_customer_and_owner(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.manager.cancel_booking(self.booking.cancellation_token)

        recipients = sorted(m.to[0] for m in mail.outbox)
        self.assertEqual(recipients, ["jo@example.com", "owner@example.com"])

    def test_exactly_24h_is_allowed(self):
        now = self.booking.starts_at - timedelta(hours=24)
        self.manager.cancel_booking(self.booking.cancellation_token, now=now)
        self.booking.refresh_from_db()
        self.assertTrue(self.booking.is_cancelled)

    def test_inside_24h_is_refused(self):
        now = self.booking.starts_at - timedelta(hours=23, minutes=59)

        with self.assertRaises(CancellationNotAllowed):
            self.manager.cancel_booking(self.booking.cancellation_token, now=now)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.STATUS_CONFIRMED)

    def test_already_cancelled(self):
        self.manager.cancel_booking(self.booking.cancellation_token)

        with self.assertRaisesMessage(CancellationNotAllowed, "already cancelled"):
            self.manager.cancel_booking(self.booking.cancellation_token)

    def test_unknown_token(self):
        with self.assertRaises(NotFound):
            self.manager.cancel_booking("no-such-token")
        with self.assertRaises(NotFound):
            self.manager.get_booking("")
