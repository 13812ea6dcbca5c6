import smtplib
from unittest import mock

from django.core import mail
from django.db import transaction
from django.test import TestCase

from booking.models import Booking
from booking.services.notification_service import NotificationService
from booking.services.stores import DatabaseStore
from booking.tests.helpers import at, book, future_day, make_barber, make_service
from notifications.models import Notification


class NotificationTests(TestCase):
    def setUp(self):
        self.barber = make_barber(username="owner", email="owner@example.com")
        self.service = make_service(self.barber, name="Signature Fade")

    def test_email_sent_when_booking_confirmed(self):
        with self.captureOnCommitCallbacks(execute=True):
            booking = book(self.barber, self.service, at(future_day(), 9))

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("confirmed", mail.outbox[0].body)
        self.assertIn(booking.cancellation_token, mail.outbox[0].body)
        note = Notification.objects.get(booking=booking)
        self.assertTrue(note.sent)
        self.assertEqual(note.recipient, "jo@example.com")

    def test_confirmation_waits_for_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            DatabaseStore().create_booking(
                barber_id=self.barber.pk,
                service_id=self.service.pk,
                starts_at=at(future_day(), 9),
                ends_at=at(future_day(), 9, 45),
                customer_name="Jo Client",
                customer_email="jo@example.com",
            )

            self.assertEqual(mail.outbox, [])

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(mail.outbox, [])

    def test_rolled_back_booking_sends_nothing(self):
        class Abort(Exception):
            pass

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(Abort):
                with transaction.atomic():
                    book(self.barber, self.service, at(future_day(), 9))
                    raise Abort

        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])
        self.assertFalse(Booking.objects.exists())

    def test_cancellation_emails_customer_and_owner(self):
        booking = book(self.barber, self.service, at(future_day(), 9))

        with self.captureOnCommitCallbacks(execute=True):
            booking.status = Booking.STATUS_CANCELLED
            booking.save(update_fields=["status"])

        self.assertEqual(sorted(m.to[0] for m in mail.outbox), ["jo@example.com", "owner@example.com"])
        self.assertTrue(any("CANCELLED" in m.subject for m in mail.outbox))

    def test_unrelated_update_sends_nothing(self):
        booking = book(self.barber, self.service, at(future_day(), 9))

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            booking.notes = "Running late"
            booking.save(update_fields=["notes"])

        self.assertEqual(callbacks, [])
        self.assertEqual(mail.outbox, [])

    def test_failed_send_is_recorded(self):
        booking = book(self.barber, self.service, at(future_day(), 9))

        with mock.patch(
            "booking.services.notification_service.send_mail",
            side_effect=smtplib.SMTPException("relay down"),
        ):
            note = NotificationService().send_reminder(booking, hours_before=24)

        self.assertFalse(note.sent)
        self.assertIn("24 hours", note.message)
