# booking/tests/test_commands.py

from datetime import timedelta
from io import StringIO

from django.core import mail
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone

from booking.models import Barber, Booking, Service
from dashboard.models import Availability
from .helpers import book, make_barber, make_service


@override_settings(SINGLE_BARBER_SLUG="luccifadez", SINGLE_SHOP_NAME="Luccifadez")
class SeedDemoTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_demo", username="lucci", password="s3cret-pass", weeks=1, stdout=StringIO())
        call_command("seed_demo", username="lucci", weeks=1, stdout=StringIO())

        barber = Barber.objects.get(slug="luccifadez")
        self.assertEqual(barber.user.username, "lucci")
        self.assertTrue(barber.user.check_password("s3cret-pass"))
        self.assertEqual(Service.objects.filter(barber=barber).count(), 3)
        # Mon-Sat over one week
        self.assertEqual(Availability.objects.filter(barber=barber).count(), 6)

    def test_seed_restores_edited_service(self):
        call_command("seed_demo", stdout=StringIO())
        Service.objects.filter(name="Classic Cut").update(price="99.00", active=False)

        call_command("seed_demo", stdout=StringIO())

        cut = Service.objects.get(name="Classic Cut")
        self.assertTrue(cut.active)
        self.assertEqual(str(cut.price), "35.00")


class SendRemindersTests(TestCase):
    def setUp(self):
        self.barber = make_barber()
        self.service = make_service(self.barber)

    def test_sends_for_bookings_in_window(self):
        due = book(self.barber, self.service, timezone.now() + timedelta(hours=24), email="due@example.com")
        book(self.barber, self.service, timezone.now() + timedelta(hours=30), email="later@example.com")
        book(
            self.barber, self.service, timezone.now() + timedelta(hours=24, seconds=20),
            status=Booking.STATUS_CANCELLED, email="gone@example.com",
        )
        mail.outbox = []
        out = StringIO()

        call_command("send_reminders", "--when", "24", stdout=out)

        self.assertEqual([m.to for m in mail.outbox], [[due.customer_email]])
        self.assertEqual(mail.outbox[0].subject, "Appointment Reminder")
        self.assertIn("Sent 1 reminder(s)", out.getvalue())
