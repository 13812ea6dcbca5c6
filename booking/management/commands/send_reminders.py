"""
send_reminders.py
-----------------
Django management command to send 48h/24h reminders.

Usage:
    python manage.py send_reminders --when 48
    python manage.py send_reminders --when 24

Behavior:
- Finds confirmed bookings whose starts_at is about N hours from now
  (within --window minutes either side, default 1).
- Sends each one through NotificationService, which also records it.
"""

from datetime import timedelta
from django.core.management.base import BaseCommand
from django.utils import timezone

from booking.models import Booking
from booking.services.notification_service import NotificationService


class Command(BaseCommand):
    help = "Send appointment reminders at N hours (48 or 24) before starts_at."

    def add_arguments(self, parser):
        parser.add_argument(
            "--when",
            type=int,
            choices=[48, 24],
            required=True,
            help="Reminder window in hours (choose 48 or 24).",
        )
        parser.add_argument(
            "--window",
            type=int,
            default=1,
            help="Minutes either side of the target time to match (default 1).",
        )

    def handle(self, *args, **options):
        hours = options["when"]
        slack = timedelta(minutes=max(options["window"], 0))
        target = timezone.now() + timedelta(hours=hours)

        qs = (
            Booking.objects
            .filter(status=Booking.STATUS_CONFIRMED, starts_at__gte=target - slack, starts_at__lte=target + slack)
            .select_related("barber", "service")
        )

        notifier = NotificationService()
        count = 0
        for booking in qs:
            notifier.send_reminder(booking, hours_before=hours)
            count += 1

        self.stdout.write(self.style.SUCCESS(f"Sent {count} reminder(s) for {hours}h window."))
