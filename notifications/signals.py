# notifications/signals.py
#
# Purpose:
# - Send e-mails when a Booking is created or its status changes.
#   * confirmed: on create
#   * cancelled: on update when the saved fields include status
#
# Notes:
# - Delivery and bookkeeping live in booking.services.notification_service.
# - Mail goes out only after the surrounding transaction commits, so a
#   rolled-back booking never produces a confirmation and SMTP never runs
#   while the barber row is locked.
# - Unsaved demo bookings never reach post_save, so they send nothing.
#
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from booking.models import Booking
from booking.services.notification_service import NotificationService


@receiver(post_save, sender=Booking)
def booking_status_emails(sender, instance: Booking, created: bool, update_fields=None, **kwargs):
    notifier = NotificationService()

    if created:
        if instance.status == Booking.STATUS_CONFIRMED:
            transaction.on_commit(lambda: notifier.send_confirmation(instance))
        return

    if instance.status == Booking.STATUS_CANCELLED and (update_fields is None or "status" in update_fields):
        transaction.on_commit(lambda: notifier.send_cancellation(instance))
