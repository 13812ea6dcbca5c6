"""
NotificationService
-------------------
Sends booking e-mails (confirmation, cancellation, reminders) through
Django's mail backend and records each attempt as a Notification row.

- Dev: EMAIL_BACKEND = console backend prints the message in the terminal.
- Prod: switch EMAIL_BACKEND to SMTP (or a provider backend) in settings.

A failed send is logged and recorded with sent=False; it never breaks the
booking request that triggered it.
"""

import logging
import smtplib

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from notifications.models import Notification

logger = logging.getLogger(__name__)


def _when(booking) -> str:
    return timezone.localtime(booking.starts_at).strftime("%A, %B %d, %Y at %I:%M %p")


class NotificationService:
    def send_confirmation(self, booking):
        body = (
            f"Hi {booking.customer_name},\n\n"
            f"Your booking is confirmed.\n\n"
            f"Barber: {booking.barber.shop_name}\n"
            f"Service: {booking.service.name}\n"
            f"Date & Time: {_when(booking)}\n\n"
            f"Need to cancel? Use this code at least 24 hours ahead: "
            f"{booking.cancellation_token}\n"
        )
        return self._deliver(booking, "Booking Confirmation", body, booking.customer_email)

    def send_cancellation(self, booking):
        body = (
            f"Dear {booking.customer_name},\n\n"
            f"Your appointment for {booking.service.name} on {_when(booking)} has been cancelled.\n"
            f"We hope to see you again soon.\n"
        )
        sent = [self._deliver(booking, f"Booking #{booking.pk} Cancelled", body, booking.customer_email)]

        # Owner alert, only when the barber has an account with an e-mail.
        owner = getattr(booking.barber, "user", None)
        owner_email = getattr(owner, "email", "")
        if owner_email:
            body_owner = (
                f"Booking #{booking.pk} was cancelled.\n"
                f"Client: {booking.customer_name} ({booking.customer_email})\n"
                f"Service: {booking.service.name}\n"
                f"Original Time: {_when(booking)}\n"
            )
            sent.append(self._deliver(booking, f"ALERT: Booking #{booking.pk} CANCELLED", body_owner, owner_email))
        return sent

    def send_reminder(self, booking, hours_before: int):
        body = (
            f"Hi {booking.customer_name},\n\n"
            f"This is a reminder of your {booking.service.name} appointment "
            f"with {booking.barber.shop_name} in about {hours_before} hours, "
            f"on {_when(booking)}.\n"
        )
        return self._deliver(booking, "Appointment Reminder", body, booking.customer_email)

    def _deliver(self, booking, subject: str, body: str, recipient: str) -> Notification:
        sent = False
        try:
            send_mail(
                subject=subject,
                message=body,
                from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
                recipient_list=[recipient],
                fail_silently=False,
            )
            sent = True
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to send %r to %s", subject, recipient)

        return Notification.objects.create(
            booking=booking,
            recipient=recipient,
            subject=subject,
            message=body,
            sent=sent,
        )
