# notifications/models.py
#
# Purpose:
# - Record messages sent to customers and barbers (confirmation, cancellation,
#   reminders).
#
# Design:
# - FK to booking.Booking; recipient is stored since owner alerts go to the
#   barber rather than the customer.
# - 'sent' indicates delivery attempt result.
#
from django.db import models


class Notification(models.Model):
    booking = models.ForeignKey(
        "booking.Booking",
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    recipient = models.EmailField()
    subject = models.CharField(max_length=200)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    sent = models.BooleanField(default=False)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.subject} to {self.recipient} at {self.created_at:%Y-%m-%d %H:%M}"
