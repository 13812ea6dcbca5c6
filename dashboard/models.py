# dashboard/models.py
from django.db import models


class Availability(models.Model):
    """
    Open window on a specific day during which a barber takes bookings.
    Points to booking.Barber so the slot engine can read it per barber/day.
    Several windows per day are allowed; they must not overlap.
    """
    barber = models.ForeignKey(
        "booking.Barber",
        on_delete=models.CASCADE,
        related_name="availability",
    )
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()

    class Meta:
        ordering = ["barber_id", "date", "start_time"]
        verbose_name_plural = "availability"
        constraints = [
            models.UniqueConstraint(
                fields=["barber", "date", "start_time"],
                name="uniq_availability_window_start",
            ),
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="availability_end_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.barber}: {self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M}"
