# booking/models.py
#
# Purpose:
# - Core domain models for the barbershop booking site.
#
# Design highlights:
# - Barber: public profile (slug, shop name, logo). Optionally owned by an auth
#   User, which is what scopes dashboard writes.
# - Service: belongs to a barber. Validates price and duration; "active" flag
#   controls visibility and bookability.
# - Booking:
#   • Records barber, service, customer contact, starts_at/ends_at
#   • status is "confirmed" or "cancelled" (cancelled never blocks a slot)
#   • cancellation_token lets a customer cancel without an account
#   • cancelled_at records when a cancellation occurs
# - GalleryImage: URL of an image already stored in the blob store.
#
# Notes for developers:
# - Double booking is guarded at the database level by a partial unique
#   constraint on (barber, starts_at) for confirmed bookings. The create path
#   in services/stores.py also re-checks range overlap inside a transaction.
# - Availability windows live in dashboard.models.Availability.
#
import secrets

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


def generate_cancellation_token() -> str:
    return secrets.token_urlsafe(24)


# -------------------------
# Barber / shop profile
# -------------------------
class Barber(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="barber",
        null=True,
        blank=True,
    )
    slug = models.SlugField(unique=True)
    shop_name = models.CharField(max_length=200)
    bio = models.TextField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    travel_enabled = models.BooleanField(default=False)
    logo_url = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["shop_name"]

    def __str__(self):
        return self.shop_name

    @property
    def location(self) -> str:
        if self.address and self.city:
            return f"{self.address}, {self.city}"
        return self.city or self.address


# -------------------------
# Service catalog item
# -------------------------
class Service(models.Model):
    """
    A service offered by a barber.

    Rules:
    - price must be > 0
    - duration_minutes must be > 0 (it is also the slot length)
    - active controls visibility and bookability
    """
    barber = models.ForeignKey(Barber, on_delete=models.CASCADE, related_name="services")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(
        validators=[MinValueValidator(1)]
    )
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
    )
    active = models.BooleanField(default=True)

    class Meta:
        ordering = ["price", "id"]

    def __str__(self):
        return f"{self.name} (${self.price})"


# -------------------------
# Booking record
# -------------------------
class Booking(models.Model):
    STATUS_CONFIRMED = "confirmed"
    STATUS_CANCELLED = "cancelled"
    STATUS_CHOICES = [
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    barber = models.ForeignKey(Barber, on_delete=models.CASCADE, related_name="bookings")
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name="bookings")
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_CONFIRMED,
        help_text="Booking lifecycle status",
    )
    cancellation_token = models.CharField(
        max_length=64,
        unique=True,
        default=generate_cancellation_token,
        editable=False,
    )
    cancelled_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the booking was cancelled (if applicable).",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["starts_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["barber", "starts_at"],
                condition=models.Q(status="confirmed"),
                name="uniq_confirmed_booking_per_barber_start",
            ),
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="booking_ends_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.customer_name} → {self.service.name} on {self.starts_at}"

    @property
    def is_cancelled(self) -> bool:
        return self.status == self.STATUS_CANCELLED


# -------------------------
# Gallery
# -------------------------
class GalleryImage(models.Model):
    """
    A portfolio image. Only the public URL returned by the blob store is kept.
    """
    barber = models.ForeignKey(Barber, on_delete=models.CASCADE, related_name="gallery_images")
    image_url = models.CharField(max_length=500)
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_order", "-created_at"]

    def __str__(self):
        return f"Gallery image #{self.pk} for {self.barber}"
