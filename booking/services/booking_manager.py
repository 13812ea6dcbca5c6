"""
booking_manager.py
------------------
Coordinates booking creation and cancellation.

- Creation re-validates the requested time against freshly computed slots,
  then lets the store insert it. The store is the authority on concurrent
  double bookings and reports them as SlotUnavailable.
- Cancellation is allowed only while at least 24 whole hours remain before
  the appointment (slot_utils.can_cancel).
"""

import logging

from django.utils import timezone

from ..exceptions import CancellationNotAllowed, InvalidRequest, NotFound, SlotUnavailable
from .availability_engine import AvailabilityEngine
from .slot_utils import can_cancel
from .stores import get_store

logger = logging.getLogger(__name__)


class BookingManager:
    def __init__(self, store=None):
        self.store = store or get_store()
        self.availability = AvailabilityEngine(store=self.store)

    def create_booking(
        self,
        barber_id,
        service_id,
        starts_at,
        customer_name,
        customer_email,
        customer_phone="",
        notes="",
        ends_at=None,
        now=None,
    ):
        """
        Create a confirmed booking for one of the barber's open slots.

        Raises:
            InvalidRequest: past time, time not on the slot grid, or ends_at
                not matching the service duration.
            NotFound: unknown service for this barber.
            SlotUnavailable: the slot is taken (possibly just now).
        """
        now = now or timezone.now()
        tz = timezone.get_current_timezone()
        if timezone.is_naive(starts_at):
            starts_at = timezone.make_aware(starts_at, tz)
        if ends_at is not None and timezone.is_naive(ends_at):
            ends_at = timezone.make_aware(ends_at, tz)

        if starts_at <= now:
            raise InvalidRequest("Start time must be in the future.")

        day = timezone.localtime(starts_at, tz).date()
        slots = self.availability.compute_day_slots(barber_id, service_id, day, tz=tz)
        slot = next((s for s in slots if s.start == starts_at), None)
        if slot is None:
            raise InvalidRequest("Selected time is not an offered slot.")
        if ends_at is not None and ends_at != slot.end:
            raise InvalidRequest("End time does not match the service duration.")
        if not slot.available:
            logger.warning("Slot %s for barber %s already taken", starts_at, barber_id)
            raise SlotUnavailable()

        booking = self.store.create_booking(
            barber_id=barber_id,
            service_id=service_id,
            starts_at=slot.start,
            ends_at=slot.end,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            customer_phone=(customer_phone or "").strip(),
            notes=notes or "",
        )
        logger.info("Booking confirmed for barber %s at %s", barber_id, slot.start)
        return booking

    def get_booking(self, token):
        booking = self.store.get_booking(token) if token else None
        if booking is None:
            raise NotFound("Booking not found.")
        return booking

    def cancel_booking(self, token, now=None):
        """
        Cancel the booking identified by its cancellation token.

        Raises:
            NotFound: unknown token.
            CancellationNotAllowed: already cancelled, or less than 24 hours left.
        """
        now = now or timezone.now()
        booking = self.get_booking(token)

        if booking.is_cancelled:
            raise CancellationNotAllowed("This booking is already cancelled.")
        if not can_cancel(booking.starts_at, now):
            raise CancellationNotAllowed(
                "Bookings can only be cancelled at least 24 hours before the appointment."
            )

        booking = self.store.cancel_booking(booking, now)
        logger.info("Booking %s cancelled", booking.pk)
        return booking
