"""
availability_engine.py
----------------------
Computes the appointment slots of one barber for one day by combining:
1) the barber's availability windows for that day, and
2) the barber's non-cancelled bookings around that day.

Every window is checked against every booking of the day; a booking can only
collide with the window it falls in, so no pre-partitioning is needed.

Store failures propagate as StoreUnavailable. They are never reported as
"no slots".
"""

import logging
from operator import attrgetter

from django.utils import timezone

from ..exceptions import InvalidRequest, NotFound
from .slot_utils import booking_query_range, generate_time_slots
from .stores import get_store

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    def __init__(self, store=None):
        self.store = store or get_store()

    def get_bookable_service(self, barber_id, service_id):
        service = self.store.get_service(service_id)
        if service is None or service.barber_id != barber_id or not service.active:
            raise NotFound("Service not found.")
        if service.duration_minutes <= 0:
            # Only reachable for rows written around model validation.
            logger.warning("Service %s has duration %s", service.pk, service.duration_minutes)
            raise InvalidRequest("This service has no valid duration.")
        return service

    def compute_day_slots(self, barber_id, service_id, day, tz=None):
        """
        Returns:
            list[Slot] for all windows of the day, sorted by start.
            An empty list when the barber has no availability that day.

        Raises:
            NotFound: unknown service, inactive, or not offered by this barber.
            InvalidRequest: the service has no usable duration.
            StoreUnavailable: the store could not be read.
        """
        tz = tz or timezone.get_current_timezone()
        service = self.get_bookable_service(barber_id, service_id)

        windows = self.store.availability_windows(barber_id, day)
        if not windows:
            logger.debug("No availability for barber %s on %s", barber_id, day)
            return []

        range_start, range_end = booking_query_range(day, tz)
        booked = self.store.booked_intervals(barber_id, range_start, range_end)
        logger.debug(
            "Generating %s-minute slots for barber %s on %s: %d window(s), %d booking(s)",
            service.duration_minutes, barber_id, day, len(windows), len(booked),
        )

        slots = []
        for window in windows:
            slots.extend(
                generate_time_slots(
                    day,
                    window.start_time,
                    window.end_time,
                    service.duration_minutes,
                    booked,
                    tz=tz,
                )
            )

        slots.sort(key=attrgetter("start"))
        logger.debug("Generated %d slot(s) for barber %s on %s", len(slots), barber_id, day)
        return slots
