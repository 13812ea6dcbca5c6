"""
stores.py
---------
Store providers the booking services read from and write to.

- DatabaseStore: the real store, backed by the Django ORM.
- FixtureStore: canned demo data for a site with no database content yet
  (BOOKING_STORE = "fixture"). Writes are not persisted.

The provider is chosen once per process by get_store().
"""

import logging
from contextlib import contextmanager
from datetime import time
from decimal import Decimal
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError, IntegrityError, transaction

from dashboard.models import Availability
from ..exceptions import SlotUnavailable, StoreUnavailable
from ..models import Barber, Booking, GalleryImage, Service

logger = logging.getLogger(__name__)


class BookingStore:
    """Interface shared by the store providers."""

    name = "base"

    def list_barbers(self):
        raise NotImplementedError

    def get_barber(self, slug):
        raise NotImplementedError

    def get_barber_by_id(self, barber_id):
        raise NotImplementedError

    def list_services(self, barber):
        raise NotImplementedError

    def list_gallery(self, barber):
        raise NotImplementedError

    def get_service(self, service_id):
        raise NotImplementedError

    def availability_windows(self, barber_id, day):
        raise NotImplementedError

    def booked_intervals(self, barber_id, range_start, range_end):
        raise NotImplementedError

    def create_booking(self, **fields):
        raise NotImplementedError

    def get_booking(self, token):
        raise NotImplementedError

    def cancel_booking(self, booking, when):
        raise NotImplementedError


@contextmanager
def _store_errors(action: str):
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Database error while %s", action)
        raise StoreUnavailable() from exc


class DatabaseStore(BookingStore):
    name = "database"

    def list_barbers(self):
        with _store_errors("listing barbers"):
            return list(Barber.objects.order_by("shop_name"))

    def get_barber(self, slug):
        with _store_errors("loading barber"):
            return Barber.objects.filter(slug=slug).first()

    def get_barber_by_id(self, barber_id):
        with _store_errors("loading barber"):
            return Barber.objects.filter(pk=barber_id).first()

    def list_services(self, barber):
        with _store_errors("listing services"):
            return list(barber.services.filter(active=True).order_by("price", "id"))

    def list_gallery(self, barber):
        with _store_errors("listing gallery"):
            return list(barber.gallery_images.order_by("display_order", "-created_at"))

    def get_service(self, service_id):
        with _store_errors("loading service"):
            return Service.objects.filter(pk=service_id).first()

    def availability_windows(self, barber_id, day):
        with _store_errors("loading availability"):
            return list(
                Availability.objects.filter(barber_id=barber_id, date=day).order_by("start_time")
            )

    def booked_intervals(self, barber_id, range_start, range_end):
        """
        (starts_at, ends_at) of every non-cancelled booking that touches
        [range_start, range_end].
        """
        with _store_errors("loading bookings"):
            rows = (
                Booking.objects.filter(
                    barber_id=barber_id,
                    starts_at__lte=range_end,
                    ends_at__gt=range_start,
                )
                .exclude(status=Booking.STATUS_CANCELLED)
                .values_list("starts_at", "ends_at")
            )
            return list(rows)

    def create_booking(self, **fields):
        """
        Insert a confirmed booking. Writers for the same barber are serialized
        on the barber row; the partial unique constraint catches anything else.

        Raises:
            SlotUnavailable: if the range overlaps a confirmed booking.
        """
        barber_id = fields["barber_id"]
        starts_at = fields["starts_at"]
        ends_at = fields["ends_at"]
        try:
            with transaction.atomic():
                list(Barber.objects.select_for_update().filter(pk=barber_id))
                clash = (
                    Booking.objects.filter(
                        barber_id=barber_id,
                        starts_at__lt=ends_at,
                        ends_at__gt=starts_at,
                    )
                    .exclude(status=Booking.STATUS_CANCELLED)
                    .exists()
                )
                if clash:
                    raise SlotUnavailable()
                return Booking.objects.create(status=Booking.STATUS_CONFIRMED, **fields)
        except IntegrityError as exc:
            logger.warning("Concurrent booking rejected for barber %s at %s", barber_id, starts_at)
            raise SlotUnavailable() from exc
        except DatabaseError as exc:
            logger.exception("Database error while creating booking")
            raise StoreUnavailable() from exc

    def get_booking(self, token):
        with _store_errors("loading booking"):
            return (
                Booking.objects.select_related("barber", "service")
                .filter(cancellation_token=token)
                .first()
            )

    def cancel_booking(self, booking, when):
        with _store_errors("cancelling booking"):
            booking.status = Booking.STATUS_CANCELLED
            booking.cancelled_at = when
            booking.save(update_fields=["status", "cancelled_at"])
            return booking


# -------------------------
# Demo data
# -------------------------
DEMO_SERVICES = [
    {"pk": 1, "name": "Signature Fade", "description": "Skin or low fade, finished with a line-up", "duration_minutes": 45, "price": Decimal("40.00")},
    {"pk": 2, "name": "Classic Cut", "description": "Scissor and clipper cut", "duration_minutes": 45, "price": Decimal("35.00")},
    {"pk": 3, "name": "Beard Sculpt", "description": "Shape, trim and hot towel", "duration_minutes": 30, "price": Decimal("20.00")},
]

DEMO_GALLERY = [
    "https://picsum.photos/seed/fade/600/600",
    "https://picsum.photos/seed/taper/600/600",
    "https://picsum.photos/seed/beard/600/600",
]

DEMO_OPEN = time(9, 0)
DEMO_CLOSE = time(18, 0)


class FixtureStore(BookingStore):
    """
    Serves one demo barber with a fixed catalog, open 09:00-18:00 every day
    and never booked. Bookings are returned unsaved.
    """
    name = "fixture"

    def __init__(self, slug=None):
        self.barber = Barber(
            pk=1,
            slug=slug or getattr(settings, "SINGLE_BARBER_SLUG", "luccifadez"),
            shop_name=getattr(settings, "SINGLE_SHOP_NAME", "Luccifadez"),
            bio="Fades, tapers and beard work. This is demo data.",
            city="Demo City",
        )
        self.services = [Service(barber=self.barber, active=True, **item) for item in DEMO_SERVICES]
        self.gallery = [
            GalleryImage(pk=i, barber=self.barber, image_url=url, display_order=i)
            for i, url in enumerate(DEMO_GALLERY, start=1)
        ]

    def list_barbers(self):
        return [self.barber]

    def get_barber(self, slug):
        return self.barber if slug == self.barber.slug else None

    def get_barber_by_id(self, barber_id):
        return self.barber if barber_id == self.barber.pk else None

    def list_services(self, barber):
        return list(self.services) if barber.pk == self.barber.pk else []

    def list_gallery(self, barber):
        return list(self.gallery) if barber.pk == self.barber.pk else []

    def get_service(self, service_id):
        for service in self.services:
            if service.pk == service_id:
                return service
        return None

    def availability_windows(self, barber_id, day):
        if barber_id != self.barber.pk:
            return []
        return [Availability(barber=self.barber, date=day, start_time=DEMO_OPEN, end_time=DEMO_CLOSE)]

    def booked_intervals(self, barber_id, range_start, range_end):
        return []

    def create_booking(self, **fields):
        barber_id = fields.pop("barber_id")
        service_id = fields.pop("service_id")
        logger.info("Demo booking for barber %s not persisted", barber_id)
        return Booking(
            barber=self.get_barber_by_id(barber_id),
            service=self.get_service(service_id),
            status=Booking.STATUS_CONFIRMED,
            **fields,
        )

    def get_booking(self, token):
        return None

    def cancel_booking(self, booking, when):
        booking.status = Booking.STATUS_CANCELLED
        booking.cancelled_at = when
        return booking


STORE_BACKENDS = {
    DatabaseStore.name: DatabaseStore,
    FixtureStore.name: FixtureStore,
}


@lru_cache(maxsize=None)
def get_store() -> BookingStore:
    backend = getattr(settings, "BOOKING_STORE", DatabaseStore.name)
    try:
        store_class = STORE_BACKENDS[backend]
    except KeyError:
        raise ImproperlyConfigured(
            f"BOOKING_STORE must be one of {sorted(STORE_BACKENDS)}, got {backend!r}."
        )
    logger.info("Using %s booking store", backend)
    return store_class()
