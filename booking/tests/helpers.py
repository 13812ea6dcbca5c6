# booking/tests/helpers.py
#
# Small builders shared by the booking, dashboard and notifications tests.
# All datetimes are UTC; the test classes pin TIME_ZONE="UTC".
#
from datetime import datetime, time, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone

from booking.models import Barber, Booking, Service
from dashboard.models import Availability


def at(day, hour, minute=0):
    return datetime.combine(day, time(hour, minute), tzinfo=dt_timezone.utc)


def future_day(days=7):
    return timezone.localdate() + timedelta(days=days)


def make_barber(slug="test-shop", shop_name="Test Shop", username=None, email=""):
    user = None
    if username:
        user = get_user_model().objects.create_user(username=username, password="pass12345", email=email)
    return Barber.objects.create(slug=slug, shop_name=shop_name, city="Springfield", user=user)


def make_service(barber, name="Classic Cut", duration=45, price="35.00", active=True):
    return Service.objects.create(
        barber=barber,
        name=name,
        duration_minutes=duration,
        price=Decimal(price),
        active=active,
    )


def open_window(barber, day, start="09:00", end="18:00"):
    start_h, start_m = map(int, start.split(":"))
    end_h, end_m = map(int, end.split(":"))
    return Availability.objects.create(
        barber=barber, date=day, start_time=time(start_h, start_m), end_time=time(end_h, end_m)
    )


def book(barber, service, starts_at, status=Booking.STATUS_CONFIRMED, email="jo@example.com"):
    return Booking.objects.create(
        barber=barber,
        service=service,
        customer_name="Jo Client",
        customer_email=email,
        starts_at=starts_at,
        ends_at=starts_at + timedelta(minutes=service.duration_minutes),
        status=status,
    )
