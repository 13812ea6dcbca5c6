# dashboard/views_calendar.py
#
# Purpose:
# - Month-view calendar of the signed-in barber's bookings at /dashboard/calendar/.
# - Renders a simple, server-side month grid with bookings per day.
#
# Behavior:
# - Query params: ?year=YYYY&month=MM (defaults to current month if missing/invalid).
# - Cancelled bookings are left out so the grid shows what is actually booked.
#
from datetime import datetime
import calendar

from django.utils import timezone
from django.views.generic import TemplateView

from booking.models import Booking
from .views import BarberRequiredMixin


def _month_from_query(params, today):
    try:
        year = int(params.get("year", today.year))
        month = int(params.get("month", today.month))
    except (TypeError, ValueError):
        return today.year, today.month
    if not (1 <= month <= 12) or not (1 <= year <= 9999):
        return today.year, today.month
    return year, month


def _shift_month(year, month, delta):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class BookingsCalendarView(BarberRequiredMixin, TemplateView):
    template_name = "dashboard/calendar.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        tz = timezone.get_current_timezone()
        today = timezone.localtime(timezone.now(), tz)
        year, month = _month_from_query(self.request.GET, today)

        # Local month bounds; bookings are assigned to days in the site timezone.
        first_weekday, last_day_num = calendar.monthrange(year, month)
        start_dt = timezone.make_aware(datetime(year, month, 1, 0, 0, 0), tz)
        end_dt = timezone.make_aware(datetime(year, month, last_day_num, 23, 59, 59), tz)

        qs = (
            Booking.objects
            .filter(barber=self.barber, starts_at__gte=start_dt, starts_at__lte=end_dt)
            .exclude(status=Booking.STATUS_CANCELLED)
            .select_related("service")
            .order_by("starts_at")
        )

        days_map = {d: [] for d in range(1, last_day_num + 1)}
        for b in qs:
            local_start = timezone.localtime(b.starts_at, tz)
            days_map[local_start.day].append({
                "time": local_start.strftime("%I:%M %p"),
                "customer": b.customer_name,
                "service": b.service.name,
                "id": b.id,
            })

        cells = [{"blank": True} for _ in range(first_weekday)]
        for d in range(1, last_day_num + 1):
            cells.append({"blank": False, "day": d, "bookings": days_map[d]})

        prev_y, prev_m = _shift_month(year, month, -1)
        next_y, next_m = _shift_month(year, month, 1)

        ctx.update({
            "barber": self.barber,
            "year": year,
            "month": month,
            "month_name": calendar.month_name[month],
            "cells": cells,
            "prev_year": prev_y, "prev_month": prev_m,
            "next_year": next_y, "next_month": next_m,
        })
        return ctx
