# booking/views_pages.py
#
# Purpose:
# - Public, server-rendered pages:
#   * /                        landing page (single mode: the shop's profile)
#   * /barbers/                barber directory (marketplace mode only)
#   * /barbers/<slug>/         profile: services, gallery, logo
#   * /barbers/<slug>/book/    pick service + day, see open slots, book
#
# Notes:
# - All reads go through the configured store provider, so the pages work
#   the same with the database and with demo fixtures.
# - Domain errors render booking/error.html with the error's HTTP status.
#
import logging
from datetime import timedelta

from django.http import Http404
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views import View
from django.views.generic import TemplateView

from .exceptions import BookingError, InvalidRequest, SlotUnavailable, StoreUnavailable
from .forms import BookingForm
from .services.availability_engine import AvailabilityEngine
from .services.booking_manager import BookingManager
from .services.slot_utils import parse_day
from .services.stores import get_store
from .site_config import get_site_settings

logger = logging.getLogger(__name__)

BOOKING_HORIZON_DAYS = 14


class BookingErrorMixin:
    """Render domain errors as an HTML page with the matching status code."""
    error_template_name = "booking/error.html"

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BookingError as exc:
            if isinstance(exc, StoreUnavailable):
                logger.error("Store unavailable while rendering %s", request.path)
            return render(
                request,
                self.error_template_name,
                {"message": exc.message},
                status=exc.status_code,
            )

    def get_barber(self, slug):
        barber = get_store().get_barber(slug)
        if barber is None:
            raise Http404("Barber not found.")
        return barber


class HomeView(TemplateView):
    template_name = "booking/home.html"

    def get(self, request, *args, **kwargs):
        site = get_site_settings()
        if site.is_single:
            return redirect("barber_detail", slug=site.single_barber_slug)
        return super().get(request, *args, **kwargs)


class BarberListView(BookingErrorMixin, TemplateView):
    template_name = "booking/barber_list.html"

    def get(self, request, *args, **kwargs):
        site = get_site_settings()
        if site.is_single:
            return redirect("barber_detail", slug=site.single_barber_slug)
        return super().get(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["barbers"] = get_store().list_barbers()
        return ctx


class BarberDetailView(BookingErrorMixin, TemplateView):
    template_name = "booking/barber_detail.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        store = get_store()
        barber = self.get_barber(kwargs["slug"])
        ctx.update({
            "barber": barber,
            "services": store.list_services(barber),
            "gallery": store.list_gallery(barber),
        })
        return ctx


class BookingPageView(BookingErrorMixin, View):
    """
    GET  ?service=ID&date=YYYY-MM-DD  shows the open slots for that day
    POST                              books the chosen slot
    """
    template_name = "booking/book.html"

    def get(self, request, slug):
        barber = self.get_barber(slug)
        service_id = _int_or_none(request.GET.get("service"))
        error = None
        try:
            day = parse_day(request.GET["date"]) if request.GET.get("date") else timezone.localdate()
        except ValueError as e:
            day, error = timezone.localdate(), str(e)

        return self._render(request, barber, service_id, day, BookingForm(), error=error)

    def post(self, request, slug):
        barber = self.get_barber(slug)
        form = BookingForm(request.POST)
        if not form.is_valid():
            service_id = _int_or_none(request.POST.get("service"))
            return self._render(request, barber, service_id, timezone.localdate(), form, status=400)

        data = form.cleaned_data
        try:
            booking = BookingManager().create_booking(
                barber_id=barber.pk,
                service_id=data["service"],
                starts_at=data["starts_at"],
                customer_name=data["customer_name"],
                customer_email=data["customer_email"],
                customer_phone=data["customer_phone"],
                notes=data["notes"],
            )
        except (InvalidRequest, SlotUnavailable) as e:
            day = timezone.localtime(data["starts_at"]).date()
            return self._render(
                request, barber, data["service"], day, form, error=e.message, status=e.status_code
            )

        return render(request, "booking/confirmed.html", {"barber": barber, "booking": booking})

    def _render(self, request, barber, service_id, day, form, error=None, status=200):
        services = get_store().list_services(barber)
        service = next((s for s in services if s.pk == service_id), None)

        slots = []
        if service is not None:
            now = timezone.now()
            slots = [
                slot
                for slot in AvailabilityEngine().compute_day_slots(barber.pk, service.pk, day)
                if slot.available and slot.start > now
            ]

        today = timezone.localdate()
        ctx = {
            "barber": barber,
            "services": services,
            "service": service,
            "day": day,
            "days": [today + timedelta(days=i) for i in range(BOOKING_HORIZON_DAYS)],
            "slots": slots,
            "form": form,
            "error": error,
        }
        return render(request, self.template_name, ctx, status=status)


def _int_or_none(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
