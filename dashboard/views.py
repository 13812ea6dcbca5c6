# dashboard/views.py
#
# Purpose:
# - Barber dashboard (HTML), all behind login:
#   * /dashboard/                        overview + upcoming bookings
#   * /dashboard/availability/           list, add one window, weekly template
#   * /dashboard/gallery/                list, upload file or URL, delete
#   * /dashboard/gallery/logo/           set/remove the shop logo
#
# Notes:
# - Every view is scoped to the Barber owned by request.user; a signed-in
#   user without a barber profile gets 403.
#
import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.db import IntegrityError, transaction
from django.http import HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views import View
from django.views.generic import TemplateView

from booking.exceptions import StoreUnavailable
from booking.models import Barber, Booking, GalleryImage
from .forms import AvailabilityForm, GalleryImageForm, WeeklyScheduleForm
from .media import upload_gallery_image
from .models import Availability
from .schedule import generate_weekly_availability

logger = logging.getLogger(__name__)

UPCOMING_AVAILABILITY_LIMIT = 30


class BarberRequiredMixin(LoginRequiredMixin):
    """
    Must be logged in and own a barber profile.
    Sets self.barber for the view.
    """
    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return self.handle_no_permission()
        self.barber = Barber.objects.filter(user=request.user).first()
        if self.barber is None:
            raise PermissionDenied("No barber profile found.")
        return super().dispatch(request, *args, **kwargs)


class DashboardHomeView(BarberRequiredMixin, TemplateView):
    template_name = "dashboard/index.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        upcoming = (
            Booking.objects.filter(
                barber=self.barber,
                status=Booking.STATUS_CONFIRMED,
                starts_at__gte=timezone.now(),
            )
            .select_related("service")
            .order_by("starts_at")[:20]
        )
        ctx.update({"barber": self.barber, "upcoming": upcoming})
        return ctx


class AvailabilityView(BarberRequiredMixin, View):
    template_name = "dashboard/availability.html"

    def get(self, request):
        return self._render(request, AvailabilityForm(barber=self.barber), WeeklyScheduleForm())

    def post(self, request):
        form = AvailabilityForm(request.POST, barber=self.barber)
        if not form.is_valid():
            return self._render(request, form, WeeklyScheduleForm(), status=400)
        try:
            with transaction.atomic():
                window = form.save()
        except IntegrityError:
            form.add_error(None, "This window already exists.")
            return self._render(request, form, WeeklyScheduleForm(), status=409)

        logger.info("Barber %s added availability %s %s-%s",
                    self.barber.pk, window.date, window.start_time, window.end_time)

        messages.success(request, "Availability added.")
        return redirect("dashboard_availability")

    def _render(self, request, form, weekly_form, status=200):
        windows = Availability.objects.filter(
            barber=self.barber,
            date__gte=timezone.localdate(),
        ).order_by("date", "start_time")[:UPCOMING_AVAILABILITY_LIMIT]
        ctx = {
            "barber": self.barber,
            "form": form,
            "weekly_form": weekly_form,
            "windows": windows,
        }
        return render(request, self.template_name, ctx, status=status)


class WeeklyScheduleView(AvailabilityView):
    """POST only: regenerate the next N weeks from the weekly template."""
    http_method_names = ["post"]

    def post(self, request):
        weekly_form = WeeklyScheduleForm(request.POST)
        if not weekly_form.is_valid():
            return self._render(request, AvailabilityForm(barber=self.barber), weekly_form, status=400)

        count = generate_weekly_availability(
            self.barber,
            weekly_form.weekly,
            start_day=timezone.localdate(),
            weeks=weekly_form.cleaned_data["weeks"],
        )
        messages.success(request, f"Generated {count} availability windows.")
        return redirect("dashboard_availability")


class AvailabilityDeleteView(BarberRequiredMixin, View):
    http_method_names = ["post"]

    def post(self, request, pk):
        window = get_object_or_404(Availability, pk=pk, barber=self.barber)
        window.delete()
        messages.success(request, "Availability removed.")
        return redirect("dashboard_availability")


class GalleryView(BarberRequiredMixin, View):
    template_name = "dashboard/gallery.html"

    def get(self, request):
        return self._render(request, GalleryImageForm())

    def post(self, request):
        form = GalleryImageForm(request.POST, request.FILES)
        if not form.is_valid():
            return self._render(request, form, status=400)

        image = form.cleaned_data.get("image")
        try:
            url = upload_gallery_image(self.barber, image) if image else form.cleaned_data["image_url"]
        except StoreUnavailable as e:
            form.add_error(None, e.message)
            return self._render(request, form, status=e.status_code)

        GalleryImage.objects.create(
            barber=self.barber,
            image_url=url,
            display_order=form.cleaned_data.get("display_order") or 0,
        )
        messages.success(request, "Image added to your gallery.")
        return redirect("dashboard_gallery")

    def _render(self, request, form, status=200):
        ctx = {
            "barber": self.barber,
            "form": form,
            "images": self.barber.gallery_images.order_by("display_order", "-created_at"),
        }
        return render(request, self.template_name, ctx, status=status)


class GalleryImageDeleteView(BarberRequiredMixin, View):
    http_method_names = ["post"]

    def post(self, request, pk):
        image = get_object_or_404(GalleryImage, pk=pk, barber=self.barber)
        if self.barber.logo_url == image.image_url:
            self.barber.logo_url = ""
            self.barber.save(update_fields=["logo_url"])
        image.delete()
        logger.info("Barber %s removed gallery image %s", self.barber.pk, pk)
        messages.success(request, "Image removed.")
        return redirect("dashboard_gallery")


class LogoView(BarberRequiredMixin, View):
    """
    POST image=<gallery image id>  use that image as the logo
    POST remove=1                  clear the logo
    """
    http_method_names = ["post"]

    def post(self, request):
        if request.POST.get("remove"):
            self.barber.logo_url = ""
            messages.success(request, "Logo removed.")
        else:
            image_id = (request.POST.get("image") or "").strip()
            if not image_id.isdigit():
                return HttpResponseBadRequest("Pick an image from your gallery.")
            image = get_object_or_404(GalleryImage, pk=int(image_id), barber=self.barber)
            self.barber.logo_url = image.image_url
            messages.success(request, "Logo updated.")
        self.barber.save(update_fields=["logo_url"])
        return redirect("dashboard_gallery")
