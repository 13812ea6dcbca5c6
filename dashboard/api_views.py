# dashboard/api_views.py
#
# Purpose:
# - JSON API for a barber's own availability windows (mounted at /api/dashboard/).
#   * GET/POST          /api/dashboard/availability/          (?date=YYYY-MM-DD)
#   * GET/PATCH/DELETE  /api/dashboard/availability/<id>/
#
# Notes:
# - Always scoped to request.user's barber profile; other barbers' windows 404.
# - A window that loses a race on (barber, date, start_time) answers 409, the
#   same as the HTML form.
#
import logging

from django.db import IntegrityError, transaction
from rest_framework import status, viewsets
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.permissions import BasePermission

from booking.services.slot_utils import parse_day
from booking.views import owned_barber
from .models import Availability
from .serializers import AvailabilitySerializer

logger = logging.getLogger(__name__)


class WindowConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This window already exists."
    default_code = "conflict"


class IsBarber(BasePermission):
    """Authenticated user that owns a barber profile."""
    message = "No barber profile found."

    def has_permission(self, request, view):
        return owned_barber(request.user) is not None


class AvailabilityViewSet(viewsets.ModelViewSet):
    serializer_class = AvailabilitySerializer
    permission_classes = [IsBarber]

    def get_barber(self):
        if not hasattr(self, "_barber"):
            self._barber = owned_barber(self.request.user)
        return self._barber

    def get_queryset(self):
        qs = Availability.objects.filter(barber=self.get_barber()).order_by("date", "start_time")
        date_param = self.request.query_params.get("date")
        if date_param:
            try:
                qs = qs.filter(date=parse_day(date_param))
            except ValueError as e:
                raise ValidationError({"date": str(e)})
        return qs

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx["barber"] = self.get_barber()
        return ctx

    def _save(self, serializer, **kwargs):
        try:
            with transaction.atomic():
                return serializer.save(**kwargs)
        except IntegrityError:
            logger.warning("Duplicate availability rejected for barber %s", self.get_barber().pk)
            raise WindowConflict()

    def perform_create(self, serializer):
        window = self._save(serializer, barber=self.get_barber())
        logger.info("Barber %s added availability %s %s-%s",
                    window.barber_id, window.date, window.start_time, window.end_time)

    def perform_update(self, serializer):
        self._save(serializer)
