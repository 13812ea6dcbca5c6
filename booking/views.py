# booking/views.py
#
# Purpose:
# - JSON API for the booking site:
#   * GET  /api/availability/slots/   open slots for barber/service/day
#   * POST /api/bookings/             public booking (no login)
#   * POST /api/bookings/cancel/      cancel by token (24h cutoff)
#   * /api/barbers/, /api/services/   read-only directory and catalog;
#     service writes only by the barber who owns them
#
# Notes:
# - Domain errors (booking.exceptions) carry their HTTP status; error_response
#   turns them into {"detail": ...} the same way for every endpoint.
#
import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import SAFE_METHODS, AllowAny, BasePermission
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import BookingError, StoreUnavailable
from .models import Barber, Service
from .serializers import (
    BarberSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    CancelBookingSerializer,
    ServiceSerializer,
    SlotSerializer,
)
from .services.availability_engine import AvailabilityEngine
from .services.booking_manager import BookingManager
from .services.slot_utils import parse_day

logger = logging.getLogger(__name__)


def error_response(exc: BookingError) -> Response:
    if isinstance(exc, StoreUnavailable):
        logger.error("Store unavailable: %s", exc)
    return Response({"detail": exc.message}, status=exc.status_code)


def owned_barber(user):
    """The Barber profile of an authenticated user, or None."""
    if not (user and user.is_authenticated):
        return None
    return Barber.objects.filter(user=user).first()


# -------------------- Permissions --------------------
class IsOwnerOrReadOnly(BasePermission):
    """
    Read: anyone
    Write: an authenticated user with a barber profile, on their own rows
    """
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return owned_barber(request.user) is not None

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        barber = owned_barber(request.user)
        return barber is not None and obj.barber_id == barber.pk


# -------------------- Slots --------------------
class AvailabilitySlotsView(APIView):
    """
    GET /api/availability/slots/?barber=ID&service=ID&date=YYYY-MM-DD

    Returns {"slots": [{"start", "end", "available"}, ...]} sorted by start.
    No availability that day is an empty list, not an error.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        barber_raw = (request.query_params.get("barber") or "").strip()
        service_raw = (request.query_params.get("service") or "").strip()
        date_raw = (request.query_params.get("date") or "").strip()

        if not barber_raw or not service_raw or not date_raw:
            return Response(
                {"detail": "barber, service, and date are required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            barber_id = int(barber_raw)
            service_id = int(service_raw)
        except ValueError:
            return Response(
                {"detail": "barber and service must be numeric ids."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            day = parse_day(date_raw)
        except ValueError:
            return Response(
                {"detail": "Invalid date format. Use YYYY-MM-DD."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            slots = AvailabilityEngine().compute_day_slots(barber_id, service_id, day)
        except BookingError as e:
            return error_response(e)

        return Response({"slots": SlotSerializer(slots, many=True).data})


# -------------------- ViewSets --------------------
class BarberViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Barber.objects.all().order_by("shop_name")
    serializer_class = BarberSerializer
    lookup_field = "slug"


class ServiceViewSet(viewsets.ModelViewSet):
    """
    Service catalog:
    - Anyone can list active services (optionally ?barber=ID).
    - A barber sees and edits only their own services, inactive included.
    """
    serializer_class = ServiceSerializer
    permission_classes = [IsOwnerOrReadOnly]

    def get_queryset(self):
        qs = Service.objects.all().order_by("barber_id", "price", "id")
        barber_param = self.request.query_params.get("barber")
        if barber_param and barber_param.isdigit():
            qs = qs.filter(barber_id=int(barber_param))

        if self.request.method not in SAFE_METHODS:
            barber = owned_barber(self.request.user)
            return qs.filter(barber=barber)
        return qs.filter(active=True)

    def perform_create(self, serializer):
        barber = owned_barber(self.request.user)
        if barber is None:
            raise PermissionDenied("No barber profile found.")
        serializer.save(barber=barber)


class BookingViewSet(viewsets.ViewSet):
    """
    Endpoints:
    - POST /api/bookings/          create (public, no login)
    - POST /api/bookings/cancel/   cancel with the token from the confirmation
    """
    permission_classes = [AllowAny]

    def create(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            booking = BookingManager().create_booking(
                barber_id=data["barber"],
                service_id=data["service"],
                starts_at=data["starts_at"],
                ends_at=data.get("ends_at"),
                customer_name=data["customer_name"],
                customer_email=data["customer_email"],
                customer_phone=data.get("customer_phone", ""),
                notes=data.get("notes", ""),
            )
        except BookingError as e:
            return error_response(e)

        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def cancel(self, request):
        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = BookingManager().cancel_booking(serializer.validated_data["token"])
        except BookingError as e:
            return error_response(e)

        return Response(
            {"detail": "Booking cancelled.", "booking": BookingSerializer(booking).data},
            status=status.HTTP_200_OK,
        )
