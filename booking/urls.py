# booking/urls.py
#
# Purpose:
# - Expose the JSON API of the booking app via DRF router (mounted at /api/).
# - The slots query endpoint is a plain APIView next to the router.
#
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AvailabilitySlotsView, BarberViewSet, BookingViewSet, ServiceViewSet

# --------------------------
# DRF Router registrations
# --------------------------
router = DefaultRouter()
router.register(r"barbers", BarberViewSet, basename="barber")
router.register(r"services", ServiceViewSet, basename="service")
router.register(r"bookings", BookingViewSet, basename="booking")

urlpatterns = [
    path("availability/slots/", AvailabilitySlotsView.as_view(), name="availability_slots"),
    path("", include(router.urls)),
]
