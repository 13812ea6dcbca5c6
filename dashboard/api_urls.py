from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api_views import AvailabilityViewSet

router = DefaultRouter()
router.register(r"availability", AvailabilityViewSet, basename="dashboard-availability")

urlpatterns = [
    path("", include(router.urls)),
]
