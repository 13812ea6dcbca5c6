# dashboard/urls.py
#
# Barber dashboard pages (mounted at /dashboard/).
#
from django.urls import path

from . import views
from .views_calendar import BookingsCalendarView

urlpatterns = [
    path("", views.DashboardHomeView.as_view(), name="dashboard_home"),
    path("calendar/", BookingsCalendarView.as_view(), name="dashboard_calendar"),

    path("availability/", views.AvailabilityView.as_view(), name="dashboard_availability"),
    path("availability/weekly/", views.WeeklyScheduleView.as_view(), name="dashboard_availability_weekly"),
    path("availability/<int:pk>/delete/", views.AvailabilityDeleteView.as_view(), name="dashboard_availability_delete"),

    path("gallery/", views.GalleryView.as_view(), name="dashboard_gallery"),
    path("gallery/<int:pk>/delete/", views.GalleryImageDeleteView.as_view(), name="dashboard_gallery_delete"),
    path("gallery/logo/", views.LogoView.as_view(), name="dashboard_logo"),
]
