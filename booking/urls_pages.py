# booking/urls_pages.py
#
# Public HTML pages (mounted at the site root).
#
from django.urls import path

from . import views_cancel
from .views_pages import BarberDetailView, BarberListView, BookingPageView, HomeView

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("barbers/", BarberListView.as_view(), name="barber_list"),
    path("barbers/<slug:slug>/", BarberDetailView.as_view(), name="barber_detail"),
    path("barbers/<slug:slug>/book/", BookingPageView.as_view(), name="book"),

    # Public cancel flow (HTML + POST)
    path("bookings/cancel/", views_cancel.cancel_lookup, name="cancel_lookup"),
    path("bookings/<str:token>/cancel/", views_cancel.cancel_booking_page, name="cancel_booking_page"),
    path("bookings/<str:token>/cancel/submit/", views_cancel.cancel_booking_action, name="cancel_booking_action"),
]
