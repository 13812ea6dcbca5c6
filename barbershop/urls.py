# barbershop/urls.py
#
# Purpose:
# - Project URL router.
# - Public HTML pages at the root, barber dashboard under /dashboard/,
#   JSON API under /api/ to keep the URL space clean.
#
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

urlpatterns = [
    # Django admin
    path("admin/", admin.site.urls),

    # Sign-in for barbers (Django auth)
    path("accounts/login/", auth_views.LoginView.as_view(), name="login"),
    path("accounts/logout/", auth_views.LogoutView.as_view(), name="logout"),

    # Barber dashboard (HTML)
    path("dashboard/", include("dashboard.urls")),

    # =====
    # API's
    # =====
    path("api/", include("booking.urls")),
    path("api/dashboard/", include("dashboard.api_urls")),

    # Public HTML
    path("", include("booking.urls_pages")),
]

# Uploaded media in DEBUG (dev only). In production the blob store serves it.
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
