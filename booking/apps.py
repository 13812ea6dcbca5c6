# booking/apps.py
from django.apps import AppConfig


class BookingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "booking"
    verbose_name = "Barbershop booking"

    def ready(self):
        import booking.signals  # noqa: F401
        from booking.services.stores import get_store
        from booking.site_config import get_site_settings

        # Resolve site mode and store once at startup so bad values fail fast.
        get_site_settings()
        get_store()
