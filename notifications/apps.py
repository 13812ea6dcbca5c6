# notifications/apps.py
from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Booking notifications"

    def ready(self):
        # Import signal handlers so Django registers them at startup
        import notifications.signals  # noqa: F401
