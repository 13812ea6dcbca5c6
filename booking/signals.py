# booking/signals.py
#
# Site settings and the store provider are resolved once per process.
# Drop the cached values when a test overrides the settings they come from.
#
from django.core.signals import setting_changed
from django.dispatch import receiver

from booking.services.stores import get_store
from booking.site_config import get_site_settings

SITE_SETTING_NAMES = {
    "APP_MODE",
    "SINGLE_BARBER_SLUG",
    "SINGLE_SHOP_NAME",
    "MARKETPLACE_NAME",
    "BOOKING_STORE",
}


@receiver(setting_changed)
def reset_site_caches(sender, setting, **kwargs):
    if setting in SITE_SETTING_NAMES:
        get_site_settings.cache_clear()
        get_store.cache_clear()
