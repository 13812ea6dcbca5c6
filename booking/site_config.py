"""
site_config.py
--------------
Process-wide site configuration resolved once from Django settings.

APP_MODE decides whether the site presents one barbershop ("single") or a
directory of barbers ("marketplace"). Views and templates receive the frozen
SiteSettings instead of reading settings ad hoc.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

MODE_SINGLE = "single"
MODE_MARKETPLACE = "marketplace"


@dataclass(frozen=True)
class SiteSettings:
    mode: str
    single_barber_slug: str
    app_name: str
    app_description: str
    demo: bool

    @property
    def is_single(self) -> bool:
        return self.mode == MODE_SINGLE

    @property
    def is_marketplace(self) -> bool:
        return self.mode == MODE_MARKETPLACE


def load_site_settings() -> SiteSettings:
    mode = (getattr(settings, "APP_MODE", MODE_SINGLE) or MODE_SINGLE).strip().lower()
    if mode not in (MODE_SINGLE, MODE_MARKETPLACE):
        raise ImproperlyConfigured(
            f"APP_MODE must be '{MODE_SINGLE}' or '{MODE_MARKETPLACE}', got {mode!r}."
        )

    slug = getattr(settings, "SINGLE_BARBER_SLUG", "luccifadez")
    if mode == MODE_SINGLE:
        app_name = getattr(settings, "SINGLE_SHOP_NAME", "Luccifadez")
        app_description = f"Premium barber services by {app_name}"
    else:
        app_name = getattr(settings, "MARKETPLACE_NAME", "LubooKing")
        app_description = "Book your next haircut with top barbers"

    return SiteSettings(
        mode=mode,
        single_barber_slug=slug,
        app_name=app_name,
        app_description=app_description,
        demo=getattr(settings, "BOOKING_STORE", "database") == "fixture",
    )


@lru_cache(maxsize=None)
def get_site_settings() -> SiteSettings:
    site = load_site_settings()
    logger.info("Site running in %s mode (demo=%s)", site.mode, site.demo)
    return site
