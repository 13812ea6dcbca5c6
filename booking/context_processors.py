from booking.site_config import get_site_settings


def site(request):
    """Expose the resolved SiteSettings to every template as `site`."""
    return {"site": get_site_settings()}
