# booking/services/display.py
#
# Purpose:
# - Consistent, human-friendly formatting for prices, durations, slot times
#   and dates on the public pages and in e-mails.
# - Exposed to templates through booking/templatetags/booking_display.py.

from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.utils import timezone


class DisplayService:
    """
    Formatting helpers for the public-facing pages.
    """

    @staticmethod
    def format_price(price, currency_symbol="$"):
        """
        Format prices with a currency symbol and exactly two decimal places.

        Returns:
            str: Formatted price (e.g., "$25.00")
        """
        try:
            price_decimal = Decimal(str(price))
            return f"{currency_symbol}{price_decimal:.2f}"
        except (ValueError, TypeError, InvalidOperation):
            return f"{currency_symbol}0.00"

    @staticmethod
    def format_duration(duration_minutes):
        """
        Returns:
            str: "45 min", "1h" or "1h 30min"
        """
        if duration_minutes < 60:
            return f"{duration_minutes} min"

        hours = duration_minutes // 60
        minutes = duration_minutes % 60

        if minutes == 0:
            return f"{hours}h"

        return f"{hours}h {minutes}min"

    @staticmethod
    def format_service_display(service):
        """
        Returns:
            str: e.g. "Classic Cut — $35.00 • 45 min"
        """
        price_str = DisplayService.format_price(service.price)
        duration_str = DisplayService.format_duration(service.duration_minutes)
        return f"{service.name} — {price_str} • {duration_str}"

    @staticmethod
    def format_time_slot(start, end):
        """
        Slot times in the site's time zone, e.g. "9:00 AM - 9:45 AM".
        """
        start_local = timezone.localtime(start)
        end_local = timezone.localtime(end)
        return f"{_clock(start_local)} - {_clock(end_local)}"

    @staticmethod
    def format_long_date(day):
        """
        Returns:
            str: e.g. "March 5, 2025"
        """
        if isinstance(day, datetime) and timezone.is_aware(day):
            day = timezone.localtime(day)
        return f"{day:%B} {day.day}, {day.year}"


def _clock(value):
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"
