from django import template

from booking.services.display import DisplayService

register = template.Library()


@register.filter
def price(value):
    return DisplayService.format_price(value)


@register.filter
def duration(minutes):
    return DisplayService.format_duration(minutes)


@register.filter
def long_date(day):
    return DisplayService.format_long_date(day)


@register.simple_tag
def time_range(start, end):
    return DisplayService.format_time_slot(start, end)


@register.filter
def service_label(service):
    return DisplayService.format_service_display(service)
