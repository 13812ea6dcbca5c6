from django.contrib import admin

from .models import Availability


@admin.register(Availability)
class AvailabilityAdmin(admin.ModelAdmin):
    list_display = ("barber", "date", "start_time", "end_time")
    list_filter = ("barber", "date")
    ordering = ("barber", "date", "start_time")
