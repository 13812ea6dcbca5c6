from django.contrib import admin
from .models import Barber, Service, Booking, GalleryImage


class ServiceInline(admin.TabularInline):
    model = Service
    extra = 0


@admin.register(Barber)
class BarberAdmin(admin.ModelAdmin):
    list_display = ("id", "shop_name", "slug", "city", "user", "travel_enabled")
    search_fields = ("shop_name", "slug", "city")
    prepopulated_fields = {"slug": ("shop_name",)}
    inlines = [ServiceInline]

@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "barber", "name", "price", "duration_minutes", "active")
    list_filter = ("active", "barber")
    search_fields = ("name",)
    list_editable = ("price", "duration_minutes", "active")

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "barber", "customer_name", "service", "starts_at", "status")
    list_filter = ("status", "barber")
    search_fields = ("customer_name", "customer_email", "service__name")
    readonly_fields = ("cancellation_token", "cancelled_at", "created_at")

@admin.register(GalleryImage)
class GalleryImageAdmin(admin.ModelAdmin):
    list_display = ("barber", "image_url", "display_order", "created_at")
    list_filter = ("barber",)
