from django.contrib import admin
from notifications.models import Notification

@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("subject", "recipient", "booking", "sent", "created_at")
    list_filter = ("sent", "created_at")
    search_fields = ("recipient", "subject", "message")
