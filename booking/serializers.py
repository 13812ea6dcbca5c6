import re
from datetime import timezone as dt_timezone

from rest_framework import serializers

from .models import Barber, Booking, Service

PHONE_RE = re.compile(r"^\d{7,15}$")


class BarberSerializer(serializers.ModelSerializer):
    class Meta:
        model = Barber
        fields = ["id", "slug", "shop_name", "bio", "address", "city", "phone", "travel_enabled", "logo_url"]


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "barber", "name", "description", "duration_minutes", "price", "active"]
        read_only_fields = ["barber"]


class SlotSerializer(serializers.Serializer):
    start = serializers.DateTimeField(default_timezone=dt_timezone.utc)
    end = serializers.DateTimeField(default_timezone=dt_timezone.utc)
    available = serializers.BooleanField()


class BookingCreateSerializer(serializers.Serializer):
    """
    Public booking payload. The time must be one of the slots returned by
    /api/availability/slots/; ends_at is optional and checked when given.
    """
    barber = serializers.IntegerField(min_value=1)
    service = serializers.IntegerField(min_value=1)
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField(required=False)
    customer_name = serializers.CharField(max_length=200)
    customer_email = serializers.EmailField()
    customer_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_customer_phone(self, value):
        value = (value or "").strip()
        if value and not PHONE_RE.match(value):
            raise serializers.ValidationError("Phone must be digits only, 7 to 15 digits.")
        return value

    def validate(self, attrs):
        ends_at = attrs.get("ends_at")
        if ends_at is not None and ends_at <= attrs["starts_at"]:
            raise serializers.ValidationError("End time must be after start time.")
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Booking
        fields = [
            "id",
            "barber",
            "service",
            "customer_name",
            "customer_email",
            "starts_at",
            "ends_at",
            "status",
            "cancellation_token",
        ]
        read_only_fields = fields


class CancelBookingSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=64)
