from django.utils import timezone
from rest_framework import serializers

from .models import Availability
from .schedule import windows_overlap


class AvailabilitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Availability
        fields = ["id", "barber", "date", "start_time", "end_time"]
        read_only_fields = ["barber"]
        # Overlap rules below cover the (barber, date, start_time) constraint.
        validators = []

    def validate(self, attrs):
        instance = self.instance
        day = attrs.get("date", getattr(instance, "date", None))
        start = attrs.get("start_time", getattr(instance, "start_time", None))
        end = attrs.get("end_time", getattr(instance, "end_time", None))

        # Minute grid, same as the dashboard form.
        start = start.replace(second=0, microsecond=0)
        end = end.replace(second=0, microsecond=0)
        attrs["start_time"], attrs["end_time"] = start, end

        if start >= end:
            raise serializers.ValidationError("start_time must be before end_time.")
        if day < timezone.localdate():
            raise serializers.ValidationError("Availability cannot be added for a past date.")

        barber = self.context["barber"]
        if windows_overlap(barber, day, start, end, exclude_pk=getattr(instance, "pk", None)):
            raise serializers.ValidationError("This window overlaps an existing one on that day.")
        return attrs
