from django import forms
from django.conf import settings
from django.utils import timezone

from .models import Availability
from .schedule import WEEKDAYS, parse_hours, windows_overlap

DEFAULT_WEEK = {
    "monday": (True, "09:00-17:00"),
    "tuesday": (True, "09:00-17:00"),
    "wednesday": (True, "09:00-17:00"),
    "thursday": (True, "09:00-17:00"),
    "friday": (True, "09:00-17:00"),
    "saturday": (False, "10:00-14:00"),
    "sunday": (False, "10:00-14:00"),
}


class AvailabilityForm(forms.ModelForm):
    """A single open window on one day."""

    class Meta:
        model = Availability
        fields = ["date", "start_time", "end_time"]
        widgets = {
            "date": forms.DateInput(attrs={"type": "date"}),
            "start_time": forms.TimeInput(attrs={"type": "time"}, format="%H:%M"),
            "end_time": forms.TimeInput(attrs={"type": "time"}, format="%H:%M"),
        }

    def __init__(self, *args, barber=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.barber = barber
        if barber is not None:
            self.instance.barber = barber

    def clean(self):
        cleaned = super().clean()
        day = cleaned.get("date")
        start = cleaned.get("start_time")
        end = cleaned.get("end_time")
        if day is None or start is None or end is None:
            return cleaned

        start = start.replace(second=0, microsecond=0)
        end = end.replace(second=0, microsecond=0)
        cleaned["start_time"], cleaned["end_time"] = start, end

        if start >= end:
            raise forms.ValidationError("Start time must be before end time.")
        if day < timezone.localdate():
            raise forms.ValidationError("Availability cannot be added for a past date.")
        if windows_overlap(self.barber, day, start, end, exclude_pk=self.instance.pk):
            raise forms.ValidationError("This window overlaps an existing one on that day.")
        return cleaned


class WeeklyScheduleForm(forms.Form):
    """
    Weekly template: per weekday an on/off switch and comma-separated ranges,
    e.g. "09:00-12:00, 13:00-17:00". Generates the next `weeks` weeks.
    """
    weeks = forms.IntegerField(min_value=1, max_value=8, initial=4)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for day in WEEKDAYS:
            enabled, hours = DEFAULT_WEEK[day]
            self.fields[f"{day}_enabled"] = forms.BooleanField(
                required=False, initial=enabled, label=day.capitalize()
            )
            self.fields[f"{day}_hours"] = forms.CharField(
                required=False, initial=hours, label="Hours"
            )
        self.weekly = {}

    def day_fields(self):
        return [(day.capitalize(), self[f"{day}_enabled"], self[f"{day}_hours"]) for day in WEEKDAYS]

    def clean(self):
        cleaned = super().clean()
        weekly = {}
        for index, day in enumerate(WEEKDAYS):
            if not cleaned.get(f"{day}_enabled"):
                continue
            try:
                ranges = parse_hours(cleaned.get(f"{day}_hours"))
            except ValueError as e:
                self.add_error(f"{day}_hours", str(e))
                continue
            if ranges:
                weekly[index] = ranges

        if not weekly and not self.errors:
            raise forms.ValidationError("Please enable at least one day in your weekly schedule.")
        self.weekly = weekly
        return cleaned


class GalleryImageForm(forms.Form):
    """Either a file for the blob store or the URL of an image hosted elsewhere."""
    image = forms.ImageField(required=False)
    image_url = forms.URLField(required=False, max_length=500, assume_scheme="https")
    display_order = forms.IntegerField(required=False, min_value=0, initial=0)

    def clean(self):
        cleaned = super().clean()
        image = cleaned.get("image")
        image_url = cleaned.get("image_url")
        if self.errors:
            return cleaned
        if image and image_url:
            raise forms.ValidationError("Choose a file or enter an image URL, not both.")
        if not image and not image_url:
            raise forms.ValidationError("Please choose a file or enter an image URL.")
        if image and image.size > settings.GALLERY_MAX_UPLOAD_BYTES:
            raise forms.ValidationError("Image is too large.")
        return cleaned
