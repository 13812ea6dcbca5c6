from django import forms

from .serializers import PHONE_RE


class BookingForm(forms.Form):
    """
    Contact details posted from the booking page together with the chosen
    slot (service id and slot start as hidden fields).
    """
    service = forms.IntegerField(widget=forms.HiddenInput, min_value=1)
    starts_at = forms.DateTimeField(widget=forms.HiddenInput)
    customer_name = forms.CharField(max_length=200, label="Name")
    customer_email = forms.EmailField(label="Email")
    customer_phone = forms.CharField(max_length=20, required=False, label="Phone")
    notes = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}), required=False)

    def clean_customer_name(self):
        name = self.cleaned_data["customer_name"].strip()
        if not name:
            raise forms.ValidationError("Please enter your name.")
        return name

    def clean_customer_phone(self):
        phone = (self.cleaned_data.get("customer_phone") or "").strip()
        if phone and not PHONE_RE.match(phone):
            raise forms.ValidationError("Phone must be digits only, 7 to 15 digits.")
        return phone
