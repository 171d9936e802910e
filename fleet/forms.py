"""Forms for fleet account management."""
from django import forms
from .models import FleetAccount
from .repository import StatusFilter

tw = "w-full px-3 py-2 bg-white border border-gray-300 rounded-lg text-gray-900 placeholder-gray-400 focus:outline-none focus:ring-2 focus:ring-blue-500 focus:border-transparent"
checkbox = "rounded text-blue-500"


class FleetAccountForm(forms.ModelForm):
    """Add/edit form. The business account id is locked once the record exists."""

    class Meta:
        model = FleetAccount
        fields = [
            "business_account_id", "company_name", "contact_name", "contact_phone",
            "address", "city", "state", "zip_code",
            "account_type", "is_active", "needs_review", "review_notes",
        ]
        labels = {
            "business_account_id": "Business Account ID",
            "is_active": "Active",
            "needs_review": "Needs Review",
        }
        widgets = {
            "business_account_id": forms.TextInput(attrs={"class": tw, "placeholder": "FS127217"}),
            "company_name": forms.TextInput(attrs={"class": tw}),
            "contact_name": forms.TextInput(attrs={"class": tw}),
            "contact_phone": forms.TextInput(attrs={"class": tw}),
            "address": forms.TextInput(attrs={"class": tw}),
            "city": forms.TextInput(attrs={"class": tw}),
            "state": forms.TextInput(attrs={"class": tw, "maxlength": 2}),
            "zip_code": forms.TextInput(attrs={"class": tw}),
            "account_type": forms.Select(attrs={"class": tw}),
            "is_active": forms.CheckboxInput(attrs={"class": checkbox}),
            "needs_review": forms.CheckboxInput(attrs={"class": checkbox}),
            "review_notes": forms.Textarea(attrs={"class": tw, "rows": 2, "placeholder": "Why does this need review?"}),
        }

    def __init__(self, *args, editing=False, **kwargs):
        super().__init__(*args, **kwargs)
        if editing:
            self.fields["business_account_id"].disabled = True


class AccountFilterForm(forms.Form):
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={"class": tw, "placeholder": "Search by ID, company, or city..."}),
    )
    status = forms.ChoiceField(
        required=False,
        choices=[(f.value, f.label) for f in StatusFilter],
        widget=forms.Select(attrs={"class": tw}),
    )


class QuickStatusForm(forms.Form):
    is_active = forms.TypedChoiceField(
        choices=[("true", "Mark Active"), ("false", "Mark Inactive")],
        coerce=lambda v: v == "true",
    )
