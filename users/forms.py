"""Sign-in and password recovery forms."""
from django import forms
from django.contrib.auth.password_validation import validate_password

tw = "w-full px-4 py-2 bg-white border border-gray-300 rounded-lg text-gray-900 placeholder-gray-400 focus:outline-none focus:ring-2 focus:ring-blue-500 focus:border-transparent"


class LoginForm(forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"class": tw, "placeholder": "you@company.com", "autofocus": True})
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "••••••••"})
    )


class PasswordResetRequestForm(forms.Form):
    email = forms.EmailField(
        required=False,
        widget=forms.EmailInput(attrs={"class": tw, "placeholder": "you@company.com"}),
    )


class NewPasswordForm(forms.Form):
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "New password"}),
    )
    password_confirm = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": tw, "placeholder": "Confirm new password"})
    )

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_password(self):
        password = self.cleaned_data["password"]
        validate_password(password, user=self.user)
        return password

    def clean(self):
        cd = super().clean()
        if cd.get("password") and cd.get("password") != cd.get("password_confirm"):
            raise forms.ValidationError("Passwords do not match.")
        return cd
