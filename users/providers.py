"""Auth provider backed by django.contrib.auth and the database session store."""
import logging
import smtplib

from django.conf import settings
from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.core.mail import send_mail
from django.db import DatabaseError
from django.urls import reverse

from fleetdesk.exceptions import AuthError
from .models import PasswordResetToken, User
from .session import Session

logger = logging.getLogger(__name__)

MODEL_BACKEND = "django.contrib.auth.backends.ModelBackend"


class DjangoAuthProvider:
    """One instance per request; every method raises AuthError on failure."""

    def __init__(self, request):
        self.request = request

    def _session_for(self, user):
        if self.request.session.session_key is None:
            self.request.session.save()
        return Session(token=self.request.session.session_key, email=user.email)

    def get_current_session(self):
        user = getattr(self.request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return self._session_for(user)

    def sign_in_with_password(self, email, password):
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthError("Email and password are required.")
        user = authenticate(self.request, username=email, password=password)
        if user is None:
            logger.info("Failed sign-in for %s", email)
            raise AuthError("Invalid email or password.")
        login(self.request, user)
        return self._session_for(user)

    def sign_out(self):
        try:
            logout(self.request)
        except DatabaseError as exc:
            raise AuthError("Could not sign out. Please try again.") from exc

    def request_password_reset(self, email, redirect_to):
        email = (email or "").strip().lower()
        if not email:
            raise AuthError("Please enter your email address")
        try:
            user = User.objects.get(email=email, is_active=True)
        except User.DoesNotExist:
            logger.info("Password reset requested for unknown email %s", email)
            return  # Do not reveal whether email exists
        token_obj = PasswordResetToken(user=user)
        token_obj.save()
        link = redirect_to.rstrip("/") + reverse("users:recover", kwargs={"token": token_obj.token})
        try:
            _send_reset_email(user, link)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Reset email to %s failed: %s", email, exc)
            raise AuthError("Could not send the reset email. Please try again.") from exc

    def verify_recovery(self, token):
        token_obj = (
            PasswordResetToken.objects.select_related("user").filter(token=token).first()
        )
        if token_obj is None or not token_obj.is_valid or not token_obj.user.is_active:
            raise AuthError("This reset link has expired or already been used.")
        token_obj.used = True
        token_obj.save(update_fields=["used"])
        login(self.request, token_obj.user, backend=MODEL_BACKEND)
        return self._session_for(token_obj.user)

    def update_password(self, new_password):
        user = self.request.user
        if not user.is_authenticated:
            raise AuthError("Your session has expired. Request a new reset link.")
        user.set_password(new_password)
        user.save(update_fields=["password"])
        update_session_auth_hash(self.request, user)
        return self._session_for(user)

    def refresh(self):
        user = self.request.user
        if not user.is_authenticated:
            raise AuthError("No session to refresh.")
        self.request.session.cycle_key()
        return self._session_for(user)


def _send_reset_email(user, link):
    """Send password reset email via configured SMTP."""
    send_mail(
        subject="Fleet Account Manager – Password Reset",
        message=(
            f"Hi {user.display_name},\n\n"
            f"Click the link below to reset your password:\n{link}\n\n"
            f"This link expires in {settings.PASSWORD_RESET_TOKEN_HOURS} hour(s).\n\n"
            f"If you didn't request this, ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )
