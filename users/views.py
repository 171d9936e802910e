"""Authentication views: login, logout, password recovery."""
from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from fleetdesk.exceptions import AuthError
from fleetdesk.shell import Screen, shows
from .forms import LoginForm, NewPasswordForm, PasswordResetRequestForm


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------
@shows(Screen.LOGIN)
@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.method == "POST":
        form = LoginForm(data=request.POST)
        if form.is_valid():
            try:
                request.session_manager.sign_in_with_password(
                    form.cleaned_data["email"], form.cleaned_data["password"]
                )
            except AuthError as exc:
                form.add_error(None, str(exc))
            else:
                return redirect("dashboard:summary")
    else:
        form = LoginForm()
    return render(request, "registration/login.html", {
        "form": form,
        "reset_form": PasswordResetRequestForm(),
        "page_title": "Sign In",
    })


@require_POST
def logout_view(request):
    try:
        request.shell.sign_out()
    except AuthError as exc:
        messages.error(request, str(exc))
        return redirect("dashboard:summary")
    return redirect("users:login")


# ---------------------------------------------------------------------------
# Password recovery
# ---------------------------------------------------------------------------
@shows(Screen.LOGIN)
@require_http_methods(["GET", "POST"])
def password_reset_request_view(request):
    error = None
    if request.method == "POST":
        form = PasswordResetRequestForm(request.POST)
        if form.is_valid():
            try:
                request.session_manager.request_password_reset(
                    form.cleaned_data["email"], redirect_to=request.build_absolute_uri("/")
                )
            except AuthError as exc:
                error = str(exc)
            else:
                messages.success(request, "If an account exists with that email, a reset link has been sent.")
                return redirect("users:login")
    else:
        form = PasswordResetRequestForm()
    return render(request, "registration/password_reset_request.html", {
        "form": form,
        "error": error,
        "page_title": "Reset Password",
    })


@require_http_methods(["GET"])
def recover_view(request, token):
    """Landing point of the emailed link – opens a session in recovery mode."""
    try:
        request.session_manager.verify_recovery(token)
    except AuthError as exc:
        messages.error(request, str(exc))
        return redirect("users:login")
    return redirect("users:reset_password")


@shows(Screen.PASSWORD_RESET)
@require_http_methods(["GET", "POST"])
def reset_password_view(request):
    if request.method == "POST":
        form = NewPasswordForm(request.POST, user=request.user)
        if form.is_valid():
            try:
                request.session_manager.update_password(form.cleaned_data["password"])
            except AuthError as exc:
                form.add_error(None, str(exc))
            else:
                request.shell.complete_password_reset()
                messages.success(request, "Password updated.")
                return redirect("dashboard:summary")
    else:
        form = NewPasswordForm(user=request.user)
    return render(request, "registration/reset_password.html", {
        "form": form,
        "page_title": "Set New Password",
    })
