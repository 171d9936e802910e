"""Global template context processors."""
from django.conf import settings


def global_context(request):
    """Inject global context into all templates."""
    shell = getattr(request, "shell", None)
    session = shell.session if shell else None
    return {
        "app_name": "Fleet Account Manager",
        "session_email": session.email if session else "",
        "active_screen": shell.screen.value if shell else "",
        "debug": settings.DEBUG,
    }
