"""Mounts the application shell for each request and enforces its routing."""
from django.shortcuts import redirect

from users.providers import DjangoAuthProvider
from users.session import SessionManager
from .shell import ApplicationShell, Screen, TABS

SCREEN_URLS = {
    Screen.LOGIN: "users:login",
    Screen.PASSWORD_RESET: "users:reset_password",
    Screen.DASHBOARD: "dashboard:summary",
    Screen.ACCOUNTS: "fleet:account_list",
}


class ApplicationShellMiddleware:
    """
    Views marked with ``@shows(screen)`` are only served when the shell
    resolves to that screen; anything else is redirected to the screen the
    shell picked. Unmarked views (admin, recovery links, logout) pass through.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        manager = SessionManager(DjangoAuthProvider(request))
        request.session_manager = manager
        request.shell = ApplicationShell(manager, store=request.session).mount()
        try:
            return self.get_response(request)
        finally:
            request.shell.unmount()

    def process_view(self, request, view_func, view_args, view_kwargs):
        wanted = getattr(view_func, "shell_screen", None)
        if wanted is None:
            return None

        shell = request.shell
        current = shell.screen
        if wanted in TABS and current in TABS:
            shell.navigate(wanted)
            return None
        if wanted != current:
            return redirect(SCREEN_URLS[current])
        return None
