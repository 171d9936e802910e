"""
Top-level screen router.

The shell decides which screen may be shown: a pending password recovery
beats everything, no session means the login screen, otherwise the selected
tab. Screen state that must survive between requests lives in ``store``
(the Django session in production, a dict in tests).
"""
import enum
import logging

from users.session import SessionEvent

logger = logging.getLogger(__name__)

RECOVERY_KEY = "shell.password_recovery"
TAB_KEY = "shell.active_tab"


class Screen(str, enum.Enum):
    LOGIN = "login"
    PASSWORD_RESET = "password_reset"
    DASHBOARD = "dashboard"
    ACCOUNTS = "accounts"


TABS = (Screen.DASHBOARD, Screen.ACCOUNTS)


class ApplicationShell:
    def __init__(self, session_manager, store=None):
        self.session_manager = session_manager
        self.store = {} if store is None else store
        self.session = None
        self.loading = True
        self.editing_account = None
        self.show_add_form = False
        self.refresh_key = 0
        self._unsubscribe = None

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------
    def mount(self):
        self.session = self.session_manager.get_current_session()
        self.loading = False
        self._unsubscribe = self.session_manager.on_session_change(self._on_session_change)
        return self

    def unmount(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def mounted(self):
        return self._unsubscribe is not None

    def _on_session_change(self, event, session):
        self.session = session
        if event == SessionEvent.PASSWORD_RECOVERY:
            self.store[RECOVERY_KEY] = True
        elif event == SessionEvent.SIGNED_OUT:
            self.store.pop(RECOVERY_KEY, None)
            self.store.pop(TAB_KEY, None)
            self.close_form()

    # -----------------------------------------------------------------------
    # Routing
    # -----------------------------------------------------------------------
    @property
    def recovering(self):
        return bool(self.store.get(RECOVERY_KEY))

    @property
    def active_tab(self):
        try:
            return Screen(self.store.get(TAB_KEY, Screen.DASHBOARD.value))
        except ValueError:
            return Screen.DASHBOARD

    @property
    def screen(self):
        if self.recovering:
            return Screen.PASSWORD_RESET
        if self.session is None:
            return Screen.LOGIN
        return self.active_tab

    def navigate(self, tab):
        tab = Screen(tab)
        if tab not in TABS:
            raise ValueError(f"{tab.value} is not a tab")
        if self.store.get(TAB_KEY) != tab.value:
            self.store[TAB_KEY] = tab.value

    def view_alerts(self):
        self.navigate(Screen.ACCOUNTS)

    def complete_password_reset(self):
        # The user keeps the session recovery gave them and lands on the dashboard.
        self.store.pop(RECOVERY_KEY, None)

    # -----------------------------------------------------------------------
    # Account form
    # -----------------------------------------------------------------------
    def edit(self, account):
        self.editing_account = account
        self.show_add_form = False

    def add(self):
        self.editing_account = None
        self.show_add_form = True

    @property
    def form_open(self):
        return self.editing_account is not None or self.show_add_form

    def close_form(self):
        self.editing_account = None
        self.show_add_form = False

    def form_saved(self):
        self.close_form()
        self.refresh_key += 1

    def sign_out(self):
        self.session_manager.sign_out()


def shows(screen):
    """Mark a view as rendering ``screen`` so the shell middleware can route it."""
    screen = Screen(screen)

    def decorator(view_func):
        view_func.shell_screen = screen
        return view_func
    return decorator
