"""
Session state cell.

The manager is the only writer of the current session. Screens subscribe with
on_session_change() and must call the returned handle when they go away.
"""
import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class SessionEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    USER_UPDATED = "USER_UPDATED"


@dataclass(frozen=True)
class Session:
    token: str
    email: str


class SessionManager:
    """
    Wraps an auth provider. Provider methods raise AuthError; the manager lets
    it propagate and only publishes an event once the provider call succeeded.
    """

    def __init__(self, provider):
        self.provider = provider
        self._session = None
        self._listeners = []
        self._started = False

    def get_current_session(self):
        if not self._started:
            self._session = self.provider.get_current_session()
            self._started = True
        return self._session

    def on_session_change(self, callback):
        """Register ``callback(event, session)``; returns an unsubscribe callable."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self):
        return len(self._listeners)

    def _publish(self, event, session):
        self._session = session
        self._started = True
        logger.info("Session event %s for %s", event.value, session.email if session else "-")
        for callback in list(self._listeners):
            callback(event, session)

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------
    def sign_in_with_password(self, email, password):
        session = self.provider.sign_in_with_password(email, password)
        self._publish(SessionEvent.SIGNED_IN, session)
        return session

    def sign_out(self):
        self.provider.sign_out()
        self._publish(SessionEvent.SIGNED_OUT, None)

    def request_password_reset(self, email, redirect_to):
        self.provider.request_password_reset(email, redirect_to)

    def verify_recovery(self, token):
        """Follow a reset link: the user gets a session in recovery mode."""
        session = self.provider.verify_recovery(token)
        self._publish(SessionEvent.PASSWORD_RECOVERY, session)
        return session

    def update_password(self, new_password):
        session = self.provider.update_password(new_password)
        self._publish(SessionEvent.USER_UPDATED, session)
        return session

    def refresh(self):
        session = self.provider.refresh()
        self._publish(SessionEvent.TOKEN_REFRESHED, session)
        return session
