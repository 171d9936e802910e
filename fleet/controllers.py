"""
Create/edit form state for a single fleet account.

The default scheduler closes the form on a timer thread, for callers that
keep the controller alive. Views pass ``schedule_manually`` and hand the
pending close to the browser instead.
"""
import logging

from django.conf import settings

from fleetdesk.exceptions import FleetDeskError
from .deferred import schedule_with_timer
from .models import FleetAccount

logger = logging.getLogger(__name__)

FORM_DEFAULTS = {
    "business_account_id": "",
    "company_name": "",
    "contact_name": "",
    "contact_phone": "",
    "address": "",
    "city": "",
    "state": "",
    "zip_code": "",
    "is_active": True,
    "account_type": FleetAccount.AccountType.LOCAL,
    "needs_review": False,
    "review_notes": "",
}

BOOLEAN_FIELDS = {"is_active", "needs_review"}


def initial_values(account=None):
    """Form values for ``account`` with blanks for missing fields."""
    values = dict(FORM_DEFAULTS)
    if account is None:
        return values
    for name, default in FORM_DEFAULTS.items():
        current = account.get(name) if isinstance(account, dict) else getattr(account, name, None)
        if current is None:
            current = default
        elif name not in BOOLEAN_FIELDS and not current:
            current = default
        values[name] = current
    return values


def _identity(account):
    if account is None:
        return None
    if isinstance(account, dict):
        return account.get("id")
    return getattr(account, "pk", None)


class AccountFormController:
    """
    Mode is fixed at construction: ``edit`` when the backing record has an id,
    ``create`` otherwise. After a successful write the close callback runs
    once, after ``close_delay`` seconds, unless dispose() came first.
    """

    def __init__(self, repository, account=None, on_close=None, on_saved=None,
                 schedule=schedule_with_timer, close_delay=None):
        self.repository = repository
        self.account = account
        self.is_editing = bool(_identity(account))
        self.values = initial_values(account)
        self.loading = False
        self.error = None
        self.success = False
        self.pending_close = None
        self._on_close = on_close
        self._on_saved = on_saved
        self._schedule = schedule
        self.close_delay = settings.FLEET_FORM_CLOSE_DELAY if close_delay is None else close_delay

    @property
    def mode(self):
        return "edit" if self.is_editing else "create"

    @property
    def account_id(self):
        return _identity(self.account)

    def reset(self, account):
        """Re-sync to a different backing record; values are replaced, not merged."""
        if _identity(account) == self.account_id and account is not None:
            return False
        self.account = account
        self.values = initial_values(account)
        self.error = None
        self.success = False
        return True

    def update(self, **changes):
        unknown = set(changes) - set(FORM_DEFAULTS)
        if unknown:
            raise KeyError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.values.update(changes)

    # -----------------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------------
    def submit(self):
        """Create or update from the current values. Returns True on success."""
        self.loading = True
        self.error = None
        payload = dict(self.values)
        try:
            if self.is_editing:
                self.repository.update(self.account_id, payload)
            else:
                self.account = self.repository.create(payload)
        except FleetDeskError as exc:
            logger.info("Account %s failed: %s", self.mode, exc)
            self.error = str(exc)
            return False
        finally:
            self.loading = False
        self._succeed()
        return True

    def quick_status(self, is_active):
        """Mark active/inactive and clear review in one write; no-op when creating."""
        if not self.is_editing:
            return False
        self.loading = True
        self.error = None
        try:
            self.repository.quick_set_active(self.account_id, is_active)
        except FleetDeskError as exc:
            logger.info("Quick status change failed for %s: %s", self.account_id, exc)
            self.error = str(exc)
            return False
        finally:
            self.loading = False
        self.values["is_active"] = bool(is_active)
        self.values["needs_review"] = False
        self._succeed()
        return True

    def close(self):
        self.dispose()
        if self._on_close:
            self._on_close()

    def dispose(self):
        """Drop any pending deferred close; call when the form goes away."""
        if self.pending_close is not None:
            self.pending_close.cancel()

    def _succeed(self):
        self.success = True
        self.dispose()
        self.pending_close = self._schedule(self.close_delay, self._saved)

    def _saved(self):
        if self._on_saved:
            self._on_saved()
