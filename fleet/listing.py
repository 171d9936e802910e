"""Account list screen state: status filter (server) then text search (client)."""
import itertools
import logging

from fleetdesk.exceptions import RepositoryError
from .repository import StatusFilter

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("business_account_id", "company_name", "city")


def _field(account, name):
    if isinstance(account, dict):
        return account.get(name)
    return getattr(account, name, None)


def matches_search(account, term):
    """Case-insensitive substring match on any searchable field; '' matches all."""
    if not term:
        return True
    needle = term.lower()
    return any(
        needle in (_field(account, name) or "").lower()
        for name in SEARCH_FIELDS
    )


def search_accounts(accounts, term):
    return [a for a in accounts if matches_search(a, term)]


class AccountListViewModel:
    """
    Holds the fetched set for the current status filter.

    Every fetch takes a ticket from a monotonic counter. A completion whose
    ticket is no longer the latest, or that lands after deactivate(), is
    dropped, so two quick filter changes always show the later filter's rows.
    """

    def __init__(self, repository, status_filter=StatusFilter.ALL, search="",
                 on_add=None, on_edit=None):
        self.repository = repository
        self.status_filter = StatusFilter(status_filter)
        self.search = search or ""
        self.accounts = []
        self.loading = False
        self.active = False
        self._on_add = on_add
        self._on_edit = on_edit
        self._tickets = itertools.count(1)
        self._latest = 0

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------
    def activate(self):
        self.active = True
        self.load()
        return self

    def deactivate(self):
        self.active = False

    # -----------------------------------------------------------------------
    # Fetching
    # -----------------------------------------------------------------------
    def begin_fetch(self):
        ticket = next(self._tickets)
        self._latest = ticket
        self.loading = True
        return ticket

    def complete_fetch(self, ticket, accounts):
        """Apply a fetch result. Returns False when the result was discarded."""
        if not self.active or ticket != self._latest:
            logger.debug("Discarding stale account fetch %s (latest %s)", ticket, self._latest)
            return False
        self.accounts = list(accounts)
        self.loading = False
        return True

    def load(self):
        ticket = self.begin_fetch()
        try:
            rows = self.repository.list(self.status_filter)
        except RepositoryError as exc:
            logger.error("Error fetching accounts: %s", exc)
            rows = []
        return self.complete_fetch(ticket, rows)

    def set_filter(self, status_filter):
        status_filter = StatusFilter(status_filter)
        if status_filter == self.status_filter and not self.loading:
            return False
        self.status_filter = status_filter
        return self.load()

    def set_search(self, term):
        self.search = term or ""

    # -----------------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------------
    @property
    def visible(self):
        return search_accounts(self.accounts, self.search)

    def add(self):
        if self._on_add:
            self._on_add()

    def edit(self, account):
        if self._on_edit:
            self._on_edit(account)
