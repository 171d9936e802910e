"""
Dashboard screen state – aggregate counts plus the review alert list.
Both reads degrade to zero/empty on failure; nothing is shown to the user.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from fleetdesk.exceptions import RepositoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardStats:
    total: int = 0
    active: int = 0
    inactive: int = 0
    needs_review: int = 0
    total_sales: Decimal = Decimal("0")


def _get(row, name):
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def compute_stats(rows):
    """Aggregate the dashboard projection; a missing total_sales counts as 0."""
    rows = list(rows)
    return DashboardStats(
        total=len(rows),
        active=sum(1 for r in rows if _get(r, "is_active")),
        inactive=sum(1 for r in rows if not _get(r, "is_active")),
        needs_review=sum(1 for r in rows if _get(r, "needs_review")),
        total_sales=sum((Decimal(_get(r, "total_sales") or 0) for r in rows), Decimal("0")),
    )


class DashboardViewModel:
    def __init__(self, repository, on_view_alerts=None, alert_limit=None):
        self.repository = repository
        if alert_limit is None:
            alert_limit = settings.FLEET_REVIEW_ALERT_LIMIT
        self.alert_limit = alert_limit
        self.stats = DashboardStats()
        self.alerts = []
        self.loading = True
        self.active = False
        self._on_view_alerts = on_view_alerts

    def activate(self):
        """Load stats, then alerts; both reads share the request's database connection."""
        self.active = True
        self._load_stats()
        self._load_alerts()
        self.loading = False
        return self

    def deactivate(self):
        self.active = False

    def _load_stats(self):
        try:
            rows = self.repository.list_for_dashboard()
        except RepositoryError as exc:
            logger.warning("Dashboard stats unavailable: %s", exc)
            return
        if self.active:
            self.stats = compute_stats(rows)

    def _load_alerts(self):
        try:
            rows = self.repository.list_review_alerts(limit=self.alert_limit)
        except RepositoryError as exc:
            logger.warning("Dashboard alerts unavailable: %s", exc)
            return
        if self.active:
            self.alerts = list(rows)

    def view_all_alerts(self):
        if self._on_view_alerts:
            self._on_view_alerts()
