"""
Reads and writes against the fleet account table.
Every call is a single round trip; there is no locking, the last write wins.
"""
import enum
import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.db.models import F
from django.utils import timezone

from fleetdesk.exceptions import RepositoryError, ValidationError
from .models import FleetAccount

logger = logging.getLogger(__name__)


class StatusFilter(str, enum.Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    NEEDS_REVIEW = "needs_review"

    @classmethod
    def parse(cls, value):
        """Map a query-string value to a filter; anything unknown means ALL."""
        try:
            return cls(value)
        except ValueError:
            return cls.ALL

    @property
    def label(self):
        return {
            StatusFilter.ALL: "All Accounts",
            StatusFilter.ACTIVE: "Active Only",
            StatusFilter.INACTIVE: "Inactive Only",
            StatusFilter.NEEDS_REVIEW: "Needs Review",
        }[self]


STATUS_PREDICATES = {
    StatusFilter.ALL: {},
    StatusFilter.ACTIVE: {"is_active": True},
    StatusFilter.INACTIVE: {"is_active": False},
    StatusFilter.NEEDS_REVIEW: {"needs_review": True},
}

SORTABLE = {"total_sales", "updated_at", "company_name", "business_account_id"}

REQUIRED_FIELDS = ("business_account_id", "company_name")

# Fields a form may write. business_account_id is only accepted on create.
EDITABLE_FIELDS = (
    "company_name", "contact_name", "contact_phone",
    "address", "city", "state", "zip_code",
    "is_active", "account_type", "needs_review", "review_notes",
)
CREATE_FIELDS = ("business_account_id",) + EDITABLE_FIELDS

DASHBOARD_FIELDS = ("is_active", "needs_review", "total_sales")


class AccountRepository:
    """Thin gateway over FleetAccount; translates database failures to RepositoryError."""

    model = FleetAccount

    def __init__(self, using=None):
        self.using = using

    def _queryset(self):
        qs = self.model.objects.all()
        if self.using:
            qs = qs.using(self.using)
        return qs

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------
    def list(self, status_filter=StatusFilter.ALL, order_by="total_sales", descending=True):
        """Return accounts matching the status filter, sorted (NULLs last)."""
        status_filter = StatusFilter(status_filter)
        if order_by not in SORTABLE:
            order_by = "total_sales"
        ordering = F(order_by).desc(nulls_last=True) if descending else F(order_by).asc(nulls_last=True)
        qs = self._queryset().filter(**STATUS_PREDICATES[status_filter]).order_by(ordering, "company_name")
        try:
            return list(qs)
        except DatabaseError as exc:
            logger.warning("Account list failed (filter=%s): %s", status_filter.value, exc)
            raise RepositoryError("Could not load accounts.") from exc

    def list_for_dashboard(self):
        """Return the {is_active, needs_review, total_sales} projection of every account."""
        try:
            return list(self._queryset().values(*DASHBOARD_FIELDS))
        except DatabaseError as exc:
            logger.warning("Dashboard stats query failed: %s", exc)
            raise RepositoryError("Could not load account statistics.") from exc

    def list_review_alerts(self, limit=None):
        """Most recently updated accounts flagged for review."""
        if limit is None:
            limit = settings.FLEET_REVIEW_ALERT_LIMIT
        qs = (
            self._queryset()
            .filter(needs_review=True)
            .order_by(F("updated_at").desc(nulls_last=True))[:limit]
        )
        try:
            return list(qs)
        except DatabaseError as exc:
            logger.warning("Review alert query failed: %s", exc)
            raise RepositoryError("Could not load review alerts.") from exc

    def get(self, account_id):
        try:
            return self._queryset().get(pk=account_id)
        except (self.model.DoesNotExist, DjangoValidationError) as exc:
            raise RepositoryError(f"Account {account_id} does not exist.") from exc
        except DatabaseError as exc:
            logger.warning("Account lookup failed for %s: %s", account_id, exc)
            raise RepositoryError("Could not load the account.") from exc

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------
    def create(self, record):
        """Insert a manually entered account. Returns the saved instance."""
        missing = [f for f in REQUIRED_FIELDS if not str(record.get(f) or "").strip()]
        if missing:
            raise ValidationError(
                "Required: " + ", ".join(f.replace("_", " ") for f in missing), fields=missing
            )

        values = {k: record[k] for k in CREATE_FIELDS if k in record}
        values["business_account_id"] = values["business_account_id"].strip()
        values["company_name"] = values["company_name"].strip()
        values["source"] = settings.FLEET_MANUAL_SOURCE
        values["updated_at"] = timezone.now()

        try:
            account = self._queryset().create(**values)
        except DatabaseError as exc:
            logger.warning("Account insert failed for %s: %s", values["business_account_id"], exc)
            raise RepositoryError("Could not save the account.") from exc

        logger.info("Created account %s (%s)", account.business_account_id, account.pk)
        return account

    def update(self, account_id, fields):
        """Write the editable subset of ``fields`` and refresh updated_at."""
        values = {k: fields[k] for k in EDITABLE_FIELDS if k in fields}
        values["updated_at"] = timezone.now()

        try:
            changed = self._queryset().filter(pk=account_id).update(**values)
        except DjangoValidationError as exc:
            raise RepositoryError(f"Account {account_id} does not exist.") from exc
        except DatabaseError as exc:
            logger.warning("Account update failed for %s: %s", account_id, exc)
            raise RepositoryError("Could not save the account.") from exc

        if not changed:
            raise RepositoryError(f"Account {account_id} does not exist.")

        logger.info("Updated account %s: %s", account_id, ", ".join(sorted(values)))
        return values

    def quick_set_active(self, account_id, is_active):
        """Set active/inactive and clear the review flag in one write."""
        return self.update(account_id, {"is_active": bool(is_active), "needs_review": False})
