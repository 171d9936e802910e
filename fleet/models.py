"""Fleet account model – the only domain record."""
import uuid
from django.db import models


class FleetAccount(models.Model):
    """A corporate or rental fleet customer."""

    class AccountType(models.TextChoices):
        LOCAL = "LOCAL", "Local"
        CASH_FLEET = "CASH_FLEET", "Cash Fleet"
        NATIONAL_AIN = "NATIONAL_AIN", "National AIN"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business_account_id = models.CharField(max_length=64)
    company_name = models.CharField(max_length=255)
    contact_name = models.CharField(max_length=255, blank=True, default="")
    contact_phone = models.CharField(max_length=64, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=128, blank=True, default="")
    state = models.CharField(max_length=64, blank=True, default="")
    zip_code = models.CharField(max_length=16, blank=True, default="")
    is_active = models.BooleanField(default=True)
    account_type = models.CharField(
        max_length=16, choices=AccountType.choices, default=AccountType.LOCAL
    )
    needs_review = models.BooleanField(default=False)
    review_notes = models.TextField(blank=True, default="")

    # Computed upstream from invoicing; never written here.
    total_sales = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    last_invoice_date = models.DateField(null=True, blank=True)

    source = models.CharField(max_length=64, blank=True, default="")
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "fleet"
        db_table = "sb_fleet_accounts"
        indexes = [
            models.Index(fields=["is_active"], name="idx_fleet_active"),
            models.Index(fields=["needs_review", "updated_at"], name="idx_fleet_review"),
            models.Index(fields=["total_sales"], name="idx_fleet_sales"),
        ]

    def __str__(self):
        return f"{self.business_account_id} – {self.company_name}"

    @property
    def status(self):
        """Badge label used by the list: review wins over active/inactive."""
        if self.needs_review:
            return "Needs Review"
        return "Active" if self.is_active else "Inactive"
