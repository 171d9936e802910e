from django.contrib import admin
from .models import FleetAccount


@admin.register(FleetAccount)
class FleetAccountAdmin(admin.ModelAdmin):
    list_display = ("business_account_id", "company_name", "city", "account_type",
                    "is_active", "needs_review", "total_sales", "updated_at")
    list_filter = ("is_active", "needs_review", "account_type")
    search_fields = ("business_account_id", "company_name", "city")
    readonly_fields = ("id", "total_sales", "last_invoice_date", "source", "updated_at")
    actions = None

    def has_delete_permission(self, request, obj=None):
        return False
