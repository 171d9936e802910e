import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FleetAccount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("business_account_id", models.CharField(max_length=64)),
                ("company_name", models.CharField(max_length=255)),
                ("contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("contact_phone", models.CharField(blank=True, default="", max_length=64)),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=128)),
                ("state", models.CharField(blank=True, default="", max_length=64)),
                ("zip_code", models.CharField(blank=True, default="", max_length=16)),
                ("is_active", models.BooleanField(default=True)),
                ("account_type", models.CharField(
                    choices=[("LOCAL", "Local"), ("CASH_FLEET", "Cash Fleet"), ("NATIONAL_AIN", "National AIN")],
                    default="LOCAL", max_length=16,
                )),
                ("needs_review", models.BooleanField(default=False)),
                ("review_notes", models.TextField(blank=True, default="")),
                ("total_sales", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("last_invoice_date", models.DateField(blank=True, null=True)),
                ("source", models.CharField(blank=True, default="", max_length=64)),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "sb_fleet_accounts",
                "indexes": [
                    models.Index(fields=["is_active"], name="idx_fleet_active"),
                    models.Index(fields=["needs_review", "updated_at"], name="idx_fleet_review"),
                    models.Index(fields=["total_sales"], name="idx_fleet_sales"),
                ],
            },
        ),
    ]
