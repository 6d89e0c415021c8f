import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("customers", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Quotation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "quotation_number",
                    models.CharField(
                        error_messages={"unique": "A quotation with this number already exists."},
                        max_length=50,
                        unique=True,
                        verbose_name="quotation number",
                    ),
                ),
                ("customer_name", models.CharField(blank=True, default="", max_length=255, verbose_name="customer name")),
                ("customer_email", models.CharField(blank=True, default="", max_length=254, verbose_name="customer e-mail")),
                ("mobile_number", models.CharField(blank=True, default="", max_length=30, verbose_name="mobile number")),
                ("gstin", models.CharField(blank=True, default="", max_length=20, verbose_name="GSTIN")),
                (
                    "gst_type",
                    models.CharField(
                        choices=[("intrastate", "Intrastate"), ("interstate", "Interstate")],
                        default="intrastate",
                        max_length=20,
                        verbose_name="GST type",
                    ),
                ),
                ("date", models.DateField(default=django.utils.timezone.localdate, verbose_name="date")),
                ("valid_until", models.DateField(blank=True, null=True, verbose_name="valid until")),
                ("status", models.CharField(db_index=True, default="Draft", max_length=30, verbose_name="status")),
                ("sub_total", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="subtotal")),
                ("total_gst", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="total GST")),
                ("sgst", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="SGST")),
                ("cgst", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="CGST")),
                ("igst", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="IGST")),
                ("total", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="total")),
                (
                    "manual_gst_amount",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name="manual GST amount"),
                ),
                (
                    "manual_sgst_percentage",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name="manual SGST %"),
                ),
                (
                    "manual_cgst_percentage",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name="manual CGST %"),
                ),
                (
                    "manual_igst_percentage",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name="manual IGST %"),
                ),
                (
                    "business",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quotations",
                        to="customers.businessaccount",
                        verbose_name="business account",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quotations_created",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="created by",
                    ),
                ),
            ],
            options={
                "verbose_name": "quotation",
                "verbose_name_plural": "quotations",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="QuotationItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0, verbose_name="position")),
                ("description", models.CharField(blank=True, default="", max_length=255, verbose_name="description")),
                ("hsn_code", models.CharField(blank=True, default="", max_length=20, verbose_name="HSN code")),
                ("quantity", models.DecimalField(decimal_places=3, default=0, max_digits=12, verbose_name="quantity")),
                ("rate", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="rate")),
                ("gst_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=5, verbose_name="GST %")),
                (
                    "quotation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="quotations.quotation",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="QuotationNote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField(verbose_name="text")),
                ("author", models.CharField(blank=True, default="", max_length=150, verbose_name="author")),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now, verbose_name="timestamp")),
                (
                    "quotation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notes",
                        to="quotations.quotation",
                    ),
                ),
            ],
            options={
                "ordering": ["timestamp", "id"],
            },
        ),
        migrations.CreateModel(
            name="QuotationFollowUp",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("date", models.DateTimeField(verbose_name="date")),
                ("note", models.TextField(blank=True, default="", verbose_name="note")),
                (
                    "status",
                    models.CharField(
                        choices=[("Pending", "Pending"), ("Completed", "Completed"), ("Canceled", "Canceled")],
                        default="Pending",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                (
                    "added_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "quotation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="followups",
                        to="quotations.quotation",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
    ]
