import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("organization", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BusinessAccount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("business_name", models.CharField(max_length=255, unique=True, verbose_name="business name")),
                ("contact_name", models.CharField(max_length=255, verbose_name="contact name")),
                ("contact_email", models.EmailField(blank=True, default="", max_length=254, verbose_name="contact e-mail")),
                ("contact_number", models.CharField(max_length=30, verbose_name="contact number")),
                ("contact_person", models.CharField(blank=True, default="", max_length=255, verbose_name="contact person")),
                ("address", models.TextField(blank=True, default="", verbose_name="address")),
                ("gst_number", models.CharField(blank=True, default="", max_length=20, verbose_name="GST number")),
                ("source_type", models.CharField(db_index=True, default="Direct", max_length=50, verbose_name="source type")),
                ("type_of_lead", models.JSONField(blank=True, default=list, verbose_name="type of lead")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Active", "Active"),
                            ("Pipeline", "Pipeline"),
                            ("Quotations", "Quotations"),
                            ("Customer", "Customer"),
                            ("Closed", "Closed"),
                            ("TargetLeads", "Target leads"),
                        ],
                        db_index=True,
                        default="Active",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("is_customer", models.BooleanField(default=False, verbose_name="is customer")),
                ("total_price", models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="total price")),
                (
                    "assigned_to",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_accounts",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="assigned to",
                    ),
                ),
                (
                    "zone",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="accounts",
                        to="organization.zone",
                        verbose_name="zone",
                    ),
                ),
            ],
            options={
                "verbose_name": "business account",
                "verbose_name_plural": "business accounts",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="AccountNote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField(verbose_name="text")),
                ("author", models.CharField(blank=True, default="", max_length=150, verbose_name="author")),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now, verbose_name="timestamp")),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notes",
                        to="customers.businessaccount",
                    ),
                ),
            ],
            options={
                "ordering": ["timestamp", "id"],
            },
        ),
        migrations.CreateModel(
            name="AccountFollowUp",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("date", models.DateTimeField(verbose_name="date")),
                ("note", models.TextField(verbose_name="note")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed")],
                        default="pending",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="followups",
                        to="customers.businessaccount",
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
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
    ]
