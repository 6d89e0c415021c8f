"""Models for the customers app (business accounts: leads and customers)."""
from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class BusinessAccount(TimeStampedModel):
    """A business tracked through the sales funnel, from lead to customer."""

    class Status(models.TextChoices):
        ACTIVE = "Active", "Active"
        PIPELINE = "Pipeline", "Pipeline"
        QUOTATIONS = "Quotations", "Quotations"
        CUSTOMER = "Customer", "Customer"
        CLOSED = "Closed", "Closed"
        TARGET_LEADS = "TargetLeads", "Target leads"

    class LeadType(models.TextChoices):
        REGULAR = "Regular", "Regular"
        GOVERNMENT = "Government", "Government"
        OCCUPATIONAL = "Occupational", "Occupational"

    business_name = models.CharField("business name", max_length=255, unique=True)
    contact_name = models.CharField("contact name", max_length=255)
    contact_email = models.EmailField("contact e-mail", blank=True, default="")
    contact_number = models.CharField("contact number", max_length=30)
    contact_person = models.CharField("contact person", max_length=255, blank=True, default="")
    address = models.TextField("address", blank=True, default="")
    gst_number = models.CharField("GST number", max_length=20, blank=True, default="")
    source_type = models.CharField("source type", max_length=50, default="Direct", db_index=True)
    type_of_lead = models.JSONField("type of lead", default=list, blank=True)
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    is_customer = models.BooleanField("is customer", default=False)
    total_price = models.DecimalField("total price", max_digits=14, decimal_places=2, default=0)
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_accounts",
        verbose_name="assigned to",
    )
    zone = models.ForeignKey(
        "organization.Zone",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="accounts",
        verbose_name="zone",
    )

    class Meta:
        verbose_name = "business account"
        verbose_name_plural = "business accounts"
        ordering = ["-created_at"]

    def __str__(self):
        return self.business_name


class AccountNote(models.Model):
    """Free-text note appended to an account."""

    account = models.ForeignKey(
        BusinessAccount,
        on_delete=models.CASCADE,
        related_name="notes",
    )
    text = models.TextField("text")
    author = models.CharField("author", max_length=150, blank=True, default="")
    timestamp = models.DateTimeField("timestamp", default=timezone.now)

    class Meta:
        ordering = ["timestamp", "id"]

    def __str__(self):
        return f"{self.author}: {self.text[:40]}"


class AccountFollowUp(TimeStampedModel):
    """Scheduled follow-up on an account."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"

    account = models.ForeignKey(
        BusinessAccount,
        on_delete=models.CASCADE,
        related_name="followups",
    )
    date = models.DateTimeField("date")
    note = models.TextField("note")
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.account} @ {self.date:%Y-%m-%d} ({self.status})"
