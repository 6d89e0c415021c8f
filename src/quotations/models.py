"""Models for the quotations app."""
from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class Quotation(TimeStampedModel):
    """A priced proposal sent to a business account.

    ``sub_total``, the GST columns and ``total`` are derived from the items,
    ``gst_type`` and the manual overrides; they are only written by
    ``quotations.services``.
    """

    class GstType(models.TextChoices):
        INTRASTATE = "intrastate", "Intrastate"
        INTERSTATE = "interstate", "Interstate"

    # Known statuses; the column itself accepts any value.
    class Status(models.TextChoices):
        DRAFT = "Draft", "Draft"
        SENT = "Sent", "Sent"
        ACCEPTED = "Accepted", "Accepted"
        REJECTED = "Rejected", "Rejected"

    quotation_number = models.CharField(
        "quotation number",
        max_length=50,
        unique=True,
        error_messages={"unique": "A quotation with this number already exists."},
    )
    business = models.ForeignKey(
        "customers.BusinessAccount",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="quotations",
        verbose_name="business account",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="quotations_created",
        verbose_name="created by",
    )

    # Customer snapshot, copied from the account at creation time.
    customer_name = models.CharField("customer name", max_length=255, blank=True, default="")
    customer_email = models.CharField("customer e-mail", max_length=254, blank=True, default="")
    mobile_number = models.CharField("mobile number", max_length=30, blank=True, default="")
    gstin = models.CharField("GSTIN", max_length=20, blank=True, default="")

    gst_type = models.CharField(
        "GST type",
        max_length=20,
        choices=GstType.choices,
        default=GstType.INTRASTATE,
    )
    date = models.DateField("date", default=timezone.localdate)
    valid_until = models.DateField("valid until", null=True, blank=True)
    status = models.CharField("status", max_length=30, default=Status.DRAFT, db_index=True)

    sub_total = models.DecimalField("subtotal", max_digits=14, decimal_places=2, default=0)
    total_gst = models.DecimalField("total GST", max_digits=14, decimal_places=2, default=0)
    sgst = models.DecimalField("SGST", max_digits=14, decimal_places=2, default=0)
    cgst = models.DecimalField("CGST", max_digits=14, decimal_places=2, default=0)
    igst = models.DecimalField("IGST", max_digits=14, decimal_places=2, default=0)
    total = models.DecimalField("total", max_digits=14, decimal_places=2, default=0)

    manual_gst_amount = models.DecimalField(
        "manual GST amount", max_digits=14, decimal_places=2, null=True, blank=True,
    )
    manual_sgst_percentage = models.DecimalField(
        "manual SGST %", max_digits=5, decimal_places=2, null=True, blank=True,
    )
    manual_cgst_percentage = models.DecimalField(
        "manual CGST %", max_digits=5, decimal_places=2, null=True, blank=True,
    )
    manual_igst_percentage = models.DecimalField(
        "manual IGST %", max_digits=5, decimal_places=2, null=True, blank=True,
    )

    class Meta:
        verbose_name = "quotation"
        verbose_name_plural = "quotations"
        ordering = ["-created_at"]

    def __str__(self):
        return self.quotation_number


class QuotationItem(models.Model):
    """A line of a quotation."""

    quotation = models.ForeignKey(Quotation, on_delete=models.CASCADE, related_name="items")
    position = models.PositiveIntegerField("position", default=0)
    description = models.CharField("description", max_length=255, blank=True, default="")
    hsn_code = models.CharField("HSN code", max_length=20, blank=True, default="")
    quantity = models.DecimalField("quantity", max_digits=12, decimal_places=3, default=0)
    rate = models.DecimalField("rate", max_digits=14, decimal_places=2, default=0)
    gst_percentage = models.DecimalField("GST %", max_digits=5, decimal_places=2, default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return f"{self.description} x {self.quantity}"

    @property
    def line_total(self):
        return self.quantity * self.rate


class QuotationNote(models.Model):
    quotation = models.ForeignKey(Quotation, on_delete=models.CASCADE, related_name="notes")
    text = models.TextField("text")
    author = models.CharField("author", max_length=150, blank=True, default="")
    timestamp = models.DateTimeField("timestamp", default=timezone.now)

    class Meta:
        ordering = ["timestamp", "id"]

    def __str__(self):
        return f"{self.author}: {self.text[:40]}"


class QuotationFollowUp(TimeStampedModel):
    """Follow-up on a quotation; addressable by position or by id."""

    class Status(models.TextChoices):
        PENDING = "Pending", "Pending"
        COMPLETED = "Completed", "Completed"
        CANCELED = "Canceled", "Canceled"

    quotation = models.ForeignKey(Quotation, on_delete=models.CASCADE, related_name="followups")
    date = models.DateTimeField("date")
    note = models.TextField("note", blank=True, default="")
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
        return f"{self.quotation} @ {self.date:%Y-%m-%d} ({self.status})"
