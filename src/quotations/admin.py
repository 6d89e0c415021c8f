"""Admin configuration for the quotations app."""
from django.contrib import admin

from .models import Quotation, QuotationFollowUp, QuotationItem, QuotationNote


class QuotationItemInline(admin.TabularInline):
    model = QuotationItem
    extra = 0
    readonly_fields = ("position", "description", "hsn_code", "quantity", "rate", "gst_percentage")
    can_delete = False


class QuotationNoteInline(admin.TabularInline):
    model = QuotationNote
    extra = 0


class QuotationFollowUpInline(admin.TabularInline):
    model = QuotationFollowUp
    extra = 0
    readonly_fields = ("created_at",)


@admin.register(Quotation)
class QuotationAdmin(admin.ModelAdmin):
    list_display = (
        "quotation_number",
        "customer_name",
        "business",
        "gst_type",
        "status",
        "total",
        "date",
        "created_at",
    )
    list_filter = ("status", "gst_type")
    search_fields = ("quotation_number", "customer_name", "customer_email", "gstin")
    list_select_related = ("business",)
    date_hierarchy = "created_at"
    # Totals are derived; edit quotations through the API.
    readonly_fields = (
        "id",
        "sub_total",
        "total_gst",
        "sgst",
        "cgst",
        "igst",
        "total",
        "created_by",
        "created_at",
        "updated_at",
    )
    inlines = [QuotationItemInline, QuotationNoteInline, QuotationFollowUpInline]
