"""Admin configuration for the customers app."""
from django.contrib import admin

from .models import AccountFollowUp, AccountNote, BusinessAccount


class AccountNoteInline(admin.TabularInline):
    model = AccountNote
    extra = 0


class AccountFollowUpInline(admin.TabularInline):
    model = AccountFollowUp
    extra = 0
    readonly_fields = ("created_at",)


@admin.register(BusinessAccount)
class BusinessAccountAdmin(admin.ModelAdmin):
    list_display = (
        "business_name",
        "contact_name",
        "contact_number",
        "status",
        "source_type",
        "assigned_to",
        "zone",
        "created_at",
    )
    list_filter = ("status", "source_type", "zone")
    search_fields = ("business_name", "contact_name", "contact_email", "gst_number")
    readonly_fields = ("id", "is_customer", "created_at", "updated_at")
    list_select_related = ("assigned_to", "zone")
    date_hierarchy = "created_at"
    inlines = [AccountNoteInline, AccountFollowUpInline]
    fieldsets = (
        (None, {
            "fields": ("business_name", "contact_name", "contact_email", "contact_number", "contact_person"),
        }),
        ("Details", {
            "fields": ("address", "gst_number", "source_type", "type_of_lead", "total_price"),
        }),
        ("Status", {
            "fields": ("status", "is_customer", "assigned_to", "zone"),
        }),
        ("Metadata", {
            "classes": ("collapse",),
            "fields": ("id", "created_at", "updated_at"),
        }),
    )
