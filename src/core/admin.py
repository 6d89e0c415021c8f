"""Admin registrations for shared bookkeeping tables."""
from django.contrib import admin

from core.models import AuditLog, Sequence


@admin.register(Sequence)
class SequenceAdmin(admin.ModelAdmin):
    list_display = ("prefix", "next_number")
    search_fields = ("prefix",)


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "actor", "action", "entity_type", "entity_id")
    list_filter = ("action", "entity_type")
    search_fields = ("entity_id", "actor__email", "actor__name", "action", "entity_type")
    readonly_fields = (
        "actor",
        "action",
        "entity_type",
        "entity_id",
        "before_json",
        "after_json",
        "created_at",
    )
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


admin.site.site_header = "SalesDesk administration"
admin.site.site_title = "SalesDesk admin"
admin.site.index_title = "CRM data"
