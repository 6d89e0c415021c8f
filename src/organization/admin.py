"""Admin configuration for the organization app."""
from django.contrib import admin

from .models import Department, Team, Zone


@admin.register(Zone)
class ZoneAdmin(admin.ModelAdmin):
    list_display = ("name", "description", "created_at")
    search_fields = ("name",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("name", "zone", "created_at")
    list_filter = ("zone",)
    search_fields = ("name",)
    list_select_related = ("zone",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    """Read-mostly view; membership changes go through the API services."""

    list_display = ("name", "department", "team_leader", "created_at")
    list_filter = ("department",)
    search_fields = ("name",)
    list_select_related = ("department", "team_leader")
    readonly_fields = ("id", "team_leader", "members", "created_at", "updated_at")
