from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for the custom User model."""

    list_display = (
        "email",
        "name",
        "role",
        "team",
        "department",
        "zone",
        "is_active",
        "date_joined",
    )
    list_filter = ("role", "is_active", "is_staff", "zone")
    search_fields = ("email", "name", "mobile")
    ordering = ("name",)
    list_select_related = ("team", "department", "zone")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Personal information", {"fields": ("name", "mobile")}),
        # Assignment is owned by the team/transfer services.
        ("Organization", {"fields": ("team", "department", "zone")}),
        (
            "Role and permissions",
            {"fields": ("role", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "mobile", "role", "password1", "password2"),
            },
        ),
    )
    readonly_fields = ("team", "department", "zone", "date_joined", "last_login")
