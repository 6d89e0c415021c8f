"""Custom DRF permissions for the CRM API."""
from rest_framework.permissions import BasePermission


ADMIN_ROLES = ("Superadmin", "Admin")


def is_admin_user(user) -> bool:
    """True for Superadmin/Admin roles and Django superusers."""
    if not user or not user.is_authenticated:
        return False
    return bool(user.is_superuser or getattr(user, "role", None) in ADMIN_ROLES)


def is_employee_user(user) -> bool:
    return getattr(user, "role", None) == "Employee" and not user.is_superuser


class IsAdminRole(BasePermission):
    """Allow access to administrators (Superadmin/Admin or superuser)."""

    message = "Administrator access required."

    def has_permission(self, request, view):
        return is_admin_user(request.user)
