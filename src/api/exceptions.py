"""DRF exception handler for the CRM API."""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.db.models.deletion import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger("salesdesk")

# Substrings of constraint names / columns reported by the database driver.
_UNIQUE_MESSAGES = (
    ("quotation_number", "A quotation with this number already exists."),
    ("email", "A user with this email already exists."),
    ("team_leader", "This user is already a Team Leader for another team."),
    ("organization_team.name", "Team with this name already exists."),
    ("organization_zone.name", "Zone name already exists."),
    ("organization_department.name", "Department name already exists."),
    ("business_name", "An account with this business name already exists."),
)


def _integrity_message(exc: IntegrityError) -> str:
    text = str(exc)
    for needle, message in _UNIQUE_MESSAGES:
        if needle in text:
            return message
    return "The request conflicts with existing data."


def api_exception_handler(exc, context):
    """Extend DRF's handler with database errors and a generic 500.

    Everything DRF already understands (validation, 404, auth) is returned
    unchanged with its usual ``detail`` body.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    set_rollback()

    # ProtectedError subclasses IntegrityError; test it first.
    if isinstance(exc, ProtectedError):
        return Response(
            {"detail": "This record is still referenced and cannot be deleted."},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error: %s", exc)
        return Response({"detail": _integrity_message(exc)}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, DjangoValidationError):
        return Response({"detail": " ".join(exc.messages)}, status=status.HTTP_400_BAD_REQUEST)

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "API view")
    return Response(
        {"detail": "An unexpected error occurred."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
