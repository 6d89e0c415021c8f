"""Service helpers shared by the domain apps."""
from __future__ import annotations

import uuid
from typing import Any

from django.db.models import QuerySet

from core.models import AuditLog


def create_audit_log(
    actor,
    action: str,
    entity_type: str,
    entity_id,
    before: dict[str, Any] | None = None,
    after: dict[str, Any] | None = None,
) -> AuditLog:
    """Create and return a new :class:`~core.models.AuditLog` entry."""
    return AuditLog.objects.create(
        actor=actor if getattr(actor, "pk", None) else None,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        before_json=before,
        after_json=after,
    )


def actor_display_name(actor, default: str = "System") -> str:
    """Name used as note author when the caller does not supply one."""
    name = getattr(actor, "name", "") if actor is not None else ""
    return name or default


def resolve_followup(queryset: QuerySet, key):
    """Return the follow-up addressed by ``key`` within ``queryset``.

    ``key`` is either a 0-based position in the queryset's ordering or the
    follow-up's UUID. Raises ``queryset.model.DoesNotExist`` when nothing is
    found at that address.
    """
    model = queryset.model
    raw = str(key).strip()

    if raw.isdigit():
        position = int(raw)
        found = list(queryset[position:position + 1])
        if not found:
            raise model.DoesNotExist(f"No follow-up at position {position}.")
        return found[0]

    try:
        followup_id = uuid.UUID(raw)
    except ValueError:
        raise model.DoesNotExist(f"Invalid follow-up reference '{raw}'.")
    return queryset.get(pk=followup_id)
