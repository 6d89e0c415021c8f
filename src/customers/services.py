"""Domain services for business accounts."""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from core.services import actor_display_name, create_audit_log, resolve_followup
from customers.models import AccountFollowUp, AccountNote, BusinessAccount

logger = logging.getLogger("salesdesk")

_AUDITED_FIELDS = ("business_name", "status", "assigned_to_id", "zone_id")


class DuplicateBusinessNameError(ValueError):
    """Raised when a business name collides (case-insensitively) with another account."""

    def __init__(self, existing: BusinessAccount):
        self.existing = existing
        assignee = existing.assigned_to.name if existing.assigned_to_id else "an unassigned user"
        super().__init__(
            "An account with this business name already exists. "
            f"It is currently assigned to {assignee}."
        )

    @property
    def assigned_to(self) -> dict | None:
        user = self.existing.assigned_to
        if user is None:
            return None
        return {"name": user.name, "role": user.role}


def _snapshot(account: BusinessAccount) -> dict:
    snapshot = {}
    for field in _AUDITED_FIELDS:
        value = getattr(account, field)
        snapshot[field] = str(value) if value is not None else None
    return snapshot


def _check_unique_name(name: str, exclude_pk=None) -> None:
    qs = BusinessAccount.objects.select_related("assigned_to").filter(business_name__iexact=name)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    existing = qs.first()
    if existing is not None:
        logger.warning(
            "Rejected duplicate business name %r (existing account %s)", name, existing.pk,
        )
        raise DuplicateBusinessNameError(existing)


@transaction.atomic
def create_account(data: dict, actor=None) -> BusinessAccount:
    """Create a business account.

    Raises ``DuplicateBusinessNameError`` when ``business_name`` matches an
    existing account regardless of case.
    """
    data = dict(data)
    _check_unique_name(data.get("business_name", ""))

    status = data.get("status") or BusinessAccount.Status.ACTIVE
    data["status"] = status
    data["is_customer"] = status == BusinessAccount.Status.CUSTOMER

    account = BusinessAccount.objects.create(**data)
    create_audit_log(
        actor=actor,
        action="ACCOUNT_CREATE",
        entity_type="BusinessAccount",
        entity_id=account.pk,
        after=_snapshot(account),
    )
    logger.info("Account %s (%s) created", account.pk, account.business_name)
    return account


@transaction.atomic
def update_account(account: BusinessAccount, data: dict, actor=None) -> BusinessAccount:
    """Overwrite the supplied fields and re-derive ``is_customer``."""
    before = _snapshot(account)
    new_name = data.get("business_name")
    if new_name and new_name.lower() != account.business_name.lower():
        _check_unique_name(new_name, exclude_pk=account.pk)

    for field, value in data.items():
        setattr(account, field, value)
    account.is_customer = account.status == BusinessAccount.Status.CUSTOMER
    account.save()

    create_audit_log(
        actor=actor,
        action="ACCOUNT_UPDATE",
        entity_type="BusinessAccount",
        entity_id=account.pk,
        before=before,
        after=_snapshot(account),
    )
    logger.info("Account %s updated", account.pk)
    return account


@transaction.atomic
def soft_delete_account(account: BusinessAccount, actor=None) -> BusinessAccount:
    """Close the account instead of deleting it."""
    before = _snapshot(account)
    account.status = BusinessAccount.Status.CLOSED
    account.is_customer = False
    account.save(update_fields=["status", "is_customer", "updated_at"])

    create_audit_log(
        actor=actor,
        action="ACCOUNT_CLOSE",
        entity_type="BusinessAccount",
        entity_id=account.pk,
        before=before,
        after=_snapshot(account),
    )
    logger.info("Account %s status set to Closed", account.pk)
    return account


def add_account_note(account: BusinessAccount, text: str, author=None, timestamp=None, actor=None) -> AccountNote:
    return AccountNote.objects.create(
        account=account,
        text=text,
        author=author or actor_display_name(actor),
        timestamp=timestamp or timezone.now(),
    )


# ---------------------------------------------------------------------------
# Follow-ups
# ---------------------------------------------------------------------------

def add_account_followup(account: BusinessAccount, data: dict, actor=None) -> AccountFollowUp:
    return AccountFollowUp.objects.create(
        account=account,
        date=data["date"],
        note=data["note"],
        status=data.get("status") or AccountFollowUp.Status.PENDING,
        added_by=data.get("added_by") or (actor if getattr(actor, "pk", None) else None),
    )


def update_account_followup(account: BusinessAccount, key, data: dict) -> AccountFollowUp:
    """Update the follow-up at ``key`` (position or UUID).

    Raises ``AccountFollowUp.DoesNotExist`` when ``key`` addresses nothing.
    """
    followup = resolve_followup(account.followups.all(), key)
    for field in ("date", "note", "status"):
        if data.get(field) is not None:
            setattr(followup, field, data[field])
    followup.save()
    return followup


def delete_account_followup(account: BusinessAccount, key) -> None:
    followup = resolve_followup(account.followups.all(), key)
    followup.delete()
