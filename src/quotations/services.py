"""Business-logic / service functions for quotations."""
from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.models import Sequence
from core.services import actor_display_name, create_audit_log, resolve_followup
from customers.models import BusinessAccount
from quotations.models import Quotation, QuotationFollowUp, QuotationItem, QuotationNote
from quotations.pricing import QuotationTotals, TaxOverrides, calculate_quotation_totals

logger = logging.getLogger("salesdesk")

OVERRIDE_FIELDS = (
    "manual_gst_amount",
    "manual_sgst_percentage",
    "manual_cgst_percentage",
    "manual_igst_percentage",
)
CALCULATION_INPUTS = ("items", "gst_type") + OVERRIDE_FIELDS

# Never written by the generic field merge in ``update_quotation``.
PROTECTED_FIELDS = frozenset({
    "items",
    "sub_total",
    "total_gst",
    "sgst",
    "cgst",
    "igst",
    "total",
    "created_at",
    "notes",
    "followups",
    "manual_igst_percentage",
})

ITEM_FIELDS = ("description", "hsn_code", "quantity", "rate", "gst_percentage")

DUPLICATE_NUMBER_MESSAGE = "A quotation with this number already exists. Please try again."


# ---------------------------------------------------------------------------
# Numbering
# ---------------------------------------------------------------------------

def _last_issued_number() -> int:
    """Numeric suffix of the most recently created quotation, or 0."""
    last = (
        Quotation.objects.order_by("-created_at")
        .values_list("quotation_number", flat=True)
        .first()
    )
    if not last:
        return 0
    try:
        return int(last.rsplit("-", 1)[-1])
    except ValueError:
        return 0


def generate_quotation_number() -> str:
    """Reserve the next ``Q-NNNNN`` number.

    The counter lives in a ``core.Sequence`` row locked for the duration of
    the reservation, so concurrent creators never receive the same number.
    It never falls behind the last created quotation, which covers numbers
    supplied by callers.
    """
    prefix = settings.QUOTATION_NUMBER_PREFIX
    width = settings.QUOTATION_NUMBER_WIDTH

    for _attempt in range(3):
        try:
            with transaction.atomic():
                sequence, _created = Sequence.objects.get_or_create(prefix=prefix)
                number = sequence.generate_next(floor=_last_issued_number() + 1)
            return f"{prefix}-{number:0{width}d}"
        except IntegrityError:
            # Sequence row created concurrently; retry against it.
            continue

    raise ValueError("Unable to generate a quotation number. Please try again.")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _apply_totals(quotation: Quotation, totals: QuotationTotals) -> None:
    breakdown = totals.gst_breakdown
    quotation.sub_total = totals.sub_total
    quotation.total_gst = breakdown.total_gst
    quotation.sgst = breakdown.sgst
    quotation.cgst = breakdown.cgst
    quotation.igst = breakdown.igst
    quotation.total = totals.total


def _replace_items(quotation: Quotation, items: list[dict[str, Any]]) -> None:
    quotation.items.all().delete()
    QuotationItem.objects.bulk_create([
        QuotationItem(
            quotation=quotation,
            position=position,
            **{field: item[field] for field in ITEM_FIELDS if item.get(field) is not None},
        )
        for position, item in enumerate(items)
    ])


def _snapshot(quotation: Quotation) -> dict:
    return {
        "quotation_number": quotation.quotation_number,
        "status": quotation.status,
        "gst_type": quotation.gst_type,
        "total": str(quotation.total),
    }


def _append_note(quotation: Quotation, note: dict[str, Any], actor) -> QuotationNote:
    return QuotationNote.objects.create(
        quotation=quotation,
        text=note["text"],
        author=note.get("author") or actor_display_name(actor),
        timestamp=note.get("timestamp") or timezone.now(),
    )


def _snapshot_customer(data: dict[str, Any], business: BusinessAccount | None) -> None:
    if business is None:
        return
    data["customer_name"] = data.get("customer_name") or business.contact_name
    data["customer_email"] = data.get("customer_email") or business.contact_email
    data["mobile_number"] = data.get("mobile_number") or business.contact_number
    data["gstin"] = data.get("gstin") or business.gst_number


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@transaction.atomic
def create_quotation(data: dict[str, Any], actor=None) -> Quotation:
    """Create a priced quotation with its items and notes.

    Parameters
    ----------
    data : dict
        Validated quotation fields. ``items`` and ``notes`` are lists of
        dicts; ``quotation_number`` is optional and generated when absent.
    actor : User, optional
        Recorded as ``created_by`` and used as the default note author.

    Raises
    ------
    ValueError
        If the supplied ``quotation_number`` is already taken.
    """
    data = dict(data)
    items = list(data.pop("items", None) or [])
    notes = list(data.pop("notes", None) or [])

    number = data.pop("quotation_number", None) or generate_quotation_number()
    if Quotation.objects.filter(quotation_number=number).exists():
        raise ValueError(DUPLICATE_NUMBER_MESSAGE)

    _snapshot_customer(data, data.get("business"))
    data["gst_type"] = data.get("gst_type") or Quotation.GstType.INTRASTATE
    data["status"] = data.get("status") or Quotation.Status.DRAFT
    data["date"] = data.get("date") or timezone.localdate()

    overrides = TaxOverrides(**{field: data.get(field) for field in OVERRIDE_FIELDS})
    totals = calculate_quotation_totals(items, data["gst_type"], overrides)

    quotation = Quotation(
        quotation_number=number,
        created_by=actor if getattr(actor, "pk", None) else None,
        **data,
    )
    _apply_totals(quotation, totals)
    quotation.save()

    _replace_items(quotation, items)
    for note in notes:
        _append_note(quotation, note, actor)

    create_audit_log(
        actor=actor,
        action="QUOTATION_CREATE",
        entity_type="Quotation",
        entity_id=quotation.pk,
        after=_snapshot(quotation),
    )

    logger.info(
        "Quotation %s created (total=%s, %d item(s))",
        quotation.quotation_number, quotation.total, len(items),
    )
    return quotation


@transaction.atomic
def update_quotation(quotation: Quotation, data: dict[str, Any], actor=None) -> Quotation:
    """Apply a partial update.

    Notes are appended, never replaced. When any pricing input is present,
    totals are recomputed from the supplied value of each input or, failing
    that, the stored one; items are only replaced when supplied.
    """
    data = dict(data)
    before = _snapshot(quotation)
    for note in data.pop("notes", None) or []:
        if note.get("text"):
            _append_note(quotation, note, actor)

    if any(field in data for field in CALCULATION_INPUTS):
        items = (data["items"] or []) if "items" in data else list(quotation.items.all())
        gst_type = data["gst_type"] if "gst_type" in data else quotation.gst_type
        overrides = TaxOverrides(**{
            field: data[field] if field in data else getattr(quotation, field)
            for field in OVERRIDE_FIELDS
        })
        totals = calculate_quotation_totals(items, gst_type, overrides)

        quotation.gst_type = gst_type
        for field in OVERRIDE_FIELDS:
            setattr(quotation, field, getattr(overrides, field))
        _apply_totals(quotation, totals)
        if "items" in data:
            _replace_items(quotation, data["items"] or [])

    for field, value in data.items():
        if field not in PROTECTED_FIELDS:
            setattr(quotation, field, value)

    quotation.save()
    create_audit_log(
        actor=actor,
        action="QUOTATION_UPDATE",
        entity_type="Quotation",
        entity_id=quotation.pk,
        before=before,
        after=_snapshot(quotation),
    )
    logger.info("Quotation %s updated (total=%s)", quotation.quotation_number, quotation.total)
    return quotation


@transaction.atomic
def delete_quotation(quotation: Quotation, actor=None) -> None:
    number = quotation.quotation_number
    create_audit_log(
        actor=actor,
        action="QUOTATION_DELETE",
        entity_type="Quotation",
        entity_id=quotation.pk,
        before=_snapshot(quotation),
    )
    quotation.delete()
    logger.info("Quotation %s deleted", number)


# ---------------------------------------------------------------------------
# Follow-ups
# ---------------------------------------------------------------------------

def add_quotation_followup(quotation: Quotation, data: dict[str, Any], actor=None) -> QuotationFollowUp:
    return QuotationFollowUp.objects.create(
        quotation=quotation,
        date=data["date"],
        note=data.get("note") or "",
        status=data.get("status") or QuotationFollowUp.Status.PENDING,
        added_by=actor if getattr(actor, "pk", None) else None,
    )


def update_quotation_followup(quotation: Quotation, key, data: dict[str, Any]) -> QuotationFollowUp:
    """Update the follow-up at ``key`` (position or UUID).

    Raises ``QuotationFollowUp.DoesNotExist`` when ``key`` addresses nothing.
    """
    followup = resolve_followup(quotation.followups.all(), key)
    for field in ("date", "note", "status"):
        if data.get(field) is not None:
            setattr(followup, field, data[field])
    followup.save()
    return followup


def delete_quotation_followup(quotation: Quotation, key) -> None:
    followup = resolve_followup(quotation.followups.all(), key)
    followup.delete()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def quotations_for_business(business_id):
    return Quotation.objects.filter(business_id=business_id).order_by("-created_at")


def active_businesses():
    return BusinessAccount.objects.filter(status=BusinessAccount.Status.ACTIVE).order_by("business_name")
