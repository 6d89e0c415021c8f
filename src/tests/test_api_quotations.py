"""Tests for quotation API endpoints."""
import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from quotations.models import Quotation

ITEMS = [
    {"description": "Safety helmet", "hsn_code": "6506", "quantity": "2", "rate": "100", "gst_percentage": "18"},
]


def _create_quotation(client, **extra):
    payload = {"items": ITEMS}
    payload.update(extra)
    resp = client.post("/api/v1/quotations/", payload, format="json")
    assert resp.status_code == 201, resp.data
    return resp.data


def _followup_payload(note="Call back"):
    return {"date": (timezone.now() + timedelta(days=2)).isoformat(), "note": note}


@pytest.mark.django_db
def test_create_quotation_prices_and_numbers_it(admin_client, account):
    data = _create_quotation(admin_client, business=str(account.id), notes=[{"text": "Sent by mail"}])

    assert data["quotation_number"] == "Q-00001"
    assert data["sub_total"] == "200.00"
    assert data["total"] == "236.00"
    assert data["gst_breakdown"] == {
        "total_gst": "36.00",
        "sgst": "18.00",
        "cgst": "18.00",
        "igst": "0.00",
    }
    assert data["gst_type"] == "intrastate"
    assert data["status"] == "Draft"
    assert data["customer_name"] == "Ravi Kumar"
    assert data["business_name"] == "Acme Traders"
    assert data["items"][0]["line_total"] == "200.00"
    assert data["notes"][0]["author"] == "Admin User"


@pytest.mark.django_db
def test_client_cannot_set_derived_totals(admin_client):
    data = _create_quotation(admin_client, total="1.00", sub_total="1.00")

    assert data["total"] == "236.00"
    assert data["sub_total"] == "200.00"


@pytest.mark.django_db
def test_duplicate_quotation_number_is_rejected(admin_client):
    _create_quotation(admin_client, quotation_number="Q-00010")

    resp = admin_client.post(
        "/api/v1/quotations/",
        {"quotation_number": "Q-00010", "items": ITEMS},
        format="json",
    )
    assert resp.status_code == 400
    assert "already exists" in str(resp.data["quotation_number"][0])


@pytest.mark.django_db
def test_generated_number_continues_after_supplied_one(admin_client):
    _create_quotation(admin_client, quotation_number="Q-00042")

    assert _create_quotation(admin_client)["quotation_number"] == "Q-00043"


@pytest.mark.django_db
def test_item_validation(admin_client):
    resp = admin_client.post(
        "/api/v1/quotations/",
        {"items": [{"quantity": "-1", "rate": "10"}]},
        format="json",
    )
    assert resp.status_code == 400
    assert "items" in resp.data


@pytest.mark.django_db
@pytest.mark.parametrize(
    "override",
    [
        {"manual_gst_amount": "-500"},
        {"manual_sgst_percentage": "-400"},
        {"manual_cgst_percentage": "101"},
        {"gst_type": "interstate", "manual_igst_percentage": "-1"},
    ],
)
def test_negative_or_oversized_tax_overrides_are_rejected(admin_client, override):
    payload = {"items": ITEMS, **override}

    resp = admin_client.post("/api/v1/quotations/", payload, format="json")

    assert resp.status_code == 400
    assert set(override) - {"gst_type"} <= set(resp.data)
    assert not Quotation.objects.exists()


@pytest.mark.django_db
def test_update_rejects_negative_manual_amount(admin_client):
    quotation = _create_quotation(admin_client)

    resp = admin_client.patch(
        f"/api/v1/quotations/{quotation['id']}/", {"manual_gst_amount": "-1"}, format="json",
    )

    assert resp.status_code == 400
    assert Quotation.objects.get(pk=quotation["id"]).total == 236


@pytest.mark.django_db
def test_list_is_paginated_newest_first(admin_client):
    first = _create_quotation(admin_client)
    second = _create_quotation(admin_client)

    resp = admin_client.get("/api/v1/quotations/?page=1&limit=1")
    assert resp.status_code == 200
    assert resp.data["total"] == 2
    assert resp.data["page"] == 1
    assert resp.data["page_size"] == 1
    assert [q["id"] for q in resp.data["data"]] == [second["id"]]

    resp = admin_client.get("/api/v1/quotations/?page=2&limit=1")
    assert [q["id"] for q in resp.data["data"]] == [first["id"]]


@pytest.mark.django_db
def test_partial_update_with_manual_amount_reprices(admin_client):
    quotation = _create_quotation(admin_client)

    resp = admin_client.patch(
        f"/api/v1/quotations/{quotation['id']}/",
        {"manual_gst_amount": "50.00", "manual_sgst_percentage": "5"},
        format="json",
    )
    assert resp.status_code == 200, resp.data
    assert resp.data["total"] == "250.00"
    assert len(resp.data["items"]) == 1


@pytest.mark.django_db
def test_update_switches_to_interstate(admin_client):
    quotation = _create_quotation(admin_client)

    resp = admin_client.patch(
        f"/api/v1/quotations/{quotation['id']}/",
        {"gst_type": "interstate", "manual_igst_percentage": "12"},
        format="json",
    )
    assert resp.status_code == 200, resp.data
    assert resp.data["gst_breakdown"]["igst"] == "36.00"
    assert resp.data["gst_breakdown"]["sgst"] == "0.00"
    assert resp.data["manual_igst_percentage"] == "12.00"
    assert resp.data["total"] == "224.00"


@pytest.mark.django_db
def test_update_appends_notes_and_ignores_blank_number(admin_client):
    quotation = _create_quotation(admin_client, notes=[{"text": "first"}])

    resp = admin_client.patch(
        f"/api/v1/quotations/{quotation['id']}/",
        {"quotation_number": "", "status": "Sent", "notes": [{"text": "second"}]},
        format="json",
    )
    assert resp.status_code == 200, resp.data
    assert resp.data["quotation_number"] == quotation["quotation_number"]
    assert resp.data["status"] == "Sent"
    assert [n["text"] for n in resp.data["notes"]] == ["first", "second"]


@pytest.mark.django_db
def test_delete_quotation(admin_client):
    quotation = _create_quotation(admin_client)

    resp = admin_client.delete(f"/api/v1/quotations/{quotation['id']}/")
    assert resp.status_code == 200
    assert resp.data["message"] == "Quotation deleted successfully."
    assert not Quotation.objects.exists()


@pytest.mark.django_db
def test_unknown_quotation_is_404(admin_client):
    resp = admin_client.get(f"/api/v1/quotations/{uuid.uuid4()}/")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_quotations_by_business_and_active_businesses(admin_client, account):
    _create_quotation(admin_client, business=str(account.id))
    _create_quotation(admin_client)

    resp = admin_client.get(f"/api/v1/quotations/business/{account.id}/")
    assert resp.status_code == 200
    assert len(resp.data) == 1
    assert resp.data[0]["business"] == account.id

    resp = admin_client.get("/api/v1/quotations/active-businesses/")
    assert resp.status_code == 200
    assert [b["business_name"] for b in resp.data] == ["Acme Traders"]


@pytest.mark.django_db
def test_followup_lifecycle(admin_client):
    quotation = _create_quotation(admin_client)
    base = f"/api/v1/quotations/{quotation['id']}/followups/"

    resp = admin_client.post(base, _followup_payload("one"), format="json")
    assert resp.status_code == 201, resp.data
    assert resp.data["followups"][0]["status"] == "Pending"
    assert resp.data["followups"][0]["added_by_name"] == "Admin User"
    admin_client.post(base, _followup_payload("two"), format="json")

    resp = admin_client.patch(f"{base}1/", {"status": "Completed"}, format="json")
    assert resp.status_code == 200, resp.data
    assert [f["status"] for f in resp.data["followups"]] == ["Pending", "Completed"]

    first_id = resp.data["followups"][0]["id"]
    resp = admin_client.delete(f"{base}{first_id}/")
    assert resp.status_code == 200
    assert [f["note"] for f in resp.data["followups"]] == ["two"]

    resp = admin_client.get(base)
    assert len(resp.data) == 1


@pytest.mark.django_db
def test_followup_out_of_range_is_404_and_changes_nothing(admin_client):
    quotation = _create_quotation(admin_client)
    base = f"/api/v1/quotations/{quotation['id']}/followups/"
    admin_client.post(base, _followup_payload(), format="json")

    resp = admin_client.put(f"{base}4/", {"status": "Canceled"}, format="json")
    assert resp.status_code == 404
    assert resp.data["detail"] == "Follow-up not found."

    resp = admin_client.delete(f"{base}4/")
    assert resp.status_code == 404

    resp = admin_client.get(base)
    assert [f["status"] for f in resp.data] == ["Pending"]
