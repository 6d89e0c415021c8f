"""Tests for user, team, department and zone endpoints."""
import uuid

import pytest
from django.contrib.auth import get_user_model

from organization.models import Department, Team, Zone

User = get_user_model()


def _create_team(client, department, leader=None, members=(), name="Alpha"):
    resp = client.post(
        "/api/v1/teams/",
        {
            "name": name,
            "department": str(department.id),
            "team_leader": str(leader.id) if leader else None,
            "members": [str(m.id) for m in members],
        },
        format="json",
    )
    return resp


def _triple(user):
    user.refresh_from_db()
    return user.team_id, user.department_id, user.zone_id


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_employee_can_read_but_not_write_zones(employee_client, zone):
    resp = employee_client.get("/api/v1/zones/")
    assert resp.status_code == 200
    assert [z["name"] for z in resp.data] == ["West"]

    resp = employee_client.post("/api/v1/zones/", {"name": "East"}, format="json")
    assert resp.status_code == 403
    assert resp.data["detail"] == "Administrator access required."


@pytest.mark.django_db
def test_superuser_has_admin_rights(super_client):
    resp = super_client.post("/api/v1/zones/", {"name": "East"}, format="json")
    assert resp.status_code == 201


# ---------------------------------------------------------------------------
# Zones / departments
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_zone_crud_and_unique_name(admin_client, zone):
    resp = admin_client.post("/api/v1/zones/", {"name": "West"}, format="json")
    assert resp.status_code == 400
    assert str(resp.data["name"][0]) == "Zone name already exists."

    resp = admin_client.patch(f"/api/v1/zones/{zone.id}/", {"description": "Coastal"}, format="json")
    assert resp.status_code == 200
    assert resp.data["description"] == "Coastal"

    resp = admin_client.delete(f"/api/v1/zones/{zone.id}/")
    assert resp.status_code == 204
    assert not Zone.objects.exists()


@pytest.mark.django_db
def test_department_in_use_cannot_be_deleted(admin_client, department):
    assert _create_team(admin_client, department).status_code == 201

    resp = admin_client.delete(f"/api/v1/departments/{department.id}/")
    assert resp.status_code == 400
    assert Department.objects.filter(pk=department.pk).exists()


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_create_team_syncs_users(admin_client, department, zone, leader_user, employee_user):
    resp = _create_team(admin_client, department, leader=leader_user, members=[employee_user])
    assert resp.status_code == 201, resp.data

    body = resp.json()
    assert body["zone"] == str(zone.id)
    assert body["zone_name"] == "West"
    assert body["team_leader_detail"]["name"] == "Team Leader"
    assert body["members"] == [str(employee_user.id)]

    team_id = uuid.UUID(body["id"])
    assert _triple(leader_user) == (team_id, department.pk, zone.pk)
    assert _triple(employee_user) == (team_id, department.pk, zone.pk)


@pytest.mark.django_db
def test_create_team_rejects_wrong_role(admin_client, department, employee_user):
    resp = _create_team(admin_client, department, leader=employee_user)
    assert resp.status_code == 400
    assert resp.data["detail"] == "Assigned user is not a Team Leader."


@pytest.mark.django_db
def test_create_team_unknown_department(admin_client, leader_user):
    resp = admin_client.post(
        "/api/v1/teams/",
        {"name": "Alpha", "department": str(uuid.uuid4()), "team_leader": str(leader_user.id)},
        format="json",
    )
    assert resp.status_code == 400
    assert resp.data["detail"] == "Department not found."
    assert not Team.objects.exists()


@pytest.mark.django_db
def test_leader_cannot_lead_two_teams(admin_client, department, leader_user):
    assert _create_team(admin_client, department, leader=leader_user).status_code == 201

    resp = _create_team(admin_client, department, leader=leader_user, name="Beta")
    assert resp.status_code == 400
    assert resp.data["detail"] == "This user is already a Team Leader for another team."
    assert Team.objects.count() == 1


@pytest.mark.django_db
def test_update_team_members(admin_client, department, employee_user, other_employee):
    team_id = _create_team(admin_client, department, members=[employee_user]).data["id"]

    resp = admin_client.patch(
        f"/api/v1/teams/{team_id}/",
        {"members": [str(other_employee.id)]},
        format="json",
    )
    assert resp.status_code == 200, resp.data
    assert _triple(employee_user) == (None, None, None)
    assert _triple(other_employee)[0] == uuid.UUID(team_id)


@pytest.mark.django_db
def test_delete_team_unassigns_users(admin_client, department, leader_user, employee_user):
    team_id = _create_team(admin_client, department, leader=leader_user, members=[employee_user]).data["id"]

    resp = admin_client.delete(f"/api/v1/teams/{team_id}/")
    assert resp.status_code == 204
    assert _triple(leader_user) == (None, None, None)
    assert _triple(employee_user) == (None, None, None)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_admin_creates_user(admin_client):
    resp = admin_client.post(
        "/api/v1/users/",
        {"email": "New.Person@Test.com", "name": "New Person", "password": "Secret123!", "role": "Employee"},
        format="json",
    )
    assert resp.status_code == 201, resp.data
    assert "password" not in resp.data

    user = User.objects.get(pk=resp.data["id"])
    assert user.email == "new.person@test.com"
    assert user.check_password("Secret123!")


@pytest.mark.django_db
def test_duplicate_email_is_rejected(admin_client, employee_user):
    resp = admin_client.post(
        "/api/v1/users/",
        {"email": "EMPLOYEE@test.com", "name": "Dup", "password": "Secret123!"},
        format="json",
    )
    assert resp.status_code == 400
    assert str(resp.data["email"][0]) == "A user with this email already exists."


@pytest.mark.django_db
def test_generic_user_update_cannot_move_user(admin_client, department, employee_user):
    team_id = _create_team(admin_client, department).data["id"]

    resp = admin_client.patch(
        f"/api/v1/users/{employee_user.id}/",
        {"name": "Renamed", "team": team_id},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.data["name"] == "Renamed"
    assert _triple(employee_user) == (None, None, None)


@pytest.mark.django_db
def test_transfer_user(admin_client, department, zone, employee_user):
    team_id = _create_team(admin_client, department).data["id"]

    resp = admin_client.put(
        f"/api/v1/users/{employee_user.id}/transfer/",
        {"new_team": team_id, "new_zone": str(zone.id)},
        format="json",
    )
    assert resp.status_code == 200, resp.data
    assert resp.data["message"] == "User transferred successfully"
    assert resp.data["user"]["team_name"] == "Alpha"
    assert _triple(employee_user) == (uuid.UUID(team_id), department.pk, zone.pk)


@pytest.mark.django_db
def test_transfer_to_missing_team(admin_client, department, employee_user):
    team_id = _create_team(admin_client, department, members=[employee_user]).data["id"]

    resp = admin_client.put(
        f"/api/v1/users/{employee_user.id}/transfer/",
        {"new_team": str(uuid.uuid4())},
        format="json",
    )
    assert resp.status_code == 400
    assert resp.data["detail"] == "New team not found."
    assert _triple(employee_user)[0] == uuid.UUID(team_id)


@pytest.mark.django_db
def test_employee_cannot_transfer(employee_client, employee_user):
    resp = employee_client.put(f"/api/v1/users/{employee_user.id}/transfer/", {}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_users_by_zone(admin_client, zone, employee_user, other_employee):
    User.objects.filter(pk=employee_user.pk).update(zone=zone)

    resp = admin_client.get(f"/api/v1/users/zone/{zone.id}/")
    assert resp.status_code == 200
    assert [u["email"] for u in resp.data] == ["employee@test.com"]


@pytest.mark.django_db
def test_users_by_zone_rejects_malformed_id(admin_client):
    resp = admin_client.get("/api/v1/users/zone/not-a-uuid/")
    assert resp.status_code == 400
