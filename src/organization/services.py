"""Business-logic / service functions for teams and user assignment.

Every user's ``(team, department, zone)`` must reflect the team they belong
to, or be all-null when they have none. Each public function validates every
referenced entity first and then applies all of its writes inside one
transaction, so a failure never leaves users and teams half-updated.
"""
from __future__ import annotations

import logging
from typing import Iterable

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from core.services import create_audit_log
from organization.models import Department, Team, Zone

User = get_user_model()
logger = logging.getLogger("salesdesk")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _lookup(model, value, message: str):
    """Return ``model`` instance for an instance-or-pk ``value``.

    Raises ``ValueError(message)`` when the row does not exist.
    """
    pk = getattr(value, "pk", value)
    try:
        return model.objects.get(pk=pk)
    except (model.DoesNotExist, DjangoValidationError, ValueError):
        raise ValueError(message)


def _lookup_members(members: Iterable) -> list:
    users = []
    seen = set()
    for value in members or ():
        user = _lookup(User, value, "Team member not found.")
        if user.pk not in seen:
            seen.add(user.pk)
            users.append(user)
    return users


def _same_pk(value, pk) -> bool:
    return pk is not None and str(getattr(value, "pk", value)) == str(pk)


def _assign_user(user, team=None, department=None, zone=None) -> None:
    user.team = team
    user.department = department
    user.zone = zone
    user.save(update_fields=["team", "department", "zone"])


def _unassign_user(user) -> None:
    _assign_user(user, None, None, None)


def _detach_from_other_teams(user, team: Team) -> None:
    """Drop ``user`` from the member set and leadership of every other team."""
    for other in Team.objects.filter(members=user).exclude(pk=team.pk):
        other.members.remove(user)
    Team.objects.filter(team_leader=user).exclude(pk=team.pk).update(team_leader=None)


def _validate_team_leader(candidate, exclude_team: Team | None = None):
    leader = _lookup(User, candidate, "Team Leader not found.")
    if leader.role != User.Role.TEAM_LEADER:
        raise ValueError("Assigned user is not a Team Leader.")

    other_teams = Team.objects.filter(team_leader=leader)
    if exclude_team is not None:
        other_teams = other_teams.exclude(pk=exclude_team.pk)
    if other_teams.exists():
        logger.warning("Rejected leader %s: already leads another team", leader.pk)
        raise ValueError("This user is already a Team Leader for another team.")
    return leader


def _validate_team_name(name: str, exclude_team: Team | None = None) -> None:
    if not name:
        raise ValueError("Team name is required.")
    qs = Team.objects.filter(name=name)
    if exclude_team is not None:
        qs = qs.exclude(pk=exclude_team.pk)
    if qs.exists():
        raise ValueError("Team with this name already exists.")


def _team_snapshot(team: Team) -> dict:
    return {
        "name": team.name,
        "department_id": str(team.department_id) if team.department_id else None,
        "team_leader_id": str(team.team_leader_id) if team.team_leader_id else None,
        "member_ids": sorted(str(pk) for pk in team.members.values_list("pk", flat=True)),
    }


def _user_snapshot(user) -> dict:
    return {
        "team_id": str(user.team_id) if user.team_id else None,
        "department_id": str(user.department_id) if user.department_id else None,
        "zone_id": str(user.zone_id) if user.zone_id else None,
    }


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

@transaction.atomic
def create_team(
    name: str,
    department,
    team_leader=None,
    members: Iterable = (),
    actor=None,
) -> Team:
    """Create a team and assign its leader and members to it.

    The team's zone is resolved from its department. The leader must have the
    Team Leader role and must not already lead another team.

    Raises
    ------
    ValueError
        If a referenced entity is missing or a business rule is violated.
        Nothing is written in that case.
    """
    _validate_team_name(name)
    department = _lookup(Department, department, "Department not found.")
    leader = _validate_team_leader(team_leader) if team_leader else None
    member_list = _lookup_members(members)

    team = Team.objects.create(name=name, department=department, team_leader=leader)
    team.members.set(member_list)

    zone = department.zone
    to_assign = ([leader] if leader else []) + [m for m in member_list if not leader or m.pk != leader.pk]
    for user in to_assign:
        _detach_from_other_teams(user, team)
        _assign_user(user, team, department, zone)

    create_audit_log(
        actor=actor,
        action="TEAM_CREATE",
        entity_type="Team",
        entity_id=team.pk,
        after=_team_snapshot(team),
    )
    logger.info(
        "Team %s (%s) created with leader=%s and %d member(s)",
        team.pk, team.name, leader.pk if leader else None, len(member_list),
    )
    return team


@transaction.atomic
def update_team(team: Team, actor=None, **changes) -> Team:
    """Apply ``changes`` to a team and resync every affected user.

    Accepted keys are ``name``, ``department``, ``team_leader`` and
    ``members``. An absent key leaves the field unchanged; ``team_leader=None``
    removes the leader and ``members`` replaces the whole member set.

    Resync rules:
    - a replaced leader is unassigned unless they stay on as a member;
    - removed members are unassigned;
    - added members are assigned (and detached from any other team);
    - unchanged members are resynced only when their recorded team or
      department disagrees with the team.
    """
    team = Team.objects.select_for_update().select_related("department", "team_leader").get(pk=team.pk)
    before = _team_snapshot(team)

    # --- Validation (no writes) ---
    name = changes.get("name") or team.name
    if name != team.name:
        _validate_team_name(name, exclude_team=team)

    department = team.department
    new_department = changes.get("department")
    if new_department is not None and not _same_pk(new_department, team.department_id):
        department = _lookup(Department, new_department, "Department not found.")

    previous_leader = team.team_leader
    leader = previous_leader
    if "team_leader" in changes:
        candidate = changes["team_leader"]
        if candidate is None:
            leader = None
        elif not _same_pk(candidate, team.team_leader_id):
            leader = _validate_team_leader(candidate, exclude_team=team)

    original_ids = set(team.members.values_list("pk", flat=True))
    if "members" in changes:
        new_members = _lookup_members(changes["members"])
    else:
        new_members = list(team.members.all())
    new_ids = {user.pk for user in new_members}

    # --- Writes ---
    team.name = name
    team.department = department
    team.team_leader = leader
    team.save()
    team.members.set(new_members)

    zone = department.zone
    leader_pk = leader.pk if leader else None

    if previous_leader and previous_leader.pk != leader_pk and previous_leader.pk not in new_ids:
        _unassign_user(previous_leader)
    if leader:
        _detach_from_other_teams(leader, team)
        _assign_user(leader, team, department, zone)

    for user in User.objects.filter(pk__in=original_ids - new_ids).exclude(pk=leader_pk):
        _unassign_user(user)

    for user in new_members:
        if user.pk == leader_pk:
            continue
        if user.pk not in original_ids:
            _detach_from_other_teams(user, team)
            _assign_user(user, team, department, zone)
        elif user.team_id != team.pk or user.department_id != department.pk:
            _assign_user(user, team, department, zone)

    create_audit_log(
        actor=actor,
        action="TEAM_UPDATE",
        entity_type="Team",
        entity_id=team.pk,
        before=before,
        after=_team_snapshot(team),
    )
    logger.info("Team %s (%s) updated", team.pk, team.name)
    return team


@transaction.atomic
def delete_team(team: Team, actor=None) -> None:
    """Unassign the leader and every member, then delete the team."""
    team = Team.objects.select_for_update().get(pk=team.pk)
    before = _team_snapshot(team)

    affected = list(team.members.all())
    if team.team_leader_id:
        affected.append(team.team_leader)
    for user in affected:
        _unassign_user(user)

    team_pk, team_name = team.pk, team.name
    team.delete()

    create_audit_log(
        actor=actor,
        action="TEAM_DELETE",
        entity_type="Team",
        entity_id=team_pk,
        before=before,
    )
    logger.info("Team %s (%s) deleted, %d user(s) unassigned", team_pk, team_name, len(affected))


# ---------------------------------------------------------------------------
# Transfer
# ---------------------------------------------------------------------------

@transaction.atomic
def transfer_user(user, new_team=None, new_department=None, new_zone=None, actor=None):
    """Move a single user to ``new_team`` (or out of any team).

    The department is taken from the target team when one is given, ignoring
    ``new_department``. The zone, however, is stored exactly as supplied by
    the caller and is *not* derived from the department: transfers are the
    one path where an operator may place a user in a zone other than their
    team's.

    Raises
    ------
    ValueError
        If the target team, department or zone does not exist. Nothing is
        written in that case.
    """
    user = User.objects.select_for_update().get(pk=user.pk)
    target = _lookup(Team, new_team, "New team not found.") if new_team else None
    department = None
    if target is None and new_department:
        department = _lookup(Department, new_department, "Department not found.")
    zone = _lookup(Zone, new_zone, "Zone not found.") if new_zone else None
    before = _user_snapshot(user)

    if user.team_id and (target is None or user.team_id != target.pk):
        old_team = Team.objects.select_for_update().filter(pk=user.team_id).first()
        if old_team:
            old_team.members.remove(user)
            if old_team.team_leader_id == user.pk:
                old_team.team_leader = None
                old_team.save(update_fields=["team_leader", "updated_at"])

    if target is not None:
        department = target.department
        target.members.add(user)
        leads_elsewhere = Team.objects.filter(team_leader=user).exclude(pk=target.pk).exists()
        if user.role == User.Role.TEAM_LEADER and target.team_leader_id is None and not leads_elsewhere:
            target.team_leader = user
            target.save(update_fields=["team_leader", "updated_at"])

    _assign_user(user, target, department, zone)

    create_audit_log(
        actor=actor,
        action="USER_TRANSFER",
        entity_type="User",
        entity_id=user.pk,
        before=before,
        after=_user_snapshot(user),
    )
    logger.info(
        "User %s transferred to team=%s department=%s zone=%s",
        user.pk, user.team_id, user.department_id, user.zone_id,
    )
    return user


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def users_in_zone(zone_id):
    return User.objects.filter(zone_id=zone_id).select_related("team", "department", "zone")
