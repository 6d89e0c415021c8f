"""Models for the organization app (zones, departments, teams)."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Zone(TimeStampedModel):
    """Geographic/administrative grouping above departments."""

    name = models.CharField(
        "name",
        max_length=120,
        unique=True,
        error_messages={"unique": "Zone name already exists."},
    )
    description = models.TextField("description", blank=True, default="")

    class Meta:
        verbose_name = "zone"
        verbose_name_plural = "zones"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Department(TimeStampedModel):
    """A department, attached to a zone."""

    name = models.CharField(
        "name",
        max_length=120,
        unique=True,
        error_messages={"unique": "Department name already exists."},
    )
    zone = models.ForeignKey(
        Zone,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="departments",
        verbose_name="zone",
    )

    class Meta:
        verbose_name = "department"
        verbose_name_plural = "departments"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Team(TimeStampedModel):
    """A team of users inside a department.

    ``team_leader`` is one-to-one so that a user can lead at most one team
    system-wide. ``members`` mirrors ``User.team``; both sides are kept in
    sync by ``organization.services``.
    """

    name = models.CharField(
        "name",
        max_length=120,
        unique=True,
        error_messages={"unique": "Team with this name already exists."},
    )
    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        related_name="teams",
        verbose_name="department",
    )
    team_leader = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="led_team",
        verbose_name="team leader",
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="member_of_teams",
        verbose_name="members",
    )

    class Meta:
        verbose_name = "team"
        verbose_name_plural = "teams"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def zone(self):
        """Zone resolved transitively through the department."""
        return self.department.zone if self.department_id else None

    @property
    def zone_id(self):
        return self.department.zone_id if self.department_id else None
