"""Shared abstract models and cross-app bookkeeping tables."""
import uuid

from django.conf import settings
from django.db import models, transaction


class TimeStampedModel(models.Model):
    """Abstract base with a UUID primary key and creation/update timestamps."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField("created at", auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField("updated at", auto_now=True)

    class Meta:
        abstract = True


class Sequence(models.Model):
    """Auto-incrementing counter per document prefix (e.g. quotations)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    prefix = models.CharField(max_length=20, unique=True)
    next_number = models.PositiveIntegerField(default=1)

    class Meta:
        verbose_name = "sequence"
        verbose_name_plural = "sequences"

    def __str__(self):
        return f"{self.prefix} (next={self.next_number})"

    def generate_next(self, floor: int = 1) -> int:
        """Atomically reserve and return the next number.

        ``floor`` lets the caller push the counter forward when numbers were
        issued outside of the sequence (e.g. supplied by a client). The
        returned value is ``max(next_number, floor)`` and the stored counter
        moves one past it.
        """
        with transaction.atomic():
            locked = Sequence.objects.select_for_update().get(pk=self.pk)
            current = max(locked.next_number, floor)
            Sequence.objects.filter(pk=locked.pk).update(next_number=current + 1)
            self.next_number = current + 1
        return current


class AuditLog(models.Model):
    """Immutable log of significant organizational and account changes."""

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
    )
    action = models.CharField(max_length=100)
    entity_type = models.CharField(max_length=100, db_index=True)
    entity_id = models.CharField(max_length=255)
    before_json = models.JSONField(null=True, blank=True)
    after_json = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "audit log entry"
        verbose_name_plural = "audit log"
        indexes = [
            models.Index(fields=["action", "created_at"], name="audit_action_created_idx"),
            models.Index(fields=["entity_type", "created_at"], name="audit_entity_created_idx"),
        ]

    def __str__(self):
        return f"[{self.created_at}] {self.action} on {self.entity_type} #{self.entity_id}"
