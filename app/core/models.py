"""
Abstract model bases shared by the payment and account models.

Every persisted payment record is an audit record: it carries creation and
modification timestamps, and most use a UUID key so ids exposed in the admin
or in logs reveal nothing about volume.

Base Classes:
    BaseModel: created_at / updated_at, newest-first ordering
    UUIDPrimaryKeyMixin: UUID primary key in place of an auto-increment id

Usage:
    from core.models import BaseModel, UUIDPrimaryKeyMixin

    class CreditGrant(UUIDPrimaryKeyMixin, BaseModel):
        credits = models.PositiveIntegerField()
"""

from __future__ import annotations

import uuid

from django.db import models


class BaseModel(models.Model):
    """
    Abstract model with creation and modification timestamps.

    created_at is indexed; the review queue and the stale-pending sweep
    both filter on it.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.pk})"


class UUIDPrimaryKeyMixin(models.Model):
    """
    UUID primary key. List before BaseModel in the bases.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True
