"""
CreditGrant model recording credits granted by a successful transaction.

Exactly one grant exists per successful Transaction. The one-to-one key is
what makes a second grant for the same payment impossible at the database
level, independently of the row lock taken during reconciliation.

Usage:
    from payments.models import CreditGrant

    CreditGrant.objects.create(
        transaction=txn,
        user=txn.user,
        credits=txn.credits,
        valid_until=txn.valid_until,
    )
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.models import BaseModel, UUIDPrimaryKeyMixin


class CreditGrant(UUIDPrimaryKeyMixin, BaseModel):
    """
    Credits added to an account for one successful transaction.

    Fields:
        transaction: The transaction that paid for the credits (unique)
        user: Account the credits were added to
        credits: Number of credits added
        valid_until: When the granted entitlement expires
    """

    transaction = models.OneToOneField(
        "payments.Transaction",
        on_delete=models.PROTECT,
        related_name="credit_grant",
        help_text="Transaction that paid for these credits",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="credit_grants",
        help_text="Account the credits were added to",
    )

    credits = models.PositiveIntegerField(
        help_text="Number of credits added",
    )

    valid_until = models.DateTimeField(
        help_text="When the granted entitlement expires",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Credit Grant"
        verbose_name_plural = "Credit Grants"
        indexes = [
            models.Index(fields=["user", "valid_until"]),
        ]

    def __str__(self) -> str:
        return f"CreditGrant({self.credits} credits, {self.transaction_id})"
