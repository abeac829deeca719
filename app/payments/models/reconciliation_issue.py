"""
ReconciliationIssue model: the manual review queue for payment notifications.

Rows are written when the pipeline refuses to act on a verified notification
(unknown txnid, contradicting status, amount mismatch) and by the periodic
sweep for transactions left pending too long. Operators resolve them from
the admin.

Usage:
    from payments.models import ReconciliationIssue
    from payments.state_machines import IssueReason

    ReconciliationIssue.objects.create(
        txn_id="TXN100",
        reason=IssueReason.CONFLICT,
        reported_status="failure",
        stored_status="success",
        audit_payload=audit.as_dict(),
    )

    # Unresolved review queue
    ReconciliationIssue.objects.filter(resolved=False)
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.models import BaseModel, UUIDPrimaryKeyMixin

from payments.state_machines import IssueReason


class ReconciliationIssue(UUIDPrimaryKeyMixin, BaseModel):
    """
    A notification or transaction flagged for manual review.

    Fields:
        txn_id: Transaction id the issue refers to (may not exist locally)
        reason: Why it was flagged
        reported_status: Status the gateway reported, if any
        stored_status: Local status when the issue was flagged, if any
        audit_payload: Allow-listed, card-masked notification fields
        delivery_count: Deliveries folded into this issue while unresolved
        last_seen_at: Time of the most recent delivery
        resolved: Whether an operator has dealt with it
        resolved_at: When it was resolved
        resolution_note: What the operator did

    Indexes:
        - (resolved, created_at): Review queue ordering
        - (txn_id, reason): Lookup by transaction

    Constraints:
        - At most one unresolved issue per (txn_id, reason); redeliveries
          of a refused notification bump delivery_count instead
    """

    txn_id = models.CharField(
        max_length=64,
        db_index=True,
        help_text="Transaction id from the notification or transaction",
    )

    reason = models.CharField(
        max_length=20,
        choices=IssueReason.choices,
        db_index=True,
        help_text="Why this was flagged for review",
    )

    reported_status = models.CharField(
        max_length=20,
        blank=True,
        help_text="Status reported by the gateway",
    )

    stored_status = models.CharField(
        max_length=20,
        blank=True,
        help_text="Local transaction status when flagged",
    )

    audit_payload = models.JSONField(
        default=dict,
        blank=True,
        help_text="Allow-listed notification fields (card number masked)",
    )

    delivery_count = models.PositiveIntegerField(
        default=1,
        help_text="Times the gateway delivered this notification while open",
    )

    last_seen_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the gateway last delivered this notification",
    )

    resolved = models.BooleanField(
        default=False,
        help_text="Whether an operator has resolved this issue",
    )

    resolved_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When this issue was resolved",
    )

    resolution_note = models.TextField(
        blank=True,
        help_text="Operator notes on the resolution",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Reconciliation Issue"
        verbose_name_plural = "Reconciliation Issues"
        indexes = [
            models.Index(fields=["resolved", "created_at"]),
            models.Index(fields=["txn_id", "reason"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["txn_id", "reason"],
                condition=models.Q(resolved=False),
                name="reconciliation_issue_one_open_per_reason",
            ),
        ]

    def __str__(self) -> str:
        return f"ReconciliationIssue({self.txn_id}, {self.reason})"

    def mark_resolved(self, note: str = "") -> None:
        """
        Mark this issue as resolved.

        Note: Does not save - caller must save after calling.
        """
        self.resolved = True
        self.resolved_at = timezone.now()
        if note:
            self.resolution_note = note
