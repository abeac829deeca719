"""
State enums for payment models.

This module defines the state enums used by payment models with django-fsm.
These are Django TextChoices for database storage and admin integration.

State Machines Overview:

Transaction States:
    pending → success
    pending → failure

ReconciliationIssue Reasons:
    not_found, conflict, amount_mismatch, stale_pending
"""

from django.db import models


class TransactionStatus(models.TextChoices):
    """
    States for the Transaction model lifecycle.

    Terminal states: SUCCESS, FAILURE

    State Flow:
        PENDING → SUCCESS (credits granted in the same database transaction)
        PENDING → FAILURE

    A terminal status never changes again. A repeated notification with the
    same outcome is a no-op; a different outcome is a conflict.
    """

    PENDING = "pending", "Pending"
    SUCCESS = "success", "Success"
    FAILURE = "failure", "Failure"

    @classmethod
    def terminal(cls) -> frozenset[str]:
        """Statuses a transaction can never leave."""
        return frozenset({cls.SUCCESS, cls.FAILURE})


class IssueReason(models.TextChoices):
    """
    Why a notification or transaction was queued for manual review.

    NOT_FOUND: Verified notification for a txnid we never created
    CONFLICT: Notification outcome contradicts the terminal status
    AMOUNT_MISMATCH: Reported amount differs from the stored amount
    STALE_PENDING: Transaction pending longer than the review window
    """

    NOT_FOUND = "not_found", "Transaction Not Found"
    CONFLICT = "conflict", "Status Conflict"
    AMOUNT_MISMATCH = "amount_mismatch", "Amount Mismatch"
    STALE_PENDING = "stale_pending", "Stale Pending"
