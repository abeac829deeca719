"""
Celery tasks for payment processing.

This module provides periodic tasks for:
- Flagging transactions left pending past the review window

Notifications themselves are reconciled synchronously by the webhook view,
so no task here ever changes a transaction's status.

Usage:
    from payments.tasks import flag_stale_pending_transactions

    # Run the sweep now (normally scheduled via celery-beat)
    flag_stale_pending_transactions.delay()

    # With a custom window
    flag_stale_pending_transactions.delay(older_than_hours=48)
"""

from __future__ import annotations

import logging

from celery import shared_task
from django.conf import settings

from payments.services.reconciler import TransactionReconciler

logger = logging.getLogger(__name__)


# =============================================================================
# Periodic Tasks
# =============================================================================


@shared_task
def flag_stale_pending_transactions(older_than_hours: int | None = None) -> dict:
    """
    Periodic task to queue long-pending transactions for manual review.

    A transaction that never received a notification stays PENDING; PayU
    may simply not have delivered it. This task opens a stale_pending
    ReconciliationIssue for each such transaction (once) so an operator can
    check the payment in the PayU dashboard.

    This task is scheduled via celery-beat (see migration
    0002_add_stale_pending_schedule), every hour.

    Args:
        older_than_hours: Review window; defaults to
            settings.PAYU_STALE_PENDING_HOURS

    Returns:
        Dict with count of transactions flagged
    """
    if older_than_hours is None:
        older_than_hours = settings.PAYU_STALE_PENDING_HOURS

    flagged = TransactionReconciler.flag_stale_pending(older_than_hours)

    logger.info(
        f"Stale pending sweep complete: {flagged} flagged",
        extra={"flagged": flagged, "older_than_hours": older_than_hours},
    )

    return {"flagged": flagged, "older_than_hours": older_than_hours}
