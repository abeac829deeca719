"""
Payment services for coordinating payment operations.

This module provides:
- TransactionReconciler: Applies verified PayU notifications to transactions
  and queues anything it cannot apply for manual review

Usage:
    from payments.services import TransactionReconciler, parse_reported_status

    status = parse_reported_status(fields["status"])
    outcome = TransactionReconciler.reconcile(fields["txnid"], status, fields)
"""

from payments.services.reconciler import (
    ReconcileOutcome,
    ReconcileResult,
    TransactionReconciler,
    parse_amount,
    parse_reported_status,
)

__all__ = [
    "ReconcileOutcome",
    "ReconcileResult",
    "TransactionReconciler",
    "parse_amount",
    "parse_reported_status",
]
