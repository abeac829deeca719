"""
Payment domain models.

This module contains all payment-related models:
- Transaction: A PayU checkout payment and its FSM-managed status
- CreditGrant: Credits granted for one successful transaction
- ReconciliationIssue: Manual review queue for notifications the pipeline
  refused to act on and transactions stuck in pending
"""

from payments.models.credit_grant import CreditGrant
from payments.models.reconciliation_issue import ReconciliationIssue
from payments.models.transaction import Transaction

__all__ = [
    "CreditGrant",
    "ReconciliationIssue",
    "Transaction",
]
