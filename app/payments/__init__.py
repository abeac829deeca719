"""
Payments app for PayU integration.

This app handles:
- Transactions created at checkout and their terminal status
- PayU payment notifications (decode, verify, reconcile)
- Credit grants for successful payments
- Manual review of notifications the pipeline refuses to apply

Related apps:
    - authentication: User and Profile (credit balance)

Usage:
    from payments.services import TransactionReconciler, parse_reported_status

    outcome = TransactionReconciler.reconcile(
        txn_id, parse_reported_status(fields["status"]), fields
    )
"""
