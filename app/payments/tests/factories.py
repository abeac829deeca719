"""
Factory Boy factories for payment test data.

This module provides factories for creating test instances of payment models,
plus a helper for building PayU notifications signed with a test salt.

Usage:
    from payments.tests.factories import TransactionFactory, signed_notification

    # Create a pending transaction
    txn = TransactionFactory(txn_id="TXN100", credits=10)

    # Create a transaction already in a terminal status
    txn = TransactionFactory(status=TransactionStatus.SUCCESS)

    # Build the form fields PayU would post for it
    fields = signed_notification(txn, salt="test-salt")
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import factory
from django.utils import timezone

from authentication.tests.factories import UserFactory
from payments.gateway.signature import response_hash
from payments.models import CreditGrant, ReconciliationIssue, Transaction
from payments.state_machines import IssueReason, TransactionStatus

TEST_MERCHANT_KEY = "gtKFFx"
TEST_MERCHANT_SALT = "eCwWELxi"


class TransactionFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Transaction instances.

    Transactions are created PENDING by default. Pass status= to create one
    directly in a terminal status (the FSM only guards later assignment).
    """

    class Meta:
        model = Transaction

    txn_id = factory.Sequence(lambda n: f"TXN{n:06d}")
    user = factory.SubFactory(UserFactory)
    amount = Decimal("499.00")
    plan_name = "Starter"
    credits = 10
    valid_until = factory.LazyFunction(lambda: timezone.now() + timedelta(days=30))


class CreditGrantFactory(factory.django.DjangoModelFactory):
    """Factory for creating CreditGrant instances."""

    class Meta:
        model = CreditGrant

    transaction = factory.SubFactory(
        TransactionFactory, status=TransactionStatus.SUCCESS
    )
    user = factory.SelfAttribute("transaction.user")
    credits = factory.SelfAttribute("transaction.credits")
    valid_until = factory.SelfAttribute("transaction.valid_until")


class ReconciliationIssueFactory(factory.django.DjangoModelFactory):
    """Factory for creating ReconciliationIssue instances."""

    class Meta:
        model = ReconciliationIssue

    txn_id = factory.Sequence(lambda n: f"TXN{n:06d}")
    reason = IssueReason.STALE_PENDING
    stored_status = TransactionStatus.PENDING


def signed_notification(
    txn: Transaction | None = None,
    salt: str = TEST_MERCHANT_SALT,
    *,
    status: str = "success",
    **overrides: str,
) -> dict[str, str]:
    """
    Build the form fields PayU posts for a transaction, with a valid hash.

    Args:
        txn: Transaction the notification refers to. When omitted, pass
            txnid/amount in overrides.
        salt: Merchant salt to sign with
        status: Reported status, exactly as PayU would send it
        **overrides: Field values to set before signing

    Returns:
        Dict of notification fields including "hash"
    """
    fields = {
        "mihpayid": "403993715521",
        "mode": "CC",
        "status": status,
        "key": TEST_MERCHANT_KEY,
        "txnid": txn.txn_id if txn else "TXN-UNKNOWN",
        "amount": f"{txn.amount:.2f}" if txn else "499.00",
        "productinfo": txn.plan_name if txn else "Starter",
        "firstname": "Asha",
        "email": txn.user.email if txn else "asha@example.com",
        "udf1": "",
        "udf2": "",
        "udf3": "",
        "udf4": "",
        "udf5": "",
        "bank_ref_num": "1234567890",
        "bankcode": "CC",
        "cardnum": "512345XXXXXX2346",
        "error": "E000",
        "error_Message": "No Error",
    }
    fields.update(overrides)
    fields["hash"] = response_hash(fields, salt)
    return fields
