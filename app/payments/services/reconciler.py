"""
Transaction reconciliation for verified PayU notifications.

The TransactionReconciler is the only writer of Transaction.status,
CreditGrant and Profile.credit_balance. It applies a gateway outcome to a
pending transaction exactly once, no matter how often or in which order the
gateway delivers its notifications.

Guarantees:
    - Per-transaction mutual exclusion via a row lock (select_for_update)
    - Status change, credit grant and balance increment commit together or
      not at all
    - Replays with the same outcome are no-ops; contradicting outcomes are
      rejected and queued for review, one open issue per (txn_id, reason)
    - Storage timeouts surface as TransientStorageError with nothing
      committed, so the gateway can safely redeliver

Usage:
    from payments.services.reconciler import (
        TransactionReconciler,
        parse_reported_status,
    )

    status = parse_reported_status(fields["status"])
    outcome = TransactionReconciler.reconcile(fields["txnid"], status, fields)
    if outcome.applied:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING

from django.db import IntegrityError, InterfaceError, OperationalError
from django.db.models import F
from django.utils import timezone

from core.services import BaseService

from payments.exceptions import (
    AmountMismatchError,
    InvalidNotificationError,
    ReconciliationConflictError,
    TransactionNotFoundError,
    TransientStorageError,
)
from payments.gateway.audit import GatewayAuditRecord, sanitize_payload
from payments.models import CreditGrant, ReconciliationIssue, Transaction
from payments.state_machines import IssueReason, TransactionStatus

if TYPE_CHECKING:
    from collections.abc import Mapping


# =============================================================================
# Data Types
# =============================================================================


class ReconcileResult(str, Enum):
    """What a reconciliation did to the transaction."""

    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of TransactionReconciler.reconcile()."""

    result: ReconcileResult
    transaction: Transaction

    @property
    def applied(self) -> bool:
        """True if this call changed the transaction."""
        return self.result is ReconcileResult.APPLIED


# =============================================================================
# Field Parsing
# =============================================================================


def parse_reported_status(raw: str | None) -> TransactionStatus:
    """
    Map the gateway's status string to a terminal TransactionStatus.

    Matching is case-insensitive and ignores surrounding whitespace.

    Raises:
        InvalidNotificationError: For anything other than success/failure,
            including "pending" (a notification must carry an outcome)
    """
    normalized = (raw or "").strip().lower()
    if normalized == TransactionStatus.SUCCESS:
        return TransactionStatus.SUCCESS
    if normalized == TransactionStatus.FAILURE:
        return TransactionStatus.FAILURE
    raise InvalidNotificationError(
        f"Unsupported payment status: {raw!r}",
        details={"status": raw},
    )


def parse_amount(raw: str | None) -> Decimal:
    """
    Parse the gateway's amount string.

    Raises:
        InvalidNotificationError: If the amount is missing or not a finite
            decimal number
    """
    try:
        amount = Decimal((raw or "").strip())
    except InvalidOperation:
        amount = None

    if amount is None or not amount.is_finite():
        raise InvalidNotificationError(
            f"Invalid amount: {raw!r}",
            details={"amount": raw},
        )
    return amount


# =============================================================================
# Reconciler
# =============================================================================


class TransactionReconciler(BaseService):
    """
    Applies verified gateway outcomes to transactions.

    Methods:
        reconcile: Apply one notification to its transaction
        flag_stale_pending: Queue long-pending transactions for review
    """

    @classmethod
    def reconcile(
        cls,
        txn_id: str,
        reported_status: TransactionStatus,
        payload: Mapping[str, str],
    ) -> ReconcileOutcome:
        """
        Apply a verified notification to its transaction.

        Args:
            txn_id: Merchant transaction id from the notification
            reported_status: Parsed outcome (SUCCESS or FAILURE)
            payload: Verified notification fields

        Returns:
            ReconcileOutcome with APPLIED on the first terminal transition,
            ALREADY_APPLIED when the transaction already has this status

        Raises:
            InvalidNotificationError: Amount is not a decimal number
            TransactionNotFoundError: No transaction with this txn_id
            AmountMismatchError: Reported amount differs from stored amount
            ReconciliationConflictError: Transaction already has the other
                terminal status
            TransientStorageError: Database unavailable or lock timeout
        """
        audit = GatewayAuditRecord.from_payload(payload)
        reported_amount = parse_amount(payload.get("amount"))

        try:
            return cls._reconcile(
                txn_id, reported_status, reported_amount, payload, audit
            )
        except (OperationalError, InterfaceError) as e:
            cls.get_logger().error(
                f"Storage unavailable while reconciling: {type(e).__name__}",
                extra={**audit.as_log_extra(), "txn_id": txn_id},
                exc_info=True,
            )
            raise TransientStorageError(
                "Payment storage is temporarily unavailable",
                details={"txn_id": txn_id},
            ) from e

    @classmethod
    def _reconcile(
        cls,
        txn_id: str,
        reported_status: TransactionStatus,
        reported_amount: Decimal,
        payload: Mapping[str, str],
        audit: GatewayAuditRecord,
    ) -> ReconcileOutcome:
        stored_status = ""
        try:
            with cls.atomic():
                txn = cls._lock_transaction(txn_id)
                stored_status = txn.status

                if reported_amount != txn.amount:
                    raise AmountMismatchError(
                        f"Reported amount {reported_amount} does not match "
                        f"stored amount {txn.amount}",
                        details={
                            "txn_id": txn_id,
                            "reported_amount": str(reported_amount),
                            "stored_amount": str(txn.amount),
                        },
                    )

                if txn.is_terminal:
                    if txn.status == reported_status:
                        cls.get_logger().info(
                            "Transaction already reconciled, ignoring replay",
                            extra={"txn_id": txn_id, "status": txn.status},
                        )
                        return ReconcileOutcome(
                            result=ReconcileResult.ALREADY_APPLIED,
                            transaction=txn,
                        )

                    raise ReconciliationConflictError(
                        f"Transaction {txn_id} is already {txn.status}, "
                        f"gateway reported {reported_status}",
                        details={
                            "txn_id": txn_id,
                            "stored_status": txn.status,
                            "reported_status": str(reported_status),
                        },
                    )

                cls._apply(txn, reported_status, payload)

        except TransactionNotFoundError:
            cls.get_logger().error(
                "Verified notification for unknown transaction",
                extra=audit.as_log_extra(),
            )
            cls._open_issue(
                txn_id, IssueReason.NOT_FOUND, reported_status, "", audit
            )
            raise
        except ReconciliationConflictError as e:
            reason = (
                IssueReason.AMOUNT_MISMATCH
                if isinstance(e, AmountMismatchError)
                else IssueReason.CONFLICT
            )
            cls.get_logger().warning(
                f"Notification rejected for review: {e.message}",
                extra={**audit.as_log_extra(), "reason": reason.value},
            )
            cls._open_issue(txn_id, reason, reported_status, stored_status, audit)
            raise

        cls.get_logger().info(
            f"Transaction reconciled: pending -> {txn.status}",
            extra={
                "txn_id": txn_id,
                "status": txn.status,
                "gateway_reference": txn.gateway_reference,
            },
        )
        return ReconcileOutcome(result=ReconcileResult.APPLIED, transaction=txn)

    @classmethod
    def _lock_transaction(cls, txn_id: str) -> Transaction:
        try:
            return Transaction.objects.select_for_update().get(txn_id=txn_id)
        except Transaction.DoesNotExist:
            raise TransactionNotFoundError(
                f"Transaction {txn_id} not found",
                details={"txn_id": txn_id},
            )

    @classmethod
    def _apply(
        cls,
        txn: Transaction,
        reported_status: TransactionStatus,
        payload: Mapping[str, str],
    ) -> None:
        """Run the terminal transition and grant credits. Caller holds the lock."""
        stored_payload = sanitize_payload(payload)
        gateway_reference = payload.get("mihpayid") or None

        if reported_status == TransactionStatus.FAILURE:
            txn.mark_failure(
                payload=stored_payload, gateway_reference=gateway_reference
            )
            txn.save()
            return

        txn.mark_success(payload=stored_payload, gateway_reference=gateway_reference)
        txn.save()

        try:
            CreditGrant.objects.create(
                transaction=txn,
                user_id=txn.user_id,
                credits=txn.credits,
                valid_until=txn.valid_until,
            )
        except IntegrityError as e:
            raise ReconciliationConflictError(
                f"Credits for transaction {txn.txn_id} were already granted",
                details={"txn_id": txn.txn_id},
            ) from e

        txn.user.profile.add_credits(txn.credits)

    @classmethod
    def _open_issue(
        cls,
        txn_id: str,
        reason: IssueReason,
        reported_status: str,
        stored_status: str,
        audit: GatewayAuditRecord,
    ) -> ReconciliationIssue:
        """
        Open a review issue, or fold a redelivery into the open one.

        The gateway retries refused notifications, so the same (txn_id,
        reason) keeps arriving until an operator resolves the issue.
        """
        now = timezone.now()
        latest = {
            "reported_status": reported_status,
            "stored_status": stored_status,
            "audit_payload": audit.as_dict(),
            "last_seen_at": now,
        }
        issue, created = ReconciliationIssue.objects.get_or_create(
            txn_id=txn_id,
            reason=reason,
            resolved=False,
            defaults=latest,
        )
        if not created:
            ReconciliationIssue.objects.filter(pk=issue.pk).update(
                delivery_count=F("delivery_count") + 1,
                updated_at=now,
                **latest,
            )
            issue.refresh_from_db()
        return issue

    @classmethod
    def flag_stale_pending(cls, older_than_hours: int) -> int:
        """
        Queue transactions pending longer than the review window.

        Never transitions a transaction; only the gateway's notification can
        do that. A transaction with an unresolved stale_pending issue is not
        flagged again.

        Args:
            older_than_hours: Review window in hours

        Returns:
            Number of issues opened
        """
        cutoff = timezone.now() - timedelta(hours=older_than_hours)
        already_flagged = ReconciliationIssue.objects.filter(
            reason=IssueReason.STALE_PENDING,
            resolved=False,
        ).values("txn_id")

        stale = (
            Transaction.objects.filter(
                status=TransactionStatus.PENDING,
                created_at__lt=cutoff,
            )
            .exclude(txn_id__in=already_flagged)
            .values_list("txn_id", flat=True)
        )

        issues = [
            ReconciliationIssue(
                txn_id=txn_id,
                reason=IssueReason.STALE_PENDING,
                stored_status=TransactionStatus.PENDING,
            )
            for txn_id in stale
        ]
        ReconciliationIssue.objects.bulk_create(issues)

        if issues:
            cls.get_logger().warning(
                f"Flagged {len(issues)} stale pending transactions for review",
                extra={
                    "older_than_hours": older_than_hours,
                    "txn_ids": [issue.txn_id for issue in issues],
                },
            )
        return len(issues)
