"""
Transaction model for PayU checkout payments.

A Transaction is created as PENDING by the checkout flow before the customer
is redirected to PayU. The gateway's asynchronous notification later moves it
to SUCCESS or FAILURE, exactly once.

Usage:
    from payments.models import Transaction
    from payments.state_machines import TransactionStatus

    # Created by the checkout flow
    txn = Transaction.objects.create(
        txn_id="TXN100",
        user=user,
        amount=Decimal("499.00"),
        plan_name="Starter",
        credits=270,
        valid_until=timezone.now() + timedelta(days=30),
    )

    # State transitions using django-fsm (reconciler only)
    txn.mark_success(payload=sanitized, gateway_reference="403993715521")
    txn.save()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.utils import timezone

from django_fsm import FSMField, transition

from core.models import BaseModel, UUIDPrimaryKeyMixin

from payments.state_machines import TransactionStatus

if TYPE_CHECKING:
    from typing import Any


class Transaction(UUIDPrimaryKeyMixin, BaseModel):
    """
    A single purchase of a credit plan through PayU.

    State Flow:
        PENDING -> SUCCESS (credits granted)
        PENDING -> FAILURE

    Fields:
        txn_id: Merchant-generated transaction id sent to PayU as `txnid`
        user: Account that receives the credits
        status: Current FSM status
        amount: Amount charged, in the plan currency
        plan_name: Plan purchased
        credits: Credits granted when the payment succeeds
        valid_until: When the purchased entitlement expires
        gateway_reference: PayU payment id (`mihpayid`)
        raw_gateway_payload: Sanitized notification that settled the status
        reconciled_at: When the terminal status was applied

    Note:
        txn_id, amount, plan_name and credits are fixed at checkout. The
        status field is protected; it only changes through mark_success()
        and mark_failure(), both of which require PENDING.
    """

    # ==========================================================================
    # Identification
    # ==========================================================================

    txn_id = models.CharField(
        max_length=64,
        unique=True,
        db_index=True,
        editable=False,
        help_text="Merchant transaction id (PayU `txnid`) - unique",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="transactions",
        help_text="Account that receives the credits",
    )

    # ==========================================================================
    # Purchase
    # ==========================================================================

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        editable=False,
        help_text="Amount charged (e.g., 499.00)",
    )

    plan_name = models.CharField(
        max_length=100,
        editable=False,
        help_text="Name of the purchased plan",
    )

    credits = models.PositiveIntegerField(
        editable=False,
        help_text="Credits granted when the payment succeeds",
    )

    valid_until = models.DateTimeField(
        help_text="When the purchased entitlement expires",
    )

    # ==========================================================================
    # Status
    # ==========================================================================

    status = FSMField(
        default=TransactionStatus.PENDING,
        choices=TransactionStatus.choices,
        db_index=True,
        protected=True,  # Prevent direct assignment outside transitions
        help_text="Current status of the transaction (managed by FSM)",
    )

    # ==========================================================================
    # Gateway Result
    # ==========================================================================

    gateway_reference = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        help_text="PayU payment id (`mihpayid`)",
    )

    raw_gateway_payload = models.JSONField(
        default=dict,
        blank=True,
        help_text="Notification that settled the status (card data masked)",
    )

    reconciled_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the terminal status was applied",
    )

    # ==========================================================================
    # Meta & Methods
    # ==========================================================================

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"
        indexes = [
            models.Index(fields=["user", "status"]),
            models.Index(fields=["status", "created_at"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="transaction_amount_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(credits__gt=0),
                name="transaction_credits_positive",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation with txn id, status, and amount."""
        return f"Transaction({self.txn_id}, {self.status}, {self.amount})"

    @property
    def is_terminal(self) -> bool:
        """Check if the transaction has left PENDING."""
        return self.status in TransactionStatus.terminal()

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    def _record_gateway_result(
        self,
        payload: dict[str, Any],
        gateway_reference: str | None,
    ) -> None:
        self.raw_gateway_payload = payload
        if gateway_reference and not self.gateway_reference:
            self.gateway_reference = gateway_reference
        self.reconciled_at = timezone.now()

    @transition(
        field=status,
        source=TransactionStatus.PENDING,
        target=TransactionStatus.SUCCESS,
    )
    def mark_success(
        self,
        payload: dict[str, Any],
        gateway_reference: str | None = None,
    ):
        """
        Record a successful payment.

        Transition: PENDING -> SUCCESS

        The caller grants credits in the same database transaction.
        """
        self._record_gateway_result(payload, gateway_reference)

    @transition(
        field=status,
        source=TransactionStatus.PENDING,
        target=TransactionStatus.FAILURE,
    )
    def mark_failure(
        self,
        payload: dict[str, Any],
        gateway_reference: str | None = None,
    ):
        """
        Record a failed payment.

        Transition: PENDING -> FAILURE
        """
        self._record_gateway_result(payload, gateway_reference)
