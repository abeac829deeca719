"""
Payment admin configuration.

Transactions and credit grants are read-only audit records here; status
changes only ever come from the reconciler. Reconciliation issues are the
manual review queue and can be resolved from the changelist.
"""

from django.contrib import admin
from django.utils import timezone

from payments.models import CreditGrant, ReconciliationIssue, Transaction

__all__ = [
    "TransactionAdmin",
    "CreditGrantAdmin",
    "ReconciliationIssueAdmin",
]


class CreditGrantInline(admin.StackedInline):
    """Inline display of the credit grant for a transaction."""

    model = CreditGrant
    extra = 0
    readonly_fields = ["id", "user", "credits", "valid_until", "created_at"]
    can_delete = False

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Admin configuration for Transaction.

    Provides visibility into checkout transactions and their outcomes.
    Status is managed by the reconciler and cannot be edited here.
    """

    list_display = [
        "txn_id",
        "user",
        "amount",
        "plan_name",
        "credits",
        "status",
        "gateway_reference",
        "created_at",
    ]
    list_filter = ["status", "plan_name", "created_at"]
    search_fields = ["txn_id", "gateway_reference", "user__email"]
    readonly_fields = [
        "id",
        "txn_id",
        "user",
        "amount",
        "plan_name",
        "credits",
        "valid_until",
        "status",
        "gateway_reference",
        "raw_gateway_payload",
        "reconciled_at",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]
    inlines = [CreditGrantInline]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "txn_id", "user", "status"),
            },
        ),
        (
            "Purchase",
            {
                "fields": ("amount", "plan_name", "credits", "valid_until"),
            },
        ),
        (
            "Gateway Result",
            {
                "fields": (
                    "gateway_reference",
                    "reconciled_at",
                    "raw_gateway_payload",
                ),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None) -> bool:
        """Disable delete for transactions (audit trail)."""
        return False

    def has_add_permission(self, request) -> bool:
        """Transactions are created by the checkout flow."""
        return False


@admin.register(CreditGrant)
class CreditGrantAdmin(admin.ModelAdmin):
    """Admin configuration for CreditGrant (read-only)."""

    list_display = ["id", "user", "credits", "valid_until", "transaction", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["user__email", "transaction__txn_id"]
    readonly_fields = [
        "id",
        "transaction",
        "user",
        "credits",
        "valid_until",
        "created_at",
        "updated_at",
    ]
    ordering = ["-created_at"]

    def has_delete_permission(self, request, obj=None) -> bool:
        return False

    def has_add_permission(self, request) -> bool:
        return False


@admin.register(ReconciliationIssue)
class ReconciliationIssueAdmin(admin.ModelAdmin):
    """
    Admin configuration for ReconciliationIssue.

    The manual review queue. Operators check the payment with PayU, fix the
    account by hand if needed, and resolve the issue with a note.
    """

    list_display = [
        "txn_id",
        "reason",
        "reported_status",
        "stored_status",
        "delivery_count",
        "resolved",
        "created_at",
    ]
    list_filter = ["reason", "resolved", "created_at"]
    search_fields = ["txn_id"]
    readonly_fields = [
        "id",
        "txn_id",
        "reason",
        "reported_status",
        "stored_status",
        "audit_payload",
        "delivery_count",
        "last_seen_at",
        "resolved_at",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "created_at"
    ordering = ["resolved", "-created_at"]
    actions = ["mark_resolved"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "txn_id", "reason"),
            },
        ),
        (
            "Statuses",
            {
                "fields": ("reported_status", "stored_status"),
            },
        ),
        (
            "Notification",
            {
                "fields": ("audit_payload", "delivery_count", "last_seen_at"),
            },
        ),
        (
            "Resolution",
            {
                "fields": ("resolved", "resolved_at", "resolution_note"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    @admin.action(description="Mark selected issues as resolved")
    def mark_resolved(self, request, queryset):
        """Bulk action to resolve issues."""
        count = queryset.filter(resolved=False).update(
            resolved=True,
            resolved_at=timezone.now(),
        )
        self.message_user(request, f"Marked {count} issues as resolved.")

    def save_model(self, request, obj, form, change):
        """Stamp resolved_at when an operator resolves an issue."""
        if obj.resolved and obj.resolved_at is None:
            obj.mark_resolved()
        super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None) -> bool:
        """Disable delete for issues (audit trail)."""
        return False

    def has_add_permission(self, request) -> bool:
        return False
