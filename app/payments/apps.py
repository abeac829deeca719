"""
Payments app configuration.

This app provides the PayU payment pipeline:
- Transaction and credit grant models
- Webhook decoding, verification and reconciliation
- Manual review queue and stale-pending sweep
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"

    def ready(self):
        """Register system checks."""
        from payments import checks  # noqa: F401
