"""
Webhook handling for payment notifications from PayU.

Notifications are decoded, verified against the merchant salt, and
reconciled synchronously.

Usage:
    # In urls.py
    from payments.webhooks.views import PayUWebhookView

    urlpatterns = [
        path("webhooks/payu/", PayUWebhookView.as_view(), name="payu_webhook"),
    ]
"""

from payments.webhooks.views import PayUWebhookView

__all__ = [
    "PayUWebhookView",
]
