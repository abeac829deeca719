"""
URL configuration for the payments app.

Routes:
    - POST /webhooks/payu/ - PayU payment notification endpoint

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.

Usage:
    # In config/urls.py
    api_v1_patterns = [
        path("payments/", include("payments.urls")),
    ]
"""

from django.urls import path

from payments.webhooks.views import PayUWebhookView

app_name = "payments"

urlpatterns = [
    # Webhook endpoints
    path("webhooks/payu/", PayUWebhookView.as_view(), name="payu_webhook"),
]
