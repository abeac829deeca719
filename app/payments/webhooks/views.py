"""
Webhook endpoint views for PayU.

This module provides the HTTP endpoint PayU posts payment responses to.
The view:
1. Refuses to run without a configured merchant salt
2. Decodes the form body into fields
3. Verifies the response hash
4. Hands the outcome to the TransactionReconciler
5. Answers with a status code the gateway can act on

Unlike the queue-and-return pattern used for high-volume providers, PayU
notifications are reconciled synchronously: the response code tells the
gateway whether redelivery is useful (5xx) or pointless (4xx).

Usage:
    # In urls.py
    from payments.webhooks.views import PayUWebhookView

    urlpatterns = [
        path("webhooks/payu/", PayUWebhookView.as_view(), name="payu_webhook"),
    ]

    # With an explicit salt (tests, multi-merchant setups)
    PayUWebhookView.as_view(merchant_salt="...")
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from payments.exceptions import (
    GatewayConfigurationError,
    PaymentError,
    SignatureVerificationError,
)
from payments.gateway import GatewayAuditRecord, decode, verify
from payments.services.reconciler import TransactionReconciler, parse_reported_status

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class PayUWebhookView(View):
    """
    Receive and reconcile PayU payment notifications.

    Security:
    - Response hash verification prevents spoofed notifications
    - CSRF exemption required for external webhooks
    - Only POST (and OPTIONS) accepted; CORS is handled by CorsMiddleware
    - Raw payloads are never logged; only the allow-listed audit record

    Idempotency:
    - The reconciler applies an outcome at most once per transaction
    - A replayed notification returns 200 without changing anything

    Returns:
        JsonResponse with status:
        - 200: Outcome applied, or already applied
        - 400: Undecodable body, or unsupported status/amount
        - 401: Response hash did not verify
        - 404: Unknown transaction (queued for review)
        - 409: Conflicting status or amount (queued for review)
        - 500: Merchant salt not configured
        - 503: Storage unavailable, safe to redeliver
    """

    http_method_names = ["post", "options"]

    # Injected via as_view(); falls back to settings.PAYU_MERCHANT_SALT
    merchant_salt: str | None = None

    def get_merchant_salt(self) -> str:
        if self.merchant_salt is not None:
            return self.merchant_salt
        return settings.PAYU_MERCHANT_SALT

    def post(self, request: HttpRequest, *args, **kwargs) -> HttpResponse:
        fields: dict[str, str] = {}
        try:
            salt = self.get_merchant_salt()
            if not salt:
                raise GatewayConfigurationError("PayU merchant salt not configured")

            fields = decode(request.body, request.META.get("CONTENT_TYPE", ""))
            audit = GatewayAuditRecord.from_payload(fields)
            logger.info("PayU notification received", extra=audit.as_log_extra())

            if not verify(fields, salt):
                logger.warning(
                    "PayU notification failed signature verification",
                    extra=audit.as_log_extra(),
                )
                raise SignatureVerificationError("Invalid webhook signature")

            status = parse_reported_status(fields.get("status"))
            outcome = TransactionReconciler.reconcile(fields["txnid"], status, fields)

        except PaymentError as e:
            return self._error_response(e, fields.get("txnid"))

        return JsonResponse(
            {
                "success": True,
                "message": "Webhook processed successfully",
                "txnId": outcome.transaction.txn_id,
                "status": outcome.transaction.status,
            }
        )

    def _error_response(self, error: PaymentError, txn_id: str | None) -> JsonResponse:
        log = logger.error if error.status_code >= 500 else logger.warning
        log(
            f"PayU notification rejected: {error}",
            extra={
                "txn_id": txn_id,
                "error_code": error.error_code,
                "status_code": error.status_code,
                "retryable": error.is_retryable,
            },
        )
        return JsonResponse(
            {"error": error.message, "error_code": error.error_code},
            status=error.status_code,
        )
