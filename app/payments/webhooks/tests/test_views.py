"""
Tests for the PayU webhook view.

Tests cover:
- End-to-end reconciliation of a signed notification
- Signature verification
- Status code mapping for every refusal
- CORS preflight and method restrictions through the middleware stack
- Log output never carrying card numbers
"""

import json

import pytest
from django.urls import reverse

from authentication.models import Profile
from payments.exceptions import TransientStorageError
from payments.models import CreditGrant, ReconciliationIssue, Transaction
from payments.state_machines import IssueReason, TransactionStatus
from payments.tests.factories import signed_notification
from payments.webhooks.views import PayUWebhookView

webhook_view = PayUWebhookView.as_view()

ORIGIN = "https://checkout.example.com"


def body(response) -> dict:
    return json.loads(response.content)


def balance(user) -> int:
    return Profile.objects.get(user=user).credit_balance


# =============================================================================
# Successful Processing
# =============================================================================


class TestPayUWebhookSuccess:
    """Tests for notifications that are applied."""

    def test_success_grants_credits(
        self, make_notification_request, pending_transaction, test_user
    ):
        request = make_notification_request(signed_notification(pending_transaction))

        response = webhook_view(request)

        assert response.status_code == 200
        assert body(response) == {
            "success": True,
            "message": "Webhook processed successfully",
            "txnId": "TXN100",
            "status": "success",
        }
        assert (
            Transaction.objects.get(txn_id="TXN100").status
            == TransactionStatus.SUCCESS
        )
        assert balance(test_user) == 10
        assert CreditGrant.objects.filter(transaction__txn_id="TXN100").count() == 1

    def test_failure_recorded(
        self, make_notification_request, pending_transaction, test_user
    ):
        request = make_notification_request(
            signed_notification(pending_transaction, status="failure")
        )

        response = webhook_view(request)

        assert response.status_code == 200
        assert body(response)["status"] == "failure"
        assert balance(test_user) == 0

    def test_status_case_insensitive(
        self, make_notification_request, pending_transaction
    ):
        request = make_notification_request(
            signed_notification(pending_transaction, status="SUCCESS")
        )

        response = webhook_view(request)

        assert response.status_code == 200
        assert body(response)["status"] == "success"

    def test_replay_returns_200_once_applied(
        self, make_notification_request, pending_transaction, test_user
    ):
        fields = signed_notification(pending_transaction)
        webhook_view(make_notification_request(fields))

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 200
        assert balance(test_user) == 10
        assert CreditGrant.objects.count() == 1

    def test_multipart_body(self, rf, pending_transaction, test_user):
        request = rf.post(
            "/api/v1/payments/webhooks/payu/",
            data=signed_notification(pending_transaction),
        )

        response = webhook_view(request)

        assert response.status_code == 200
        assert balance(test_user) == 10

    def test_routed_through_urlconf(self, client, pending_transaction):
        response = client.post(
            reverse("payments:payu_webhook"),
            data=signed_notification(pending_transaction),
            secure=True,
            HTTP_ORIGIN=ORIGIN,
        )

        assert response.status_code == 200
        assert response["Access-Control-Allow-Origin"] == "*"


# =============================================================================
# Signature Verification
# =============================================================================


class TestPayUWebhookSignature:
    """Tests for signature verification."""

    def test_mutated_hash_returns_401(
        self, make_notification_request, pending_transaction, test_user
    ):
        fields = signed_notification(pending_transaction)
        fields["hash"] = ("0" if fields["hash"][0] != "0" else "1") + fields["hash"][1:]

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 401
        assert body(response)["error_code"] == "INVALID_SIGNATURE"
        assert (
            Transaction.objects.get(txn_id="TXN100").status
            == TransactionStatus.PENDING
        )
        assert balance(test_user) == 0

    def test_tampered_amount_returns_401(
        self, make_notification_request, pending_transaction
    ):
        fields = signed_notification(pending_transaction)
        fields["amount"] = "1.00"

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 401
        assert not ReconciliationIssue.objects.exists()

    def test_wrong_salt_returns_401(self, make_notification_request, pending_transaction):
        fields = signed_notification(pending_transaction, salt="attacker-salt")

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 401

    def test_missing_hash_returns_401(
        self, make_notification_request, pending_transaction
    ):
        fields = signed_notification(pending_transaction)
        del fields["hash"]

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 401

    def test_explicit_salt_overrides_settings(
        self, make_notification_request, pending_transaction
    ):
        view = PayUWebhookView.as_view(merchant_salt="tenant-salt")
        fields = signed_notification(pending_transaction, salt="tenant-salt")

        response = view(make_notification_request(fields))

        assert response.status_code == 200


# =============================================================================
# Refusals
# =============================================================================


class TestPayUWebhookRefusals:
    """Tests for the status codes of refused notifications."""

    def test_missing_salt_returns_500(self, settings, make_notification_request, db):
        settings.PAYU_MERCHANT_SALT = ""

        response = webhook_view(make_notification_request({"txnid": "TXN100"}))

        assert response.status_code == 500
        assert body(response)["error_code"] == "GATEWAY_NOT_CONFIGURED"

    def test_empty_explicit_salt_returns_500(self, make_notification_request, db):
        view = PayUWebhookView.as_view(merchant_salt="")

        response = view(make_notification_request({"txnid": "TXN100"}))

        assert response.status_code == 500

    def test_unsupported_content_type_returns_400(self, rf, db):
        request = rf.post(
            "/api/v1/payments/webhooks/payu/",
            data=json.dumps({"txnid": "TXN100"}),
            content_type="application/json",
        )

        response = webhook_view(request)

        assert response.status_code == 400
        assert body(response)["error_code"] == "NOTIFICATION_DECODE_ERROR"

    def test_invalid_bytes_returns_400(self, rf, db):
        request = rf.post(
            "/api/v1/payments/webhooks/payu/",
            data=b"firstname=Jos\xe9",
            content_type="application/x-www-form-urlencoded",
        )

        response = webhook_view(request)

        assert response.status_code == 400

    def test_pending_status_returns_400(
        self, make_notification_request, pending_transaction
    ):
        fields = signed_notification(pending_transaction, status="pending")

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 400
        assert body(response)["error_code"] == "INVALID_NOTIFICATION"
        assert (
            Transaction.objects.get(txn_id="TXN100").status
            == TransactionStatus.PENDING
        )

    def test_unknown_transaction_returns_404(self, make_notification_request, db):
        fields = signed_notification(txnid="TXN-MISSING")

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 404
        assert body(response)["error_code"] == "TRANSACTION_NOT_FOUND"
        assert ReconciliationIssue.objects.get().reason == IssueReason.NOT_FOUND

    def test_conflicting_status_returns_409(
        self, make_notification_request, successful_transaction
    ):
        fields = signed_notification(successful_transaction, status="failure")

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 409
        assert body(response)["error_code"] == "STATUS_CONFLICT"
        assert (
            Transaction.objects.get(txn_id="TXN200").status
            == TransactionStatus.SUCCESS
        )

    def test_amount_mismatch_returns_409(
        self, make_notification_request, pending_transaction
    ):
        fields = signed_notification(pending_transaction, amount="1.00")

        response = webhook_view(make_notification_request(fields))

        assert response.status_code == 409
        assert body(response)["error_code"] == "AMOUNT_MISMATCH"

    def test_storage_unavailable_returns_503(
        self, make_notification_request, pending_transaction, mocker
    ):
        mocker.patch(
            "payments.webhooks.views.TransactionReconciler.reconcile",
            side_effect=TransientStorageError("Payment storage is temporarily unavailable"),
        )

        response = webhook_view(
            make_notification_request(signed_notification(pending_transaction))
        )

        assert response.status_code == 503
        assert body(response)["error_code"] == "STORAGE_UNAVAILABLE"


# =============================================================================
# CORS and Methods
# =============================================================================


class TestPayUWebhookHttp:
    """Tests for preflight and method handling through the middleware stack."""

    def test_options_preflight(self, client):
        response = client.options(
            reverse("payments:payu_webhook"),
            secure=True,
            HTTP_ORIGIN=ORIGIN,
            HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response["Access-Control-Allow-Origin"] == "*"
        allowed = {h.strip() for h in response["Access-Control-Allow-Headers"].split(",")}
        assert allowed == {"authorization", "x-client-info", "apikey", "content-type"}
        allowed = {m.strip() for m in response["Access-Control-Allow-Methods"].split(",")}
        assert allowed == {"POST", "OPTIONS"}

    def test_plain_options_lists_allowed_methods(self, rf):
        response = webhook_view(rf.options("/api/v1/payments/webhooks/payu/"))

        assert response.status_code == 200
        assert response["Allow"] == "POST, OPTIONS"

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_other_methods_not_allowed(self, client, method):
        response = getattr(client, method)(
            reverse("payments:payu_webhook"), secure=True, HTTP_ORIGIN=ORIGIN
        )

        assert response.status_code == 405
        assert response["Access-Control-Allow-Origin"] == "*"

    def test_error_responses_carry_cors_headers(self, client, db):
        response = client.post(
            reverse("payments:payu_webhook"),
            data={"txnid": "TXN100"},
            secure=True,
            HTTP_ORIGIN=ORIGIN,
        )

        assert response.status_code == 401
        assert response["Access-Control-Allow-Origin"] == "*"

    def test_cors_limited_to_webhook_routes(self, client, db):
        response = client.get(reverse("health_check"), secure=True, HTTP_ORIGIN=ORIGIN)

        assert response.status_code == 200
        assert "Access-Control-Allow-Origin" not in response


# =============================================================================
# Logging
# =============================================================================


class TestPayUWebhookLogging:
    """Card numbers never reach log records."""

    @pytest.mark.parametrize("status", ["success", "failure"])
    def test_card_number_not_logged(
        self, caplog, make_notification_request, pending_transaction, status
    ):
        card = "4111111111111111"
        fields = signed_notification(pending_transaction, status=status, cardnum=card)

        with caplog.at_level("DEBUG"):
            webhook_view(make_notification_request(fields))

        assert caplog.records
        for record in caplog.records:
            assert card not in repr(record.__dict__)

    def test_card_number_not_logged_on_bad_signature(
        self, caplog, make_notification_request, pending_transaction
    ):
        card = "4111111111111111"
        fields = signed_notification(pending_transaction, cardnum=card)
        fields["hash"] = "0" * 128

        with caplog.at_level("DEBUG"):
            webhook_view(make_notification_request(fields))

        for record in caplog.records:
            assert card not in repr(record.__dict__)
