"""
Pytest fixtures for webhook tests.

Provides a request factory, the configured merchant salt, and transactions
for the PayU notification endpoint.
"""

from urllib.parse import urlencode

import pytest
from django.test import RequestFactory

from authentication.tests.factories import UserFactory
from payments.state_machines import TransactionStatus
from payments.tests.factories import TEST_MERCHANT_SALT, TransactionFactory

WEBHOOK_PATH = "/api/v1/payments/webhooks/payu/"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@pytest.fixture
def rf():
    """Request factory for creating test requests."""
    return RequestFactory()


@pytest.fixture(autouse=True)
def merchant_salt(settings):
    """Configure the PayU merchant salt for every webhook test."""
    settings.PAYU_MERCHANT_SALT = TEST_MERCHANT_SALT
    return TEST_MERCHANT_SALT


@pytest.fixture
def make_notification_request(rf):
    """Build a form-encoded POST to the webhook endpoint."""

    def _make(fields: dict[str, str], content_type: str = FORM_CONTENT_TYPE):
        return rf.post(
            WEBHOOK_PATH,
            data=urlencode(fields),
            content_type=content_type,
        )

    return _make


@pytest.fixture
def test_user(db):
    """Create a test user for payments."""
    return UserFactory(email="webhook_test@example.com")


@pytest.fixture
def pending_transaction(db, test_user):
    """Create pending TXN100: 499.00 for 10 credits."""
    return TransactionFactory(user=test_user, txn_id="TXN100", credits=10)


@pytest.fixture
def successful_transaction(db, test_user):
    """Create TXN200 already marked successful."""
    return TransactionFactory(
        user=test_user, txn_id="TXN200", status=TransactionStatus.SUCCESS
    )
