"""
Pytest fixtures for payment tests.

Fixtures provide a user and transactions in each status.

Usage:
    def test_replay_is_noop(pending_transaction):
        ...
"""

import pytest

from authentication.tests.factories import UserFactory
from payments.state_machines import TransactionStatus
from payments.tests.factories import TransactionFactory


@pytest.fixture
def user(db):
    """Create a test user (profile created by signal)."""
    return UserFactory()


@pytest.fixture
def pending_transaction(db, user):
    """Create a pending transaction worth 10 credits."""
    return TransactionFactory(user=user, txn_id="TXN100", credits=10)


@pytest.fixture
def successful_transaction(db, user):
    """Create a transaction already marked successful."""
    return TransactionFactory(
        user=user, txn_id="TXN200", status=TransactionStatus.SUCCESS
    )
