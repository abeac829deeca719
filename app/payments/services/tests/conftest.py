"""
Pytest fixtures for reconciler tests.
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
    """Create a pending TXN100 worth 10 credits at 499.00."""
    return TransactionFactory(user=user, txn_id="TXN100", credits=10)


@pytest.fixture
def failed_transaction(db, user):
    """Create a transaction already marked failed."""
    return TransactionFactory(
        user=user, txn_id="TXN300", status=TransactionStatus.FAILURE
    )
