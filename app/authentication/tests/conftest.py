"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user):
        assert user.profile.credit_balance == 0
"""

import pytest

from authentication.models import User
from authentication.tests.factories import UserFactory


@pytest.fixture
def user(db):
    """
    Create a basic verified user with auto-created profile.

    The profile is automatically created via signals with a zero balance.
    """
    return UserFactory(email_verified=True)


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )
