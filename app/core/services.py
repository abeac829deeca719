"""
Base service layer patterns for business logic encapsulation.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Usage:
    from core.services import BaseService

    class CreditService(BaseService):
        @classmethod
        def grant(cls, profile, credits):
            with cls.atomic():
                ...
            cls.get_logger().info("Granted credits")

Related:
    - core.exceptions: Domain errors raised by services
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Services keep no per-request state between calls
        - Raise core.exceptions subclasses for domain failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with cls.atomic():
                txn.mark_success(...)
                txn.save()
                CreditGrant.objects.create(...)
                # If the grant fails, the status change is rolled back too
        """
        with transaction.atomic():
            yield
