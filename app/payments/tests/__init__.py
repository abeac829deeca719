"""
Tests for payments app.

This package contains test modules for:
- test_models.py: Transaction transitions, constraints, CreditGrant, ReconciliationIssue
- test_tasks.py: Stale pending sweep task
- test_checks.py: Merchant salt system check
- test_exceptions.py: Error status mapping

Gateway, reconciler and webhook tests live beside their packages
(gateway/tests, services/tests, webhooks/tests).

Usage:
    pytest payments/tests/
    pytest payments/webhooks/tests/test_views.py
"""
