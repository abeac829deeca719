"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User manager, Profile auto-creation and credit balance

Usage:
    pytest authentication/tests/
"""
