"""
Authentication application.

This app provides the account models the payment pipeline credits:

Key components:
    - User model: Custom email-based user authentication
    - Profile model: Extended user profile data, including credit_balance

Usage:
    from authentication.models import User, Profile
"""
