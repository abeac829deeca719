"""
Authentication models.

This module defines the account models:
- User: Custom user model with email-based authentication (slim, auth-focused)
- Profile: Extended user profile data (OneToOne with User), including the
  credit balance granted by confirmed payments

Related files:
    - managers.py: Custom user manager for email-based creation
    - signals.py: Auto-create profile on user creation
    - payments/services/reconciler.py: Only writer of Profile.credit_balance

Security:
    - User passwords hashed with Django's PBKDF2
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.db.models import F

from authentication.managers import UserManager
from core.models import BaseModel


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    This is a slim user model focused on authentication only.
    Profile data (name, credit balance) is stored in the Profile model.

    Fields:
        email: Primary identifier, unique, used for login
        email_verified: Whether the user's email has been verified
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        # Create a regular user
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword'
        )

        # Create a superuser
        admin = User.objects.create_superuser(
            email='admin@example.com',
            password='adminpassword'
        )
    """

    # Primary identifier (replaces username)
    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    # Email verification status
    email_verified = models.BooleanField(
        default=False,
        help_text="Whether the user's email has been verified",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    # Configure email as the username field
    USERNAME_FIELD = "email"

    # Email is automatically required since it's the USERNAME_FIELD
    REQUIRED_FIELDS = []

    # Use custom manager for email-based user creation
    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        """
        Return the user's full name from profile.

        Returns:
            str: Full name from profile, or email if no profile/name set.
        """
        try:
            return self.profile.full_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        """
        Return the user's short name from profile.

        Returns:
            str: First name from profile, or email local part if not set.
        """
        try:
            return self.profile.first_name or self.email.split("@")[0]
        except Profile.DoesNotExist:
            return self.email.split("@")[0]


class Profile(BaseModel):
    """
    Extended user profile data.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        first_name: User's first name (sent to the gateway as `firstname`)
        last_name: User's last name
        credit_balance: Credits available to the account

    Usage:
        # Access profile from user
        user.profile.credit_balance

        # Grant credits atomically (inside the caller's transaction)
        user.profile.add_credits(10)

    Note:
        Profile is automatically created via signals when a User is created.
        credit_balance is only changed through add_credits(), which issues an
        UPDATE with an F() expression so concurrent grants cannot lose writes.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )

    first_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="User's first name",
    )
    last_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="User's last name",
    )

    credit_balance = models.PositiveIntegerField(
        default=0,
        help_text="Credits granted by confirmed payments",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        """Return full name or user email."""
        return self.full_name or str(self.user)

    @property
    def full_name(self):
        """Return full name or empty string."""
        return f"{self.first_name} {self.last_name}".strip()

    def add_credits(self, credits: int) -> None:
        """
        Atomically increase the credit balance.

        Args:
            credits: Number of credits to add (must be positive)

        Raises:
            ValueError: If credits is not positive
        """
        if credits <= 0:
            raise ValueError("credits must be positive")

        self.credit_balance = F("credit_balance") + credits
        self.save(update_fields=["credit_balance", "updated_at"])
        self.refresh_from_db(fields=["credit_balance"])
