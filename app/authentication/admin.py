"""
Django admin configuration for authentication models.

This module registers User and Profile with the Django admin site for
management.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import Profile, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model (slim version).

    Customized for email-based authentication. Profile data (name, credits)
    is managed via ProfileAdmin.
    """

    # List display
    list_display = (
        "email",
        "email_verified",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = (
        "is_active",
        "is_staff",
        "is_superuser",
        "email_verified",
        "date_joined",
    )
    search_fields = ("email",)
    ordering = ("-date_joined",)

    # Field configuration
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Status",
            {"fields": ("email_verified", "is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login")},
        ),
    )

    # Fields for creating a new user
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )

    # Read-only fields
    readonly_fields = ("date_joined", "last_login")


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Admin configuration for Profile model.

    The credit balance is read-only here; it only changes when a payment
    is reconciled.
    """

    list_display = (
        "user",
        "first_name",
        "last_name",
        "credit_balance",
        "created_at",
    )
    list_filter = ("created_at",)
    search_fields = ("user__email", "first_name", "last_name")
    ordering = ("-created_at",)

    raw_id_fields = ("user",)
    readonly_fields = ("credit_balance", "created_at", "updated_at")

    fieldsets = (
        (
            "User",
            {"fields": ("user",)},
        ),
        (
            "Identity",
            {"fields": ("first_name", "last_name")},
        ),
        (
            "Credits",
            {"fields": ("credit_balance",)},
        ),
        (
            "Timestamps",
            {"fields": ("created_at", "updated_at")},
        ),
    )
