"""
Signal handlers for account models.

Every User gets a Profile on creation, so the reconciler can always credit
user.profile without checking for it.
"""

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created, **kwargs):
    """Create the zero-balance Profile for a new User."""
    if not created:
        return

    from authentication.models import Profile

    Profile.objects.get_or_create(user=instance)
    logger.debug(
        "Profile created for user",
        extra={"user_id": instance.pk},
    )
