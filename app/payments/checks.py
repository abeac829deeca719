"""
System checks for payment configuration.

Registered in PaymentsConfig.ready(); run by manage.py check, runserver
and migrate.
"""

from django.conf import settings
from django.core.checks import Error, register


@register()
def check_payu_configuration(app_configs, **kwargs):
    """Report a missing PayU merchant salt."""
    errors = []
    if not getattr(settings, "PAYU_MERCHANT_SALT", ""):
        errors.append(
            Error(
                "PAYU_MERCHANT_SALT is not set.",
                hint=(
                    "Set PAYU_MERCHANT_SALT in the environment. Without it every "
                    "PayU notification is rejected with HTTP 500."
                ),
                id="payments.E001",
            )
        )
    return errors
