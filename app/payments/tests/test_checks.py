"""Tests for payment system checks."""

from payments.checks import check_payu_configuration


class TestPayUConfigurationCheck:
    def test_missing_salt_reported(self, settings):
        settings.PAYU_MERCHANT_SALT = ""

        errors = check_payu_configuration(None)

        assert len(errors) == 1
        assert errors[0].id == "payments.E001"

    def test_configured_salt_passes(self, settings):
        settings.PAYU_MERCHANT_SALT = "eCwWELxi"

        assert check_payu_configuration(None) == []
