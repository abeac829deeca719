"""
Tests for the application exception hierarchy.
"""

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class TestBaseApplicationError:
    def test_defaults(self):
        error = BaseApplicationError("Something failed")

        assert error.message == "Something failed"
        assert error.error_code == "APPLICATION_ERROR"
        assert error.details == {}
        assert str(error) == "[APPLICATION_ERROR] Something failed"

    def test_to_dict_omits_empty_details(self):
        assert NotFoundError("Missing").to_dict() == {
            "error": "Missing",
            "error_code": "NOT_FOUND",
        }

    def test_to_dict_with_details(self):
        error = ConflictError(
            "Already applied",
            error_code="STATUS_CONFLICT",
            details={"txn_id": "TXN100"},
        )

        assert error.to_dict() == {
            "error": "Already applied",
            "error_code": "STATUS_CONFLICT",
            "details": {"txn_id": "TXN100"},
        }

    def test_subclass_default_codes(self):
        assert ValidationError("x").error_code == "VALIDATION_ERROR"
        assert ConflictError("x").error_code == "CONFLICT"
