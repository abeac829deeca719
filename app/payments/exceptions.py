"""
Payment-specific exceptions for the PayU notification pipeline.

Every exception carries the HTTP status the webhook endpoint answers with,
so the endpoint maps failures in one place and the gateway can tell a
permanent rejection (4xx, do not redeliver) from a transient one (5xx,
redeliver later).

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── GatewayConfigurationError - Merchant salt missing (500)
    ├── NotificationDecodeError - Body could not be decoded (400, also ValidationError)
    │   └── InvalidNotificationError - Decoded fields fail validation (400)
    ├── SignatureVerificationError - Response hash did not verify (401)
    ├── TransactionNotFoundError - Unknown txnid (404, also NotFoundError)
    ├── ReconciliationConflictError - Terminal status differs (409, also ConflictError)
    │   └── AmountMismatchError - Reported amount differs from stored (409)
    └── TransientStorageError - Lock/statement timeout, lost connection
        (503, also ExternalServiceError, retryable)

Usage:
    from payments.exceptions import PaymentError, TransactionNotFoundError

    try:
        TransactionReconciler.reconcile(txn_id, status, payload)
    except PaymentError as e:
        return JsonResponse(e.to_dict(), status=e.status_code)
"""

from __future__ import annotations

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment pipeline failures.

    Attributes:
        status_code: HTTP status the webhook endpoint responds with
        is_retryable: Whether the gateway should redeliver the notification

    Example:
        try:
            ...
        except PaymentError as e:
            logger.warning(f"Notification rejected: {e}")
            return JsonResponse(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "PAYMENT_ERROR"
    status_code: int = 500
    is_retryable: bool = False


class GatewayConfigurationError(PaymentError):
    """
    Raised when the merchant salt is not configured.

    Nothing can be verified without the salt, so the endpoint refuses every
    notification before reading the body.
    """

    default_error_code: str = "GATEWAY_NOT_CONFIGURED"
    status_code: int = 500


# -----------------------------------------------------------------------------
# Request Errors (permanent, do not retry)
# -----------------------------------------------------------------------------


class NotificationDecodeError(PaymentError, ValidationError):
    """
    Raised when a notification body cannot be decoded into fields.

    Use for:
    - Unsupported content type
    - Bytes that are invalid in the declared charset
    - Malformed form encoding
    """

    default_error_code: str = "NOTIFICATION_DECODE_ERROR"
    status_code: int = 400


class InvalidNotificationError(NotificationDecodeError):
    """
    Raised when decoded fields carry values the pipeline cannot act on.

    Use for:
    - Status outside success/failure (including "pending")
    - Amount that is not a decimal number
    - Missing txnid
    """

    default_error_code: str = "INVALID_NOTIFICATION"


class SignatureVerificationError(PaymentError):
    """
    Raised when the response hash does not verify against the merchant salt.

    The payload is untrusted at this point; only the allow-listed audit
    record may be logged.
    """

    default_error_code: str = "INVALID_SIGNATURE"
    status_code: int = 401


# -----------------------------------------------------------------------------
# Reconciliation Errors
# -----------------------------------------------------------------------------


class TransactionNotFoundError(PaymentError, NotFoundError):
    """
    Raised when a verified notification references an unknown txnid.

    Example:
        raise TransactionNotFoundError(
            f"Transaction {txn_id} not found",
            details={"txn_id": txn_id},
        )
    """

    default_error_code: str = "TRANSACTION_NOT_FOUND"
    status_code: int = 404


class ReconciliationConflictError(PaymentError, ConflictError):
    """
    Raised when a notification contradicts a transaction's terminal status.

    The stored transaction is left untouched and the event is queued for
    manual review.
    """

    default_error_code: str = "STATUS_CONFLICT"
    status_code: int = 409


class AmountMismatchError(ReconciliationConflictError):
    """
    Raised when the reported amount differs from the stored amount.

    Example:
        raise AmountMismatchError(
            "Reported amount 499.00 does not match stored amount 500.00",
            details={"txn_id": "TXN100", "reported": "499.00", "stored": "500.00"},
        )
    """

    default_error_code: str = "AMOUNT_MISMATCH"


# -----------------------------------------------------------------------------
# Transient Errors (safe for the gateway to redeliver)
# -----------------------------------------------------------------------------


class TransientStorageError(PaymentError, ExternalServiceError):
    """
    Raised when the database is unavailable or a lock/statement times out.

    Nothing has been committed when this is raised, so redelivery is safe.
    """

    default_error_code: str = "STORAGE_UNAVAILABLE"
    status_code: int = 503
    is_retryable: bool = True


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "PaymentError",
    # Configuration
    "GatewayConfigurationError",
    # Request errors
    "NotificationDecodeError",
    "InvalidNotificationError",
    "SignatureVerificationError",
    # Reconciliation errors
    "TransactionNotFoundError",
    "ReconciliationConflictError",
    "AmountMismatchError",
    # Transient errors
    "TransientStorageError",
]
