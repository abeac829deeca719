"""
Log-safe views of PayU notification payloads.

A notification can carry card data, so the pipeline never logs or stores a
payload as received. Two views exist:

- GatewayAuditRecord: a fixed allow-list of fields for logs and review rows.
  The card number is masked when the record is built, so an unmasked record
  cannot exist.
- sanitize_payload(): the full payload minus card secrets, stored on the
  transaction for later dispute handling.

Usage:
    from payments.gateway.audit import GatewayAuditRecord

    audit = GatewayAuditRecord.from_payload(fields)
    logger.info("Notification received", extra=audit.as_log_extra())
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

# Payload key -> record attribute. Anything not listed never reaches a log.
AUDIT_FIELDS: dict[str, str] = {
    "txnid": "txnid",
    "status": "status",
    "amount": "amount",
    "mihpayid": "mihpayid",
    "mode": "mode",
    "bank_ref_num": "bank_ref_num",
    "bankcode": "bankcode",
    "error": "error",
    "error_Message": "error_message",
    "cardnum": "cardnum",
    "issuing_bank": "issuing_bank",
    "cardtype": "cardtype",
}

# Payload keys holding a card number
CARD_NUMBER_FIELDS = frozenset({"cardnum", "ccnum", "card_no"})

# Payload keys that are dropped entirely before storage
_SECRET_FIELD = re.compile(r"cvv|ccexp|card_?exp|(^|_)pin($|_)", re.IGNORECASE)


def mask_card_number(value: str) -> str:
    """
    Mask a card number, keeping only the last 4 digits.

    Args:
        value: Card number as sent by the gateway (may already be masked)

    Returns:
        Masked number (e.g., "****1111"), or "****" when fewer than 4
        digits are present

    Example:
        masked = mask_card_number("4111111111111111")  # "****1111"
    """
    digits_only = re.sub(r"\D", "", value)
    if len(digits_only) < 4:
        return "****"
    return "****" + digits_only[-4:]


def sanitize_payload(payload: Mapping[str, str]) -> dict[str, str]:
    """
    Copy a payload for storage with card secrets removed.

    Card numbers are masked; CVV, expiry and PIN fields are dropped.
    """
    sanitized = {}
    for key, value in payload.items():
        if _SECRET_FIELD.search(key):
            continue
        if key in CARD_NUMBER_FIELDS and value:
            value = mask_card_number(value)
        sanitized[key] = value
    return sanitized


@dataclass(frozen=True)
class GatewayAuditRecord:
    """
    Allow-listed, card-masked subset of a notification payload.

    Attributes mirror the PayU field names (error_Message is exposed as
    error_message). Missing fields are empty strings.

    Note:
        The card number is masked in __post_init__, so constructing a record
        directly with a full card number is as safe as using from_payload().
    """

    txnid: str = ""
    status: str = ""
    amount: str = ""
    mihpayid: str = ""
    mode: str = ""
    bank_ref_num: str = ""
    bankcode: str = ""
    error: str = ""
    error_message: str = ""
    cardnum: str = ""
    issuing_bank: str = ""
    cardtype: str = ""

    def __post_init__(self) -> None:
        if self.cardnum:
            object.__setattr__(self, "cardnum", mask_card_number(self.cardnum))

    @classmethod
    def from_payload(cls, payload: Mapping[str, str]) -> GatewayAuditRecord:
        """Build a record from decoded fields, ignoring everything else."""
        return cls(
            **{
                attribute: payload[key]
                for key, attribute in AUDIT_FIELDS.items()
                if key in payload
            }
        )

    def as_dict(self) -> dict[str, str]:
        """Return non-empty fields keyed by their PayU names."""
        return {
            key: getattr(self, attribute)
            for key, attribute in AUDIT_FIELDS.items()
            if getattr(self, attribute)
        }

    def as_log_extra(self) -> dict[str, Any]:
        """Return a logging `extra` mapping for this record."""
        return {
            "txn_id": self.txnid,
            "gateway_audit": self.as_dict(),
        }
