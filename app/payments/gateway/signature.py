"""
PayU hash computation and verification.

PayU signs every payment response with a SHA-512 digest over a fixed,
pipe-joined sequence of fields and the merchant salt ("reverse hash"):

    [additionalCharges|]SALT|status||||||udf5|udf4|udf3|udf2|udf1|
    email|firstname|productinfo|amount|txnid|key

The checkout request uses the same fields in forward order:

    key|txnid|amount|productinfo|firstname|email|udf1|udf2|udf3|udf4|udf5||||||SALT

Field values are used exactly as received; no trimming, case folding or
number formatting is applied, because the gateway hashed the same bytes.

Usage:
    from payments.gateway.signature import verify

    if not verify(fields, settings.PAYU_MERCHANT_SALT):
        raise SignatureVerificationError("Invalid webhook signature")

Security:
    - Digests are compared with hmac.compare_digest
    - verify() never raises; every malformed input is simply "not verified"
"""

from __future__ import annotations

import hashlib
import hmac
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Fields that must be present for a response hash to be computed
REQUIRED_RESPONSE_FIELDS: tuple[str, ...] = (
    "key",
    "txnid",
    "amount",
    "productinfo",
    "firstname",
    "email",
    "status",
    "hash",
)

# Fields that must be present for a request hash to be computed
REQUIRED_REQUEST_FIELDS: tuple[str, ...] = (
    "key",
    "txnid",
    "amount",
    "productinfo",
    "firstname",
    "email",
)

UDF_FIELDS: tuple[str, ...] = ("udf1", "udf2", "udf3", "udf4", "udf5")

_SHA512_HEX = re.compile(r"[0-9a-fA-F]{128}")


def _sha512(sequence: list[str]) -> str:
    return hashlib.sha512("|".join(sequence).encode("utf-8")).hexdigest()


def response_hash(payload: Mapping[str, str], secret: str) -> str:
    """
    Compute the digest PayU attaches to a payment response.

    Args:
        payload: Notification fields; udf1..udf5 and additionalCharges
            are optional
        secret: Merchant salt

    Returns:
        Lowercase hex SHA-512 digest

    Raises:
        KeyError: If a required field is missing
    """
    udfs = [payload.get(name, "") for name in reversed(UDF_FIELDS)]
    sequence = [
        secret,
        payload["status"],
        "",
        "",
        "",
        "",
        "",
        *udfs,
        payload["email"],
        payload["firstname"],
        payload["productinfo"],
        payload["amount"],
        payload["txnid"],
        payload["key"],
    ]

    additional_charges = payload.get("additionalCharges")
    if additional_charges:
        sequence.insert(0, additional_charges)

    return _sha512(sequence)


def request_hash(params: Mapping[str, str], secret: str) -> str:
    """
    Compute the digest sent with a checkout request.

    Used by the checkout flow that creates pending transactions so both
    directions of the PayU exchange share one implementation.

    Args:
        params: Checkout fields (key, txnid, amount, productinfo,
            firstname, email, optional udf1..udf5)
        secret: Merchant salt

    Returns:
        Lowercase hex SHA-512 digest

    Raises:
        ValueError: If the salt or a required field is missing
    """
    if not secret:
        raise ValueError("Merchant salt is required to sign a request")

    missing = [name for name in REQUIRED_REQUEST_FIELDS if name not in params]
    if missing:
        raise ValueError(f"Missing request fields: {', '.join(missing)}")

    sequence = [params[name] for name in REQUIRED_REQUEST_FIELDS]
    sequence += [params.get(name, "") for name in UDF_FIELDS]
    sequence += ["", "", "", "", "", secret]

    return _sha512(sequence)


def verify(payload: Mapping[str, str], secret: str) -> bool:
    """
    Check that a notification was signed by PayU with the merchant salt.

    Args:
        payload: Decoded notification fields, including "hash"
        secret: Merchant salt

    Returns:
        True only if every required field is present, the received hash is a
        well-formed SHA-512 hex digest, and it matches the recomputed digest
        (case-insensitive). False otherwise, including for an empty salt.
    """
    if not secret:
        return False

    if any(name not in payload for name in REQUIRED_RESPONSE_FIELDS):
        return False

    received = payload["hash"]
    if not _SHA512_HEX.fullmatch(received):
        return False

    expected = response_hash(payload, secret)
    return hmac.compare_digest(expected, received.lower())
