"""
PayU gateway integration.

Pure functions for turning an inbound PayU notification into trusted,
log-safe data. Nothing here touches the database.

Modules:
    - decoder: Raw request body -> flat field mapping
    - signature: Response/request hash computation and verification
    - audit: Allow-listed, card-masked view of a payload for logs and storage

Usage:
    from payments.gateway import GatewayAuditRecord, decode, verify

    fields = decode(request.body, request.content_type)
    if not verify(fields, settings.PAYU_MERCHANT_SALT):
        ...
"""

from payments.gateway.audit import GatewayAuditRecord
from payments.gateway.decoder import decode
from payments.gateway.signature import request_hash, response_hash, verify

__all__ = [
    "GatewayAuditRecord",
    "decode",
    "request_hash",
    "response_hash",
    "verify",
]
