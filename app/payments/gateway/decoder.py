"""
Decoding of inbound PayU notification bodies.

PayU posts payment responses as HTML form submissions, either
application/x-www-form-urlencoded or multipart/form-data. This module turns
the raw body into a flat mapping of field name to string value.

Decoding is strict: values are never coerced, repaired or guessed at. A body
that is not exactly what its Content-Type declares is rejected, since any
byte-level change would invalidate the response hash anyway.

Usage:
    from payments.gateway.decoder import decode

    fields = decode(request.body, request.META.get("CONTENT_TYPE", ""))
    fields["txnid"]  # "TXN100"
"""

from __future__ import annotations

import io
import logging
from urllib.parse import parse_qsl

from django.core.exceptions import SuspiciousOperation
from django.core.files.uploadhandler import MemoryFileUploadHandler
from django.http.multipartparser import MultiPartParser, MultiPartParserError
from django.utils.http import parse_header_parameters

from payments.exceptions import NotificationDecodeError

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM_DATA = "multipart/form-data"

SUPPORTED_CONTENT_TYPES = frozenset({FORM_URLENCODED, MULTIPART_FORM_DATA})

# A PayU response carries a few dozen short fields
MAX_BODY_BYTES = 64 * 1024
MAX_FIELDS = 200

DEFAULT_CHARSET = "utf-8"


def decode(raw_body: bytes, content_type: str) -> dict[str, str]:
    """
    Decode a notification body into a field mapping.

    Args:
        raw_body: Request body exactly as received
        content_type: Full Content-Type header value, including parameters
            such as charset or boundary

    Returns:
        Mapping of field name to value. When a field repeats, the last
        occurrence wins.

    Raises:
        NotificationDecodeError: Unsupported content type, empty or oversized
            body, bytes invalid in the declared charset, or a malformed body
    """
    mime_type, params = parse_header_parameters(content_type or "")
    mime_type = mime_type.lower()

    if mime_type not in SUPPORTED_CONTENT_TYPES:
        raise NotificationDecodeError(
            f"Unsupported content type: {mime_type or 'missing'}",
            details={"content_type": mime_type},
        )

    if not raw_body:
        raise NotificationDecodeError("Empty notification body")

    if len(raw_body) > MAX_BODY_BYTES:
        raise NotificationDecodeError(
            "Notification body too large",
            details={"size": len(raw_body), "limit": MAX_BODY_BYTES},
        )

    charset = params.get("charset", DEFAULT_CHARSET)
    try:
        text = raw_body.decode(charset)
    except LookupError as e:
        raise NotificationDecodeError(
            f"Unknown charset: {charset}",
            details={"charset": charset},
        ) from e
    except UnicodeDecodeError as e:
        raise NotificationDecodeError(
            f"Body is not valid {charset}",
            details={"charset": charset, "position": e.start},
        ) from e

    if mime_type == FORM_URLENCODED:
        return _decode_urlencoded(text, charset)
    return _decode_multipart(raw_body, content_type, charset)


def _decode_urlencoded(text: str, charset: str) -> dict[str, str]:
    try:
        pairs = parse_qsl(
            text,
            keep_blank_values=True,
            strict_parsing=True,
            encoding=charset,
            errors="strict",
            max_num_fields=MAX_FIELDS,
        )
    except ValueError as e:
        # UnicodeDecodeError from percent-escapes is a ValueError too
        raise NotificationDecodeError(
            "Malformed form-encoded body",
            details={"reason": str(e)},
        ) from e
    return dict(pairs)


def _decode_multipart(
    raw_body: bytes, content_type: str, charset: str
) -> dict[str, str]:
    meta = {
        "CONTENT_TYPE": content_type,
        "CONTENT_LENGTH": str(len(raw_body)),
    }
    try:
        parser = MultiPartParser(
            meta,
            io.BytesIO(raw_body),
            [MemoryFileUploadHandler()],
            encoding=charset,
        )
        fields, files = parser.parse()
    except (MultiPartParserError, SuspiciousOperation) as e:
        raise NotificationDecodeError(
            "Malformed multipart body",
            details={"reason": str(e)},
        ) from e

    if files:
        logger.warning(
            "Rejected multipart notification carrying file uploads",
            extra={"file_fields": sorted(files.keys())},
        )
        raise NotificationDecodeError(
            "File uploads are not accepted in payment notifications",
            details={"file_fields": sorted(files.keys())},
        )

    if len(fields) > MAX_FIELDS:
        raise NotificationDecodeError(
            "Too many fields in notification",
            details={"limit": MAX_FIELDS},
        )

    return dict(fields.items())
