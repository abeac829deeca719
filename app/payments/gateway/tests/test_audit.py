"""
Tests for log-safe payload views.

Tests cover:
- Card number masking
- Payload sanitisation for storage
- GatewayAuditRecord allow-listing
"""

import dataclasses

import pytest

from payments.gateway.audit import (
    GatewayAuditRecord,
    mask_card_number,
    sanitize_payload,
)

CARD = "4111111111111111"


class TestMaskCardNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (CARD, "****1111"),
            ("512345XXXXXX2346", "****2346"),
            ("4111-1111-1111-1234", "****1234"),
            ("12", "****"),
            ("", "****"),
        ],
    )
    def test_mask(self, value, expected):
        assert mask_card_number(value) == expected


class TestSanitizePayload:
    def test_card_number_masked(self):
        sanitized = sanitize_payload({"txnid": "TXN100", "cardnum": CARD})

        assert sanitized == {"txnid": "TXN100", "cardnum": "****1111"}

    @pytest.mark.parametrize("key", ["cvv", "ccvv", "ccexpmon", "card_exp", "PIN"])
    def test_secret_fields_dropped(self, key):
        sanitized = sanitize_payload({"txnid": "TXN100", key: "123"})

        assert key not in sanitized

    def test_input_not_modified(self):
        payload = {"cardnum": CARD}

        sanitize_payload(payload)

        assert payload["cardnum"] == CARD


class TestGatewayAuditRecord:
    def test_from_payload_keeps_allow_listed_fields(self):
        record = GatewayAuditRecord.from_payload(
            {
                "txnid": "TXN100",
                "status": "success",
                "amount": "499.00",
                "mihpayid": "403993715521",
                "error_Message": "No Error",
                "email": "asha@example.com",
                "hash": "f" * 128,
            }
        )

        assert record.txnid == "TXN100"
        assert record.error_message == "No Error"
        assert record.as_dict() == {
            "txnid": "TXN100",
            "status": "success",
            "amount": "499.00",
            "mihpayid": "403993715521",
            "error_Message": "No Error",
        }

    def test_card_number_masked_from_payload(self):
        record = GatewayAuditRecord.from_payload({"cardnum": CARD})

        assert record.cardnum == "****1111"
        assert CARD not in repr(record)

    def test_card_number_masked_on_direct_construction(self):
        record = GatewayAuditRecord(txnid="TXN100", cardnum=CARD)

        assert record.cardnum == "****1111"

    def test_immutable(self):
        record = GatewayAuditRecord(txnid="TXN100")

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.cardnum = CARD

    def test_as_log_extra(self):
        record = GatewayAuditRecord(txnid="TXN100", status="failure")

        assert record.as_log_extra() == {
            "txn_id": "TXN100",
            "gateway_audit": {"txnid": "TXN100", "status": "failure"},
        }


class TestSanitizePayloadKeepsLookalikes:
    def test_field_containing_pin_substring_kept(self):
        sanitized = sanitize_payload({"shipping_city": "Pune"})

        assert sanitized == {"shipping_city": "Pune"}
