"""
Unit tests for purchase request validation.

Usage:
    pytest tests/unit/domain/test_purchase_request.py
"""

from decimal import Decimal

import pytest

from comptoir.domain.exceptions import (
    InputRejection,
    InvalidAddressError,
    InvalidAmountError,
    InvalidTransactionHashError,
)
from comptoir.domain.value_objects.purchase_request import parse_purchase_request

BUYER = "0x2222222222222222222222222222222222222222"
PROOF = "0x" + "AB" * 32


class TestParsePurchaseRequest:
    """Tests for parse_purchase_request."""

    # ================================================================
    # Test Methods
    # ================================================================

    def test_valid_request(self):
        request = parse_purchase_request(BUYER, 100, "500", PROOF)

        assert str(request.buyer_address) == BUYER
        assert request.stable_amount == Decimal("100")
        assert request.payout_amount == Decimal("500")
        assert request.proof_tx_hash == PROOF.lower()

    def test_invalid_address_rejected(self):
        with pytest.raises(InvalidAddressError) as exc_info:
            parse_purchase_request("0xnotanaddress", 100, 500, PROOF)

        assert exc_info.value.code == "INVALID_ADDRESS"
        assert exc_info.value.message == "Invalid wallet address"

    def test_address_checked_before_amounts(self):
        """First failing check wins."""
        with pytest.raises(InvalidAddressError):
            parse_purchase_request(None, -1, "abc", "junk")

    @pytest.mark.parametrize("amount", [0, -1, "abc", None, "", True])
    def test_invalid_stable_amount_rejected(self, amount):
        with pytest.raises(InvalidAmountError) as exc_info:
            parse_purchase_request(BUYER, amount, 500, PROOF)

        assert exc_info.value.code == "INVALID_AMOUNT"
        assert exc_info.value.message == "Invalid USDT amount"

    def test_invalid_payout_amount_rejected(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            parse_purchase_request(BUYER, 100, 0, PROOF)

        assert exc_info.value.message == "Invalid MZLx amount"

    def test_custom_symbols_in_messages(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            parse_purchase_request(BUYER, "x", 1, PROOF, stable_symbol="BUSD")

        assert exc_info.value.message == "Invalid BUSD amount"

    @pytest.mark.parametrize(
        "tx_hash", [None, "", "0x1234", "11" * 32, 42, PROOF + "\n", PROOF + " "]
    )
    def test_missing_or_malformed_hash_rejected(self, tx_hash):
        with pytest.raises(InvalidTransactionHashError) as exc_info:
            parse_purchase_request(BUYER, 100, 500, tx_hash)

        assert exc_info.value.code == "INVALID_TX_HASH"

    def test_hash_optional_when_proof_not_required(self):
        request = parse_purchase_request(BUYER, 100, 500, None, require_proof=False)
        assert request.proof_tx_hash is None

    def test_malformed_hash_rejected_even_when_optional(self):
        with pytest.raises(InvalidTransactionHashError):
            parse_purchase_request(BUYER, 100, 500, "0x12", require_proof=False)

    def test_all_rejections_share_base_class(self):
        for args in [("bad", 1, 1, PROOF), (BUYER, 0, 1, PROOF), (BUYER, 1, 1, "x")]:
            with pytest.raises(InputRejection):
                parse_purchase_request(*args)

    @pytest.mark.parametrize("suffix", ["\n", " "])
    def test_address_with_trailing_whitespace_is_input_rejection(self, suffix):
        with pytest.raises(InvalidAddressError):
            parse_purchase_request(BUYER + suffix, 100, 500, PROOF)
