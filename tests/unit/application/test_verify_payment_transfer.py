"""
Unit tests for VerifyPaymentTransfer use case.

Usage:
    pytest tests/unit/application/test_verify_payment_transfer.py
"""

import pytest

from comptoir.application.use_cases.verify_payment_transfer import (
    VerifyPaymentTransfer,
)
from comptoir.domain.entities.chain_transaction import TransactionStatus
from comptoir.domain.exceptions import (
    ChainTransportError,
    NoQualifyingTransferError,
    NotStablecoinTransactionError,
    TransactionFailedError,
    TransactionNotFoundError,
)
from tests.helpers.fake_chain import (
    BUYER,
    ONE,
    PAYOUT_TOKEN,
    PROOF_HASH,
    STABLECOIN,
    STRANGER,
    TREASURY,
    FakeChainClient,
    approval_log,
    transfer_log,
)


class TestVerifyPaymentTransfer:
    """Unit tests for payment verification."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _use_case(self, chain: FakeChainClient) -> VerifyPaymentTransfer:
        return VerifyPaymentTransfer(
            chain_client=chain,
            stablecoin_address=STABLECOIN,
            receiver_address=TREASURY,
        )

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_valid_payment_verified(self, chain):
        chain.add_payment()

        result = await self._use_case(chain).execute(PROOF_HASH)

        assert result.tx_hash == PROOF_HASH
        assert result.payer == BUYER
        assert result.amount_received == 100 * ONE
        assert len(result.transfers) == 1

    async def test_unknown_transaction_not_found(self, chain):
        with pytest.raises(TransactionNotFoundError) as exc_info:
            await self._use_case(chain).execute(PROOF_HASH)

        assert exc_info.value.code == "TX_NOT_FOUND"
        assert chain.calls["wait_for_receipt"] == 0

    async def test_reverted_transaction_rejected(self, chain):
        chain.add_payment(status=TransactionStatus.FAILED)

        with pytest.raises(TransactionFailedError):
            await self._use_case(chain).execute(PROOF_HASH)

    async def test_wrong_contract_rejected(self, chain):
        chain.add_payment(to=PAYOUT_TOKEN)

        with pytest.raises(NotStablecoinTransactionError) as exc_info:
            await self._use_case(chain).execute(PROOF_HASH)

        assert exc_info.value.message == "Not a USDT transaction"

    async def test_contract_creation_rejected(self, chain):
        chain.add_payment(to=None)

        with pytest.raises(NotStablecoinTransactionError):
            await self._use_case(chain).execute(PROOF_HASH)

    async def test_contract_match_is_case_insensitive(self, chain):
        chain.add_payment(to=STABLECOIN.lower())

        result = await self._use_case(chain).execute(PROOF_HASH)

        assert result.amount_received == 100 * ONE

    async def test_correct_contract_but_transfer_elsewhere_rejected(self, chain):
        """Calling the stablecoin is not enough; the treasury must be credited."""
        chain.add_payment(logs=[transfer_log(STABLECOIN, BUYER, STRANGER, 100 * ONE)])

        with pytest.raises(NoQualifyingTransferError) as exc_info:
            await self._use_case(chain).execute(PROOF_HASH)

        assert exc_info.value.code == "NO_QUALIFYING_TRANSFER"

    async def test_transfer_from_other_token_does_not_qualify(self, chain):
        chain.add_payment(
            logs=[transfer_log(PAYOUT_TOKEN, BUYER, TREASURY, 100 * ONE)]
        )

        with pytest.raises(NoQualifyingTransferError):
            await self._use_case(chain).execute(PROOF_HASH)

    async def test_no_logs_rejected(self, chain):
        chain.add_payment(logs=[])

        with pytest.raises(NoQualifyingTransferError):
            await self._use_case(chain).execute(PROOF_HASH)

    async def test_undecodable_logs_skipped(self, chain):
        """A non-Transfer log must not stop the scan."""
        chain.add_payment(
            logs=[
                approval_log(STABLECOIN),
                transfer_log(STABLECOIN, BUYER, STRANGER, 5 * ONE),
                transfer_log(STABLECOIN, BUYER, TREASURY, 100 * ONE),
            ]
        )

        result = await self._use_case(chain).execute(PROOF_HASH)

        assert result.amount_received == 100 * ONE
        assert chain.calls["decode_transfer_log"] == 3

    async def test_multiple_qualifying_transfers_summed(self, chain):
        chain.add_payment(
            logs=[
                transfer_log(STABLECOIN, BUYER, TREASURY, 60 * ONE),
                transfer_log(STABLECOIN, BUYER, TREASURY.lower(), 40 * ONE),
            ]
        )

        result = await self._use_case(chain).execute(PROOF_HASH)

        assert result.amount_received == 100 * ONE
        assert len(result.transfers) == 2

    async def test_transport_error_propagates(self, chain):
        chain.errors["get_transaction"] = ChainTransportError(
            "get_transaction", "TimeoutError: no detail"
        )

        with pytest.raises(ChainTransportError):
            await self._use_case(chain).execute(PROOF_HASH)
