"""
Verify Payment Transfer use case.

Establishes from a transaction hash alone that the buyer really paid
stablecoin into the treasury.
"""

import logging
from dataclasses import dataclass
from typing import List

from comptoir.domain.entities.chain_transaction import TransferEvent
from comptoir.domain.exceptions import (
    NoQualifyingTransferError,
    NotStablecoinTransactionError,
    TransactionFailedError,
    TransactionNotFoundError,
)
from comptoir.domain.services.i_chain_client import IChainClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedPayment:
    """
    Result of a successful payment verification.

    Attributes:
        tx_hash: Proof transaction hash
        payer: Address that signed the proof transaction
        amount_received: Sum of qualifying transfers, in stablecoin smallest units
        transfers: Qualifying transfer events
    """

    tx_hash: str
    payer: str
    amount_received: int
    transfers: List[TransferEvent]


class VerifyPaymentTransfer:
    """
    Verify a stablecoin payment to the treasury.

    Business rules:
    - Transaction must exist and be mined with success status
    - Transaction must call the stablecoin contract directly
    - At least one Transfer log emitted by the stablecoin contract
      must credit the treasury receiving address
    - Logs that do not decode are skipped, never fatal
    """

    def __init__(
        self,
        chain_client: IChainClient,
        stablecoin_address: str,
        receiver_address: str,
        stablecoin_symbol: str = "USDT",
    ):
        """
        Initialize use case with dependencies.

        Args:
            chain_client: Chain access
            stablecoin_address: Stablecoin contract accepted as payment
            receiver_address: Treasury address that must be credited
            stablecoin_symbol: Symbol used in rejection messages
        """
        self.chain_client = chain_client
        self.stablecoin_address = stablecoin_address
        self.receiver_address = receiver_address
        self.stablecoin_symbol = stablecoin_symbol

    async def execute(self, tx_hash: str) -> VerifiedPayment:
        """
        Execute payment verification.

        Args:
            tx_hash: Buyer-submitted proof transaction hash

        Returns:
            VerifiedPayment with qualifying transfers

        Raises:
            TransactionNotFoundError: If the node does not know the hash
            TransactionFailedError: If the transaction reverted
            NotStablecoinTransactionError: If it did not call the stablecoin
            NoQualifyingTransferError: If no transfer credits the treasury
            ChainTransportError: If the node is unreachable or too slow
        """
        # 1. Transaction must exist
        transaction = await self.chain_client.get_transaction(tx_hash)
        if transaction is None:
            raise TransactionNotFoundError(tx_hash)

        # 2. Wait for inclusion and check status
        mined = await self.chain_client.wait_for_receipt(tx_hash)
        if not mined.is_successful:
            raise TransactionFailedError(tx_hash)

        # 3. Direct recipient must be the stablecoin contract
        called = transaction.to or mined.to
        if not called or called.lower() != self.stablecoin_address.lower():
            raise NotStablecoinTransactionError(tx_hash, self.stablecoin_symbol)

        # 4. Some Transfer log must credit the treasury
        qualifying = []
        for log in mined.logs:
            event = self.chain_client.decode_transfer_log(log)
            if event is None:
                continue
            if self._is_qualifying(event):
                qualifying.append(event)

        if not qualifying:
            raise NoQualifyingTransferError(tx_hash, self.receiver_address)

        amount_received = sum(event.value for event in qualifying)
        logger.info(
            "Payment verified",
            extra={
                "proof_tx_hash": tx_hash,
                "payer": transaction.sender,
                "amount_received": str(amount_received),
            },
        )

        return VerifiedPayment(
            tx_hash=tx_hash,
            payer=transaction.sender or "",
            amount_received=amount_received,
            transfers=qualifying,
        )

    def _is_qualifying(self, event: TransferEvent) -> bool:
        """Transfer emitted by the stablecoin and credited to the treasury."""
        return (
            event.token.lower() == self.stablecoin_address.lower()
            and event.recipient.lower() == self.receiver_address.lower()
        )
