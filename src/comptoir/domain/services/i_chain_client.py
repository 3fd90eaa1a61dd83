"""
Chain client interface.

Defines the blockchain capabilities the purchase flow relies on.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from comptoir.domain.entities.chain_transaction import (
    ChainTransaction,
    TransferEvent,
)


class IChainClient(ABC):
    """
    Abstract interface for read and signing access to an EVM node.

    All network methods may raise ChainTransportError when the node
    cannot be reached, which is distinct from an on-chain failure status.
    """

    @property
    @abstractmethod
    def admin_address(self) -> str:
        """Address of the signing (treasury) account."""

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> Optional[ChainTransaction]:
        """
        Fetch a transaction by hash.

        Args:
            tx_hash: 0x-prefixed transaction hash

        Returns:
            Pending ChainTransaction snapshot, or None if unknown to the node
        """

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str) -> ChainTransaction:
        """
        Wait until a transaction is mined and return it with its receipt.

        Args:
            tx_hash: 0x-prefixed transaction hash

        Returns:
            ChainTransaction with final status and receipt logs

        Raises:
            ChainTransportError: If not mined within the configured timeout
        """

    @abstractmethod
    async def get_token_balance(self, token_address: str, owner: str) -> int:
        """
        Read an ERC-20 balance.

        Args:
            token_address: Token contract
            owner: Account to query

        Returns:
            Balance in smallest units
        """

    @abstractmethod
    async def get_token_decimals(self, token_address: str) -> int:
        """
        Read an ERC-20 decimals() value.

        Args:
            token_address: Token contract

        Returns:
            Decimal precision
        """

    @abstractmethod
    def decode_transfer_log(self, log: Mapping[str, Any]) -> Optional[TransferEvent]:
        """
        Decode a raw log entry against the ERC-20 Transfer event.

        Args:
            log: Raw receipt log entry

        Returns:
            TransferEvent, or None if the entry is not a Transfer event
        """

    @abstractmethod
    async def submit_token_transfer(
        self,
        token_address: str,
        recipient: str,
        amount: int,
    ) -> str:
        """
        Sign and broadcast an ERC-20 transfer from the admin account.

        Args:
            token_address: Token contract
            recipient: Destination address
            amount: Amount in smallest units

        Returns:
            0x-prefixed hash of the submitted transaction
        """

    async def close(self) -> None:
        """Release network resources."""
