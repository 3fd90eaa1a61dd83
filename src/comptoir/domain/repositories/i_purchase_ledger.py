"""
Purchase ledger repository interface.

Append-only record of payment proofs that have been consumed.
"""

from abc import ABC, abstractmethod
from typing import Optional

from comptoir.domain.entities.purchase_record import PurchaseRecord


class IPurchaseLedger(ABC):
    """
    Abstract interface for the consumed-proof ledger.

    reserve() must be an atomic put-if-absent so that two concurrent
    requests presenting the same proof cannot both proceed.
    """

    @abstractmethod
    async def get(self, proof_tx_hash: str) -> Optional[PurchaseRecord]:
        """
        Get ledger entry for a proof hash.

        Args:
            proof_tx_hash: Payment proof transaction hash

        Returns:
            PurchaseRecord if present, None otherwise
        """

    @abstractmethod
    async def reserve(self, record: PurchaseRecord) -> bool:
        """
        Insert a RESERVED record if no entry exists for its proof hash.

        Args:
            record: Record to insert

        Returns:
            True if reserved, False if the proof hash is already present
        """

    @abstractmethod
    async def save(self, record: PurchaseRecord) -> None:
        """
        Overwrite the entry for a proof hash with a newer status.

        Args:
            record: Updated record
        """

    @abstractmethod
    async def release(self, proof_tx_hash: str) -> None:
        """
        Drop a RESERVED entry so the proof can be presented again.

        Entries past RESERVED are never released.

        Args:
            proof_tx_hash: Payment proof transaction hash
        """
