"""
In-memory purchase ledger.

Single-process ledger used when Redis is disabled and in tests.
Entries do not survive a restart.
"""

import asyncio
import copy
from typing import Dict, Optional

from comptoir.domain.entities.purchase_record import (
    PurchaseRecord,
    PurchaseRecordStatus,
)
from comptoir.domain.repositories.i_purchase_ledger import IPurchaseLedger


class InMemoryPurchaseLedger(IPurchaseLedger):
    """Dict-backed ledger guarded by an asyncio lock."""

    def __init__(self):
        self._records: Dict[str, PurchaseRecord] = {}
        self._lock = asyncio.Lock()

    async def get(self, proof_tx_hash: str) -> Optional[PurchaseRecord]:
        async with self._lock:
            record = self._records.get(proof_tx_hash.lower())
            return copy.copy(record) if record else None

    async def reserve(self, record: PurchaseRecord) -> bool:
        key = record.proof_tx_hash.lower()
        async with self._lock:
            if key in self._records:
                return False
            self._records[key] = copy.copy(record)
            return True

    async def save(self, record: PurchaseRecord) -> None:
        async with self._lock:
            self._records[record.proof_tx_hash.lower()] = copy.copy(record)

    async def release(self, proof_tx_hash: str) -> None:
        key = proof_tx_hash.lower()
        async with self._lock:
            record = self._records.get(key)
            if record and record.status == PurchaseRecordStatus.RESERVED:
                del self._records[key]

    def __len__(self) -> int:
        return len(self._records)
