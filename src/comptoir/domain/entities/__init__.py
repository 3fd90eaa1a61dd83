"""
Domain entities.
"""

from comptoir.domain.entities.chain_transaction import (
    ChainTransaction,
    TransactionStatus,
    TransferEvent,
)
from comptoir.domain.entities.purchase_outcome import OutcomeKind, PurchaseOutcome
from comptoir.domain.entities.purchase_record import (
    PurchaseRecord,
    PurchaseRecordStatus,
)
from comptoir.domain.entities.treasury_state import TreasuryState

__all__ = [
    "ChainTransaction",
    "TransactionStatus",
    "TransferEvent",
    "OutcomeKind",
    "PurchaseOutcome",
    "PurchaseRecord",
    "PurchaseRecordStatus",
    "TreasuryState",
]
