"""
Chain transaction snapshots.

Read-only views of what the node reported; the chain client owns the
real objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class TransactionStatus(str, Enum):
    """Execution status of a transaction."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ChainTransaction:
    """
    Snapshot of a transaction and, once mined, its receipt.

    Attributes:
        tx_hash: 0x-prefixed transaction hash
        sender: Address that signed the transaction
        to: Direct recipient (contract called), None for deployments
        status: Execution status
        logs: Raw receipt log entries, in emission order
        block_number: Inclusion block, None while pending
    """

    tx_hash: str
    sender: Optional[str]
    to: Optional[str]
    status: TransactionStatus = TransactionStatus.PENDING
    logs: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    block_number: Optional[int] = None

    @property
    def is_successful(self) -> bool:
        """Check if transaction executed successfully."""
        return self.status == TransactionStatus.SUCCESS


@dataclass(frozen=True)
class TransferEvent:
    """
    Decoded ERC-20 Transfer(from, to, value) log entry.

    Attributes:
        token: Contract that emitted the event
        sender: Transfer source
        recipient: Transfer destination
        value: Amount in the token's smallest unit
    """

    token: str
    sender: str
    recipient: str
    value: int
