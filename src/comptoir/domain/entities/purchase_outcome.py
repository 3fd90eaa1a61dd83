"""
Purchase outcome entity.

Terminal result of one purchase request.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from comptoir.domain.exceptions import ComptoirException


class OutcomeKind(str, Enum):
    """Purchase outcome variants."""

    SUCCESS = "success"
    REJECTED = "rejected"
    CHAIN_ERROR = "chain_error"


@dataclass(frozen=True)
class PurchaseOutcome:
    """
    Tagged purchase result: success, rejection or chain error.

    Success carries the payout transaction and echoed amounts.
    Rejected and chain error carry a machine-checkable reason code
    plus context details for the caller.
    """

    kind: OutcomeKind
    message: str
    reason_code: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    payout_tx_hash: Optional[str] = None
    receiver: Optional[str] = None
    payout_amount: Optional[Decimal] = None
    stable_amount: Optional[Decimal] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_success(self) -> bool:
        """Check if the payout was confirmed."""
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(
        cls,
        payout_tx_hash: str,
        receiver: str,
        payout_amount: Decimal,
        stable_amount: Decimal,
        message: str,
    ) -> "PurchaseOutcome":
        """Build a success outcome."""
        return cls(
            kind=OutcomeKind.SUCCESS,
            message=message,
            payout_tx_hash=payout_tx_hash,
            receiver=receiver,
            payout_amount=payout_amount,
            stable_amount=stable_amount,
        )

    @classmethod
    def rejected(cls, error: ComptoirException) -> "PurchaseOutcome":
        """Build a rejection outcome from a domain exception."""
        return cls(
            kind=OutcomeKind.REJECTED,
            message=error.message,
            reason_code=error.code,
            details=dict(error.details),
        )

    @classmethod
    def chain_error(cls, error: ComptoirException) -> "PurchaseOutcome":
        """Build a chain error outcome from a domain exception."""
        return cls(
            kind=OutcomeKind.CHAIN_ERROR,
            message=error.message,
            reason_code=error.code,
            details=dict(error.details),
        )
