"""
Purchase record entity.

Ledger entry mapping a consumed payment proof to its payout.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class PurchaseRecordStatus(str, Enum):
    """Lifecycle of a consumed payment proof."""

    RESERVED = "reserved"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    INDETERMINATE = "indeterminate"


@dataclass
class PurchaseRecord:
    """
    Ledger entry for one payment proof.

    A RESERVED record may be released if the purchase is rejected
    before payout. Any later status marks the proof consumed for good.
    """

    proof_tx_hash: str
    status: PurchaseRecordStatus = PurchaseRecordStatus.RESERVED
    buyer_address: Optional[str] = None
    payout_tx_hash: Optional[str] = None
    payout_amount: Optional[str] = None
    stable_amount: Optional[str] = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data = asdict(self)
        data["status"] = self.status.value
        data["updated_at"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PurchaseRecord":
        """Deserialize from dict produced by to_dict()."""
        return cls(
            proof_tx_hash=data["proof_tx_hash"],
            status=PurchaseRecordStatus(data["status"]),
            buyer_address=data.get("buyer_address"),
            payout_tx_hash=data.get("payout_tx_hash"),
            payout_amount=data.get("payout_amount"),
            stable_amount=data.get("stable_amount"),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
