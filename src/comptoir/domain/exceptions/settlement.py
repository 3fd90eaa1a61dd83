"""
Settlement exceptions.
"""

from comptoir.domain.exceptions.base import ComptoirException


class ReserveRejection(ComptoirException):
    """Base exception for payouts the treasury cannot cover."""


class InsufficientReserveError(ReserveRejection):
    """Raised when the treasury holds less than the requested payout."""

    def __init__(self, available: str, required: str, symbol: str = "MZLx"):
        """
        Initialize insufficient reserve error.

        Args:
            available: Treasury balance, human-readable
            required: Requested payout, human-readable
            symbol: Payout token symbol
        """
        super().__init__(
            f"Insufficient {symbol} balance in treasury",
            code="INSUFFICIENT_RESERVE",
            details={"available": available, "required": required},
        )
        self.available = available
        self.required = required


class PayoutFailedError(ComptoirException):
    """
    Raised when a submitted payout is mined with a failure status.

    Funds may be in an indeterminate state; requires manual reconciliation.
    """

    def __init__(self, payout_tx_hash: str):
        super().__init__(
            "Token transfer failed",
            code="PAYOUT_FAILED",
            details={"payoutTxHash": payout_tx_hash},
        )
        self.payout_tx_hash = payout_tx_hash
