"""
Blockchain-related exceptions.

Verification rejections describe chain data that contradicts the
buyer's payment proof. Transport errors describe a node that could
not answer at all.
"""

from comptoir.domain.exceptions.base import ComptoirException


class BlockchainError(ComptoirException):
    """Base exception for blockchain operations."""


class VerificationRejection(BlockchainError):
    """Base exception for payment proofs rejected by on-chain data."""


class TransactionNotFoundError(VerificationRejection):
    """Raised when the proof transaction does not exist on chain."""

    def __init__(self, tx_hash: str):
        """
        Initialize transaction not found error.

        Args:
            tx_hash: Transaction hash that was not found
        """
        super().__init__("Transaction not found", code="TX_NOT_FOUND")
        self.tx_hash = tx_hash


class TransactionFailedError(VerificationRejection):
    """Raised when the proof transaction was mined with a failure status."""

    def __init__(self, tx_hash: str):
        super().__init__("Transaction failed", code="TX_FAILED")
        self.tx_hash = tx_hash


class NotStablecoinTransactionError(VerificationRejection):
    """Raised when the proof transaction did not call the stablecoin contract."""

    def __init__(self, tx_hash: str, symbol: str = "USDT"):
        super().__init__(f"Not a {symbol} transaction", code="NOT_STABLECOIN_TX")
        self.tx_hash = tx_hash


class NoQualifyingTransferError(VerificationRejection):
    """Raised when no decoded transfer pays the treasury receiving address."""

    def __init__(self, tx_hash: str, receiver: str):
        super().__init__(
            "No qualifying transfer to the receiving address",
            code="NO_QUALIFYING_TRANSFER",
            details={"receiver": receiver},
        )
        self.tx_hash = tx_hash
        self.receiver = receiver


class ProofAlreadyConsumedError(VerificationRejection):
    """Raised when a proof transaction has already been used for a payout."""

    def __init__(self, tx_hash: str):
        super().__init__(
            "Transaction already used for a purchase",
            code="PROOF_ALREADY_CONSUMED",
        )
        self.tx_hash = tx_hash


class ChainTransportError(BlockchainError):
    """
    Raised when the chain node cannot be reached or does not answer in time.

    Says nothing about whether a submitted transaction will still land.
    """

    def __init__(self, operation: str, detail: str):
        """
        Initialize transport error.

        Args:
            operation: Chain operation that failed
            detail: Sanitized failure description (no RPC URL, no key)
        """
        super().__init__(
            f"Blockchain request failed: {operation}",
            code="CHAIN_UNAVAILABLE",
            details={"operation": operation, "detail": detail},
        )
        self.operation = operation
        self.detail = detail


class BalanceUnavailableError(BlockchainError):
    """Raised when the treasury balance cannot be read."""

    def __init__(self, detail: str):
        super().__init__(
            "Failed to fetch balance",
            code="BALANCE_UNAVAILABLE",
            details={"detail": detail},
        )
        self.detail = detail
