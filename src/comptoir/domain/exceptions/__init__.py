"""
Domain exceptions package.
"""

# Base exceptions
from comptoir.domain.exceptions.base import ComptoirException

# Blockchain exceptions
from comptoir.domain.exceptions.blockchain import (
    BalanceUnavailableError,
    BlockchainError,
    ChainTransportError,
    NoQualifyingTransferError,
    NotStablecoinTransactionError,
    ProofAlreadyConsumedError,
    TransactionFailedError,
    TransactionNotFoundError,
    VerificationRejection,
)

# Settlement exceptions
from comptoir.domain.exceptions.settlement import (
    InsufficientReserveError,
    PayoutFailedError,
    ReserveRejection,
)

# Input exceptions
from comptoir.domain.exceptions.validation import (
    InputRejection,
    InvalidAddressError,
    InvalidAmountError,
    InvalidTransactionHashError,
)

__all__ = [
    # Base
    "ComptoirException",
    # Input
    "InputRejection",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidTransactionHashError",
    # Blockchain
    "BlockchainError",
    "VerificationRejection",
    "TransactionNotFoundError",
    "TransactionFailedError",
    "NotStablecoinTransactionError",
    "NoQualifyingTransferError",
    "ProofAlreadyConsumedError",
    "ChainTransportError",
    "BalanceUnavailableError",
    # Settlement
    "ReserveRejection",
    "InsufficientReserveError",
    "PayoutFailedError",
]
