"""
Input rejections.

Raised for malformed buyer input, always before any chain access.
"""

from comptoir.domain.exceptions.base import ComptoirException


class InputRejection(ComptoirException):
    """Base exception for malformed purchase input."""


class InvalidAddressError(InputRejection):
    """Raised when the buyer wallet address is malformed."""

    def __init__(self, address: object = None):
        super().__init__("Invalid wallet address", code="INVALID_ADDRESS")
        self.address = address


class InvalidAmountError(InputRejection):
    """Raised when an amount is non-numeric, non-positive or too precise."""

    def __init__(self, field: str, reason: str = None):
        message = f"Invalid {field} amount"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="INVALID_AMOUNT", details={"field": field})
        self.field = field


class InvalidTransactionHashError(InputRejection):
    """Raised when the payment proof hash is missing or malformed."""

    def __init__(self):
        super().__init__("Invalid transaction hash", code="INVALID_TX_HASH")
