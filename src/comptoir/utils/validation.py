"""
Validation utility functions for Comptoir.

Provides format checks for EVM addresses, transaction hashes and
buyer-submitted amounts.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")
TX_HASH_PATTERN = re.compile(r"0x[0-9a-fA-F]{64}")


def is_evm_address(address: Any) -> bool:
    """
    Validate EVM address format.

    Checksum-agnostic: any casing of 0x followed by 40 hex characters
    is accepted.

    Args:
        address: Candidate address

    Returns:
        True if valid format, False otherwise

    Examples:
        >>> is_evm_address("0x55d398326f99059ff775485246999027b3197955")
        True
        >>> is_evm_address("0x1234")
        False
    """
    if not isinstance(address, str):
        return False
    return bool(ADDRESS_PATTERN.fullmatch(address))


def is_tx_hash(tx_hash: Any) -> bool:
    """
    Validate transaction hash format (0x + 64 hex characters).

    Args:
        tx_hash: Candidate hash

    Returns:
        True if valid format, False otherwise
    """
    if not isinstance(tx_hash, str):
        return False
    return bool(TX_HASH_PATTERN.fullmatch(tx_hash))


def parse_positive_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a JSON number or numeric string into a positive finite Decimal.

    Args:
        value: Raw amount from the request body

    Returns:
        Decimal amount, or None if the value is not a positive finite number
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str, Decimal)):
        return None

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None

    if not amount.is_finite() or amount <= 0:
        return None
    return amount
