"""
Utility functions for Comptoir.
"""

from comptoir.utils.units import format_units, to_smallest_unit
from comptoir.utils.validation import (
    is_evm_address,
    is_tx_hash,
    parse_positive_decimal,
)

__all__ = [
    "format_units",
    "to_smallest_unit",
    "is_evm_address",
    "is_tx_hash",
    "parse_positive_decimal",
]
