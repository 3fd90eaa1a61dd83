"""
Domain value objects.
"""

from comptoir.domain.value_objects.purchase_request import (
    PurchaseRequest,
    parse_purchase_request,
)
from comptoir.domain.value_objects.wallet_address import WalletAddress

__all__ = ["PurchaseRequest", "WalletAddress", "parse_purchase_request"]
