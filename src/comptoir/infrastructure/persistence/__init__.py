"""
Purchase ledger implementations.
"""

from comptoir.infrastructure.persistence.in_memory_purchase_ledger import (
    InMemoryPurchaseLedger,
)
from comptoir.infrastructure.persistence.redis_purchase_ledger import (
    RedisPurchaseLedger,
)

__all__ = [
    "InMemoryPurchaseLedger",
    "RedisPurchaseLedger",
]
