"""
API request/response schemas.
"""

from comptoir.presentation.schemas.health_schemas import HealthResponse
from comptoir.presentation.schemas.purchase_schemas import (
    PurchaseRequestBody,
    PurchaseSuccessResponse,
)

__all__ = [
    "HealthResponse",
    "PurchaseRequestBody",
    "PurchaseSuccessResponse",
]
