"""
Purchase request/response schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PurchaseRequestBody(BaseModel):
    """
    Raw purchase request.

    Fields are untyped on purpose: format and range checks belong to
    the purchase flow so every rejection carries its own reason code.
    """

    model_config = ConfigDict(populate_by_name=True)

    wallet_address: Optional[Any] = Field(
        default=None, alias="walletAddress", description="Buyer wallet (0x...)"
    )
    usdt_amount: Optional[Any] = Field(
        default=None, alias="usdtAmount", description="Stablecoin amount paid"
    )
    mzlx_amount: Optional[Any] = Field(
        default=None, alias="mzlxAmount", description="Tokens requested"
    )
    tx_hash: Optional[Any] = Field(
        default=None, alias="txHash", description="Stablecoin transfer hash"
    )


class PurchaseSuccessResponse(BaseModel):
    """Confirmed purchase response schema."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    mzlx_tx_hash: str = Field(..., alias="mzlxTxHash")
    mzlx_amount: str = Field(..., alias="mzlxAmount")
    usdt_amount: str = Field(..., alias="usdtAmount")
    receiver: str
    timestamp: datetime

