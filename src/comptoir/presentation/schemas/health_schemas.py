"""
Health response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Treasury health response schema."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    chain_id: int = Field(..., alias="chainId")
    admin_wallet: str = Field(..., alias="adminWallet")
    mzlx_balance: str = Field(..., alias="mzlxBalance")
    network: str
    last_checked: datetime = Field(..., alias="lastChecked")
