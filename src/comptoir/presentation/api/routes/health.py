"""
Health check API routes.

Reports treasury balance read fresh from the chain.
"""

from fastapi import APIRouter, Depends

from comptoir.application.use_cases.get_treasury_health import GetTreasuryHealth
from comptoir.di.dependencies import get_get_treasury_health
from comptoir.infrastructure.monitoring import metrics
from comptoir.presentation.schemas.health_schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(
    get_treasury_health: GetTreasuryHealth = Depends(get_get_treasury_health),
):
    """
    Treasury health endpoint.

    BalanceUnavailableError propagates to the global handler (HTTP 500).
    """
    report = await get_treasury_health.execute()
    metrics.treasury_balance.set(float(report.formatted_balance))

    response = HealthResponse(
        status=report.status,
        chain_id=report.chain_id,
        admin_wallet=report.admin_wallet,
        mzlx_balance=report.formatted_balance,
        network=report.network,
        last_checked=report.last_checked,
    )
    return response.model_dump(by_alias=True, mode="json")
