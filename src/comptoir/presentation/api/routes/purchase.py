"""
Purchase API routes.
"""

from fastapi import APIRouter, Depends

from comptoir.application.use_cases.settle_purchase import SettlePurchase
from comptoir.di.dependencies import get_settle_purchase
from comptoir.infrastructure.monitoring import metrics
from comptoir.presentation.api.middleware.error_handler import error_response
from comptoir.presentation.schemas.purchase_schemas import (
    PurchaseRequestBody,
    PurchaseSuccessResponse,
)

router = APIRouter(tags=["Purchase"])


@router.post("/purchase")
async def purchase(
    body: PurchaseRequestBody,
    settle_purchase: SettlePurchase = Depends(get_settle_purchase),
):
    """
    Exchange a verified stablecoin payment for payout tokens.

    Flow:
    1. Validate wallet address, amounts and payment hash
    2. Verify the payment transaction on chain
    3. Check the treasury holds enough payout tokens
    4. Send tokens and wait for confirmation

    Returns:
        Payout transaction hash and echoed amounts on success,
        otherwise an error body with a reason code
    """
    outcome = await settle_purchase.execute(
        wallet_address=body.wallet_address,
        stable_amount=body.usdt_amount,
        payout_amount=body.mzlx_amount,
        tx_hash=body.tx_hash,
    )

    metrics.purchases_total.labels(
        outcome=outcome.kind.value,
        reason=outcome.reason_code or "none",
    ).inc()

    if not outcome.is_success:
        return error_response(outcome.message, outcome.reason_code, outcome.details)

    response = PurchaseSuccessResponse(
        message=outcome.message,
        mzlx_tx_hash=outcome.payout_tx_hash,
        mzlx_amount=str(outcome.payout_amount),
        usdt_amount=str(outcome.stable_amount),
        receiver=outcome.receiver,
        timestamp=outcome.timestamp,
    )
    return response.model_dump(by_alias=True, mode="json")
