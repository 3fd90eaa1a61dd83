"""
Settle Purchase use case.

Validates a purchase, verifies the stablecoin payment, checks the
treasury reserve and pays out tokens.
CRITICAL: Moves funds. Each payment proof pays out at most once.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from comptoir.application.use_cases.check_treasury_reserve import (
    CheckTreasuryReserve,
)
from comptoir.application.use_cases.verify_payment_transfer import (
    VerifyPaymentTransfer,
)
from comptoir.domain.entities.purchase_outcome import PurchaseOutcome
from comptoir.domain.entities.purchase_record import (
    PurchaseRecord,
    PurchaseRecordStatus,
)
from comptoir.domain.exceptions import (
    ChainTransportError,
    ComptoirException,
    InputRejection,
    PayoutFailedError,
    ProofAlreadyConsumedError,
    ReserveRejection,
    VerificationRejection,
)
from comptoir.domain.repositories.i_purchase_ledger import IPurchaseLedger
from comptoir.domain.services.i_chain_client import IChainClient
from comptoir.domain.value_objects.purchase_request import (
    PurchaseRequest,
    parse_purchase_request,
)

logger = logging.getLogger(__name__)


class SettlePurchase:
    """
    Orchestrate one purchase from raw input to confirmed payout.

    Business rules:
    - Stages run in strict order: validate, reserve proof, verify,
      check reserve, pay out. Any rejection stops the flow before
      funds move.
    - A proof hash is reserved in the ledger before verification; a
      second request with the same proof is rejected.
    - Reserve check, payout submission and payout confirmation run
      under one treasury lock so concurrent purchases cannot both
      spend the same balance.
    - Nothing is retried. A failed payout is surfaced and logged for
      manual reconciliation.

    Architecture:
    - Returns a PurchaseOutcome instead of raising domain errors
    - Blockchain is the single source of truth for balances
    """

    def __init__(
        self,
        chain_client: IChainClient,
        verify_payment: VerifyPaymentTransfer,
        check_reserve: CheckTreasuryReserve,
        purchase_ledger: IPurchaseLedger,
        treasury_lock: asyncio.Lock,
        payout_token_address: str,
        require_proof: bool = True,
        stablecoin_symbol: str = "USDT",
        payout_token_symbol: str = "MZLx",
    ):
        """
        Initialize use case with dependencies.

        Args:
            chain_client: Chain access (payout submission)
            verify_payment: Payment verification use case
            check_reserve: Treasury reserve check use case
            purchase_ledger: Consumed-proof ledger
            treasury_lock: Serialization point shared by all purchases
            payout_token_address: Token paid out to buyers
            require_proof: Whether a payment proof hash is mandatory
            stablecoin_symbol: Stablecoin symbol for messages
            payout_token_symbol: Payout token symbol for messages
        """
        self.chain_client = chain_client
        self.verify_payment = verify_payment
        self.check_reserve = check_reserve
        self.purchase_ledger = purchase_ledger
        self.treasury_lock = treasury_lock
        self.payout_token_address = payout_token_address
        self.require_proof = require_proof
        self.stablecoin_symbol = stablecoin_symbol
        self.payout_token_symbol = payout_token_symbol

    async def execute(
        self,
        wallet_address: Any,
        stable_amount: Any,
        payout_amount: Any,
        tx_hash: Any = None,
    ) -> PurchaseOutcome:
        """
        Execute purchase settlement.

        Args:
            wallet_address: Raw buyer address
            stable_amount: Raw stablecoin amount paid
            payout_amount: Raw payout token amount requested
            tx_hash: Raw payment proof hash

        Returns:
            PurchaseOutcome (success, rejected or chain error)
        """
        # 1. Validate input (never touches the chain)
        try:
            request = parse_purchase_request(
                wallet_address,
                stable_amount,
                payout_amount,
                tx_hash,
                require_proof=self.require_proof,
                stable_symbol=self.stablecoin_symbol,
                payout_symbol=self.payout_token_symbol,
            )
        except InputRejection as e:
            return self._rejected(e)

        logger.info(
            "Purchase received",
            extra={
                "buyer": str(request.buyer_address),
                "payout_amount": str(request.payout_amount),
                "proof_tx_hash": request.proof_tx_hash,
            },
        )

        # 2. Reserve the proof hash
        proof = request.proof_tx_hash
        if proof is not None:
            reserved = await self.purchase_ledger.reserve(
                self._record(request, PurchaseRecordStatus.RESERVED)
            )
            if not reserved:
                return self._rejected(ProofAlreadyConsumedError(proof))

        release_proof = proof is not None
        payout_tx_hash: Optional[str] = None
        try:
            # 3. Verify the stablecoin payment
            if proof is not None:
                await self.verify_payment.execute(proof)

            async with self.treasury_lock:
                # 4. Check the treasury can cover the payout
                reserve = await self.check_reserve.execute(request.payout_amount)
                logger.info(
                    "Reserve checked",
                    extra={
                        "available": reserve.treasury.formatted_balance,
                        "amount_units": str(reserve.required),
                    },
                )

                # 5. Pay out; from here on the proof stays consumed
                release_proof = False
                payout_tx_hash = await self.chain_client.submit_token_transfer(
                    self.payout_token_address,
                    str(request.buyer_address),
                    reserve.required,
                )
                logger.info(
                    "Payout submitted",
                    extra={
                        "proof_tx_hash": proof,
                        "payout_tx_hash": payout_tx_hash,
                        "amount_units": str(reserve.required),
                    },
                )
                await self._update(
                    request, PurchaseRecordStatus.SUBMITTED, payout_tx_hash
                )

                mined = await self.chain_client.wait_for_receipt(payout_tx_hash)

            if not mined.is_successful:
                await self._update(request, PurchaseRecordStatus.FAILED, payout_tx_hash)
                raise PayoutFailedError(payout_tx_hash)

            await self._update(request, PurchaseRecordStatus.CONFIRMED, payout_tx_hash)
            logger.info(
                "Payout confirmed",
                extra={"proof_tx_hash": proof, "payout_tx_hash": payout_tx_hash},
            )

            return PurchaseOutcome.success(
                payout_tx_hash=payout_tx_hash,
                receiver=str(request.buyer_address),
                payout_amount=request.payout_amount,
                stable_amount=request.stable_amount,
                message=f"{self.payout_token_symbol} tokens sent successfully",
            )

        except (InputRejection, VerificationRejection, ReserveRejection) as e:
            return self._rejected(e)

        except PayoutFailedError as e:
            logger.error(
                "Payout failed on chain - manual reconciliation required",
                extra=self._reconciliation_context(request, e.payout_tx_hash),
            )
            return PurchaseOutcome.chain_error(e)

        except ChainTransportError as e:
            if release_proof:
                logger.warning(
                    "Chain unavailable during purchase",
                    extra={"operation": e.operation, "proof_tx_hash": proof},
                )
            else:
                await self._update(
                    request, PurchaseRecordStatus.INDETERMINATE, payout_tx_hash
                )
                logger.error(
                    "Chain unavailable after payout attempt - "
                    "manual reconciliation required",
                    extra=self._reconciliation_context(request, payout_tx_hash),
                )
            return PurchaseOutcome.chain_error(e)

        finally:
            if release_proof:
                await self.purchase_ledger.release(proof)

    def _rejected(self, error: ComptoirException) -> PurchaseOutcome:
        """Log and wrap a rejection."""
        logger.warning(
            f"Purchase rejected: {error.message}",
            extra={"reason_code": error.code},
        )
        return PurchaseOutcome.rejected(error)

    def _record(
        self,
        request: PurchaseRequest,
        status: PurchaseRecordStatus,
        payout_tx_hash: Optional[str] = None,
    ) -> PurchaseRecord:
        """Build ledger record for the request."""
        return PurchaseRecord(
            proof_tx_hash=request.proof_tx_hash,
            status=status,
            buyer_address=str(request.buyer_address),
            payout_tx_hash=payout_tx_hash,
            payout_amount=str(request.payout_amount),
            stable_amount=str(request.stable_amount),
            updated_at=datetime.now(timezone.utc),
        )

    async def _update(
        self,
        request: PurchaseRequest,
        status: PurchaseRecordStatus,
        payout_tx_hash: Optional[str],
    ) -> None:
        """Persist a ledger status change (proof-backed purchases only)."""
        if request.proof_tx_hash is None:
            return
        await self.purchase_ledger.save(self._record(request, status, payout_tx_hash))

    def _reconciliation_context(
        self, request: PurchaseRequest, payout_tx_hash: Optional[str]
    ) -> dict:
        """Fields needed to reconcile a payout by hand."""
        return {
            "proof_tx_hash": request.proof_tx_hash,
            "payout_tx_hash": payout_tx_hash,
            "buyer": str(request.buyer_address),
            "payout_amount": str(request.payout_amount),
        }
