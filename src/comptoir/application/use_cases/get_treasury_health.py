"""
Get Treasury Health use case.

Read-only snapshot of treasury balance and chain identity.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from comptoir.domain.entities.treasury_state import TreasuryState
from comptoir.domain.exceptions import BalanceUnavailableError, ChainTransportError
from comptoir.domain.services.i_chain_client import IChainClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreasuryHealth:
    """
    Treasury health report.

    Attributes:
        status: Service status ("active")
        chain_id: Chain the treasury lives on
        network: Human-readable network name
        admin_wallet: Treasury (signing) address
        treasury: Fresh treasury state
        last_checked: When the balance was read
    """

    status: str
    chain_id: int
    network: str
    admin_wallet: str
    treasury: TreasuryState
    last_checked: datetime

    @property
    def formatted_balance(self) -> str:
        """Human-readable payout token balance."""
        return self.treasury.formatted_balance


class GetTreasuryHealth:
    """Report payout token balance held by the treasury."""

    def __init__(
        self,
        chain_client: IChainClient,
        token_address: str,
        chain_id: int,
        network: str,
    ):
        self.chain_client = chain_client
        self.token_address = token_address
        self.chain_id = chain_id
        self.network = network

    async def execute(self) -> TreasuryHealth:
        """
        Execute health check.

        Returns:
            TreasuryHealth with fresh balance

        Raises:
            BalanceUnavailableError: If balance or decimals cannot be read
        """
        admin_wallet = self.chain_client.admin_address

        try:
            balance = await self.chain_client.get_token_balance(
                self.token_address, admin_wallet
            )
            decimals = await self.chain_client.get_token_decimals(self.token_address)
        except ChainTransportError as e:
            logger.warning(f"Treasury balance unavailable: {e.detail}")
            raise BalanceUnavailableError(e.detail)

        return TreasuryHealth(
            status="active",
            chain_id=self.chain_id,
            network=self.network,
            admin_wallet=admin_wallet,
            treasury=TreasuryState(token_balance=balance, decimals=decimals),
            last_checked=datetime.now(timezone.utc),
        )
