"""
Dependency Injection Container for Comptoir.

Manages all service instances and their dependencies.
"""

import asyncio
from typing import Optional

from comptoir.application.use_cases.check_treasury_reserve import (
    CheckTreasuryReserve,
)
from comptoir.application.use_cases.get_treasury_health import GetTreasuryHealth
from comptoir.application.use_cases.settle_purchase import SettlePurchase
from comptoir.application.use_cases.verify_payment_transfer import (
    VerifyPaymentTransfer,
)
from comptoir.config.settings import Settings, get_settings
from comptoir.domain.repositories.i_purchase_ledger import IPurchaseLedger
from comptoir.domain.services.i_chain_client import IChainClient
from comptoir.infrastructure.blockchain.evm_chain_client import EvmChainClient
from comptoir.infrastructure.monitoring.keep_alive import KeepAlivePinger
from comptoir.infrastructure.persistence.in_memory_purchase_ledger import (
    InMemoryPurchaseLedger,
)
from comptoir.infrastructure.persistence.redis_purchase_ledger import (
    RedisPurchaseLedger,
)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of all services and repositories.
    The purchase use case is a singleton too: every request must share
    the same treasury lock.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize container with None instances."""
        self._settings = settings

        # Infrastructure
        self._chain_client: Optional[IChainClient] = None
        self._purchase_ledger: Optional[IPurchaseLedger] = None
        self._keep_alive: Optional[KeepAlivePinger] = None
        self._treasury_lock: Optional[asyncio.Lock] = None

        # Use cases
        self._settle_purchase: Optional[SettlePurchase] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def initialize(self) -> None:
        """Initialize services and establish connections."""
        if isinstance(self.purchase_ledger, RedisPurchaseLedger):
            await self.purchase_ledger.connect()

        if self.settings.KEEP_ALIVE_ENABLED:
            self.keep_alive.start()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._keep_alive:
            await self._keep_alive.stop()

        if isinstance(self._purchase_ledger, RedisPurchaseLedger):
            await self._purchase_ledger.disconnect()

        if self._chain_client:
            await self._chain_client.close()

    # Infrastructure Getters

    @property
    def chain_client(self) -> IChainClient:
        """Get EVM chain client instance."""
        if self._chain_client is None:
            settings = self.settings
            self._chain_client = EvmChainClient(
                rpc_url=settings.RPC_URL,
                private_key=settings.ADMIN_PRIVATE_KEY.get_secret_value(),
                chain_id=settings.CHAIN_ID,
                request_timeout=settings.RPC_TIMEOUT_SECONDS,
                receipt_timeout=settings.RECEIPT_TIMEOUT_SECONDS,
                poll_interval=settings.RECEIPT_POLL_INTERVAL_SECONDS,
                max_retries=settings.RETRY_MAX_ATTEMPTS,
            )
        return self._chain_client

    @property
    def purchase_ledger(self) -> IPurchaseLedger:
        """Get purchase ledger (Redis if enabled, in-memory otherwise)."""
        if self._purchase_ledger is None:
            settings = self.settings
            if settings.REDIS_ENABLED:
                self._purchase_ledger = RedisPurchaseLedger(
                    host=settings.REDIS_HOST,
                    port=settings.REDIS_PORT,
                    db=settings.REDIS_DB,
                    password=(
                        settings.REDIS_PASSWORD.get_secret_value()
                        if settings.REDIS_PASSWORD
                        else None
                    ),
                    key_prefix=settings.LEDGER_KEY_PREFIX,
                )
            else:
                self._purchase_ledger = InMemoryPurchaseLedger()
        return self._purchase_ledger

    @property
    def keep_alive(self) -> KeepAlivePinger:
        """Get keep-alive pinger instance."""
        if self._keep_alive is None:
            self._keep_alive = KeepAlivePinger(
                url=self.settings.keep_alive_url,
                interval_seconds=self.settings.KEEP_ALIVE_INTERVAL_SECONDS,
            )
        return self._keep_alive

    @property
    def treasury_lock(self) -> asyncio.Lock:
        """Lock serializing reserve check and payout."""
        if self._treasury_lock is None:
            self._treasury_lock = asyncio.Lock()
        return self._treasury_lock

    # Use Case Getters

    def get_verify_payment_transfer(self) -> VerifyPaymentTransfer:
        """Get verify payment transfer use case."""
        return VerifyPaymentTransfer(
            chain_client=self.chain_client,
            stablecoin_address=self.settings.STABLECOIN_ADDRESS,
            receiver_address=self.settings.receiver_address,
            stablecoin_symbol=self.settings.STABLECOIN_SYMBOL,
        )

    def get_check_treasury_reserve(self) -> CheckTreasuryReserve:
        """Get check treasury reserve use case."""
        return CheckTreasuryReserve(
            chain_client=self.chain_client,
            token_address=self.settings.PAYOUT_TOKEN_ADDRESS,
            treasury_address=self.chain_client.admin_address,
            token_symbol=self.settings.PAYOUT_TOKEN_SYMBOL,
        )

    def get_settle_purchase(self) -> SettlePurchase:
        """Get settle purchase use case (shared instance)."""
        if self._settle_purchase is None:
            self._settle_purchase = SettlePurchase(
                chain_client=self.chain_client,
                verify_payment=self.get_verify_payment_transfer(),
                check_reserve=self.get_check_treasury_reserve(),
                purchase_ledger=self.purchase_ledger,
                treasury_lock=self.treasury_lock,
                payout_token_address=self.settings.PAYOUT_TOKEN_ADDRESS,
                require_proof=self.settings.REQUIRE_PAYMENT_PROOF,
                stablecoin_symbol=self.settings.STABLECOIN_SYMBOL,
                payout_token_symbol=self.settings.PAYOUT_TOKEN_SYMBOL,
            )
        return self._settle_purchase

    def get_get_treasury_health(self) -> GetTreasuryHealth:
        """Get treasury health use case."""
        return GetTreasuryHealth(
            chain_client=self.chain_client,
            token_address=self.settings.PAYOUT_TOKEN_ADDRESS,
            chain_id=self.settings.CHAIN_ID,
            network=self.settings.NETWORK,
        )


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace global DI container (None resets it)."""
    global _container
    _container = container


async def initialize_container(settings: Optional[Settings] = None) -> DIContainer:
    """Initialize and return DI container."""
    if settings is not None:
        set_container(DIContainer(settings))
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()
