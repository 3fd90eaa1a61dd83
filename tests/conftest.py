"""
Test fixtures and configuration.
"""

import asyncio

import pytest

from comptoir.application.use_cases.check_treasury_reserve import (
    CheckTreasuryReserve,
)
from comptoir.application.use_cases.get_treasury_health import GetTreasuryHealth
from comptoir.application.use_cases.settle_purchase import SettlePurchase
from comptoir.application.use_cases.verify_payment_transfer import (
    VerifyPaymentTransfer,
)
from comptoir.config.settings import Settings
from comptoir.infrastructure.persistence.in_memory_purchase_ledger import (
    InMemoryPurchaseLedger,
)
from tests.helpers.fake_chain import (
    ONE,
    PAYOUT_TOKEN,
    STABLECOIN,
    TREASURY,
    FakeChainClient,
)

ADMIN_KEY = "11" * 32


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: no keep-alive, no Redis."""
    return Settings(
        ADMIN_PRIVATE_KEY=ADMIN_KEY,
        ENV="test",
        KEEP_ALIVE_ENABLED=False,
        REDIS_ENABLED=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def chain() -> FakeChainClient:
    """Fake chain with a treasury holding 1000 payout tokens."""
    fake = FakeChainClient()
    fake.set_balance(PAYOUT_TOKEN, TREASURY, 1000 * ONE)
    return fake


@pytest.fixture
def ledger() -> InMemoryPurchaseLedger:
    return InMemoryPurchaseLedger()


@pytest.fixture
def settle_purchase(chain, ledger) -> SettlePurchase:
    """SettlePurchase wired to the fake chain and in-memory ledger."""
    return SettlePurchase(
        chain_client=chain,
        verify_payment=VerifyPaymentTransfer(
            chain_client=chain,
            stablecoin_address=STABLECOIN,
            receiver_address=TREASURY,
        ),
        check_reserve=CheckTreasuryReserve(
            chain_client=chain,
            token_address=PAYOUT_TOKEN,
            treasury_address=TREASURY,
        ),
        purchase_ledger=ledger,
        treasury_lock=asyncio.Lock(),
        payout_token_address=PAYOUT_TOKEN,
    )


@pytest.fixture
def treasury_health(chain) -> GetTreasuryHealth:
    return GetTreasuryHealth(
        chain_client=chain,
        token_address=PAYOUT_TOKEN,
        chain_id=56,
        network="BNB Smart Chain",
    )
