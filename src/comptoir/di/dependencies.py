"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
"""

from comptoir.application.use_cases.get_treasury_health import GetTreasuryHealth
from comptoir.application.use_cases.settle_purchase import SettlePurchase
from comptoir.di.container import get_container


def get_settle_purchase() -> SettlePurchase:
    """Get SettlePurchase use case dependency."""
    return get_container().get_settle_purchase()


def get_get_treasury_health() -> GetTreasuryHealth:
    """Get GetTreasuryHealth use case dependency."""
    return get_container().get_get_treasury_health()
