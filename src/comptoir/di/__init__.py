"""
Dependency Injection module for Comptoir.

Provides container and dependency functions for FastAPI routes.
"""

from comptoir.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    set_container,
    shutdown_container,
)
from comptoir.di.dependencies import (
    get_get_treasury_health,
    get_settle_purchase,
)

__all__ = [
    # Container
    "DIContainer",
    "get_container",
    "set_container",
    "initialize_container",
    "shutdown_container",
    # Dependencies
    "get_settle_purchase",
    "get_get_treasury_health",
]
