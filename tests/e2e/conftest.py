"""
E2E fixtures: FastAPI app wired to the fake chain.
"""

import httpx
import pytest_asyncio

from comptoir.di.container import set_container
from comptoir.di.dependencies import get_get_treasury_health, get_settle_purchase
from comptoir.main import create_app


@pytest_asyncio.fixture
async def app(settings, settle_purchase, treasury_health):
    """App with use cases overridden to run against the fake chain."""
    application = create_app(settings)
    application.dependency_overrides[get_settle_purchase] = lambda: settle_purchase
    application.dependency_overrides[get_get_treasury_health] = (
        lambda: treasury_health
    )
    yield application
    application.dependency_overrides.clear()
    set_container(None)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
