"""
Keep-alive self pinger.

Some hosts idle a service that receives no traffic. The pinger hits
the service's own health URL once at startup and then on a fixed
interval. A failed ping is logged and never stops the loop.
"""

import asyncio
import logging
from typing import Optional

import httpx

from comptoir.infrastructure.monitoring import metrics

logger = logging.getLogger(__name__)


class KeepAlivePinger:
    """Background task that GETs a URL every interval."""

    def __init__(
        self,
        url: str,
        interval_seconds: float = 300.0,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize pinger.

        Args:
            url: URL to ping (normally this service's /api/health)
            interval_seconds: Delay between pings
            timeout_seconds: Per-ping HTTP timeout
            client: Optional preconfigured client (for testing)
        """
        self.url = url
        self.interval_seconds = interval_seconds
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = client is None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def ping_once(self) -> bool:
        """
        Send one ping.

        Returns:
            True if the URL answered with a 2xx status
        """
        try:
            response = await self._client.get(self.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            metrics.keep_alive_pings_total.labels(result="error").inc()
            logger.warning(f"Keep-alive ping failed: {type(e).__name__}")
            return False

        ok = response.is_success
        metrics.keep_alive_pings_total.labels(result="ok" if ok else "error").inc()
        if ok:
            logger.debug(f"Keep-alive ping {response.status_code}")
        else:
            logger.warning(f"Keep-alive ping returned {response.status_code}")
        return ok

    def start(self) -> None:
        """Schedule the ping loop on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="keep-alive")
        logger.info(
            f"Keep-alive started: {self.url} every {self.interval_seconds:g}s"
        )

    async def stop(self) -> None:
        """Cancel the loop and close the HTTP client."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._owns_client:
            await self._client.aclose()

    async def _run(self) -> None:
        while True:
            await self.ping_once()
            await asyncio.sleep(self.interval_seconds)
