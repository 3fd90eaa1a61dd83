"""
Redis purchase ledger.

Shares consumed proofs between processes and across restarts.
"""

import json
import logging
from typing import Optional

import redis.asyncio as aioredis

from comptoir.domain.entities.purchase_record import (
    PurchaseRecord,
    PurchaseRecordStatus,
)
from comptoir.domain.repositories.i_purchase_ledger import IPurchaseLedger

logger = logging.getLogger(__name__)

# Delete KEYS[1] only while its status is still ARGV[1]
_RELEASE_SCRIPT = """
local raw = redis.call('GET', KEYS[1])
if not raw then
    return 0
end
local record = cjson.decode(raw)
if record['status'] == ARGV[1] then
    return redis.call('DEL', KEYS[1])
end
return 0
"""


class RedisPurchaseLedger(IPurchaseLedger):
    """
    Ledger stored as one JSON string per proof hash.

    reserve() uses SET NX; release() runs a Lua script so the status
    check and delete are atomic on the server.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        key_prefix: str = "comptoir:purchase:",
        client: Optional[aioredis.Redis] = None,
    ):
        """
        Initialize Redis ledger configuration.

        Args:
            host: Redis server host
            port: Redis server port
            db: Redis database number (0-15)
            password: Redis password (None if no auth)
            key_prefix: Prefix for ledger keys
            client: Optional preconfigured client (for testing)
        """
        self.host = host
        self.port = port
        self.db = db
        self.password = password if password else None
        self.key_prefix = key_prefix
        self._client = client

    async def connect(self) -> None:
        """Establish connection to Redis server."""
        if self._client is not None:
            return

        self._client = aioredis.from_url(
            f"redis://{self.host}:{self.port}/{self.db}",
            password=self.password,
            encoding="utf-8",
            decode_responses=True,
        )
        logger.info(f"Purchase ledger connected to redis://{self.host}:{self.port}")

    async def disconnect(self) -> None:
        """Close connection to Redis server."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, proof_tx_hash: str) -> Optional[PurchaseRecord]:
        client = await self._get_client()
        raw = await client.get(self._key(proof_tx_hash))
        if raw is None:
            return None
        return PurchaseRecord.from_dict(json.loads(raw))

    async def reserve(self, record: PurchaseRecord) -> bool:
        client = await self._get_client()
        stored = await client.set(
            self._key(record.proof_tx_hash),
            json.dumps(record.to_dict()),
            nx=True,
        )
        return bool(stored)

    async def save(self, record: PurchaseRecord) -> None:
        client = await self._get_client()
        await client.set(
            self._key(record.proof_tx_hash),
            json.dumps(record.to_dict()),
        )

    async def release(self, proof_tx_hash: str) -> None:
        client = await self._get_client()
        await client.eval(
            _RELEASE_SCRIPT,
            1,
            self._key(proof_tx_hash),
            PurchaseRecordStatus.RESERVED.value,
        )

    async def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            await self.connect()
        return self._client

    def _key(self, proof_tx_hash: str) -> str:
        return f"{self.key_prefix}{proof_tx_hash.lower()}"
