# playground/store/providers/redis_provider.py
# Share payload kept in Redis with a TTL; the link carries a short id

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import redis.asyncio as aioredis

from playground.constants import StoreProviderId
from playground.store.errors import ShareDecodeError, ShareNotFoundError, StoreError
from playground.store.providers.base import StoreProvider, generate_short_id

logger = logging.getLogger(__name__)

KEY_PREFIX = "share"
MAX_ID_ATTEMPTS = 5


class RedisStoreProvider(StoreProvider):
    id = StoreProviderId.REDIS

    def __init__(self, client: aioredis.Redis, ttl_seconds: int, short_id_length: int = 8):
        self.client = client
        self.ttl = ttl_seconds
        self.short_id_length = short_id_length

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int, short_id_length: int = 8) -> "RedisStoreProvider":
        # from_url only builds a pool; connections open on first command
        client = aioredis.from_url(url, decode_responses=True)
        return cls(client, ttl_seconds=ttl_seconds, short_id_length=short_id_length)

    @staticmethod
    def build_key(share_id: str) -> str:
        return f"{KEY_PREFIX}:{share_id}"

    async def save(self, payload: Mapping[str, Any]) -> str:
        data = json.dumps(dict(payload))
        for attempt in range(MAX_ID_ATTEMPTS):
            share_id = generate_short_id(self.short_id_length)
            # nx: never overwrite somebody else's share
            if await self.client.set(self.build_key(share_id), data, ex=self.ttl, nx=True):
                return share_id
            logger.warning(f"RedisStoreProvider: id collision on attempt {attempt + 1}")
        raise StoreError(f"Could not allocate a share id after {MAX_ID_ATTEMPTS} attempts")

    async def load(self, value: str) -> Any:
        data = await self.client.get(self.build_key(value))
        if not data:
            raise ShareNotFoundError(self.id, value)
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise ShareDecodeError(self.id, f"invalid JSON ({e})") from e

    async def close(self) -> None:
        await self.client.aclose()
