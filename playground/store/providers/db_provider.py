# playground/store/providers/db_provider.py
# Share payload stored as a PostgreSQL document; the link carries a short id

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError

from playground.constants import StoreProviderId
from playground.repositories.share_repository import ShareRepository
from playground.store.errors import ShareNotFoundError, StoreError
from playground.store.providers.base import SHORT_ID_ALPHABET, StoreProvider, generate_short_id

logger = logging.getLogger(__name__)

# attempts before giving up on finding a free short id
MAX_ID_ATTEMPTS = 5


class DatabaseStoreProvider(StoreProvider):
    id = StoreProviderId.DB

    def __init__(self, repository: ShareRepository, short_id_length: int = 8):
        self.repository = repository
        self.short_id_length = short_id_length

    async def save(self, payload: Mapping[str, Any]) -> str:
        for attempt in range(MAX_ID_ATTEMPTS):
            share_id = generate_short_id(self.short_id_length)
            try:
                await self.repository.insert(share_id, payload)
            except IntegrityError:
                logger.warning(f"DatabaseStoreProvider: id collision on attempt {attempt + 1}")
                continue
            return share_id
        raise StoreError(f"Could not allocate a share id after {MAX_ID_ATTEMPTS} attempts")

    async def load(self, value: str) -> Any:
        # ids we never hand out cannot exist; skip the round trip
        if not value or any(ch not in SHORT_ID_ALPHABET for ch in value):
            raise ShareNotFoundError(self.id, value)
        payload = await self.repository.fetch(value)
        if payload is None:
            raise ShareNotFoundError(self.id, value)
        return payload
