# playground/repositories/share_repository.py
# Repository for share documents stored in PostgreSQL

from __future__ import annotations

import json
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from playground.db.base import get_session
from playground.models.share_table import playground_share

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class ShareRepository:
    """Insert, fetch and purge rows of the playground_share table."""

    def __init__(self, session_factory: SessionFactory = get_session):
        self.session_factory = session_factory

    async def insert(self, share_id: str, payload: Mapping[str, Any]) -> None:
        """Insert a new row. Raises IntegrityError if share_id is taken."""
        async with self.session_factory() as session:
            await session.execute(
                playground_share.insert().values(
                    share_id=share_id,
                    payload=json.dumps(dict(payload)),
                    created_at=datetime.now(timezone.utc),
                )
            )
            await session.commit()

    async def fetch(self, share_id: str) -> Optional[Any]:
        """Return the decoded payload, or None if no row has this id."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(playground_share.c.payload).where(playground_share.c.share_id == share_id)
            )
            row = result.fetchone()
            if row:
                return json.loads(row[0])
        return None

    async def purge_older_than(self, cutoff: datetime) -> int:
        """Delete rows created before cutoff and return how many were removed."""
        async with self.session_factory() as session:
            result = await session.execute(
                delete(playground_share).where(playground_share.c.created_at < cutoff)
            )
            await session.commit()
            return result.rowcount or 0
