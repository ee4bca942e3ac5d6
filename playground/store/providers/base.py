# playground/store/providers/base.py
# Common contract for every share backend

from __future__ import annotations

import secrets
import string
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from playground.constants import StoreProviderId

SHORT_ID_ALPHABET = string.ascii_letters + string.digits


def generate_short_id(length: int = 8) -> str:
    """Generate a URL-safe short ID."""
    return ''.join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(length))


class StoreProvider(ABC):
    """A backend that persists a share payload and hands back an opaque value.

    The value is only meaningful to the provider that produced it; callers
    pair it with ``id`` and pass it back to ``load`` unchanged.
    """

    id: ClassVar[StoreProviderId]

    @abstractmethod
    async def save(self, payload: Mapping[str, Any]) -> str:
        """Persist payload and return the value to embed in a share link."""

    @abstractmethod
    async def load(self, value: str) -> Any:
        """Return the raw object stored under value. The result is not validated."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id.value}>"
