# tests/conftest.py
# Shared fixtures: an in-memory stand-in for the server-backed providers
# so unit and API tests run without PostgreSQL or Redis.

import asyncio
import json
from types import MappingProxyType
from typing import Any

import pytest

from playground.constants import StoreProviderId
from playground.store.errors import ShareNotFoundError
from playground.store.manager import StoreManager
from playground.store.providers.base import StoreProvider, generate_short_id
from playground.store.providers.url_provider import UrlStoreProvider


class MemoryStoreProvider(StoreProvider):
    """Keeps JSON documents in a dict; optionally returns a fixed raw object or fails."""

    def __init__(self, provider_id: StoreProviderId, raw: Any = None, error: Exception = None, delay: float = 0.0):
        self.id = provider_id
        self.documents: dict[str, str] = {}
        self.raw = raw
        self.error = error
        self.delay = delay
        self.save_calls = 0
        self.load_calls = 0

    async def save(self, payload):
        self.save_calls += 1
        if self.error is not None:
            raise self.error
        share_id = generate_short_id()
        self.documents[share_id] = json.dumps(dict(payload))
        return share_id

    async def load(self, value):
        self.load_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return self.raw
        if value not in self.documents:
            raise ShareNotFoundError(self.id, value)
        return json.loads(self.documents[value])


def make_registry(**overrides):
    providers = {
        StoreProviderId.URL: UrlStoreProvider(),
        StoreProviderId.DB: MemoryStoreProvider(StoreProviderId.DB),
        StoreProviderId.REDIS: MemoryStoreProvider(StoreProviderId.REDIS),
    }
    for name, provider in overrides.items():
        providers[StoreProviderId(name)] = provider
    return MappingProxyType(providers)


@pytest.fixture
def registry():
    return make_registry()


@pytest.fixture
def manager(registry):
    return StoreManager(registry)


@pytest.fixture
def registry_factory():
    """Build a registry with some providers replaced, e.g. registry_factory(db=MemoryStoreProvider(...))."""
    return make_registry


@pytest.fixture
def memory_provider_cls():
    return MemoryStoreProvider
