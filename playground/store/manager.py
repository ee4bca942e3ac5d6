# playground/store/manager.py
# Route save/load calls to the provider registered for an id

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Union

from opentelemetry import trace

from playground.constants import StoreProviderId
from playground.observability.metrics import observe_share_operation
from playground.share.codec import make_share_url
from playground.share.models import SharedState, ShareItem, StoreItem
from playground.store.errors import UnknownStoreProviderError
from playground.store.providers.base import StoreProvider
from playground.store.registry import ProviderRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

Shareable = Union[SharedState, StoreItem]


class StoreManager:
    """
    Saves and loads share payloads through an injected provider registry.

    Provider failures are not caught here: they reach the caller unchanged
    (timeouts surface as asyncio.TimeoutError). The registry is never
    modified.
    """

    def __init__(self, providers: ProviderRegistry, timeout: Optional[float] = None):
        self._providers = providers
        self.timeout = timeout

    @property
    def provider_ids(self) -> list[StoreProviderId]:
        return list(self._providers)

    def get_provider(self, provider_id: StoreProviderId) -> StoreProvider:
        try:
            return self._providers[provider_id]
        except (KeyError, TypeError):
            raise UnknownStoreProviderError(provider_id) from None

    async def _run(self, coro):
        if self.timeout is None:
            return await coro
        return await asyncio.wait_for(coro, timeout=self.timeout)

    async def save(self, provider_id: StoreProviderId, state: Shareable) -> str:
        """Persist state with the given provider and return its opaque value."""
        provider = self.get_provider(provider_id)
        with tracer.start_as_current_span("share.save") as span:
            span.set_attribute("share.provider", provider.id.value)
            with observe_share_operation("save", provider.id.value):
                value = await self._run(provider.save(state.to_payload()))
        logger.info(f"StoreManager: saved share provider={provider.id.value} size={len(value)}")
        return value

    async def load(self, provider_id: StoreProviderId, value: str) -> Any:
        """Return the raw object the provider holds for value. Callers must validate it."""
        provider = self.get_provider(provider_id)
        with tracer.start_as_current_span("share.load") as span:
            span.set_attribute("share.provider", provider.id.value)
            with observe_share_operation("load", provider.id.value):
                raw = await self._run(provider.load(value))
        logger.info(f"StoreManager: loaded share provider={provider.id.value}")
        return raw

    async def share(
        self, provider_id: StoreProviderId, state: Shareable, base_url: str
    ) -> tuple[ShareItem, str]:
        """Save state and return the ShareItem together with its share URL."""
        value = await self.save(provider_id, state)
        item = ShareItem(store_provider_id=provider_id, value=value)
        return item, make_share_url(base_url, item)
