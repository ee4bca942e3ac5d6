# playground/store/registry.py
# Build the provider-id -> provider lookup table once per process

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from playground.config import Settings, get_settings
from playground.constants import StoreProviderId
from playground.repositories.share_repository import ShareRepository
from playground.store.errors import ProviderConfigurationError
from playground.store.providers.base import StoreProvider
from playground.store.providers.db_provider import DatabaseStoreProvider
from playground.store.providers.redis_provider import RedisStoreProvider
from playground.store.providers.url_provider import UrlStoreProvider

logger = logging.getLogger(__name__)

ProviderRegistry = Mapping[StoreProviderId, StoreProvider]


def make_provider(provider_id: StoreProviderId, settings: Settings) -> StoreProvider:
    """Construct the provider for one id. Every enum member must be handled here."""
    if provider_id is StoreProviderId.URL:
        return UrlStoreProvider()
    if provider_id is StoreProviderId.DB:
        return DatabaseStoreProvider(ShareRepository(), short_id_length=settings.SHORT_ID_LENGTH)
    if provider_id is StoreProviderId.REDIS:
        return RedisStoreProvider.from_url(
            settings.REDIS_URL,
            ttl_seconds=settings.SHARE_TTL_SECONDS,
            short_id_length=settings.SHORT_ID_LENGTH,
        )
    raise ProviderConfigurationError(f"No provider implementation for id {provider_id!r}")


def associate_providers(settings: Optional[Settings] = None) -> ProviderRegistry:
    """Return a read-only mapping with exactly one provider per StoreProviderId.

    Raises ProviderConfigurationError if any provider cannot be built; this
    is meant to stop the process at startup.
    """
    settings = settings or get_settings()
    providers: dict[StoreProviderId, StoreProvider] = {}
    for provider_id in StoreProviderId:
        try:
            provider = make_provider(provider_id, settings)
        except ProviderConfigurationError:
            raise
        except Exception as e:
            raise ProviderConfigurationError(
                f"Failed to build store provider {provider_id.value!r}: {e}"
            ) from e
        if provider.id is not provider_id:
            raise ProviderConfigurationError(
                f"Provider {provider!r} registered under mismatching id {provider_id.value!r}"
            )
        providers[provider_id] = provider

    logger.info(f"Store providers ready: {', '.join(p.value for p in providers)}")
    return MappingProxyType(providers)
