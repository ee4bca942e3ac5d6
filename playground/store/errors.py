# playground/store/errors.py
# Failures raised by the store layer. The web layer maps them to HTTP errors.

import asyncio

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from playground.constants import StoreProviderId


class StoreError(Exception):
    """Base class for store provider and registry failures."""


class UnknownStoreProviderError(StoreError):
    """A provider id that is not in the registry. Indicates a bug, not bad input."""
    def __init__(self, provider_id: object):
        self.provider_id = provider_id
        super().__init__(f"No store provider registered for id {provider_id!r}")


class ProviderConfigurationError(StoreError):
    """A provider could not be constructed at startup."""


class ShareNotFoundError(StoreError):
    """The provider holds nothing under the given value."""
    def __init__(self, provider_id: StoreProviderId, value: str):
        self.provider_id = provider_id
        self.value = value
        super().__init__(f"Share {value!r} not found in provider {provider_id.value!r}")


class ShareDecodeError(StoreError):
    """The stored or embedded payload could not be decoded."""
    def __init__(self, provider_id: StoreProviderId, reason: str):
        self.provider_id = provider_id
        self.reason = reason
        super().__init__(f"Cannot decode share for provider {provider_id.value!r}: {reason}")


# Backend failures a caller may see from a provider save/load
STORE_FAILURES = (StoreError, asyncio.TimeoutError, RedisError, SQLAlchemyError, ConnectionError)
