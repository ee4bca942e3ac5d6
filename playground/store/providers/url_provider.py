# playground/store/providers/url_provider.py
# Share payload compressed into the link itself (no server-side storage)

from __future__ import annotations

import base64
import binascii
import json
import zlib
from typing import Any, Mapping

from playground.constants import StoreProviderId
from playground.store.errors import ShareDecodeError
from playground.store.providers.base import StoreProvider

# Upper bound for a decompressed payload; links can be crafted by anyone
MAX_PAYLOAD_BYTES = 1024 * 1024


class UrlStoreProvider(StoreProvider):
    """Encodes the payload as url-safe base64 of zlib-compressed JSON."""

    id = StoreProviderId.URL

    def __init__(self, max_payload_bytes: int = MAX_PAYLOAD_BYTES):
        self.max_payload_bytes = max_payload_bytes

    @staticmethod
    def encode(payload: Mapping[str, Any]) -> str:
        raw = json.dumps(dict(payload), separators=(",", ":"))
        compressed = zlib.compress(raw.encode("utf-8"), 9)
        return base64.urlsafe_b64encode(compressed).decode("ascii").rstrip("=")

    def decode(self, value: str) -> Any:
        padded = value + "=" * (-len(value) % 4)
        try:
            compressed = base64.urlsafe_b64decode(padded.encode("ascii"))
        except (binascii.Error, UnicodeEncodeError, ValueError) as e:
            raise ShareDecodeError(self.id, f"invalid base64 ({e})") from e

        inflater = zlib.decompressobj()
        try:
            data = inflater.decompress(compressed, self.max_payload_bytes)
        except zlib.error as e:
            raise ShareDecodeError(self.id, f"invalid compressed data ({e})") from e
        if inflater.unconsumed_tail:
            raise ShareDecodeError(self.id, "payload too large")

        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ShareDecodeError(self.id, f"invalid JSON ({e})") from e

    async def save(self, payload: Mapping[str, Any]) -> str:
        return self.encode(payload)

    async def load(self, value: str) -> Any:
        return self.decode(value)
