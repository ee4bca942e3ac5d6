# playground/share/models.py
# Value objects exchanged between the playground UI and the store providers

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from playground.constants import (
    DEFAULT_KYSELY_VERSION,
    DEFAULT_LEGACY_TS,
    DEFAULT_SQL_DIALECT,
    DEFAULT_TYPESCRIPT_QUERY,
    DEFAULT_TYPESCRIPT_SCHEMA,
    SqlDialect,
    StoreProviderId,
)


class _Payload(BaseModel):
    """Frozen model serialized with camelCase wire keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict that store providers persist."""
        return self.model_dump(by_alias=True, mode="json")


class SharedState(_Payload):
    """Legacy share payload: one source buffer plus dialect and library version."""

    kysely_version: str = Field(alias="kyselyVersion")
    dialect: SqlDialect
    ts: str


class StoreItem(_Payload):
    """Fully validated session ready to be applied to the playground UI."""

    sql_dialect: SqlDialect = Field(alias="sqlDialect")
    kysely_version: str = Field(alias="kyselyVersion")
    typescript_schema: str = Field(alias="typescriptSchema")
    typescript_query: str = Field(alias="typescriptQuery")
    show_typescript_schema: bool = Field(alias="showTypescriptSchema")


@dataclass(frozen=True)
class ShareItem:
    """A provider id paired with the opaque value that provider returned."""

    store_provider_id: StoreProviderId
    value: str


DEFAULT_SHARED_STATE = SharedState(
    kysely_version=DEFAULT_KYSELY_VERSION,
    dialect=DEFAULT_SQL_DIALECT,
    ts=DEFAULT_LEGACY_TS,
)

DEFAULT_STORE_ITEM = StoreItem(
    sql_dialect=DEFAULT_SHARED_STATE.dialect,
    kysely_version=DEFAULT_SHARED_STATE.kysely_version,
    typescript_schema=DEFAULT_TYPESCRIPT_SCHEMA,
    typescript_query=DEFAULT_TYPESCRIPT_QUERY,
    show_typescript_schema=True,
)
