# playground/share/validation.py
# Turn untrusted share payloads into SharedState / StoreItem values.
#
# Every function here is total: malformed input falls back to defaults
# field by field and nothing is raised.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from playground.constants import (
    SHARED_STATE_KEYS,
    SQL_DIALECT_VALUES,
    STORE_ITEM_KEYS,
    SqlDialect,
)
from playground.share.models import (
    DEFAULT_SHARED_STATE,
    DEFAULT_STORE_ITEM,
    SharedState,
    StoreItem,
)

# keys that only the StoreItem payload has (kyselyVersion is shared with the legacy shape)
_STORE_ITEM_ONLY_KEYS = tuple(k for k in STORE_ITEM_KEYS if k not in SHARED_STATE_KEYS)


def valid_dialect(raw: Mapping[str, Any], key: str, default: SqlDialect) -> SqlDialect:
    value = raw.get(key)
    if isinstance(value, str) and value in SQL_DIALECT_VALUES:
        return SqlDialect(value)
    return default


def valid_str(raw: Mapping[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else default


def valid_bool(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    return value if isinstance(value, bool) else default


def make_shared_state(raw: Any) -> SharedState:
    """Build a SharedState from an arbitrary value.

    Unknown keys are dropped. If no recognised field is valid the result
    equals DEFAULT_SHARED_STATE.
    """
    if not isinstance(raw, Mapping):
        return DEFAULT_SHARED_STATE.model_copy()

    default = DEFAULT_SHARED_STATE
    return SharedState(
        kysely_version=valid_str(raw, "kyselyVersion", default.kysely_version),
        dialect=valid_dialect(raw, "dialect", default.dialect),
        ts=valid_str(raw, "ts", default.ts),
    )


def make_store_item(raw: Mapping[str, Any]) -> StoreItem:
    default = DEFAULT_STORE_ITEM
    return StoreItem(
        sql_dialect=valid_dialect(raw, "sqlDialect", default.sql_dialect),
        kysely_version=valid_str(raw, "kyselyVersion", default.kysely_version),
        typescript_schema=valid_str(raw, "typescriptSchema", default.typescript_schema),
        typescript_query=valid_str(raw, "typescriptQuery", default.typescript_query),
        show_typescript_schema=valid_bool(raw, "showTypescriptSchema", default.show_typescript_schema),
    )


def store_item_from_shared_state(state: SharedState) -> StoreItem:
    """Legacy shares kept schema and query in one buffer; show it as the query pane only."""
    return StoreItem(
        sql_dialect=state.dialect,
        kysely_version=state.kysely_version,
        typescript_schema="",
        typescript_query=state.ts,
        show_typescript_schema=False,
    )


def get_validated_store_item(raw: Any) -> StoreItem:
    """Build a StoreItem from whatever a store provider returned.

    Accepts the current StoreItem payload and the legacy SharedState
    payload. Anything else yields DEFAULT_STORE_ITEM.
    """
    if not isinstance(raw, Mapping):
        return DEFAULT_STORE_ITEM.model_copy()

    if any(key in raw for key in _STORE_ITEM_ONLY_KEYS):
        return make_store_item(raw)

    if isinstance(raw.get("ts"), str):
        return store_item_from_shared_state(make_shared_state(raw))

    return DEFAULT_STORE_ITEM.model_copy()
