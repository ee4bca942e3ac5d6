# tests/unit/test_validation.py
# Unit tests for share payload validation
# CRITICAL: untrusted payloads must always produce a complete, valid state

import pytest

from playground.constants import SQL_DIALECT_VALUES, SqlDialect
from playground.share.models import DEFAULT_SHARED_STATE, DEFAULT_STORE_ITEM, SharedState, StoreItem
from playground.share.validation import get_validated_store_item, make_shared_state

MIXED_TEXT = "\n\n\nQqqqqqqqqqqq\r\nj안녕하세요.\t世界\x00\x1b"


class TestMakeSharedState:
    """Field-by-field fallback to DEFAULT_SHARED_STATE."""

    @pytest.mark.parametrize("raw", [
        None,
        {},
        {"unknownKey": 1},
        {"wrongValueAsKey": ""},
        "not a mapping",
        42,
        ["kyselyVersion", "0.42.1"],
        {"dialect": "asdf"},
        {"dialect": None, "kyselyVersion": 1, "ts": b"bytes"},
    ])
    def test_unusable_input_degrades_to_default(self, raw):
        assert make_shared_state(raw) == DEFAULT_SHARED_STATE

    def test_valid_input_is_kept(self):
        state = make_shared_state({
            "kyselyVersion": "0.42.1",
            "dialect": "sqlite",
            "ts": MIXED_TEXT,
        })
        assert state == SharedState(kysely_version="0.42.1", dialect=SqlDialect.SQLITE, ts=MIXED_TEXT)

    def test_string_content_is_preserved_exactly(self):
        assert make_shared_state({"ts": "\n\nA\r\nB\t世界"}).ts == "\n\nA\r\nB\t世界"

    def test_invalid_dialect_does_not_discard_other_fields(self):
        state = make_shared_state({"dialect": "not-a-real-dialect", "kyselyVersion": "0.40.0", "ts": "x"})
        assert state.dialect == DEFAULT_SHARED_STATE.dialect
        assert state.kysely_version == "0.40.0"
        assert state.ts == "x"

    def test_dialect_must_be_exact_member_value(self):
        assert make_shared_state({"dialect": "SQLITE"}).dialect == DEFAULT_SHARED_STATE.dialect
        assert make_shared_state({"dialect": " sqlite"}).dialect == DEFAULT_SHARED_STATE.dialect

    def test_unknown_keys_are_not_copied(self):
        state = make_shared_state({"ts": "a", "extra": "b"})
        assert state.to_payload() == {
            "kyselyVersion": DEFAULT_SHARED_STATE.kysely_version,
            "dialect": DEFAULT_SHARED_STATE.dialect.value,
            "ts": "a",
        }

    def test_default_is_not_returned_by_reference(self):
        assert make_shared_state(None) is not DEFAULT_SHARED_STATE

    def test_result_is_immutable(self):
        state = make_shared_state({})
        with pytest.raises(Exception):
            state.ts = "changed"
        assert DEFAULT_SHARED_STATE.ts == make_shared_state(None).ts

    @pytest.mark.parametrize("dialect", [object(), 1.5, {"a": 1}, ["sqlite"], True])
    def test_never_raises_and_dialect_is_always_known(self, dialect):
        state = make_shared_state({"dialect": dialect})
        assert state.dialect.value in SQL_DIALECT_VALUES


class TestGetValidatedStoreItem:
    """Current StoreItem payloads and legacy SharedState payloads."""

    def test_non_mapping_yields_default(self):
        assert get_validated_store_item(None) == DEFAULT_STORE_ITEM
        assert get_validated_store_item("{}") == DEFAULT_STORE_ITEM

    def test_unrelated_keys_yield_default(self):
        assert get_validated_store_item({"wrongValueAsKey": ""}) == DEFAULT_STORE_ITEM

    def test_full_store_item_round_trips(self):
        item = StoreItem(
            sql_dialect=SqlDialect.POSTGRES,
            kysely_version="0.27.0",
            typescript_schema="interface DB {}",
            typescript_query=MIXED_TEXT,
            show_typescript_schema=False,
        )
        assert get_validated_store_item(item.to_payload()) == item

    def test_store_item_fields_fall_back_independently(self):
        item = get_validated_store_item({
            "sqlDialect": "oracle",
            "typescriptQuery": "db.selectFrom('a')",
            "showTypescriptSchema": "false",
        })
        assert item.sql_dialect == DEFAULT_STORE_ITEM.sql_dialect
        assert item.typescript_query == "db.selectFrom('a')"
        assert item.typescript_schema == DEFAULT_STORE_ITEM.typescript_schema
        assert item.show_typescript_schema is DEFAULT_STORE_ITEM.show_typescript_schema

    def test_show_schema_flag_rejects_truthy_non_bools(self):
        assert get_validated_store_item({"showTypescriptSchema": 0}).show_typescript_schema is True
        assert get_validated_store_item({"showTypescriptSchema": False}).show_typescript_schema is False

    def test_legacy_shared_state_is_converted(self):
        item = get_validated_store_item({"kyselyVersion": "0.42.1", "dialect": "sqlite", "ts": "select 1"})
        assert item == StoreItem(
            sql_dialect=SqlDialect.SQLITE,
            kysely_version="0.42.1",
            typescript_schema="",
            typescript_query="select 1",
            show_typescript_schema=False,
        )

    def test_legacy_without_source_text_is_default(self):
        assert get_validated_store_item({"dialect": "sqlite"}) == DEFAULT_STORE_ITEM
