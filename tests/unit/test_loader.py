# tests/unit/test_loader.py
# Unit tests for the one-shot share load orchestration

import asyncio

import pytest

from playground.constants import SqlDialect, StoreProviderId
from playground.share.codec import make_share_url
from playground.share.loader import LOADING_SCOPE, LoaderState, ShareLoader
from playground.share.models import DEFAULT_STORE_ITEM, SharedState, ShareItem, StoreItem
from playground.share.session import BufferEditor, PlaygroundSession
from playground.store.manager import StoreManager

BASE = "https://play.example.com/"

ITEM = StoreItem(
    sql_dialect=SqlDialect.POSTGRES,
    kysely_version="0.27.2",
    typescript_schema="interface DB { pet: { name: string } }",
    typescript_query="db.selectFrom('pet').select('name')",
    show_typescript_schema=False,
)


def make_session(**kwargs):
    return PlaygroundSession(
        viewport_width=1000.0,
        schema_editor=BufferEditor(),
        query_editor=BufferEditor(),
        **kwargs,
    )


class ExplodingEditor:
    def set_value(self, source_text):
        raise RuntimeError("editor disposed")


class TestShareLoader:

    @pytest.mark.asyncio
    async def test_applies_every_field(self, manager):
        _, url = await manager.share(StoreProviderId.DB, ITEM, BASE)
        session = make_session()
        loader = ShareLoader(manager)

        assert await loader.init_share(session, url) is True

        assert session.sql_dialect is SqlDialect.POSTGRES
        assert session.kysely_version == "0.27.2"
        assert session.typescript_schema == ITEM.typescript_schema
        assert session.typescript_query == ITEM.typescript_query
        assert session.schema_editor.value == ITEM.typescript_schema
        assert session.query_editor.value == ITEM.typescript_query
        assert session.show_typescript_schema is False
        assert session.sql_editor_size == 500.0
        assert session.loading == {LOADING_SCOPE: False}
        assert loader.state is LoaderState.IDLE

    @pytest.mark.asyncio
    async def test_legacy_share_url_scenario(self, manager):
        state = SharedState(kysely_version="0.42.1", dialect=SqlDialect.SQLITE, ts="select 1")
        _, url = await manager.share(StoreProviderId.URL, state, BASE)
        session = make_session()

        assert await ShareLoader(manager).init_share(session, url) is True
        assert session.sql_dialect is SqlDialect.SQLITE
        assert session.kysely_version == "0.42.1"
        assert session.typescript_query == "select 1"

    @pytest.mark.asyncio
    async def test_no_share_item_keeps_defaults(self, manager):
        session = make_session()
        loader = ShareLoader(manager)

        assert await loader.init_share(session, BASE) is False
        assert session.snapshot()["typescriptQuery"] == DEFAULT_STORE_ITEM.typescript_query
        assert session.loading == {}
        assert loader.did_init is True

    @pytest.mark.asyncio
    async def test_waits_for_editors(self, manager):
        _, url = await manager.share(StoreProviderId.DB, ITEM, BASE)
        session = PlaygroundSession()
        loader = ShareLoader(manager)

        assert await loader.init_share(session, url) is False
        assert loader.did_init is False

        session.schema_editor = BufferEditor()
        session.query_editor = BufferEditor()
        assert await loader.init_share(session, url) is True

    @pytest.mark.asyncio
    async def test_runs_once_per_session(self, registry_factory, memory_provider_cls):
        provider = memory_provider_cls(StoreProviderId.DB, raw=ITEM.to_payload())
        manager = StoreManager(registry_factory(db=provider))
        url = make_share_url(BASE, ShareItem(StoreProviderId.DB, "abc"))
        session = make_session()
        loader = ShareLoader(manager)

        assert await loader.init_share(session, url) is True
        assert await loader.init_share(session, url) is False
        assert provider.load_calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_triggers_reach_provider_once(self, registry_factory, memory_provider_cls):
        provider = memory_provider_cls(StoreProviderId.DB, raw=ITEM.to_payload(), delay=0.05)
        manager = StoreManager(registry_factory(db=provider))
        url = make_share_url(BASE, ShareItem(StoreProviderId.DB, "abc"))
        session = make_session()
        loader = ShareLoader(manager)

        first = asyncio.create_task(loader.init_share(session, url))
        await asyncio.sleep(0)
        assert loader.state is LoaderState.LOADING
        assert session.is_loading is True
        second = await loader.init_share(session, url)

        assert second is False
        assert await first is True
        assert provider.load_calls == 1
        assert loader.state is LoaderState.IDLE

    @pytest.mark.asyncio
    async def test_provider_failure_leaves_session_untouched(self, registry_factory, memory_provider_cls):
        provider = memory_provider_cls(StoreProviderId.REDIS, error=ConnectionError("redis down"))
        manager = StoreManager(registry_factory(redis=provider))
        url = make_share_url(BASE, ShareItem(StoreProviderId.REDIS, "abc"))
        session = make_session()
        before = session.snapshot()
        loader = ShareLoader(manager)

        assert await loader.init_share(session, url) is False
        assert session.snapshot() == before
        assert session.loading == {LOADING_SCOPE: False}
        assert loader.state is LoaderState.IDLE

    @pytest.mark.asyncio
    async def test_malformed_payload_hydrates_defaults(self, registry_factory, memory_provider_cls):
        provider = memory_provider_cls(StoreProviderId.DB, raw={"wrongValueAsKey": ""})
        manager = StoreManager(registry_factory(db=provider))
        url = make_share_url(BASE, ShareItem(StoreProviderId.DB, "abc"))
        session = make_session(typescript_query="user edits")

        assert await ShareLoader(manager).init_share(session, url) is True
        assert session.typescript_query == DEFAULT_STORE_ITEM.typescript_query

    @pytest.mark.asyncio
    async def test_apply_failure_rolls_back(self, manager):
        _, url = await manager.share(StoreProviderId.DB, ITEM, BASE)
        session = PlaygroundSession(schema_editor=BufferEditor("old schema"), query_editor=ExplodingEditor())
        before = session.snapshot()

        assert await ShareLoader(manager).init_share(session, url) is False
        assert session.snapshot() == before
        assert session.schema_editor.value == session.typescript_schema
