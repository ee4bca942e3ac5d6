# playground/share/session.py
# Server-side stand-in for the playground UI state that a share hydrates

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from playground.constants import SqlDialect
from playground.share.models import DEFAULT_STORE_ITEM, StoreItem


class EditorEvents(Protocol):
    """What the load path needs from a code editor: replace its buffer."""

    def set_value(self, source_text: str) -> None: ...


class BufferEditor:
    """Editor that keeps its buffer in memory."""

    def __init__(self, value: str = ""):
        self.value = value

    def set_value(self, source_text: str) -> None:
        self.value = source_text


@dataclass
class PlaygroundSession:
    """
    One editing session. Field names mirror the UI state the
    playground keeps per tab; editors are attached once they are mounted.
    """

    sql_dialect: SqlDialect = DEFAULT_STORE_ITEM.sql_dialect
    kysely_version: str = DEFAULT_STORE_ITEM.kysely_version
    typescript_schema: str = DEFAULT_STORE_ITEM.typescript_schema
    typescript_query: str = DEFAULT_STORE_ITEM.typescript_query
    show_typescript_schema: bool = DEFAULT_STORE_ITEM.show_typescript_schema
    viewport_width: float = 1280.0
    sql_editor_size: Optional[float] = None
    loading: dict[str, bool] = field(default_factory=dict)
    schema_editor: Optional[EditorEvents] = None
    query_editor: Optional[EditorEvents] = None

    @property
    def editors_ready(self) -> bool:
        return self.schema_editor is not None and self.query_editor is not None

    @property
    def is_loading(self) -> bool:
        return any(self.loading.values())

    def set_loading(self, scope: str, value: bool) -> None:
        self.loading = {**self.loading, scope: value}

    def _snapshot(self) -> tuple:
        return (
            self.sql_dialect,
            self.kysely_version,
            self.typescript_schema,
            self.typescript_query,
            self.show_typescript_schema,
            self.sql_editor_size,
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self.sql_dialect,
            self.kysely_version,
            self.typescript_schema,
            self.typescript_query,
            self.show_typescript_schema,
            self.sql_editor_size,
        ) = snapshot

    def hydrate(self, item: StoreItem) -> None:
        """Apply every field of item, or none of them if applying fails."""
        before = self._snapshot()
        try:
            self.sql_dialect = item.sql_dialect
            self.kysely_version = item.kysely_version
            self.typescript_schema = item.typescript_schema
            self.typescript_query = item.typescript_query
            if self.schema_editor is not None:
                self.schema_editor.set_value(item.typescript_schema)
            if self.query_editor is not None:
                self.query_editor.set_value(item.typescript_query)
            self.show_typescript_schema = item.show_typescript_schema
            if not item.show_typescript_schema:
                self.sql_editor_size = self.viewport_width / 2
        except Exception:
            self._restore(before)
            # put the editor buffers back in line with the restored state
            for editor, text in (
                (self.schema_editor, self.typescript_schema),
                (self.query_editor, self.typescript_query),
            ):
                if editor is not None:
                    editor.set_value(text)
            raise

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the session."""
        return {
            "sqlDialect": self.sql_dialect.value,
            "kyselyVersion": self.kysely_version,
            "typescriptSchema": self.typescript_schema,
            "typescriptQuery": self.typescript_query,
            "showTypescriptSchema": self.show_typescript_schema,
            "sqlEditorSize": self.sql_editor_size,
            "loading": self.is_loading,
        }
