from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ShareSaveRequest(BaseModel):
    """Body of POST /api/share. ``state`` is untrusted and validated field by field."""
    provider: str
    state: Any = None


class ShareSaveResponse(BaseModel):
    provider: str
    value: str
    url: str


class StoreItemResponse(BaseModel):
    sqlDialect: str
    kyselyVersion: str
    typescriptSchema: str
    typescriptQuery: str
    showTypescriptSchema: bool


class SessionResponse(StoreItemResponse):
    sqlEditorSize: Optional[float] = None
    loading: bool = False
    shareLoaded: bool = Field(default=False, description="True if the URL carried a share that was applied")


class ProvidersResponse(BaseModel):
    providers: list[str]
