# playground/routers/share.py
# FastAPI router for saving and loading playground shares

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from playground.config import get_settings
from playground.constants import STORE_PROVIDER_ID_VALUES, StoreProviderId
from playground.middleware.error_handler import ProviderNotFoundError
from playground.schemas.share import (
    ProvidersResponse,
    SessionResponse,
    ShareSaveRequest,
    ShareSaveResponse,
    StoreItemResponse,
)
from playground.share.loader import ShareLoader
from playground.share.session import BufferEditor, PlaygroundSession
from playground.share.validation import get_validated_store_item
from playground.store.manager import StoreManager
from playground.utils.logger import log_info


router = APIRouter(tags=["Share"])


class AsciiJSONResponse(JSONResponse):
    """JSON response escaped to ASCII. Loaded source text may hold lone surrogates."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("ascii")


def get_store_manager(request: Request) -> StoreManager:
    return request.app.state.store_manager


def parse_provider_id(provider: str) -> StoreProviderId:
    if provider not in STORE_PROVIDER_ID_VALUES:
        raise ProviderNotFoundError(provider)
    return StoreProviderId(provider)


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(request: Request) -> ProvidersResponse:
    manager = get_store_manager(request)
    return ProvidersResponse(providers=[p.value for p in manager.provider_ids])


@router.post("/share", response_model=ShareSaveResponse, status_code=status.HTTP_201_CREATED)
async def save_share(payload: ShareSaveRequest, request: Request) -> ShareSaveResponse:
    """Validate the submitted session, store it and return its share link."""
    provider_id = parse_provider_id(payload.provider)
    item = get_validated_store_item(payload.state)
    manager = get_store_manager(request)
    share_item, url = await manager.share(provider_id, item, get_settings().SHARE_BASE_URL)
    log_info(f"save_share: provider={provider_id.value} value_len={len(share_item.value)}")
    return ShareSaveResponse(provider=provider_id.value, value=share_item.value, url=url)


@router.get("/share/resolve", response_model=SessionResponse, response_class=AsciiJSONResponse)
async def resolve_share(
    request: Request,
    url: str = Query(..., description="Playground URL carrying a share reference"),
    viewport_width: float = Query(1280.0, gt=0),
) -> AsciiJSONResponse:
    """Hydrate a fresh session from url. Unusable links yield the default session."""
    session = PlaygroundSession(
        viewport_width=viewport_width,
        schema_editor=BufferEditor(),
        query_editor=BufferEditor(),
    )
    loader = ShareLoader(get_store_manager(request))
    loaded = await loader.init_share(session, url)
    return AsciiJSONResponse({**session.snapshot(), "shareLoaded": loaded})


@router.get("/share/{provider}/{value}", response_model=StoreItemResponse, response_class=AsciiJSONResponse)
async def load_share(provider: str, value: str, request: Request) -> AsciiJSONResponse:
    """Load a share and return it validated. Provider errors map to 4xx/5xx."""
    provider_id = parse_provider_id(provider)
    raw = await get_store_manager(request).load(provider_id, value)
    item = get_validated_store_item(raw)
    return AsciiJSONResponse(item.model_dump(by_alias=True, mode="python"))
