from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import Response

from playground import config
from playground.db.base import async_engine
from playground.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from playground.observability.logger import configure_logging
from playground.observability.metrics import render_latest
from playground.observability.tracing import init_tracing
from playground.routers.health import router as health_router
from playground.routers.share import router as share_router
from playground.store.manager import StoreManager
from playground.store.registry import associate_providers
from playground.utils.logger import log_info


def create_app(manager: Optional[StoreManager] = None, observability: bool = True) -> FastAPI:
    """Build the FastAPI app.

    The provider registry is built here, once, unless a ready StoreManager
    is injected (tests do this).
    """
    if manager is None:
        manager = StoreManager(
            associate_providers(config.settings),
            timeout=config.settings.STORE_TIMEOUT_SECONDS,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_info(f"Playground share API started, providers: {[p.value for p in manager.provider_ids]}")
        yield
        log_info("Playground share API stopped")

    app = FastAPI(
        title="Playground Share API",
        description="Save and load shareable query-builder playground sessions",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store_manager = manager

    # Error handler should be outermost to catch all errors
    app.add_middleware(ErrorHandlerMiddleware, debug=config.DEBUG)
    setup_exception_handlers(app)

    app.include_router(health_router)  # Health checks at root level
    app.include_router(share_router, prefix="/api")

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        body, content_type = render_latest()
        return Response(content=body, media_type=content_type)

    if observability:
        configure_logging(config)
        init_tracing(config, fastapi_app=app, engine=async_engine)

    return app


def get_app() -> FastAPI:
    return create_app()
