# playground/routers/health.py
# Health check endpoints for monitoring and load balancers
# Provides liveness and readiness probes for the store backends

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel
from sqlalchemy import text

from playground.db.base import get_session
from playground.constants import StoreProviderId

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

CHECK_TIMEOUT_SECONDS = 3.0


class HealthStatus(BaseModel):
    """Health check response model."""
    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: float
    version: str = "1.0.0"
    checks: Dict[str, Dict[str, Any]] = {}


class ComponentHealth(BaseModel):
    """Individual component health."""
    status: str
    latency_ms: float = 0.0
    message: str = ""


async def _timed_check(name: str, probe: Callable[[], Awaitable[None]]) -> ComponentHealth:
    start = time.time()
    try:
        await asyncio.wait_for(probe(), timeout=CHECK_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        return ComponentHealth(
            status="unhealthy",
            latency_ms=(time.time() - start) * 1000,
            message=f"{name} timeout"
        )
    except Exception as e:
        logger.error(f"{name} health check failed: {e}")
        return ComponentHealth(
            status="unhealthy",
            latency_ms=(time.time() - start) * 1000,
            message=f"{name} error: {type(e).__name__}"
        )
    return ComponentHealth(status="healthy", latency_ms=(time.time() - start) * 1000)


async def check_database_health() -> ComponentHealth:
    """Run SELECT 1 against the db provider's database."""
    async def probe():
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    return await _timed_check("database", probe)


async def check_redis_health(request: Request) -> ComponentHealth:
    """PING the redis provider's server."""
    async def probe():
        provider = request.app.state.store_manager.get_provider(StoreProviderId.REDIS)
        await provider.client.ping()
    return await _timed_check("redis", probe)


async def _collect_checks(request: Request) -> Dict[str, ComponentHealth]:
    db_health, redis_health = await asyncio.gather(
        check_database_health(), check_redis_health(request)
    )
    return {"database": db_health, "redis": redis_health}


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request, response: Response):
    """
    Full health check endpoint.
    The url provider needs no backend, so a failing database or redis
    only degrades the service.
    """
    checks = await _collect_checks(request)
    unhealthy = [name for name, c in checks.items() if c.status != "healthy"]

    if not unhealthy:
        overall_status = "healthy"
    elif len(unhealthy) < len(checks):
        overall_status = "degraded"
    else:
        overall_status = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthStatus(
        status=overall_status,
        timestamp=time.time(),
        checks={
            name: {
                "status": c.status,
                "latency_ms": round(c.latency_ms, 2),
                "message": c.message,
            }
            for name, c in checks.items()
        }
    )


@router.get("/health/live")
async def liveness_probe():
    """
    Kubernetes liveness probe.
    Does NOT check external dependencies.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_probe(request: Request, response: Response):
    """
    Kubernetes readiness probe.
    Ready when at least one server-side store backend answers.
    """
    checks = await _collect_checks(request)
    if all(c.status == "unhealthy" for c in checks.values()):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {
            "status": "not_ready",
            "reason": "; ".join(c.message for c in checks.values())
        }
    return {"status": "ready"}
