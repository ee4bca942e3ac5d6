from datetime import datetime, timedelta, timezone

from arq import cron
from arq.connections import RedisSettings
from opentelemetry import trace

from playground import config
from playground.config import settings
from playground.observability.tracing import init_tracing
from playground.repositories.share_repository import ShareRepository


async def purge_expired_shares(ctx) -> dict:
    """Periodic cleanup: delete db shares older than SHARE_RETENTION_DAYS.

    Redis shares expire on their own through their TTL.
    """
    r = ctx["redis"]
    repository = ctx.get("share_repository") or ShareRepository()
    tracer = trace.get_tracer("worker")
    cutoff = datetime.now(timezone.utc) - timedelta(days=settings.SHARE_RETENTION_DAYS)
    with tracer.start_as_current_span("purge_expired_shares"):
        removed = await repository.purge_older_than(cutoff)
    await r.incrby("jobs:shares_purged", removed)
    return {"removed": removed, "cutoff": cutoff.isoformat()}


class WorkerSettings:
    functions = [purge_expired_shares]
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)
    cron_jobs = [
        cron(purge_expired_shares, hour={3}, minute={0}),
    ]

    @staticmethod
    async def startup(ctx):
        init_tracing(config)
        ctx["share_repository"] = ShareRepository()
