# playground/observability/metrics.py
# prometheus counters for share saves and loads

from __future__ import annotations

import os
import time
from contextlib import contextmanager
from typing import Iterator, Optional

import tornado.web
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
from prometheus_client.multiprocess import MultiProcessCollector

# Detect multiprocess mode via environment.
# NOTE: PROMETHEUS_MULTIPROC_DIR must be set BEFORE importing this module in real multi-proc setups.
PROM_MP_DIR = os.environ.get("PROMETHEUS_MULTIPROC_DIR")
HAVE_MP = bool(PROM_MP_DIR and os.path.isdir(PROM_MP_DIR))

# Exposition registry: a dedicated one aggregating worker files, else the default global one
REGISTRY: Optional[CollectorRegistry] = None
if HAVE_MP:
    REGISTRY = CollectorRegistry()
    MultiProcessCollector(REGISTRY)

SHARE_OPERATIONS = Counter(
    "share_operations_total",
    "Store provider operations by outcome",
    labelnames=("operation", "provider", "outcome"),
)
SHARE_LATENCY = Histogram(
    "share_operation_latency_seconds",
    "Store provider operation latency in seconds",
    labelnames=("operation", "provider"),
)


@contextmanager
def observe_share_operation(operation: str, provider: str) -> Iterator[None]:
    """Count one provider call and time it; the outcome label is set from the exit path."""
    start = time.perf_counter()
    outcome = "error"
    try:
        yield
        outcome = "ok"
    finally:
        SHARE_LATENCY.labels(operation, provider).observe(time.perf_counter() - start)
        SHARE_OPERATIONS.labels(operation, provider, outcome).inc()


def render_latest() -> tuple[bytes, str]:
    """Return (body, content type) for a /metrics response."""
    if REGISTRY is not None:
        return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
    return generate_latest(), CONTENT_TYPE_LATEST


class PrometheusMetricsHandler(tornado.web.RequestHandler):
    """// expose /metrics"""

    def get(self):
        body, content_type = render_latest()
        self.set_header("Content-Type", content_type)
        self.write(body)
