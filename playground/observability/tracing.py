"""
OpenTelemetry tracing bootstrap shared by the FastAPI app, the Tornado app
and the arq worker.

- Initializes a TracerProvider with a Console exporter.
- Instruments FastAPI (when an app is passed), Tornado and SQLAlchemy.
- Idempotent: safe to call multiple times.
"""
from __future__ import annotations

import typing as _t

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.tornado import TornadoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

_OTEL_INITIALIZED = False


def init_tracing(
    config_module: _t.Any | None = None,
    *,
    fastapi_app: _t.Any | None = None,
    engine: _t.Any | None = None,
    tornado: bool = False,
) -> trace.Tracer:
    """// initialize otel tracer (idempotent)"""
    global _OTEL_INITIALIZED

    service_name = getattr(config_module, "SERVICE_NAME", None) or "playground-share"

    if not _OTEL_INITIALIZED:
        resource = Resource.create({"service.name": service_name})
        provider = TracerProvider(resource=resource)
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(provider)

        if tornado:
            TornadoInstrumentor().instrument()
        if engine is not None:
            SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
        _OTEL_INITIALIZED = True

    if fastapi_app is not None:
        FastAPIInstrumentor.instrument_app(fastapi_app)

    return trace.get_tracer(service_name)
