"""OpenTelemetry tracing setup."""

import logging
from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from sqlalchemy.engine import Engine

from servitor.config import Settings

logger = logging.getLogger(__name__)


def build_tracer_provider(service_name: str, exporter: SpanExporter) -> TracerProvider:
    """Tracer provider that samples everything and batches spans to the exporter."""
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def configure_tracing(app: FastAPI, engine: Engine, settings: Settings) -> Optional[TracerProvider]:
    """
    Send request and database spans to an OTLP/HTTP collector.

    Must run before the app serves its first request, since the FastAPI
    instrumentation wraps the middleware stack.

    Args:
        app: Application to instrument
        engine: Engine whose queries become child spans
        settings: Application settings

    Returns:
        The installed provider, or None when tracing is disabled
    """
    if not settings.otel_traces_endpoint:
        return None

    exporter = OTLPSpanExporter(endpoint=settings.otel_traces_endpoint)
    provider = build_tracer_provider(settings.otel_service_name, exporter)
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
    SQLAlchemyInstrumentor().instrument(engine=engine, tracer_provider=provider)

    logger.info(f"Sending traces to {settings.otel_traces_endpoint}")
    return provider
