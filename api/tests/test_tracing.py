"""Tracing tests."""

import pytest
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from sqlalchemy import create_engine

from servitor import tracing
from servitor.config import Settings
from servitor.schemas.order import OrderEntry
from servitor.services.order_service import retrieve_order, submit_order


@pytest.fixture(scope="session")
def span_exporter():
    """Route spans from the service tracers into memory."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return exporter


@pytest.fixture
def spans(span_exporter):
    span_exporter.clear()

    def finished(name):
        return [span for span in span_exporter.get_finished_spans() if span.name == name]

    return finished


def test_tracing_disabled_without_endpoint():
    app = FastAPI()
    engine = create_engine("sqlite://")
    assert tracing.configure_tracing(app, engine, Settings(otel_traces_endpoint=None)) is None


def test_tracing_enabled_with_endpoint(monkeypatch):
    installed = []
    monkeypatch.setattr(tracing.trace, "set_tracer_provider", installed.append)

    app = FastAPI()
    engine = create_engine("sqlite://")
    settings = Settings(otel_traces_endpoint="http://collector:4318/v1/traces", otel_service_name="servitor-test")

    provider = tracing.configure_tracing(app, engine, settings)
    try:
        assert provider is not None
        assert installed == [provider]
        assert provider.resource.attributes[SERVICE_NAME] == "servitor-test"
    finally:
        SQLAlchemyInstrumentor().uninstrument()
        provider.shutdown()


def test_submit_order_span(test_db, spans):
    order_id = submit_order(test_db, [OrderEntry(product="espresso", count=2)])

    (span,) = spans("submit_order")
    assert span.attributes["order.id"] == order_id
    assert [event.name for event in span.events] == ["Creating order in database"]


def test_retrieve_order_span(test_db, spans):
    retrieve_order(test_db, "unknown")

    (span,) = spans("retrieve_order")
    assert span.attributes["order.id"] == "unknown"
