"""
OpenTelemetry Setup

Instruments FastAPI routes, SQLAlchemy queries on the durable store and
httpx calls made by the Python client. Disabled unless
TELEMETRY_EXPORTER is set to "console".
"""
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from ..config import Settings
import logging

logger = logging.getLogger(__name__)


def setup_telemetry(app, settings: Settings):
    """
    Setup OpenTelemetry instrumentation for the FastAPI app
    
    Args:
        app: FastAPI application instance
        settings: Application settings
    
    Returns:
        The tracer provider, or None when telemetry is disabled
    """
    exporter_type = settings.telemetry_exporter.lower()
    if exporter_type == "none":
        logger.debug("Telemetry disabled")
        return None
    
    resource = Resource.create({
        "service.name": "studynotes-api",
        "service.version": app.version,
        "service.namespace": "studynotes",
    })
    
    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)
    
    if exporter_type == "console":
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console span exporter enabled")
    
    FastAPIInstrumentor.instrument_app(app)
    SQLAlchemyInstrumentor().instrument()
    HTTPXClientInstrumentor().instrument()
    
    logger.info("OpenTelemetry instrumentation enabled for FastAPI, SQLAlchemy and httpx")
    return tracer_provider


def get_tracer(name: str):
    """Get a tracer for custom spans"""
    return trace.get_tracer(name)
