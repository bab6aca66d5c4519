"""
OpenTelemetry instrumentation setup.

Spans are always recorded through the SDK tracer provider; they are
exported only when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode  # noqa: F401

logger = logging.getLogger(__name__)

_configured = False


def setup_opentelemetry() -> None:
    """
    Configure OpenTelemetry instrumentation.

    Sets up the tracer provider and, when an OTLP endpoint is configured,
    the exporter and Django auto-instrumentation. Safe to call twice.
    """
    global _configured
    if _configured:
        return

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "activation-service"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )
    trace_provider = TracerProvider(resource=resource)

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.instrumentation.django import DjangoInstrumentor

        trace_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
        DjangoInstrumentor().instrument()
        logger.info("Exporting traces to %s", otlp_endpoint)

    trace.set_tracer_provider(trace_provider)
    _configured = True
    logger.info("OpenTelemetry instrumentation configured")


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
