"""
OpenTelemetry Trace Context Management

Provides trace context injection for outbound request envelopes so a call can be
followed across the client/peer boundary.
"""

import logging
from typing import Dict, Any, Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

logger = logging.getLogger(__name__)

def setup_tracer(service_name: str, otlp_endpoint: str = "localhost:4317"):
    """Configure OpenTelemetry tracer

    Args:
        service_name: Service name
        otlp_endpoint: OTLP receiver address
    """
    provider = TracerProvider(sampler=ALWAYS_ON)

    otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)

    tracer = trace.get_tracer(service_name)

    logger.info(f"OpenTelemetry trace configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")

    return tracer

def inject_trace_context() -> Optional[Dict[str, Any]]:
    """Convert the active span context to a transportable dictionary

    Returns:
        Dict[str, Any]: trace_id, span_id (hex) and sampled flag, or None if no span is active
    """
    span_context = trace.get_current_span().get_span_context()

    if not span_context.is_valid:
        return None

    return {
        'trace_id': span_context.trace_id.to_bytes(16, byteorder='big').hex(),
        'span_id': span_context.span_id.to_bytes(8, byteorder='big').hex(),
        'sampled': span_context.trace_flags.sampled,
    }

def create_span(name: str, attributes: Dict[str, Any] = None):
    """Create new client span

    Args:
        name: Span name
        attributes: Span attributes

    Returns:
        Context manager yielding the span
    """
    tracer = trace.get_tracer(__name__)
    return tracer.start_as_current_span(
        name,
        attributes=attributes or {},
        kind=trace.SpanKind.CLIENT,
    )
