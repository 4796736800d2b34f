"""
OpenTelemetry Integration Module

Provides distributed tracing and metrics collection for the RPC client:
- tracer: Trace context injection into outbound envelopes
- metrics: Request, error and latency instruments
"""

import logging

from .tracer import (
    setup_tracer,
    inject_trace_context,
    create_span
)
from .metrics import (
    setup_metrics,
    increment_counter,
    record_latency
)

logger = logging.getLogger(__name__)

def configure_telemetry(config) -> None:
    """Install OTLP exporters according to a ClientConfig

    Args:
        config: ClientConfig instance (enable_tracing / enable_metrics flags)
    """
    if config.enable_tracing:
        setup_tracer(config.service_name, config.otlp_endpoint)
    if config.enable_metrics:
        setup_metrics(config.service_name, config.otlp_endpoint)
    if not (config.enable_tracing or config.enable_metrics):
        logger.debug("Telemetry disabled by configuration")

__all__ = [
    "configure_telemetry",
    "setup_tracer",
    "inject_trace_context",
    "create_span",
    "setup_metrics",
    "increment_counter",
    "record_latency"
]
