"""Tracing for request dispatch and tool calls.

Modules take a tracer once with ``_tracer = get_tracer(__name__)``. Until
:func:`configure_telemetry` installs an SDK provider every span is a
no-op, so the server needs only ``opentelemetry-api`` at runtime.

Spans go to stderr or an OTLP collector, never to stdout.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_METHOD = "mcp.method"
ATTR_REQUEST_ID = "mcp.request.id"
ATTR_NOTIFICATION = "mcp.notification"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_ERROR_CODE = "mcp.error.code"

_INSTRUMENTATION_NAME = "localmcp"
_OTEL_HINT = "Install it with: pip install local-mcp-server[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = _INSTRUMENTATION_NAME,
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global tracer provider for *service_name*.

    Console spans are written synchronously to stderr; OTLP spans are
    batched to *otlp_endpoint*. Raises ImportError naming the missing
    package when the ``otel`` extra is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for tracing. {_OTEL_HINT}") from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(_stderr_exporter()))
    if otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))
    trace.set_tracer_provider(provider)


def _stderr_exporter() -> Any:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    return ConsoleSpanExporter(out=sys.stderr)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    except ImportError as exc:
        raise ImportError(f"opentelemetry-exporter-otlp is required for OTLP export. {_OTEL_HINT}") from exc
    return OTLPSpanExporter(endpoint=endpoint)
