"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest
from opentelemetry import trace

from localmcp.protocol.dispatcher import ProtocolDispatcher
from localmcp.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_TOOL_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("test") as span:
            span.set_attribute(ATTR_METHOD, "tools/list")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_installs_provider_with_stderr_exporter(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with (
            patch("localmcp.utils.telemetry.trace.set_tracer_provider") as mock_set,
            patch("opentelemetry.sdk.trace.export.ConsoleSpanExporter") as mock_exporter,
        ):
            configure_telemetry(service_name="test-svc", export_to_console=True)

        provider = mock_set.call_args[0][0]
        assert isinstance(provider, TracerProvider)
        assert mock_exporter.call_args.kwargs["out"] is sys.stderr

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with (
            patch.dict(
                "sys.modules",
                {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
            ),
            patch("localmcp.utils.telemetry.trace.set_tracer_provider"),
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(
                    export_to_console=False,
                    otlp_endpoint="http://localhost:4317",
                )


class TestInstrumentation:
    async def test_dispatch_span_attributes(self, dispatcher: ProtocolDispatcher) -> None:
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span

        with patch("localmcp.protocol.dispatcher._tracer", tracer):
            await dispatcher.handle('{"jsonrpc":"2.0","id":1,"method":"nope"}')

        tracer.start_as_current_span.assert_called_once_with("mcp.dispatch")
        span.set_attribute.assert_any_call(ATTR_METHOD, "nope")
        span.set_attribute.assert_any_call(ATTR_ERROR_CODE, -32601)

    async def test_tool_span_attributes(self, dispatcher: ProtocolDispatcher) -> None:
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span

        with patch("localmcp.protocol.invoker._tracer", tracer):
            await dispatcher.handle(
                '{"jsonrpc":"2.0","id":1,"method":"tools/call","params":{"name":"missing"}}'
            )

        span.set_attribute.assert_any_call(ATTR_TOOL_NAME, "missing")
        span.set_attribute.assert_any_call(ATTR_ERROR_CODE, -32603)


class TestAttributeConstants:
    def test_constants_are_strings(self) -> None:
        assert ATTR_METHOD.startswith("mcp.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "localmcp"
