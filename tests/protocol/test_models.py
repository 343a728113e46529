"""Tests for JSON-RPC envelopes and tool descriptors."""

import pytest
from pydantic import ValidationError

from localmcp.protocol.models import (
    InitializeResult,
    InputSchema,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    ToolCall,
    ToolDescriptor,
    ToolParameter,
)


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.params == {}

    def test_method_required(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"jsonrpc": "2.0", "id": 1})

    def test_missing_id_is_notification(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert req.is_notification

    def test_explicit_null_id_is_not_notification(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "id": None, "method": "tools/list"})
        assert not req.is_notification
        assert req.id is None

    def test_string_id_preserved(self) -> None:
        req = JsonRpcRequest.model_validate({"id": "abc", "method": "initialize"})
        assert req.id == "abc"


class TestJsonRpcResponse:
    def test_success_wire_shape(self) -> None:
        wire = JsonRpcResponse.success(7, {"tools": []}).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": 7, "result": {"tools": []}}

    def test_failure_wire_shape(self) -> None:
        wire = JsonRpcResponse.failure(None, JsonRpcError(code=-32700, message="Parse error")).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": None, "error": {"code": -32700, "message": "Parse error"}}

    def test_never_both_result_and_error(self) -> None:
        resp = JsonRpcResponse(id=1, result={"x": 1}, error=JsonRpcError(code=-32603, message="m"))
        wire = resp.to_wire()
        assert "error" in wire
        assert "result" not in wire

    def test_error_data_kept_when_present(self) -> None:
        err = JsonRpcError(code=-32603, message="m", data={"tool": "x"})
        wire = JsonRpcResponse.failure(1, err).to_wire()
        assert wire["error"]["data"] == {"tool": "x"}


class TestToolDescriptor:
    def test_wire_shape(self) -> None:
        descriptor = ToolDescriptor(
            name="get_current_time",
            description="Get the current time",
            input_schema=InputSchema(
                properties={
                    "format": ToolParameter(type="string", description="Time format", default="iso"),
                },
            ),
        )
        assert descriptor.to_wire() == {
            "name": "get_current_time",
            "description": "Get the current time",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "format": {"type": "string", "description": "Time format", "default": "iso"},
                },
                "required": [],
            },
        }

    def test_populate_by_alias(self) -> None:
        descriptor = ToolDescriptor.model_validate(
            {"name": "x", "inputSchema": {"properties": {"a": {"type": "number"}}, "required": ["a"]}}
        )
        assert descriptor.input_schema.required == ("a",)
        assert descriptor.input_schema.properties["a"].type == "number"

    def test_frozen(self) -> None:
        descriptor = ToolDescriptor(name="x")
        with pytest.raises(ValidationError):
            descriptor.name = "y"  # type: ignore[misc]


class TestToolCall:
    def test_default_arguments(self) -> None:
        call = ToolCall(name="get_markets")
        assert call.arguments == {}


class TestInitializeResult:
    def test_wire_shape(self) -> None:
        result = InitializeResult(server_info=ServerInfo(name="srv", version="1.0.0"))
        assert result.to_wire() == {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "srv", "version": "1.0.0"},
        }
