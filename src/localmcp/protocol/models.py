"""JSON-RPC 2.0 messages and tool descriptors.

Implements the message format used by the Model Context Protocol for
the ``initialize`` handshake, tool discovery (``tools/list``) and
execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``id`` is left unset on notifications; use :attr:`is_notification`
    rather than comparing against ``None`` since ``"id": null`` is a
    valid (if unusual) correlation token.
    """

    jsonrpc: Any = JSONRPC_VERSION
    method: str
    id: Any = None
    params: Any = Field(default_factory=dict)

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: Any, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, error: JsonRpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=error)

    def to_wire(self) -> dict[str, Any]:
        """Serialise with exactly one of ``result`` / ``error`` present."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            wire["error"] = self.error.model_dump(exclude_none=True)
        else:
            wire["result"] = self.result if self.result is not None else {}
        return wire


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolParameter(BaseModel):
    """One property of a tool's input schema."""

    model_config = ConfigDict(frozen=True)

    type: str
    description: str = ""
    default: Any = None


class InputSchema(BaseModel):
    """JSON-Schema subset advertised for a tool's arguments."""

    model_config = ConfigDict(frozen=True)

    type: str = "object"
    properties: dict[str, ToolParameter] = Field(default_factory=dict)
    required: tuple[str, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        for prop_name, prop in self.properties.items():
            entry: dict[str, Any] = {"type": prop.type, "description": prop.description}
            if prop.default is not None:
                entry["default"] = prop.default
            properties[prop_name] = entry
        return {"type": self.type, "properties": properties, "required": list(self.required)}


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    input_schema: InputSchema = Field(default_factory=InputSchema, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.to_wire(),
        }


class ToolCall(BaseModel):
    """A single ``tools/call`` invocation; discarded once answered."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ServerInfo(BaseModel):
    """Identity reported in the ``initialize`` result."""

    name: str
    version: str


class InitializeResult(BaseModel):
    """Payload of the ``initialize`` response."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    server_info: ServerInfo = Field(alias="serverInfo")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
