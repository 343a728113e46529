"""JSON-RPC framing, dispatch and tool invocation."""

from localmcp.protocol.dispatcher import ProtocolDispatcher
from localmcp.protocol.errors import (
    ParseFailure,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
    UnknownMethodError,
)
from localmcp.protocol.framer import RequestFramer, split_chunk
from localmcp.protocol.invoker import ToolInvoker
from localmcp.protocol.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    InputSchema,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    ToolCall,
    ToolDescriptor,
    ToolParameter,
)
from localmcp.protocol.registry import RegisteredTool, ToolHandler, ToolRegistry
from localmcp.protocol.transport import LoopState, StdioChannel, TransportLoop

__all__ = [
    "INTERNAL_ERROR",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "PROTOCOL_VERSION",
    "InputSchema",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "LoopState",
    "ParseFailure",
    "ProtocolDispatcher",
    "ProtocolError",
    "RegisteredTool",
    "RequestFramer",
    "ServerInfo",
    "StdioChannel",
    "ToolCall",
    "ToolDescriptor",
    "ToolExecutionError",
    "ToolHandler",
    "ToolInvoker",
    "ToolNotFoundError",
    "ToolParameter",
    "ToolRegistry",
    "TransportLoop",
    "UnknownMethodError",
    "split_chunk",
]
