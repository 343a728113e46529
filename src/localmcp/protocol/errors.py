"""Shared error types for the protocol layer.

Every error maps 1:1 onto a JSON-RPC error object via :meth:`ProtocolError.to_error`.
"""

from __future__ import annotations

from localmcp.protocol.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcError,
)


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        """Convert into the wire error object."""
        return JsonRpcError(code=self.code, message=self.message)


class ParseFailure(ProtocolError):
    """Request text could not be parsed into an envelope."""

    code = PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Parse error")


class UnknownMethodError(ProtocolError):
    """Top-level method is not one the server supports."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: object) -> None:
        self.method = method
        super().__init__("Method not found")


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolExecutionError(ProtocolError):
    """A tool handler reported a failure.

    The message is surfaced on the wire verbatim.
    """

    def __init__(self, detail: str, *, name: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(detail)
