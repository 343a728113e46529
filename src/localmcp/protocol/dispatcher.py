"""ProtocolDispatcher — parses request texts and routes them by method.

Known methods live in an explicit table; anything outside it is a
``Method not found`` error. The dispatcher performs no I/O of its own,
only tool handlers reached through the :class:`ToolInvoker` do.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from localmcp.protocol.errors import ParseFailure, ProtocolError, UnknownMethodError
from localmcp.protocol.invoker import ToolInvoker
from localmcp.protocol.models import (
    PROTOCOL_VERSION,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
)
from localmcp.protocol.registry import ToolRegistry
from localmcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_NOTIFICATION,
    ATTR_REQUEST_ID,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[JsonRpcRequest], Awaitable[JsonRpcResponse]]


class ProtocolDispatcher:
    """Turns one request text into at most one response envelope.

    Usage::

        dispatcher = ProtocolDispatcher(registry, server_info=ServerInfo(name="x", version="1.0.0"))
        wire = await dispatcher.handle('{"jsonrpc":"2.0","id":1,"method":"tools/list"}')
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_info: ServerInfo,
        protocol_version: str = PROTOCOL_VERSION,
        invoker: ToolInvoker | None = None,
    ) -> None:
        self._registry = registry
        self._invoker = invoker or ToolInvoker(registry)
        self._initialize_result = InitializeResult(
            protocol_version=protocol_version,
            server_info=server_info,
        )
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._methods)

    async def handle(self, request_text: str) -> dict[str, Any] | None:
        """Dispatch *request_text* and return the wire response.

        Returns ``None`` for notifications (messages without an ``id``).
        """
        try:
            payload = self.decode(request_text)
        except ParseFailure as exc:
            logger.warning("Rejecting unparseable request: %s", exc.detail)
            return JsonRpcResponse.failure(None, exc.to_error()).to_wire()

        try:
            request = JsonRpcRequest.model_validate(payload)
        except ValidationError:
            # No usable method name; answer like any other unknown method.
            if "id" not in payload:
                return None
            error = UnknownMethodError(payload.get("method")).to_error()
            return JsonRpcResponse.failure(payload["id"], error).to_wire()

        response = await self.dispatch(request)
        if request.is_notification:
            logger.debug("Dropping response to notification %s", request.method)
            return None
        return response.to_wire()

    @staticmethod
    def decode(request_text: str) -> dict[str, Any]:
        """Decode *request_text* into a JSON object.

        Raises :class:`ParseFailure` for malformed JSON and for JSON values
        that are not objects.
        """
        try:
            payload = json.loads(request_text)
        except (ValueError, RecursionError) as exc:
            raise ParseFailure(str(exc)) from exc
        if not isinstance(payload, dict):
            raise ParseFailure(f"expected a JSON object, got {type(payload).__name__}")
        return payload

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Route a parsed request to its method handler."""
        with _tracer.start_as_current_span("mcp.dispatch") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            span.set_attribute(ATTR_NOTIFICATION, request.is_notification)
            logger.debug("Dispatching %s (id=%r)", request.method, request.id)

            handler = self._methods.get(request.method)
            try:
                if handler is None:
                    raise UnknownMethodError(request.method)
                response = await handler(request)
            except ProtocolError as exc:
                response = JsonRpcResponse.failure(request.id, exc.to_error())

            if response.error is not None:
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
            return response

    async def _initialize(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(request.id, self._initialize_result.to_wire())

    async def _list_tools(self, request: JsonRpcRequest) -> JsonRpcResponse:
        tools = [descriptor.to_wire() for descriptor in self._registry.descriptors()]
        return JsonRpcResponse.success(request.id, {"tools": tools})

    async def _call_tool(self, request: JsonRpcRequest) -> JsonRpcResponse:
        params = request.params if isinstance(request.params, dict) else {}
        return await self._invoker.invoke(
            params.get("name"),
            params.get("arguments"),
            call_id=request.id,
        )
