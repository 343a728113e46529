"""ToolInvoker — runs one ``tools/call`` and normalises the outcome.

The invoker never validates arguments against the advertised input
schema; handlers decide what they accept. Whatever happens inside a
handler, the caller gets back a :class:`JsonRpcResponse`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from localmcp.protocol.errors import ProtocolError, ToolExecutionError, ToolNotFoundError
from localmcp.protocol.models import JsonRpcResponse
from localmcp.utils.telemetry import ATTR_ERROR_CODE, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from localmcp.protocol.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolInvoker:
    """Looks tools up in a :class:`ToolRegistry` and executes their handlers.

    Usage::

        invoker = ToolInvoker(registry)
        response = await invoker.invoke("read_file", {"file_path": "x"}, call_id=3)
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def invoke(self, name: Any, arguments: Any, call_id: Any) -> JsonRpcResponse:
        """Execute *name* with *arguments*, echoing *call_id* in the response."""
        with _tracer.start_as_current_span("mcp.tool") as span:
            span.set_attribute(ATTR_TOOL_NAME, str(name))
            try:
                text = await self._run(name, arguments)
            except ProtocolError as exc:
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                return JsonRpcResponse.failure(call_id, exc.to_error())
        return JsonRpcResponse.success(call_id, {"content": [{"type": "text", "text": text}]})

    async def _run(self, name: Any, arguments: Any) -> str:
        tool = self._registry.get(name) if isinstance(name, str) else None
        if tool is None:
            raise ToolNotFoundError(name)

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            msg = f"Invalid arguments for tool {name}: expected an object"
            raise ToolExecutionError(msg, name=name)

        logger.debug("Invoking tool %s", name)
        try:
            result = await tool.handler(arguments)
        except ToolExecutionError as exc:
            logger.warning("Tool %s failed: %s", name, exc.message)
            raise
        except Exception as exc:
            logger.exception("Tool %s raised an unexpected error", name)
            raise ToolExecutionError(str(exc) or type(exc).__name__, name=name) from exc

        return result if isinstance(result, str) else str(result)
