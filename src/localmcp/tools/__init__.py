"""Built-in tool catalog."""

from __future__ import annotations

from localmcp.protocol.registry import ToolRegistry
from localmcp.store.backend import MarketStore
from localmcp.tools.clock import clock_tools
from localmcp.tools.files import FileTools
from localmcp.tools.markets import MarketTools


def build_registry(store: MarketStore, *, encoding: str = "utf-8") -> ToolRegistry:
    """Build the server's tool registry in its fixed registration order."""
    return ToolRegistry(
        [
            *clock_tools(),
            *FileTools(encoding).tools(),
            *MarketTools(store).tools(),
        ]
    )


__all__ = ["build_registry"]
