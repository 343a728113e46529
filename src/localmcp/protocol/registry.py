"""ToolRegistry — the static catalog of tools the server exposes.

The registry is built once at startup and never mutated afterwards::

    registry = ToolRegistry([
        RegisteredTool(descriptor, handler),
        ...
    ])
    registry.descriptors()      # registration order
    registry.get("read_file")   # RegisteredTool or None
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from localmcp.protocol.models import ToolDescriptor

ToolHandler = Callable[[Mapping[str, Any]], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class RegisteredTool:
    """A descriptor paired with the handler that implements it."""

    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Immutable, ordered name-to-tool lookup table."""

    __slots__ = ("_tools", "_index")

    def __init__(self, tools: Iterable[RegisteredTool]) -> None:
        ordered = tuple(tools)
        index: dict[str, RegisteredTool] = {}
        for tool in ordered:
            if tool.name in index:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            index[tool.name] = tool
        self._tools = ordered
        self._index = MappingProxyType(index)

    def get(self, name: str) -> RegisteredTool | None:
        return self._index.get(name)

    def descriptors(self) -> tuple[ToolDescriptor, ...]:
        """Return tool descriptors in registration order."""
        return tuple(tool.descriptor for tool in self._tools)

    def names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)
