"""Shared fixtures: a small registry of fake tools and a dispatcher over it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from localmcp.protocol.dispatcher import ProtocolDispatcher
from localmcp.protocol.errors import ToolExecutionError
from localmcp.protocol.models import InputSchema, ServerInfo, ToolDescriptor, ToolParameter
from localmcp.protocol.registry import RegisteredTool, ToolRegistry


class RecordingHandler:
    """Async tool handler that records its calls and returns a fixed text."""

    def __init__(self, text: str = "done") -> None:
        self.text = text
        self.calls: list[Mapping[str, Any]] = []

    async def __call__(self, arguments: Mapping[str, Any]) -> str:
        self.calls.append(arguments)
        return self.text


async def echo_handler(arguments: Mapping[str, Any]) -> str:
    return str(arguments["text"])


async def failing_handler(arguments: Mapping[str, Any]) -> str:
    raise ToolExecutionError("Failed to do the thing: disk on fire")


async def crashing_handler(arguments: Mapping[str, Any]) -> str:
    raise RuntimeError("kaboom")


def make_descriptor(name: str, description: str = "", **properties: str) -> ToolDescriptor:
    return ToolDescriptor(
        name=name,
        description=description,
        input_schema=InputSchema(
            properties={k: ToolParameter(type=v) for k, v in properties.items()},
            required=tuple(properties),
        ),
    )


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler("recorded")


@pytest.fixture
def registry(recorder: RecordingHandler) -> ToolRegistry:
    return ToolRegistry(
        [
            RegisteredTool(make_descriptor("echo", "Echo text back", text="string"), echo_handler),
            RegisteredTool(make_descriptor("record", "Record the call"), recorder),
            RegisteredTool(make_descriptor("fail", "Always fails"), failing_handler),
            RegisteredTool(make_descriptor("crash", "Raises unexpectedly"), crashing_handler),
        ]
    )


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> ProtocolDispatcher:
    return ProtocolDispatcher(registry, server_info=ServerInfo(name="test-server", version="1.0.0"))
