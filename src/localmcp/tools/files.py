"""Read and write text files relative to the working directory."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from localmcp.protocol.errors import ToolExecutionError
from localmcp.protocol.models import InputSchema, ToolDescriptor, ToolParameter
from localmcp.protocol.registry import RegisteredTool
from localmcp.tools._args import require_str

READ_FILE = ToolDescriptor(
    name="read_file",
    description="Read contents of a file",
    input_schema=InputSchema(
        properties={
            "file_path": ToolParameter(type="string", description="Path to the file to read"),
        },
        required=("file_path",),
    ),
)

WRITE_FILE = ToolDescriptor(
    name="write_file",
    description="Write content to a file",
    input_schema=InputSchema(
        properties={
            "file_path": ToolParameter(type="string", description="Path to the file to write"),
            "content": ToolParameter(type="string", description="Content to write to the file"),
        },
        required=("file_path", "content"),
    ),
)


class FileTools:
    """Handlers for ``read_file`` / ``write_file`` sharing one text encoding."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    async def read_file(self, arguments: Mapping[str, Any]) -> str:
        file_path = require_str(arguments, "file_path")
        try:
            content = await asyncio.to_thread(Path(file_path).read_text, encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise ToolExecutionError(f"Failed to read file: {exc}") from exc
        return f"File content of {file_path}:\n\n{content}"

    async def write_file(self, arguments: Mapping[str, Any]) -> str:
        file_path = require_str(arguments, "file_path")
        content = require_str(arguments, "content")
        try:
            await asyncio.to_thread(Path(file_path).write_text, content, encoding=self.encoding)
        except (OSError, UnicodeEncodeError) as exc:
            raise ToolExecutionError(f"Failed to write file: {exc}") from exc
        return f"Successfully wrote content to {file_path}"

    def tools(self) -> list[RegisteredTool]:
        return [
            RegisteredTool(READ_FILE, self.read_file),
            RegisteredTool(WRITE_FILE, self.write_file),
        ]
