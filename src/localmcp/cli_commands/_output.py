"""Shared CLI output helpers.

``console`` is for interactive commands only. While serving, stdout carries
the protocol stream, so diagnostics always go through ``err_console``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from localmcp.protocol.models import ToolDescriptor

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> None:
    """Route all log records to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def print_tools_table(descriptors: tuple[ToolDescriptor, ...]) -> None:
    """Pretty-print the tool catalog as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required")

    for descriptor in descriptors:
        required = ", ".join(descriptor.input_schema.required) or "-"
        table.add_row(descriptor.name, _truncate(descriptor.description), required)

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
