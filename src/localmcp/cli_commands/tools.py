"""``localmcp tools`` — inspect and exercise the tool catalog."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.markup import escape

from localmcp.cli_commands._output import console, err_console, print_tools_table
from localmcp.config import ConfigError, load_settings


@click.group()
def tools() -> None:
    """Inspect and call registered tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output the tools/list payload as JSON.")
def list_tools(as_json: bool) -> None:
    """List the registered tools in registration order."""
    from localmcp.store.backend import InMemoryMarketStore
    from localmcp.tools import build_registry

    registry = build_registry(InMemoryMarketStore())
    if as_json:
        payload = {"tools": [d.to_wire() for d in registry.descriptors()]}
        console.print_json(json.dumps(payload))
        return
    print_tools_table(registry.descriptors())


@tools.command("call")
@click.argument("name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file.",
)
@click.option("--db", "db_path", default=None, help="SQLite database path.")
@click.option("--memory", is_flag=True, help="Use a throwaway in-memory market store.")
def call_tool(
    name: str,
    raw_args: str,
    config_path: Path | None,
    db_path: str | None,
    memory: bool,
) -> None:
    """Invoke tool NAME once and print the response envelope."""
    from localmcp.protocol.invoker import ToolInvoker
    from localmcp.protocol.models import ToolCall
    from localmcp.server import build_store
    from localmcp.tools import build_registry

    try:
        tool_call = ToolCall(name=name, arguments=json.loads(raw_args))
    except ValidationError:
        err_console.print("[red]Invalid --args:[/red] expected a JSON object")
        sys.exit(1)
    except ValueError as exc:
        err_console.print(f"[red]Invalid --args JSON:[/red] {escape(str(exc))}")
        sys.exit(1)

    try:
        settings = load_settings(
            config_path,
            {"store.path": db_path, "store.backend": "memory" if memory else None},
        )
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        sys.exit(1)

    async def _call() -> dict[str, Any]:
        store = build_store(settings)
        try:
            invoker = ToolInvoker(build_registry(store, encoding=settings.files.encoding))
            response = await invoker.invoke(tool_call.name, tool_call.arguments, call_id=1)
        finally:
            await store.close()
        return response.to_wire()

    wire = asyncio.run(_call())
    console.print_json(json.dumps(wire))
    if "error" in wire:
        sys.exit(1)
