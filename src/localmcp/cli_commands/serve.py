"""``localmcp serve`` — run the stdio JSON-RPC server."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.markup import escape

from localmcp.cli_commands._output import configure_logging, err_console
from localmcp.config import ConfigError, load_settings


@click.command("serve")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file.",
)
@click.option("--db", "db_path", default=None, help="SQLite database path.")
@click.option("--memory", is_flag=True, help="Keep markets in memory instead of SQLite.")
@click.option(
    "--framing",
    type=click.Choice(["chunk", "line"]),
    default=None,
    help="Request framing: split each read on newlines, or reassemble lines across reads.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (logs go to stderr).",
)
def serve(
    config_path: Path | None,
    db_path: str | None,
    memory: bool,
    framing: str | None,
    log_level: str | None,
) -> None:
    """Serve tools over newline-delimited JSON-RPC on stdin/stdout."""
    from localmcp.server import serve as run_server

    try:
        settings = load_settings(
            config_path,
            {
                "store.path": db_path,
                "store.backend": "memory" if memory else None,
                "framing": framing,
                "log_level": log_level,
            },
        )
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(run_server(settings))
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted.[/yellow]")
