"""localmcp CLI entrypoint."""

from __future__ import annotations

import click

from localmcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="localmcp")
def main() -> None:
    """localmcp — JSON-RPC tool server over stdio."""


# Register subcommands
from localmcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
