"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from nftmint.cli_commands.create import create
    from nftmint.cli_commands.mint import mint, ping
    from nftmint.cli_commands.tools import tools

    cli.add_command(mint)
    cli.add_command(ping)
    cli.add_command(create)
    cli.add_command(tools)
