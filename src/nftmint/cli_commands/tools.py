"""``nftmint tools`` — inspect the tools exposed by the mint service."""

from __future__ import annotations

import asyncio
import sys

import click

from nftmint.cli_commands._output import console, load_settings, print_tools_table


@click.group()
def tools() -> None:
    """Inspect remote tools."""


@tools.command("list")
@click.pass_context
def list_tools(ctx: click.Context) -> None:
    """List the tools the mint service exposes."""
    from nftmint.protocol.client import ToolInvocationClient
    from nftmint.protocol.models import MCPToolDef

    settings = load_settings(ctx)

    async def _list() -> list[MCPToolDef]:
        async with ToolInvocationClient.from_settings(settings) as client:
            return await client.list_tools()

    try:
        tool_defs = asyncio.run(_list())
    except Exception as exc:
        console.print(f"[red]Listing error:[/red] {exc}")
        sys.exit(1)

    if not tool_defs:
        console.print("[yellow]No tools available.[/yellow]")
        return

    print_tools_table(tool_defs)
