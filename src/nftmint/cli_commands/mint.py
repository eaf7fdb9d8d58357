"""``nftmint mint`` and ``nftmint ping``."""

from __future__ import annotations

import asyncio
import sys

import click

from nftmint.cli_commands._output import console, load_settings, print_mint_result


@click.command()
@click.argument("to_address")
@click.argument("token_uri")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def mint(ctx: click.Context, to_address: str, token_uri: str, as_json: bool) -> None:
    """Mint TOKEN_URI to TO_ADDRESS with the configured contract."""
    from nftmint.minting.orchestrator import MintOrchestrator

    orchestrator = MintOrchestrator(load_settings(ctx))

    try:
        result = asyncio.run(orchestrator.mint(to_address, token_uri))
    except Exception as exc:
        console.print(f"[red]Mint error:[/red] {exc}")
        sys.exit(1)

    print_mint_result(result, as_json=as_json)
    if not result.success:
        sys.exit(1)


@click.command()
@click.pass_context
def ping(ctx: click.Context) -> None:
    """Check that the mint service is reachable and lists its tools."""
    from nftmint.minting.orchestrator import MintOrchestrator

    orchestrator = MintOrchestrator(load_settings(ctx))
    result = asyncio.run(orchestrator.test_connection())

    if result.success:
        console.print(f"[green]{result.message}[/green]")
        return
    console.print(f"[red]{result.message}[/red]")
    sys.exit(1)
