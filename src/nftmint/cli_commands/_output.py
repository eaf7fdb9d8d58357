"""Shared CLI helpers — settings loading and output formatters."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from nftmint.config import MintSettings
from nftmint.errors import ConfigurationError

if TYPE_CHECKING:
    from nftmint.minting.models import MintResult, MintStep
    from nftmint.protocol.models import MCPToolDef

console = Console()

_STEP_STYLES = {
    "pending": "dim",
    "loading": "cyan",
    "completed": "green",
    "error": "red",
}


def load_settings(ctx: click.Context) -> MintSettings:
    """Settings from ``--config`` if given, else from the environment.

    Exits with status 1 on a malformed settings file.
    """
    config_path = (ctx.find_root().obj or {}).get("config_path")
    try:
        if config_path:
            return MintSettings.from_yaml(Path(config_path))
        return MintSettings.from_env()
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def print_mint_result(result: MintResult, *, as_json: bool = False) -> None:
    """Pretty-print a mint outcome."""
    if as_json:
        console.print_json(result.model_dump_json())
        return

    if result.success:
        console.print("[green]NFT minted successfully.[/green]")
        console.print(f"  Transaction hash: {result.transaction_hash}")
        console.print(f"  Token ID: {result.token_id or '(not reported)'}")
        return

    kind = result.error_kind
    if kind is not None and kind.is_ambiguous:
        console.print(f"[yellow]Mint outcome unconfirmed:[/yellow] {result.error}")
    else:
        console.print(f"[red]Mint failed:[/red] {result.error}")


def print_step(step: MintStep) -> None:
    style = _STEP_STYLES.get(step.status, "")
    line = f"[{style}]{step.status:>9}[/{style}]  {step.title}"
    if step.detail and step.status in ("completed", "error"):
        line += f": {_truncate(step.detail)}"
    console.print(line)


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print tool definitions as a table."""
    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for tool in tools:
        table.add_row(tool.name, _truncate(tool.description))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
