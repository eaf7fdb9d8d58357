"""``nftmint create`` — pin an image and its metadata, then mint."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from nftmint.cli_commands._output import console, load_settings, print_mint_result, print_step


def _parse_attribute(_ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]) -> list[tuple[str, str]]:
    parsed: list[tuple[str, str]] = []
    for raw in values:
        trait, sep, value = raw.partition("=")
        if not sep or not trait.strip():
            msg = f"expected TRAIT=VALUE, got {raw!r}"
            raise click.BadParameter(msg)
        parsed.append((trait.strip(), value.strip()))
    return parsed


@click.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option("--name", "-n", required=True, help="Token name.")
@click.option("--description", "-d", default="", help="Token description.")
@click.option(
    "--attribute",
    "-a",
    "attributes",
    multiple=True,
    callback=_parse_attribute,
    help="Trait as TRAIT=VALUE (repeatable).",
)
@click.option("--to", "to_address", required=True, help="Recipient wallet address.")
@click.option("--json", "as_json", is_flag=True, help="Print the mint result as JSON.")
@click.pass_context
def create(
    ctx: click.Context,
    image: str,
    name: str,
    description: str,
    attributes: list[tuple[str, str]],
    to_address: str,
    as_json: bool,
) -> None:
    """Pin IMAGE and its metadata to IPFS, then mint it to --to."""
    from nftmint.collaborators import FileImageSource, StaticWallet
    from nftmint.ipfs.pinata import PinataClient
    from nftmint.minting.models import NFTAttribute, NFTMetadata
    from nftmint.minting.orchestrator import MintOrchestrator
    from nftmint.minting.pipeline import MintPipeline, PipelineResult

    settings = load_settings(ctx)
    metadata = NFTMetadata(
        name=name,
        description=description,
        attributes=[NFTAttribute(trait_type=t, value=v) for t, v in attributes],
    )

    async def _create() -> PipelineResult:
        async with PinataClient.from_settings(settings) as pinata:
            pipeline = MintPipeline(
                MintOrchestrator(settings),
                pinner=pinata,
                wallet=StaticWallet(to_address),
            )
            return await pipeline.run(FileImageSource(Path(image)), metadata, on_step=print_step)

    try:
        result = asyncio.run(_create())
    except Exception as exc:
        console.print(f"[red]Create error:[/red] {exc}")
        sys.exit(1)

    if result.mint is not None:
        print_mint_result(result.mint, as_json=as_json)
    elif result.error:
        console.print(f"[red]Create failed:[/red] {result.error}")

    if not result.success:
        sys.exit(1)
