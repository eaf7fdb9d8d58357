"""nftmint CLI entrypoint."""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from nftmint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="nftmint")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML settings file (defaults to NFTMINT_* environment variables).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--telemetry", is_flag=True, help="Print trace spans to the console.")
@click.option(
    "--otlp-endpoint",
    envvar="OTEL_EXPORTER_OTLP_ENDPOINT",
    default=None,
    help="Export trace spans over OTLP/gRPC to this collector.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: str | None,
    verbose: bool,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """nftmint — mint NFTs through a remote MCP mint tool."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    if telemetry or otlp_endpoint:
        from nftmint.utils.telemetry import configure_telemetry

        configure_telemetry(console=telemetry, otlp_endpoint=otlp_endpoint)


# Register subcommands
from nftmint.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
