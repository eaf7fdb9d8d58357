"""OpenTelemetry tracing helpers for nftmint.

Thin wrapper around the OpenTelemetry API so the client can call
``get_tracer()`` whether or not the SDK is installed.  Without a configured
SDK the API hands back no-op tracers.

Usage::

    from nftmint.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("nftmint.tool.call") as span:
        span.set_attribute(ATTR_TOOL_NAME, "mint_private_erc721_token")

Call :func:`configure_telemetry` once at startup to export spans
(requires the ``otel`` extra: ``pip install nftmint[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout nftmint instrumentation
# ---------------------------------------------------------------------------

ATTR_TOOL_NAME = "nftmint.tool.name"
ATTR_REQUEST_ID = "nftmint.request.id"
ATTR_HTTP_STATUS = "nftmint.http.status"
ATTR_OUTCOME = "nftmint.outcome"
ATTR_SESSION_REUSED = "nftmint.session.reused"
ATTR_SESSION_ESTABLISHED = "nftmint.session.established"
ATTR_MINT_SUCCESS = "nftmint.mint.success"
ATTR_MINT_ERROR_KIND = "nftmint.mint.error_kind"
ATTR_TX_HASH = "nftmint.mint.transaction_hash"

_INSTRUMENTATION_NAME = "nftmint"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "nftmint",
    console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider that exports nftmint spans.

    ``console`` prints finished spans as JSON to stdout; ``otlp_endpoint``
    ships them over OTLP/gRPC (e.g. ``http://localhost:4317``).  Both need
    the ``otel`` extra.

    Raises:
        ImportError: If the SDK or the requested exporter is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(_missing("opentelemetry-sdk")) from exc

    from nftmint import __version__

    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    for processor in span_processors(console=console, otlp_endpoint=otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def span_processors(*, console: bool, otlp_endpoint: str | None) -> list[Any]:
    """Span processors for the requested exporters; console spans are flushed immediately."""
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            raise ImportError(_missing("opentelemetry-exporter-otlp")) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors


def _missing(package: str) -> str:
    return f"{package} is required to export traces. Install it with: pip install nftmint[otel]"
