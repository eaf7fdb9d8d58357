"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from nftmint.utils.telemetry import (
    ATTR_MINT_ERROR_KIND,
    ATTR_MINT_SUCCESS,
    ATTR_OUTCOME,
    ATTR_TOOL_NAME,
    ATTR_TX_HASH,
    _INSTRUMENTATION_NAME,
    configure_telemetry,
    get_tracer,
    span_processors,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("nftmint.protocol.client"), trace.Tracer)

    def test_default_name(self) -> None:
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span_accepts_attributes(self) -> None:
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("nftmint.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, "mint_private_erc721_token")
            span.set_attribute(ATTR_OUTCOME, "success")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="nftmint\\[otel\\]"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(
                    console=False,
                    otlp_endpoint="http://localhost:4317",
                )

    def test_console_processor_only_when_requested(self) -> None:
        try:
            from opentelemetry.sdk.trace.export import SimpleSpanProcessor
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        assert span_processors(console=False, otlp_endpoint=None) == []
        [processor] = span_processors(console=True, otlp_endpoint=None)
        assert isinstance(processor, SimpleSpanProcessor)


class TestAttributeConstants:
    @pytest.mark.parametrize(
        "key",
        [ATTR_TOOL_NAME, ATTR_OUTCOME, ATTR_MINT_SUCCESS, ATTR_MINT_ERROR_KIND, ATTR_TX_HASH],
    )
    def test_namespaced(self, key: str) -> None:
        assert key.startswith("nftmint.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "nftmint"
