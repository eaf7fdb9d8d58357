"""MintOrchestrator — the public "mint token URI to address" operation.

Composes the tool invocation client and the result extractor, and folds
every modeled failure into a :class:`MintResult` so callers never have to
catch protocol exceptions.  Only unmodeled failures (the HTTP stack itself,
programming errors) propagate.
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Any

from nftmint.errors import (
    ConfigurationError,
    DecodeError,
    EmptyBodyError,
    MintError,
    RemoteToolError,
    SemanticError,
    ToolCallTimeoutError,
    TransportClosedError,
    ValidationError,
)
from nftmint.minting.extractor import extract_mint_result
from nftmint.minting.models import (
    PENDING_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    TIMEOUT_MESSAGE,
    ConnectionTestResult,
    MintErrorKind,
    MintResult,
)
from nftmint.protocol.client import ToolInvocationClient
from nftmint.protocol.models import (
    ToolCallEmptyBody,
    ToolCallProtocolError,
    ToolCallSuccess,
    ToolCallTimeout,
    ToolCallTransportClosed,
)
from nftmint.utils.telemetry import (
    ATTR_MINT_ERROR_KIND,
    ATTR_MINT_SUCCESS,
    ATTR_TOOL_NAME,
    ATTR_TX_HASH,
    get_tracer,
)

if TYPE_CHECKING:
    from nftmint.config import MintSettings
    from nftmint.protocol.models import ToolCallResponse

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MINT_TOOL_NAME = "mint_private_erc721_token"

_ERROR_KINDS: dict[type[MintError], MintErrorKind] = {
    ValidationError: MintErrorKind.VALIDATION,
    ConfigurationError: MintErrorKind.CONFIGURATION,
    DecodeError: MintErrorKind.DECODE,
    SemanticError: MintErrorKind.SEMANTIC,
    RemoteToolError: MintErrorKind.PROTOCOL,
    TransportClosedError: MintErrorKind.TRANSPORT_CLOSED,
    ToolCallTimeoutError: MintErrorKind.TIMEOUT,
    EmptyBodyError: MintErrorKind.EMPTY_BODY,
}


class MintOrchestrator:
    """Mint NFTs through the remote mint tool.

    By default every :meth:`mint` call opens its own
    :class:`ToolInvocationClient` (and therefore its own session).  Passing
    ``client`` reuses that instance instead; the caller keeps ownership.
    """

    def __init__(
        self,
        settings: MintSettings,
        *,
        client: ToolInvocationClient | None = None,
        tool_name: str = MINT_TOOL_NAME,
    ) -> None:
        self._settings = settings
        self._client = client
        self._tool_name = tool_name

    async def mint(self, to_address: str, token_uri: str) -> MintResult:
        """Mint *token_uri* to *to_address* and report the outcome."""
        with _tracer.start_as_current_span("nftmint.mint") as span:
            span.set_attribute(ATTR_TOOL_NAME, self._tool_name)
            try:
                arguments = self._mint_arguments(to_address, token_uri)
                outcome = await self._call(arguments)
                result = self._to_result(outcome)
            except tuple(_ERROR_KINDS) as exc:
                result = MintResult.failure(_ERROR_KINDS[type(exc)], str(exc))

            span.set_attribute(ATTR_MINT_SUCCESS, result.success)
            if result.transaction_hash:
                span.set_attribute(ATTR_TX_HASH, result.transaction_hash)
            if result.error_kind is not None:
                span.set_attribute(ATTR_MINT_ERROR_KIND, result.error_kind.value)

        if result.success:
            logger.info("Minted token %s in %s", result.token_id, result.transaction_hash)
        else:
            logger.warning("Mint failed (%s): %s", result.error_kind, result.error)
        return result

    async def test_connection(self) -> ConnectionTestResult:
        """Probe the endpoint with ``tools/list``."""
        try:
            async with AsyncExitStack() as stack:
                client = await self._acquire(stack)
                tools = await client.list_tools()
        except MintError as exc:
            logger.warning("Connection test failed: %s", exc)
            return ConnectionTestResult(success=False, message=f"Connection failed: {exc}")

        return ConnectionTestResult(
            success=True,
            message=f"Mint service connection successful. Found {len(tools)} available tools.",
            tool_count=len(tools),
        )

    def _mint_arguments(self, to_address: str, token_uri: str) -> dict[str, Any]:
        if not to_address or not to_address.strip():
            raise ValidationError("Recipient address is required")
        if not token_uri or not token_uri.strip():
            raise ValidationError("Token URI is required")

        required = ["contract_address"] if self._client else ["endpoint", "contract_address"]
        self._settings.require(*required)

        return {
            "to_address": to_address.strip(),
            "token_address": self._settings.contract_address,
            "token_uri": token_uri.strip(),
        }

    async def _call(self, arguments: dict[str, Any]) -> ToolCallResponse:
        async with AsyncExitStack() as stack:
            client = await self._acquire(stack)
            return await client.call_tool(self._tool_name, arguments)

    async def _acquire(self, stack: AsyncExitStack) -> ToolInvocationClient:
        if self._client is not None:
            return self._client
        return await stack.enter_async_context(ToolInvocationClient.from_settings(self._settings))

    @staticmethod
    def _to_result(outcome: ToolCallResponse) -> MintResult:
        if isinstance(outcome, ToolCallSuccess):
            return extract_mint_result(outcome.result)
        if isinstance(outcome, ToolCallProtocolError):
            return MintResult.failure(MintErrorKind.PROTOCOL, outcome.message)
        if isinstance(outcome, ToolCallTransportClosed):
            return MintResult.failure(MintErrorKind.TRANSPORT_CLOSED, SESSION_EXPIRED_MESSAGE)
        if isinstance(outcome, ToolCallTimeout):
            return MintResult.failure(MintErrorKind.TIMEOUT, TIMEOUT_MESSAGE)
        if isinstance(outcome, ToolCallEmptyBody):
            return MintResult.failure(MintErrorKind.EMPTY_BODY, PENDING_MESSAGE)
        msg = f"Unhandled tool call outcome: {outcome!r}"
        raise TypeError(msg)
