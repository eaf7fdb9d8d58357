"""ToolInvocationClient — issues ``tools/call`` over a streamable-HTTP channel.

Each call carries the session id obtained from the client's own
:class:`~nftmint.protocol.session.Session`, is bounded by a single timeout,
and yields exactly one :data:`~nftmint.protocol.models.ToolCallResponse`.
Nothing is retried here: a transport-closed reply invalidates the session
and is returned to the caller, who decides whether to start over.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, cast

import httpx

from nftmint.config import DEFAULT_PROTOCOL_VERSION, DEFAULT_TIMEOUT
from nftmint.errors import (
    ConnectionError,
    DecodeError,
    EmptyBodyError,
    RemoteToolError,
    ToolCallTimeoutError,
    TransportClosedError,
)
from nftmint.protocol import codec
from nftmint.protocol.models import (
    MCPToolDef,
    ToolCallEmptyBody,
    ToolCallProtocolError,
    ToolCallRequest,
    ToolCallResponse,
    ToolCallTimeout,
    ToolCallTransportClosed,
)
from nftmint.protocol.session import ACCEPT_HEADER, SESSION_HEADER, Session
from nftmint.utils.telemetry import (
    ATTR_HTTP_STATUS,
    ATTR_OUTCOME,
    ATTR_REQUEST_ID,
    ATTR_SESSION_REUSED,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from nftmint.config import MintSettings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

TOOLS_LIST_REQUEST_ID = 1
TOOLS_CALL_REQUEST_ID = 2


class ToolInvocationClient:
    """Async context manager that calls tools on a remote MCP endpoint.

    Usage::

        async with ToolInvocationClient.from_settings(settings) as client:
            outcome = await client.call_tool("mint_private_erc721_token", {...})

    An ``http`` client may be injected (tests use ``httpx.MockTransport``);
    an injected client is left open on exit.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        params: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session_id: str | None = None,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._params = dict(params or {})
        self._timeout = timeout
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self.session = Session(
            self._http,
            endpoint,
            params=self._params,
            protocol_version=protocol_version,
            session_id=session_id,
            timeout=timeout,
        )

    @classmethod
    def from_settings(
        cls, settings: MintSettings, *, http: httpx.AsyncClient | None = None
    ) -> ToolInvocationClient:
        """Build a client from :class:`MintSettings` (``endpoint`` must be set)."""
        settings.require("endpoint")
        assert settings.endpoint is not None
        return cls(
            settings.endpoint,
            params=settings.endpoint_params(),
            timeout=settings.timeout,
            session_id=settings.session_id,
            protocol_version=settings.protocol_version,
            http=http,
        )

    async def __aenter__(self) -> ToolInvocationClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    @property
    def timeout(self) -> float:
        return self._timeout

    async def call_tool(self, tool_name: str, arguments: dict[str, Any]) -> ToolCallResponse:
        """Invoke *tool_name* once and classify the outcome.

        Raises:
            DecodeError: If the reply body is malformed.
            ConnectionError: If the HTTP stack fails for a reason other than a timeout.
        """
        request = ToolCallRequest(
            tool_name=tool_name,
            arguments=arguments,
            request_id=TOOLS_CALL_REQUEST_ID,
        )
        with _tracer.start_as_current_span("nftmint.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, tool_name)
            span.set_attribute(ATTR_REQUEST_ID, request.request_id)
            logger.info("Calling tool %s", tool_name)
            logger.debug("Tool %s arguments: %s", tool_name, arguments)

            outcome = await self._send("tools/call", request.to_params(), request.request_id, span)

            span.set_attribute(ATTR_OUTCOME, outcome.kind)
            logger.info("Tool %s finished: %s", tool_name, outcome.kind)
            return outcome

    async def list_tools(self) -> list[MCPToolDef]:
        """Send ``tools/list`` and parse the returned tool definitions.

        Raises:
            RemoteToolError: If the server rejects the listing.
            TransportClosedError: If the session was closed by the server.
            ToolCallTimeoutError: If no reply arrives in time.
            EmptyBodyError: If the reply body is empty.
        """
        with _tracer.start_as_current_span("nftmint.tools.list") as span:
            outcome = await self._send("tools/list", {}, TOOLS_LIST_REQUEST_ID, span)
            span.set_attribute(ATTR_OUTCOME, outcome.kind)

        if isinstance(outcome, ToolCallProtocolError):
            raise RemoteToolError(outcome.message, code=outcome.code)
        if isinstance(outcome, ToolCallTransportClosed):
            raise TransportClosedError(outcome.detail)
        if isinstance(outcome, ToolCallTimeout):
            raise ToolCallTimeoutError(outcome.timeout)
        if isinstance(outcome, ToolCallEmptyBody):
            raise EmptyBodyError("Tool listing returned an empty body")

        result = outcome.result
        if isinstance(result, dict):
            raw_tools = cast("list[dict[str, Any]]", result.get("tools", []))
        elif isinstance(result, list):
            raw_tools = cast("list[dict[str, Any]]", result)
        else:
            raise DecodeError("Invalid tools/list result")
        return [MCPToolDef.model_validate(raw) for raw in raw_tools]

    async def _send(
        self,
        method: str,
        params: dict[str, Any],
        request_id: int,
        span: Any,
    ) -> ToolCallResponse:
        reused = self.session.is_established
        session_id = await self.session.get_session_id()
        span.set_attribute(ATTR_SESSION_REUSED, reused)

        headers = {"Content-Type": "application/json", "Accept": ACCEPT_HEADER}
        if session_id is not None:
            headers[SESSION_HEADER] = session_id
        else:
            logger.warning("No session available, sending %s without a session header", method)

        body = codec.encode(method, params, request_id)

        try:
            response = await asyncio.wait_for(
                self._http.post(
                    self._endpoint,
                    params=self._params,
                    content=body,
                    headers=headers,
                    timeout=self._timeout,
                ),
                timeout=self._timeout,
            )
        except (TimeoutError, httpx.TimeoutException):
            logger.warning("%s timed out after %ss", method, self._timeout)
            return ToolCallTimeout(timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise ConnectionError(str(exc)) from exc

        span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
        outcome = self._classify(response)
        if isinstance(outcome, ToolCallTransportClosed):
            self.session.invalidate()
        return outcome

    @staticmethod
    def _classify(response: httpx.Response) -> ToolCallResponse:
        if response.is_success:
            return codec.decode(response.content)

        text = response.text
        status = response.status_code
        logger.debug("Error response %s: %.500s", status, text)
        if codec.TRANSPORT_CLOSED_TEXT in text.lower() or status == 400:
            return ToolCallTransportClosed(detail=text.strip() or f"HTTP {status}")

        # Error statuses may still carry a JSON-RPC error, e.g. a 404 for an unknown session
        try:
            data = codec.parse_body(text)
        except DecodeError:
            data = None
        if isinstance(data, dict) and data.get("error") is not None:
            return codec.classify_error(data["error"])

        return ToolCallProtocolError(
            code=status,
            message=f"HTTP error {status}: {text.strip() or response.reason_phrase}",
        )
