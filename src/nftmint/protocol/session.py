"""Session management for the streamable-HTTP tool channel.

A :class:`Session` holds the server-issued identifier that correlates tool
calls with a prior ``initialize`` handshake.  It is owned by a single
:class:`~nftmint.protocol.client.ToolInvocationClient`; expiry is never
predicted locally, only observed through a transport-closed reply.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx

from nftmint import __version__
from nftmint.config import DEFAULT_PROTOCOL_VERSION, DEFAULT_TIMEOUT
from nftmint.errors import DecodeError
from nftmint.protocol import codec
from nftmint.protocol.models import ToolCallSuccess
from nftmint.utils.telemetry import ATTR_HTTP_STATUS, ATTR_SESSION_ESTABLISHED, get_tracer

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

SESSION_HEADER = "mcp-session-id"
ACCEPT_HEADER = "application/json, text/event-stream"
DEFAULT_SESSION_ID = "initialized"
INITIALIZE_REQUEST_ID = 0
CLIENT_NAME = "nftmint"


class Session:
    """Lazily-established session identifier for one client."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        session_id: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http
        self._timeout = timeout
        self._url = url
        self._params = dict(params or {})
        self._protocol_version = protocol_version
        self.session_id = session_id
        self.established_at: datetime | None = datetime.now(UTC) if session_id else None
        self.handshakes = 0

    @property
    def is_established(self) -> bool:
        return self.session_id is not None

    async def get_session_id(self) -> str | None:
        """Return the cached session id, performing the handshake if needed.

        ``None`` means no session could be established; whether that is
        fatal is the caller's decision.
        """
        if self.session_id is not None:
            return self.session_id
        session_id = await self.initialize()
        if session_id is not None:
            self.session_id = session_id
            self.established_at = datetime.now(UTC)
        return session_id

    def invalidate(self) -> None:
        """Discard the cached id after the server reported it invalid."""
        if self.session_id is not None:
            logger.info("Discarding expired session (established %s)", self.established_at)
        self.session_id = None
        self.established_at = None

    async def initialize(self) -> str | None:
        """Send the ``initialize`` handshake and return the issued session id."""
        self.handshakes += 1
        body = codec.encode(
            "initialize",
            {
                "protocolVersion": self._protocol_version,
                "capabilities": {"tools": {}},
                "clientInfo": {"name": CLIENT_NAME, "version": __version__},
            },
            INITIALIZE_REQUEST_ID,
        )

        with _tracer.start_as_current_span("nftmint.session.initialize") as span:
            try:
                response = await self._http.post(
                    self._url,
                    params=self._params,
                    content=body,
                    headers={"Content-Type": "application/json", "Accept": ACCEPT_HEADER},
                    timeout=self._timeout,
                )
            except httpx.HTTPError as exc:
                logger.warning("Session handshake failed: %s", exc)
                span.set_attribute(ATTR_SESSION_ESTABLISHED, False)
                return None

            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
            session_id = self._session_from_response(response)
            span.set_attribute(ATTR_SESSION_ESTABLISHED, session_id is not None)
            return session_id

    @staticmethod
    def _session_from_response(response: httpx.Response) -> str | None:
        if not response.is_success:
            logger.warning(
                "Session handshake rejected: %s %s",
                response.status_code,
                response.reason_phrase,
            )
            return None

        header = response.headers.get(SESSION_HEADER)
        if header:
            logger.info("New session established")
            logger.debug("Session id: %s", header)
            return header

        try:
            outcome = codec.decode(response.content)
        except DecodeError as exc:
            logger.warning("Session handshake returned an unreadable body: %s", exc)
            return None

        if isinstance(outcome, ToolCallSuccess):
            logger.info("Initialization succeeded without a session header, using default session")
            return DEFAULT_SESSION_ID

        logger.warning("Session handshake returned no usable identifier: %s", outcome.kind)
        return None
