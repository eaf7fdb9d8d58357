"""Protocol codec — JSON-RPC request encoding and response decoding.

Responses arrive either as a bare JSON object or as a single Server-Sent
Event frame (``event: message\\ndata: {...}``).  :func:`decode` accepts both
and classifies the payload into a :data:`ToolCallResponse` variant.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from nftmint.errors import DecodeError
from nftmint.protocol.models import (
    JsonRpcRequest,
    ToolCallEmptyBody,
    ToolCallProtocolError,
    ToolCallResponse,
    ToolCallSuccess,
    ToolCallTransportClosed,
)

logger = logging.getLogger(__name__)

SSE_PREAMBLE = "event: message\ndata: "
TRANSPORT_CLOSED_TEXT = "transport is closed"
TRANSPORT_CLOSED_CODE = "TRANSPORT_CLOSED"
DEFAULT_ERROR_MESSAGE = "Unknown error occurred"


def encode(method: str, params: dict[str, Any], request_id: int | str) -> bytes:
    """Serialize a JSON-RPC 2.0 request body."""
    request = JsonRpcRequest(method=method, params=params, id=request_id)
    return request.model_dump_json().encode()


def decode(raw: str | bytes) -> ToolCallResponse:
    """Classify a raw response body.

    Raises:
        DecodeError: If the body is not UTF-8 JSON or is neither a result nor an error.
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Response body is not valid UTF-8: {exc}") from exc
    else:
        text = raw
    if not text.strip():
        return ToolCallEmptyBody()

    data = parse_body(text)

    if not isinstance(data, dict):
        raise DecodeError("Invalid response format")
    if data.get("error") is not None:
        return classify_error(data["error"])
    if "result" in data:
        return ToolCallSuccess(result=data["result"])
    raise DecodeError("Invalid response format")


def parse_body(text: str) -> Any:
    """Parse *text* as JSON, stripping a leading SSE preamble if present."""
    if text.startswith(SSE_PREAMBLE):
        text = text[len(SSE_PREAMBLE):]
    try:
        return json.loads(text.strip())
    except json.JSONDecodeError as exc:
        logger.debug("Undecodable response body: %.200r", text)
        raise DecodeError(f"Malformed response body: {exc}") from exc


def classify_error(error: Any) -> ToolCallProtocolError | ToolCallTransportClosed:
    """Map a JSON-RPC ``error`` member to a transport-closed or protocol error.

    The error may be a bare string or an object with ``code`` / ``message``.
    """
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message")
        message_text = str(message) if message else ""
        lowered = message_text.lower()
        if (
            TRANSPORT_CLOSED_TEXT in lowered
            or "session" in lowered
            or code == TRANSPORT_CLOSED_CODE
        ):
            return ToolCallTransportClosed(detail=message_text or str(code))
        return ToolCallProtocolError(
            code=code if isinstance(code, (int, str)) else None,
            message=message_text or DEFAULT_ERROR_MESSAGE,
        )

    error_text = str(error)
    if TRANSPORT_CLOSED_TEXT in error_text.lower():
        return ToolCallTransportClosed(detail=error_text)
    return ToolCallProtocolError(message=error_text or DEFAULT_ERROR_MESSAGE)
