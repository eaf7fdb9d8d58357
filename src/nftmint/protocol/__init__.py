"""Protocol layer — session, codec, and tool invocation over streamable HTTP."""

from nftmint.protocol.client import ToolInvocationClient
from nftmint.protocol.models import (
    JsonRpcRequest,
    MCPToolDef,
    ToolCallEmptyBody,
    ToolCallProtocolError,
    ToolCallRequest,
    ToolCallResponse,
    ToolCallSuccess,
    ToolCallTimeout,
    ToolCallTransportClosed,
)
from nftmint.protocol.session import DEFAULT_SESSION_ID, Session

__all__ = [
    "DEFAULT_SESSION_ID",
    "JsonRpcRequest",
    "MCPToolDef",
    "Session",
    "ToolCallEmptyBody",
    "ToolCallProtocolError",
    "ToolCallRequest",
    "ToolCallResponse",
    "ToolCallSuccess",
    "ToolCallTimeout",
    "ToolCallTransportClosed",
    "ToolInvocationClient",
]
