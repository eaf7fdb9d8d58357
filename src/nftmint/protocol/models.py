"""Protocol models — JSON-RPC 2.0 envelopes, tool definitions, call outcomes.

A tool call produces exactly one :data:`ToolCallResponse` variant per
attempt.  The variants form a tagged union on ``kind`` so callers can
branch on type without inspecting free-form strings.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = "2.0"
    method: str
    params: dict[str, Any] = {}
    id: int | str = 1


class ToolCallRequest(BaseModel):
    """A named tool invocation with its argument mapping."""

    tool_name: str
    arguments: dict[str, Any] = {}
    request_id: int = 2

    def to_params(self) -> dict[str, Any]:
        return {"name": self.tool_name, "arguments": self.arguments}


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


# ---------------------------------------------------------------------------
# Call outcomes
# ---------------------------------------------------------------------------


class ToolCallSuccess(BaseModel):
    """The remote returned a ``result`` member."""

    kind: Literal["success"] = "success"
    result: Any = None


class ToolCallProtocolError(BaseModel):
    """The remote explicitly rejected the call."""

    kind: Literal["protocol_error"] = "protocol_error"
    code: int | str | None = None
    message: str = "Unknown error occurred"


class ToolCallTransportClosed(BaseModel):
    """The session or channel is gone; a new session is required."""

    kind: Literal["transport_closed"] = "transport_closed"
    detail: str = ""


class ToolCallEmptyBody(BaseModel):
    """An empty reply: the operation may have completed but is unconfirmed."""

    kind: Literal["empty_body"] = "empty_body"


class ToolCallTimeout(BaseModel):
    """No reply within the bound; the in-flight request was cancelled."""

    kind: Literal["timeout"] = "timeout"
    timeout: float


ToolCallResponse = Annotated[
    ToolCallSuccess
    | ToolCallProtocolError
    | ToolCallTransportClosed
    | ToolCallEmptyBody
    | ToolCallTimeout,
    Field(discriminator="kind"),
]
