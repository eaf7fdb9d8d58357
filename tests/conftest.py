"""Shared fixtures: an in-process fake of the remote MCP endpoint."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

ENDPOINT = "https://mint.example.com/mcp"
SESSION_ID = "sess-123"


def sse(payload: dict[str, Any]) -> str:
    """Frame *payload* as a single Server-Sent Event."""
    return "event: message\ndata: " + json.dumps(payload) + "\n\n"


def rpc_result(result: Any, request_id: int = 2) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def mint_text_result(text: str) -> dict[str, Any]:
    return rpc_result({"content": [{"type": "text", "text": text}]})


class FakeServer:
    """Replays canned responses in order and records every request."""

    def __init__(self) -> None:
        self.replies: list[httpx.Response] = []
        self.requests: list[httpx.Request] = []

    def reply(
        self,
        status: int = 200,
        *,
        json_body: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> FakeServer:
        if json_body is not None:
            response = httpx.Response(status, json=json_body, headers=headers)
        else:
            response = httpx.Response(status, text=text or "", headers=headers)
        self.replies.append(response)
        return self

    def handshake(self, session_id: str = SESSION_ID) -> FakeServer:
        """Queue a successful ``initialize`` reply carrying *session_id*."""
        return self.reply(
            json_body=rpc_result({"protocolVersion": "2025-03-26", "capabilities": {}}, 0),
            headers={"mcp-session-id": session_id},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            msg = f"Unexpected request: {request.method} {request.url}"
            raise AssertionError(msg)
        return self.replies.pop(0)

    def http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def methods(self) -> list[str]:
        return [body["method"] for body in self.bodies()]


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()
