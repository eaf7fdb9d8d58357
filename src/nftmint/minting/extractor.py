"""Pull the transaction hash and token id out of the mint tool's text reply.

The tool reports its outcome as free-form text, e.g.::

    Minted. Transaction Hash: 0xdeadbeef Token ID: 42

The two patterns below are a contract with the remote tool's output format.
"""

from __future__ import annotations

import re
from typing import Any

from nftmint.errors import DecodeError, RemoteToolError, SemanticError
from nftmint.minting.models import MintResult

_TX_HASH_RE = re.compile(r"Transaction Hash: (0x[a-fA-F0-9]+)")
_TOKEN_ID_RE = re.compile(r"Token ID: (\d+)")

INVALID_FORMAT_MESSAGE = "Invalid response format from mint tool"
NO_HASH_MESSAGE = "Minting response received but no transaction hash found"
TOOL_ERROR_MESSAGE = "Mint tool reported an error"


def extract_mint_result(payload: Any) -> MintResult:
    """Turn a successful ``tools/call`` result into a :class:`MintResult`.

    Raises:
        DecodeError: If the payload carries no usable text.
        RemoteToolError: If the tool flagged its own result as an error.
        SemanticError: If the text has no transaction hash.
    """
    text = result_text(payload)
    if isinstance(payload, dict) and payload.get("isError"):
        raise RemoteToolError(text or TOOL_ERROR_MESSAGE)

    if text is None:
        raise DecodeError(INVALID_FORMAT_MESSAGE)

    tx_match = _TX_HASH_RE.search(text)
    if tx_match is None:
        raise SemanticError(NO_HASH_MESSAGE)

    token_match = _TOKEN_ID_RE.search(text)
    return MintResult(
        success=True,
        transaction_hash=tx_match.group(1),
        token_id=token_match.group(1) if token_match else None,
    )


def result_text(payload: Any) -> str | None:
    """Text of the first content block, or the payload itself if it is a string."""
    if isinstance(payload, str):
        return payload
    if not isinstance(payload, dict):
        return None
    content = payload.get("content")
    if not isinstance(content, list) or not content:
        return None
    first = content[0]
    if not isinstance(first, dict):
        return None
    text = first.get("text")
    return text if isinstance(text, str) else None
