"""Minting models — results, NFT metadata, and pipeline progress."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

SESSION_EXPIRED_MESSAGE = (
    "Mint service session has expired. This is normal after some time of inactivity. "
    "Start a new session and try again."
)
TIMEOUT_MESSAGE = (
    "Request timeout - the minting process took too long. The transaction may still "
    "complete; check the block explorer before trying again."
)
PENDING_MESSAGE = (
    "Empty response from the mint service. The transaction may still be processing; "
    "check the block explorer for your transaction."
)


class MintErrorKind(str, Enum):
    """Why a mint attempt did not produce a confirmed transaction."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    TRANSPORT_CLOSED = "transport_closed"
    TIMEOUT = "timeout"
    EMPTY_BODY = "empty_body"
    PROTOCOL = "protocol"
    DECODE = "decode"
    SEMANTIC = "semantic"

    @property
    def is_ambiguous(self) -> bool:
        """The remote mutation may have happened; the caller must verify externally."""
        return self in (MintErrorKind.TIMEOUT, MintErrorKind.EMPTY_BODY)


class MintResult(BaseModel):
    """Outcome of one mint attempt."""

    success: bool
    transaction_hash: str | None = None
    token_id: str | None = None
    error: str | None = None
    error_kind: MintErrorKind | None = None

    @model_validator(mode="after")
    def _require_hash_on_success(self) -> MintResult:
        if self.success and not self.transaction_hash:
            msg = "A successful mint result requires a transaction hash"
            raise ValueError(msg)
        return self

    @classmethod
    def failure(cls, kind: MintErrorKind, error: str) -> MintResult:
        return cls(success=False, error=error, error_kind=kind)


class ConnectionTestResult(BaseModel):
    """Outcome of probing the remote endpoint with ``tools/list``."""

    success: bool
    message: str
    tool_count: int | None = None


class NFTAttribute(BaseModel):
    trait_type: str = ""
    value: str = ""


class NFTMetadata(BaseModel):
    """User-supplied token metadata before the image URL is known."""

    name: str
    description: str = ""
    attributes: list[NFTAttribute] = Field(default_factory=list)

    def to_token_json(self, image_url: str) -> dict[str, Any]:
        """Build the pinned metadata document, dropping incomplete attributes."""
        return {
            "name": self.name,
            "description": self.description,
            "image": image_url,
            "attributes": [
                attr.model_dump()
                for attr in self.attributes
                if attr.trait_type and attr.value
            ],
        }


StepStatus = Literal["pending", "loading", "completed", "error"]


class MintStep(BaseModel):
    """One stage of the create-and-mint pipeline."""

    id: str
    title: str
    status: StepStatus = "pending"
    detail: str | None = None
