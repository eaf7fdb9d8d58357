"""IPFS pinning models."""

from __future__ import annotations

from pydantic import BaseModel


class IPFSUploadResult(BaseModel):
    """Content hash of a pinned object and its public gateway URL."""

    ipfs_hash: str
    ipfs_url: str
