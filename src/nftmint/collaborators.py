"""Interfaces for the services the mint pipeline consumes but does not own.

Image sources, IPFS pinning and wallets are external concerns; the pipeline
only needs the narrow shapes below.  Simple file- and address-backed
implementations are provided for the CLI.
"""

from __future__ import annotations

import mimetypes
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel

from nftmint.errors import ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from nftmint.ipfs.models import IPFSUploadResult


class ImagePayload(BaseModel):
    """Raw image bytes plus the filename used when pinning."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@runtime_checkable
class ImageSource(Protocol):
    """Produces the image to mint (an upload, or an AI generator)."""

    async def load(self) -> ImagePayload: ...


@runtime_checkable
class IPFSPinner(Protocol):
    """Pins files and JSON documents to IPFS."""

    async def pin_file(self, image: ImagePayload) -> IPFSUploadResult: ...
    async def pin_json(self, document: dict[str, object]) -> IPFSUploadResult: ...


@runtime_checkable
class Wallet(Protocol):
    """Reports the connected account, if any."""

    def current_address(self) -> str | None: ...


class FileImageSource:
    """Reads an image from the local filesystem."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def load(self) -> ImagePayload:
        try:
            content = self._path.read_bytes()
        except OSError as exc:
            raise ValidationError(f"Cannot read image {self._path}: {exc}") from exc
        content_type, _ = mimetypes.guess_type(self._path.name)
        return ImagePayload(
            filename=self._path.name,
            content=content,
            content_type=content_type or "application/octet-stream",
        )


class StaticWallet:
    """A wallet whose address is known up front."""

    def __init__(self, address: str | None) -> None:
        self._address = address

    def current_address(self) -> str | None:
        return self._address or None
