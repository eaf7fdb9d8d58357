"""PinataClient — pins images and metadata documents to IPFS via Pinata."""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from nftmint.config import PINATA_API_URL, PINATA_GATEWAY_URL
from nftmint.errors import PinningError
from nftmint.ipfs.models import IPFSUploadResult

if TYPE_CHECKING:
    from nftmint.collaborators import ImagePayload
    from nftmint.config import MintSettings

logger = logging.getLogger(__name__)


class PinataClient:
    """Satisfies the :class:`~nftmint.collaborators.IPFSPinner` protocol.

    Usage::

        async with PinataClient(api_key, secret_key) as pinata:
            image = await pinata.pin_file(payload)
            meta = await pinata.pin_json({"name": "...", "image": image.ipfs_url})
    """

    def __init__(
        self,
        api_key: str,
        secret_api_key: str,
        *,
        api_url: str = PINATA_API_URL,
        gateway_url: str = PINATA_GATEWAY_URL,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._gateway_url = gateway_url.rstrip("/")
        self._headers = {
            "pinata_api_key": api_key,
            "pinata_secret_api_key": secret_api_key,
        }
        self._owns_http = http is None
        self._client = http or httpx.AsyncClient()

    @classmethod
    def from_settings(
        cls, settings: MintSettings, *, http: httpx.AsyncClient | None = None
    ) -> PinataClient:
        settings.require("pinata_api_key", "pinata_secret_api_key")
        assert settings.pinata_api_key is not None
        assert settings.pinata_secret_api_key is not None
        return cls(
            settings.pinata_api_key,
            settings.pinata_secret_api_key,
            api_url=settings.pinata_api_url,
            gateway_url=settings.pinata_gateway_url,
            http=http,
        )

    async def __aenter__(self) -> PinataClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._owns_http:
            await self._client.aclose()

    async def pin_file(self, image: ImagePayload) -> IPFSUploadResult:
        """Upload *image* with ``pinFileToIPFS``."""
        data = {
            "pinataMetadata": json.dumps({"name": f"NFT-Image-{_timestamp()}"}),
            "pinataOptions": json.dumps({"cidVersion": 0}),
        }
        files = {"file": (image.filename, image.content, image.content_type)}
        logger.info("Pinning image %s (%d bytes)", image.filename, len(image.content))
        return await self._pin(
            "/pinning/pinFileToIPFS",
            "Failed to upload image to IPFS",
            data=data,
            files=files,
        )

    async def pin_json(self, document: dict[str, Any]) -> IPFSUploadResult:
        """Upload a JSON *document* with ``pinJSONToIPFS``."""
        payload = {
            "pinataContent": document,
            "pinataMetadata": {"name": f"NFT-Metadata-{_timestamp()}"},
        }
        logger.info("Pinning metadata document")
        return await self._pin(
            "/pinning/pinJSONToIPFS",
            "Failed to upload metadata to IPFS",
            json=payload,
        )

    async def _pin(self, path: str, failure: str, **request: Any) -> IPFSUploadResult:
        try:
            response = await self._client.post(
                f"{self._api_url}{path}", headers=self._headers, **request
            )
            response.raise_for_status()
            ipfs_hash = response.json()["IpfsHash"]
        except httpx.HTTPError as exc:
            raise PinningError(f"{failure}: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise PinningError(f"{failure}: unexpected response") from exc

        logger.debug("Pinned %s", ipfs_hash)
        return IPFSUploadResult(
            ipfs_hash=ipfs_hash,
            ipfs_url=f"{self._gateway_url}/{ipfs_hash}",
        )


def _timestamp() -> int:
    return int(time.time() * 1000)
