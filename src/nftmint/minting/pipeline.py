"""Create-and-mint pipeline — pin the image, pin the metadata, mint.

Steps run strictly in order; the first failing step stops the run and is
marked ``error``.  Progress is reported through an optional callback each
time a step changes status.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from nftmint.errors import MintError, ValidationError
from nftmint.ipfs.models import IPFSUploadResult  # noqa: TC001
from nftmint.minting.models import MintResult, MintStep, StepStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from nftmint.collaborators import ImageSource, IPFSPinner, Wallet
    from nftmint.minting.models import NFTMetadata
    from nftmint.minting.orchestrator import MintOrchestrator

logger = logging.getLogger(__name__)

STEP_UPLOAD_IMAGE = "upload-image"
STEP_UPLOAD_METADATA = "upload-metadata"
STEP_MINT = "mint"


class PipelineResult(BaseModel):
    steps: list[MintStep]
    image: IPFSUploadResult | None = None
    metadata: IPFSUploadResult | None = None
    mint: MintResult | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.mint is not None and self.mint.success


class MintPipeline:
    """Pins an image and its metadata to IPFS, then mints the token.

    Usage::

        pipeline = MintPipeline(orchestrator, pinner=pinata, wallet=wallet)
        result = await pipeline.run(FileImageSource(path), NFTMetadata(name="Cat"))
    """

    def __init__(
        self,
        orchestrator: MintOrchestrator,
        *,
        pinner: IPFSPinner,
        wallet: Wallet,
    ) -> None:
        self._orchestrator = orchestrator
        self._pinner = pinner
        self._wallet = wallet

    async def run(
        self,
        image_source: ImageSource,
        metadata: NFTMetadata,
        on_step: Callable[[MintStep], None] | None = None,
    ) -> PipelineResult:
        """Execute all steps.

        Raises:
            ValidationError: If no wallet is connected or the name is blank.
        """
        address = self._wallet.current_address()
        if not address:
            raise ValidationError("Connect a wallet before minting")
        if not metadata.name.strip():
            raise ValidationError("NFT name is required")

        steps = [
            MintStep(id=STEP_UPLOAD_IMAGE, title="Uploading image to IPFS"),
            MintStep(id=STEP_UPLOAD_METADATA, title="Uploading metadata to IPFS"),
            MintStep(id=STEP_MINT, title="Minting NFT"),
        ]
        result = PipelineResult(steps=steps)

        def update(step: MintStep, status: StepStatus, detail: str | None = None) -> None:
            step.status = status
            step.detail = detail
            if on_step is not None:
                on_step(step.model_copy())

        image_step, metadata_step, mint_step = result.steps
        current = image_step
        try:
            update(image_step, "loading")
            image = await image_source.load()
            result.image = await self._pinner.pin_file(image)
            update(image_step, "completed", result.image.ipfs_url)

            current = metadata_step
            update(metadata_step, "loading")
            document = metadata.to_token_json(result.image.ipfs_url)
            result.metadata = await self._pinner.pin_json(document)
            update(metadata_step, "completed", result.metadata.ipfs_url)

            current = mint_step
            update(mint_step, "loading")
            result.mint = await self._orchestrator.mint(address, result.metadata.ipfs_url)
        except MintError as exc:
            logger.warning("Pipeline step %s failed: %s", current.id, exc)
            update(current, "error", str(exc))
            result.error = str(exc)
            return result

        if result.mint.success:
            update(mint_step, "completed", result.mint.transaction_hash)
        else:
            update(mint_step, "error", result.mint.error)
            result.error = result.mint.error
        return result
