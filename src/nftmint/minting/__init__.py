"""Minting layer — result extraction, orchestration, and the create-and-mint pipeline."""

from nftmint.minting.extractor import extract_mint_result
from nftmint.minting.models import (
    ConnectionTestResult,
    MintErrorKind,
    MintResult,
    MintStep,
    NFTAttribute,
    NFTMetadata,
)
from nftmint.minting.orchestrator import MINT_TOOL_NAME, MintOrchestrator
from nftmint.minting.pipeline import MintPipeline, PipelineResult

__all__ = [
    "MINT_TOOL_NAME",
    "ConnectionTestResult",
    "MintErrorKind",
    "MintOrchestrator",
    "MintPipeline",
    "MintResult",
    "MintStep",
    "NFTAttribute",
    "NFTMetadata",
    "PipelineResult",
    "extract_mint_result",
]
