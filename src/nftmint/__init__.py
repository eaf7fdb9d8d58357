"""nftmint — mint NFTs through a remote MCP mint tool."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from nftmint.config import MintSettings as MintSettings
    from nftmint.minting.models import MintResult as MintResult
    from nftmint.minting.orchestrator import MintOrchestrator as MintOrchestrator

_EXPORTS = {
    "MintSettings": "nftmint.config",
    "MintResult": "nftmint.minting.models",
    "MintOrchestrator": "nftmint.minting.orchestrator",
}


def __getattr__(name: str) -> object:
    module_path = _EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'nftmint' has no attribute {name!r}")
