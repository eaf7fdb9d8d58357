"""IPFS pinning via Pinata."""

from nftmint.ipfs.models import IPFSUploadResult
from nftmint.ipfs.pinata import PinataClient

__all__ = ["IPFSUploadResult", "PinataClient"]
