"""Tests for ``nftmint create`` CLI command."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from nftmint.cli import main
from nftmint.errors import PinningError
from nftmint.ipfs.models import IPFSUploadResult
from nftmint.minting.models import MintResult

if TYPE_CHECKING:
    from pathlib import Path

ADDRESS = "0xABC0000000000000000000000000000000000001"


def _pinata(*, file_error: Exception | None = None) -> MagicMock:
    pinata = MagicMock()
    pinata.__aenter__ = AsyncMock(return_value=pinata)
    pinata.__aexit__ = AsyncMock(return_value=False)
    pinata.pin_file = AsyncMock(
        return_value=IPFSUploadResult(ipfs_hash="QmImg", ipfs_url="https://gw/ipfs/QmImg"),
        side_effect=file_error,
    )
    pinata.pin_json = AsyncMock(
        return_value=IPFSUploadResult(ipfs_hash="QmMeta", ipfs_url="https://gw/ipfs/QmMeta")
    )
    return pinata


def _image(tmp_path: Path) -> str:
    path = tmp_path / "cat.png"
    path.write_bytes(b"\x89PNG")
    return str(path)


class TestCreate:
    def test_create_and_mint(self, tmp_path: Path) -> None:
        pinata = _pinata()
        with (
            patch("nftmint.ipfs.pinata.PinataClient") as mock_pinata_cls,
            patch("nftmint.minting.orchestrator.MintOrchestrator") as mock_orch_cls,
        ):
            mock_pinata_cls.from_settings.return_value = pinata
            mock_orch_cls.return_value.mint = AsyncMock(
                return_value=MintResult(success=True, transaction_hash="0xabc", token_id="3")
            )

            runner = CliRunner()
            result = runner.invoke(
                main,
                [
                    "create",
                    _image(tmp_path),
                    "--name",
                    "Cat",
                    "-a",
                    "color=orange",
                    "--to",
                    ADDRESS,
                ],
            )

            assert result.exit_code == 0, result.output
            assert "minted successfully" in result.output
            document = pinata.pin_json.await_args.args[0]
            assert document["name"] == "Cat"
            assert document["image"] == "https://gw/ipfs/QmImg"
            assert document["attributes"] == [{"trait_type": "color", "value": "orange"}]
            mock_orch_cls.return_value.mint.assert_awaited_once_with(
                ADDRESS, "https://gw/ipfs/QmMeta"
            )

    def test_pinning_failure(self, tmp_path: Path) -> None:
        pinata = _pinata(file_error=PinningError("Failed to upload image to IPFS"))
        with (
            patch("nftmint.ipfs.pinata.PinataClient") as mock_pinata_cls,
            patch("nftmint.minting.orchestrator.MintOrchestrator") as mock_orch_cls,
        ):
            mock_pinata_cls.from_settings.return_value = pinata
            mock_orch_cls.return_value.mint = AsyncMock()

            runner = CliRunner()
            result = runner.invoke(
                main, ["create", _image(tmp_path), "--name", "Cat", "--to", ADDRESS]
            )

            assert result.exit_code == 1
            assert "Create failed" in result.output
            mock_orch_cls.return_value.mint.assert_not_awaited()

    def test_bad_attribute(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["create", _image(tmp_path), "--name", "Cat", "-a", "novalue", "--to", ADDRESS],
        )

        assert result.exit_code == 2
        assert "TRAIT=VALUE" in result.output

    def test_missing_pinata_keys(self, tmp_path: Path) -> None:
        config = tmp_path / "mint.yaml"
        config.write_text("endpoint: https://mint.example.com/mcp\ncontract_address: '0xC0'\n")

        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "--config",
                str(config),
                "create",
                _image(tmp_path),
                "--name",
                "Cat",
                "--to",
                ADDRESS,
            ],
        )

        assert result.exit_code == 1
        assert "Create error" in result.output
