"""Tests for MintSettings loading."""

from pathlib import Path

import pytest

from nftmint.config import DEFAULT_TIMEOUT, MintSettings
from nftmint.errors import ConfigurationError


class TestFromEnv:
    def test_reads_variables(self) -> None:
        settings = MintSettings.from_env(
            {
                "NFTMINT_ENDPOINT": "https://mint.example.com/mcp",
                "NFTMINT_API_KEY": "key",
                "NFTMINT_CONFIG": "eyJ9",
                "NFTMINT_CONTRACT_ADDRESS": "0xC0",
                "NFTMINT_TIMEOUT": "30",
                "PINATA_API_KEY": "pk",
            }
        )
        assert settings.endpoint == "https://mint.example.com/mcp"
        assert settings.timeout == 30.0
        assert settings.contract_address == "0xC0"
        assert settings.pinata_api_key == "pk"
        assert settings.session_id is None

    def test_blank_values_are_unset(self) -> None:
        settings = MintSettings.from_env({"NFTMINT_ENDPOINT": "  ", "NFTMINT_TIMEOUT": ""})
        assert settings.endpoint is None
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NFTMINT_SESSION_ID", "abc")
        assert MintSettings.from_env().session_id == "abc"

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            MintSettings.from_env({"NFTMINT_TIMEOUT": "-1"})


class TestFromYaml:
    def test_loads_with_env_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MINT_KEY", "from-env")
        path = tmp_path / "mint.yaml"
        path.write_text(
            "endpoint: https://mint.example.com/mcp\n"
            "api_key: ${MINT_KEY}\n"
            "contract_address: '0xC0'\n"
            "timeout: 60\n",
            encoding="utf-8",
        )
        settings = MintSettings.from_yaml(path)
        assert settings.api_key == "from-env"
        assert settings.contract_address == "0xC0"
        assert settings.timeout == 60.0

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert MintSettings.from_yaml(path) == MintSettings()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            MintSettings.from_yaml(path)

    def test_yaml_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("endpoint: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="YAML parse error"):
            MintSettings.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            MintSettings.from_yaml(tmp_path / "nope.yaml")


class TestRequire:
    def test_lists_every_missing_field(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            MintSettings(endpoint="x").require("endpoint", "contract_address", "api_key")
        assert exc_info.value.missing == ["contract_address", "api_key"]

    def test_passes_when_present(self) -> None:
        MintSettings(endpoint="x", contract_address="0x1").require("endpoint", "contract_address")


class TestEndpointParams:
    def test_includes_only_set_values(self) -> None:
        assert MintSettings(api_key="k").endpoint_params() == {"api_key": "k"}
        assert MintSettings(config_token="c", api_key="k").endpoint_params() == {
            "config": "c",
            "api_key": "k",
        }

    def test_secrets_hidden_from_repr(self) -> None:
        text = repr(MintSettings(api_key="supersecret"))
        assert "supersecret" not in text
