"""Client configuration — endpoint, credentials, contract address.

Settings come from the environment (:meth:`MintSettings.from_env`) or from a
YAML file (:meth:`MintSettings.from_yaml`).  Nothing is validated for
presence at load time; operations call :meth:`MintSettings.require` for the
fields they actually need so a missing value fails before any network call.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from nftmint.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_TIMEOUT = 120.0
DEFAULT_PROTOCOL_VERSION = "2025-03-26"
PINATA_API_URL = "https://api.pinata.cloud"
PINATA_GATEWAY_URL = "https://gateway.pinata.cloud/ipfs"

# Field name -> environment variable
_ENV_VARS: dict[str, str] = {
    "endpoint": "NFTMINT_ENDPOINT",
    "api_key": "NFTMINT_API_KEY",
    "config_token": "NFTMINT_CONFIG",
    "session_id": "NFTMINT_SESSION_ID",
    "contract_address": "NFTMINT_CONTRACT_ADDRESS",
    "timeout": "NFTMINT_TIMEOUT",
    "pinata_api_key": "PINATA_API_KEY",
    "pinata_secret_api_key": "PINATA_SECRET_API_KEY",
}


class MintSettings(BaseModel):
    """Everything the minting client needs to reach the remote tool.

    ``config_token`` is the opaque, already-encoded server configuration
    passed as the ``config`` query parameter; ``session_id`` optionally
    seeds the session so the first call skips the initialize handshake.
    """

    endpoint: str | None = None
    api_key: str | None = Field(default=None, repr=False)
    config_token: str | None = Field(default=None, repr=False)
    session_id: str | None = None
    contract_address: str | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    pinata_api_key: str | None = Field(default=None, repr=False)
    pinata_secret_api_key: str | None = Field(default=None, repr=False)
    pinata_api_url: str = PINATA_API_URL
    pinata_gateway_url: str = PINATA_GATEWAY_URL

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> MintSettings:
        """Build settings from ``NFTMINT_*`` / ``PINATA_*`` environment variables.

        Blank values are treated as unset.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for field, var in _ENV_VARS.items():
            value = env.get(var, "").strip()
            if value:
                data[field] = value
        return cls._validate(data)

    @classmethod
    def from_yaml(cls, path: Path) -> MintSettings:
        """Read a YAML mapping of settings, expanding ``${VAR}`` references.

        Raises:
            ConfigurationError: On unreadable files, YAML errors, or invalid values.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(detail=f"Cannot read {path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigurationError(detail=f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(detail="Settings YAML must be a mapping")
        return cls._validate(data)

    @classmethod
    def _validate(cls, data: dict[str, Any]) -> MintSettings:
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise ConfigurationError(detail=str(exc)) from exc

    def require(self, *fields: str) -> None:
        """Raise :class:`ConfigurationError` listing every unset field in *fields*."""
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigurationError(missing)

    def endpoint_params(self) -> dict[str, str]:
        """Query parameters appended to every request to the remote endpoint."""
        params: dict[str, str] = {}
        if self.config_token:
            params["config"] = self.config_token
        if self.api_key:
            params["api_key"] = self.api_key
        return params
