"""Error taxonomy for the minting client.

Every failure the client can model has its own type so the orchestrator can
turn it into a distinguishable :class:`~nftmint.minting.models.MintResult`.
"""


class MintError(Exception):
    """Base error for all minting-client failures."""


class ValidationError(MintError):
    """Caller input was missing or malformed; no network call was attempted."""


class ConfigurationError(MintError):
    """Required endpoint, credential, or contract configuration is missing."""

    def __init__(self, missing: list[str] | None = None, detail: str = "") -> None:
        self.missing = list(missing or [])
        self.detail = detail
        if self.missing:
            msg = "Missing required configuration: " + ", ".join(self.missing)
        else:
            msg = "Invalid configuration"
        super().__init__(msg + (f": {detail}" if detail else ""))


class ConnectionError(MintError):
    """The HTTP stack failed before a response could be classified."""


class TransportClosedError(MintError):
    """The remote session or channel is no longer valid."""


class ToolCallTimeoutError(MintError):
    """No response arrived within the configured bound."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Tool call timed out after {timeout}s")


class EmptyBodyError(MintError):
    """The remote replied with an empty body; completion is unconfirmed."""


class RemoteToolError(MintError):
    """The remote explicitly rejected the call or the tool reported an error."""

    def __init__(self, message: str, code: int | str | None = None) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class DecodeError(MintError):
    """A response body could not be parsed or had an unexpected shape."""


class SemanticError(MintError):
    """A well-formed success response lacked the expected transaction hash."""


class PinningError(MintError):
    """Uploading a file or JSON document to IPFS failed."""
