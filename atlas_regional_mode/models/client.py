"""Configuration model for remote API clients."""

from __future__ import annotations

from dataclasses import dataclass, field

from atlas_regional_mode.core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from atlas_regional_mode.models._validation import check_non_empty, check_positive


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Configuration for a specific remote API client.

    Attributes:
        name: Client identifier (must match the client registry key).
        api_base_url: Base URL of the Atlas Admin API (empty = default host).
        public_key: Programmatic API public key (digest username).
        private_key: Programmatic API private key (digest password).
        timeout_seconds: Per-request HTTP timeout.
        extra_params: Client-specific configuration parameters.
    """

    name: str
    api_base_url: str = ""
    public_key: str = ""
    private_key: str = field(default="", repr=False)
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    extra_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        check_non_empty("ClientConfig", "name", self.name)
        check_positive("ClientConfig", "timeout_seconds", self.timeout_seconds)

    @property
    def has_credentials(self) -> bool:
        """Whether both halves of the API key pair are set."""
        return bool(self.public_key and self.private_key)
