"""Resource configuration loaded from environment variables.

All configuration values have sensible defaults matching the provider's
documented behaviour (1 h teardown budget, 5 s poll floor, 3 s delay).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric value
    is out of its valid range, so bad configuration is caught at startup
    rather than in the middle of a convergence wait.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

from atlas_regional_mode.core.constants import (
    CLIENT_ATLAS,
    DEFAULT_ATLAS_BASE_URL,
    DEFAULT_CONVERGENCE_TIMEOUT_SECONDS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_POLL_INITIAL_DELAY_SECONDS,
    DEFAULT_POLL_MIN_INTERVAL_SECONDS,
    DISABLE_PENDING_STATES,
    DISABLE_TARGET_STATES,
    KNOWN_CLIENTS,
)
from atlas_regional_mode.core.exceptions import ValidationError
from atlas_regional_mode.models.client import ClientConfig
from atlas_regional_mode.models.polling import PollSpec


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_operation = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class RegionalModeConfig:
    """Immutable resource configuration.

    Loaded once at startup and handed to the resource controller.

    Attributes:
        api_base_url: Atlas Admin API host.
        public_key: Programmatic API public key.
        private_key: Programmatic API private key.
        client_name: Client to use (``atlas`` or ``memory``).
        http_timeout_seconds: Per-request HTTP timeout.
        convergence_timeout_seconds: Maximum wait for regional endpoint teardown.
        poll_min_interval_seconds: Fixed pause between status queries.
        poll_initial_delay_seconds: Pause before the first status query.
    """

    api_base_url: str = DEFAULT_ATLAS_BASE_URL
    public_key: str = ""
    private_key: str = field(default="", repr=False)
    client_name: str = CLIENT_ATLAS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    convergence_timeout_seconds: float = DEFAULT_CONVERGENCE_TIMEOUT_SECONDS
    poll_min_interval_seconds: float = DEFAULT_POLL_MIN_INTERVAL_SECONDS
    poll_initial_delay_seconds: float = DEFAULT_POLL_INITIAL_DELAY_SECONDS

    @classmethod
    def from_env(cls) -> RegionalModeConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``REGIONAL_MODE_TIMEOUT_SECONDS=abc``).
        """
        config = cls(
            api_base_url=os.getenv("ATLAS_BASE_URL", DEFAULT_ATLAS_BASE_URL),
            public_key=os.getenv("MONGODB_ATLAS_PUBLIC_KEY", ""),
            private_key=os.getenv("MONGODB_ATLAS_PRIVATE_KEY", ""),
            client_name=os.getenv("ATLAS_CLIENT", CLIENT_ATLAS),
            http_timeout_seconds=float(os.getenv("ATLAS_HTTP_TIMEOUT_SECONDS", "30")),
            convergence_timeout_seconds=float(os.getenv("REGIONAL_MODE_TIMEOUT_SECONDS", "3600")),
            poll_min_interval_seconds=float(os.getenv("REGIONAL_MODE_MIN_INTERVAL_SECONDS", "5")),
            poll_initial_delay_seconds=float(os.getenv("REGIONAL_MODE_DELAY_SECONDS", "3")),
        )
        _validate(config)
        return config

    def poll_spec(self) -> PollSpec:
        """Build the ``PollSpec`` used to wait for regional endpoint teardown."""
        return PollSpec(
            pending_states=DISABLE_PENDING_STATES,
            target_states=DISABLE_TARGET_STATES,
            timeout_seconds=self.convergence_timeout_seconds,
            min_interval_seconds=self.poll_min_interval_seconds,
            initial_delay_seconds=self.poll_initial_delay_seconds,
        )

    def client_config(self) -> ClientConfig:
        """Build the ``ClientConfig`` for the selected client."""
        return ClientConfig(
            name=self.client_name,
            api_base_url=self.api_base_url,
            public_key=self.public_key,
            private_key=self.private_key,
            timeout_seconds=self.http_timeout_seconds,
        )


def _validate(config: RegionalModeConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.api_base_url:
        raise ConfigValidationError("ATLAS_BASE_URL", config.api_base_url, "must not be empty")

    if not config.client_name:
        raise ConfigValidationError("ATLAS_CLIENT", config.client_name, "must not be empty")

    if config.client_name not in KNOWN_CLIENTS:
        raise ConfigValidationError(
            "ATLAS_CLIENT",
            config.client_name,
            f"must be one of {', '.join(sorted(KNOWN_CLIENTS))}",
        )

    if bool(config.public_key) != bool(config.private_key):
        raise ConfigValidationError(
            "MONGODB_ATLAS_PUBLIC_KEY",
            "<redacted>",
            "public and private keys must be set together",
        )

    _check_seconds("ATLAS_HTTP_TIMEOUT_SECONDS", config.http_timeout_seconds)
    _check_seconds("REGIONAL_MODE_TIMEOUT_SECONDS", config.convergence_timeout_seconds)
    _check_seconds("REGIONAL_MODE_MIN_INTERVAL_SECONDS", config.poll_min_interval_seconds)
    _check_seconds(
        "REGIONAL_MODE_DELAY_SECONDS", config.poll_initial_delay_seconds, allow_zero=True
    )


def _check_seconds(key: str, value: float, *, allow_zero: bool = False) -> None:
    # float() accepts "nan" and "inf"; neither bounds a wait.
    if not math.isfinite(value):
        raise ConfigValidationError(key, value, "must be a finite number (seconds)")
    if allow_zero and value < 0:
        raise ConfigValidationError(key, value, "must be >= 0 (seconds)")
    if not allow_zero and value <= 0:
        raise ConfigValidationError(key, value, "must be > 0 (seconds)")
