"""RemoteAPIClient abstract base class.

Defines the contract every regional-mode API client must implement.
The resource controller and the refresh bindings interact exclusively
with this interface; they never know which concrete client is behind it.

Operations:
    1. ``get_regional_mode(project_id)``          — read the current setting.
    2. ``set_regional_mode(project_id, enabled)`` — request a change.

Failures are raised as ``ClientError`` subclasses carrying the HTTP status
code. HTTP 404 (``ClientNotFoundError``) is the only signal that the
resource is absent. Implementations must tolerate concurrent calls for
different projects.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from atlas_regional_mode.core.exceptions import ContractError, ResourceError

if TYPE_CHECKING:
    from atlas_regional_mode.models.client import ClientConfig
    from atlas_regional_mode.models.setting import RegionalModeSetting


class RemoteAPIClient(abc.ABC):
    """Abstract base class for regional-mode API clients.

    Example usage::

        client = AtlasClient(config)
        setting = client.get_regional_mode(project_id)
        client.set_regional_mode(project_id, enabled=False)
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the client name from configuration."""
        return self._config.name

    @property
    def config(self) -> ClientConfig:
        """Return the client configuration (read-only)."""
        return self._config

    @abc.abstractmethod
    def get_regional_mode(self, project_id: str) -> RegionalModeSetting:
        """Fetch the regional-mode setting of *project_id*.

        Raises:
            ClientNotFoundError: If the remote reports HTTP 404.
            ClientError: On any other transport or API error.
            ClientPayloadError: If the response body is malformed.
        """

    @abc.abstractmethod
    def set_regional_mode(self, project_id: str, enabled: bool) -> RegionalModeSetting:
        """Set the regional-mode flag of *project_id* and return the acknowledgement.

        Raises:
            ClientNotFoundError: If the remote reports HTTP 404.
            ClientError: On any other transport or API error.
            ClientPayloadError: If the response body is malformed.
        """

    def close(self) -> None:  # noqa: B027
        """Release any held transport resources."""


# ---------------------------------------------------------------------------
# Client exceptions
# ---------------------------------------------------------------------------


class ClientError(ResourceError):
    """Base exception for remote API client errors.

    Attributes:
        client: Name of the client that raised the error.
        message: Human-readable error description.
        http_code: HTTP status code, or ``None`` for transport failures.
        retryable: Whether the caller could retry the operation.
    """

    default_operation = "remote_api"
    default_code = "CLIENT_ERROR"

    def __init__(
        self,
        client: str,
        message: str,
        *,
        http_code: int | None = None,
        retryable: bool = False,
        resource_id: str = "",
    ) -> None:
        self.client = client
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            operation=self.default_operation,
            resource_id=resource_id,
            http_code=http_code,
        )

    def __str__(self) -> str:
        if self.http_code is None:
            return f"[{self.client}] {self.message}"
        return f"[{self.client}] HTTP {self.http_code}: {self.message}"


class ClientNotFoundError(ClientError):
    """The remote API reported the resource as absent (HTTP 404)."""

    default_code = "CLIENT_NOT_FOUND"

    def __init__(self, client: str, message: str, *, resource_id: str = "") -> None:
        super().__init__(client, message, http_code=404, resource_id=resource_id)


class ClientAuthError(ClientError):
    """Authentication or authorisation failure with the remote API."""

    default_code = "CLIENT_AUTH_FAILED"

    def __init__(
        self,
        client: str,
        message: str,
        *,
        http_code: int | None = None,
        resource_id: str = "",
    ) -> None:
        super().__init__(
            client, message, http_code=http_code, retryable=False, resource_id=resource_id
        )


class ClientPayloadError(ClientError, ContractError):
    """The remote API returned a body that does not match the expected schema."""

    default_code = "CLIENT_PAYLOAD_INVALID"
