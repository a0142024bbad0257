"""Unified resource exception taxonomy.

Provides a shared base exception hierarchy for the regional-mode resource,
its API clients and the convergence poller. Every domain exception inherits
from ``ResourceError`` and carries structured context fields (operation,
resource identity, HTTP status) so diagnostics can be built without
string templates.

Taxonomy categories
-------------------
- ``ValidationError``   — input/identity/config violations, never retryable.
- ``TransientError``    — temporary failures (network, throttle, timeout).
- ``PermanentError``    — unrecoverable remote failures, not retryable.
- ``ContractError``     — payload/schema drift from the remote API.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for diagnostics and logging.
"""

from __future__ import annotations


class ResourceError(Exception):
    """Base exception for all regional-mode resource errors.

    Attributes:
        message: Human-readable error description.
        operation: Operation where the error occurred
            (e.g. ``"read"``, ``"update"``, ``"import"``).
        code: Machine-readable error code (e.g. ``"UNEXPECTED_STATUS"``).
        retryable: Whether a caller could reasonably retry the operation.
        resource_id: Encoded identity of the resource involved.
        http_code: HTTP status returned by the remote API, if any.
    """

    #: Default operation for subclasses (override via class attribute or kwarg).
    default_operation: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        operation: str = "",
        code: str = "",
        retryable: bool = False,
        resource_id: str = "",
        http_code: int | None = None,
    ) -> None:
        self.message = message
        self.operation = operation or self.default_operation
        self.code = code or self.default_code
        self.retryable = retryable
        self.resource_id = resource_id
        self.http_code = http_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    @property
    def is_not_found(self) -> bool:
        """Whether the remote API reported the resource as absent (HTTP 404)."""
        return self.http_code == 404

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "operation": self.operation,
            "message": self.message,
            "retryable": self.retryable,
            "resource_id": self.resource_id,
            "http_code": self.http_code,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ResourceError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(ResourceError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(ResourceError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(ResourceError):
    """Payload or schema drift from the remote API. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Resource operation errors
# ---------------------------------------------------------------------------


class ResourceReadError(PermanentError):
    """Reading the regional-mode setting failed for a reason other than absence."""

    default_operation = "read"
    default_code = "RESOURCE_READ_FAILED"


class ResourceUpdateError(PermanentError):
    """Updating the regional-mode setting failed before any wait started."""

    default_operation = "update"
    default_code = "RESOURCE_UPDATE_FAILED"


class ImportStateError(PermanentError):
    """Importing an existing regional-mode setting failed."""

    default_operation = "import"
    default_code = "IMPORT_STATE_FAILED"
