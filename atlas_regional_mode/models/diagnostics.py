"""Structured diagnostics returned by resource operations.

A ``Diagnostic`` carries the operation kind, the resource identity and the
wrapped remote cause. Rendering it for a human is left to the caller.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from atlas_regional_mode.core.exceptions import ResourceError


class Severity(enum.Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One structured problem report.

    Attributes:
        severity: ``ERROR`` fails the operation, ``WARNING`` does not.
        summary: Short human-readable summary.
        operation: Operation kind (``"read"``, ``"update"``, ``"import"``).
        resource_id: Encoded resource identity.
        code: Machine-readable error code from the cause.
        category: Error category from the cause.
        cause: The underlying ``ResourceError``, if any.
        detail: Extra structured context.
    """

    severity: Severity
    summary: str
    operation: str
    resource_id: str = ""
    code: str = ""
    category: str = ""
    cause: ResourceError | None = None
    detail: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_error(
        cls,
        error: ResourceError,
        *,
        operation: str,
        resource_id: str,
        detail: dict[str, object] | None = None,
    ) -> Diagnostic:
        """Build an ``ERROR`` diagnostic from a taxonomy exception."""
        return cls(
            severity=Severity.ERROR,
            summary=error.message,
            operation=operation,
            resource_id=resource_id or error.resource_id,
            code=error.code,
            category=error.category,
            cause=error,
            detail=dict(detail or {}),
        )


def has_errors(diagnostics: list[Diagnostic]) -> bool:
    """Return ``True`` if any diagnostic is an error."""
    return any(d.severity is Severity.ERROR for d in diagnostics)
