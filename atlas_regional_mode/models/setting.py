"""Regional-mode setting models.

- ``RegionalModeSetting``: Pydantic model of the Atlas API payload
  (``{"enabled": true}``, optionally with a teardown ``status``).
- ``RegionalModeAttributes``: The resource attributes persisted by the
  declarative framework (``project_id``, ``enabled``).
- ``ImportedState``: Attributes plus the canonical encoded resource id.

``project_id`` is force-new: a different project is a different resource.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from atlas_regional_mode.core.constants import STATUS_DELETED, STATUS_DELETING
from atlas_regional_mode.models._validation import check_non_empty


class RegionalModeSetting(BaseModel):
    """Regional-mode setting as returned by the Atlas Admin API.

    Attributes:
        enabled: Whether private endpoints are created per region.
        status: Teardown status, when the API reports one
            (``"DELETING"``, ``"DELETED"``, ``"FAILED"``).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    enabled: bool
    status: str | None = Field(default=None)

    def disable_status(self) -> str:
        """Return the status of a disable-triggered teardown.

        An explicit ``status`` from the API always wins. Otherwise the
        setting still reading back enabled means the teardown has not been
        reflected yet, and reading back disabled means it has converged.
        """
        if self.status:
            return self.status.strip().upper()
        return STATUS_DELETING if self.enabled else STATUS_DELETED


@dataclass(frozen=True, slots=True)
class RegionalModeAttributes:
    """Persisted attributes of the regional-mode resource.

    Attributes:
        project_id: Atlas project identifier (force-new).
        enabled: Desired / observed regional-mode flag.
    """

    project_id: str
    enabled: bool

    def __post_init__(self) -> None:
        check_non_empty("RegionalModeAttributes", "project_id", self.project_id)


@dataclass(frozen=True, slots=True)
class ImportedState:
    """Result of importing an existing setting.

    Attributes:
        attributes: Attributes read from the remote API.
        resource_id: Canonical encoded resource id to persist.
    """

    attributes: RegionalModeAttributes
    resource_id: str
