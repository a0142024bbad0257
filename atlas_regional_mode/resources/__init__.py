"""Declarative resource hooks.

- regional_mode: read / update / import of the private endpoint regional-mode setting
"""

from atlas_regional_mode.resources.regional_mode import (
    OPERATION_IMPORT,
    OPERATION_READ,
    OPERATION_UPDATE,
    RegionalModeResource,
    resource_id_for,
)

__all__ = [
    "OPERATION_IMPORT",
    "OPERATION_READ",
    "OPERATION_UPDATE",
    "RegionalModeResource",
    "resource_id_for",
]
