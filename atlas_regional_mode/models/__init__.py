"""Data models.

Defines the data structures used throughout the resource:
- PollSpec / RemoteResponse / RefreshOutcome / PollOutcome: convergence poller values
- RegionalModeSetting: Atlas API payload (pydantic)
- RegionalModeAttributes / ImportedState: persisted resource attributes
- Diagnostic: structured operation diagnostics
- encode_state_id / decode_state_id: composite resource identity
"""

from atlas_regional_mode.models._validation import ModelValidationError
from atlas_regional_mode.models.diagnostics import Diagnostic, Severity, has_errors
from atlas_regional_mode.models.identity import (
    IdentityDecodeError,
    decode_state_id,
    encode_state_id,
)
from atlas_regional_mode.models.polling import (
    Cancelled,
    Failed,
    Failure,
    NotFoundAsDeleted,
    Ongoing,
    PollOutcome,
    PollSpec,
    PollState,
    RefreshOutcome,
    RemoteResponse,
    Succeeded,
    Terminal,
    TimedOut,
)
from atlas_regional_mode.models.setting import (
    ImportedState,
    RegionalModeAttributes,
    RegionalModeSetting,
)

__all__ = [
    "Cancelled",
    "Diagnostic",
    "Failed",
    "Failure",
    "IdentityDecodeError",
    "ImportedState",
    "ModelValidationError",
    "NotFoundAsDeleted",
    "Ongoing",
    "PollOutcome",
    "PollSpec",
    "PollState",
    "RefreshOutcome",
    "RegionalModeAttributes",
    "RegionalModeSetting",
    "RemoteResponse",
    "Severity",
    "Succeeded",
    "Terminal",
    "TimedOut",
    "decode_state_id",
    "encode_state_id",
    "has_errors",
]
