"""Shared constants — single source of truth.

Centralises the Atlas API paths, the regional-mode status vocabulary and
the convergence defaults used by the update path.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Atlas Admin API
# ---------------------------------------------------------------------------

DEFAULT_ATLAS_BASE_URL: str = "https://cloud.mongodb.com"
"""Default Atlas Admin API host."""

REGIONAL_MODE_PATH: str = "/api/atlas/v1.0/groups/{project_id}/privateEndpoint/regionalMode"
"""Path template of the regional-mode setting endpoint."""

DEFAULT_HTTP_TIMEOUT_SECONDS: float = 30.0

CLIENT_ATLAS: str = "atlas"
"""Client talking to the Atlas Admin API over HTTPS."""

CLIENT_MEMORY: str = "memory"
"""Scriptable in-memory client (tests, dry runs)."""

KNOWN_CLIENTS: frozenset[str] = frozenset({CLIENT_ATLAS, CLIENT_MEMORY})

# ---------------------------------------------------------------------------
# Regional-mode statuses
# ---------------------------------------------------------------------------

STATUS_DELETING: str = "DELETING"
"""Regional endpoints are still being torn down."""

STATUS_DELETED: str = "DELETED"
"""Teardown finished; the setting has converged to disabled."""

STATUS_FAILED: str = "FAILED"
"""Teardown failed on the provider side."""

DISABLE_PENDING_STATES: frozenset[str] = frozenset({STATUS_DELETING})
DISABLE_TARGET_STATES: frozenset[str] = frozenset({STATUS_DELETED})

# ---------------------------------------------------------------------------
# Convergence defaults for the disable path
# ---------------------------------------------------------------------------

DEFAULT_CONVERGENCE_TIMEOUT_SECONDS: float = 3600.0  # 1 hour
DEFAULT_POLL_MIN_INTERVAL_SECONDS: float = 5.0
DEFAULT_POLL_INITIAL_DELAY_SECONDS: float = 3.0

# ---------------------------------------------------------------------------
# Resource identity
# ---------------------------------------------------------------------------

PROJECT_ID_KEY: str = "project_id"
"""Composite-identity key holding the Atlas project identifier."""
