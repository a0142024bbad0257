"""Private endpoint regional-mode resource — read, update and import hooks.

Schema:
    ``project_id`` (string, required, force-new) — the Atlas project.
    ``enabled``    (bool, required)              — regional mode on/off.

The resource id is the composite identity ``{"project_id": ...}`` encoded
with ``encode_state_id``.

Disabling regional mode makes Atlas tear down the regional private
endpoints in the background; ``update`` waits for that teardown (pending
``DELETING``, target ``DELETED``, HTTP 404 meaning "already gone") before
reporting success. Enabling has no teardown and returns right after the
change is acknowledged.

Engineering notes:
    - The API client is injected; hooks never reach for global state.
    - Hooks take immutable inputs and return explicit values.
    - ``read`` reports HTTP 404 as absence (``None``), not as an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from atlas_regional_mode.clients.atlas import AtlasClient
from atlas_regional_mode.clients.base import ClientError
from atlas_regional_mode.clients.memory import InMemoryClient
from atlas_regional_mode.convergence.coordinator import ConvergenceCoordinator, bind_refresh
from atlas_regional_mode.convergence.errors import (
    ConvergenceCancelledError,
    ConvergenceTimeoutError,
)
from atlas_regional_mode.core.config import RegionalModeConfig
from atlas_regional_mode.core.constants import CLIENT_MEMORY, PROJECT_ID_KEY
from atlas_regional_mode.core.exceptions import (
    ImportStateError,
    ResourceError,
    ResourceReadError,
    ResourceUpdateError,
)
from atlas_regional_mode.models.diagnostics import Diagnostic
from atlas_regional_mode.models.identity import (
    IdentityDecodeError,
    decode_state_id,
    encode_state_id,
    is_encoded_state_id,
)
from atlas_regional_mode.models.polling import Cancelled, Failed, Succeeded, TimedOut
from atlas_regional_mode.models.setting import (
    ImportedState,
    RegionalModeAttributes,
    RegionalModeSetting,
)

if TYPE_CHECKING:
    from atlas_regional_mode.clients.base import RemoteAPIClient
    from atlas_regional_mode.convergence.cancellation import CancellationToken
    from atlas_regional_mode.models.polling import PollOutcome

logger = logging.getLogger(__name__)

OPERATION_READ = "read"
OPERATION_UPDATE = "update"
OPERATION_IMPORT = "import"


def resource_id_for(project_id: str) -> str:
    """Return the canonical encoded resource id of *project_id*."""
    return encode_state_id({PROJECT_ID_KEY: project_id})


class RegionalModeResource:
    """Lifecycle hooks of the regional-mode resource.

    Args:
        client: Regional-mode API client (shared across operations).
        config: Resource configuration; supplies the teardown ``PollSpec``.
        coordinator: Convergence coordinator (injectable for tests).
    """

    def __init__(
        self,
        client: RemoteAPIClient,
        *,
        config: RegionalModeConfig | None = None,
        coordinator: ConvergenceCoordinator | None = None,
    ) -> None:
        self._client = client
        self._config = config or RegionalModeConfig()
        self._coordinator = coordinator or ConvergenceCoordinator()

    @classmethod
    def from_config(cls, config: RegionalModeConfig) -> RegionalModeResource:
        """Build the resource with the client selected by ``config.client_name``."""
        client_config = config.client_config()
        client: RemoteAPIClient
        if config.client_name == CLIENT_MEMORY:
            client = InMemoryClient(client_config)
        else:
            client = AtlasClient(client_config)
        logger.info("Regional mode client ready | client=%s", client.name)
        return cls(client, config=config)

    @property
    def client(self) -> RemoteAPIClient:
        return self._client

    # ------------------------------------------------------------------
    # read
    # ------------------------------------------------------------------

    def read(self, resource_id: str) -> RegionalModeAttributes | None:
        """Read the current setting.

        Returns:
            The observed attributes, or ``None`` when the remote reports
            HTTP 404 (the caller must clear the persisted identity).

        Raises:
            ResourceReadError: On an undecodable id or any non-404 failure.
        """
        project_id = _project_id_from(resource_id, ResourceReadError)

        try:
            setting = self._client.get_regional_mode(project_id)
        except ClientError as exc:
            if exc.is_not_found:
                logger.warning(
                    "Regional mode setting not found, removing from state | "
                    "resource_id=%s | project_id=%s",
                    resource_id,
                    project_id,
                )
                return None
            msg = f"error reading regional mode for project {project_id}: {exc}"
            raise ResourceReadError(
                msg,
                resource_id=resource_id,
                http_code=exc.http_code,
                retryable=exc.retryable,
            ) from exc

        logger.debug(
            "Regional mode read | project_id=%s | enabled=%s", project_id, setting.enabled
        )
        return RegionalModeAttributes(project_id=project_id, enabled=setting.enabled)

    # ------------------------------------------------------------------
    # update
    # ------------------------------------------------------------------

    def update(
        self,
        resource_id: str,
        desired: RegionalModeAttributes,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[Diagnostic]:
        """Apply *desired* and, when disabling, wait for the endpoint teardown.

        Returns:
            An empty list on success, otherwise error diagnostics carrying
            the resource id and the remote cause.
        """
        try:
            project_id = _project_id_from(resource_id, ResourceUpdateError)
        except ResourceUpdateError as exc:
            return [Diagnostic.from_error(exc, operation=OPERATION_UPDATE, resource_id=resource_id)]

        if desired.project_id != project_id:
            err = ResourceUpdateError(
                f"project_id cannot change in place ({project_id} -> {desired.project_id}); "
                "the resource must be replaced",
                resource_id=resource_id,
            )
            return [Diagnostic.from_error(err, operation=OPERATION_UPDATE, resource_id=resource_id)]

        enabling = desired.enabled
        logger.info(
            "Regional mode update | resource_id=%s | project_id=%s | enabled=%s",
            resource_id,
            project_id,
            enabling,
        )

        if not enabling:
            logger.info(
                "Waiting for regional private endpoints to be destroyed | project_id=%s",
                project_id,
            )

        outcome = self._coordinator.converge(
            lambda: self._client.set_regional_mode(project_id, enabling),
            self._config.poll_spec(),
            bind_refresh(
                lambda: self._client.get_regional_mode(project_id),
                RegionalModeSetting.disable_status,
            ),
            resource_id=resource_id,
            operation=OPERATION_UPDATE,
            # Only the disable path may treat an absent setting as done.
            absent_is_success=not enabling,
            settled=lambda _ack: enabling,
            cancel=cancel,
        )
        return _diagnostics_for(outcome, resource_id)

    # ------------------------------------------------------------------
    # import
    # ------------------------------------------------------------------

    def import_state(self, import_id: str) -> ImportedState:
        """Import an existing setting by project id (or encoded resource id).

        Raises:
            ImportStateError: If the id is empty or the setting cannot be read.
        """
        raw = import_id.strip()
        if is_encoded_state_id(raw) and PROJECT_ID_KEY in decode_state_id(raw):
            project_id = decode_state_id(raw)[PROJECT_ID_KEY]
        else:
            project_id = raw

        if not project_id:
            msg = "import id must be an Atlas project id"
            raise ImportStateError(msg, resource_id=import_id)

        try:
            setting = self._client.get_regional_mode(project_id)
        except ClientError as exc:
            msg = f"couldn't import regional mode for project {project_id}: {exc}"
            raise ImportStateError(
                msg,
                resource_id=import_id,
                http_code=exc.http_code,
                retryable=exc.retryable,
            ) from exc

        resource_id = resource_id_for(project_id)
        logger.info(
            "Regional mode imported | project_id=%s | enabled=%s | resource_id=%s",
            project_id,
            setting.enabled,
            resource_id,
        )
        return ImportedState(
            attributes=RegionalModeAttributes(project_id=project_id, enabled=setting.enabled),
            resource_id=resource_id,
        )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _project_id_from(resource_id: str, error_cls: type[ResourceError]) -> str:
    """Decode *resource_id* and return its project id, raising *error_cls* otherwise."""
    try:
        ids = decode_state_id(resource_id)
    except IdentityDecodeError as exc:
        raise error_cls(str(exc), resource_id=resource_id) from exc

    project_id = ids.get(PROJECT_ID_KEY, "")
    if not project_id:
        msg = f"resource id {resource_id!r} has no {PROJECT_ID_KEY}"
        raise error_cls(msg, resource_id=resource_id)
    return project_id


def _diagnostics_for(outcome: PollOutcome, resource_id: str) -> list[Diagnostic]:
    """Translate a convergence outcome into update diagnostics."""
    if isinstance(outcome, Succeeded):
        return []

    error: ResourceError
    if isinstance(outcome, Failed):
        error = outcome.cause
    elif isinstance(outcome, TimedOut):
        error = ConvergenceTimeoutError(
            outcome.elapsed_seconds,
            outcome.last_status,
            resource_id=resource_id,
            operation=OPERATION_UPDATE,
        )
    elif isinstance(outcome, Cancelled):
        error = ConvergenceCancelledError(
            f"wait for regional endpoint teardown cancelled: {outcome.reason or 'no reason given'}",
            resource_id=resource_id,
            operation=OPERATION_UPDATE,
        )
    else:  # pragma: no cover - exhaustive over PollOutcome
        msg = f"Unknown poll outcome: {outcome!r}"
        raise TypeError(msg)

    return [
        Diagnostic.from_error(
            error,
            operation=OPERATION_UPDATE,
            resource_id=resource_id,
            detail=outcome.to_dict(),
        )
    ]
