"""In-memory regional-mode client for testing and local dry runs.

Keeps one ``RegionalModeSetting`` per project and lets callers script the
sequence of responses a status query will see, e.g. "DELETING three
times, then 404"::

    client = InMemoryClient(ClientConfig(name="memory"))
    client.put(project_id, RegionalModeSetting(enabled=True))
    client.script_reads(project_id, [deleting, deleting, deleting, not_found])

Scripted items are either a ``RegionalModeSetting`` (returned) or an
exception (raised). Once a project's script is exhausted, reads fall
back to the stored setting, and unknown projects raise
``ClientNotFoundError``.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict, deque
from typing import TYPE_CHECKING

from atlas_regional_mode.clients.base import ClientError, ClientNotFoundError, RemoteAPIClient
from atlas_regional_mode.models.setting import RegionalModeSetting

if TYPE_CHECKING:
    from collections.abc import Iterable

    from atlas_regional_mode.models.client import ClientConfig

logger = logging.getLogger(__name__)

ScriptItem = RegionalModeSetting | Exception


class InMemoryClient(RemoteAPIClient):
    """Scriptable fake of the Atlas regional-mode endpoint.

    Every call is recorded in ``calls`` as ``(method, project_id)``.
    """

    def __init__(self, config: ClientConfig) -> None:
        super().__init__(config)
        self._settings: dict[str, RegionalModeSetting] = {}
        self._read_scripts: defaultdict[str, deque[ScriptItem]] = defaultdict(deque)
        self._write_scripts: defaultdict[str, deque[ScriptItem]] = defaultdict(deque)
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str]] = []

    # ------------------------------------------------------------------
    # Scripting
    # ------------------------------------------------------------------

    def put(self, project_id: str, setting: RegionalModeSetting) -> None:
        """Store the current setting of *project_id*."""
        with self._lock:
            self._settings[project_id] = setting

    def remove(self, project_id: str) -> None:
        """Forget *project_id* so later calls report HTTP 404."""
        with self._lock:
            self._settings.pop(project_id, None)

    def script_reads(self, project_id: str, items: Iterable[ScriptItem]) -> None:
        """Queue responses for upcoming ``get_regional_mode`` calls."""
        with self._lock:
            self._read_scripts[project_id].extend(items)

    def script_writes(self, project_id: str, items: Iterable[ScriptItem]) -> None:
        """Queue responses for upcoming ``set_regional_mode`` calls."""
        with self._lock:
            self._write_scripts[project_id].extend(items)

    def call_count(self, method: str, project_id: str | None = None) -> int:
        """Count recorded calls of *method*, optionally for one project."""
        with self._lock:
            return sum(
                1
                for m, p in self.calls
                if m == method and (project_id is None or p == project_id)
            )

    # ------------------------------------------------------------------
    # RemoteAPIClient
    # ------------------------------------------------------------------

    def get_regional_mode(self, project_id: str) -> RegionalModeSetting:
        """Return the next scripted read, or the stored setting."""
        with self._lock:
            self.calls.append(("get", project_id))
            scripted = self._next(self._read_scripts, project_id)
            if scripted is None:
                scripted = self._stored(project_id)
        return _deliver(scripted)

    def set_regional_mode(self, project_id: str, enabled: bool) -> RegionalModeSetting:
        """Apply the change (unless a scripted write overrides it)."""
        with self._lock:
            self.calls.append(("set", project_id))
            scripted = self._next(self._write_scripts, project_id)
            if scripted is None:
                current = self._stored(project_id)
                if isinstance(current, ClientError):
                    scripted = current
                else:
                    scripted = RegionalModeSetting(enabled=enabled)
                    self._settings[project_id] = scripted
        logger.debug("In-memory write | project_id=%s | enabled=%s", project_id, enabled)
        return _deliver(scripted)

    # ------------------------------------------------------------------
    # Internal helpers (callers hold the lock)
    # ------------------------------------------------------------------

    @staticmethod
    def _next(scripts: defaultdict[str, deque[ScriptItem]], project_id: str) -> ScriptItem | None:
        queue = scripts.get(project_id)
        if queue:
            return queue.popleft()
        return None

    def _stored(self, project_id: str) -> ScriptItem:
        setting = self._settings.get(project_id)
        if setting is None:
            return ClientNotFoundError(self.name, f"Project {project_id} not found")
        return setting


def _deliver(item: ScriptItem) -> RegionalModeSetting:
    if isinstance(item, Exception):
        raise item
    return item
