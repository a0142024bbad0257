"""MongoDB Atlas Admin API client (regional-mode endpoint).

Concrete ``RemoteAPIClient`` implementation talking JSON over HTTPS to::

    GET   {base}/api/atlas/v1.0/groups/{project_id}/privateEndpoint/regionalMode
    PATCH {base}/api/atlas/v1.0/groups/{project_id}/privateEndpoint/regionalMode
          {"enabled": <bool>}

Authentication uses HTTP digest with the programmatic API key pair.

Error mapping:
    - 404                 → ``ClientNotFoundError``
    - 401 / 403           → ``ClientAuthError``
    - 429 / 5xx           → ``ClientError(retryable=True)``
    - other 4xx           → ``ClientError(retryable=False)``
    - transport failure   → ``ClientError(retryable=True, http_code=None)``
    - malformed JSON body → ``ClientPayloadError``

The client never retries; the flags only inform callers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
import pydantic

from atlas_regional_mode.clients.base import (
    ClientAuthError,
    ClientError,
    ClientNotFoundError,
    ClientPayloadError,
    RemoteAPIClient,
)
from atlas_regional_mode.core.constants import DEFAULT_ATLAS_BASE_URL, REGIONAL_MODE_PATH
from atlas_regional_mode.models.setting import RegionalModeSetting

if TYPE_CHECKING:
    from atlas_regional_mode.models.client import ClientConfig

logger = logging.getLogger(__name__)

_ACCEPT_HEADER = "application/json"
_USER_AGENT = "atlas-regional-mode/0.1.0"


class AtlasClient(RemoteAPIClient):
    """Atlas Admin API adapter backed by a shared ``httpx.Client``.

    One ``httpx.Client`` is created per adapter and reused for every call;
    it is safe to share across threads polling different projects.
    """

    def __init__(self, config: ClientConfig, *, http_client: httpx.Client | None = None) -> None:
        super().__init__(config)
        self._base_url = (config.api_base_url or DEFAULT_ATLAS_BASE_URL).rstrip("/")
        auth = (
            httpx.DigestAuth(config.public_key, config.private_key)
            if config.has_credentials
            else None
        )
        self._http = http_client or httpx.Client(
            base_url=self._base_url,
            auth=auth,
            timeout=config.timeout_seconds,
            headers={"Accept": _ACCEPT_HEADER, "User-Agent": _USER_AGENT},
        )

    # ------------------------------------------------------------------
    # RemoteAPIClient
    # ------------------------------------------------------------------

    def get_regional_mode(self, project_id: str) -> RegionalModeSetting:
        """Fetch the regional-mode setting of *project_id*."""
        body = self._request("GET", project_id)
        return self._parse_setting(body, project_id)

    def set_regional_mode(self, project_id: str, enabled: bool) -> RegionalModeSetting:
        """PATCH the regional-mode flag of *project_id*."""
        body = self._request("PATCH", project_id, json={"enabled": enabled})
        setting = self._parse_setting(body, project_id)
        logger.info(
            "Regional mode updated | project_id=%s | enabled=%s | acknowledged=%s",
            project_id,
            enabled,
            setting.enabled,
        )
        return setting

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        project_id: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> Any:
        path = REGIONAL_MODE_PATH.format(project_id=project_id)
        try:
            response = self._http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            msg = f"{method} {path} failed: {exc}"
            raise ClientError(self.name, msg, retryable=True) from exc

        logger.debug(
            "Atlas API response | method=%s | path=%s | status=%d",
            method,
            path,
            response.status_code,
        )

        if response.is_error:
            raise _error_for_status(self.name, response, method, path)

        try:
            return response.json()
        except ValueError as exc:
            msg = f"{method} {path} returned a non-JSON body"
            raise ClientPayloadError(self.name, msg, http_code=response.status_code) from exc

    def _parse_setting(self, body: Any, project_id: str) -> RegionalModeSetting:
        try:
            return RegionalModeSetting.model_validate(body)
        except pydantic.ValidationError as exc:
            msg = f"Unexpected regional-mode payload for project {project_id}: {exc}"
            raise ClientPayloadError(self.name, msg) from exc


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _error_for_status(client: str, response: httpx.Response, method: str, path: str) -> ClientError:
    """Map an error HTTP response to the client exception taxonomy."""
    status = response.status_code
    detail = _error_detail(response)
    msg = f"{method} {path}: {detail}"

    if status == httpx.codes.NOT_FOUND:
        return ClientNotFoundError(client, msg)
    if status in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
        return ClientAuthError(client, msg, http_code=status)
    retryable = status == httpx.codes.TOO_MANY_REQUESTS or status >= 500
    return ClientError(client, msg, http_code=status, retryable=retryable)


def _error_detail(response: httpx.Response) -> str:
    """Extract the Atlas ``detail`` / ``errorCode`` fields, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"

    if isinstance(body, dict):
        detail = str(body.get("detail") or body.get("reason") or "")
        error_code = str(body.get("errorCode") or "")
        if detail and error_code:
            return f"{error_code}: {detail}"
        if detail or error_code:
            return detail or error_code
    return response.reason_phrase or f"HTTP {response.status_code}"
