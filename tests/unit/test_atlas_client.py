"""Tests for the Atlas Admin API client.

HTTP is served by ``httpx.MockTransport`` so no network is touched.

Covers:
- GET / PATCH paths and request body
- Error mapping (404, 401/403, 429, 5xx, other 4xx, transport failures)
- Atlas error detail extraction
- Payload validation (non-JSON, missing ``enabled``)
- Digest auth and timeout wiring
"""

from __future__ import annotations

import json
import unittest
from collections.abc import Callable

import httpx

from atlas_regional_mode.clients.atlas import AtlasClient
from atlas_regional_mode.clients.base import (
    ClientAuthError,
    ClientError,
    ClientNotFoundError,
    ClientPayloadError,
)
from atlas_regional_mode.models.client import ClientConfig

_PROJECT = "5f1a2b3c4d5e6f7a8b9c0d1e"
_PATH = f"/api/atlas/v1.0/groups/{_PROJECT}/privateEndpoint/regionalMode"
_BASE = "https://atlas.example.test"

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> AtlasClient:
    """Build an AtlasClient whose HTTP traffic goes to *handler*."""
    http = httpx.Client(base_url=_BASE, transport=httpx.MockTransport(handler))
    return AtlasClient(ClientConfig(name="atlas", api_base_url=_BASE), http_client=http)


def _respond(status: int, body: object | None = None, text: str | None = None) -> Handler:
    def _handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)

    return _handler


class TestGetRegionalMode(unittest.TestCase):
    """AtlasClient.get_regional_mode"""

    def test_get_parses_setting(self) -> None:
        seen: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"enabled": True, "links": []})

        setting = _client(_handler).get_regional_mode(_PROJECT)

        assert setting.enabled is True
        assert setting.status is None
        assert seen[0].method == "GET"
        assert seen[0].url.path == _PATH

    def test_get_keeps_status(self) -> None:
        client = _client(_respond(200, {"enabled": False, "status": "DELETING"}))
        setting = client.get_regional_mode(_PROJECT)
        assert setting.disable_status() == "DELETING"

    def test_not_found(self) -> None:
        client = _client(
            _respond(
                404,
                {
                    "detail": f"No group with ID {_PROJECT} exists.",
                    "errorCode": "GROUP_NOT_FOUND",
                    "error": 404,
                },
            )
        )

        with self.assertRaises(ClientNotFoundError) as ctx:
            client.get_regional_mode(_PROJECT)

        err = ctx.exception
        assert err.http_code == 404
        assert err.is_not_found is True
        assert err.retryable is False
        assert "GROUP_NOT_FOUND" in err.message
        assert "No group with ID" in err.message

    def test_unauthorized(self) -> None:
        client = _client(_respond(401, {"detail": "You are not authorized."}))

        with self.assertRaises(ClientAuthError) as ctx:
            client.get_regional_mode(_PROJECT)

        assert ctx.exception.http_code == 401
        assert ctx.exception.retryable is False

    def test_forbidden(self) -> None:
        client = _client(_respond(403, {"errorCode": "USER_CANNOT_ACCESS_ORGANIZATION"}))

        with self.assertRaises(ClientAuthError) as ctx:
            client.get_regional_mode(_PROJECT)

        assert "USER_CANNOT_ACCESS_ORGANIZATION" in ctx.exception.message

    def test_server_error_is_retryable(self) -> None:
        client = _client(_respond(503, text="upstream unavailable"))

        with self.assertRaises(ClientError) as ctx:
            client.get_regional_mode(_PROJECT)

        err = ctx.exception
        assert not isinstance(err, ClientNotFoundError)
        assert err.http_code == 503
        assert err.retryable is True
        assert "Service Unavailable" in err.message

    def test_throttled_is_retryable(self) -> None:
        client = _client(_respond(429, {"detail": "Too many requests"}))

        with self.assertRaises(ClientError) as ctx:
            client.get_regional_mode(_PROJECT)

        assert ctx.exception.retryable is True

    def test_bad_request_is_not_retryable(self) -> None:
        client = _client(_respond(400, {"detail": "Invalid attribute"}))

        with self.assertRaises(ClientError) as ctx:
            client.get_regional_mode(_PROJECT)

        assert ctx.exception.http_code == 400
        assert ctx.exception.retryable is False

    def test_transport_failure(self) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(ClientError) as ctx:
            _client(_handler).get_regional_mode(_PROJECT)

        err = ctx.exception
        assert err.http_code is None
        assert err.retryable is True
        assert isinstance(err.__cause__, httpx.ConnectError)
        assert str(err).startswith("[atlas] ")

    def test_non_json_body(self) -> None:
        client = _client(_respond(200, text="<html>maintenance</html>"))

        with self.assertRaises(ClientPayloadError) as ctx:
            client.get_regional_mode(_PROJECT)

        assert ctx.exception.category == "contract"
        assert ctx.exception.http_code == 200

    def test_missing_enabled_field(self) -> None:
        client = _client(_respond(200, {"status": "DELETING"}))

        with self.assertRaises(ClientPayloadError) as ctx:
            client.get_regional_mode(_PROJECT)

        assert _PROJECT in ctx.exception.message


class TestSetRegionalMode(unittest.TestCase):
    """AtlasClient.set_regional_mode"""

    def test_patch_body(self) -> None:
        seen: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=json.loads(request.content))

        ack = _client(_handler).set_regional_mode(_PROJECT, False)

        assert ack.enabled is False
        assert seen[0].method == "PATCH"
        assert seen[0].url.path == _PATH
        assert json.loads(seen[0].content) == {"enabled": False}

    def test_patch_not_found(self) -> None:
        client = _client(_respond(404, {"detail": "not found"}))

        with self.assertRaises(ClientNotFoundError):
            client.set_regional_mode(_PROJECT, True)


class TestClientConstruction(unittest.TestCase):
    """Default httpx.Client wiring."""

    def test_digest_auth_when_credentials_set(self) -> None:
        config = ClientConfig(
            name="atlas",
            api_base_url=_BASE,
            public_key="pub",
            private_key="priv",
            timeout_seconds=12.0,
        )
        client = AtlasClient(config)
        try:
            assert isinstance(client._http.auth, httpx.DigestAuth)
            assert client._http.timeout.read == 12.0
            assert client._http.base_url.host == "atlas.example.test"
            assert client._http.headers["Accept"] == "application/json"
        finally:
            client.close()

    def test_no_auth_without_credentials(self) -> None:
        client = AtlasClient(ClientConfig(name="atlas"))
        try:
            assert client._http.auth is None
            assert client._http.base_url.host == "cloud.mongodb.com"
        finally:
            client.close()

    def test_private_key_not_in_repr(self) -> None:
        config = ClientConfig(name="atlas", public_key="pub", private_key="s3cr3t")
        assert "s3cr3t" not in repr(config)
