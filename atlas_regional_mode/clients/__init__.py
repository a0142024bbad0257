"""Regional-mode API clients.

Implements the client adapter pattern:
- RemoteAPIClient: Abstract base class defining the interface
- AtlasClient: MongoDB Atlas Admin API over HTTPS (httpx, digest auth)
- InMemoryClient: Scriptable in-memory fake (tests, dry runs)

``RegionalModeResource.from_config`` picks one from ``ATLAS_CLIENT``.
"""

from atlas_regional_mode.clients.base import (
    ClientAuthError,
    ClientError,
    ClientNotFoundError,
    ClientPayloadError,
    RemoteAPIClient,
)

__all__ = [
    "ClientAuthError",
    "ClientError",
    "ClientNotFoundError",
    "ClientPayloadError",
    "RemoteAPIClient",
]
