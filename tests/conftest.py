"""Shared pytest fixtures for the regional-mode test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from atlas_regional_mode.clients.memory import InMemoryClient
from atlas_regional_mode.convergence.cancellation import CancellationToken
from atlas_regional_mode.convergence.coordinator import ConvergenceCoordinator
from atlas_regional_mode.convergence.executor import PollExecutor
from atlas_regional_mode.models.client import ClientConfig
from atlas_regional_mode.models.setting import RegionalModeSetting

PROJECT_ID = "5f1a2b3c4d5e6f7a8b9c0d1e"

# ---------------------------------------------------------------------------
# Deterministic time
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when the executor sleeps.

    ``on_sleep(n, token)`` is called before the n-th sleep (1-based) so a
    test can cancel the token at a precise suspension point.
    """

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []
        self.on_sleep: Callable[[int, CancellationToken], None] | None = None

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float, token: CancellationToken) -> bool:
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps), token)
        if token.cancelled:
            return True
        self.now += seconds
        return token.cancelled


@pytest.fixture()
def fake_clock() -> FakeClock:
    """Return a fresh fake clock."""
    return FakeClock()


@pytest.fixture()
def executor(fake_clock: FakeClock) -> PollExecutor:
    """Poll executor running on the fake clock (never really sleeps)."""
    return PollExecutor(clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture()
def coordinator(executor: PollExecutor) -> ConvergenceCoordinator:
    """Convergence coordinator backed by the fake-clock executor."""
    return ConvergenceCoordinator(executor)


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


@pytest.fixture()
def project_id() -> str:
    """Atlas project id used across the suite."""
    return PROJECT_ID


@pytest.fixture()
def memory_client() -> InMemoryClient:
    """In-memory client holding one project with regional mode enabled."""
    client = InMemoryClient(ClientConfig(name="memory"))
    client.put(PROJECT_ID, RegionalModeSetting(enabled=True))
    return client


@pytest.fixture()
def deleting() -> RegionalModeSetting:
    """A setting payload reporting an in-progress teardown."""
    return RegionalModeSetting(enabled=False, status="DELETING")
