"""Tests for the scriptable in-memory client."""

from __future__ import annotations

import threading
import unittest

from atlas_regional_mode.clients.base import ClientError, ClientNotFoundError
from atlas_regional_mode.clients.memory import InMemoryClient
from atlas_regional_mode.models.client import ClientConfig
from atlas_regional_mode.models.setting import RegionalModeSetting

_PID = "p-1"


class TestInMemoryClient(unittest.TestCase):
    """Scripting, fallbacks and call recording."""

    def setUp(self) -> None:
        self.client = InMemoryClient(ClientConfig(name="memory"))
        self.client.put(_PID, RegionalModeSetting(enabled=True))

    def test_scripted_reads_then_stored(self) -> None:
        deleting = RegionalModeSetting(enabled=False, status="DELETING")
        self.client.script_reads(_PID, [deleting, ClientError("memory", "boom", http_code=500)])

        assert self.client.get_regional_mode(_PID) is deleting
        with self.assertRaises(ClientError):
            self.client.get_regional_mode(_PID)
        assert self.client.get_regional_mode(_PID).enabled is True

    def test_unknown_project(self) -> None:
        with self.assertRaises(ClientNotFoundError):
            self.client.get_regional_mode("nope")

    def test_remove(self) -> None:
        self.client.remove(_PID)
        with self.assertRaises(ClientNotFoundError):
            self.client.get_regional_mode(_PID)

    def test_set_stores_setting(self) -> None:
        ack = self.client.set_regional_mode(_PID, False)

        assert ack.enabled is False
        assert self.client.get_regional_mode(_PID) == RegionalModeSetting(enabled=False)

    def test_scripted_write_overrides_store(self) -> None:
        self.client.script_writes(_PID, [ClientError("memory", "throttled", http_code=429)])

        with self.assertRaises(ClientError):
            self.client.set_regional_mode(_PID, False)
        assert self.client.get_regional_mode(_PID).enabled is True

    def test_scripts_are_per_project(self) -> None:
        self.client.put("p-2", RegionalModeSetting(enabled=True))
        self.client.script_reads("p-2", [ClientNotFoundError("memory", "gone")])

        assert self.client.get_regional_mode(_PID).enabled is True
        with self.assertRaises(ClientNotFoundError):
            self.client.get_regional_mode("p-2")

    def test_call_recording(self) -> None:
        self.client.get_regional_mode(_PID)
        self.client.set_regional_mode(_PID, False)
        self.client.get_regional_mode(_PID)

        assert self.client.calls == [("get", _PID), ("set", _PID), ("get", _PID)]
        assert self.client.call_count("get") == 2
        assert self.client.call_count("set", _PID) == 1
        assert self.client.call_count("get", "other") == 0

    def test_concurrent_projects(self) -> None:
        projects = [f"p-{i}" for i in range(20)]
        for p in projects:
            self.client.put(p, RegionalModeSetting(enabled=True))

        def _disable(project_id: str) -> None:
            self.client.set_regional_mode(project_id, False)
            self.client.get_regional_mode(project_id)

        threads = [threading.Thread(target=_disable, args=(p,)) for p in projects]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert self.client.call_count("set") == 20
        assert all(not self.client.get_regional_mode(p).enabled for p in projects)
