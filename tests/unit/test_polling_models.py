"""Tests for the convergence poller models.

Covers:
- PollSpec validation (disjoint, non-empty, positive finite durations)
- RemoteResponse.from_error
- PollState terminal flags
- PollOutcome summaries (``to_dict``)
"""

from __future__ import annotations

import pytest

from atlas_regional_mode.clients.base import ClientNotFoundError
from atlas_regional_mode.convergence.errors import UnexpectedStatusError
from atlas_regional_mode.models._validation import ModelValidationError
from atlas_regional_mode.models.polling import (
    Cancelled,
    Failed,
    PollSpec,
    PollState,
    RemoteResponse,
    Succeeded,
    TimedOut,
)


def _spec(**overrides: object) -> PollSpec:
    kwargs: dict[str, object] = {
        "pending_states": {"DELETING"},
        "target_states": {"DELETED"},
        "timeout_seconds": 3600,
        "min_interval_seconds": 5,
        "initial_delay_seconds": 3,
    }
    kwargs.update(overrides)
    return PollSpec(**kwargs)  # type: ignore[arg-type]


class TestPollSpec:
    """PollSpec construction and invariants."""

    def test_valid(self) -> None:
        spec = _spec()
        assert spec.pending_states == frozenset({"DELETING"})
        assert spec.target_states == frozenset({"DELETED"})
        assert spec.initial_delay_seconds == 3

    def test_states_stored_as_frozensets(self) -> None:
        spec = _spec(pending_states=["A", "B", "A"], target_states=("C",))
        assert spec.pending_states == frozenset({"A", "B"})
        assert isinstance(spec.target_states, frozenset)

    def test_empty_pending_allowed(self) -> None:
        assert _spec(pending_states=set()).pending_states == frozenset()

    def test_empty_target_rejected(self) -> None:
        with pytest.raises(ModelValidationError, match="target_states"):
            _spec(target_states=set())

    def test_overlap_rejected(self) -> None:
        with pytest.raises(ModelValidationError, match="disjoint"):
            _spec(pending_states={"DELETING", "DELETED"})

    @pytest.mark.parametrize("field", ["timeout_seconds", "min_interval_seconds"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_durations_rejected(self, field: str, value: float) -> None:
        with pytest.raises(ModelValidationError, match=field):
            _spec(**{field: value})

    @pytest.mark.parametrize(
        "field", ["timeout_seconds", "min_interval_seconds", "initial_delay_seconds"]
    )
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_durations_rejected(self, field: str, value: float) -> None:
        with pytest.raises(ModelValidationError, match="finite"):
            _spec(**{field: value})

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ModelValidationError, match="initial_delay_seconds"):
            _spec(initial_delay_seconds=-0.1)

    def test_zero_delay_allowed(self) -> None:
        assert _spec(initial_delay_seconds=0).initial_delay_seconds == 0

    def test_frozen(self) -> None:
        spec = _spec()
        with pytest.raises(AttributeError):
            spec.timeout_seconds = 1  # type: ignore[misc]


class TestRemoteResponse:
    def test_from_error_copies_http_code(self) -> None:
        err = ClientNotFoundError("atlas", "gone")
        response = RemoteResponse.from_error(err)
        assert response.error is err
        assert response.http_code == 404
        assert response.status is None
        assert response.payload is None

    def test_from_error_without_http_code(self) -> None:
        err = ConnectionError("socket reset")
        response = RemoteResponse.from_error(err)
        assert response.error is err
        assert response.http_code is None


class TestPollState:
    @pytest.mark.parametrize("state", [PollState.INIT, PollState.POLLING])
    def test_non_terminal(self, state: PollState) -> None:
        assert state.is_terminal is False

    @pytest.mark.parametrize(
        "state",
        [PollState.SUCCEEDED, PollState.FAILED, PollState.TIMED_OUT, PollState.CANCELLED],
    )
    def test_terminal(self, state: PollState) -> None:
        assert state.is_terminal is True


class TestPollOutcomeSummary:
    """to_dict() keys are stable across variants."""

    KEYS = {"state", "polls", "elapsed_seconds", "deleted", "error"}

    def test_succeeded(self) -> None:
        d = Succeeded(deleted=True, polls=4, elapsed_seconds=18.0).to_dict()
        assert set(d) == self.KEYS
        assert d == {
            "state": "succeeded",
            "polls": 4,
            "elapsed_seconds": 18.0,
            "deleted": True,
            "error": None,
        }

    def test_timed_out(self) -> None:
        d = TimedOut(elapsed_seconds=3600.0, last_status="DELETING", polls=721).to_dict()
        assert d["state"] == "timed_out"
        assert d["polls"] == 721
        assert d["error"] is None

    def test_failed_includes_error(self) -> None:
        cause = UnexpectedStatusError("FAILED", ["DELETED"], resource_id="rid")
        d = Failed(cause=cause, polls=1).to_dict()
        assert d["state"] == "failed"
        assert d["error"]["code"] == "UNEXPECTED_STATUS"
        assert d["error"]["resource_id"] == "rid"

    def test_cancelled(self) -> None:
        outcome = Cancelled(reason="operator abort", polls=2, elapsed_seconds=8.0)
        assert outcome.state is PollState.CANCELLED
        assert outcome.to_dict()["state"] == "cancelled"

    def test_variants_are_distinct(self) -> None:
        states = {Succeeded.state, TimedOut.state, Failed.state, Cancelled.state}
        assert len(states) == 4
