"""Typed models for the convergence poller.

Defines the values exchanged between the coordinator, the poll executor
and the state classifier:

- ``PollSpec``: Immutable polling policy (states, timeout, interval, delay)
- ``RemoteResponse``: One raw status query result (status, payload, HTTP code, error)
- ``RefreshOutcome``: Classification of a single tick
  (``Ongoing`` | ``Terminal`` | ``NotFoundAsDeleted`` | ``Failure``)
- ``PollOutcome``: Final result of one executor run
  (``Succeeded`` | ``TimedOut`` | ``Failed`` | ``Cancelled``)

Design notes:
- All models are frozen dataclasses.
- Durations are floats in seconds, named with an explicit ``_seconds`` suffix.
- Status values are plain strings so the poller stays API-agnostic.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from atlas_regional_mode.models._validation import (
    ModelValidationError,
    check_min,
    check_positive,
)

if TYPE_CHECKING:
    from atlas_regional_mode.core.exceptions import ResourceError


# ---------------------------------------------------------------------------
# Poll policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PollSpec:
    """Polling policy for one convergence wait.

    Attributes:
        pending_states: Statuses meaning "still converging, keep polling".
        target_states: Statuses meaning "converged". Disjoint from pending.
        timeout_seconds: Maximum time spent polling once the initial delay is over.
        min_interval_seconds: Fixed pause between two consecutive status queries.
        initial_delay_seconds: Pause before the first status query.
    """

    pending_states: frozenset[str]
    target_states: frozenset[str]
    timeout_seconds: float
    min_interval_seconds: float
    initial_delay_seconds: float = 0.0

    def __post_init__(self) -> None:
        # Accept any iterable of strings but always store frozensets.
        object.__setattr__(self, "pending_states", frozenset(self.pending_states))
        object.__setattr__(self, "target_states", frozenset(self.target_states))

        if not self.target_states:
            raise ModelValidationError(
                "PollSpec", "target_states", self.target_states, "must not be empty"
            )
        overlap = self.pending_states & self.target_states
        if overlap:
            raise ModelValidationError(
                "PollSpec",
                "target_states",
                sorted(overlap),
                "must be disjoint from pending_states",
            )
        check_positive("PollSpec", "timeout_seconds", self.timeout_seconds)
        check_positive("PollSpec", "min_interval_seconds", self.min_interval_seconds)
        check_min("PollSpec", "initial_delay_seconds", self.initial_delay_seconds, 0)


# ---------------------------------------------------------------------------
# Raw remote response
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RemoteResponse:
    """One status query as returned by a refresh callback.

    Attributes:
        status: Status field extracted from the payload (``None`` on error).
        payload: The decoded response body, if any.
        http_code: HTTP status code of the response, if known.
        error: Transport / API error raised by the query, if any.
    """

    status: str | None = None
    payload: Any = None
    http_code: int | None = None
    error: BaseException | None = None

    @classmethod
    def from_error(cls, error: BaseException) -> RemoteResponse:
        """Wrap a raised error so the classifier can inspect it."""
        return cls(http_code=getattr(error, "http_code", None), error=error)


# ---------------------------------------------------------------------------
# Per-tick classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Ongoing:
    """Status is pending; the poller should keep going."""

    status: str
    payload: Any = None


@dataclass(frozen=True, slots=True)
class Terminal:
    """Status reached one of the target states."""

    status: str
    payload: Any = None


@dataclass(frozen=True, slots=True)
class NotFoundAsDeleted:
    """The remote record is gone (HTTP 404): teardown has completed."""


@dataclass(frozen=True, slots=True)
class Failure:
    """Hard error or unexpected status; polling must stop."""

    cause: ResourceError


RefreshOutcome = Ongoing | Terminal | NotFoundAsDeleted | Failure


# ---------------------------------------------------------------------------
# Final outcome
# ---------------------------------------------------------------------------


class PollState(enum.Enum):
    """Lifecycle state of a poll executor run.

    Values:
        INIT:      Waiting out the initial delay.
        POLLING:   Issuing status queries.
        SUCCEEDED: Target state reached (or record gone).
        FAILED:    Hard error or unexpected status.
        TIMED_OUT: Still pending when the timeout elapsed.
        CANCELLED: Caller aborted the wait.
    """

    INIT = "init"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Whether this state ends the run."""
        return self not in (PollState.INIT, PollState.POLLING)


class _OutcomeSummary:
    """Shared serialisation for the ``PollOutcome`` variants."""

    __slots__ = ()

    state: ClassVar[PollState]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly summary of the outcome."""
        cause = getattr(self, "cause", None)
        return {
            "state": self.state.value,
            "polls": getattr(self, "polls", 0),
            "elapsed_seconds": getattr(self, "elapsed_seconds", 0.0),
            "deleted": getattr(self, "deleted", False),
            "error": cause.to_error_dict() if cause is not None else None,
        }


@dataclass(frozen=True, slots=True)
class Succeeded(_OutcomeSummary):
    """Converged. ``deleted`` is set when success came from the 404 mapping."""

    payload: Any = None
    deleted: bool = False
    polls: int = 0
    elapsed_seconds: float = 0.0

    state: ClassVar[PollState] = PollState.SUCCEEDED


@dataclass(frozen=True, slots=True)
class TimedOut(_OutcomeSummary):
    """Still pending when the timeout elapsed."""

    elapsed_seconds: float
    last_status: str = ""
    polls: int = 0

    state: ClassVar[PollState] = PollState.TIMED_OUT


@dataclass(frozen=True, slots=True)
class Failed(_OutcomeSummary):
    """Stopped on a hard error or an unexpected status."""

    cause: ResourceError
    polls: int = 0
    elapsed_seconds: float = 0.0

    state: ClassVar[PollState] = PollState.FAILED


@dataclass(frozen=True, slots=True)
class Cancelled(_OutcomeSummary):
    """Caller aborted the wait; no further status queries were issued."""

    reason: str = ""
    polls: int = 0
    elapsed_seconds: float = 0.0

    state: ClassVar[PollState] = PollState.CANCELLED


PollOutcome = Succeeded | TimedOut | Failed | Cancelled
