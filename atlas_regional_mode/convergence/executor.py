"""Poll executor — drive a refresh callback until the remote state converges.

States::

    INIT ──delay──▶ POLLING ──▶ SUCCEEDED | FAILED | TIMED_OUT | CANCELLED

1. INIT: suspend for ``initial_delay_seconds``, then record the start time.
2. POLLING: call ``refresh()`` and classify the response.
   - ``NotFoundAsDeleted`` / ``Terminal`` → ``Succeeded``.
   - ``Failure``                          → ``Failed`` immediately, no retry.
   - ``Ongoing`` → ``TimedOut`` once ``timeout_seconds`` has elapsed since
     the start, else suspend ``min_interval_seconds`` and poll again.
3. Cancellation observed at a suspension point → ``Cancelled``; no remote
   call is issued after that.

The interval is fixed rather than exponential: the caller knows roughly
how long the remote operation takes (that is what ``timeout_seconds``
encodes), and a fixed floor keeps the load on the remote API flat.

The executor blocks the calling thread and holds no shared state; every
``execute`` call owns its own counters and timers.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from atlas_regional_mode.convergence.cancellation import CancellationToken
from atlas_regional_mode.convergence.classifier import StateClassifier
from atlas_regional_mode.models.polling import (
    Cancelled,
    Failed,
    Failure,
    NotFoundAsDeleted,
    PollState,
    RemoteResponse,
    Succeeded,
    Terminal,
    TimedOut,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from atlas_regional_mode.models.polling import PollOutcome, PollSpec

logger = logging.getLogger(__name__)


def wait_on_token(seconds: float, token: CancellationToken) -> bool:
    """Default suspension: block on the token for up to *seconds*."""
    return token.wait(seconds)


class PollExecutor:
    """Runs one bounded polling loop per ``execute`` call.

    Args:
        clock: Monotonic clock in seconds (injectable for tests).
        sleep: Suspension hook returning ``True`` when cancelled while waiting.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float, CancellationToken], bool] = wait_on_token,
    ) -> None:
        self._clock = clock
        self._sleep = sleep

    def execute(
        self,
        spec: PollSpec,
        refresh: Callable[[], RemoteResponse],
        *,
        cancel: CancellationToken | None = None,
        resource_id: str = "",
    ) -> PollOutcome:
        """Poll *refresh* under *spec* until it converges, fails, times out or is cancelled.

        Args:
            spec: Polling policy for this run.
            refresh: Callback issuing one remote status query.
            cancel: Optional cancellation token (explicit abort or deadline).
            resource_id: Encoded resource identity, for logs and error context.

        Returns:
            Exactly one of ``Succeeded``, ``Failed``, ``TimedOut``, ``Cancelled``.
        """
        token = cancel or CancellationToken()
        classifier = StateClassifier.from_spec(spec)
        invoked_at = self._clock()
        state = PollState.INIT
        polls = 0
        last_status = ""

        logger.info(
            "Convergence wait started | resource_id=%s | pending=%s | target=%s | "
            "timeout=%.0fs | interval=%.1fs | delay=%.1fs",
            resource_id,
            sorted(spec.pending_states),
            sorted(spec.target_states),
            spec.timeout_seconds,
            spec.min_interval_seconds,
            spec.initial_delay_seconds,
        )

        if self._suspend(spec.initial_delay_seconds, token):
            return self._cancelled(token, state, polls, invoked_at, resource_id)

        state = PollState.POLLING
        started_at = self._clock()

        while True:
            polls += 1
            outcome = classifier.classify(self._query(refresh))

            if isinstance(outcome, NotFoundAsDeleted):
                logger.info(
                    "Convergence reached | resource_id=%s | state=deleted (HTTP 404) | polls=%d",
                    resource_id,
                    polls,
                )
                return Succeeded(
                    deleted=True,
                    polls=polls,
                    elapsed_seconds=self._elapsed(invoked_at),
                )

            if isinstance(outcome, Terminal):
                logger.info(
                    "Convergence reached | resource_id=%s | state=%s | polls=%d",
                    resource_id,
                    outcome.status,
                    polls,
                )
                return Succeeded(
                    payload=outcome.payload,
                    polls=polls,
                    elapsed_seconds=self._elapsed(invoked_at),
                )

            if isinstance(outcome, Failure):
                cause = outcome.cause
                logger.error(
                    "Convergence failed | resource_id=%s | code=%s | polls=%d | error=%s",
                    resource_id,
                    cause.code,
                    polls,
                    cause,
                )
                return Failed(
                    cause=cause,
                    polls=polls,
                    elapsed_seconds=self._elapsed(invoked_at),
                )

            # Ongoing
            last_status = outcome.status
            polling_for = self._clock() - started_at
            logger.debug(
                "Convergence pending | resource_id=%s | state=%s | poll=%d | elapsed=%.1fs",
                resource_id,
                last_status,
                polls,
                polling_for,
            )

            if polling_for >= spec.timeout_seconds:
                logger.warning(
                    "Convergence timeout | resource_id=%s | state=%s | timeout=%.0fs | polls=%d",
                    resource_id,
                    last_status,
                    spec.timeout_seconds,
                    polls,
                )
                return TimedOut(
                    elapsed_seconds=self._elapsed(invoked_at),
                    last_status=last_status,
                    polls=polls,
                )

            if self._suspend(spec.min_interval_seconds, token):
                return self._cancelled(token, state, polls, invoked_at, resource_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _suspend(self, seconds: float, token: CancellationToken) -> bool:
        """Suspend for *seconds*; return ``True`` if cancellation was observed."""
        if token.cancelled:
            return True
        if seconds <= 0:
            return False
        return self._sleep(seconds, token) or token.cancelled

    @staticmethod
    def _query(refresh: Callable[[], RemoteResponse]) -> RemoteResponse:
        # Anything refresh raises is classified, never propagated.
        try:
            return refresh()
        except Exception as exc:
            return RemoteResponse.from_error(exc)

    def _elapsed(self, since: float) -> float:
        return max(self._clock() - since, 0.0)

    def _cancelled(
        self,
        token: CancellationToken,
        state: PollState,
        polls: int,
        invoked_at: float,
        resource_id: str,
    ) -> Cancelled:
        logger.warning(
            "Convergence cancelled | resource_id=%s | during=%s | polls=%d | reason=%s",
            resource_id,
            state.value,
            polls,
            token.reason,
        )
        return Cancelled(
            reason=token.reason,
            polls=polls,
            elapsed_seconds=self._elapsed(invoked_at),
        )
