"""Cooperative cancellation for convergence waits.

A ``CancellationToken`` combines an explicit abort flag (a
``threading.Event``) with an optional caller deadline on the monotonic
clock. The poll executor only suspends through ``wait()``, so both kinds
of cancellation are observed at every suspension point and end the wait
promptly instead of after a full poll interval.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CancellationToken:
    """Thread-safe cancellation signal with an optional deadline.

    Example::

        token = CancellationToken.with_timeout(600)
        outcome = executor.execute(spec, refresh, cancel=token)

        # from another thread
        token.cancel("operator abort")
    """

    def __init__(
        self,
        *,
        deadline: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._event = threading.Event()
        self._deadline = deadline
        self._clock = clock
        self._reason = ""

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> CancellationToken:
        """Return a token that cancels itself *seconds* from now."""
        return cls(deadline=clock() + seconds, clock=clock)

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Signal cancellation. Idempotent; the first reason wins."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether the token was cancelled or its deadline has passed."""
        if self._event.is_set():
            return True
        return self._deadline is not None and self._clock() >= self._deadline

    @property
    def reason(self) -> str:
        """Why the token is cancelled (empty while it is not)."""
        if self._reason:
            return self._reason
        if self.cancelled:
            return "caller deadline exceeded"
        return ""

    def remaining(self) -> float | None:
        """Seconds until the deadline, or ``None`` when there is no deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - self._clock(), 0.0)

    def wait(self, seconds: float) -> bool:
        """Block for up to *seconds*; return ``True`` if cancelled.

        Returns early as soon as ``cancel()`` is called or the deadline
        is reached.
        """
        if self.cancelled:
            return True
        remaining = self.remaining()
        timeout = seconds if remaining is None else min(seconds, remaining)
        if timeout > 0:
            self._event.wait(timeout)
        return self.cancelled
