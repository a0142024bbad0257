"""Convergence coordinator — mutate remote state, then wait for it to settle.

Sequence:

1. Call ``mutate()``. No retry: a failing mutation ends the operation.
   - HTTP 404 with ``absent_is_success`` → the resource is already gone;
     ``Succeeded(deleted=True)`` without polling.
   - Any other error → ``Failed`` without polling. Errors outside the
     resource taxonomy are wrapped in ``MutationError``.
2. If ``settled(ack)`` reports the change produced no background work,
   return ``Succeeded(ack)`` without polling.
3. Otherwise delegate to ``PollExecutor.execute`` with the bound refresh.

This is the only place that decides whether an update has to wait.
Reads and imports never go through it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from atlas_regional_mode.convergence.errors import MutationError
from atlas_regional_mode.convergence.executor import PollExecutor
from atlas_regional_mode.core.exceptions import ResourceError
from atlas_regional_mode.models.polling import Failed, RemoteResponse, Succeeded

if TYPE_CHECKING:
    from collections.abc import Callable

    from atlas_regional_mode.convergence.cancellation import CancellationToken
    from atlas_regional_mode.models.polling import PollOutcome, PollSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")


def bind_refresh(
    fetch: Callable[[], T],
    status_of: Callable[[T], str],
) -> Callable[[], RemoteResponse]:
    """Bind a status query into a refresh callback for the poll executor.

    Args:
        fetch: Zero-argument call issuing one remote read for a fixed identity.
        status_of: Extracts the status string from the fetched payload.

    Returns:
        A callable producing a ``RemoteResponse``. Errors raised by *fetch*
        are captured in the response (with their HTTP code, when they carry
        one) instead of propagating, so the classifier decides what they mean.
    """

    def _refresh() -> RemoteResponse:
        try:
            payload = fetch()
        except Exception as exc:
            return RemoteResponse.from_error(exc)
        return RemoteResponse(status=status_of(payload), payload=payload)

    return _refresh


class ConvergenceCoordinator:
    """Issues a mutation and waits for its side effects to settle."""

    def __init__(self, executor: PollExecutor | None = None) -> None:
        self._executor = executor or PollExecutor()

    @property
    def executor(self) -> PollExecutor:
        return self._executor

    def converge(
        self,
        mutate: Callable[[], Any],
        spec: PollSpec,
        refresh: Callable[[], RemoteResponse],
        *,
        resource_id: str = "",
        operation: str = "update",
        absent_is_success: bool = True,
        settled: Callable[[Any], bool] | None = None,
        cancel: CancellationToken | None = None,
    ) -> PollOutcome:
        """Run *mutate*, then poll *refresh* under *spec* unless nothing needs to settle.

        Args:
            mutate: Issues the mutation; returns the acknowledgement payload
                or raises.
            spec: Polling policy for the wait.
            refresh: Status query bound to the same identity as *mutate*.
            resource_id: Encoded resource identity, for logs and error context.
            operation: Operation kind recorded on mutation errors.
            absent_is_success: Treat HTTP 404 from the mutation as "already gone".
            settled: Predicate on the acknowledgement; ``True`` skips the wait.
            cancel: Optional cancellation token forwarded to the executor.

        Returns:
            The ``PollOutcome`` of the whole operation.
        """
        logger.info("Mutation requested | resource_id=%s | operation=%s", resource_id, operation)

        try:
            ack = mutate()
        except Exception as exc:
            error = _as_mutation_error(exc, resource_id, operation)
            if error.is_not_found and absent_is_success:
                logger.warning(
                    "Mutation target already absent, nothing to wait for | "
                    "resource_id=%s | operation=%s",
                    resource_id,
                    operation,
                )
                return Succeeded(deleted=True)
            logger.error(
                "Mutation failed | resource_id=%s | operation=%s | code=%s | error=%s",
                resource_id,
                operation,
                error.code,
                error,
            )
            return Failed(cause=error)

        if settled is not None and settled(ack):
            logger.info(
                "Mutation settled without background work | resource_id=%s | operation=%s",
                resource_id,
                operation,
            )
            return Succeeded(payload=ack)

        return self._executor.execute(spec, refresh, cancel=cancel, resource_id=resource_id)


def _as_mutation_error(exc: Exception, resource_id: str, operation: str) -> ResourceError:
    if isinstance(exc, ResourceError):
        return exc
    wrapped = MutationError(
        f"mutation failed: {exc}",
        resource_id=resource_id,
        operation=operation,
        http_code=getattr(exc, "http_code", None),
    )
    wrapped.__cause__ = exc
    return wrapped
