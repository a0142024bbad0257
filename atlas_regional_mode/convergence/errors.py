"""Convergence error types.

Each non-success ``PollOutcome`` maps to exactly one of these so callers
can tell a hard failure from a timeout from a cancellation:

- ``MalformedPayloadError``      — status field missing or not a string (contract).
- ``UnexpectedStatusError``      — status outside both pending and target sets.
- ``RefreshError``               — refresh raised something outside the taxonomy.
- ``MutationError``              — mutate raised something outside the taxonomy.
- ``ConvergenceTimeoutError``    — still pending when the timeout elapsed.
- ``ConvergenceCancelledError``  — the caller aborted the wait.
"""

from __future__ import annotations

from atlas_regional_mode.core.exceptions import (
    ContractError,
    PermanentError,
    ResourceError,
    TransientError,
)


class MalformedPayloadError(ContractError):
    """A status query returned a payload without a usable status field."""

    default_operation = "convergence"
    default_code = "MALFORMED_PAYLOAD"


class UnexpectedStatusError(PermanentError):
    """A status query returned a status that is neither pending nor target.

    Attributes:
        status: The status that was reported.
        expected: Sorted target states the poller was waiting for.
    """

    default_operation = "convergence"
    default_code = "UNEXPECTED_STATUS"

    def __init__(self, status: str, expected: list[str], **kwargs: object) -> None:
        self.status = status
        self.expected = expected
        msg = f"unexpected state {status!r}, wanted target {', '.join(expected)!r}"
        super().__init__(msg, **kwargs)


class RefreshError(PermanentError):
    """A status query failed with an error outside the resource taxonomy."""

    default_operation = "convergence"
    default_code = "REFRESH_FAILED"


class MutationError(PermanentError):
    """A mutation failed with an error outside the resource taxonomy."""

    default_operation = "convergence"
    default_code = "MUTATION_FAILED"


class ConvergenceTimeoutError(TransientError):
    """The remote state was still pending when the timeout elapsed.

    Attributes:
        elapsed_seconds: Time spent waiting.
        last_status: Last pending status observed.
    """

    default_operation = "convergence"
    default_code = "CONVERGENCE_TIMEOUT"

    def __init__(self, elapsed_seconds: float, last_status: str = "", **kwargs: object) -> None:
        self.elapsed_seconds = elapsed_seconds
        self.last_status = last_status
        msg = (
            "timeout while waiting for state to become target "
            f"(last state: {last_status!r}, elapsed: {elapsed_seconds:.1f}s)"
        )
        super().__init__(msg, **kwargs)


class ConvergenceCancelledError(ResourceError):
    """The caller cancelled the wait before the remote state converged."""

    default_operation = "convergence"
    default_code = "CONVERGENCE_CANCELLED"
