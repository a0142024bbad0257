"""State classifier — one raw status query result to one semantic outcome.

Rules, first match wins:

1. Error with HTTP 404            → ``NotFoundAsDeleted``. The provider drops
   the record once teardown completes, so absence is the success signal
   of a delete-triggered wait.
2. Any other error, or a payload
   without a usable status        → ``Failure``. Never retried.
3. Status in ``pending_states``   → ``Ongoing``.
4. Status in ``target_states``    → ``Terminal``.
5. Anything else                  → ``Failure(UnexpectedStatusError)``.

The classifier is pure: no I/O, no logging, same response → same outcome.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from atlas_regional_mode.convergence.errors import (
    MalformedPayloadError,
    RefreshError,
    UnexpectedStatusError,
)
from atlas_regional_mode.core.exceptions import ResourceError
from atlas_regional_mode.models.polling import (
    Failure,
    NotFoundAsDeleted,
    Ongoing,
    Terminal,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from atlas_regional_mode.models.polling import PollSpec, RefreshOutcome, RemoteResponse

_HTTP_NOT_FOUND = 404


class StateClassifier:
    """Classifies ``RemoteResponse`` values against fixed pending/target sets."""

    __slots__ = ("_pending", "_target")

    def __init__(self, pending_states: Iterable[str], target_states: Iterable[str]) -> None:
        self._pending = frozenset(pending_states)
        self._target = frozenset(target_states)

    @classmethod
    def from_spec(cls, spec: PollSpec) -> StateClassifier:
        return cls(spec.pending_states, spec.target_states)

    def classify(self, response: RemoteResponse) -> RefreshOutcome:
        """Map *response* to ``Ongoing``, ``Terminal``, ``NotFoundAsDeleted`` or ``Failure``."""
        error = response.error
        if error is not None:
            if _http_code(response) == _HTTP_NOT_FOUND:
                return NotFoundAsDeleted()
            return Failure(cause=_as_resource_error(error, response.http_code))

        status = response.status
        if not isinstance(status, str) or not status.strip():
            msg = f"status query returned no usable status field (got {status!r})"
            return Failure(cause=MalformedPayloadError(msg, http_code=response.http_code))

        if status in self._pending:
            return Ongoing(status=status, payload=response.payload)
        if status in self._target:
            return Terminal(status=status, payload=response.payload)
        return Failure(
            cause=UnexpectedStatusError(
                status, sorted(self._target), http_code=response.http_code
            )
        )


def classify(response: RemoteResponse, spec: PollSpec) -> RefreshOutcome:
    """Classify *response* against the states of *spec*."""
    return StateClassifier.from_spec(spec).classify(response)


def _http_code(response: RemoteResponse) -> int | None:
    if response.http_code is not None:
        return response.http_code
    return getattr(response.error, "http_code", None)


def _as_resource_error(error: BaseException, http_code: int | None) -> ResourceError:
    if isinstance(error, ResourceError):
        return error
    wrapped = RefreshError(f"status query failed: {error}", http_code=http_code)
    wrapped.__cause__ = error
    return wrapped
