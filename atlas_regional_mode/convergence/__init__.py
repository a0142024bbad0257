"""Poll-until-converged machinery.

- StateClassifier: raw status response → Ongoing / Terminal / NotFoundAsDeleted / Failure
- PollExecutor: bounded fixed-interval polling loop with timeout and cancellation
- ConvergenceCoordinator: mutate, then wait for the side effects to settle
- CancellationToken: explicit abort and caller deadline
"""

from atlas_regional_mode.convergence.cancellation import CancellationToken
from atlas_regional_mode.convergence.classifier import StateClassifier, classify
from atlas_regional_mode.convergence.coordinator import ConvergenceCoordinator, bind_refresh
from atlas_regional_mode.convergence.errors import (
    ConvergenceCancelledError,
    ConvergenceTimeoutError,
    MalformedPayloadError,
    RefreshError,
    UnexpectedStatusError,
)
from atlas_regional_mode.convergence.executor import PollExecutor, wait_on_token

__all__ = [
    "CancellationToken",
    "ConvergenceCancelledError",
    "ConvergenceCoordinator",
    "ConvergenceTimeoutError",
    "MalformedPayloadError",
    "PollExecutor",
    "RefreshError",
    "StateClassifier",
    "UnexpectedStatusError",
    "bind_refresh",
    "classify",
    "wait_on_token",
]
