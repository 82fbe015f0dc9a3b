"""Hand a resolved tear-down job to the job registry.

Dispatch is fire-and-forget: success means the host acknowledged the
enqueue, not that the tear-down build ran or passed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from branchteardown.core.jobs import (
    DispatchOutcome,
    JobRegistry,
    JobRun,
    TearDownParameters,
)

logger = logging.getLogger(__name__)


class EnqueueFailure(RuntimeError):
    """Raised when the host rejects a build request for a tear-down job."""

    def __init__(self, job_name: str, reason: str) -> None:
        super().__init__(f"Failed to enqueue tear-down job '{job_name}': {reason}")
        self.job_name = job_name
        self.reason = reason


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one dispatch call."""

    outcome: DispatchOutcome
    job_name: str
    run: JobRun | None = None


def dispatch(
    registry: JobRegistry,
    job_name: str,
    parameters: TearDownParameters,
) -> DispatchResult:
    """
    Schedule one build of `job_name` with the given parameters.

    A job name that does not exist in the registry is not an error: the
    result is NOT_FOUND and nothing is enqueued. The registry is never asked
    twice; a rejected enqueue surfaces as EnqueueFailure without a retry.

    Args:
        registry: Registry used for lookup and scheduling.
        job_name: Exact, case-sensitive name of the tear-down job.
        parameters: Parameters attached to the build.

    Returns:
        A DispatchResult describing what happened.

    Raises:
        EnqueueFailure: If the host refuses to enqueue the build.
    """
    job = registry.find_job_by_name(job_name)
    if job is None:
        logger.debug("No tear-down job named %r; nothing to trigger", job_name)
        return DispatchResult(outcome=DispatchOutcome.NOT_FOUND, job_name=job_name)

    try:
        run = registry.schedule_build(job, parameters)
    except EnqueueFailure:
        raise
    except Exception as exc:
        raise EnqueueFailure(job_name, str(exc)) from exc

    logger.info(
        "Scheduled tear-down job %r (run_id=%s) for branch %r",
        job_name,
        run.run_id,
        parameters.branch_name,
    )
    return DispatchResult(outcome=DispatchOutcome.SCHEDULED, job_name=job_name, run=run)
