"""Deletion listener and lifecycle notifications.

When a branch job is deleted, `TearDownListener.on_deleted` runs the whole
tear-down chain for that one job:

    declared override -> global config -> resolve -> build parameters -> dispatch

Each deletion is handled on its own, synchronously, on whatever thread
delivered the notification. Nothing is shared between events apart from
the read-only use of `GlobalConfig`.

`DeletionNotifier` delivers deletions to listeners and isolates the
deletion itself from listener failures: tear-down triggering is
best-effort and can never undo or block the deletion that caused it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

from branchteardown.core.config import GlobalConfig
from branchteardown.core.declarations import read_declared_tear_down_job
from branchteardown.core.dispatch import DispatchResult, EnqueueFailure, dispatch
from branchteardown.core.jobs import (
    BranchJob,
    BranchJobsAdapter,
    JobRegistry,
    TearDownParameters,
)
from branchteardown.core.parameters import MetadataUnavailable, build_parameters
from branchteardown.core.resolver import resolve

logger = logging.getLogger(__name__)

DeclaredReader = Callable[[BranchJob], str | None]


class DeletionListener(Protocol):
    """Anything that wants to hear about deleted jobs."""

    def on_deleted(self, job: BranchJob) -> object:
        """Handle one deleted job."""
        ...


@dataclass(frozen=True)
class TearDownPlan:
    """What a deletion of `job` would trigger, without triggering it."""

    job: BranchJob
    job_name: str
    override: str | None
    global_job: str | None
    parameters: TearDownParameters | None = None
    error: str | None = None


def plan_tear_down(
    job: BranchJob,
    config: GlobalConfig,
    declared_reader: DeclaredReader = read_declared_tear_down_job,
) -> TearDownPlan:
    """Resolve the tear-down job and parameters for a branch job."""
    override = declared_reader(job)
    global_job = config.get_tear_down_job()
    job_name = resolve(override, global_job)
    try:
        parameters = build_parameters(job)
    except MetadataUnavailable as exc:
        return TearDownPlan(job, job_name, override, global_job, error=str(exc))
    return TearDownPlan(job, job_name, override, global_job, parameters=parameters)


class TearDownListener:
    """Triggers the resolved tear-down job when a branch job is deleted."""

    def __init__(
        self,
        registry: JobRegistry,
        config: GlobalConfig,
        declared_reader: DeclaredReader = read_declared_tear_down_job,
    ) -> None:
        self.registry = registry
        self.config = config
        self.declared_reader = declared_reader

    def on_deleted(self, job: BranchJob) -> DispatchResult | None:
        """
        Run the tear-down chain for one deleted job.

        Returns:
            The DispatchResult, or None when the job is not a branch of a
            multi-branch project and was ignored.

        Raises:
            MetadataUnavailable: If the job has no usable source metadata.
                Nothing is dispatched in that case.
            EnqueueFailure: If the host rejected the build request.
        """
        if not job.is_branch_job:
            logger.debug("Ignoring deletion of non-branch job %r", job.name)
            return None

        job_name = resolve(self.declared_reader(job), self.config.get_tear_down_job())
        if job_name == job.name:
            logger.warning(
                "Tear-down job %r has the same name as the deleted branch job", job_name
            )

        parameters = build_parameters(job)
        return dispatch(self.registry, job_name, parameters)


@dataclass(frozen=True)
class ListenerOutcome:
    """What one listener did with one deletion."""

    listener: str
    result: object = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DeletionNotifier:
    """Delivers each deletion exactly once to every registered listener."""

    def __init__(self) -> None:
        self._listeners: list[DeletionListener] = []

    def register(self, listener: DeletionListener) -> None:
        """Register a listener for future deletions."""
        self._listeners.append(listener)

    def notify_deleted(self, job: BranchJob) -> list[ListenerOutcome]:
        """Call every listener for `job`; listener failures are collected, not raised."""
        outcomes: list[ListenerOutcome] = []
        for listener in list(self._listeners):
            name = type(listener).__name__
            try:
                result = listener.on_deleted(job)
            except (MetadataUnavailable, EnqueueFailure) as exc:
                logger.warning("Tear-down for job %r not triggered: %s", job.name, exc)
                outcomes.append(ListenerOutcome(listener=name, error=str(exc)))
                continue
            except Exception as exc:  # a failing listener must not fail the deletion
                logger.exception("Listener %s failed for job %r", name, job.name)
                outcomes.append(ListenerOutcome(listener=name, error=str(exc)))
                continue
            outcomes.append(ListenerOutcome(listener=name, result=result))
        return outcomes


@dataclass(frozen=True)
class DeletionReport:
    """Result of deleting one branch job and notifying listeners."""

    job: BranchJob
    outcomes: list[ListenerOutcome] = field(default_factory=list)

    @property
    def dispatch_results(self) -> list[DispatchResult]:
        return [o.result for o in self.outcomes if isinstance(o.result, DispatchResult)]

    @property
    def errors(self) -> list[str]:
        return [o.error for o in self.outcomes if o.error]


def delete_branch_job(
    adapter: BranchJobsAdapter,
    notifier: DeletionNotifier,
    job_id: int,
) -> DeletionReport:
    """
    Delete a job and notify listeners with the snapshot taken beforehand.

    The snapshot is read before the delete so listeners still see the job's
    source metadata and declared properties.

    Raises:
        LookupError: If no job with `job_id` exists.
    """
    job = adapter.get_branch_job(job_id)
    if job is None:
        raise LookupError(f"Job {job_id} not found")

    adapter.delete_job(job_id)
    logger.info("Deleted job %r (id: %s)", job.name, job_id)
    return DeletionReport(job=job, outcomes=notifier.notify_deleted(job))
