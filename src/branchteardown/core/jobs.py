"""Core job domain models plus branch job lookup logic.

This module defines the data structures shared by the tear-down flow
(Job, JobRun, BranchJob, TearDownParameters, DispatchOutcome) and the
adapter interfaces the core relies on to talk to the host workspace.
It is intentionally free of CLI concerns and of any SDK import so the
whole resolve / build / dispatch chain can be exercised with stubs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Protocol


@dataclass(frozen=True)
class Job:
    """
    Represents a top-level job in the host's job registry.

    Attributes:
        id: Unique identifier of the job.
        name: Job name; lookups match it exactly (case-sensitive).
        tags: Optional mapping of job tags. May be None if no tags are present.
    """

    id: int
    name: str
    tags: Mapping[str, str] | None = None


@dataclass(frozen=True)
class JobRun:
    """
    Handle for a build that was enqueued on the host.

    Attributes:
        run_id: Identifier the host assigned to the enqueued run.
        job_id: Identifier of the job the run belongs to.
    """

    run_id: int
    job_id: int


@dataclass(frozen=True)
class BranchJob:
    """
    Snapshot of a job created by a multi-branch pipeline for one branch.

    Attributes:
        id: Identifier of the branch job.
        name: Name of the branch job.
        project: Name of the owning multi-branch project, or None when the
                 job is not a branch of any multi-branch project.
        git_url: Repository URL or path reported by the source integration.
        branch_name: Branch reported by the source integration.
        properties: Job-level properties declared by the pipeline.
    """

    id: int
    name: str
    project: str | None = None
    git_url: str | None = None
    branch_name: str | None = None
    properties: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_branch_job(self) -> bool:
        """Return True if this job belongs to a multi-branch project."""
        return bool(self.project)


@dataclass(frozen=True)
class TearDownParameters:
    """The two named parameters handed to a tear-down job, in fixed order."""

    git_url: str
    branch_name: str

    def as_pairs(self) -> list[tuple[str, str]]:
        """Return the parameters as an ordered list of (name, value) pairs."""
        return [("git_url", self.git_url), ("branch_name", self.branch_name)]

    def as_dict(self) -> dict[str, str]:
        """Return the parameters as an insertion-ordered mapping."""
        return dict(self.as_pairs())


class DispatchOutcome(str, Enum):
    """
    Result of handing a resolved tear-down job to the registry.

    Values:
        SCHEDULED: The job exists and one build was enqueued.
        NOT_FOUND: No job with the resolved name exists; nothing was enqueued.
    """

    SCHEDULED = "SCHEDULED"
    NOT_FOUND = "NOT_FOUND"


class JobRegistry(Protocol):
    """Interface for top-level job lookup and build scheduling."""

    def find_job_by_name(self, name: str) -> Job | None:
        """Return the top-level job with exactly this name, if any."""
        ...

    def schedule_build(self, job: Job, parameters: TearDownParameters) -> JobRun:
        """Enqueue one build of the job and return without waiting for it."""
        ...


class BranchJobsAdapter(Protocol):
    """Interface for reading and deleting branch jobs."""

    def list_branch_jobs(self, project: str | None = None) -> list[BranchJob]:
        """Return branch jobs, optionally restricted to one project."""
        ...

    def get_branch_job(self, job_id: int) -> BranchJob | None:
        """Return a snapshot of the job, or None if it does not exist."""
        ...

    def delete_job(self, job_id: int) -> None:
        """Delete the job from the host."""
        ...


def find_branch_jobs(
    adapter: BranchJobsAdapter,
    *,
    project: str | None = None,
    branch_regex: str | None = None,
) -> list[BranchJob]:
    """
    Select branch jobs by owning project and branch name.

    Args:
        adapter: Adapter used to list branch jobs.
        project: Optional multi-branch project name (exact match).
        branch_regex: Optional regular expression applied to branch names.

    Returns:
        Branch jobs matching every given criterion, in adapter order.

    Raises:
        ValueError: If branch_regex is not a valid regular expression.
    """
    rx = None
    if branch_regex:
        try:
            rx = re.compile(branch_regex)
        except re.error as exc:
            raise ValueError(f"Invalid regex expression: {exc}") from exc

    jobs = adapter.list_branch_jobs(project=project)
    if rx is None:
        return jobs
    return [j for j in jobs if j.branch_name and rx.search(j.branch_name)]
