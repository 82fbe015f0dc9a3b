from __future__ import annotations

import logging

from databricks.sdk import WorkspaceClient
from databricks.sdk.errors import DatabricksError, NotFound

from branchteardown.core.declarations import DECLARATION_KEY
from branchteardown.core.dispatch import EnqueueFailure
from branchteardown.core.jobs import BranchJob, Job, JobRun, TearDownParameters

logger = logging.getLogger(__name__)


class DatabricksJobsAdapter:
    """
    Adapter around Databricks SDK Jobs APIs.

    A job is a branch job when it carries the `PROJECT_TAG` tag; its value is
    the owning multi-branch project. Every other job is top-level and can be
    used as a tear-down job.
    """

    PROJECT_TAG = "multibranch_project"
    GIT_URL_TAG = "git_url"
    GIT_BRANCH_TAG = "git_branch"

    def __init__(self, client: WorkspaceClient, profile: str | None = None):
        """Create a jobs adapter for a Databricks workspace."""
        self.client = client
        self.profile = profile or "default"

    def _to_branch_job(self, job_id: int, settings) -> BranchJob:
        """Build a BranchJob snapshot from SDK job settings."""
        tags = dict(getattr(settings, "tags", None) or {})
        git_source = getattr(settings, "git_source", None)

        git_url = getattr(git_source, "git_url", None) or tags.get(self.GIT_URL_TAG)
        branch = getattr(git_source, "git_branch", None) or tags.get(self.GIT_BRANCH_TAG)

        properties = {}
        if tags.get(DECLARATION_KEY):
            properties[DECLARATION_KEY] = tags[DECLARATION_KEY]

        return BranchJob(
            id=job_id,
            name=getattr(settings, "name", None) or str(job_id),
            project=tags.get(self.PROJECT_TAG) or None,
            git_url=git_url,
            branch_name=branch,
            properties=properties,
        )

    def list_branch_jobs(self, project: str | None = None) -> list[BranchJob]:
        """Return all branch jobs, optionally only those of one project."""
        jobs: list[BranchJob] = []
        for j in self.client.jobs.list():
            if not j.settings:
                continue
            job = self._to_branch_job(j.job_id, j.settings)
            if not job.is_branch_job:
                continue
            if project is not None and job.project != project:
                continue
            jobs.append(job)
        return jobs

    def get_branch_job(self, job_id: int) -> BranchJob | None:
        """Return a snapshot of the job, or None if it does not exist."""
        try:
            j = self.client.jobs.get(job_id)
        except NotFound:
            return None
        if not j.settings:
            return BranchJob(id=job_id, name=str(job_id))
        return self._to_branch_job(job_id, j.settings)

    def delete_job(self, job_id: int) -> None:
        """Delete a job from the workspace."""
        self.client.jobs.delete(job_id)

    def find_job_by_name(self, name: str) -> Job | None:
        """
        Return the top-level job named exactly `name`.

        The Jobs API name filter is case-insensitive, so results are checked
        for exact equality here. Branch jobs are never returned. If several
        jobs share the name, the oldest (lowest id) wins.
        """
        matches: list[Job] = []
        for j in self.client.jobs.list(name=name):
            if not j.settings or j.settings.name != name:
                continue
            tags = j.settings.tags or {}
            if tags.get(self.PROJECT_TAG):
                continue
            matches.append(Job(id=j.job_id, name=j.settings.name, tags=tags))

        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "%d jobs are named %r; using job %s",
                len(matches),
                name,
                min(m.id for m in matches),
            )
        return min(matches, key=lambda m: m.id)

    def schedule_build(self, job: Job, parameters: TearDownParameters) -> JobRun:
        """Trigger one run of the job without waiting for it to finish."""
        try:
            run = self.client.jobs.run_now(
                job_id=job.id,
                job_parameters=parameters.as_dict(),
            )
        except DatabricksError as exc:
            raise EnqueueFailure(job.name, str(exc)) from exc
        return JobRun(run_id=run.run_id, job_id=job.id)
