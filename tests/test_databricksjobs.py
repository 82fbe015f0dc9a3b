from types import SimpleNamespace

import pytest
from databricks.sdk.errors import DatabricksError, NotFound

from branchteardown.core.adapters.databricksjobs import DatabricksJobsAdapter
from branchteardown.core.dispatch import EnqueueFailure
from branchteardown.core.jobs import Job, TearDownParameters


def _job(job_id, name, tags=None, git_url=None, git_branch=None):
    git_source = None
    if git_url or git_branch:
        git_source = SimpleNamespace(git_url=git_url, git_branch=git_branch)
    return SimpleNamespace(
        job_id=job_id,
        settings=SimpleNamespace(name=name, tags=tags, git_source=git_source),
    )


class _Jobs:
    def __init__(self, jobs):
        self.jobs = jobs
        self.deleted: list[int] = []
        self.run_now_calls: list[dict] = []
        self.list_calls: list[str | None] = []
        self.fail_run_now = False

    def list(self, name=None):
        self.list_calls.append(name)
        if name is None:
            return iter(self.jobs)
        # The API filter is case-insensitive
        return iter(
            j for j in self.jobs if j.settings and j.settings.name.lower() == name.lower()
        )

    def get(self, job_id):
        for j in self.jobs:
            if j.job_id == job_id:
                return j
        raise NotFound("no such job")

    def delete(self, job_id):
        self.deleted.append(job_id)

    def run_now(self, job_id, job_parameters=None):
        if self.fail_run_now:
            raise DatabricksError("Job is paused")
        self.run_now_calls.append({"job_id": job_id, "job_parameters": job_parameters})
        return SimpleNamespace(run_id=555)


@pytest.fixture
def jobs_api():
    return _Jobs(
        [
            _job(1, "job-tear-down-executor"),
            _job(2, "JOB-TEAR-DOWN-EXECUTOR"),
            _job(
                3,
                "p-feature",
                tags={"multibranch_project": "p", "branchTearDownExecutor": "cleanup"},
                git_url="/repo",
                git_branch="feature",
            ),
            _job(
                4,
                "q-main",
                tags={"multibranch_project": "q", "git_url": "/other", "git_branch": "main"},
            ),
            _job(5, "job-tear-down-executor", tags={"multibranch_project": "p"}),
            SimpleNamespace(job_id=6, settings=None),
        ]
    )


@pytest.fixture
def adapter(jobs_api):
    return DatabricksJobsAdapter(SimpleNamespace(jobs=jobs_api))


def test_list_branch_jobs_only_returns_tagged_jobs(adapter):
    jobs = adapter.list_branch_jobs()

    assert [j.id for j in jobs] == [3, 4, 5]
    assert [j.id for j in adapter.list_branch_jobs(project="q")] == [4]


def test_branch_job_snapshot_reads_git_source_then_tags(adapter):
    by_id = {j.id: j for j in adapter.list_branch_jobs()}

    assert by_id[3].git_url == "/repo"
    assert by_id[3].branch_name == "feature"
    assert by_id[3].properties == {"branchTearDownExecutor": "cleanup"}
    assert by_id[4].git_url == "/other"
    assert by_id[4].branch_name == "main"


def test_get_branch_job_missing_returns_none(adapter):
    assert adapter.get_branch_job(404) is None
    assert adapter.get_branch_job(1).is_branch_job is False


def test_find_job_by_name_is_exact_and_top_level(adapter, jobs_api):
    job = adapter.find_job_by_name("job-tear-down-executor")

    assert job == Job(id=1, name="job-tear-down-executor", tags={})
    assert jobs_api.list_calls == ["job-tear-down-executor"]
    assert adapter.find_job_by_name("Job-Tear-Down-Executor") is None


def test_schedule_build_passes_ordered_job_parameters(adapter, jobs_api):
    run = adapter.schedule_build(
        Job(id=1, name="job-tear-down-executor"),
        TearDownParameters(git_url="/repo", branch_name="feature"),
    )

    assert run.run_id == 555
    assert run.job_id == 1
    params = jobs_api.run_now_calls[0]["job_parameters"]
    assert list(params.items()) == [("git_url", "/repo"), ("branch_name", "feature")]


def test_schedule_build_translates_sdk_errors(adapter, jobs_api):
    jobs_api.fail_run_now = True

    with pytest.raises(EnqueueFailure, match="Job is paused"):
        adapter.schedule_build(
            Job(id=1, name="job-tear-down-executor"),
            TearDownParameters(git_url="/repo", branch_name="feature"),
        )


def test_delete_job_calls_sdk(adapter, jobs_api):
    adapter.delete_job(3)

    assert jobs_api.deleted == [3]
