from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from branchteardown.core.jobs import BranchJob, Job, JobRun  # noqa: E402


class InMemoryHost:
    """Job registry and branch job store kept in dicts.

    Build numbers work like a CI server's: every job starts with next build
    number 1 and each scheduled build takes the current number. Scheduling
    is serialized the way a real build queue serializes enqueues.
    """

    def __init__(self):
        self.jobs: dict[str, Job] = {}
        self.next_build_number: dict[str, int] = {}
        self.builds: dict[str, list[tuple[int, list[tuple[str, str]]]]] = {}
        self.branch_jobs: dict[int, BranchJob] = {}
        self.deleted: list[int] = []
        self._next_id = 1000
        self._queue_lock = threading.Lock()

    def create_job(self, name: str) -> Job:
        self._next_id += 1
        job = Job(id=self._next_id, name=name)
        self.jobs[name] = job
        self.next_build_number[name] = 1
        self.builds[name] = []
        return job

    def add_branch_job(self, job: BranchJob) -> BranchJob:
        self.branch_jobs[job.id] = job
        return job

    # JobRegistry
    def find_job_by_name(self, name: str) -> Job | None:
        return self.jobs.get(name)

    def schedule_build(self, job: Job, parameters) -> JobRun:
        with self._queue_lock:
            number = self.next_build_number[job.name]
            self.next_build_number[job.name] = number + 1
            self.builds[job.name].append((number, parameters.as_pairs()))
        return JobRun(run_id=job.id * 100 + number, job_id=job.id)

    # BranchJobsAdapter
    def list_branch_jobs(self, project: str | None = None) -> list[BranchJob]:
        return [
            j
            for j in self.branch_jobs.values()
            if j.is_branch_job and (project is None or j.project == project)
        ]

    def get_branch_job(self, job_id: int) -> BranchJob | None:
        return self.branch_jobs.get(job_id)

    def delete_job(self, job_id: int) -> None:
        del self.branch_jobs[job_id]
        self.deleted.append(job_id)


@pytest.fixture
def host() -> InMemoryHost:
    return InMemoryHost()


@pytest.fixture
def feature_job() -> BranchJob:
    return BranchJob(
        id=1,
        name="feature",
        project="p",
        git_url="/repo",
        branch_name="feature",
    )
