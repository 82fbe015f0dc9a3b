"""Build the parameters handed to a tear-down job."""

from __future__ import annotations

from branchteardown.core.jobs import BranchJob, TearDownParameters

_REF_PREFIXES = ("refs/heads/", "refs/remotes/origin/", "origin/")


class MetadataUnavailable(RuntimeError):
    """Raised when source-control metadata cannot be read from a branch job."""


def short_branch_name(ref: str) -> str:
    """
    Return the short branch name for a ref.

    `refs/heads/feature` and `origin/feature` both become `feature`; a name
    that is already short is returned unchanged.
    """
    for prefix in _REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def build_parameters(job: BranchJob) -> TearDownParameters:
    """
    Derive `git_url` and `branch_name` from a branch job's source metadata.

    Args:
        job: Snapshot of the deleted branch job.

    Returns:
        TearDownParameters with the repository URL exactly as reported and
        the short branch name.

    Raises:
        MetadataUnavailable: If the repository URL or branch is missing.
    """
    if not job.git_url:
        raise MetadataUnavailable(
            f"Job '{job.name}' (id: {job.id}) has no repository URL."
        )
    if not job.branch_name:
        raise MetadataUnavailable(
            f"Job '{job.name}' (id: {job.id}) has no branch name."
        )

    branch = short_branch_name(job.branch_name)
    if not branch:
        raise MetadataUnavailable(
            f"Job '{job.name}' (id: {job.id}) has an empty branch ref "
            f"'{job.branch_name}'."
        )
    return TearDownParameters(git_url=job.git_url, branch_name=branch)
