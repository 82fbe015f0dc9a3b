"""Tear-down job resolution.

Picks the job to trigger for a deleted branch job. The candidates are
consulted in a fixed order and the first one that is set wins:

1. the override declared by the branch job's own pipeline,
2. the globally configured tear-down job,
3. ``DEFAULT_TEAR_DOWN_JOB``.

Empty and whitespace-only candidates count as not set. The result is
never validated against the registry; a name that does not
exist is handled by the dispatcher.
"""

from __future__ import annotations

DEFAULT_TEAR_DOWN_JOB = "job-tear-down-executor"


def resolve(per_pipeline_override: str | None, global_config: str | None) -> str:
    """Return the tear-down job name for one deletion event."""
    for candidate in (per_pipeline_override, global_config):
        if candidate and candidate.strip():
            return candidate
    return DEFAULT_TEAR_DOWN_JOB
