"""Terminal UI utilities for picking branch jobs."""

from __future__ import annotations

import questionary

from branchteardown.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from branchteardown.core.jobs import BranchJob

_MAX_JOB_NAME_WIDTH = 72


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _branch_choice_title(job: BranchJob, *, name_width: int) -> str:
    """Format one choice as `<name>  [<project>:<branch>]  (id: <job_id>)`."""
    short_name = _truncate(job.name, _MAX_JOB_NAME_WIDTH)
    where = f"{job.project or '-'}:{job.branch_name or '?'}"
    return f"{short_name.ljust(name_width)}  [{where}]  (id: {job.id})"


def select_branch_jobs(jobs: list[BranchJob]) -> list[BranchJob]:
    """Display a checkbox prompt to pick branch jobs to delete.

    Args:
        jobs: Branch jobs to choose from.

    Returns:
        The selected jobs, or an empty list if none were selected.
    """
    shown_names = [_truncate(job.name, _MAX_JOB_NAME_WIDTH) for job in jobs]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_branch_choice_title(job, name_width=name_width),
            value=job,
        )
        for job in jobs
    ]

    return (
        questionary.checkbox(
            "Select branch jobs to delete:",
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
        ).ask()
        or []
    )
