"""Pipeline declaration reader.

A pipeline names its own tear-down job with a job-level property:

    properties([branchTearDownExecutor('my-cleanup-job')])

On the host this ends up as a job property (a tag) keyed
``branchTearDownExecutor``. The value is either the bare job name or the
declaration text itself; both forms are accepted.
"""

from __future__ import annotations

import logging
import re

from branchteardown.core.jobs import BranchJob

logger = logging.getLogger(__name__)

DECLARATION_KEY = "branchTearDownExecutor"

_DECLARATION_RE = re.compile(
    r"""branchTearDownExecutor\s*\(\s*(?P<q>['"])(?P<name>.*?)(?P=q)\s*\)"""
)
_DECLARATION_CALL_RE = re.compile(r"branchTearDownExecutor\s*\(")


def parse_declaration(text: str) -> str | None:
    """
    Extract the job name from a `branchTearDownExecutor('<name>')` declaration.

    Returns None if the text contains no declaration or the declared name is
    empty. When several declarations are present the last one wins, matching
    how a later `properties` call replaces an earlier one.
    """
    names = [m.group("name") for m in _DECLARATION_RE.finditer(text)]
    if not names or not names[-1]:
        return None
    return names[-1]


def read_declared_tear_down_job(job: BranchJob) -> str | None:
    """Return the tear-down job declared by the branch job's pipeline, if any."""
    raw = (job.properties or {}).get(DECLARATION_KEY)
    if not raw:
        return None
    if _DECLARATION_RE.search(raw):
        return parse_declaration(raw)
    if _DECLARATION_CALL_RE.search(raw):
        logger.warning(
            "Ignoring malformed %s declaration on job %r: %r",
            DECLARATION_KEY,
            job.name,
            raw,
        )
        return None
    return raw
