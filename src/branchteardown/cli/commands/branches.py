"""Commands for inspecting and deleting multi-branch pipeline jobs."""

import typer
from databricks.sdk.errors import DatabricksError

from branchteardown.cli.common.context import BranchesAppContext, build_branches_context
from branchteardown.cli.common.exits import die, ok_exit, warn_exit
from branchteardown.cli.common.options import (
    BranchOpt,
    ConfirmOpt,
    DryRunOpt,
    JobIdsArg,
    ProfileOpt,
    ProjectOpt,
)
from branchteardown.cli.common.output import out
from branchteardown.cli.tui import select_branch_jobs
from branchteardown.core.jobs import BranchJob, find_branch_jobs
from branchteardown.core.listener import (
    DeletionReport,
    delete_branch_job,
    plan_tear_down,
)

app = typer.Typer(
    help="Work with branch jobs of multi-branch pipelines",
    no_args_is_help=True,
)


@app.callback()
def _init(ctx: typer.Context, profile: str | None = ProfileOpt):
    """Initialize the workspace client and tear-down listener."""
    ctx.obj = build_branches_context(profile)


def _select(
    appctx: BranchesAppContext, project: str | None, branch: str | None
) -> list[BranchJob]:
    try:
        with out.status("Loading branch jobs..."):
            return find_branch_jobs(appctx.adapter, project=project, branch_regex=branch)
    except ValueError as e:
        die(str(e), code=1)


def _lookup(appctx: BranchesAppContext, job_ids: list[int]) -> list[BranchJob]:
    jobs: list[BranchJob] = []
    for job_id in job_ids:
        job = appctx.adapter.get_branch_job(job_id)
        if job is None:
            out.warn(f"Job {job_id} not found, skipping")
        elif not job.is_branch_job:
            out.warn(f"Job {job.name} ({job_id}) is not a branch job, skipping")
        else:
            jobs.append(job)
    return jobs


@app.command()
def find(
    ctx: typer.Context,
    project: str | None = ProjectOpt,
    branch: str | None = BranchOpt,
):
    """
    List branch jobs.
    """
    appctx: BranchesAppContext = ctx.obj
    jobs = _select(appctx, project, branch)

    if not jobs:
        warn_exit("No branch jobs found", code=0)

    out.branch_jobs_table(jobs, title="Branch jobs")


@app.command()
def resolve(ctx: typer.Context, job_id: int = typer.Argument(..., help="Branch job id")):
    """
    Show which tear-down job deleting a branch job would trigger.
    """
    appctx: BranchesAppContext = ctx.obj
    jobs = _lookup(appctx, [job_id])
    if not jobs:
        raise typer.Exit(1)

    plan = plan_tear_down(jobs[0], appctx.config)
    out.kv(
        {
            "branch job": f"{plan.job.name} ({plan.job.id})",
            "pipeline override": plan.override,
            "global setting": plan.global_job,
            "tear-down job": plan.job_name,
        }
    )
    if plan.error:
        die(plan.error, code=1)
    out.kv(dict(plan.parameters.as_pairs()))


@app.command()
def delete(
    ctx: typer.Context,
    job_ids: list[int] | None = JobIdsArg,
    project: str | None = ProjectOpt,
    branch: str | None = BranchOpt,
    confirm: bool = ConfirmOpt,
    dry_run: bool = DryRunOpt,
):
    """
    Delete branch jobs and trigger their tear-down jobs.
    """
    appctx: BranchesAppContext = ctx.obj

    if job_ids:
        selected = _lookup(appctx, job_ids)
    else:
        jobs = _select(appctx, project, branch)
        if not jobs:
            warn_exit("No branch jobs found", code=0)
        selected = select_branch_jobs(jobs)

    if not selected:
        warn_exit("No branch jobs selected", code=0)

    out.header("Selected branch jobs")
    out.plans_table([plan_tear_down(j, appctx.config) for j in selected])

    if dry_run:
        warn_exit("Dry-run enabled: no jobs were deleted", code=0)

    if confirm and not out.confirm(f"Delete {len(selected)} branch job(s)?"):
        ok_exit("Cancelled")

    reports: list[DeletionReport] = []
    failed_deletes = 0
    for job in selected:
        try:
            reports.append(delete_branch_job(appctx.adapter, appctx.notifier, job.id))
        except (LookupError, DatabricksError) as e:
            failed_deletes += 1
            out.error(f"Could not delete {job.name} ({job.id}): {e}")

    if reports:
        out.success(f"Deleted {len(reports)} branch job(s)")
        out.deletion_results_table(reports)

    if failed_deletes or any(r.errors for r in reports):
        raise typer.Exit(1)
