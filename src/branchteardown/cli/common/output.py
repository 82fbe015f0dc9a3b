"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from branchteardown.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


def _or_dash(value: Any) -> str:
    return "-" if value in (None, "") else str(value)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {_or_dash(v)}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask a y/n question with the shared confirm style."""
        console.print("[meta]Use y/n then Enter[/]")
        return bool(
            questionary.confirm(
                message,
                default=default,
                style=QUESTIONARY_STYLE_CONFIRM,
                qmark="✦",
                auto_enter=False,
            ).ask()
        )

    def branch_jobs_table(self, jobs: Iterable[Any], title: str = "Branch jobs") -> None:
        """
        Expects objects with .id .name .project .branch_name .git_url
        (like branchteardown.core.jobs.BranchJob)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job ID", style="ok", no_wrap=True)
        t.add_column("Name")
        t.add_column("Project", style="meta")
        t.add_column("Branch")
        t.add_column("Repository", style="meta")

        for j in jobs:
            t.add_row(
                str(j.id),
                j.name,
                _or_dash(j.project),
                _or_dash(j.branch_name),
                _or_dash(j.git_url),
            )

        console.print(t)

    def plans_table(self, plans: Iterable[Any], title: str = "Tear-down plan") -> None:
        """
        Expects objects with .job .job_name .parameters .error
        (like branchteardown.core.listener.TearDownPlan)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Branch job", style="ok")
        t.add_column("Tear-down job")
        t.add_column("git_url", style="meta")
        t.add_column("branch_name", style="meta")
        t.add_column("Error", style="err")

        for p in plans:
            params = p.parameters
            t.add_row(
                f"{p.job.name} ({p.job.id})",
                p.job_name,
                _or_dash(params.git_url if params else None),
                _or_dash(params.branch_name if params else None),
                _or_dash(p.error) if p.error else "",
            )

        console.print(t)

    def deletion_results_table(
        self, reports: Iterable[Any], title: str = "Deletion results"
    ) -> None:
        """
        Expects objects with .job .dispatch_results .errors
        (like branchteardown.core.listener.DeletionReport)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Branch job", style="ok")
        t.add_column("Tear-down job")
        t.add_column("Outcome")
        t.add_column("Run ID", no_wrap=True)

        for r in reports:
            label = f"{r.job.name} ({r.job.id})"
            for d in r.dispatch_results:
                outcome = d.outcome.value if hasattr(d.outcome, "value") else str(d.outcome)
                style = "ok" if outcome == "SCHEDULED" else "warn"
                run_id = str(d.run.run_id) if d.run else "-"
                t.add_row(label, d.job_name, f"[{style}]{outcome}[/{style}]", run_id)
            for err in r.errors:
                t.add_row(label, "-", f"[err]FAILED[/] {err}", "-")
            if not r.dispatch_results and not r.errors:
                t.add_row(label, "-", "[meta]IGNORED[/]", "-")

        console.print(t)


out = Out()
