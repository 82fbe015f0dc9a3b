"""Common CLI options for the CLI."""

import typer

ProfileOpt = typer.Option(
    None,
    "--profile",
    "-p",
    help="Databricks CLI profile (from ~/.databrickscfg)",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Show debug logging",
)

ProjectOpt = typer.Option(
    None,
    "--project",
    help="Multi-branch project name (exact match)",
)

BranchOpt = typer.Option(
    None,
    "--branch",
    help="Regex on branch name",
)

JobIdsArg = typer.Argument(
    None,
    help="Branch job ids. Leave empty to pick interactively.",
    show_default=False,
)

ConfirmOpt = typer.Option(
    True,
    "--confirm/--no-confirm",
    help="Ask for confirmation before deleting jobs",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show which tear-down jobs would be triggered, but don't delete anything",
)
