"""CLI application for branch tear-down tooling."""

import typer

from branchteardown.cli.commands.branches import app as branches_app
from branchteardown.cli.commands.config import app as config_app
from branchteardown.cli.common.logs import configure_logging
from branchteardown.cli.common.options import VerboseOpt

app = typer.Typer(
    help="branchteardown - trigger tear-down jobs when branch jobs are deleted",
    no_args_is_help=True,
)


@app.callback()
def _main(verbose: bool = VerboseOpt):
    """Configure logging for every subcommand."""
    configure_logging(verbose)


app.add_typer(
    branches_app,
    name="branches",
    help="Find / resolve / delete branch jobs.",
)
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
