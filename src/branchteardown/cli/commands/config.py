"""Administrative commands for the global tear-down setting."""

import typer

from branchteardown.cli.common.context import ConfigAppContext, build_config_context
from branchteardown.cli.common.exits import exit_from_exc
from branchteardown.cli.common.output import out
from branchteardown.core.config import FORM_FIELD, ConfigError
from branchteardown.core.resolver import DEFAULT_TEAR_DOWN_JOB

app = typer.Typer(
    help="Show or change the global tear-down job",
    no_args_is_help=True,
)


@app.callback()
def _init(ctx: typer.Context):
    """Load the persisted global settings."""
    ctx.obj = build_config_context()


def _save(appctx: ConfigAppContext) -> None:
    try:
        appctx.store.save(appctx.config)
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=1)


@app.command()
def show(ctx: typer.Context):
    """
    Show the global tear-down job and where it is stored.
    """
    appctx: ConfigAppContext = ctx.obj
    out.kv(
        {
            FORM_FIELD: appctx.config.get_tear_down_job(),
            "default": DEFAULT_TEAR_DOWN_JOB,
            "file": appctx.store.path,
        }
    )


@app.command("set")
def set_job(ctx: typer.Context, name: str = typer.Argument(..., help="Tear-down job name")):
    """
    Set the global tear-down job.
    """
    appctx: ConfigAppContext = ctx.obj
    appctx.config.set_tear_down_job(name)
    _save(appctx)

    current = appctx.config.get_tear_down_job()
    if current is None:
        out.warn(f"Empty name: falling back to '{DEFAULT_TEAR_DOWN_JOB}'")
    else:
        out.success(f"Global tear-down job set to '{current}'")


@app.command()
def clear(ctx: typer.Context):
    """
    Remove the global tear-down job.
    """
    appctx: ConfigAppContext = ctx.obj
    appctx.config.set_tear_down_job(None)
    _save(appctx)
    out.success(f"Global tear-down job cleared (default: '{DEFAULT_TEAR_DOWN_JOB}')")
