"""Authentication helpers for the Databricks workspace.

Branch jobs and tear-down jobs both live in a Databricks workspace. This
module builds the WorkspaceClient from the unified Databricks configuration
(a ~/.databrickscfg profile or DATABRICKS_* environment variables) and
normalizes the host URL, which is often pasted straight from the browser.
"""

from databricks.sdk import WorkspaceClient
from databricks.sdk.core import Config


class AuthError(RuntimeError):
    """Raised when a workspace client cannot be configured."""


def _sanitize_host(host: str | None) -> str | None:
    """
    Normalize a workspace host URL.

    Drops the query string (e.g. '?o=123456789' copied from the browser)
    and any trailing slash.
    """
    if not host:
        return host
    return host.split("?", 1)[0].rstrip("/")


def get_client(profile: str | None = None) -> WorkspaceClient:
    """
    Create a WorkspaceClient for the given profile (or the default config).

    Raises:
        AuthError: If the Databricks configuration cannot be resolved.
    """
    try:
        cfg = Config(profile=profile) if profile else Config()
    except ValueError as exc:
        where = f"profile '{profile}'" if profile else "the default configuration"
        raise AuthError(
            f"Could not configure Databricks from {where}: {exc}\n"
            "Run `databricks auth login` or set DATABRICKS_HOST / DATABRICKS_TOKEN."
        ) from exc
    cfg.host = _sanitize_host(cfg.host)
    return WorkspaceClient(config=cfg)
