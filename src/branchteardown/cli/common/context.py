"""Application context management for the CLI."""

from dataclasses import dataclass

from databricks.sdk import WorkspaceClient

from branchteardown.cli.common.exits import die, exit_from_exc
from branchteardown.core.adapters.databricksjobs import DatabricksJobsAdapter
from branchteardown.core.auth import AuthError, get_client
from branchteardown.core.config import ConfigError, GlobalConfig, GlobalConfigStore
from branchteardown.core.listener import DeletionNotifier, TearDownListener


@dataclass
class BranchesAppContext:
    """Databricks client, jobs adapter and the wired deletion notifier."""

    profile: str | None
    client: WorkspaceClient
    adapter: DatabricksJobsAdapter
    config: GlobalConfig
    notifier: DeletionNotifier


@dataclass
class ConfigAppContext:
    """Configuration store and the settings loaded from it."""

    store: GlobalConfigStore
    config: GlobalConfig


def load_config(store: GlobalConfigStore) -> GlobalConfig:
    """Load global settings or exit with a readable error."""
    try:
        return store.load()
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=1)


def build_branches_context(profile: str | None) -> BranchesAppContext:
    """Build the context for branch job commands.

    The tear-down listener is registered on a fresh notifier so every
    deletion made through this context triggers the tear-down chain.
    """
    config = load_config(GlobalConfigStore())
    try:
        client = get_client(profile)
    except AuthError as exc:
        die(str(exc), code=1)
    adapter = DatabricksJobsAdapter(client, profile=profile)

    notifier = DeletionNotifier()
    notifier.register(TearDownListener(adapter, config))
    return BranchesAppContext(
        profile=profile,
        client=client,
        adapter=adapter,
        config=config,
        notifier=notifier,
    )


def build_config_context() -> ConfigAppContext:
    """Build the context for the administrative config commands."""
    store = GlobalConfigStore()
    return ConfigAppContext(store=store, config=load_config(store))
