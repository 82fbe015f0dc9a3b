"""Global tear-down configuration.

The only global setting is the name of the tear-down job to trigger when a
pipeline does not declare its own. `GlobalConfig` holds it in memory and is
passed explicitly to whoever needs it; `GlobalConfigStore` persists it as a
single named field in a JSON document under the user config directory.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path

FORM_FIELD = "jobteardown.tearDownJob"


class ConfigError(RuntimeError):
    """Raised when the persisted configuration cannot be read or written."""


class GlobalConfig:
    """Process-wide tear-down settings, safe to read from concurrent listeners."""

    def __init__(self, tear_down_job: str | None = None) -> None:
        self._lock = threading.Lock()
        self._tear_down_job = _normalize(tear_down_job)

    def get_tear_down_job(self) -> str | None:
        """Return the globally configured tear-down job name, or None."""
        with self._lock:
            return self._tear_down_job

    def set_tear_down_job(self, name: str | None) -> None:
        """Store a new global tear-down job name; empty input clears it."""
        value = _normalize(name)
        with self._lock:
            self._tear_down_job = value

    def __repr__(self) -> str:
        return f"GlobalConfig(tear_down_job={self.get_tear_down_job()!r})"


def _normalize(name: str | None) -> str | None:
    """Map empty or whitespace-only submissions to "not configured"."""
    if name is None or not name.strip():
        return None
    return name


class GlobalConfigStore:
    """JSON-file persistence for GlobalConfig."""

    _CONFIG_DIR_ENV = "BRANCHTEARDOWN_CONFIG_DIR"
    _FILE_NAME = "config.json"
    _FIELD = "tearDownJob"

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or self._default_path()

    def _default_path(self) -> Path:
        """Return the config file path, honoring env overrides."""
        config_root = os.getenv(self._CONFIG_DIR_ENV)
        if config_root:
            return Path(config_root) / self._FILE_NAME
        xdg = os.getenv("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        return base / "branchteardown" / self._FILE_NAME

    def load(self) -> GlobalConfig:
        """Read the persisted settings; a missing file means nothing is configured."""
        if not self.path.exists():
            return GlobalConfig()
        try:
            payload = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"Invalid configuration in {self.path}: expected an object")

        value = payload.get(self._FIELD)
        if value is not None and not isinstance(value, str):
            raise ConfigError(
                f"Invalid configuration in {self.path}: '{self._FIELD}' must be a string"
            )
        return GlobalConfig(value)

    def save(self, config: GlobalConfig) -> None:
        """Persist the settings, replacing the file atomically."""
        payload = {self._FIELD: config.get_tear_down_job()}
        tmp = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2))
            os.replace(tmp, self.path)
        except OSError as exc:
            raise ConfigError(f"Failed to write {self.path}: {exc}") from exc
