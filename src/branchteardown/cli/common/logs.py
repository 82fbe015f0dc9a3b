"""Logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from branchteardown.cli.common.output import console

_PACKAGE_LOGGER = "branchteardown"


def configure_logging(verbose: bool = False) -> None:
    """Route the package's log records through Rich on the CLI console."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
