"""Shared CLI helpers: the Rich console and logging setup."""

from __future__ import annotations

import logging

from rich.console import Console

console = Console()
logger = logging.getLogger("confsync.cli")


def setup_logging(verbose: bool) -> None:
    """Route confsync loggers to stderr; debug detail only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
