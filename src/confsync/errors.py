"""Exceptions raised by confsync."""

from __future__ import annotations

from typing import Sequence


class ConfsyncError(Exception):
    """Base class for every confsync failure."""


class ConfigError(ConfsyncError):
    """Configuration is missing, unreadable, or invalid."""


class GitCommandError(ConfsyncError):
    """A git invocation exited non-zero or could not be started.

    Attributes:
        command: The full argv that was run.
        returncode: Process exit code (-1 if git never started).
        stderr: Whatever git wrote to stderr.
    """

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            f"{' '.join(self.command)} failed with exit code {returncode}{detail}"
        )
