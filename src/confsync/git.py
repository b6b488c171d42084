"""
Version-control collaborator — the git commands confsync needs.

The reconciler only talks to the VersionControl interface, so tests
can substitute a recorder and nothing shells out. GitClient is the
real implementation: every command runs synchronously in the
repository directory and any non-zero exit raises GitCommandError.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import GitCommandError

logger = logging.getLogger("confsync.git")


class VersionControl(ABC):
    """Abstract version-control operations against one working copy."""

    @abstractmethod
    def fetch(self) -> str:
        """Fetch from all remotes."""

    @abstractmethod
    def checkout(self, branch: str) -> str:
        """Switch the working copy to ``branch``."""

    @abstractmethod
    def pull(self, remote: str, branch: str) -> str:
        """Merge ``remote/branch`` into the current branch."""

    @abstractmethod
    def status_short(self) -> str:
        """Short status of the working copy."""

    @abstractmethod
    def add_all(self) -> str:
        """Stage every change, including deletions."""

    @abstractmethod
    def commit(self, message: str) -> str:
        """Commit the staged changes."""

    @abstractmethod
    def push(self, remote: str, branch: str) -> str:
        """Push ``branch`` to ``remote``, creating the upstream if absent."""


class GitClient(VersionControl):
    """Runs the ``git`` binary inside the repository directory."""

    def __init__(self, repo_path: Path, git: str = "git"):
        self.repo_path = Path(repo_path)
        self.git = git

    def _run(self, *args: str) -> str:
        """Run one git command and return its stdout.

        Raises:
            GitCommandError: Non-zero exit, or git could not be started.
        """
        cmd = [self.git, *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.repo_path)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.repo_path),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.error("Could not run %s: %s", cmd[0], exc)
            raise GitCommandError(cmd, -1, str(exc)) from exc

        if result.returncode != 0:
            logger.error(
                "Git command failed: %s -> %s", " ".join(cmd), result.stderr.strip()
            )
            raise GitCommandError(cmd, result.returncode, result.stderr)
        return result.stdout

    def fetch(self) -> str:
        return self._run("fetch")

    def checkout(self, branch: str) -> str:
        return self._run("checkout", branch)

    def pull(self, remote: str, branch: str) -> str:
        return self._run("pull", remote, branch)

    def status_short(self) -> str:
        return self._run("status", "--short")

    def add_all(self) -> str:
        return self._run("add", "-A")

    def commit(self, message: str) -> str:
        return self._run("commit", "-m", message)

    def push(self, remote: str, branch: str) -> str:
        # push.default=simple refuses a mismatched upstream; never --force
        return self._run(
            "-c", "push.default=simple", "push", "--set-upstream", remote, branch
        )
