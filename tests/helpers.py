"""Test doubles and file helpers shared by the confsync tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, Sequence

from confsync.errors import GitCommandError
from confsync.git import VersionControl
from confsync.models import ChangeRecord
from confsync.prompts import Prompter, is_affirmative

OLD = 1_600_000_000
NEW = 1_700_000_000


def write(path: Path, text: str = "x", mtime: Optional[float] = None) -> Path:
    """Create ``path`` (and parents) with ``text``, optionally pinning its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


class RecordingVCS(VersionControl):
    """Fake version control that records calls instead of running git."""

    def __init__(self, fail_on: Sequence[str] = (), status: str = ""):
        self.calls: list[tuple] = []
        self.fail_on = set(fail_on)
        self.status = status

    def _call(self, name: str, *args: str) -> str:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise GitCommandError(["git", name, *args], 1, f"{name} exploded")
        return ""

    @property
    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def fetch(self) -> str:
        return self._call("fetch")

    def checkout(self, branch: str) -> str:
        return self._call("checkout", branch)

    def pull(self, remote: str, branch: str) -> str:
        return self._call("pull", remote, branch)

    def status_short(self) -> str:
        self._call("status_short")
        return self.status

    def add_all(self) -> str:
        return self._call("add_all")

    def commit(self, message: str) -> str:
        return self._call("commit", message)

    def push(self, remote: str, branch: str) -> str:
        return self._call("push", remote, branch)


class ScriptedPrompter(Prompter):
    """Prompter with canned answers.

    Args:
        choose: Picks the approved subset; defaults to approving everything.
        confirm_answer: Raw text typed at the yes/no prompt.
        text: Answer to the commit-message prompt.
    """

    def __init__(
        self,
        choose: Optional[Callable[[Sequence[ChangeRecord]], list[ChangeRecord]]] = None,
        confirm_answer: str = "y",
        text: str = "",
    ):
        self.choose = choose or (lambda records: list(records))
        self.confirm_answer = confirm_answer
        self.text = text
        self.offered: list[ChangeRecord] = []
        self.asked: list[str] = []

    def select(self, records):
        self.offered = list(records)
        return self.choose(records)

    def confirm(self, message):
        self.asked.append(message)
        return is_affirmative(self.confirm_answer)

    def ask_text(self, message):
        self.asked.append(message)
        return self.text


