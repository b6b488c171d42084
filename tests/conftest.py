"""Shared test fixtures for confsync."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from confsync.models import SyncConfig


@pytest.fixture
def live(tmp_path: Path) -> Path:
    path = tmp_path / "live"
    path.mkdir()
    return path


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    (path / ".git").mkdir(parents=True)
    (path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    return path


@pytest.fixture
def config(live: Path, repo: Path) -> SyncConfig:
    return SyncConfig(live_path=live, repo_path=repo, branch="main")


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, force_terminal=False)
