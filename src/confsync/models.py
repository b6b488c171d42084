"""
Pydantic models for confsync configuration and change tracking.

A scan produces ChangeRecords; the reconciler consumes them. Nothing
here is persisted: every model lives for a single push or pull run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ChangeAction(str, Enum):
    """What applying a record does to the repository."""

    COPY_TO_REPO = "CopyToRepo"
    DELETE_FROM_REPO = "DeleteFromRepo"


class ChangeReason(str, Enum):
    """Why a file showed up in a scan."""

    NEW_FILE = "New File"
    MODIFIED = "Modified"
    DELETED_IN_PUBLIC = "Deleted in Public"


class ScanDirection(str, Enum):
    """Which tree is walked during a scan pass."""

    NEW_OR_MODIFIED = "new-or-modified"
    DELETIONS = "deletions"


class FileEntry(BaseModel):
    """A regular file found while walking a tree.

    ``relative_path`` always uses forward slashes so paths from both
    trees compare equal regardless of platform.
    """

    relative_path: str
    mtime: float


class ChangeRecord(BaseModel):
    """One difference between the live folder and the repository.

    Attributes:
        action: Copy into the repository or delete from it.
        reason: Human-readable classification.
        relative_path: Path relative to either tree root.
        source_path: File copied (copies) or repository file removed (deletes).
        dest_path: Copy destination; None for deletes.
    """

    action: ChangeAction
    reason: ChangeReason
    relative_path: str
    source_path: Path
    dest_path: Optional[Path] = None


class SyncConfig(BaseModel):
    """The two roots and the tracked branch, fixed for one run."""

    live_path: Path
    repo_path: Path
    branch: str = "main"
    remote: str = "origin"
    vcs_dir: str = ".git"

    @field_validator("live_path", "repo_path", mode="after")
    @classmethod
    def _expand(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("branch", "remote", "vcs_dir")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ApplyFailure(BaseModel):
    """A record that could not be applied."""

    record: ChangeRecord
    error: str


class ApplyReport(BaseModel):
    """Result of applying a batch of approved records."""

    applied: list[ChangeRecord] = Field(default_factory=list)
    failed: list[ApplyFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class MirrorReport(BaseModel):
    """Result of mirroring the repository onto the live folder."""

    live_path: Path
    entries: list[str] = Field(default_factory=list)
    created_live: bool = False
