"""
Change scanner — classify differences between two directory trees.

Only existence and modification time are compared. A file re-saved
with identical content but a newer mtime counts as modified; an edit
whose mtime was rolled back is missed. Content hashing is deliberately
not part of the contract.

Missing roots are treated as empty trees.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Collection, Iterator

from .models import (
    ChangeAction,
    ChangeReason,
    ChangeRecord,
    FileEntry,
    ScanDirection,
    SyncConfig,
)

logger = logging.getLogger("confsync.scanner")


def walk_files(root: Path, exclude: Collection[str] = ()) -> Iterator[FileEntry]:
    """Yield every regular file under ``root`` in sorted order.

    Args:
        root: Tree to walk. Nothing is yielded if it does not exist.
        exclude: Names pruned at any depth (e.g. ``.git``, which may
            be a directory or, in a linked worktree, a file).

    Yields:
        FileEntry with a forward-slash relative path and the file's mtime.
    """
    root = Path(root)
    if not root.is_dir():
        logger.debug("Scan root missing, treating as empty: %s", root)
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude)
        for name in sorted(f for f in filenames if f not in exclude):
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            yield FileEntry(
                relative_path=path.relative_to(root).as_posix(),
                mtime=path.stat().st_mtime,
            )


def scan(
    source_root: Path,
    compare_root: Path,
    direction: ScanDirection,
    exclude: Collection[str] = (),
) -> list[ChangeRecord]:
    """Classify differences between ``source_root`` and ``compare_root``.

    NEW_OR_MODIFIED walks the source tree: files with no counterpart are
    new, files strictly newer than their counterpart are modified.
    DELETIONS walks the compare tree: files with no counterpart in the
    source tree become DeleteFromRepo records pointing at the compare file.

    Args:
        source_root: The tree treated as the candidate truth (live folder).
        compare_root: The baseline tree (repository).
        direction: Which pass to run.
        exclude: Directory names skipped in the walked tree.

    Returns:
        Records in walk order, at most one per relative path.
    """
    source_root = Path(source_root)
    compare_root = Path(compare_root)
    records: list[ChangeRecord] = []

    if direction == ScanDirection.NEW_OR_MODIFIED:
        for entry in walk_files(source_root, exclude):
            source = source_root / entry.relative_path
            counterpart = compare_root / entry.relative_path
            if not counterpart.is_file():
                reason = ChangeReason.NEW_FILE
            elif entry.mtime > counterpart.stat().st_mtime:
                reason = ChangeReason.MODIFIED
            else:
                continue
            records.append(
                ChangeRecord(
                    action=ChangeAction.COPY_TO_REPO,
                    reason=reason,
                    relative_path=entry.relative_path,
                    source_path=source,
                    dest_path=counterpart,
                )
            )
    else:
        for entry in walk_files(compare_root, exclude):
            if (source_root / entry.relative_path).is_file():
                continue
            records.append(
                ChangeRecord(
                    action=ChangeAction.DELETE_FROM_REPO,
                    reason=ChangeReason.DELETED_IN_PUBLIC,
                    relative_path=entry.relative_path,
                    source_path=compare_root / entry.relative_path,
                    dest_path=None,
                )
            )

    logger.debug(
        "Scan %s %s -> %s: %d record(s)",
        direction.value, source_root, compare_root, len(records),
    )
    return records


def scan_push_changes(config: SyncConfig) -> list[ChangeRecord]:
    """Everything a push would publish: new/modified first, then deletions."""
    changed = scan(config.live_path, config.repo_path, ScanDirection.NEW_OR_MODIFIED)
    deleted = scan(
        config.live_path,
        config.repo_path,
        ScanDirection.DELETIONS,
        exclude={config.vcs_dir},
    )
    return changed + deleted


def scan_unpublished(config: SyncConfig) -> list[ChangeRecord]:
    """Live edits not yet in the repository (the pull pre-check)."""
    return scan(config.live_path, config.repo_path, ScanDirection.NEW_OR_MODIFIED)
