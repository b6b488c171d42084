"""
Reconciler — apply approved changes and run the push/pull flows.

    confsync push  ->  scan both ways -> select -> apply -> status -> commit/push
    confsync pull  ->  pre-scan -> warn/confirm -> fetch/checkout/pull -> mirror

Push never touches records the user did not approve. Pull treats the
repository as the truth and overwrites the live folder unconditionally
once confirmed.

There is no locking. Two invocations against the same trees at once
are unsupported.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .git import VersionControl
from .models import (
    ApplyFailure,
    ApplyReport,
    ChangeAction,
    ChangeRecord,
    MirrorReport,
    SyncConfig,
)
from .prompts import Prompter, changes_table
from .scanner import scan_push_changes, scan_unpublished

logger = logging.getLogger("confsync.reconciler")


class PushOutcome(str, Enum):
    NO_CHANGES = "no-changes"
    DRY_RUN = "dry-run"
    CANCELLED = "cancelled"
    APPLIED = "applied"
    PUBLISHED = "published"


class PullOutcome(str, Enum):
    CANCELLED = "cancelled"
    MIRRORED = "mirrored"


@dataclass
class PushResult:
    outcome: PushOutcome
    changes: list[ChangeRecord] = field(default_factory=list)
    report: Optional[ApplyReport] = None


@dataclass
class PullResult:
    outcome: PullOutcome
    unpublished: list[ChangeRecord] = field(default_factory=list)
    mirror: Optional[MirrorReport] = None


def apply_record(record: ChangeRecord) -> None:
    """Apply a single record to the repository tree.

    Raises:
        OSError: If the copy or delete fails.
    """
    if record.action == ChangeAction.COPY_TO_REPO:
        if record.dest_path is None:
            raise OSError(f"No destination for {record.relative_path}")
        record.dest_path.parent.mkdir(parents=True, exist_ok=True)
        _copy_file(record.source_path, record.dest_path)
    else:
        record.source_path.unlink()


def _copy_file(src, dst):
    """shutil.copy2 that refuses to drop a file inside a same-named directory."""
    if os.path.isdir(dst):
        raise IsADirectoryError(errno.EISDIR, "Destination is a directory", str(dst))
    return shutil.copy2(src, dst)


def apply_changes(records: Sequence[ChangeRecord]) -> ApplyReport:
    """Apply records in order, continuing past individual failures.

    Args:
        records: Approved records.

    Returns:
        ApplyReport listing applied and failed records.
    """
    report = ApplyReport()
    for record in records:
        try:
            apply_record(record)
        except OSError as exc:
            logger.error(
                "Failed to apply %s %s: %s",
                record.action.value, record.relative_path, exc,
            )
            report.failed.append(ApplyFailure(record=record, error=str(exc)))
            continue
        logger.info("Applied %s %s", record.action.value, record.relative_path)
        report.applied.append(record)
    return report


def mirror_repo(config: SyncConfig) -> MirrorReport:
    """Copy every top-level repository entry onto the live folder.

    The VCS metadata directory is skipped. Existing live files are
    overwritten; live files absent from the repository are kept.

    A repository file whose live counterpart is a directory (or the
    reverse) is refused, never resolved by deleting live data: the
    mirror stops with an OSError naming the path.

    Raises:
        OSError: If the live folder cannot be created, a copy fails, or
            a file/directory conflict is found.
    """
    live = config.live_path
    created = not live.exists()
    live.mkdir(parents=True, exist_ok=True)

    report = MirrorReport(live_path=live, created_live=created)
    if not config.repo_path.is_dir():
        logger.warning("Repository path missing, nothing to mirror: %s", config.repo_path)
        return report

    for entry in sorted(config.repo_path.iterdir(), key=lambda p: p.name):
        if entry.name == config.vcs_dir:
            continue
        target = live / entry.name
        if entry.is_dir():
            if target.exists() and not target.is_dir():
                raise NotADirectoryError(
                    errno.ENOTDIR, "Live path is a file, repository has a directory", str(target)
                )
            shutil.copytree(entry, target, copy_function=_copy_file, dirs_exist_ok=True)
        else:
            _copy_file(entry, target)
        report.entries.append(entry.name)

    logger.info("Mirrored %d entries into %s", len(report.entries), live)
    return report


class Reconciler:
    """Runs the interactive push and pull flows for one configuration.

    Args:
        config: The roots and branch for this run.
        vcs: Version-control collaborator bound to ``config.repo_path``.
        prompter: Source of user decisions.
        console: Where progress and summaries are printed.
    """

    def __init__(
        self,
        config: SyncConfig,
        vcs: VersionControl,
        prompter: Prompter,
        console: Console,
    ):
        self.config = config
        self.vcs = vcs
        self.prompter = prompter
        self.console = console

    def push(self, dry_run: bool = False) -> PushResult:
        """Publish approved live edits into the repository.

        Raises:
            GitCommandError: If status, add, commit, or push fails.
        """
        changes = scan_push_changes(self.config)
        if not changes:
            self.console.print("\n  [green]No changes found.[/] Repository is up to date.\n")
            return PushResult(PushOutcome.NO_CHANGES)

        if dry_run:
            self.console.print(changes_table(changes, title="Pending changes (dry run)"))
            return PushResult(PushOutcome.DRY_RUN, changes=changes)

        selected = self.prompter.select(changes)
        if not selected:
            self.console.print("\n  [yellow]Nothing selected.[/] No changes applied.\n")
            return PushResult(PushOutcome.CANCELLED, changes=changes)

        report = apply_changes(selected)
        self.console.print(
            f"\n  Applied [bold]{len(report.applied)}[/] of {len(selected)} change(s)."
        )
        self._print_failures(report)

        status = self.vcs.status_short().rstrip()
        self.console.print(
            Panel(
                Text(status) if status else "[dim]clean[/]",
                title="git status",
                border_style="cyan",
            )
        )

        message = self.prompter.ask_text("  Commit message (blank to skip)").strip()
        if not message:
            self.console.print("  [dim]Commit skipped. Changes are on disk only.[/]\n")
            return PushResult(PushOutcome.APPLIED, changes=changes, report=report)

        self.vcs.add_all()
        self.vcs.commit(message)
        self.vcs.push(self.config.remote, self.config.branch)
        self.console.print(
            f"  [green]Pushed[/] to [cyan]{self.config.remote}/{self.config.branch}[/]\n"
        )
        return PushResult(PushOutcome.PUBLISHED, changes=changes, report=report)

    def pull(self) -> PullResult:
        """Update the repository and mirror it onto the live folder.

        Raises:
            GitCommandError: If fetch, checkout, or pull fails; the mirror
                does not run in that case.
            OSError: If the mirror copy fails.
        """
        unpublished = scan_unpublished(self.config)
        if unpublished:
            self.console.print(
                "\n  [bold yellow]Warning:[/] these live files have not been pushed "
                "and will be overwritten or left stale:"
            )
            self.console.print(changes_table(unpublished))
        else:
            self.console.print(
                f"\n  [yellow]Caution:[/] pulling overwrites files in "
                f"[cyan]{escape(str(self.config.live_path))}[/] with the repository copy."
            )

        if not self.prompter.confirm("  Continue with pull?"):
            self.console.print("  [dim]Pull cancelled.[/]\n")
            return PullResult(PullOutcome.CANCELLED, unpublished=unpublished)

        branch = self.config.branch
        self.vcs.fetch()
        self.vcs.checkout(branch)
        self.vcs.pull(self.config.remote, branch)

        mirror = mirror_repo(self.config)
        self.console.print(
            f"  [green]Mirrored[/] {len(mirror.entries)} entr"
            f"{'y' if len(mirror.entries) == 1 else 'ies'} into "
            f"[cyan]{escape(str(mirror.live_path))}[/]\n"
        )
        return PullResult(PullOutcome.MIRRORED, unpublished=unpublished, mirror=mirror)

    def _print_failures(self, report: ApplyReport) -> None:
        if report.ok:
            return
        self.console.print(f"  [bold red]{len(report.failed)} change(s) failed:[/]")
        for failure in report.failed:
            self.console.print(
                f"    [red]{failure.record.action.value}[/] "
                f"{escape(failure.record.relative_path)}: {escape(failure.error)}"
            )
