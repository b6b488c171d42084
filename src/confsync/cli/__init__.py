"""
confsync CLI — push live edits to the repository, or pull it back.

    confsync push    review and publish local changes
    confsync pull    update the repository and overwrite the live folder

Entry point: confsync.cli:main
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from .. import __version__
from ..config import load_config
from ..errors import ConfigError, GitCommandError
from ..git import GitClient
from ..prompts import TerminalPrompter
from ..reconciler import Reconciler
from ._common import console, logger, setup_logging


@click.command()
@click.argument("mode", type=click.Choice(["push", "pull"]))
@click.option("--config", "config_file", default=None, type=click.Path(dir_okay=False),
              help="YAML config file.")
@click.option("--live", default=None, type=click.Path(file_okay=False),
              help="Live configuration folder.")
@click.option("--repo", default=None, type=click.Path(file_okay=False),
              help="Repository working copy.")
@click.option("--branch", default=None, help="Branch to check out and push.")
@click.option("--remote", default=None, help="Remote to pull from and push to.")
@click.option("--dry-run", is_flag=True, help="Push only: list changes and stop. Rejected for pull.")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr.")
@click.version_option(version=__version__, prog_name="confsync")
def main(
    mode: str,
    config_file: Optional[str],
    live: Optional[str],
    repo: Optional[str],
    branch: Optional[str],
    remote: Optional[str],
    dry_run: bool,
    verbose: bool,
):
    """Sync a live config folder with its git repository.

    MODE is 'push' (publish selected local edits) or 'pull'
    (update the repository and mirror it onto the live folder).

    Examples:

        confsync push --live ~/.config/app --repo ~/src/app-config

        confsync pull --branch main
    """
    setup_logging(verbose)
    if dry_run and mode == "pull":
        raise click.UsageError("--dry-run only applies to push")

    try:
        config = load_config(
            Path(config_file) if config_file else None,
            overrides={
                "live_path": live,
                "repo_path": repo,
                "branch": branch,
                "remote": remote,
            },
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    logger.debug("Effective config: %s", config.model_dump(mode="json"))
    reconciler = Reconciler(
        config,
        vcs=GitClient(config.repo_path),
        prompter=TerminalPrompter(console),
        console=console,
    )

    try:
        if mode == "push":
            result = reconciler.push(dry_run=dry_run)
            if result.report is not None and not result.report.ok:
                raise SystemExit(1)
        else:
            reconciler.pull()
    except GitCommandError as exc:
        console.print(f"\n  [bold red]git failed:[/] {' '.join(exc.command)}")
        if exc.stderr:
            console.print(f"  [red]{escape(exc.stderr)}[/]")
        raise SystemExit(1)
    except OSError as exc:
        console.print(f"\n  [bold red]File operation failed:[/] {escape(str(exc))}")
        raise SystemExit(1)
