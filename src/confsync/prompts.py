"""
Interactive collaborators: pick changes, confirm, ask for text.

The reconciler asks a Prompter for every decision, so a terminal, a
GUI, or a scripted test double can answer. TerminalPrompter is the
default, built on click prompts and a Rich table.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import ChangeAction, ChangeRecord

AFFIRMATIVE = "y"


class Prompter(ABC):
    """Capability interface for user decisions."""

    @abstractmethod
    def select(self, records: Sequence[ChangeRecord]) -> list[ChangeRecord]:
        """Return the subset of ``records`` the user approved.

        An empty list means cancel. Unselected records must be left alone.
        """

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Yes/no question; only the affirmative token returns True."""

    @abstractmethod
    def ask_text(self, message: str) -> str:
        """Free-text answer; may be empty."""


def is_affirmative(answer: str) -> bool:
    """True only for the single-character affirmative ``y``/``Y``."""
    return answer.strip().lower() == AFFIRMATIVE


def parse_selection(answer: str, count: int) -> list[int]:
    """Turn a selection answer into zero-based indexes.

    Accepts ``all``, ``none`` (or blank), and comma/space separated
    1-based numbers and ranges such as ``1,3-5``. Order follows the
    record list, duplicates are dropped.

    Args:
        answer: What the user typed.
        count: Number of records offered.

    Returns:
        Sorted zero-based indexes.

    Raises:
        ValueError: On anything unparseable or out of range.
    """
    text = answer.strip().lower()
    if text in ("", "none", "n"):
        return []
    if text in ("all", "a", "*"):
        return list(range(count))

    chosen: set[int] = set()
    for token in text.replace(",", " ").split():
        if "-" in token:
            start_s, _, end_s = token.partition("-")
            start, end = int(start_s), int(end_s)
            if start > end:
                raise ValueError(f"Backwards range: {token}")
        else:
            start = end = int(token)
        if start < 1 or end > count:
            raise ValueError(f"Out of range (1-{count}): {token}")
        chosen.update(range(start - 1, end))
    return sorted(chosen)


def changes_table(records: Sequence[ChangeRecord], title: str = "") -> Table:
    """Rich table of records, numbered from 1."""
    table = Table(
        title=title or None, show_header=True, header_style="bold", box=None, padding=(0, 2)
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Action")
    table.add_column("Reason")
    table.add_column("Path", style="cyan")

    for i, rec in enumerate(records, 1):
        colour = "green" if rec.action == ChangeAction.COPY_TO_REPO else "red"
        table.add_row(
            str(i),
            f"[{colour}]{rec.action.value}[/]",
            rec.reason.value,
            escape(rec.relative_path),
        )
    return table


class TerminalPrompter(Prompter):
    """Checklist-style prompts on the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def select(self, records: Sequence[ChangeRecord]) -> list[ChangeRecord]:
        self.console.print(changes_table(records, title="Pending changes"))
        self.console.print(
            "\n  [dim]Enter numbers or ranges (e.g. 1,3-5), 'all', or blank to cancel.[/]"
        )
        while True:
            answer = click.prompt(
                "  Apply which changes", default="", show_default=False
            )
            try:
                indexes = parse_selection(answer, len(records))
            except ValueError as exc:
                self.console.print(f"  [red]{exc}[/]")
                continue
            return [records[i] for i in indexes]

    def confirm(self, message: str) -> bool:
        answer = click.prompt(f"{message} [y/N]", default="", show_default=False)
        return is_affirmative(answer)

    def ask_text(self, message: str) -> str:
        return click.prompt(message, default="", show_default=False)
