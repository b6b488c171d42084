"""Tests for the terminal prompts and selection parsing."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from confsync.models import ChangeAction, ChangeReason, ChangeRecord
from confsync.prompts import TerminalPrompter, is_affirmative, parse_selection


def _records(n: int) -> list[ChangeRecord]:
    return [
        ChangeRecord(
            action=ChangeAction.COPY_TO_REPO,
            reason=ChangeReason.NEW_FILE,
            relative_path=f"f{i}.txt",
            source_path=Path(f"/live/f{i}.txt"),
            dest_path=Path(f"/repo/f{i}.txt"),
        )
        for i in range(1, n + 1)
    ]


class TestParseSelection:
    """Selection answer parsing."""

    @pytest.mark.parametrize("answer", ["", "  ", "none", "N"])
    def test_cancel_answers(self, answer: str) -> None:
        assert parse_selection(answer, 5) == []

    @pytest.mark.parametrize("answer", ["all", "ALL", "a", "*"])
    def test_all_answers(self, answer: str) -> None:
        assert parse_selection(answer, 3) == [0, 1, 2]

    def test_numbers_and_ranges(self) -> None:
        assert parse_selection("1, 3-5", 6) == [0, 2, 3, 4]

    def test_duplicates_collapse_and_sort(self) -> None:
        assert parse_selection("4 2 2-4", 5) == [1, 2, 3]

    @pytest.mark.parametrize("answer", ["0", "7", "2-9", "x", "3-1"])
    def test_invalid(self, answer: str) -> None:
        with pytest.raises(ValueError):
            parse_selection(answer, 6)


class TestIsAffirmative:
    @pytest.mark.parametrize("answer", ["y", "Y", " y\n"])
    def test_yes(self, answer: str) -> None:
        assert is_affirmative(answer)

    @pytest.mark.parametrize("answer", ["", "n", "yes", "yy", "ok"])
    def test_not_yes(self, answer: str) -> None:
        assert not is_affirmative(answer)


class TestTerminalPrompter:
    """TerminalPrompter with click.prompt patched."""

    @pytest.fixture
    def prompter(self) -> TerminalPrompter:
        return TerminalPrompter(Console(file=io.StringIO(), width=120))

    def test_select_returns_chosen_records(self, prompter) -> None:
        records = _records(4)
        with patch("confsync.prompts.click.prompt", return_value="2,4"):
            chosen = prompter.select(records)
        assert [r.relative_path for r in chosen] == ["f2.txt", "f4.txt"]

    def test_select_reprompts_on_bad_input(self, prompter) -> None:
        records = _records(2)
        with patch("confsync.prompts.click.prompt", side_effect=["9", "1"]) as mock_prompt:
            chosen = prompter.select(records)
        assert mock_prompt.call_count == 2
        assert chosen == [records[0]]
        assert "Out of range" in prompter.console.file.getvalue()

    def test_select_shows_table(self, prompter) -> None:
        with patch("confsync.prompts.click.prompt", return_value=""):
            assert prompter.select(_records(1)) == []
        assert "f1.txt" in prompter.console.file.getvalue()

    def test_confirm(self, prompter) -> None:
        with patch("confsync.prompts.click.prompt", return_value="y"):
            assert prompter.confirm("Go?")
        with patch("confsync.prompts.click.prompt", return_value="yes"):
            assert not prompter.confirm("Go?")
