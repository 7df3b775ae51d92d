"""Tests for prompt collection (cli/prompt_input.py).

Non-interactive paths use ``io.StringIO`` as stdin; the interactive
path mocks questionary.
"""

from __future__ import annotations

import io
from unittest.mock import MagicMock, patch

import pytest

from sd_bootstrap.cli.prompt_input import (
    OUTPUT_QUESTION,
    PROMPT_QUESTION,
    collect_prompt,
)
from sd_bootstrap.exceptions import PromptCancelledError


class _TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestPipedInput:
    def test_reads_two_lines(self) -> None:
        stdin = io.StringIO("a red fox\nfox.png\n")
        stdout = io.StringIO()

        prompt = collect_prompt(stdin=stdin, stdout=stdout)

        assert prompt.text == "a red fox"
        assert prompt.output_filename == "fox.png"
        assert PROMPT_QUESTION in stdout.getvalue()
        assert OUTPUT_QUESTION in stdout.getvalue()

    def test_input_is_not_validated(self) -> None:
        stdin = io.StringIO('"; rm -rf ~ #\n../../outside.png\n')

        prompt = collect_prompt(stdin=stdin, stdout=io.StringIO())

        assert prompt.text == '"; rm -rf ~ #'
        assert prompt.output_filename == "../../outside.png"

    def test_empty_lines_are_accepted(self) -> None:
        prompt = collect_prompt(stdin=io.StringIO("\n\n"), stdout=io.StringIO())
        assert prompt.text == ""
        assert prompt.output_filename == ""

    def test_end_of_input_cancels(self) -> None:
        with pytest.raises(PromptCancelledError):
            collect_prompt(stdin=io.StringIO("only one line\n"), stdout=io.StringIO())

    def test_arguments_skip_questions(self) -> None:
        stdin = io.StringIO("")
        stdout = io.StringIO()

        prompt = collect_prompt("given", "given.png", stdin=stdin, stdout=stdout)

        assert prompt.text == "given"
        assert stdout.getvalue() == ""

    def test_only_missing_value_is_asked(self) -> None:
        stdout = io.StringIO()
        prompt = collect_prompt("given", stdin=io.StringIO("o.png\n"), stdout=stdout)

        assert prompt.output_filename == "o.png"
        assert PROMPT_QUESTION not in stdout.getvalue()


class TestInteractiveInput:
    @patch("sd_bootstrap.cli.prompt_input._import_questionary")
    def test_uses_questionary_on_tty(self, mock_import: MagicMock) -> None:
        questionary = mock_import.return_value
        questionary.text.return_value.ask.side_effect = ["a castle", "castle.png"]

        prompt = collect_prompt(stdin=_TtyStringIO(), stdout=io.StringIO())

        assert prompt.text == "a castle"
        assert prompt.output_filename == "castle.png"
        questionary.text.assert_any_call(PROMPT_QUESTION)
        questionary.text.assert_any_call(OUTPUT_QUESTION)

    @patch("sd_bootstrap.cli.prompt_input._import_questionary")
    def test_cancel_raises(self, mock_import: MagicMock) -> None:
        mock_import.return_value.text.return_value.ask.return_value = None

        with pytest.raises(PromptCancelledError):
            collect_prompt(stdin=_TtyStringIO(), stdout=io.StringIO())
