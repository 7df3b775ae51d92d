"""Collect the generation prompt and output filename from the operator.

Interactive terminals are asked through questionary; piped stdin is
read one line per answer.  Answers are not validated: whatever the
operator types is handed to the generator verbatim, as a single argv
element, so it is never interpreted by a shell.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from sd_bootstrap.core.models import Prompt
from sd_bootstrap.exceptions import EnvironmentError, PromptCancelledError

PROMPT_QUESTION = "Enter your prompt:"
OUTPUT_QUESTION = "Enter output filename (with .png extension):"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _ask_interactive(question: str) -> str | None:
    questionary = _import_questionary()
    # ask() returns None on Ctrl+C / Esc.
    return questionary.text(question).ask()


def _ask_line(question: str, stdin: TextIO, stdout: TextIO) -> str | None:
    stdout.write(f"{question} ")
    stdout.flush()
    line = stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def _ask(question: str, stdin: TextIO, stdout: TextIO) -> str:
    if stdin.isatty():
        answer = _ask_interactive(question)
    else:
        answer = _ask_line(question, stdin, stdout)
    if answer is None:
        raise PromptCancelledError(
            "No input received.",
            hint="Pass --prompt and --output to run without interaction.",
        )
    return answer


def collect_prompt(
    text: str | None = None,
    output_filename: str | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> Prompt:
    """Return a :class:`Prompt`, asking for whichever value was not given.

    Raises
    ------
    PromptCancelledError
        When the operator cancels or stdin reaches end of input.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    if text is None:
        text = _ask(PROMPT_QUESTION, stdin, stdout)
    if output_filename is None:
        output_filename = _ask(OUTPUT_QUESTION, stdin, stdout)
    return Prompt(text=text, output_filename=output_filename)
