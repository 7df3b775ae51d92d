"""Diagnostic output for the CLI layer.

stdout belongs to the two questions asked of the operator (and to the
generator, which inherits it); everything sd-bootstrap itself reports
goes to stderr.  Rich renders it when installed.  Without Rich the text
is printed as-is, so ``--help``, ``--version`` and ``doctor`` still work.

Paths, prompts and exception messages are operator- or OS-supplied and
may contain ``[...]``; pass them through :func:`escape` before putting
them next to markup.
"""

from __future__ import annotations

import sys
from typing import Any


def _rich_console() -> Any | None:
    try:
        from rich.console import Console
    except ModuleNotFoundError:
        return None
    return Console(stderr=True)


def escape(value: object) -> str:
    """Return ``str(value)`` with Rich markup neutralised."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return str(value)
    return rich_escape(str(value))


class _StderrConsole:
    """``print``-compatible sink bound to stderr."""

    def print(self, *objects: object) -> None:
        rich_console = _rich_console()
        if rich_console is None:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def status(self, label: str, value: object) -> None:
        """Print a green *label* followed by an escaped *value*."""
        self.print(f"[green]{label}[/green] {escape(value)}")


console = _StderrConsole()
