"""``subprocess``-backed implementation of :class:`~sd_bootstrap.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that spawns processes.
Commands are always argument vectors with ``shell=False``.  A missing
binary is re-raised as :class:`~sd_bootstrap.exceptions.ToolNotFoundError`,
any other ``OSError`` as :class:`~sd_bootstrap.exceptions.EnvironmentError`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from sd_bootstrap.core.models import CommandResult, Platform
from sd_bootstrap.exceptions import EnvironmentError
from sd_bootstrap.infra.tool_detector import missing_tool_error

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    """Concrete :class:`CommandRunner` that blocks until each command exits.

    Parameters
    ----------
    cwd:
        Working directory for every command, or ``None`` to inherit.
    host:
        Platform the install guidance for a missing tool is written for.
    """

    def __init__(self, cwd: Path | None = None, host: Platform | None = None) -> None:
        self._cwd = cwd
        self._host = host

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def run(self, argv: Sequence[str]) -> int:
        """Run *argv* with inherited stdio and return its exit code."""
        logger.debug("run: %s", list(argv))
        try:
            completed = subprocess.run(list(argv), cwd=self._cwd, check=False)
        except FileNotFoundError as exc:
            raise missing_tool_error(argv[0], self._host) from exc
        except OSError as exc:
            raise EnvironmentError(f"Could not start {argv[0]}: {exc}") from exc
        logger.debug("exit %s: %s", completed.returncode, argv[0])
        return completed.returncode

    def capture(self, argv: Sequence[str]) -> CommandResult:
        """Run *argv*, capturing stdout as text; stderr is inherited."""
        logger.debug("capture: %s", list(argv))
        try:
            completed = subprocess.run(
                list(argv),
                cwd=self._cwd,
                check=False,
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as exc:
            raise missing_tool_error(argv[0], self._host) from exc
        except OSError as exc:
            raise EnvironmentError(f"Could not start {argv[0]}: {exc}") from exc
        logger.debug("exit %s: %s", completed.returncode, argv[0])
        return CommandResult(returncode=completed.returncode, stdout=completed.stdout or "")
