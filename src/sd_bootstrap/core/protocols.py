"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so the resolver and invoker can be driven by fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from sd_bootstrap.core.models import CommandResult


class CommandRunner(Protocol):
    """Contract for running external commands as argument vectors.

    Implementations must never route *argv* through a shell and must
    map a missing binary to
    :class:`~sd_bootstrap.exceptions.ToolNotFoundError`.
    """

    def run(self, argv: Sequence[str]) -> int:
        """Run *argv* to completion, inheriting stdio, and return its exit code."""
        ...  # pragma: no cover

    def capture(self, argv: Sequence[str]) -> CommandResult:
        """Run *argv* to completion and return its exit code and stdout."""
        ...  # pragma: no cover


class ArtifactStore(Protocol):
    """Contract for the filesystem operations the resolver needs."""

    def exists(self, path: Path) -> bool:
        ...  # pragma: no cover

    def make_dirs(self, path: Path) -> None:
        """Create *path* and any missing parents.  No-op if it exists."""
        ...  # pragma: no cover
