"""Shared pytest fixtures and configuration for the sd-bootstrap test suite.

Guidelines
----------
* No internet access in any test.
* No real external command is ever spawned; the runner is faked at the
  protocol boundary or ``subprocess.run`` is mocked.
* Core tests must be pure: filesystem state comes from a fake store.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from sd_bootstrap.core.models import CommandResult, WorkspaceLayout

LINUX_DIGEST = "152df5843e2ea265a627024de37a985cf75b5554554e2ad5d0ff06aad76ba4d8"


class FakeRunner:
    """Records every argv; exit codes are looked up by program name."""

    def __init__(
        self,
        codes: dict[str, int] | None = None,
        hash_output: str = "",
    ) -> None:
        self.calls: list[list[str]] = []
        self.codes: dict[str, int] = dict(codes or {})
        self.hash_output = hash_output

    def run(self, argv: Sequence[str]) -> int:
        self.calls.append(list(argv))
        return self.codes.get(argv[0], 0)

    def capture(self, argv: Sequence[str]) -> CommandResult:
        self.calls.append(list(argv))
        return CommandResult(self.codes.get(argv[0], 0), self.hash_output)

    @property
    def programs(self) -> list[str]:
        return [argv[0] for argv in self.calls]


class FakeStore:
    """In-memory stand-in for the local filesystem."""

    def __init__(self, existing: Sequence[Path] = ()) -> None:
        self.existing: set[Path] = set(existing)
        self.created: list[Path] = []

    def exists(self, path: Path) -> bool:
        return path in self.existing

    def make_dirs(self, path: Path) -> None:
        self.created.append(path)


@pytest.fixture
def layout() -> WorkspaceLayout:
    return WorkspaceLayout(root=Path("/work"))


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner(hash_output=f"{LINUX_DIGEST}  /work/supplementary/stable_diffusion.zip\n")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
