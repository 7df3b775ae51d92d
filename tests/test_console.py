"""Tests for CLI diagnostic output (cli/console.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from sd_bootstrap.cli.console import console, escape


class TestEscape:
    def test_closing_tag_is_neutralised(self) -> None:
        assert escape("out[/x].png") == r"out\[/x].png"

    def test_plain_text_unchanged(self) -> None:
        assert escape("lighthouse.png") == "lighthouse.png"

    def test_accepts_paths(self) -> None:
        assert escape(Path("/work/[a]")) == r"/work/\[a]"


class TestConsole:
    def test_writes_to_stderr_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.print("Working path is: /work")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Working path is: /work" in captured.err

    def test_status_renders_bracketed_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.status("Model ready:", "models/[/bold]weights")

        assert "Model ready: models/[/bold]weights" in capsys.readouterr().err
