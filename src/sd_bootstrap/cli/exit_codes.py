"""Exit-code constants used by the CLI layer.

Every exit path uses one of these values rather than a bare integer.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Artifacts are ready and the generator exited cleanly."""

GENERAL_ERROR: int = 1
"""A known SdBootstrapError was caught: acquisition or generation failed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
