"""Infrastructure layer: external system integration.

This layer wraps all interaction with the operating system: spawning
curl / shasum / unzip / the generator, and touching the filesystem.
Every raw ``OSError`` must be caught here and re-raised as a
:class:`~sd_bootstrap.exceptions.SdBootstrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from sd_bootstrap.infra.local_store import LocalArtifactStore
from sd_bootstrap.infra.subprocess_runner import SubprocessCommandRunner
from sd_bootstrap.infra.tool_detector import (
    ToolStatus,
    detect_tool,
    missing_tool_error,
    required_tools,
)

__all__: list[str] = [
    "LocalArtifactStore",
    "SubprocessCommandRunner",
    "ToolStatus",
    "detect_tool",
    "missing_tool_error",
    "required_tools",
]
