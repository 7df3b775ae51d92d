"""Core / service layer: artifact resolution and generation orchestration.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or process I/O; go through the protocols.
* No imports from ``cli`` or ``infra``.
* The host platform is always passed in, never detected inside a service.
"""

from sd_bootstrap.core.invoker import GenerationInvoker
from sd_bootstrap.core.models import (
    ArtifactSpec,
    ArtifactState,
    CommandResult,
    LocalArtifact,
    Platform,
    Prompt,
    WorkspaceLayout,
)
from sd_bootstrap.core.protocols import ArtifactStore, CommandRunner
from sd_bootstrap.core.resolver import ArtifactResolver

__all__: list[str] = [
    "ArtifactResolver",
    "ArtifactSpec",
    "ArtifactState",
    "ArtifactStore",
    "CommandResult",
    "CommandRunner",
    "GenerationInvoker",
    "LocalArtifact",
    "Platform",
    "Prompt",
    "WorkspaceLayout",
]
