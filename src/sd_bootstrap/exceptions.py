"""Custom exception hierarchy for sd-bootstrap.

All exceptions that cross layer boundaries must inherit from
:class:`SdBootstrapError`.  Raw ``OSError`` / ``subprocess`` failures
must NEVER propagate beyond the infrastructure layer; they are caught
there and re-raised as a typed subclass defined here.

Hierarchy
---------
SdBootstrapError
├── ArtifactError
│   ├── TransferFailedError
│   ├── VerificationFailedError
│   └── ExtractionFailedError
├── UnsupportedPlatformError
├── GenerationFailedError
├── PromptCancelledError
└── EnvironmentError
    └── ToolNotFoundError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sd_bootstrap.core.models import LocalArtifact


class SdBootstrapError(Exception):
    """Base exception for all sd-bootstrap errors.

    Every user-visible failure maps to a subclass of this exception so
    that the CLI error boundary can render a clean message and exit
    with status 1.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Artifact acquisition --------------------------------------------------

class ArtifactError(SdBootstrapError):
    """Raised when a required artifact cannot be made ready."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        artifact: LocalArtifact | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.artifact: LocalArtifact | None = artifact
        """The artifact in its terminal failed state, when known."""


class TransferFailedError(ArtifactError):
    """Raised when the download command exits non-zero."""


class VerificationFailedError(ArtifactError):
    """Raised when a downloaded file does not match its expected checksum."""


class ExtractionFailedError(ArtifactError):
    """Raised when the archive extraction command exits non-zero."""


# --- Platform --------------------------------------------------------------

class UnsupportedPlatformError(SdBootstrapError):
    """Raised when no executable bundle exists for the host platform."""


# --- Generation ------------------------------------------------------------

class GenerationFailedError(SdBootstrapError):
    """Raised when the image-generation executable exits non-zero."""


class PromptCancelledError(SdBootstrapError):
    """Raised when the operator cancels input or stdin is exhausted."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(SdBootstrapError):
    """Raised when a required runtime dependency is not available."""


class ToolNotFoundError(EnvironmentError):
    """Raised when an external command cannot be located on PATH."""
