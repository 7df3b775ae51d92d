"""Domain models for sd-bootstrap.

Specs, prompts and layouts are **frozen** dataclasses.  The one mutable
model, :class:`LocalArtifact`, tracks a single artifact through the
acquisition state machine for the lifetime of the process.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

CHECKSUM_PREFIX: str = "sha256:"
"""Algorithm tag every expected checksum carries."""


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

class Platform(str, enum.Enum):
    """Host platforms with a published executable bundle."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"


# ---------------------------------------------------------------------------
# Remote artifact descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ArtifactSpec:
    """Where to fetch an artifact from and what it must hash to."""

    url: str
    """Remote download URL."""

    checksum: str | None = None
    """Algorithm-tagged digest (``sha256:<hex>``), or ``None`` when unverified."""

    def __post_init__(self) -> None:
        if self.checksum is not None and not self.checksum.startswith(CHECKSUM_PREFIX):
            raise ValueError(
                f"checksum must start with {CHECKSUM_PREFIX!r}: {self.checksum!r}"
            )

    @property
    def digest(self) -> str | None:
        """Expected hex digest with the algorithm prefix stripped."""
        if self.checksum is None:
            return None
        return self.checksum[len(CHECKSUM_PREFIX):]


# ---------------------------------------------------------------------------
# Acquisition state machine
# ---------------------------------------------------------------------------

class ArtifactState(str, enum.Enum):
    ABSENT = "absent"
    DOWNLOADING = "downloading"
    DOWNLOADED = "downloaded"
    TRANSFER_FAILED = "transfer_failed"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"
    EXTRACTING = "extracting"
    EXTRACTION_FAILED = "extraction_failed"
    READY = "ready"

    @property
    def terminal(self) -> bool:
        return self is ArtifactState.READY or self.value.endswith("_failed")


@dataclass(slots=True)
class LocalArtifact:
    """Filesystem-side view of one artifact during acquisition."""

    path: Path
    exists: bool = False
    verified: bool = False
    state: ArtifactState = ArtifactState.ABSENT
    history: list[ArtifactState] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.history:
            self.history.append(self.state)

    def transition(self, state: ArtifactState) -> None:
        """Move to *state*.  Terminal states are final."""
        if self.state.terminal:
            raise ValueError(f"{self.path} is already {self.state.value}")
        self.state = state
        self.history.append(state)


# ---------------------------------------------------------------------------
# Operator input
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Prompt:
    """What to render and where to write it.  Passed downstream verbatim."""

    text: str
    output_filename: str


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

MODEL_FILENAME: str = "v1-5-pruned-emaonly.safetensors"
ARCHIVE_FILENAME: str = "stable_diffusion.zip"


@dataclass(frozen=True, slots=True)
class WorkspaceLayout:
    """Paths of every artifact, relative to a root directory."""

    root: Path = Path(".")

    @property
    def models_dir(self) -> Path:
        return self.root / "models"

    @property
    def model_path(self) -> Path:
        return self.models_dir / MODEL_FILENAME

    @property
    def supplementary_dir(self) -> Path:
        """Staging directory for the executable bundle."""
        return self.root / "supplementary"

    @property
    def archive_path(self) -> Path:
        return self.supplementary_dir / ARCHIVE_FILENAME

    def executable_path(self, platform: Platform | None) -> Path:
        """Path the extracted generator binary lands at."""
        name = "sd.exe" if platform is Platform.WINDOWS else "sd"
        return self.supplementary_dir / name


# ---------------------------------------------------------------------------
# External command result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandResult:
    returncode: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
