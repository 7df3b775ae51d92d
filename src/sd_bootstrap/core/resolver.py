"""Artifact resolver: make the model and the generator bundle present.

Each artifact is driven through the acquisition state machine::

    ABSENT -> DOWNLOADING -> DOWNLOADED -> (VERIFYING -> VERIFIED)
           -> (EXTRACTING ->) READY

Any ``*_FAILED`` state is terminal: the matching
:class:`~sd_bootstrap.exceptions.ArtifactError` subclass is raised with
the artifact attached, and nothing downstream runs.  There is no retry,
no resume and no cleanup of partially written files.

Guarantees
----------
* No filesystem access except through the injected :class:`ArtifactStore`.
* No process spawning except through the injected :class:`CommandRunner`.
* A bundle is never extracted unless its checksum matched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sd_bootstrap.core import platforms
from sd_bootstrap.core.models import (
    ArtifactSpec,
    ArtifactState,
    LocalArtifact,
    Platform,
    WorkspaceLayout,
)
from sd_bootstrap.core.protocols import ArtifactStore, CommandRunner
from sd_bootstrap.exceptions import (
    ExtractionFailedError,
    TransferFailedError,
    UnsupportedPlatformError,
    VerificationFailedError,
)

logger = logging.getLogger(__name__)


class ArtifactResolver:
    """Ensure required artifacts exist locally, fetching them if needed.

    Parameters
    ----------
    runner:
        Executes the transfer, hashing and extraction commands.
    store:
        Answers existence checks and creates directories.
    platform:
        Host platform decided at startup, or ``None`` when unsupported.
    layout:
        Where artifacts live on disk.
    model_spec:
        Source of the model weights.  Verified only when it carries a
        checksum.
    """

    def __init__(
        self,
        runner: CommandRunner,
        store: ArtifactStore,
        platform: Platform | None,
        *,
        layout: WorkspaceLayout | None = None,
        model_spec: ArtifactSpec = platforms.MODEL_SPEC,
    ) -> None:
        self._runner = runner
        self._store = store
        self._platform = platform
        self._layout = layout if layout is not None else WorkspaceLayout()
        self._model_spec = model_spec

    @property
    def layout(self) -> WorkspaceLayout:
        return self._layout

    @property
    def executable_path(self) -> Path:
        return self._layout.executable_path(self._platform)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def require_platform(self) -> None:
        """Fail early when the executable would have to be fetched but the
        host has no bundle.

        Runs no commands, so a run on an unsupported host stops before the
        model download.
        """
        if self._platform is None and not self._store.exists(self.executable_path):
            raise self._unsupported_platform()

    def ensure_model_present(self, path: Path | None = None) -> LocalArtifact:
        """Return the model artifact, downloading it first if absent.

        Raises
        ------
        TransferFailedError
            When the download command exits non-zero.
        VerificationFailedError
            Only when the model spec carries a checksum and it differs.
        """
        target = path if path is not None else self._layout.model_path
        if self._store.exists(target):
            logger.info("Model found at %s", target)
            return LocalArtifact(target, exists=True, state=ArtifactState.READY)

        logger.info("Model not found, downloading to %s", target)
        artifact = LocalArtifact(target)
        self._store.make_dirs(target.parent)
        self._download(artifact, self._model_spec.url, target)
        artifact.exists = True

        digest = self._model_spec.digest
        if digest is not None:
            self._verify(artifact, target, digest)

        artifact.transition(ArtifactState.READY)
        return artifact

    def ensure_executable_present(self) -> LocalArtifact:
        """Return the generator artifact, installing the bundle if absent.

        Raises
        ------
        UnsupportedPlatformError
            When the executable is absent and no bundle exists for the
            host.  Raised before any command runs.
        TransferFailedError
            When the archive download exits non-zero.
        VerificationFailedError
            When the hashing command fails or the digest differs.
        ExtractionFailedError
            When the extraction command exits non-zero.
        """
        executable = self.executable_path
        if self._store.exists(executable):
            logger.info("Stable Diffusion executable found at %s", executable)
            return LocalArtifact(executable, exists=True, state=ArtifactState.READY)

        if self._platform is None:
            raise self._unsupported_platform()

        spec = platforms.bundle_spec_for(self._platform)
        artifact = LocalArtifact(executable)
        staging = self._layout.supplementary_dir
        archive = self._layout.archive_path

        logger.info("Downloading Stable Diffusion from %s", spec.url)
        self._store.make_dirs(staging)
        self._download(artifact, spec.url, archive)

        digest = spec.digest
        if digest is not None:
            self._verify(artifact, archive, digest)

        self._extract(artifact, self._platform, archive, staging)
        artifact.exists = self._store.exists(executable)
        if not artifact.exists:
            logger.warning("Archive extracted but %s is missing", executable)
        artifact.transition(ArtifactState.READY)
        return artifact

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _unsupported_platform(self) -> UnsupportedPlatformError:
        return UnsupportedPlatformError(
            "Unsupported platform: no prebuilt stable-diffusion.cpp bundle.",
            hint=(
                "Bundles are published for macOS, Linux and Windows. "
                f"Alternatively place a built `sd` binary at {self.executable_path}."
            ),
        )

    def _download(self, artifact: LocalArtifact, url: str, dest: Path) -> None:
        artifact.transition(ArtifactState.DOWNLOADING)
        code = self._runner.run(platforms.download_command(url, dest))
        if code != 0:
            artifact.transition(ArtifactState.TRANSFER_FAILED)
            raise TransferFailedError(
                f"Failed to download {url} (exit status {code}).",
                hint="Check your network connection and re-run.",
                artifact=artifact,
            )
        artifact.transition(ArtifactState.DOWNLOADED)

    def _verify(self, artifact: LocalArtifact, path: Path, expected: str) -> None:
        artifact.transition(ArtifactState.VERIFYING)
        result = self._runner.capture(platforms.hash_command(self._platform, path))
        if not result.ok:
            artifact.transition(ArtifactState.VERIFICATION_FAILED)
            raise VerificationFailedError(
                f"Could not compute checksum of {path} (exit status {result.returncode}).",
                artifact=artifact,
            )

        computed = platforms.extract_digest(result.stdout)
        if not platforms.checksums_match(computed, expected):
            artifact.transition(ArtifactState.VERIFICATION_FAILED)
            raise VerificationFailedError(
                f"Checksum verification failed for {path}.",
                hint=f"expected sha256 {expected}, got {computed or 'nothing'}",
                artifact=artifact,
            )

        logger.info("Checksum verification passed for %s", path)
        artifact.verified = True
        artifact.transition(ArtifactState.VERIFIED)

    def _extract(
        self,
        artifact: LocalArtifact,
        platform: Platform,
        archive: Path,
        dest: Path,
    ) -> None:
        artifact.transition(ArtifactState.EXTRACTING)
        code = self._runner.run(platforms.extract_command(platform, archive, dest))
        if code != 0:
            artifact.transition(ArtifactState.EXTRACTION_FAILED)
            raise ExtractionFailedError(
                f"Failed to extract {archive} (exit status {code}).",
                artifact=artifact,
            )
        logger.info("Extracted %s into %s", archive, dest)
