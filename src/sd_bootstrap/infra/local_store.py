"""Local-filesystem implementation of :class:`~sd_bootstrap.core.protocols.ArtifactStore`."""

from __future__ import annotations

from pathlib import Path

from sd_bootstrap.exceptions import EnvironmentError


class LocalArtifactStore:
    """Answers existence checks and creates directories on the local disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def make_dirs(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EnvironmentError(
                f"Could not create directory {path}: {exc}",
                hint="Check permissions on the working directory or pass --workdir.",
            ) from exc
