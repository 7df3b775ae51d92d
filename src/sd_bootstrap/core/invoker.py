"""Run the image-generation executable for a collected prompt.

The generator is started with an argument vector, so the prompt and
output filename reach it verbatim without shell interpretation.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sd_bootstrap.core import platforms
from sd_bootstrap.core.models import Platform, Prompt
from sd_bootstrap.core.protocols import CommandRunner
from sd_bootstrap.exceptions import GenerationFailedError, ToolNotFoundError

logger = logging.getLogger(__name__)


class GenerationInvoker:
    """Drive one generation run through an injected :class:`CommandRunner`."""

    def __init__(self, runner: CommandRunner, platform: Platform | None) -> None:
        self._runner = runner
        self._platform = platform

    def patch_rpath(self, executable: Path) -> None:
        """Add ``@loader_path`` to the macOS binary's rpath, best-effort.

        The bundle's dylibs sit beside the binary.  The tool exits non-zero
        when the rpath is already present, so the result is only logged.
        """
        if self._platform is not Platform.MACOS:
            return
        try:
            code = self._runner.run(platforms.rpath_command(executable))
        except ToolNotFoundError as exc:
            logger.debug("Skipping rpath patch: %s", exc)
            return
        logger.debug("install_name_tool exited with %s", code)

    def generate(self, executable: Path, model_path: Path, prompt: Prompt) -> None:
        """Render *prompt* with the model at *model_path*.

        Raises
        ------
        GenerationFailedError
            When the executable exits non-zero.
        ToolNotFoundError
            When the executable cannot be started.
        """
        self.patch_rpath(executable)

        argv = platforms.generate_command(
            executable,
            model_path,
            prompt.text,
            prompt.output_filename,
        )
        logger.info("Running Stable Diffusion: %s", argv)
        code = self._runner.run(argv)
        if code != 0:
            raise GenerationFailedError(
                f"Stable Diffusion execution failed (exit status {code}).",
                hint="See the generator output above for details.",
            )
