"""Logging configuration for the ``sd_bootstrap`` logger hierarchy."""

from __future__ import annotations

import logging

LOGGER_NAME = "sd_bootstrap"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Progress is logged at INFO and shown by default; *verbose* adds the
    DEBUG lines for every command run.  Uses
    :class:`rich.logging.RichHandler` when Rich is installed.
    Calling this twice replaces the previous handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler: logging.Handler
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
