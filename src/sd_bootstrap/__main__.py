"""Allow ``python -m sd_bootstrap`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m sd_bootstrap`` behaves identically to the ``sd-bootstrap``
console script.
"""

from __future__ import annotations

from sd_bootstrap.cli.app import cli

if __name__ == "__main__":
    cli()
