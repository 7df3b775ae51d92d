"""CLI application entry point and command routing for sd-bootstrap.

This module is the **sole error boundary** for the entire application.
It catches :class:`~sd_bootstrap.exceptions.SdBootstrapError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core
  services and infrastructure adapters.
* The host platform is decided exactly once, here, and injected.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sd_bootstrap.cli import exit_codes
from sd_bootstrap.cli.console import console, escape
from sd_bootstrap.cli.logging_setup import configure_logging
from sd_bootstrap.core.models import Platform, WorkspaceLayout
from sd_bootstrap.exceptions import SdBootstrapError
from sd_bootstrap.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``sd-bootstrap``          fetch artifacts, ask for a prompt, generate
    * ``sd-bootstrap doctor``   environment diagnostics
    * ``sd-bootstrap --version``
    """
    parser = argparse.ArgumentParser(
        prog="sd-bootstrap",
        description="Fetch Stable Diffusion and generate an image from a prompt.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="run",
        choices=("run", "doctor"),
        help="'run' (default) to generate an image, 'doctor' for diagnostics.",
    )
    parser.add_argument(
        "--workdir",
        type=Path,
        default=Path("."),
        help="Directory holding models/ and supplementary/ (default: current).",
    )
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=None,
        help="Override host platform detection.",
    )
    parser.add_argument("--prompt", default=None, help="Prompt text; asked for if omitted.")
    parser.add_argument(
        "--output",
        default=None,
        help="Output image filename; asked for if omitted.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every external command that is run.",
    )
    return parser


def _select_platform(override: str | None) -> Platform | None:
    from sd_bootstrap.core.platforms import detect_platform

    if override is not None:
        return Platform(override)
    return detect_platform()


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_run(
    layout: WorkspaceLayout,
    host: Platform | None,
    prompt_text: str | None,
    output_filename: str | None,
) -> int:
    """Resolve artifacts, collect the prompt, and run the generator.

    Flow:
    0. Fail fast if the executable is missing and the host has no bundle.
    1. Ensure the model file is present (download if missing).
    2. Ensure the executable is present (download, verify, extract).
    3. Ask for the prompt and the output filename.
    4. Invoke the executable and propagate its status.
    """
    from sd_bootstrap.cli.prompt_input import collect_prompt
    from sd_bootstrap.core.invoker import GenerationInvoker
    from sd_bootstrap.core.resolver import ArtifactResolver
    from sd_bootstrap.infra.local_store import LocalArtifactStore
    from sd_bootstrap.infra.subprocess_runner import SubprocessCommandRunner

    runner = SubprocessCommandRunner(host=host)
    resolver = ArtifactResolver(runner, LocalArtifactStore(), host, layout=layout)

    console.print(f"Working path is: {escape(layout.root)}")
    resolver.require_platform()

    model = resolver.ensure_model_present()
    console.status("Model ready:", model.path)

    executable = resolver.ensure_executable_present()
    console.status("Stable Diffusion ready:", executable.path)

    prompt = collect_prompt(prompt_text, output_filename)

    GenerationInvoker(runner, host).generate(executable.path, model.path, prompt)
    console.print(
        f"\n[bold green]Image written to[/bold green] {escape(prompt.output_filename)}"
    )
    return exit_codes.SUCCESS


def _handle_doctor(layout: WorkspaceLayout, host: Platform | None) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from sd_bootstrap.cli.doctor import run_doctor

    return run_doctor(host, layout)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the sd-bootstrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    layout = WorkspaceLayout(root=args.workdir.resolve())
    host = _select_platform(args.platform)

    if args.command == "doctor":
        return _handle_doctor(layout, host)

    return _handle_run(layout, host, args.prompt, args.output)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` so the process never exits with a raw stack
    trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SdBootstrapError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
