"""``sd-bootstrap doctor``: environment diagnostics command.

Reports whether the host can install and run the generator: version,
Python, platform, the external tools the installer shells out to, and
whether the model and executable are already in place.  Rendered as a
Rich table, or plain text when Rich is not installed.
"""

from __future__ import annotations

import platform
import sys

from sd_bootstrap.cli import exit_codes
from sd_bootstrap.cli.console import console, escape
from sd_bootstrap.core.models import Platform, WorkspaceLayout
from sd_bootstrap.infra.tool_detector import ToolStatus, detect_tool, required_tools
from sd_bootstrap.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _version_check() -> Check:
    return "sd-bootstrap", __version__, "[green]OK[/green]"


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _platform_check(host: Platform | None) -> Check:
    value = f"{platform.system()} {platform.release()} ({platform.machine()})"
    if host is None:
        return "Platform", value, "[red]FAIL (no prebuilt bundle)[/red]"
    return "Platform", f"{value} -> {host.value}", "[green]OK[/green]"


def _tool_check(status: ToolStatus) -> Check:
    if status.found:
        return status.name, str(status.path), "[green]OK[/green]"
    return status.name, "not found", "[red]FAIL[/red]"


def _artifact_check(label: str, present: bool, path: object) -> Check:
    if present:
        return label, str(path), "[green]OK[/green]"
    return label, f"missing ({path})", "[yellow]WARN (will download)[/yellow]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nsd-bootstrap doctor", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<18} {'Value':<44} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<18} {value:<44} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(host: Platform | None, layout: WorkspaceLayout) -> int:
    """Execute all diagnostic checks and render a summary table.

    A missing tool only fails the run when the executable still has to
    be installed; a missing model or executable is a warning.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    executable = layout.executable_path(host)
    executable_present = executable.exists()
    model_present = layout.model_path.exists()
    tools = [detect_tool(name, host) for name in required_tools(host)]

    checks: list[Check] = [
        _version_check(),
        _python_version_check(),
        _platform_check(host),
        *(_tool_check(tool) for tool in tools),
        _artifact_check("Model", model_present, layout.model_path),
        _artifact_check("Executable", executable_present, executable),
    ]

    critical = {"Python"}
    if not executable_present:
        critical.update(("Platform", *required_tools(host)))
    if not (executable_present and model_present):
        critical.add("curl")
    has_failure = any(
        "FAIL" in status and label in critical for label, _, status in checks
    )

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="sd-bootstrap doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, escape(value), status)
        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    for tool in tools:
        if tool.found or not tool.install_commands:
            continue
        console.print(f"{escape(tool.name)} is not installed. Install using one of:")
        for cmd in tool.install_commands:
            console.print(f"  {escape(cmd)}")
        console.print()

    if has_failure:
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR
    console.print("All checks passed.")
    return exit_codes.SUCCESS
