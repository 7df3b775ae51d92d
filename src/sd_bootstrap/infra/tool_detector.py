"""Infrastructure: external tool detection and platform guidance.

Locates the command-line tools the bootstrapper shells out to and
provides platform-specific installation guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only.
* No PATH modification.
* No automatic installation.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from sd_bootstrap.core.models import Platform
from sd_bootstrap.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of probing PATH for one tool.

    Attributes
    ----------
    name : str
        Executable name that was looked up.
    found : bool
        Whether the tool was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the host
        platform.  Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Required tools per platform
# ---------------------------------------------------------------------------

def required_tools(host: Platform | None) -> tuple[str, ...]:
    """Return the tools needed to install the bundle on *host*."""
    if host is Platform.WINDOWS:
        return ("curl", "certutil", "tar")
    return ("curl", "shasum", "unzip")


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str, host: Platform | None = None) -> ToolStatus:
    """Probe PATH for *name*; install guidance is for *host*.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present; the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)
    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )
    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name, host),
    )


def missing_tool_error(name: str, host: Platform | None = None) -> ToolNotFoundError:
    """Build the typed error for a tool that could not be started on *host*."""
    commands = _platform_install_commands(name, host)
    hint_lines: list[str] = []
    if commands:
        hint_lines.append(f"Install {name} using one of:")
        hint_lines.extend(f"  {cmd}" for cmd in commands)
    return ToolNotFoundError(
        f"{name} is not installed or not on PATH.",
        hint="\n".join(hint_lines) if hint_lines else None,
    )


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_LINUX_PACKAGES: dict[str, str] = {
    "curl": "curl",
    "unzip": "unzip",
    "shasum": "perl",
    "tar": "tar",
}

_KNOWN_TOOLS = frozenset(
    ("curl", "shasum", "unzip", "tar", "certutil", "install_name_tool")
)


def _platform_install_commands(name: str, host: Platform | None) -> tuple[str, ...]:
    """Return install commands for *name* on *host*; none for an unknown host."""
    if name not in _KNOWN_TOOLS:
        return ()
    if host is Platform.WINDOWS:
        if name in ("certutil", "tar"):
            return ("Both ship with Windows 10 and later; update Windows.",)
        return (f"winget install {name}", f"choco install {name}")
    if host is Platform.LINUX:
        package = _LINUX_PACKAGES.get(name, name)
        return (
            f"sudo apt install {package}",
            f"sudo dnf install {package}",
            f"sudo pacman -S {package}",
        )
    if host is Platform.MACOS:
        if name == "install_name_tool":
            return ("xcode-select --install",)
        return (f"brew install {name}",)
    return ()
