"""Per-platform artifact table and command-vector construction.

Everything here is pure: callers decide the :class:`Platform` once at
startup and pass it in.  Command builders return argument vectors,
never shell strings, so operator input cannot be interpreted by a shell.
"""

from __future__ import annotations

import platform as _platform
import re
from pathlib import Path

from sd_bootstrap.core.models import ArtifactSpec, Platform

_RELEASE = "https://github.com/leejet/stable-diffusion.cpp/releases/download/master-343-dd75fc0"

MODEL_SPEC = ArtifactSpec(
    url=(
        "https://huggingface.co/runwayml/stable-diffusion-v1-5/resolve/main/"
        "v1-5-pruned-emaonly.safetensors"
    ),
)
"""Model weights.  Published without a checksum, so never verified."""

BUNDLE_SPECS: dict[Platform, ArtifactSpec] = {
    Platform.MACOS: ArtifactSpec(
        url=f"{_RELEASE}/sd-master--bin-Darwin-macOS-15.7.1-arm64.zip",
        checksum="sha256:49bb1c0273efb6a36a26926ece674daffe49cd4a51c9e8935b5c9e8eb68b7ea2",
    ),
    Platform.LINUX: ArtifactSpec(
        url=f"{_RELEASE}/sd-master--bin-Linux-Ubuntu-24.04-x86_64.zip",
        checksum="sha256:152df5843e2ea265a627024de37a985cf75b5554554e2ad5d0ff06aad76ba4d8",
    ),
    Platform.WINDOWS: ArtifactSpec(
        url=f"{_RELEASE}/sd-master-dd75fc0-bin-win-avx-x64.zip",
        checksum="sha256:17f6d4f4e1cdaf92f90ff09479e0460246193d015f2b29f8f7553affed426c78",
    ),
}

_SYSTEMS: dict[str, Platform] = {
    "darwin": Platform.MACOS,
    "linux": Platform.LINUX,
    "windows": Platform.WINDOWS,
}

_SHA256_HEX = re.compile(r"^[0-9a-fA-F]{64}$")


# ---------------------------------------------------------------------------
# Platform selection
# ---------------------------------------------------------------------------

def detect_platform(system: str | None = None) -> Platform | None:
    """Map ``platform.system()`` (or *system*) to a :class:`Platform`.

    Returns ``None`` for hosts without a published bundle.
    """
    name = (system if system is not None else _platform.system()).lower()
    return _SYSTEMS.get(name)


def bundle_spec_for(platform: Platform) -> ArtifactSpec:
    return BUNDLE_SPECS[platform]


# ---------------------------------------------------------------------------
# Command vectors
# ---------------------------------------------------------------------------

def download_command(url: str, dest: Path) -> list[str]:
    # --fail turns HTTP errors into a non-zero exit instead of saving the error page.
    return ["curl", "--fail", "-L", "-o", str(dest), url]


def hash_command(platform: Platform | None, path: Path) -> list[str]:
    if platform is Platform.WINDOWS:
        return ["certutil", "-hashfile", str(path), "SHA256"]
    return ["shasum", "-a", "256", str(path)]


def extract_command(platform: Platform, archive: Path, dest: Path) -> list[str]:
    if platform is Platform.WINDOWS:
        return ["tar", "-xf", str(archive), "-C", str(dest)]
    return ["unzip", "-o", str(archive), "-d", str(dest)]


def rpath_command(executable: Path) -> list[str]:
    return ["install_name_tool", "-add_rpath", "@loader_path", str(executable)]


def generate_command(
    executable: Path,
    model_path: Path,
    prompt_text: str,
    output_filename: str,
) -> list[str]:
    return [
        str(executable),
        "-m",
        str(model_path),
        "-p",
        prompt_text,
        "-o",
        output_filename,
    ]


# ---------------------------------------------------------------------------
# Checksum handling
# ---------------------------------------------------------------------------

def extract_digest(output: str) -> str:
    """Pull the hex digest out of a hashing tool's stdout.

    ``shasum`` prints ``<hex>  <path>``; ``certutil`` prints the digest
    alone on its second line.  The first line whose leading field looks
    like a SHA-256 digest wins.  Otherwise the trimmed output is returned
    as-is, which will then fail comparison.
    """
    for line in output.splitlines():
        fields = line.strip().split()
        if fields and _SHA256_HEX.match(fields[0]):
            return fields[0]
    return output.strip()


def checksums_match(computed: str, expected_digest: str) -> bool:
    """Case-insensitive hex compare, ignoring whitespace around *computed*."""
    return computed.strip().lower() == expected_digest.strip().lower()
