"""
Version constants and naming rules for norminette-provisioner.

The language server is published independently of this package:
- PROVISIONER_VERSION: Version of this package
- GITHUB_REPO: Repository whose releases carry the server binaries
- BINARY_NAME: Stem shared by asset names and install file names
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from norminette_provisioner.errors import InvalidVersionError
from norminette_provisioner.types import Architecture, Os, Platform

# norminette-provisioner version (user-facing, independent semver)
PROVISIONER_VERSION = "0.1.0"

# GitHub repository for binary downloads
GITHUB_REPO = "DavidLee18/norminette_lsp"
BINARY_NAME = "norminette_lsp"

GITHUB_API_BASE = "https://api.github.com"

_ARCH_NAMES = {
    Architecture.AARCH64: "aarch64",
    Architecture.X86: "x86",
    Architecture.X86_64: "x86_64",
}

_OS_NAMES = {
    Os.MAC: "apple-darwin",
    Os.LINUX: "unknown-linux-gnu",
    Os.WINDOWS: "windows",
}


def asset_name(platform: Platform, tool: str = BINARY_NAME) -> str:
    """
    Get the release asset name for a platform.

    Args:
        platform: Host OS and architecture
        tool: Tool name prefix (default: BINARY_NAME)

    Returns:
        Asset name like "norminette_lsp-x86_64-unknown-linux-gnu"
    """
    return f"{tool}-{_ARCH_NAMES[platform.arch]}-{_OS_NAMES[platform.os]}"


def check_version(version: str) -> str:
    """Ensure `version` can be used verbatim inside a single file name."""
    if not version or version.strip() != version:
        raise InvalidVersionError(f"invalid release version: {version!r}", version=version)
    if "/" in version or "\\" in version or ".." in version:
        raise InvalidVersionError(
            f"release version {version!r} is not a valid file name", version=version
        )
    return version


def install_file_name(version: str, tool: str = BINARY_NAME) -> str:
    """
    Get the version-qualified file name an installed binary is stored under.

    Args:
        version: Release version, used verbatim
        tool: Tool name prefix (default: BINARY_NAME)

    Returns:
        File name like "norminette_lsp_1.2.0"

    Raises:
        InvalidVersionError: Version is empty, contains a path separator or
            a parent directory reference
    """
    check_version(version)
    return f"{tool}_{version}"


def install_path(
    install_dir: Union[str, Path],
    version: str,
    tool: str = BINARY_NAME,
) -> Path:
    """Get the full path an installed binary for `version` lives at."""
    return Path(install_dir) / install_file_name(version, tool)


def latest_releases_url(repo: str, api_base: str = GITHUB_API_BASE) -> str:
    """
    Get the GitHub REST URL listing releases of a repository.

    Args:
        repo: "owner/name" repository identifier
        api_base: API root (default: public GitHub)

    Returns:
        Releases listing URL
    """
    return f"{api_base.rstrip('/')}/repos/{repo}/releases"
