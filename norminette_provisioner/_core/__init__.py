"""
Core primitives for norminette-provisioner.

This module handles:
- Naming rules and constants
- Host platform detection
- Release lookup on GitHub
- Download, permission and install directory primitives
"""

from norminette_provisioner._core.version import (
    PROVISIONER_VERSION,
    GITHUB_REPO,
    BINARY_NAME,
    asset_name,
    install_file_name,
    install_path,
)
from norminette_provisioner._core.platform import current_platform
from norminette_provisioner._core.releases import (
    GitHubReleaseSource,
    ReleaseSource,
    select_release,
)
from norminette_provisioner._core.lifecycle import (
    SearchPath,
    SystemSearchPath,
    download_file,
    make_file_executable,
    list_install_dir,
    remove_entry,
)

__all__ = [
    # Version
    "PROVISIONER_VERSION",
    "GITHUB_REPO",
    "BINARY_NAME",
    "asset_name",
    "install_file_name",
    "install_path",
    # Platform
    "current_platform",
    # Releases
    "GitHubReleaseSource",
    "ReleaseSource",
    "select_release",
    # Lifecycle
    "SearchPath",
    "SystemSearchPath",
    "download_file",
    "make_file_executable",
    "list_install_dir",
    "remove_entry",
]
