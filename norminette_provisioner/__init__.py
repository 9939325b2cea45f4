"""
norminette-provisioner: Launch the norminette language server from an editor.

This package provides:
- BinaryProvisioner: downloads, caches and evicts the norminette_lsp binary
  published on GitHub releases
- NorminetteExtension: the host-facing extension object
- Installation status reporting for editor progress UI

Installation:
    pip install norminette-provisioner

Quickstart:
    from norminette_provisioner import NorminetteExtension

    extension = NorminetteExtension()
    command = extension.language_server_command("norminette_lsp")
    print(command.to_argv())
"""

from norminette_provisioner.types import (
    Os,
    Architecture,
    Platform,
    Asset,
    Release,
    Command,
    StatusKind,
    InstallationStatus,
    CleanupPolicy,
)
from norminette_provisioner.errors import (
    NorminetteError,
    ProvisioningError,
    ReleaseFetchError,
    AssetNotFoundError,
    UnsupportedPlatformError,
    DownloadError,
    ExecutablePermissionError,
    InvalidVersionError,
    DirectoryListError,
    CleanupError,
    ConfigError,
    UnsupportedCapabilityError,
)
from norminette_provisioner._core.version import (
    PROVISIONER_VERSION,
    asset_name,
    install_file_name,
    install_path,
)
from norminette_provisioner._core.platform import current_platform
from norminette_provisioner._core.releases import GitHubReleaseSource
from norminette_provisioner._core.lifecycle import SystemSearchPath
from norminette_provisioner.config import ProvisionerConfig
from norminette_provisioner.status import (
    LoggingStatusReporter,
    RecordingStatusReporter,
)
from norminette_provisioner.provisioner import BinaryProvisioner
from norminette_provisioner.extension import NorminetteExtension

__version__ = PROVISIONER_VERSION

__all__ = [
    # Version
    "__version__",
    "PROVISIONER_VERSION",
    # Types
    "Os",
    "Architecture",
    "Platform",
    "Asset",
    "Release",
    "Command",
    "StatusKind",
    "InstallationStatus",
    "CleanupPolicy",
    # Errors
    "NorminetteError",
    "ProvisioningError",
    "ReleaseFetchError",
    "AssetNotFoundError",
    "UnsupportedPlatformError",
    "DownloadError",
    "ExecutablePermissionError",
    "InvalidVersionError",
    "DirectoryListError",
    "CleanupError",
    "ConfigError",
    "UnsupportedCapabilityError",
    # Naming
    "asset_name",
    "install_file_name",
    "install_path",
    # Collaborators
    "current_platform",
    "GitHubReleaseSource",
    "SystemSearchPath",
    "LoggingStatusReporter",
    "RecordingStatusReporter",
    # Provisioning
    "ProvisionerConfig",
    "BinaryProvisioner",
    "NorminetteExtension",
]
