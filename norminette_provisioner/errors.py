"""
Exception types for norminette-provisioner.

Provides typed exceptions for:
- Binary provisioning (release lookup, download, install, cleanup)
- Configuration errors
- Host hooks the extension does not implement
"""

from __future__ import annotations

from typing import Optional


class NorminetteError(Exception):
    """Base exception for all norminette-provisioner errors."""
    pass


# =============================================================================
# Provisioning Errors
# =============================================================================


class ProvisioningError(NorminetteError):
    """
    Raised when the language-server binary cannot be made available.

    Every subclass corresponds to one fallible step of a provisioning
    cycle. Before one of these is raised, a Failed status carrying the
    same message has already been sent to the status reporter.
    """
    pass


class ReleaseFetchError(ProvisioningError):
    """
    Raised when the latest release cannot be retrieved.

    This includes:
    - Network failures talking to the release API
    - Non-2xx responses
    - No release matching the filters (stable, with assets)
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AssetNotFoundError(ProvisioningError):
    """
    Raised when the release carries no asset for this platform.

    Either the platform/architecture combination is not supported, or
    the release was published without that build.

    Example:
        try:
            command = provisioner.resolve_command(source, platform)
        except AssetNotFoundError as e:
            logger.error(f"No build for {e.asset_name} in {e.version}")
    """

    def __init__(
        self,
        message: str,
        asset_name: Optional[str] = None,
        version: Optional[str] = None,
    ):
        self.asset_name = asset_name
        self.version = version
        super().__init__(message)


class UnsupportedPlatformError(AssetNotFoundError):
    """Raised when the host OS or CPU architecture has no known asset mapping."""
    pass


class DownloadError(ProvisioningError):
    """Raised when the release asset cannot be downloaded to the install path."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class InvalidVersionError(ProvisioningError):
    """
    Raised when a release version cannot be used as an install file name.

    Release tags may contain path separators or parent references, which
    would place the binary outside the install directory.
    """

    def __init__(self, message: str, version: Optional[str] = None):
        self.version = version
        super().__init__(message)


class ExecutablePermissionError(ProvisioningError):
    """Raised when the downloaded binary cannot be marked executable."""
    pass


class DirectoryListError(ProvisioningError):
    """Raised when the install directory or one of its entries cannot be read."""
    pass


class CleanupError(ProvisioningError):
    """
    Raised when a stale install entry cannot be removed.

    Only raised under the fail-fast cleanup policy. With the best-effort
    policy the failure is logged and provisioning continues.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(NorminetteError):
    """
    Raised when provisioner configuration is invalid.

    This includes:
    - Empty or malformed repository identifiers
    - Unknown cleanup policy names
    - Non-positive timeouts
    """
    pass


# =============================================================================
# Host Hook Errors
# =============================================================================


class UnsupportedCapabilityError(NorminetteError):
    """
    Raised by host hooks the extension does not implement.

    The host plugin interface requires these hooks to exist, but this
    extension only provides a language server command.
    """

    def __init__(self, capability: str):
        self.capability = capability
        super().__init__(f"`{capability}` not implemented")
