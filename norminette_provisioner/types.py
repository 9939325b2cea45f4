"""
Type definitions for norminette-provisioner.

Defines enums and dataclasses used across the package for:
- Host platform description (OS family, CPU architecture)
- Release metadata (release, asset)
- The command handed back to the editor
- Installation status reported to the editor UI
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


# =============================================================================
# Platform Types
# =============================================================================


class Os(str, Enum):
    """Operating system family of the host."""
    MAC = "mac"
    LINUX = "linux"
    WINDOWS = "windows"


class Architecture(str, Enum):
    """CPU architecture of the host, spelled as in release asset names."""
    AARCH64 = "aarch64"
    X86 = "x86"
    X86_64 = "x86_64"


@dataclass(frozen=True)
class Platform:
    """Host OS family and CPU architecture."""
    os: Os
    arch: Architecture


# =============================================================================
# Release Types
# =============================================================================


@dataclass(frozen=True)
class Asset:
    """One named downloadable file attached to a release."""
    name: str
    download_url: str


@dataclass(frozen=True)
class Release:
    """
    A tagged, versioned publication of downloadable assets.

    Attributes:
        version: Release tag (e.g., "v1.2.0" or "1.2.0"), used verbatim
        assets: Assets attached to the release
    """
    version: str
    assets: Tuple[Asset, ...] = ()

    def find_asset(self, name: str) -> Optional[Asset]:
        """Return the asset whose name matches exactly, or None."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


# =============================================================================
# Host-facing Types
# =============================================================================


@dataclass(frozen=True)
class Command:
    """
    Command descriptor the editor uses to spawn the language server.

    Attributes:
        command: Path to the executable
        args: Command-line arguments
        env: Environment variable overrides as (name, value) pairs
    """
    command: str
    args: Tuple[str, ...] = ()
    env: Tuple[Tuple[str, str], ...] = ()

    def to_argv(self) -> List[str]:
        """Return the full argument vector, executable first."""
        return [self.command, *self.args]


class StatusKind(str, Enum):
    """
    Installation status kinds surfaced to the editor UI.

    A provisioning call walks through:

    - CHECKING_FOR_UPDATE: Release lookup in progress
    - DOWNLOADING: The binary for the current release is being fetched
    - IDLE: Nothing pending, the command is ready
    - FAILED: A step failed; the status carries a message
    """
    IDLE = "idle"
    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallationStatus:
    """Installation status with the failure message, if any."""
    kind: StatusKind
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "InstallationStatus":
        return cls(StatusKind.IDLE)

    @classmethod
    def checking_for_update(cls) -> "InstallationStatus":
        return cls(StatusKind.CHECKING_FOR_UPDATE)

    @classmethod
    def downloading(cls) -> "InstallationStatus":
        return cls(StatusKind.DOWNLOADING)

    @classmethod
    def failed(cls, message: str) -> "InstallationStatus":
        return cls(StatusKind.FAILED, message)

    @property
    def is_terminal(self) -> bool:
        """Idle and Failed end a provisioning call."""
        return self.kind in (StatusKind.IDLE, StatusKind.FAILED)


class CleanupPolicy(str, Enum):
    """
    What to do when a stale install entry cannot be removed.

    - FAIL_FAST: Report Failed and raise CleanupError
    - BEST_EFFORT: Log a warning and keep going
    """
    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


@dataclass
class CacheEntry:
    """In-memory record of the last successfully provisioned binary."""
    path: Optional[str] = None
    version: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.path is None or self.version is None

    def clear(self) -> None:
        self.path = None
        self.version = None

