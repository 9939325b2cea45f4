"""
Host platform detection.
"""

from __future__ import annotations

import logging
import platform

from norminette_provisioner.errors import UnsupportedPlatformError
from norminette_provisioner.types import Architecture, Os, Platform

logger = logging.getLogger(__name__)


_SYSTEMS = {
    "darwin": Os.MAC,
    "linux": Os.LINUX,
    "windows": Os.WINDOWS,
}

_MACHINES = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "arm64": Architecture.AARCH64,
    "aarch64": Architecture.AARCH64,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
}


def current_platform() -> Platform:
    """
    Determine the OS family and CPU architecture of this machine.

    Returns:
        Platform of the host

    Raises:
        UnsupportedPlatformError: If the OS or architecture has no release build
    """
    system = platform.system().lower()
    machine = platform.machine().lower()

    os_family = _SYSTEMS.get(system)
    if os_family is None:
        raise UnsupportedPlatformError(f"Unsupported operating system: {system}")

    arch = _MACHINES.get(machine)
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {machine}")

    logger.debug(f"Detected platform {os_family.value}/{arch.value}")
    return Platform(os=os_family, arch=arch)
