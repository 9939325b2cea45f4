"""
Installation status reporting.

The provisioner tells the host about every status transition so the editor
UI can show progress. Reporters are fire-and-forget: they return nothing and
must not raise.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Tuple

from norminette_provisioner.types import InstallationStatus, StatusKind

logger = logging.getLogger(__name__)


class StatusReporter(Protocol):
    """Receives (server_id, status) notifications."""

    def __call__(self, server_id: str, status: InstallationStatus) -> None:
        ...


class LoggingStatusReporter:
    """Reports status transitions to the package logger."""

    def __call__(self, server_id: str, status: InstallationStatus) -> None:
        if status.kind == StatusKind.FAILED:
            logger.error(f"[{server_id}] installation failed: {status.message}")
        else:
            logger.debug(f"[{server_id}] installation status: {status.kind.value}")


class RecordingStatusReporter:
    """
    Keeps every reported status in order.

    Useful for hosts that poll status instead of receiving callbacks.

    Attributes:
        events: (server_id, status) pairs in report order
    """

    def __init__(self) -> None:
        self.events: List[Tuple[str, InstallationStatus]] = []

    def __call__(self, server_id: str, status: InstallationStatus) -> None:
        self.events.append((server_id, status))

    @property
    def kinds(self) -> List[StatusKind]:
        """Status kinds in report order."""
        return [status.kind for _, status in self.events]

    @property
    def last(self) -> InstallationStatus:
        """Most recent status, Idle if nothing was reported."""
        if not self.events:
            return InstallationStatus.idle()
        return self.events[-1][1]

    def clear(self) -> None:
        self.events.clear()
