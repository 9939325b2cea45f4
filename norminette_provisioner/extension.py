"""
Host editor extension for the norminette language server.

The host plugin interface asks for more hooks than this extension needs.
Only the language server command is implemented; label, slash-command and
docs hooks raise UnsupportedCapabilityError, and configuration hooks return
no configuration.

Usage:
    from norminette_provisioner import NorminetteExtension

    extension = NorminetteExtension()
    command = extension.language_server_command("norminette_lsp", worktree)
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from norminette_provisioner._core.lifecycle import SearchPath
from norminette_provisioner._core.platform import current_platform
from norminette_provisioner._core.releases import GitHubReleaseSource, ReleaseSource
from norminette_provisioner.config import ProvisionerConfig
from norminette_provisioner.errors import UnsupportedCapabilityError, UnsupportedPlatformError
from norminette_provisioner.provisioner import BinaryProvisioner
from norminette_provisioner.status import StatusReporter
from norminette_provisioner.types import Command, InstallationStatus, Platform

logger = logging.getLogger(__name__)


class NorminetteExtension:
    """
    Host-facing capability object.

    Collaborators default to the real implementations: GitHub for release
    lookup, the running machine for platform detection, and the package
    logger for status reports.

    Attributes:
        config: Provisioner configuration
        provisioner: Owns the binary cache across calls
    """

    def __init__(
        self,
        config: Optional[ProvisionerConfig] = None,
        release_source: Optional[ReleaseSource] = None,
        reporter: Optional[StatusReporter] = None,
        platform_info: Optional[Platform] = None,
    ):
        self.config = config or ProvisionerConfig.from_env()
        self.release_source: ReleaseSource = release_source or GitHubReleaseSource(
            api_base=self.config.api_base,
            token=self.config.github_token,
            timeout=self.config.timeout,
        )
        self.provisioner = BinaryProvisioner(self.config, reporter=reporter)
        self._platform_info = platform_info

    @property
    def platform_info(self) -> Platform:
        """Host platform, detected on first use."""
        if self._platform_info is None:
            self._platform_info = current_platform()
        return self._platform_info

    def language_server_command(
        self,
        language_server_id: str,
        worktree: Optional[SearchPath] = None,
    ) -> Command:
        """
        Get the command that starts the language server.

        A configured local binary (NORMINETTE_LSP_BINARY_PATH) is used as-is.
        Otherwise the binary for the latest release is provisioned.

        Args:
            language_server_id: Id statuses are reported under
            worktree: Host search path for already installed binaries

        Returns:
            Command for the host to spawn

        Raises:
            ProvisioningError: If the binary cannot be made available
        """
        override = self.config.binary_path_override
        if override is not None:
            if override.is_file():
                logger.info(f"Using local binary from NORMINETTE_LSP_BINARY_PATH: {override}")
                return Command(command=str(override))
            logger.warning(f"NORMINETTE_LSP_BINARY_PATH set but file not found: {override}")

        self.provisioner.server_id = language_server_id
        try:
            platform_info = self.platform_info
        except UnsupportedPlatformError as e:
            self.provisioner.reporter(language_server_id, InstallationStatus.failed(str(e)))
            raise

        return self.provisioner.resolve_command(
            self.release_source,
            platform_info,
            search_path=worktree,
        )

    def language_server_initialization_options(
        self,
        language_server_id: str,
        worktree: Optional[SearchPath] = None,
    ) -> Optional[Any]:
        return None

    def language_server_workspace_configuration(
        self,
        language_server_id: str,
        worktree: Optional[SearchPath] = None,
    ) -> Optional[Any]:
        return None

    # Hooks below are part of the host interface but not provided.

    def label_for_completion(self, language_server_id: str, completion: Any) -> Any:
        raise UnsupportedCapabilityError("label_for_completion")

    def label_for_symbol(self, language_server_id: str, symbol: Any) -> Any:
        raise UnsupportedCapabilityError("label_for_symbol")

    def complete_slash_command_argument(self, command: Any, args: List[str]) -> List[Any]:
        raise UnsupportedCapabilityError("complete_slash_command_argument")

    def run_slash_command(
        self,
        command: Any,
        args: List[str],
        worktree: Optional[SearchPath] = None,
    ) -> Any:
        raise UnsupportedCapabilityError("run_slash_command")

    def suggest_docs_packages(self, provider: str) -> List[str]:
        raise UnsupportedCapabilityError("suggest_docs_packages")

    def index_docs(self, provider: str, package: str, database: Any) -> None:
        raise UnsupportedCapabilityError("index_docs")
