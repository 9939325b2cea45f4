"""
Binary provisioning for the norminette language server.

A provisioning call:
1. Looks up the latest stable release with assets
2. Picks the asset built for this platform
3. Reuses the cached binary when it matches the release
4. Otherwise downloads it, marks it executable and evicts stale entries
5. Returns the command the editor spawns

Each fallible step reports a Failed status before raising, so the editor UI
and the caller both see the failure.

Usage:
    from norminette_provisioner import BinaryProvisioner, GitHubReleaseSource
    from norminette_provisioner import current_platform

    provisioner = BinaryProvisioner()
    command = provisioner.resolve_command(GitHubReleaseSource(), current_platform())
    subprocess.Popen(command.to_argv())
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, NoReturn, Optional, Type

from norminette_provisioner._core.lifecycle import (
    SearchPath,
    download_file,
    list_install_dir,
    make_file_executable,
    remove_entry,
)
from norminette_provisioner._core.releases import ReleaseSource
from norminette_provisioner._core.version import (
    asset_name,
    check_version,
    install_file_name,
    install_path,
)
from norminette_provisioner.config import ProvisionerConfig
from norminette_provisioner.errors import (
    AssetNotFoundError,
    CleanupError,
    DownloadError,
    InvalidVersionError,
    ProvisioningError,
    ReleaseFetchError,
)
from norminette_provisioner.status import LoggingStatusReporter, StatusReporter
from norminette_provisioner.types import (
    CacheEntry,
    CleanupPolicy,
    Command,
    InstallationStatus,
    Platform,
    Release,
)

logger = logging.getLogger(__name__)

DEFAULT_SERVER_ID = "norminette_lsp"


class BinaryProvisioner:
    """
    Resolves, installs and caches the language-server binary.

    The cache is owned by the instance. Calls on one instance must not
    overlap; the host invokes it once per language-server start.

    Attributes:
        config: Provisioner configuration
        reporter: Receives installation status transitions
        server_id: Language server id statuses are tagged with
        cache: Last successfully provisioned (path, version)
    """

    def __init__(
        self,
        config: Optional[ProvisionerConfig] = None,
        reporter: Optional[StatusReporter] = None,
        server_id: str = DEFAULT_SERVER_ID,
        downloader: Callable[..., Path] = download_file,
    ):
        self.config = config or ProvisionerConfig()
        self.reporter: StatusReporter = reporter or LoggingStatusReporter()
        self.server_id = server_id
        self.cache = CacheEntry()
        self._download = downloader

    # -------------------------------------------------------------------------
    # Status helpers
    # -------------------------------------------------------------------------

    def _report(self, status: InstallationStatus) -> None:
        self.reporter(self.server_id, status)

    def _fail(
        self,
        error_cls: Type[ProvisioningError],
        message: str,
        cause: Optional[BaseException] = None,
        **kwargs,
    ) -> NoReturn:
        self._report(InstallationStatus.failed(message))
        raise error_cls(message, **kwargs) from cause

    def _reraise(self, error: ProvisioningError) -> NoReturn:
        self._report(InstallationStatus.failed(str(error)))
        raise error

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    def cached_command(self, version: Optional[str] = None) -> Optional[Command]:
        """
        Get the command for the cached binary if it is still usable.

        Args:
            version: If given, the cache must hold this version

        Returns:
            Command for the cached path, or None if the cache is empty,
            holds another version, or the file is gone
        """
        if self.cache.is_empty:
            return None
        if version is not None and self.cache.version != version:
            return None
        if not Path(self.cache.path).is_file():
            logger.debug(f"Cached binary {self.cache.path} no longer exists")
            return None
        return Command(command=self.cache.path)

    def reset(self) -> None:
        """Forget the cached binary."""
        self.cache.clear()

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve_command(
        self,
        release_source: ReleaseSource,
        platform_info: Platform,
        search_path: Optional[SearchPath] = None,
    ) -> Command:
        """
        Make sure the binary for the latest release is installed.

        Args:
            release_source: Provides the latest release of the configured repo
            platform_info: Host OS and architecture
            search_path: Optional host lookup for already installed binaries

        Returns:
            Command running the installed binary

        Raises:
            ReleaseFetchError: Release lookup failed
            AssetNotFoundError: No asset for this platform in the release
            DownloadError: Asset download failed
            ExecutablePermissionError: Binary could not be made executable
            DirectoryListError: Install directory could not be read
            InvalidVersionError: Release version is not usable as a file name
            CleanupError: A stale entry could not be removed (fail-fast policy)
        """
        self._report(InstallationStatus.checking_for_update())

        expected = asset_name(platform_info, self.config.binary_name)
        release = self._fetch_release(release_source)

        asset = release.find_asset(expected)
        if asset is None:
            self._fail(
                AssetNotFoundError,
                f"no asset found matching {expected!r}",
                asset_name=expected,
                version=release.version,
            )

        try:
            check_version(release.version)
        except InvalidVersionError as e:
            self._reraise(e)

        cached = self.cached_command(release.version)
        if cached is not None:
            logger.debug(f"Using cached binary {cached.command} ({release.version})")
            self._report(InstallationStatus.idle())
            return cached

        found = self._find_installed(release.version, search_path)
        if found is not None:
            self.cache.path = found
            self.cache.version = release.version
            self._report(InstallationStatus.idle())
            return Command(command=found)

        target = install_path(self.config.install_dir, release.version, self.config.binary_name)

        if not target.is_file():
            self._report(InstallationStatus.downloading())
            try:
                self._download(asset.download_url, target, timeout=self.config.timeout)
                make_file_executable(target)
            except ProvisioningError as e:
                self._reraise(e)
            except Exception as e:
                self._fail(
                    DownloadError, f"failed to download file: {e}", e, url=asset.download_url
                )
            logger.info(f"Installed {self.config.binary_name} {release.version} at {target}")

        self._evict_stale(self.config.install_dir, target)

        self.cache.path = str(target)
        self.cache.version = release.version
        self._report(InstallationStatus.idle())
        return Command(command=str(target))

    def _fetch_release(self, release_source: ReleaseSource) -> Release:
        try:
            return release_source.latest_release(
                self.config.repo, require_assets=True, pre_release=False
            )
        except ReleaseFetchError as e:
            self._fail(ReleaseFetchError, f"failed to find release: {e}", e, status_code=e.status_code)
        except Exception as e:
            self._fail(ReleaseFetchError, f"failed to find release: {e}", e)

    def _find_installed(self, version: str, search_path: Optional[SearchPath]) -> Optional[str]:
        """Look for an install of `version` the host already knows about."""
        if search_path is None:
            return None
        name = install_file_name(version, self.config.binary_name)
        found = search_path.which(name)
        if found and Path(found).is_file():
            logger.debug(f"Found {name} on search path at {found}")
            return found
        return None

    def _evict_stale(self, install_dir: Path, keep: Path) -> None:
        """Remove every entry of `install_dir` other than `keep`."""
        try:
            entries = list_install_dir(install_dir)
        except ProvisioningError as e:
            self._reraise(e)

        for entry in entries:
            if entry.name == keep.name:
                continue
            try:
                remove_entry(entry)
                logger.debug(f"Removed stale entry {entry}")
            except OSError as e:
                message = f"failed to remove file: {e}"
                if self.config.cleanup_policy == CleanupPolicy.BEST_EFFORT:
                    logger.warning(f"{message} (continuing)")
                    continue
                self._fail(CleanupError, message, e, path=str(entry))
