"""
Filesystem and network primitives used by the provisioner.

Handles:
- Binary download from release asset URLs
- Marking the binary executable
- Search-path lookup of already installed binaries
- Listing and removing install directory entries
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import sys
from pathlib import Path
from typing import List, Optional, Protocol, Union

import requests

from norminette_provisioner.errors import (
    DirectoryListError,
    DownloadError,
    ExecutablePermissionError,
)

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

PathLike = Union[str, Path]


def download_file(url: str, dest: PathLike, timeout: float = 60.0) -> Path:
    """
    Download a file as-is (no decompression) to `dest`.

    An existing file at `dest` is overwritten. A partially written file is
    removed if the download fails.

    Args:
        url: Download URL
        dest: Destination path; parent directories are created
        timeout: Request timeout in seconds

    Returns:
        Path to the downloaded file

    Raises:
        DownloadError: If the request or the write fails
    """
    target_path = Path(dest)
    logger.info(f"Downloading {url} to {target_path}")

    try:
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        target_path.parent.mkdir(parents=True, exist_ok=True)

        with open(target_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)

        logger.info(f"Downloaded {target_path.name}")
        return target_path

    except (requests.exceptions.RequestException, OSError) as e:
        _discard_partial(target_path)
        raise DownloadError(f"failed to download file: {e}", url=url) from e


def _discard_partial(path: Path) -> None:
    try:
        if path.exists():
            path.unlink()
    except OSError as e:
        logger.warning(f"Could not remove partial download {path}: {e}")


def make_file_executable(path: PathLike) -> None:
    """
    Add the executable bits to a file.

    Windows has no executable bit; there this only checks the file exists.

    Raises:
        ExecutablePermissionError: If the mode cannot be changed
    """
    target = Path(path)
    try:
        st = os.stat(target)
        if sys.platform == "win32":
            return
        os.chmod(target, st.st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise ExecutablePermissionError(f"failed to make file executable: {e}") from e


class SearchPath(Protocol):
    """Lookup of binaries already present on the host."""

    def which(self, name: str) -> Optional[str]:
        ...


class SystemSearchPath:
    """
    Search-path lookup backed by shutil.which.

    Attributes:
        path: os.pathsep-separated directories to search (default: $PATH)
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name, path=self.path)


def list_install_dir(directory: PathLike) -> List[Path]:
    """
    List the immediate entries of the install directory.

    Raises:
        DirectoryListError: If the directory cannot be read
    """
    try:
        return sorted(Path(directory).iterdir())
    except OSError as e:
        raise DirectoryListError(f"failed to list install directory {directory}: {e}") from e


def remove_entry(path: PathLike) -> None:
    """
    Remove a file, symlink or directory tree.

    Raises:
        OSError: If removal fails
    """
    entry = Path(path)
    if entry.is_dir() and not entry.is_symlink():
        shutil.rmtree(entry)
    else:
        entry.unlink()
