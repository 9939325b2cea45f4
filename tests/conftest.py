"""
Pytest configuration for norminette-provisioner tests.
"""

from pathlib import Path

import pytest

from norminette_provisioner.config import ProvisionerConfig
from norminette_provisioner.status import RecordingStatusReporter
from norminette_provisioner.types import (
    Architecture,
    Asset,
    Os,
    Platform,
    Release,
)

LINUX_ASSET = "norminette_lsp-x86_64-unknown-linux-gnu"


class FakeReleaseSource:
    """Release source returning a fixed release (or raising) and recording calls."""

    def __init__(self, release=None, error=None):
        self.release = release
        self.error = error
        self.calls = []

    def latest_release(self, repo, *, require_assets=True, pre_release=False):
        self.calls.append((repo, require_assets, pre_release))
        if self.error is not None:
            raise self.error
        return self.release


class FakeDownloader:
    """Stands in for download_file: writes fixed bytes to the destination."""

    def __init__(self, content=b"#!/bin/sh\necho norminette\n", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def __call__(self, url, dest, timeout=60.0):
        self.calls.append((url, Path(dest)))
        if self.error is not None:
            raise self.error
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.content)
        return dest


class FakeSearchPath:
    """Search path answering from a name -> path mapping."""

    def __init__(self, entries=None):
        self.entries = dict(entries or {})
        self.lookups = []

    def which(self, name):
        self.lookups.append(name)
        return self.entries.get(name)


@pytest.fixture
def linux_x86_64():
    """Linux on 64-bit x86."""
    return Platform(os=Os.LINUX, arch=Architecture.X86_64)


@pytest.fixture
def sample_release():
    """Release 1.2.0 carrying builds for two platforms."""
    return Release(
        version="1.2.0",
        assets=(
            Asset(
                name=LINUX_ASSET,
                download_url=f"https://github.com/DavidLee18/norminette_lsp/releases/download/1.2.0/{LINUX_ASSET}",
            ),
            Asset(
                name="norminette_lsp-aarch64-apple-darwin",
                download_url="https://github.com/DavidLee18/norminette_lsp/releases/download/1.2.0/norminette_lsp-aarch64-apple-darwin",
            ),
        ),
    )


@pytest.fixture
def release_source(sample_release):
    return FakeReleaseSource(release=sample_release)


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def reporter():
    return RecordingStatusReporter()


@pytest.fixture
def install_dir(tmp_path):
    """Empty install directory dedicated to one test."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def config(install_dir):
    return ProvisionerConfig(install_dir=install_dir)
