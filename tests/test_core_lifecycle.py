"""Tests for norminette_provisioner._core.lifecycle module."""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from norminette_provisioner._core.lifecycle import (
    SystemSearchPath,
    download_file,
    list_install_dir,
    make_file_executable,
    remove_entry,
)
from norminette_provisioner.errors import (
    DirectoryListError,
    DownloadError,
    ExecutablePermissionError,
)


class TestDownloadFile:
    """Tests for download_file function."""

    @patch("requests.get")
    def test_download_success(self, mock_get, tmp_path):
        """Successful download writes all chunks."""
        target = tmp_path / "subdir" / "norminette_lsp_1.2.0"

        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.iter_content = MagicMock(return_value=[b"binary", b"", b"content"])
        mock_response.raise_for_status = MagicMock()
        mock_get.return_value = mock_response

        result = download_file("https://example.com/asset", target)

        assert result == target
        assert target.read_bytes() == b"binarycontent"
        mock_get.assert_called_once_with("https://example.com/asset", stream=True, timeout=60.0)

    @patch("requests.get")
    def test_overwrites_existing(self, mock_get, tmp_path):
        target = tmp_path / "norminette_lsp_1.2.0"
        target.write_bytes(b"stale contents that are longer")

        mock_response = MagicMock()
        mock_response.iter_content = MagicMock(return_value=[b"new"])
        mock_response.raise_for_status = MagicMock()
        mock_get.return_value = mock_response

        download_file("https://example.com/asset", target)

        assert target.read_bytes() == b"new"

    @patch("requests.get")
    def test_download_404_error(self, mock_get, tmp_path):
        """404 response should raise DownloadError."""
        target = tmp_path / "norminette_lsp_1.2.0"

        mock_response = MagicMock()
        mock_response.status_code = 404
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        mock_get.return_value = mock_response

        with pytest.raises(DownloadError) as exc_info:
            download_file("https://example.com/missing", target)

        assert exc_info.value.url == "https://example.com/missing"
        assert str(exc_info.value).startswith("failed to download file")
        assert not target.exists()

    @patch("requests.get")
    def test_partial_download_removed(self, mock_get, tmp_path):
        """Interrupted stream leaves no file behind."""
        target = tmp_path / "norminette_lsp_1.2.0"

        def chunks(chunk_size):
            yield b"partial"
            raise requests.exceptions.ChunkedEncodingError("connection reset")

        mock_response = MagicMock()
        mock_response.iter_content = chunks
        mock_response.raise_for_status = MagicMock()
        mock_get.return_value = mock_response

        with pytest.raises(DownloadError):
            download_file("https://example.com/asset", target)

        assert not target.exists()

    @patch("requests.get")
    def test_custom_timeout(self, mock_get, tmp_path):
        mock_response = MagicMock()
        mock_response.iter_content = MagicMock(return_value=[b"x"])
        mock_response.raise_for_status = MagicMock()
        mock_get.return_value = mock_response

        download_file("https://example.com/asset", tmp_path / "bin", timeout=3.5)

        assert mock_get.call_args[1]["timeout"] == 3.5


class TestMakeFileExecutable:
    """Tests for make_file_executable function."""

    def test_sets_executable(self, tmp_path):
        if sys.platform == "win32":
            pytest.skip("Executable test not applicable on Windows")

        target = tmp_path / "norminette_lsp_1.2.0"
        target.write_bytes(b"#!/bin/sh\n")
        target.chmod(0o644)

        make_file_executable(target)

        assert os.access(target, os.X_OK)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExecutablePermissionError) as exc_info:
            make_file_executable(tmp_path / "missing")
        assert "failed to make file executable" in str(exc_info.value)

    def test_chmod_failure(self, tmp_path):
        if sys.platform == "win32":
            pytest.skip("chmod is not called on Windows")

        target = tmp_path / "norminette_lsp_1.2.0"
        target.write_bytes(b"x")

        with patch("os.chmod", side_effect=PermissionError("operation not permitted")):
            with pytest.raises(ExecutablePermissionError):
                make_file_executable(target)


class TestSystemSearchPath:
    """Tests for SystemSearchPath."""

    def test_finds_executable(self, tmp_path):
        if sys.platform == "win32":
            pytest.skip("PATHEXT lookup differs on Windows")

        binary = tmp_path / "norminette_lsp_1.2.0"
        binary.write_bytes(b"#!/bin/sh\n")
        binary.chmod(0o755)

        found = SystemSearchPath(path=str(tmp_path)).which("norminette_lsp_1.2.0")

        assert found is not None
        assert Path(found) == binary

    def test_missing_returns_none(self, tmp_path):
        assert SystemSearchPath(path=str(tmp_path)).which("norminette_lsp_9.9.9") is None


class TestInstallDirectory:
    """Tests for list_install_dir and remove_entry."""

    def test_lists_entries(self, tmp_path):
        (tmp_path / "b").write_text("b")
        (tmp_path / "a").mkdir()

        assert [p.name for p in list_install_dir(tmp_path)] == ["a", "b"]

    def test_list_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryListError):
            list_install_dir(tmp_path / "missing")

    def test_remove_file(self, tmp_path):
        target = tmp_path / "old"
        target.write_text("x")

        remove_entry(target)

        assert not target.exists()

    def test_remove_directory_tree(self, tmp_path):
        target = tmp_path / "old"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "file").write_text("x")

        remove_entry(target)

        assert not target.exists()

    def test_remove_missing_raises(self, tmp_path):
        with pytest.raises(OSError):
            remove_entry(tmp_path / "missing")
