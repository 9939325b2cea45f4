"""
Configuration for norminette-provisioner.

Settings can be given explicitly or read from the environment:

    NORMINETTE_LSP_REPO            Repository to fetch releases from
    NORMINETTE_LSP_INSTALL_DIR     Directory the binary is installed into
    NORMINETTE_LSP_CLEANUP_POLICY  "fail_fast" (default) or "best_effort"
    NORMINETTE_LSP_BINARY_PATH     Local binary to use instead of downloading
    NORMINETTE_LSP_TIMEOUT         HTTP timeout in seconds
    GITHUB_TOKEN                   Token for the GitHub API (optional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from platformdirs import user_cache_dir

from norminette_provisioner._core.version import (
    BINARY_NAME,
    GITHUB_API_BASE,
    GITHUB_REPO,
)
from norminette_provisioner.errors import ConfigError
from norminette_provisioner.types import CleanupPolicy

DEFAULT_TIMEOUT = 60.0


def default_install_dir() -> Path:
    """Get the per-user directory binaries are installed into."""
    return Path(user_cache_dir("norminette-lsp", "norminette")) / "bin"


@dataclass
class ProvisionerConfig:
    """
    Configuration for the binary provisioner.

    Attributes:
        repo: "owner/name" of the repository publishing release assets
        binary_name: Tool name used in asset and install file names
        install_dir: Directory holding the installed binary. Every other
            entry in it is deleted after an install, so it must be dedicated
            to this tool.
        cleanup_policy: How to treat failures removing stale entries
        binary_path_override: Use this binary and skip provisioning
        timeout: HTTP timeout in seconds for release lookup and download
        github_token: Optional token sent to the GitHub API
        api_base: GitHub API root
    """
    repo: str = GITHUB_REPO
    binary_name: str = BINARY_NAME
    install_dir: Path = field(default_factory=default_install_dir)
    cleanup_policy: CleanupPolicy = CleanupPolicy.FAIL_FAST
    binary_path_override: Optional[Path] = None
    timeout: float = DEFAULT_TIMEOUT
    github_token: Optional[str] = None
    api_base: str = GITHUB_API_BASE

    def __post_init__(self) -> None:
        """Normalize and validate configuration on creation."""
        self.install_dir = Path(self.install_dir)
        if self.binary_path_override is not None:
            self.binary_path_override = Path(self.binary_path_override)
        if not isinstance(self.cleanup_policy, CleanupPolicy):
            self.cleanup_policy = parse_cleanup_policy(str(self.cleanup_policy))
        self.validate()

    def validate(self) -> None:
        """Validate configuration values."""
        owner, _, name = self.repo.partition("/")
        if not owner or not name or "/" in name:
            raise ConfigError(f"repo must look like 'owner/name', got {self.repo!r}")

        if not self.binary_name:
            raise ConfigError("binary_name must not be empty")

        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProvisionerConfig":
        """
        Build a configuration from environment variables.

        Unset variables fall back to the dataclass defaults.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if env.get("NORMINETTE_LSP_REPO"):
            kwargs["repo"] = env["NORMINETTE_LSP_REPO"]
        if env.get("NORMINETTE_LSP_INSTALL_DIR"):
            kwargs["install_dir"] = Path(env["NORMINETTE_LSP_INSTALL_DIR"]).expanduser()
        if env.get("NORMINETTE_LSP_CLEANUP_POLICY"):
            kwargs["cleanup_policy"] = parse_cleanup_policy(env["NORMINETTE_LSP_CLEANUP_POLICY"])
        if env.get("NORMINETTE_LSP_BINARY_PATH"):
            kwargs["binary_path_override"] = Path(env["NORMINETTE_LSP_BINARY_PATH"]).expanduser()
        if env.get("NORMINETTE_LSP_TIMEOUT"):
            raw = env["NORMINETTE_LSP_TIMEOUT"]
            try:
                kwargs["timeout"] = float(raw)
            except ValueError as e:
                raise ConfigError(f"NORMINETTE_LSP_TIMEOUT must be a number, got {raw!r}") from e
        if env.get("GITHUB_TOKEN"):
            kwargs["github_token"] = env["GITHUB_TOKEN"]

        return cls(**kwargs)


def parse_cleanup_policy(value: str) -> CleanupPolicy:
    """
    Parse a cleanup policy name.

    Accepts the enum values ("fail_fast", "best_effort") case-insensitively,
    with dashes allowed in place of underscores.

    Raises:
        ConfigError: If the name is unknown
    """
    normalized = value.strip().lower().replace("-", "_")
    try:
        return CleanupPolicy(normalized)
    except ValueError as e:
        choices = ", ".join(p.value for p in CleanupPolicy)
        raise ConfigError(f"Unknown cleanup policy {value!r} (expected one of: {choices})") from e
