"""
Release lookup against the GitHub REST API.

Handles:
- Listing releases of a repository
- Picking the latest one that satisfies the pre-release / asset filters
- Converting the JSON payload into Release / Asset values
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

import requests

from norminette_provisioner._core.version import (
    GITHUB_API_BASE,
    PROVISIONER_VERSION,
    latest_releases_url,
)
from norminette_provisioner.errors import ReleaseFetchError
from norminette_provisioner.types import Asset, Release

logger = logging.getLogger(__name__)


class ReleaseSource(Protocol):
    """Anything able to report the latest release of a repository."""

    def latest_release(
        self,
        repo: str,
        *,
        require_assets: bool = True,
        pre_release: bool = False,
    ) -> Release:
        ...


def release_from_json(data: Dict[str, Any]) -> Release:
    """
    Build a Release from a GitHub release JSON object.

    The tag name is used verbatim as the version.

    Raises:
        ReleaseFetchError: If required fields are missing
    """
    try:
        version = data["tag_name"]
        assets = tuple(
            Asset(name=item["name"], download_url=item["browser_download_url"])
            for item in data.get("assets") or ()
        )
    except (KeyError, TypeError) as e:
        raise ReleaseFetchError(f"Malformed release payload: missing {e}") from e
    return Release(version=version, assets=assets)


def select_release(
    releases: Iterable[Dict[str, Any]],
    require_assets: bool = True,
    pre_release: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Pick the first release that satisfies the filters.

    GitHub lists releases newest first. Drafts are never picked.

    Args:
        releases: Release JSON objects, newest first
        require_assets: Skip releases without assets
        pre_release: Allow pre-releases

    Returns:
        The matching release object, or None
    """
    for release in releases:
        if release.get("draft"):
            continue
        if release.get("prerelease") and not pre_release:
            continue
        if require_assets and not release.get("assets"):
            continue
        return release
    return None


class GitHubReleaseSource:
    """
    Fetches release metadata from GitHub.

    Attributes:
        api_base: API root (default: public GitHub)
        token: Optional token sent as a bearer credential
        timeout: Request timeout in seconds
        per_page: Releases requested per page
        max_pages: Upper bound on pages read before giving up
    """

    def __init__(
        self,
        api_base: str = GITHUB_API_BASE,
        token: Optional[str] = None,
        timeout: float = 60.0,
        per_page: int = 30,
        max_pages: int = 10,
    ):
        self.api_base = api_base
        self.token = token
        self.timeout = timeout
        self.per_page = per_page
        self.max_pages = max_pages

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"norminette-provisioner/{PROVISIONER_VERSION}",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get_page(
        self, repo: str, url: str, params: Optional[Dict[str, Any]]
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Fetch one page of the release listing and the URL of the next page."""
        try:
            response = requests.get(
                url,
                headers=self._headers(),
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ReleaseFetchError(
                f"Release lookup for {repo} failed: {e}", status_code=status
            ) from e
        except requests.exceptions.RequestException as e:
            raise ReleaseFetchError(f"Release lookup for {repo} failed: {e}") from e
        except ValueError as e:
            raise ReleaseFetchError(f"Release lookup for {repo} returned invalid JSON: {e}") from e

        if not isinstance(payload, list):
            raise ReleaseFetchError(f"Unexpected release listing for {repo}: {type(payload).__name__}")

        next_url = (response.links or {}).get("next", {}).get("url")
        return payload, next_url

    def latest_release(
        self,
        repo: str,
        *,
        require_assets: bool = True,
        pre_release: bool = False,
    ) -> Release:
        """
        Get the latest release of `repo` that satisfies the filters.

        Follows the `Link: rel="next"` header page by page, reading at most
        `max_pages` pages.

        Args:
            repo: "owner/name" repository identifier
            require_assets: Skip releases without assets
            pre_release: Allow pre-releases

        Returns:
            The selected Release

        Raises:
            ReleaseFetchError: If the API is unreachable, answers with an
                error, or no release qualifies
        """
        url: Optional[str] = latest_releases_url(repo, self.api_base)
        params: Optional[Dict[str, Any]] = {"per_page": self.per_page}
        selected = None

        for _ in range(self.max_pages):
            if url is None:
                break
            logger.debug(f"Fetching releases from {url}")
            payload, url = self._get_page(repo, url, params)
            # The next link already carries the query string
            params = None
            selected = select_release(payload, require_assets=require_assets, pre_release=pre_release)
            if selected is not None:
                break

        if selected is None:
            raise ReleaseFetchError(f"No qualifying release found for {repo}")

        release = release_from_json(selected)
        logger.debug(f"Latest release of {repo} is {release.version} ({len(release.assets)} assets)")
        return release
