"""
Minimal GitHub REST API client used to sync package metadata.

Only ``fetch_repository`` is allowed to fail loudly: a package whose
repository does not exist is invalid data. Version and README lookups are
enrichments and degrade to empty strings.
"""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from pkgcatalog import __version__
from pkgcatalog.domain.errors import FetchFailed, ReadmeError
from pkgcatalog.domain.models import (
    GitHubReadme,
    GitHubRelease,
    GitHubRepository,
    GitHubTag,
)

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

_TAG_LIST = TypeAdapter(List[GitHubTag])


class GitHubClient:
    """Blocking client; one instance is shared by all packages in a run."""

    def __init__(
        self,
        base_url: str = GITHUB_API_URL,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": f"pkgcatalog/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_json(self, path: str) -> Any:
        """GET ``path`` and decode the JSON body. HTTP errors raise ``httpx.HTTPStatusError``."""
        logger.debug(f"GET {path}")
        response = self._client.get(path)
        response.raise_for_status()
        return response.json()

    def fetch_repository(self, owner: str, repo: str) -> GitHubRepository:
        path = f"/repos/{owner}/{repo}"
        try:
            data = self._get_json(path)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchFailed(
                f"failed to fetch repository: HTTP {status} from {path}",
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            raise FetchFailed(f"failed to fetch repository: {e}") from e
        except ValueError as e:
            raise FetchFailed(f"failed to parse repository data: {e}") from e

        try:
            return GitHubRepository.model_validate(data)
        except ValidationError as e:
            raise FetchFailed(f"failed to parse repository data: {e}") from e

    def fetch_latest_version(self, owner: str, repo: str) -> str:
        """
        Return the latest release tag, or the first listed tag when the
        repository has no releases. Returns "" when neither is available.
        """
        try:
            release = GitHubRelease.model_validate(
                self._get_json(f"/repos/{owner}/{repo}/releases/latest")
            )
            if release.tag_name:
                return release.tag_name
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.debug(f"No latest release for {owner}/{repo}: {e}")

        try:
            tags = _TAG_LIST.validate_python(self._get_json(f"/repos/{owner}/{repo}/tags"))
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.debug(f"No tags for {owner}/{repo}: {e}")
            return ""

        if tags:
            return tags[0].name
        return ""

    def fetch_readme(self, owner: str, repo: str) -> str:
        """
        Return the decoded README, or "" if the repository has none.

        Raises ``ReadmeError`` when the payload cannot be decoded.
        """
        try:
            response = self._client.get(f"/repos/{owner}/{repo}/readme")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"No README for {owner}/{repo}: {e}")
            return ""

        try:
            readme = GitHubReadme.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ReadmeError(f"failed to parse readme data: {e}") from e

        if readme.encoding != "base64":
            raise ReadmeError(f"unexpected encoding: {readme.encoding}")

        try:
            # GitHub wraps the base64 payload at 60 columns.
            content = base64.b64decode(readme.content, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ReadmeError(f"failed to decode readme: {e}") from e

        return content.decode("utf-8", errors="replace")
