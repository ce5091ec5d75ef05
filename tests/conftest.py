"""
Shared pytest fixtures for the pkgcatalog test suite.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from pkgcatalog.domain.errors import FetchFailed
from pkgcatalog.domain.models import BuildResult, GitHubRepository, PackageRecord
from pkgcatalog.storage.frontmatter import write_package
from pkgcatalog.storage.markdown_store import MarkdownPackageStore


CREATED = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
UPDATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FakeGitHubClient:
    """
    In-memory stand-in for GitHubClient.

    Unknown repositories behave like a 404 from the API.
    """

    def __init__(self):
        self.repositories = {}
        self.versions = {}
        self.readmes = {}
        self.calls = []

    def add_repository(self, owner, repo, /, version="", readme="", **fields):
        data = {
            "name": repo,
            "description": "A package",
            "created_at": CREATED.isoformat(),
            "updated_at": UPDATED.isoformat(),
            "license": {"key": "mit", "name": "MIT License", "spdx_id": "MIT"},
            "owner": {"login": owner},
        }
        data.update(fields)
        self.repositories[(owner, repo)] = GitHubRepository.model_validate(data)
        self.versions[(owner, repo)] = version
        self.readmes[(owner, repo)] = readme

    def fetch_repository(self, owner, repo):
        self.calls.append(("repository", owner, repo))
        try:
            return self.repositories[(owner, repo)]
        except KeyError:
            raise FetchFailed("failed to fetch repository: HTTP 404", status_code=404)

    def fetch_latest_version(self, owner, repo):
        self.calls.append(("version", owner, repo))
        return self.versions.get((owner, repo), "")

    def fetch_readme(self, owner, repo):
        self.calls.append(("readme", owner, repo))
        readme = self.readmes.get((owner, repo), "")
        if isinstance(readme, Exception):
            raise readme
        return readme


class FakeSiteBuilder:
    def __init__(self, ok=True):
        self.ok = ok
        self.runs = 0

    def validate(self):
        self.runs += 1
        return BuildResult(ok=self.ok, returncode=0 if self.ok else 255, output="" if self.ok else "boom")


@pytest.fixture
def content_dir(tmp_path) -> Path:
    d = tmp_path / "content"
    d.mkdir()
    return d


@pytest.fixture
def store(content_dir) -> MarkdownPackageStore:
    return MarkdownPackageStore(content_dir)


@pytest.fixture
def github():
    return FakeGitHubClient()


@pytest.fixture
def site_builder():
    return FakeSiteBuilder()


@pytest.fixture
def make_package(content_dir):
    """Write a package file and return its path."""

    def _make(title, body="", **fields) -> Path:
        record = PackageRecord(title=title, body=body, **fields)
        path = content_dir / f"{title}.md"
        write_package(path, record)
        return path

    return _make

