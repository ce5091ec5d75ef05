"""
Create a new package entry from its GitHub repository.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pkgcatalog.core.config import Settings
from pkgcatalog.domain.errors import InvalidPackageName, PackageExists, ReadmeError
from pkgcatalog.domain.models import BuildResult, PackageRecord
from pkgcatalog.domain.repo_url import github_url, parse_repo_url
from pkgcatalog.services.github import GitHubClient
from pkgcatalog.services.site_builder import SiteBuilder
from pkgcatalog.storage.store import PackageStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def validate_package_name(name: str) -> None:
    if not name:
        raise InvalidPackageName("package name is required")
    # The name becomes a file name inside the content directory.
    if "/" in name or "\\" in name or name.startswith("."):
        raise InvalidPackageName(f"invalid package name: {name}")


class PackageAdder:
    def __init__(
        self,
        store: PackageStore,
        client: GitHubClient,
        settings: Settings,
        site_builder: Optional[SiteBuilder] = None,
    ):
        self.store = store
        self.client = client
        self.settings = settings
        self.site_builder = site_builder
        self.last_build: Optional[BuildResult] = None

    def add(
        self,
        name: str,
        import_path: Optional[str] = None,
        repo_url: Optional[str] = None,
        author: Optional[str] = None,
        fetch_readme: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> PackageRecord:
        """
        Build a package record from GitHub and write ``<name>.md``.

        ``repo_url`` defaults to ``https://github.com/<default_owner>/<name>``
        and ``import_path`` to ``<import_prefix>/<name>``. An explicit
        ``author`` is kept; otherwise the repository owner is used.
        ``on_progress`` receives a line for each step as it completes.
        """
        progress = on_progress or (lambda message: None)
        validate_package_name(name)

        import_path = import_path or self.settings.default_import_path(name)

        if repo_url:
            owner, repo = parse_repo_url(repo_url)
        else:
            owner, repo = self.settings.default_owner, name
            repo_url = github_url(owner, repo)

        if self.store.exists(name):
            raise PackageExists(self.store.path_for(name))

        now = datetime.now(timezone.utc)
        record = PackageRecord(
            title=name,
            import_path=import_path,
            repo_url=repo_url,
            documentation_url=self.settings.documentation_url(import_path),
            author=author or "",
            created_at=now,
            updated_at=now,
        )

        logger.info(f"Fetching repository metadata for {owner}/{repo}")
        remote = self.client.fetch_repository(owner, repo)

        record.description = remote.description
        if remote.created_at is not None:
            record.created_at = remote.created_at
        if remote.updated_at is not None:
            record.updated_at = remote.updated_at
        if remote.license is not None:
            record.license = remote.license.spdx_id or ""
        if not author:
            record.author = remote.author

        record.version = self.client.fetch_latest_version(owner, repo)
        if record.version:
            progress(f"Found version: {record.version}")
        else:
            logger.warning(f"No release or tag found for {owner}/{repo}")

        if fetch_readme:
            try:
                record.body = self.client.fetch_readme(owner, repo)
            except ReadmeError as e:
                logger.warning(f"Could not fetch README for {owner}/{repo}: {e}")

        self.store.create(record)
        progress(f"✓ Created {self.store.path_for(name)}")

        if self.site_builder is not None:
            progress("Validating site build...")
            self.last_build = self.site_builder.validate()

        return record
