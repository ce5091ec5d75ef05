"""
Refresh package files from GitHub metadata.

Each package file is handled on its own: read it, fetch the repository,
diff the fields GitHub is authoritative for, and write the file back if
anything changed. One package failing never stops the rest of the batch.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from pkgcatalog.domain.errors import CatalogError, PackagesFailed
from pkgcatalog.domain.models import (
    BatchSummary,
    GitHubRepository,
    PackageRecord,
    UpdateResult,
    UpdateStatus,
)
from pkgcatalog.domain.repo_url import parse_repo_url
from pkgcatalog.services.github import GitHubClient
from pkgcatalog.services.site_builder import SiteBuilder
from pkgcatalog.storage.markdown_store import package_name
from pkgcatalog.storage.store import PackageStore

logger = logging.getLogger(__name__)

ResultCallback = Callable[[UpdateResult], None]


def apply_repository(
    record: PackageRecord,
    remote: GitHubRepository,
    update_author: bool = False,
) -> List[str]:
    """
    Copy GitHub-owned fields onto ``record`` and return the names of the
    fields that changed.
    """
    changes: List[str] = []

    if record.created_at != remote.created_at:
        record.created_at = remote.created_at
        changes.append("created_at")
    if record.updated_at != remote.updated_at:
        record.updated_at = remote.updated_at
        changes.append("updated_at")

    if record.description != remote.description:
        record.description = remote.description
        changes.append("description" if remote.description else "description cleared")

    # A repository without a detected license keeps whatever is on file.
    if remote.license is not None:
        spdx_id = remote.license.spdx_id or ""
        if record.license != spdx_id:
            record.license = spdx_id
            changes.append("license")

    if update_author:
        author = remote.author
        if record.author != author:
            record.author = author
            changes.append("author")

    return changes


def apply_version(record: PackageRecord, version: str) -> Optional[str]:
    """Set a newly discovered version and describe the change, if any."""
    if not version or record.version == version:
        return None

    old_version = record.version
    record.version = version
    if not old_version:
        return f"version: {version}"
    return f"version: {old_version} → {version}"


class PackageUpdater:
    def __init__(
        self,
        store: PackageStore,
        client: GitHubClient,
        site_builder: Optional[SiteBuilder] = None,
        dry_run: bool = False,
        update_author: bool = False,
        update_missing: bool = False,
    ):
        self.store = store
        self.client = client
        self.site_builder = site_builder
        self.dry_run = dry_run
        self.update_author = update_author
        # Accepted for the MISSING outcome; fetch failures are still reported as errors.
        self.update_missing = update_missing

    def process_package(self, file_path: Path, name: Optional[str] = None) -> UpdateResult:
        name = name or package_name(file_path)

        try:
            record = self.store.read(file_path)
        except CatalogError as e:
            return _error(name, f"failed to read package: {e}", e)

        if not record.repo_url:
            return UpdateResult(name=name, status=UpdateStatus.SKIPPED, message="no repository URL")

        try:
            owner, repo = parse_repo_url(record.repo_url)
        except CatalogError as e:
            return _error(name, f"invalid repository URL: {e}", e)

        try:
            remote = self.client.fetch_repository(owner, repo)
        except CatalogError as e:
            # Always an error, including 404s: a package must have a backing repository.
            return _error(name, f"failed to fetch repository {record.repo_url}: {e}", e)

        changes = apply_repository(record, remote, update_author=self.update_author)

        version_change = apply_version(record, self.client.fetch_latest_version(owner, repo))
        if version_change:
            changes.append(version_change)

        if not changes:
            return UpdateResult(name=name, status=UpdateStatus.SKIPPED, message="already up to date")

        if not self.dry_run:
            try:
                self.store.write(file_path, record)
            except CatalogError as e:
                return _error(name, f"failed to write package: {e}", e)

        return UpdateResult(name=name, status=UpdateStatus.UPDATED, message=", ".join(changes))

    def update_packages(
        self,
        names: Sequence[str] = (),
        on_result: Optional[ResultCallback] = None,
    ) -> BatchSummary:
        """
        Refresh the named packages, or every package when ``names`` is empty.

        Raises ``NoMatchingPackages`` before touching anything if none of the
        names exist, and ``PackagesFailed`` after the whole batch ran if any
        package ended in error.
        """
        package_files = self.store.resolve(names)
        summary = BatchSummary()

        for file_path in package_files:
            result = self.process_package(file_path)
            summary.results.append(result)
            logger.info(f"{result.name}: {result.status.value} - {result.message}")

            if result.status == UpdateStatus.UPDATED:
                summary.updated += 1
            elif result.status == UpdateStatus.SKIPPED:
                summary.skipped += 1
            elif result.status == UpdateStatus.ERROR:
                summary.errors += 1
            elif result.status == UpdateStatus.MISSING:
                if self.update_missing:
                    summary.updated += 1
                else:
                    summary.skipped += 1

            if on_result is not None:
                on_result(result)

        if not self.dry_run and summary.updated > 0 and self.site_builder is not None:
            summary.build = self.site_builder.validate()

        if summary.errors > 0:
            raise PackagesFailed(summary)
        return summary


def _error(name: str, message: str, exc: Exception) -> UpdateResult:
    return UpdateResult(name=name, status=UpdateStatus.ERROR, message=message, error=str(exc))
