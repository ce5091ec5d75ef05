"""
Exception types raised by the package catalog.

Every error the tools report to the user derives from ``CatalogError`` so the
command-line entry points can catch one type and exit cleanly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pkgcatalog.domain.models import BatchSummary


class CatalogError(Exception):
    """Base class for all catalog errors."""


class ConfigError(CatalogError):
    """An environment variable holds a value the settings cannot accept."""


class InvalidRepoURL(CatalogError):
    """The repository URL is not one of the recognized GitHub shapes."""

    def __init__(self, url: str):
        super().__init__(f"invalid GitHub URL format: {url}")
        self.url = url


class InvalidPackageName(CatalogError):
    pass


class FrontmatterError(CatalogError):
    """The file does not contain a recoverable frontmatter block."""


class NoFrontmatter(FrontmatterError):
    def __init__(self, message: str = "no frontmatter found"):
        super().__init__(message)


class MalformedFrontmatter(FrontmatterError):
    def __init__(self, message: str = "invalid frontmatter format"):
        super().__init__(message)


class PackageReadError(CatalogError):
    pass


class PackageExists(CatalogError):
    def __init__(self, path):
        super().__init__(f"package file already exists: {path}")
        self.path = path


class WriteFailed(CatalogError):
    pass


class FetchFailed(CatalogError):
    """
    Repository metadata could not be fetched.

    ``status_code`` is set when the API answered with an HTTP error, so a 404
    can be told apart from transport failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class ReadmeError(CatalogError):
    pass


class NoMatchingPackages(CatalogError):
    def __init__(self, names=None):
        super().__init__("no matching packages found")
        self.names = list(names or [])


class PackagesFailed(CatalogError):
    """Raised after a batch update finished with at least one per-file error."""

    def __init__(self, summary: "BatchSummary"):
        super().__init__(f"{summary.errors} packages failed to update")
        self.summary = summary
