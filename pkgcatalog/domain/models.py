"""
Pydantic models for the package catalog.

This module defines the data models used throughout the tools, including:
- The package record stored as frontmatter in each content file
- Typed GitHub REST API responses, validated where the JSON is decoded
- Per-package update results and the batch summary

All models use Pydantic for validation, serialization, and type safety.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Package Record
# ---------------------------------------------------------------------------


# Frontmatter key order; ``body`` is never part of the structured block.
FRONTMATTER_FIELDS = (
    "title",
    "import_path",
    "repo_url",
    "description",
    "version",
    "documentation_url",
    "license",
    "author",
    "created_at",
    "updated_at",
)


class PackageRecord(BaseModel):
    """
    One cataloged package.

    Persisted in: <CONTENT_DIR>/<title>.md, as YAML frontmatter followed by
    an optional free-text body (usually the README).
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    title: str = Field(
        description="Display name; also the file's base name within the content directory.",
    )
    import_path: str = Field(
        default="",
        description="Go import path served by the site (e.g. 'go.ngs.io/freecal').",
    )
    repo_url: str = Field(
        default="",
        description="Source repository URL. Packages without one are never synced.",
    )
    description: str = Field(default="", description="Repository description.")
    version: str = Field(default="", description="Latest release or tag name.")
    documentation_url: str = Field(
        default="",
        description="Derived from import_path when the package is added; not resynced.",
    )
    license: str = Field(default="", description="SPDX license identifier.")
    author: str = Field(default="", description="Repository owner display name or login.")
    created_at: Optional[datetime] = Field(
        default=None,
        description="Repository creation time as reported by GitHub.",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Repository last-update time as reported by GitHub.",
    )
    body: str = Field(
        default="",
        exclude=True,
        description="Content after the frontmatter block, preserved verbatim.",
    )

    @field_validator(
        "import_path",
        "repo_url",
        "description",
        "version",
        "documentation_url",
        "license",
        "author",
        mode="before",
    )
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_are_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

    def frontmatter(self) -> dict:
        """Return the structured fields in frontmatter order."""
        return {name: getattr(self, name) for name in FRONTMATTER_FIELDS}


# ---------------------------------------------------------------------------
# GitHub API Response Models
# ---------------------------------------------------------------------------


class GitHubLicense(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: Optional[str] = None
    name: Optional[str] = None
    spdx_id: Optional[str] = None


class GitHubOwner(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str = ""
    name: Optional[str] = Field(
        default=None,
        description="Display name. Only present on user endpoints, usually absent on repository payloads.",
    )


class GitHubRepository(BaseModel):
    """
    Subset of ``GET /repos/{owner}/{repo}`` used by the catalog.

    ``license`` is null for repositories without a detected license and is
    kept as ``None`` rather than an empty object.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    license: Optional[GitHubLicense] = None
    topics: List[str] = Field(default_factory=list)
    owner: GitHubOwner = Field(default_factory=GitHubOwner)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value):
        return "" if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_are_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

    @property
    def author(self) -> str:
        """Owner display name, falling back to the login."""
        return self.owner.name or self.owner.login


class GitHubRelease(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tag_name: str = ""


class GitHubTag(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""


class GitHubReadme(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str = ""
    encoding: str = ""


# ---------------------------------------------------------------------------
# Update Results
# ---------------------------------------------------------------------------


class UpdateStatus(str, Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"
    MISSING = "missing"


class UpdateResult(BaseModel):
    """Outcome of refreshing a single package file."""

    name: str
    status: UpdateStatus
    message: str = ""
    error: Optional[str] = Field(
        default=None,
        description="Text of the underlying exception for error outcomes.",
    )


class BuildResult(BaseModel):
    """Outcome of the external site build used as a sanity check."""

    ok: bool
    returncode: Optional[int] = None
    output: str = ""


class BatchSummary(BaseModel):
    results: List[UpdateResult] = Field(default_factory=list)
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    build: Optional[BuildResult] = None

    def summary_line(self) -> str:
        line = f"Summary: {self.updated} updated"
        if self.skipped > 0:
            line += f", {self.skipped} skipped"
        if self.errors > 0:
            line += f", {self.errors} errors"
        return line
