"""
Runtime settings for the catalog tools.

Settings are read from environment variables; command-line flags override
individual fields via ``Settings.model_copy(update=...)``.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from pkgcatalog.domain.errors import ConfigError

SITE_DIR_ENV_VAR = "PKGCATALOG_SITE_DIR"
CONTENT_DIR_ENV_VAR = "PKGCATALOG_CONTENT_DIR"
IMPORT_PREFIX_ENV_VAR = "PKGCATALOG_IMPORT_PREFIX"
DEFAULT_OWNER_ENV_VAR = "PKGCATALOG_DEFAULT_OWNER"
DOCS_URL_TEMPLATE_ENV_VAR = "PKGCATALOG_DOCS_URL_TEMPLATE"
HUGO_BIN_ENV_VAR = "PKGCATALOG_HUGO_BIN"
API_URL_ENV_VAR = "PKGCATALOG_API_URL"
HTTP_TIMEOUT_ENV_VAR = "PKGCATALOG_HTTP_TIMEOUT"
LOG_LEVEL_ENV_VAR = "PKGCATALOG_LOG_LEVEL"
# Checked in order; the first non-empty one wins.
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")

DEFAULT_CONTENT_SUBDIR = "content"


class Settings(BaseModel):
    """
    Configuration shared by the add and update commands.
    """

    site_dir: Path = Field(
        default_factory=Path.cwd,
        description="Root of the Hugo site; the site build runs here.",
    )
    content_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding one Markdown file per package. Defaults to '<site_dir>/content'.",
    )
    import_prefix: str = Field(
        default="go.ngs.io",
        description="Prefix for default import paths ('<import_prefix>/<name>').",
    )
    default_owner: str = Field(
        default="ngs",
        description="GitHub owner assumed when a package is added without a repository URL.",
    )
    docs_url_template: str = Field(
        default="https://pkg.go.dev/{import_path}",
        description="Template for documentation_url, formatted with the import path.",
    )
    hugo_bin: str = Field(
        default="hugo",
        description="Executable used to validate the site build.",
    )
    api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API.",
    )
    github_token: Optional[str] = Field(
        default=None,
        description="Token sent as a bearer credential. Anonymous requests are heavily rate limited.",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for each API request.",
    )
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values: dict = {}

        site_dir = env.get(SITE_DIR_ENV_VAR)
        if site_dir:
            values["site_dir"] = Path(site_dir).expanduser()
        content_dir = env.get(CONTENT_DIR_ENV_VAR)
        if content_dir:
            values["content_dir"] = Path(content_dir).expanduser()

        for var, field in (
            (IMPORT_PREFIX_ENV_VAR, "import_prefix"),
            (DEFAULT_OWNER_ENV_VAR, "default_owner"),
            (DOCS_URL_TEMPLATE_ENV_VAR, "docs_url_template"),
            (HUGO_BIN_ENV_VAR, "hugo_bin"),
            (API_URL_ENV_VAR, "api_url"),
            (HTTP_TIMEOUT_ENV_VAR, "http_timeout"),
            (LOG_LEVEL_ENV_VAR, "log_level"),
        ):
            if env.get(var):
                values[field] = env[var]

        for var in TOKEN_ENV_VARS:
            if env.get(var):
                values["github_token"] = env[var]
                break

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {e}") from e

    @property
    def resolved_content_dir(self) -> Path:
        if self.content_dir is not None:
            return self.content_dir
        return self.site_dir / DEFAULT_CONTENT_SUBDIR

    def default_import_path(self, name: str) -> str:
        return f"{self.import_prefix}/{name}"

    def documentation_url(self, import_path: str) -> str:
        return self.docs_url_template.format(import_path=import_path)
