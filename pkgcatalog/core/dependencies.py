from typing import Optional

from pkgcatalog.core.config import Settings
from pkgcatalog.services.github import GitHubClient
from pkgcatalog.services.site_builder import SiteBuilder
from pkgcatalog.storage.markdown_store import MarkdownPackageStore
from pkgcatalog.storage.store import PackageStore

_settings: Optional[Settings] = None
_store: Optional[PackageStore] = None
_github_client: Optional[GitHubClient] = None
_site_builder: Optional[SiteBuilder] = None


def configure(settings: Settings) -> None:
    """Install ``settings`` and drop any objects built from the previous ones."""
    global _settings
    reset()
    _settings = settings


def reset() -> None:
    global _settings, _store, _github_client, _site_builder
    if _github_client is not None:
        _github_client.close()
    _settings = None
    _store = None
    _github_client = None
    _site_builder = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings

def get_store() -> PackageStore:
    global _store
    if _store is None:
        _store = MarkdownPackageStore(get_settings().resolved_content_dir)
    return _store

def get_github_client() -> GitHubClient:
    global _github_client
    if _github_client is None:
        settings = get_settings()
        _github_client = GitHubClient(
            base_url=settings.api_url,
            token=settings.github_token,
            timeout=settings.http_timeout,
        )
    return _github_client

def get_site_builder() -> SiteBuilder:
    global _site_builder
    if _site_builder is None:
        settings = get_settings()
        _site_builder = SiteBuilder(settings.site_dir, settings.hugo_bin)
    return _site_builder
