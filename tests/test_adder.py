"""Tests for adding new packages."""

from datetime import datetime, timezone

import pytest

from conftest import CREATED, UPDATED, FakeSiteBuilder
from pkgcatalog.core.config import Settings
from pkgcatalog.domain.errors import (
    FetchFailed,
    InvalidPackageName,
    InvalidRepoURL,
    PackageExists,
    ReadmeError,
)
from pkgcatalog.services.adder import PackageAdder


@pytest.fixture
def settings(tmp_path, content_dir):
    return Settings(site_dir=tmp_path, content_dir=content_dir)


@pytest.fixture
def adder(store, github, settings):
    return PackageAdder(store=store, client=github, settings=settings)


def test_add_with_defaults(adder, github, store):
    github.add_repository("ngs", "freecal", version="v1.2.0", readme="# freecal\n", description="Free slots")

    record = adder.add("freecal")

    assert record.import_path == "go.ngs.io/freecal"
    assert record.repo_url == "https://github.com/ngs/freecal"
    assert record.documentation_url == "https://pkg.go.dev/go.ngs.io/freecal"
    assert record.description == "Free slots"
    assert record.license == "MIT"
    assert record.author == "ngs"
    assert record.version == "v1.2.0"
    assert record.created_at == CREATED
    assert record.updated_at == UPDATED
    assert record.body == "# freecal\n"
    assert store.read(store.path_for("freecal")) == record


def test_add_with_explicit_options(adder, github, store):
    github.add_repository("someone", "tools")

    record = adder.add(
        "tools",
        import_path="example.com/x/tools",
        repo_url="git@github.com:someone/tools.git",
        author="Jane Doe",
    )

    assert record.import_path == "example.com/x/tools"
    assert record.repo_url == "git@github.com:someone/tools.git"
    assert record.documentation_url == "https://pkg.go.dev/example.com/x/tools"
    assert record.author == "Jane Doe"
    assert store.exists("tools")


def test_add_uses_owner_display_name(adder, github):
    github.add_repository("ngs", "freecal", owner={"login": "ngs", "name": "Atsushi Nagase"})
    assert adder.add("freecal").author == "Atsushi Nagase"


def test_add_without_license_leaves_it_empty(adder, github):
    github.add_repository("ngs", "freecal", license=None)
    assert adder.add("freecal").license == ""


def test_add_without_remote_timestamps_uses_now(adder, github):
    github.add_repository("ngs", "freecal", created_at=None, updated_at=None)
    before = datetime.now(timezone.utc)

    record = adder.add("freecal")

    assert record.created_at >= before
    assert record.created_at == record.updated_at


def test_add_fails_for_missing_repository(adder, store):
    with pytest.raises(FetchFailed):
        adder.add("ghost")
    assert not store.exists("ghost")


def test_add_refuses_existing_package(adder, github, make_package):
    github.add_repository("ngs", "freecal")
    make_package("freecal", description="keep me")

    with pytest.raises(PackageExists):
        adder.add("freecal")
    assert github.calls == []


@pytest.mark.parametrize("name", ["", "../escape", "a/b", ".hidden"])
def test_add_rejects_bad_names(adder, name):
    with pytest.raises(InvalidPackageName):
        adder.add(name)


def test_add_rejects_bad_repo_url(adder):
    with pytest.raises(InvalidRepoURL):
        adder.add("freecal", repo_url="https://bitbucket.org/ngs/freecal")


def test_readme_errors_are_not_fatal(adder, github):
    github.add_repository("ngs", "freecal", readme=ReadmeError("unexpected encoding: utf-8"))
    record = adder.add("freecal")
    assert record.body == ""


def test_readme_can_be_skipped(adder, github):
    github.add_repository("ngs", "freecal", readme="# freecal\n")
    record = adder.add("freecal", fetch_readme=False)
    assert record.body == ""
    assert ("readme", "ngs", "freecal") not in github.calls


def test_site_build_runs_after_add(store, github, settings):
    github.add_repository("ngs", "freecal")
    builder = FakeSiteBuilder(ok=False)
    adder = PackageAdder(store=store, client=github, settings=settings, site_builder=builder)

    adder.add("freecal")

    assert builder.runs == 1
    assert adder.last_build.ok is False
    assert store.exists("freecal")


def test_settings_drive_defaults(store, github, tmp_path, content_dir):
    settings = Settings(
        site_dir=tmp_path,
        content_dir=content_dir,
        import_prefix="example.org/go",
        default_owner="acme",
        docs_url_template="https://docs.example.org/{import_path}",
    )
    github.add_repository("acme", "widget")

    record = PackageAdder(store=store, client=github, settings=settings).add("widget")

    assert record.repo_url == "https://github.com/acme/widget"
    assert record.import_path == "example.org/go/widget"
    assert record.documentation_url == "https://docs.example.org/example.org/go/widget"


def test_progress_is_reported_in_step_order(store, github, settings):
    github.add_repository("ngs", "freecal", version="v1.2.0")
    adder = PackageAdder(store=store, client=github, settings=settings, site_builder=FakeSiteBuilder())
    lines = []

    adder.add("freecal", on_progress=lines.append)

    assert lines == [
        "Found version: v1.2.0",
        f"✓ Created {store.path_for('freecal')}",
        "Validating site build...",
    ]


def test_progress_without_version_or_build(adder, github, store):
    github.add_repository("ngs", "freecal")
    lines = []

    adder.add("freecal", on_progress=lines.append)

    assert lines == [f"✓ Created {store.path_for('freecal')}"]
