"""Tests for listing, resolving and creating package files."""

import pytest

from pkgcatalog.domain.errors import NoMatchingPackages, PackageExists, PackageReadError
from pkgcatalog.domain.models import PackageRecord
from pkgcatalog.storage.markdown_store import list_package_files, package_name


def test_list_skips_index_non_markdown_and_directories(content_dir, make_package):
    make_package("alpha")
    make_package("beta")
    (content_dir / "_index.md").write_text("---\ntitle: Packages\n---\n")
    (content_dir / "notes.txt").write_text("ignore me")
    (content_dir / "sub.md").mkdir()
    (content_dir / "nested").mkdir()
    (content_dir / "nested" / "gamma.md").write_text("---\ntitle: gamma\n---\n")

    names = [p.name for p in list_package_files(content_dir)]
    assert names == ["alpha.md", "beta.md"]


def test_list_missing_directory(tmp_path):
    with pytest.raises(PackageReadError):
        list_package_files(tmp_path / "missing")


def test_package_name_strips_suffix(content_dir):
    assert package_name(content_dir / "freecal.md") == "freecal"


def test_resolve_all_when_no_names(store, make_package):
    make_package("alpha")
    make_package("beta")
    assert [p.name for p in store.resolve([])] == ["alpha.md", "beta.md"]


def test_resolve_filters_requested(store, make_package):
    make_package("alpha")
    make_package("beta")
    make_package("gamma")
    assert [p.name for p in store.resolve(["gamma", "alpha", "unknown"])] == ["alpha.md", "gamma.md"]


def test_resolve_no_matches(store, make_package):
    make_package("alpha")
    with pytest.raises(NoMatchingPackages) as exc_info:
        store.resolve(["nope"])
    assert str(exc_info.value) == "no matching packages found"


def test_resolve_empty_directory_returns_nothing(store):
    assert store.resolve([]) == []


def test_create_writes_new_file(store, content_dir):
    path = store.create(PackageRecord(title="freecal", repo_url="https://github.com/ngs/freecal"))
    assert path == content_dir / "freecal.md"
    assert store.exists("freecal")
    assert store.read(path).repo_url == "https://github.com/ngs/freecal"


def test_create_refuses_existing_title(store, make_package):
    path = make_package("freecal", description="original")
    with pytest.raises(PackageExists):
        store.create(PackageRecord(title="freecal", description="replacement"))
    assert store.read(path).description == "original"
