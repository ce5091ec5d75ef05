"""Tests for the Hugo build check."""

import os
import stat
import sys

import pytest

from pkgcatalog.services.site_builder import SiteBuilder

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses a shell script as fake hugo")


def fake_hugo(tmp_path, script: str):
    path = tmp_path / "hugo"
    path.write_text("#!/bin/sh\n" + script)
    path.chmod(path.stat().st_mode | stat.S_IEXEC)
    return str(path)


def test_successful_build_captures_output(tmp_path):
    hugo = fake_hugo(tmp_path, 'echo "args: $@"\necho "cwd: $(pwd)"\n')
    result = SiteBuilder(tmp_path, hugo_bin=hugo).validate()

    assert result.ok
    assert result.returncode == 0
    assert "args: --gc --minify" in result.output
    assert f"cwd: {os.path.realpath(tmp_path)}" in result.output


def test_failed_build_merges_stderr(tmp_path):
    hugo = fake_hugo(tmp_path, 'echo "template error" >&2\nexit 3\n')
    result = SiteBuilder(tmp_path, hugo_bin=hugo).validate()

    assert not result.ok
    assert result.returncode == 3
    assert "template error" in result.output


def test_missing_binary_is_reported_not_raised(tmp_path):
    result = SiteBuilder(tmp_path, hugo_bin=str(tmp_path / "no-such-hugo")).validate()

    assert not result.ok
    assert result.returncode is None
    assert result.output
