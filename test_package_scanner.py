#!/usr/bin/env python3
"""Tests for recursive package archive discovery."""

import os
from pathlib import Path

import pytest

from munchausen.core.exceptions import ScanFailure
from munchausen.core.package_scanner import ARCHIVE_SUFFIXES, scan


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_finds_archives_at_any_depth(tmp_path):
    expected = {
        touch(tmp_path / "a.zip"),
        touch(tmp_path / "x" / "b.whl"),
        touch(tmp_path / "x" / "y" / "z" / "c.egg"),
        touch(tmp_path / "x" / "y" / "d.pyz"),
    }
    touch(tmp_path / "readme.txt")
    touch(tmp_path / "x" / "legacy.jar")
    touch(tmp_path / "x" / "y" / "module.py")

    found = scan(tmp_path)

    assert len(found) == 4
    assert set(found) == expected
    for path in found:
        assert path.is_file()
        assert path.name.endswith(ARCHIVE_SUFFIXES)


def test_directory_named_like_an_archive_is_recursed_not_collected(tmp_path):
    touch(tmp_path / "looks.zip" / "inner.zip")

    assert scan(tmp_path) == [tmp_path / "looks.zip" / "inner.zip"]


def test_missing_root_contributes_nothing(tmp_path):
    assert scan(tmp_path / "does-not-exist") == []


def test_root_that_is_a_file_contributes_nothing(tmp_path):
    archive = touch(tmp_path / "lonely.zip")

    assert scan(archive) == []


def test_suffix_match_is_case_sensitive(tmp_path):
    touch(tmp_path / "upper.ZIP")

    assert scan(tmp_path) == []


def test_custom_suffixes(tmp_path):
    touch(tmp_path / "a.zip")
    jar = touch(tmp_path / "lib" / "b.jar")

    assert scan(tmp_path, suffixes=[".jar"]) == [jar]


def test_each_scan_is_a_fresh_traversal(tmp_path):
    touch(tmp_path / "a.zip")
    first = scan(tmp_path)
    touch(tmp_path / "b.zip")

    assert len(first) == 1
    assert len(scan(tmp_path)) == 2


def test_symlinked_directory_cycle_is_visited_once(tmp_path):
    archive = touch(tmp_path / "a.zip")
    (tmp_path / "sub").mkdir()
    os.symlink(tmp_path, tmp_path / "sub" / "loop")

    assert scan(tmp_path) == [archive]


def test_unreadable_directory_raises_scan_failure(tmp_path, monkeypatch):
    touch(tmp_path / "a.zip")
    locked = tmp_path / "locked"
    locked.mkdir()
    real_scandir = os.scandir

    def scandir(path):
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    with pytest.raises(ScanFailure) as excinfo:
        scan(tmp_path)

    assert "locked" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_root_that_cannot_be_checked_raises_scan_failure(tmp_path, monkeypatch):
    root = tmp_path / "private" / "lib"
    real_is_dir = Path.is_dir

    def is_dir(self, *args, **kwargs):
        if self == root:
            raise PermissionError(13, "Permission denied", str(self))
        return real_is_dir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "is_dir", is_dir)

    with pytest.raises(ScanFailure) as excinfo:
        scan(root)

    assert "private" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, PermissionError)
