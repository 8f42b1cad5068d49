"""Shared fixtures: unique package names and on-the-fly package archives."""

import sys
import textwrap
import uuid
import zipfile
from pathlib import Path
from typing import Dict, Optional

import pytest


def write_archive(path: Path, files: Dict[str, str]) -> Path:
    """Write a zip archive holding ``files`` (archive name -> source)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, source in files.items():
            archive.writestr(name, textwrap.dedent(source))
    return path


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Write ``files`` as plain source files below ``root``."""
    for name, source in files.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(source))
    return root


@pytest.fixture
def unique_name():
    """
    Factory for top-level package names no other test uses.

    Modules imported under those names are removed from sys.modules when
    the test finishes.
    """
    names = []

    def factory(prefix: str = "app") -> str:
        name = f"{prefix}_{uuid.uuid4().hex[:12]}"
        names.append(name)
        return name

    yield factory

    for module in list(sys.modules):
        if any(module == name or module.startswith(name + ".") for name in names):
            del sys.modules[module]


@pytest.fixture
def make_archive(tmp_path):
    def factory(relative_path: str, files: Dict[str, str]) -> Path:
        return write_archive(tmp_path / relative_path, files)
    return factory


@pytest.fixture
def make_app(make_archive, unique_name, tmp_path):
    """
    Package an application module ``<pkg>.main`` into ``lib/<pkg>.zip``.

    Returns (library directory, package name); the source may refer to the
    package name as ``{pkg}``.
    """
    def factory(source: str, archive: Optional[str] = None):
        package = unique_name()
        archive = archive or f"lib/{package}.zip"
        make_archive(archive, {
            f"{package}/__init__.py": "",
            f"{package}/main.py": textwrap.dedent(source).replace("{pkg}", package),
        })
        return tmp_path / "lib", package
    return factory
