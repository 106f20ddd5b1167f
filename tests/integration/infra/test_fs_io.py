from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, data directory resolution, directory
listing and the on-disk FileResolver.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from codeminifier4ai.infra.fs import (
    DirectoryResolver,
    FileResolver,
    get_user_data_dir,
    list_relative_files,
    normalize_path,
    to_relative_posix,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "CodeMinifier4AI" in path


def test_get_user_data_dir_unix() -> None:
    """Verify resolution of ~/.codeminifier4ai on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                normalized_path = path.replace("\\", "/")
                assert normalized_path.endswith("/home/testuser/.codeminifier4ai")


def test_normalize_path_expansion() -> None:
    """Verify expansion of environment variables and the empty fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback="/tmp") == os.path.abspath("/tmp")


@pytest.mark.parametrize("raw, expected", [
    ("src\\app.js", "src/app.js"),
    ("./src/app.js", "src/app.js"),
    ("././a.py", "a.py"),
    ("lib/util.ts", "lib/util.ts"),
])
def test_to_relative_posix(raw: str, expected: str) -> None:
    assert to_relative_posix(raw) == expected

# -----------------------------------------------------------------------------
# DIRECTORY LISTING
# -----------------------------------------------------------------------------

def test_list_relative_files_skips_hidden_and_tooling(sample_project: Path) -> None:
    (sample_project / "node_modules" / "pkg").mkdir(parents=True)
    (sample_project / "node_modules" / "pkg" / "index.js").write_text("x", encoding="utf-8")
    (sample_project / ".git").mkdir()
    (sample_project / ".git" / "HEAD").write_text("ref", encoding="utf-8")

    assert list_relative_files(str(sample_project)) == [
        "README.md",
        "assets/logo.png",
        "data.json",
        "src/app.js",
        "src/util.py",
    ]

# -----------------------------------------------------------------------------
# FILE RESOLUTION
# -----------------------------------------------------------------------------

def test_directory_resolver_reads_relative_paths(sample_project: Path) -> None:
    resolver = DirectoryResolver(str(sample_project))

    assert isinstance(resolver, FileResolver)
    assert resolver.read_text("src/app.js").startswith("import x from 'y';")


def test_directory_resolver_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        DirectoryResolver(str(tmp_path)).read_text("ghost.js")


def test_directory_resolver_rejects_directories(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()

    with pytest.raises(IsADirectoryError):
        DirectoryResolver(str(tmp_path)).read_text("pkg")


def test_directory_resolver_replaces_invalid_utf8(tmp_path: Path) -> None:
    (tmp_path / "latin.txt").write_bytes(b"caf\xe9")

    assert DirectoryResolver(str(tmp_path)).read_text("latin.txt") == "caf\ufffd"


def test_directory_resolver_load_builds_source_file(sample_project: Path) -> None:
    source = DirectoryResolver(str(sample_project)).load("src\\util.py")

    assert source.path == "src/util.py"
    assert source.content.startswith('"""Helpers."""')
    assert source.size_bytes == (sample_project / "src" / "util.py").stat().st_size
