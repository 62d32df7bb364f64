from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path resolution, relative path rendering and JSON persistence.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from projectscope.infra.fs import (
    read_json_safely,
    relative_posix,
    resolve_absolute_path,
    write_json_safely,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_resolve_relative_against_base(tmp_path: Path) -> None:
    assert resolve_absolute_path("sub/../dir", str(tmp_path)) == str(tmp_path / "dir")
    assert resolve_absolute_path("", str(tmp_path)) == str(tmp_path)
    assert resolve_absolute_path(None, str(tmp_path)) == str(tmp_path)


def test_resolve_expands_environment(tmp_path: Path) -> None:
    with patch.dict(os.environ, {"PS_TEST_DIR": "my_folder"}):
        resolved = resolve_absolute_path("$PS_TEST_DIR/data", str(tmp_path))
    assert resolved == str(tmp_path / "my_folder" / "data")


def test_resolve_absolute_path_is_kept(tmp_path: Path) -> None:
    assert resolve_absolute_path(str(tmp_path / "x"), "/elsewhere") == str(tmp_path / "x")


def test_relative_posix(tmp_path: Path) -> None:
    target = str(tmp_path / "a" / "b.json")
    assert relative_posix(target, str(tmp_path)) == "a/b.json"
    assert relative_posix(str(tmp_path), str(tmp_path)) == "."


# -----------------------------------------------------------------------------
# JSON PERSISTENCE TESTS
# -----------------------------------------------------------------------------

def test_write_and_read_json(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "doc.json"

    path = write_json_safely(str(target), {"name": "café", "n": 1})

    assert path == str(target)
    text = target.read_text(encoding="utf-8")
    assert "café" in text
    assert text.endswith("\n")
    assert read_json_safely(str(target)) == {"name": "café", "n": 1}


def test_read_missing_json_returns_none(tmp_path: Path) -> None:
    assert read_json_safely(str(tmp_path / "none.json")) is None


def test_read_invalid_json_raises_value_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse JSON"):
        read_json_safely(str(bad))
