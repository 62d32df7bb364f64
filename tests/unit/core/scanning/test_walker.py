from __future__ import annotations

"""
Unit tests for the Bounded Directory Walker.

Verifies:
1. Deterministic, name-sorted output.
2. Depth and entry-cap truncation.
3. Statistics consistency (histogram vs. file totals).
4. Symlink handling without following links.
5. Degradation of unreadable directories into warnings.
6. Fatal errors for unusable roots.
"""

import os
from pathlib import Path
from typing import List
from unittest.mock import patch

import pytest

from projectscope.core.scanning.walker import walk
from projectscope.domain.errors import ProjectScanError
from projectscope.domain.structure_models import ScanOptions, StructureNode


def _opts(depth: int = 3, entries: int = 60, **kwargs) -> ScanOptions:
    return ScanOptions(max_depth=depth, max_entries_per_directory=entries, **kwargs)


def _names(node: StructureNode) -> List[str]:
    return [c.name for c in node.children or []]


# -----------------------------------------------------------------------------
# Structure and Ordering
# -----------------------------------------------------------------------------

def test_walk_sorted_and_relative_paths(tmp_path: Path) -> None:
    (tmp_path / "b_dir").mkdir()
    (tmp_path / "b_dir" / "inner.py").write_text("", encoding="utf-8")
    (tmp_path / "a.txt").write_text("", encoding="utf-8")
    (tmp_path / "c.md").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts())
    tree = result.tree

    assert tree.path == "."
    assert tree.name == tmp_path.name
    assert _names(tree) == ["a.txt", "b_dir", "c.md"]

    b_dir = tree.children[1]
    assert b_dir.kind == "directory"
    assert b_dir.children[0].path == "b_dir/inner.py"
    assert b_dir.children[0].extension == "py"
    assert result.warnings == []


def test_walk_is_deterministic(tmp_path: Path) -> None:
    for name in ("zeta", "alpha", "Mid"):
        (tmp_path / name).mkdir()
        (tmp_path / name / "f.ts").write_text("", encoding="utf-8")

    first = walk(str(tmp_path), _opts())
    second = walk(str(tmp_path), _opts())

    assert first.tree.to_dict() == second.tree.to_dict()
    assert first.stats.to_dict() == second.stats.to_dict()


def test_walk_skips_default_and_hidden_entries(tmp_path: Path) -> None:
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / ".git").mkdir()
    (tmp_path / ".env").write_text("A=1", encoding="utf-8")
    (tmp_path / "main.py").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts())
    assert _names(result.tree) == ["main.py"]

    with_hidden = walk(str(tmp_path), _opts(include_hidden=True))
    assert _names(with_hidden.tree) == [".env", "main.py"]
    assert with_hidden.stats.extensions[".env"] == 1


# -----------------------------------------------------------------------------
# Truncation
# -----------------------------------------------------------------------------

def test_depth_one_truncates_child_directories(tmp_path: Path) -> None:
    """A subdirectory at the depth limit is a truncated leaf with no children."""
    (tmp_path / "src" / "nested" / "deeper").mkdir(parents=True)
    (tmp_path / "src" / "nested" / "deeper" / "x.ts").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts(depth=1))
    tree = result.tree

    assert len(tree.children) == 1
    src = tree.children[0]
    assert src.name == "src"
    assert src.truncated is True
    assert src.children is None
    # The parent carries the flag as well
    assert tree.truncated is True
    assert result.stats.total_directories == 2
    assert result.stats.total_files == 0


@pytest.mark.parametrize("max_depth", [2, 3])
def test_depth_limit_holds_throughout_tree(tmp_path: Path, max_depth: int) -> None:
    """Directories at max_depth are truncated leaves; nothing deeper is emitted."""
    (tmp_path / "l1" / "l2" / "l3" / "l4" / "l5").mkdir(parents=True)
    (tmp_path / "l1" / "side" / "deep").mkdir(parents=True)
    (tmp_path / "l1" / "l2" / "l3" / "l4" / "l5" / "leaf.ts").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts(depth=max_depth))

    at_limit: List[StructureNode] = []

    def visit(node: StructureNode, depth: int) -> None:
        assert depth <= max_depth, f"{node.path} emitted beyond the depth limit"
        if depth == max_depth:
            at_limit.append(node)
            assert node.truncated is True
            assert node.children is None
        for child in node.children or []:
            visit(child, depth + 1)

    visit(result.tree, 0)

    assert at_limit, "no directory reached the depth limit"
    assert all(n.is_directory for n in at_limit)
    assert result.stats.total_files == 0


def test_entry_cap_keeps_first_entries_by_name(tmp_path: Path) -> None:
    for i in range(5):
        (tmp_path / f"file_{i}.txt").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts(entries=2))

    assert _names(result.tree) == ["file_0.txt", "file_1.txt"]
    assert result.tree.truncated is True
    assert result.stats.total_files == 2


def test_entry_cap_counts_only_non_ignored_entries(tmp_path: Path) -> None:
    (tmp_path / "node_modules").mkdir()
    (tmp_path / ".cache").mkdir()
    (tmp_path / "a.py").write_text("", encoding="utf-8")
    (tmp_path / "b.py").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts(entries=2))

    assert _names(result.tree) == ["a.py", "b.py"]
    assert result.tree.truncated is False


def test_untruncated_directory_lists_everything(tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("", encoding="utf-8")
    result = walk(str(tmp_path), _opts())
    assert result.tree.truncated is False
    assert result.tree.children is not None


# -----------------------------------------------------------------------------
# Statistics
# -----------------------------------------------------------------------------

def test_histogram_sum_matches_file_total(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "index.ts").write_text("", encoding="utf-8")
    (tmp_path / "src" / "App.TSX").write_text("", encoding="utf-8")
    (tmp_path / "Makefile").write_text("", encoding="utf-8")
    (tmp_path / "README.md").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts())
    stats = result.stats

    assert stats.total_files == 4
    assert stats.total_directories == 2
    assert stats.extensions == {".ts": 1, ".tsx": 1, "<none>": 1, ".md": 1}
    assert sum(stats.extensions.values()) == stats.total_files


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_are_recorded_but_not_followed(tmp_path: Path) -> None:
    target = tmp_path / "real"
    target.mkdir()
    (target / "inside.py").write_text("", encoding="utf-8")
    try:
        os.symlink(str(target), str(tmp_path / "link"))
    except (OSError, NotImplementedError):
        pytest.skip("cannot create symlinks here")

    result = walk(str(tmp_path), _opts())
    link = next(c for c in result.tree.children if c.name == "link")

    assert link.kind == "symlink"
    assert link.children is None
    assert link.extension is None
    # 'inside.py' counted once via the real directory, plus the link itself
    assert result.stats.total_files == 2
    assert sum(result.stats.extensions.values()) == result.stats.total_files - 1


# -----------------------------------------------------------------------------
# Classification
# -----------------------------------------------------------------------------

def test_component_and_entity_directories_collected(tmp_path: Path) -> None:
    (tmp_path / "src" / "components").mkdir(parents=True)
    (tmp_path / "src" / "domain" / "entities").mkdir(parents=True)
    (tmp_path / "src" / "Button.component.tsx").write_text("", encoding="utf-8")

    result = walk(str(tmp_path), _opts())

    assert result.component_directories == {"src/components"}
    assert result.entity_directories == {"src/domain/entities"}


def test_depth_truncated_directories_are_still_classified(tmp_path: Path) -> None:
    (tmp_path / "components" / "Button").mkdir(parents=True)
    result = walk(str(tmp_path), _opts(depth=1))
    assert result.component_directories == {"components"}


# -----------------------------------------------------------------------------
# Failure Handling
# -----------------------------------------------------------------------------

def test_unreadable_subdirectory_becomes_warning(tmp_path: Path) -> None:
    (tmp_path / "locked").mkdir()
    (tmp_path / "ok.py").write_text("", encoding="utf-8")

    real_scandir = os.scandir
    locked_path = str(tmp_path / "locked")

    def fake_scandir(path):
        if str(path) == locked_path:
            raise PermissionError(13, "Permission denied")
        return real_scandir(path)

    with patch("projectscope.core.scanning.walker.os.scandir", side_effect=fake_scandir):
        result = walk(str(tmp_path), _opts())

    locked = next(c for c in result.tree.children if c.name == "locked")
    assert locked.truncated is True
    assert locked.children is None
    assert len(result.warnings) == 1
    assert locked_path in result.warnings[0]
    assert "Permission denied" in result.warnings[0]


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(ProjectScanError, match="not accessible"):
        walk(str(tmp_path / "nope"), _opts())


def test_file_root_raises(tmp_path: Path) -> None:
    f = tmp_path / "file.txt"
    f.write_text("", encoding="utf-8")
    with pytest.raises(ProjectScanError, match="not a directory"):
        walk(str(f), _opts())
