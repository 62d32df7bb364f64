from __future__ import annotations

"""
Bounded Directory Walker.

Builds the summarized StructureNode tree of a project. The walk is
depth-first and synchronous, sorted by name for reproducible output, and
bounded by a maximum depth and a per-directory entry cap. Unreadable
directories degrade into warnings plus truncated nodes; only an unusable
root aborts the walk.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import List, Optional

from projectscope.core.scanning.classifier import (
    TAG_COMPONENT,
    TAG_ENTITY,
    classify_directory,
    extension_key,
    resolve_extension,
    should_ignore,
)
from projectscope.domain.errors import ProjectScanError
from projectscope.domain.structure_models import (
    KIND_DIRECTORY,
    KIND_FILE,
    KIND_SYMLINK,
    ScanOptions,
    ScanStats,
    StructureNode,
    WalkResult,
)

logger = logging.getLogger(__name__)

ROOT_LABEL = "."

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def walk(root_path: str, options: ScanOptions) -> WalkResult:
    """
    Walk a project directory within the configured bounds.

    Args:
        root_path: Directory to scan. Relative paths resolve against the
                   working directory.
        options: Depth, entry cap, hidden-file and ignore settings.

    Returns:
        WalkResult: Tree, counters, warnings and classified directories.

    Raises:
        ProjectScanError: If the root does not exist, cannot be accessed
                          or is not a directory.
    """
    root_abs = os.path.abspath(root_path)
    _ensure_root_directory(root_abs)

    logger.debug(
        f"Walking '{root_abs}' (max_depth={options.max_depth}, "
        f"max_entries={options.max_entries_per_directory})"
    )

    result = WalkResult(
        tree=StructureNode(name=os.path.basename(root_abs), path=ROOT_LABEL, kind=KIND_DIRECTORY),
        stats=ScanStats(),
    )
    result.tree = _scan_directory(root_abs, "", 0, options, result)

    logger.debug(
        f"Walk complete: {result.stats.total_files} files, "
        f"{result.stats.total_directories} directories, {len(result.warnings)} warnings"
    )
    return result

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class _Entry:
    name: str
    is_dir: bool
    is_symlink: bool


def _ensure_root_directory(root_abs: str) -> None:
    """Fail fast when the root is unusable; nothing is scanned or written."""
    try:
        st = os.stat(root_abs)
    except OSError as e:
        raise ProjectScanError(f"Root directory '{root_abs}' not accessible: {e.strerror or e}") from e

    if not stat.S_ISDIR(st.st_mode):
        raise ProjectScanError(f"Root path '{root_abs}' is not a directory.")


def _join_relative(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


def _list_entries(absolute_path: str, relative_path: str, result: WalkResult) -> Optional[List[_Entry]]:
    """
    Read and type one directory's entries without following symlinks.

    Returns None when the directory itself cannot be listed.
    """
    try:
        with os.scandir(absolute_path) as it:
            raw = list(it)
    except OSError as e:
        _warn(result, f"Failed to read directory '{absolute_path}': {e.strerror or e}")
        return None

    entries: List[_Entry] = []
    for de in raw:
        try:
            entries.append(_Entry(
                name=de.name,
                is_dir=de.is_dir(follow_symlinks=False),
                is_symlink=de.is_symlink(),
            ))
        except OSError as e:
            _warn(result, f"Failed to inspect entry '{_join_relative(relative_path, de.name)}': {e.strerror or e}")
    return entries


def _scan_directory(
        absolute_path: str,
        relative_path: str,
        depth: int,
        options: ScanOptions,
        result: WalkResult,
) -> StructureNode:
    """
    Recursively build the node for one directory.

    Args:
        absolute_path: Filesystem path of the directory.
        relative_path: Slash-normalized path from the root ('' for root).
        depth: Depth of this directory (root = 0).
        options: Walk bounds.
        result: Accumulator for stats, warnings and classifications.

    Returns:
        StructureNode: Directory node, truncated if limited by the entry
                       cap, by depth, or by a read failure.
    """
    stats = result.stats
    stats.total_directories += 1

    name = os.path.basename(absolute_path)
    label = relative_path or ROOT_LABEL

    entries = _list_entries(absolute_path, relative_path, result)
    if entries is None:
        return StructureNode(name=name, path=label, kind=KIND_DIRECTORY, truncated=True)

    entries.sort(key=lambda e: e.name)

    # Ignore rules run before the cap so it only counts relevant entries
    kept = [
        e for e in entries
        if not should_ignore(e.name, _join_relative(relative_path, e.name), options)
    ]

    truncated_by_limit = len(kept) > options.max_entries_per_directory
    if truncated_by_limit:
        kept = kept[:options.max_entries_per_directory]
        logger.debug(f"Entry cap reached in '{label}'")

    children: List[StructureNode] = []
    truncated_by_depth = False

    for entry in kept:
        child_rel = _join_relative(relative_path, entry.name)
        child_abs = os.path.join(absolute_path, entry.name)

        if entry.is_dir:
            if depth + 1 < options.max_depth:
                children.append(_scan_directory(child_abs, child_rel, depth + 1, options, result))
            else:
                stats.total_directories += 1
                truncated_by_depth = True
                children.append(StructureNode(
                    name=entry.name, path=child_rel, kind=KIND_DIRECTORY, truncated=True
                ))

            tags = classify_directory(entry.name)
            if TAG_COMPONENT in tags:
                result.component_directories.add(child_rel)
            if TAG_ENTITY in tags:
                result.entity_directories.add(child_rel)
            continue

        stats.total_files += 1

        if entry.is_symlink:
            children.append(StructureNode(name=entry.name, path=child_rel, kind=KIND_SYMLINK))
            continue

        extension = resolve_extension(entry.name)
        stats.record_extension(extension_key(extension))
        children.append(StructureNode(
            name=entry.name,
            path=child_rel,
            kind=KIND_FILE,
            extension=extension[1:] if extension else None,
        ))

    return StructureNode(
        name=name,
        path=label,
        kind=KIND_DIRECTORY,
        truncated=truncated_by_limit or truncated_by_depth,
        children=children,
    )


def _warn(result: WalkResult, message: str) -> None:
    logger.warning(message)
    result.warnings.append(message)
