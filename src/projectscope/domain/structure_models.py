from __future__ import annotations

"""
Directory Structure Data Models.

Provides the recursive node type, walk counters and walk options used by
the bounded scanner to build a summarized project tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Set

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

KIND_DIRECTORY = "directory"
KIND_FILE = "file"
KIND_SYMLINK = "symlink"

NODE_KINDS = (KIND_DIRECTORY, KIND_FILE, KIND_SYMLINK)

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class StructureNode:
    """
    One filesystem entry in the summarized tree.

    Attributes:
        name: Base name of the entry.
        path: Slash-normalized path relative to the scan root ("." for root).
        kind: One of 'directory', 'file' or 'symlink'.
        extension: Lowercase extension without the leading dot (files only).
        truncated: True when children were cut off by depth or entry limits.
        children: Ordered child nodes (directories only). None for leaves
                  that were never listed.
    """
    name: str
    path: str
    kind: str
    extension: Optional[str] = None
    truncated: bool = False
    children: Optional[List["StructureNode"]] = None

    @property
    def is_directory(self) -> bool:
        return self.kind == KIND_DIRECTORY

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the node (recursively) into the persisted JSON shape.

        Optional keys are omitted rather than written as null.
        """
        out: Dict[str, Any] = {"name": self.name, "path": self.path, "type": self.kind}
        if self.extension:
            out["extension"] = self.extension
        if self.kind == KIND_DIRECTORY:
            out["truncated"] = self.truncated
            if self.children is not None:
                out["children"] = [c.to_dict() for c in self.children]
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructureNode":
        """Rebuild a node from an already validated dictionary."""
        raw_children = data.get("children")
        children = None
        if raw_children is not None and data["type"] == KIND_DIRECTORY:
            children = [cls.from_dict(c) for c in raw_children]
        return cls(
            name=data["name"],
            path=data["path"],
            kind=data["type"],
            extension=data.get("extension"),
            truncated=bool(data.get("truncated", False)),
            children=children,
        )


@dataclass
class ScanStats:
    """
    Aggregate counters mutated in place by a single walk.

    Attributes:
        total_files: Regular files plus symlinks visited.
        total_directories: Directories visited or emitted as depth leaves.
        extensions: Dotted extension (or '<none>') to occurrence count.
    """
    total_files: int = 0
    total_directories: int = 0
    extensions: Dict[str, int] = field(default_factory=dict)

    def record_extension(self, key: str) -> None:
        self.extensions[key] = self.extensions.get(key, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalDirectories": self.total_directories,
            "extensions": dict(sorted(self.extensions.items())),
        }


@dataclass(frozen=True)
class ScanOptions:
    """
    Immutable configuration for one walk.

    Attributes:
        max_depth: Maximum directory depth to list (>= 1).
        max_entries_per_directory: Cap on recorded entries per directory (>= 1).
        include_hidden: Whether dot-prefixed entries are kept.
        ignore: Extra names or relative paths to skip, slash-normalized.
    """
    max_depth: int
    max_entries_per_directory: int
    include_hidden: bool = False
    ignore: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}.")
        if self.max_entries_per_directory < 1:
            raise ValueError(
                f"max_entries_per_directory must be >= 1, got {self.max_entries_per_directory}."
            )


@dataclass
class WalkResult:
    """
    Output of one complete walk, exclusively owned by its caller.

    Attributes:
        tree: Root StructureNode.
        stats: Final counters.
        warnings: Non-fatal problems met during the walk.
        component_directories: Relative paths of component-like directories.
        entity_directories: Relative paths of entity-like directories.
    """
    tree: StructureNode
    stats: ScanStats
    warnings: List[str] = field(default_factory=list)
    component_directories: Set[str] = field(default_factory=set)
    entity_directories: Set[str] = field(default_factory=set)
