from __future__ import annotations

"""
Project Base Domain Models.

Defines the persisted project base artifact, its summary records, the
validation result returned by the artifact reader, and the result object
communicated from the overview service to the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from projectscope.domain.structure_models import StructureNode

# -----------------------------------------------------------------------------
# SUMMARY RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LanguageSummary:
    language: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "count": self.count}


@dataclass(frozen=True)
class DirectorySummary:
    name: str
    path: str
    truncated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "truncated": self.truncated}


@dataclass(frozen=True)
class ScriptSummary:
    name: str
    command: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "command": self.command}


@dataclass(frozen=True)
class DependencySummary:
    name: str
    version: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "version": self.version}


@dataclass
class ManifestInfo:
    """
    Metadata extracted from the optional dependency manifest.

    Every field is empty when the manifest is absent or malformed.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    package_manager: Optional[str] = None
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    scripts: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @property
    def dependency_names(self) -> List[str]:
        names = list(self.dependencies)
        names.extend(n for n in self.dev_dependencies if n not in self.dependencies)
        return names

# -----------------------------------------------------------------------------
# PERSISTED ARTIFACT
# -----------------------------------------------------------------------------

@dataclass
class ProjectBase:
    """
    Reconstituted project base artifact.

    Only 'root_directory' is mandatory; every other field may be missing
    from older or hand-written documents and is then left empty.
    """
    root_directory: str
    generated_at: Optional[str] = None
    project_name: Optional[str] = None
    description: Optional[str] = None
    package_manager: Optional[str] = None
    languages: List[LanguageSummary] = field(default_factory=list)
    tech_stack: List[str] = field(default_factory=list)
    primary_directories: List[DirectorySummary] = field(default_factory=list)
    component_directories: List[str] = field(default_factory=list)
    entity_directories: List[str] = field(default_factory=list)
    notable_files: List[str] = field(default_factory=list)
    scripts: List[ScriptSummary] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    tree: Optional[StructureNode] = None
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectBase":
        """Build a ProjectBase from a document that already passed validation."""
        tree_raw = data.get("tree")
        return cls(
            root_directory=data["rootDirectory"],
            generated_at=data.get("generatedAt"),
            project_name=data.get("projectName"),
            description=data.get("description"),
            package_manager=data.get("packageManager"),
            languages=[
                LanguageSummary(language=i["language"], count=i["count"])
                for i in data.get("languages") or []
            ],
            tech_stack=list(data.get("techStack") or []),
            primary_directories=[
                DirectorySummary(name=d["name"], path=d["path"], truncated=bool(d.get("truncated", False)))
                for d in data.get("primaryDirectories") or []
            ],
            component_directories=list(data.get("componentDirectories") or []),
            entity_directories=list(data.get("entityDirectories") or []),
            notable_files=list(data.get("notableFiles") or []),
            scripts=[
                ScriptSummary(name=s["name"], command=s["command"])
                for s in data.get("scripts") or []
            ],
            options=dict(data.get("options") or {}),
            tree=StructureNode.from_dict(tree_raw) if tree_raw is not None else None,
            warnings=list(data.get("warnings") or []),
        )


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating an untrusted document.

    Attributes:
        ok: True when the document matches the expected shape.
        value: Parsed object on success.
        errors: Human-readable violations on failure.
    """
    ok: bool
    value: Optional[ProjectBase] = None
    errors: List[str] = field(default_factory=list)

# -----------------------------------------------------------------------------
# SERVICE RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    Summary returned to the caller after a scan.

    Mirrors the persisted overview without the full tree and adds the
    artifact location in its three resolutions.

    Attributes:
        overview: Overview fields (JSON-ready) including 'structureFile'.
        structure_file_path: Absolute artifact path.
        structure_file_relative_to_root: Artifact path relative to the scan root.
        structure_file_relative_to_cwd: Artifact path relative to the working directory.
        warnings: Non-fatal problems collected during the scan.
        tree: Live tree, kept for previews; not part of the payload.
    """
    overview: Dict[str, Any]
    structure_file_path: str
    structure_file_relative_to_root: str
    structure_file_relative_to_cwd: str
    warnings: List[str] = field(default_factory=list)
    tree: Optional[StructureNode] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overview": self.overview,
            "structureFile": {
                "absolutePath": self.structure_file_path,
                "relativeToRoot": self.structure_file_relative_to_root,
                "relativeToCwd": self.structure_file_relative_to_cwd,
            },
            "warnings": list(self.warnings),
        }
