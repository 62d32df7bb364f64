from __future__ import annotations

"""
Project Overview Service.

Orchestrates one scan: resolve paths, walk the tree, read the manifest,
infer languages and tech stack, assemble the overview, persist the project
base artifact and return the caller-facing summary. Every invocation fully
replaces the previous artifact at the output path.
"""

import logging
import os
from typing import Any, Dict, List, Optional, TypeVar

from projectscope.core.analysis.tech_stack import (
    derive_languages,
    derive_tech_stack,
    merge_manual_languages,
)
from projectscope.core.project_base.writer import (
    build_persisted_options,
    build_project_base_document,
    write_project_base,
)
from projectscope.core.scanning.classifier import normalize_ignore
from projectscope.core.scanning.manifest import collect_notable_files, read_manifest
from projectscope.core.scanning.walker import walk
from projectscope.domain.constants import (
    MAX_CLASSIFIED_DIRECTORIES,
    MAX_DEPENDENCIES,
    MAX_SCRIPTS,
)
from projectscope.domain.project_models import (
    DependencySummary,
    DirectorySummary,
    ScanResult,
    ScriptSummary,
)
from projectscope.domain.structure_models import ScanOptions, StructureNode
from projectscope.infra.fs import relative_posix, resolve_absolute_path

logger = logging.getLogger(__name__)

T = TypeVar("T")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_overview(config: Dict[str, Any], cwd: Optional[str] = None) -> ScanResult:
    """
    Scan a project and persist its project base.

    Args:
        config: Validated configuration (see core.services.validator).
        cwd: Anchor for relative paths. Defaults to the working directory.

    Returns:
        ScanResult: Overview without the tree, artifact locations and warnings.

    Raises:
        ProjectScanError: If the root is missing or not a directory. No
                          artifact is written in that case.
        OSError: If the artifact cannot be written.
    """
    anchor = cwd or os.getcwd()
    root_directory = resolve_absolute_path(config["root_directory"], anchor)
    output_directory = resolve_absolute_path(config["output_directory"], anchor)
    structure_file_path = os.path.join(output_directory, config["structure_file_name"])

    options = ScanOptions(
        max_depth=config["max_depth"],
        max_entries_per_directory=config["max_entries_per_directory"],
        include_hidden=config["include_hidden"],
        ignore=normalize_ignore(config.get("ignore")),
    )

    logger.info(f"Scanning project at: {root_directory}")

    # 1. Structure
    walked = walk(root_directory, options)
    warnings: List[str] = list(walked.warnings)

    # 2. Metadata
    manifest = read_manifest(root_directory)
    warnings.extend(manifest.warnings)

    # 3. Inference
    manual_languages = config.get("manual_languages") or []
    manual_tech_stack = config.get("manual_tech_stack") or []
    languages = merge_manual_languages(derive_languages(walked.stats.extensions), manual_languages)
    tech_stack = derive_tech_stack(languages, manifest.dependency_names, manual_tech_stack)

    # 4. Overview assembly
    project_description = config.get("project_description")
    overview: Dict[str, Any] = {
        "rootDirectory": root_directory,
        "projectName": manifest.name or os.path.basename(root_directory),
        "description": project_description or manifest.description,
        "version": manifest.version,
        "packageManager": manifest.package_manager,
        "languages": [i.to_dict() for i in languages],
        "techStack": tech_stack,
        "primaryDirectories": [d.to_dict() for d in primary_directories(walked.tree)],
        "notableFiles": collect_notable_files(root_directory),
        "scripts": [s.to_dict() for s in _select_top(_sorted_scripts(manifest.scripts), MAX_SCRIPTS)],
        "dependencies": [d.to_dict() for d in _select_top(_sorted_dependencies(manifest.dependencies), MAX_DEPENDENCIES)],
        "devDependencies": [
            d.to_dict() for d in _select_top(_sorted_dependencies(manifest.dev_dependencies), MAX_DEPENDENCIES)
        ],
        "componentDirectories": _select_top(sorted(walked.component_directories), MAX_CLASSIFIED_DIRECTORIES),
        "entityDirectories": _select_top(sorted(walked.entity_directories), MAX_CLASSIFIED_DIRECTORIES),
        "stats": walked.stats.to_dict(),
    }

    # 5. Persistence
    persisted_options = build_persisted_options(
        options,
        manual_tech_stack=manual_tech_stack,
        manual_languages=manual_languages,
        project_description=project_description,
    )
    document = build_project_base_document(overview, persisted_options, walked.tree, warnings)
    written_path = write_project_base(structure_file_path, document)

    relative_to_root = relative_posix(written_path, root_directory)
    relative_to_cwd = relative_posix(written_path, anchor)
    overview["structureFile"] = relative_to_cwd

    if warnings:
        logger.warning(f"Scan finished with {len(warnings)} warning(s).")

    return ScanResult(
        overview={k: v for k, v in overview.items() if v is not None},
        structure_file_path=written_path,
        structure_file_relative_to_root=relative_to_root,
        structure_file_relative_to_cwd=relative_to_cwd,
        warnings=warnings,
        tree=walked.tree,
    )


def primary_directories(tree: StructureNode) -> List[DirectorySummary]:
    """Top-level directory children of the root, in tree order."""
    return [
        DirectorySummary(name=c.name, path=c.path, truncated=c.truncated)
        for c in tree.children or []
        if c.is_directory
    ]

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _select_top(items: List[T], limit: int) -> List[T]:
    return items[:limit]


def _sorted_scripts(scripts: Dict[str, str]) -> List[ScriptSummary]:
    return [ScriptSummary(name=k, command=v) for k, v in sorted(scripts.items())]


def _sorted_dependencies(deps: Dict[str, str]) -> List[DependencySummary]:
    return [DependencySummary(name=k, version=v) for k, v in sorted(deps.items())]
