from __future__ import annotations

"""
Project Base Writer.

Assembles the self-describing project base document (overview, resolved
options, full tree, warnings and generation timestamp) and persists it,
replacing any previous artifact at the same path.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from projectscope.domain.structure_models import ScanOptions, StructureNode
from projectscope.infra.fs import write_json_safely

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_persisted_options(
        options: ScanOptions,
        manual_tech_stack: Optional[List[str]] = None,
        manual_languages: Optional[List[str]] = None,
        project_description: Optional[str] = None,
) -> Dict[str, Any]:
    """Describe the exact options of a scan; empty manual hints are omitted."""
    out: Dict[str, Any] = {
        "maxDepth": options.max_depth,
        "maxEntriesPerDirectory": options.max_entries_per_directory,
        "includeHidden": options.include_hidden,
        "ignore": sorted(options.ignore),
    }
    if manual_tech_stack:
        out["manualTechStack"] = list(manual_tech_stack)
    if manual_languages:
        out["manualLanguages"] = list(manual_languages)
    if project_description:
        out["projectDescription"] = project_description
    return out


def build_project_base_document(
        overview: Dict[str, Any],
        options: Dict[str, Any],
        tree: StructureNode,
        warnings: List[str],
        generated_at: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Assemble the persisted document.

    Args:
        overview: JSON-ready overview fields ('rootDirectory', 'projectName', ...).
        options: Output of build_persisted_options.
        tree: Root node of the walk.
        warnings: Every warning collected during the scan.
        generated_at: Timestamp override, mostly for tests.

    Returns:
        Dict[str, Any]: Document with None-valued optional fields removed.
    """
    doc: Dict[str, Any] = {
        "generatedAt": generated_at or utc_timestamp(),
        "rootDirectory": overview["rootDirectory"],
        "options": options,
        "projectName": overview.get("projectName"),
        "description": overview.get("description"),
        "packageManager": overview.get("packageManager"),
        "languages": overview.get("languages", []),
        "techStack": overview.get("techStack", []),
        "primaryDirectories": overview.get("primaryDirectories", []),
        "componentDirectories": overview.get("componentDirectories", []),
        "entityDirectories": overview.get("entityDirectories", []),
        "notableFiles": overview.get("notableFiles", []),
        "scripts": overview.get("scripts", []),
        "tree": tree.to_dict(),
        "warnings": list(warnings),
    }
    return {k: v for k, v in doc.items() if v is not None}


def write_project_base(target_path: str, document: Dict[str, Any]) -> str:
    """
    Persist the document as indented JSON.

    No locking is performed: concurrent writers to one path race and the
    last write wins.

    Returns:
        str: Absolute path of the artifact.

    Raises:
        OSError: If the artifact cannot be written.
    """
    path = write_json_safely(target_path, document)
    logger.info(f"Project base written to: {path}")
    return path
