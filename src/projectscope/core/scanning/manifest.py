from __future__ import annotations

"""
Dependency Manifest Reader.

Extracts project metadata (name, description, version, dependencies,
scripts and package manager) from the optional JSON manifest at the scan
root. A missing manifest is normal; a broken one becomes a warning so the
scan still succeeds.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from projectscope.domain.constants import LOCK_FILE_MANAGERS, MANIFEST_FILE_NAME, NOTABLE_FILES
from projectscope.domain.project_models import ManifestInfo

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_manifest(root_directory: str) -> ManifestInfo:
    """
    Read the project manifest if present.

    Args:
        root_directory: Absolute scan root.

    Returns:
        ManifestInfo: Extracted metadata. On parse failure every field is
                      empty and a single warning is recorded.
    """
    manifest_path = os.path.join(root_directory, MANIFEST_FILE_NAME)
    data: Optional[Dict[str, Any]] = None
    warnings: List[str] = []

    if os.path.exists(manifest_path):
        try:
            data = _load_manifest(manifest_path)
        except (OSError, ValueError) as e:
            msg = f"Failed to parse {MANIFEST_FILE_NAME}: {e}"
            logger.warning(msg)
            warnings.append(msg)

    info = ManifestInfo(warnings=warnings)
    if data is None:
        info.package_manager = detect_package_manager(root_directory, None)
        return info

    info.name = _as_optional_str(data.get("name"))
    info.description = _as_optional_str(data.get("description"))
    info.version = _as_optional_str(data.get("version"))
    info.dependencies = _as_str_map(data.get("dependencies"))
    info.dev_dependencies = _as_str_map(data.get("devDependencies"))
    info.scripts = _as_str_map(data.get("scripts"))
    info.package_manager = detect_package_manager(root_directory, data)

    logger.debug(
        f"Manifest read: {len(info.dependencies)} dependencies, "
        f"{len(info.dev_dependencies)} dev dependencies, {len(info.scripts)} scripts"
    )
    return info


def detect_package_manager(root_directory: str, manifest: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Resolve the package manager hint.

    A non-empty declared 'packageManager' wins; otherwise the first lock
    file found (pnpm, yarn, npm, bun order) decides.
    """
    declared = (manifest or {}).get("packageManager")
    if isinstance(declared, str) and declared:
        return declared

    for file_name, label in LOCK_FILE_MANAGERS:
        if os.path.exists(os.path.join(root_directory, file_name)):
            return label
    return None


def collect_notable_files(root_directory: str) -> List[str]:
    """Return which well-known root files exist, in the fixed catalogue order."""
    return [n for n in NOTABLE_FILES if os.path.exists(os.path.join(root_directory, n))]

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _load_manifest(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, found {type(data).__name__}")
    return data


def _as_optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _as_str_map(value: Any) -> Dict[str, str]:
    """Keep only string-to-string pairs of a JSON object."""
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(k, str) and isinstance(v, str)}
