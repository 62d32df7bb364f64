from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for scan configuration and sample project trees.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete scan configuration rooted in tmp_path.

    Mirrors the keys produced by 'projectscope.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # IO Paths
        "root_directory": str(tmp_path / "project"),
        "output_directory": str(tmp_path / "out"),
        "structure_file_name": "project-structure.json",

        # Walk bounds
        "max_depth": 3,
        "max_entries_per_directory": 60,
        "include_hidden": False,
        "ignore": [],

        # Manual hints
        "manual_tech_stack": [],
        "manual_languages": [],
        "project_description": None,
    }


@pytest.fixture
def react_project(tmp_path: Path) -> Path:
    """
    Create a small TypeScript/React project.

    Structure:
    /project
      /src
        index.ts
        Button.component.tsx
      /node_modules
        /react
          index.js
      package.json
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "index.ts").write_text("export {};", encoding="utf-8")
    (root / "src" / "Button.component.tsx").write_text("export const Button = null;", encoding="utf-8")

    (root / "node_modules" / "react").mkdir(parents=True)
    (root / "node_modules" / "react" / "index.js").write_text("module.exports = {};", encoding="utf-8")

    (root / "package.json").write_text(
        json.dumps({"dependencies": {"react": "18.0.0"}}),
        encoding="utf-8",
    )
    return root
