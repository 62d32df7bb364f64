from __future__ import annotations

"""
Scan Configuration Defaults.

Produces the dict-based configuration that drives one scan. Interfaces
merge their overrides into it before validation.
"""

from typing import Any, Dict

from projectscope.domain.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_STRUCTURE_FILE_NAME,
    STATE_DIR_NAME,
)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default scan configuration.

    Relative paths are resolved against the working directory at scan time.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "root_directory": ".",
        "output_directory": STATE_DIR_NAME,
        "structure_file_name": DEFAULT_STRUCTURE_FILE_NAME,

        # Walk bounds
        "max_depth": DEFAULT_MAX_DEPTH,
        "max_entries_per_directory": DEFAULT_MAX_ENTRIES,
        "include_hidden": False,
        "ignore": [],

        # Manual hints
        "manual_tech_stack": [],
        "manual_languages": [],
        "project_description": None,
    }
