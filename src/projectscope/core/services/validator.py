from __future__ import annotations

"""
Scan Configuration Validation Service.

Gatekeeper between interfaces and the overview service. Coerces untrusted
values (CLI strings, hand-edited dicts), clamps the walk bounds into their
supported ranges and fills missing keys with domain defaults.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from projectscope.domain.config import get_default_config
from projectscope.domain.constants import (
    MAX_MAX_DEPTH,
    MAX_MAX_ENTRIES,
    MIN_MAX_DEPTH,
    MIN_MAX_ENTRIES,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a scan configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise TypeError/ValueError instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
                                          warnings produced while coercing.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("root_directory", "output_directory", "structure_file_name"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["include_hidden"] = _as_bool(
        merged.get("include_hidden"), defaults["include_hidden"], "include_hidden", warnings, strict
    )

    merged["max_depth"] = _as_bounded_int(
        merged.get("max_depth"), defaults["max_depth"], MIN_MAX_DEPTH, MAX_MAX_DEPTH,
        "max_depth", warnings, strict,
    )
    merged["max_entries_per_directory"] = _as_bounded_int(
        merged.get("max_entries_per_directory"), defaults["max_entries_per_directory"],
        MIN_MAX_ENTRIES, MAX_MAX_ENTRIES, "max_entries_per_directory", warnings, strict,
    )

    for field in ("ignore", "manual_tech_stack", "manual_languages"):
        merged[field] = _as_list_str(merged.get(field), field, warnings, strict)

    merged["project_description"] = _as_optional_str(
        merged.get("project_description"), "project_description", warnings, strict
    )

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Ignored.")
    return None


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce numbers 0/1 and yes/no style strings into booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bounded_int(
        value: Any,
        fallback: int,
        minimum: int,
        maximum: int,
        field: str,
        warnings: List[str],
        strict: bool,
) -> int:
    """Parse an integer and clamp it into [minimum, maximum]."""
    if value is None:
        return fallback

    parsed: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif isinstance(value, str) and not strict:
        try:
            parsed = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
        except ValueError:
            parsed = None

    if parsed is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if parsed < minimum or parsed > maximum:
        msg = f"Field '{field}' out of range [{minimum}, {maximum}]: {parsed}."
        if strict:
            raise ValueError(msg)
        clamped = min(max(parsed, minimum), maximum)
        warnings.append(f"{msg} Clamped to {clamped}.")
        return clamped

    return parsed


def _as_list_str(value: Any, field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure a list of trimmed, non-empty strings; CSV strings are split."""
    if value is None:
        return []

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, (list, tuple, set, frozenset)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return []
