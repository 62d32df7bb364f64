from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, relative path rendering and JSON persistence
helpers. Acts as a thin abstraction over 'os' and 'json' so that every
component writes and reads artifacts the same way.
"""

import json
import os
from typing import Any, Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def resolve_absolute_path(path: Optional[str], base: Optional[str] = None) -> str:
    """
    Resolve a possibly relative path against a base directory.

    Handles environment variables ($VAR/%VAR%) and '~' expansion.

    Args:
        path: Raw path string. Empty input resolves to the base itself.
        base: Anchor directory. Defaults to the current working directory.

    Returns:
        str: Normalized absolute path.
    """
    anchor = base or os.getcwd()
    p = (path or "").strip()
    if not p:
        return os.path.abspath(anchor)
    p = os.path.expandvars(os.path.expanduser(p))
    if os.path.isabs(p):
        return os.path.normpath(p)
    return os.path.normpath(os.path.join(anchor, p))


def to_posix(path: str) -> str:
    """Convert native separators to forward slashes."""
    return path.replace(os.sep, "/") if os.sep != "/" else path


def relative_posix(target: str, start: str) -> str:
    """
    Express 'target' relative to 'start' with forward slashes.

    Returns "." when both resolve to the same location and falls back to
    the absolute target when no relative form exists (different drives).
    """
    try:
        rel = os.path.relpath(target, start)
    except ValueError:
        return to_posix(target)
    return to_posix(rel) if rel else "."


# -----------------------------------------------------------------------------
# JSON PERSISTENCE API
# -----------------------------------------------------------------------------

def write_text_safely(target_path: str, contents: str) -> str:
    """
    Write text to disk, creating parent directories as needed.

    A trailing newline is guaranteed. Existing content is replaced.

    Args:
        target_path: Destination file.
        contents: Text payload.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    resolved = resolve_absolute_path(target_path)
    parent = os.path.dirname(resolved)
    if parent:
        os.makedirs(parent, exist_ok=True)

    normalized = contents if contents.endswith("\n") else contents + "\n"
    with open(resolved, "w", encoding="utf-8") as f:
        f.write(normalized)
    return resolved


def write_json_safely(target_path: str, data: Any, indent: int = 2) -> str:
    """Serialize 'data' as indented JSON and persist it via write_text_safely."""
    serialized = json.dumps(data, indent=indent, ensure_ascii=False)
    return write_text_safely(target_path, serialized)


def read_json_safely(target_path: str) -> Optional[Any]:
    """
    Load a JSON document from disk.

    Args:
        target_path: Source file.

    Returns:
        Optional[Any]: Parsed document, or None if the file does not exist.

    Raises:
        ValueError: If the content is not valid JSON.
        OSError: If the file exists but cannot be read.
    """
    resolved = resolve_absolute_path(target_path)
    if not os.path.exists(resolved):
        return None

    with open(resolved, "r", encoding="utf-8") as f:
        raw = f.read()

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON file at {resolved}: {e}") from e
