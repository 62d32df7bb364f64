from __future__ import annotations

"""
Path Classification Engine.

Decides whether a filesystem entry is ignored, resolves a file's logical
extension and language, and tags directories as component-like or
entity-like from keyword matches on their names.
"""

import os
from typing import FrozenSet, Iterable, Optional, Set

from projectscope.domain.constants import (
    COMPONENT_KEYWORDS,
    DEFAULT_IGNORE,
    ENTITY_KEYWORDS,
    ENV_FILE_PREFIX,
    EXTENSION_LANGUAGE_MAP,
    HIDDEN_PREFIX,
    NO_EXTENSION_KEY,
)
from projectscope.domain.structure_models import ScanOptions

TAG_COMPONENT = "component"
TAG_ENTITY = "entity"

# -----------------------------------------------------------------------------
# IGNORE RULES
# -----------------------------------------------------------------------------

def normalize_ignore(entries: Optional[Iterable[str]]) -> FrozenSet[str]:
    """
    Prepare caller-supplied ignore entries for lookup.

    Separators are slash-normalized and surrounding whitespace or slashes
    dropped so that 'src\\gen/' and 'src/gen' compare equal.
    """
    out: Set[str] = set()
    for raw in entries or []:
        e = raw.strip().replace("\\", "/").strip("/")
        if e:
            out.add(e)
    return frozenset(out)


def should_ignore(name: str, relative_path: str, options: ScanOptions) -> bool:
    """
    Decide whether an entry is excluded from the walk.

    Args:
        name: Entry base name.
        relative_path: Slash-normalized path from the scan root.
        options: Active walk options.

    Returns:
        bool: True for hidden entries (unless included), built-in ignores,
              and caller ignores matched by name or full relative path.
    """
    if not options.include_hidden and name.startswith(HIDDEN_PREFIX):
        return True
    if name in DEFAULT_IGNORE or name in options.ignore:
        return True
    return relative_path in options.ignore

# -----------------------------------------------------------------------------
# FILE CLASSIFICATION
# -----------------------------------------------------------------------------

def resolve_extension(file_name: str) -> Optional[str]:
    """
    Resolve the dotted lowercase extension of a file name.

    Suffix-less dotfiles following the environment-file convention
    (e.g. '.env', '.envrc') are reported as '.env'. '.env.local' keeps
    its real suffix '.local'.

    Returns:
        Optional[str]: e.g. '.ts', or None when the name has no suffix.
    """
    _, ext = os.path.splitext(file_name)
    ext = ext.lower()
    if not ext and file_name.startswith(ENV_FILE_PREFIX):
        return ENV_FILE_PREFIX
    return ext or None


def extension_key(extension: Optional[str]) -> str:
    """Histogram key for an extension, with a sentinel for none."""
    return extension if extension else NO_EXTENSION_KEY


def infer_language(extension: Optional[str]) -> Optional[str]:
    """Map a dotted extension to its language label, if known."""
    if not extension:
        return None
    return EXTENSION_LANGUAGE_MAP.get(extension.lower())

# -----------------------------------------------------------------------------
# DIRECTORY CLASSIFICATION
# -----------------------------------------------------------------------------

def _matches_keyword(value: str, keywords: Iterable[str]) -> bool:
    lowered = value.lower()
    return any(k in lowered for k in keywords)


def classify_directory(name: str) -> Set[str]:
    """
    Tag a directory name by keyword substring.

    Returns:
        Set[str]: Subset of {'component', 'entity'}; may be empty.
    """
    tags: Set[str] = set()
    if _matches_keyword(name, COMPONENT_KEYWORDS):
        tags.add(TAG_COMPONENT)
    if _matches_keyword(name, ENTITY_KEYWORDS):
        tags.add(TAG_ENTITY)
    return tags
