from __future__ import annotations

"""
Project Base Context Renderer.

Turns a validated ProjectBase into the plain-text block embedded in
language-model prompts. Sections appear in a fixed order and are omitted
when their data is absent or empty. Rendering is pure.
"""

from typing import List, Optional

from projectscope.domain.project_models import (
    DirectorySummary,
    LanguageSummary,
    ProjectBase,
    ScriptSummary,
)

SECTION_SEPARATOR = "\n\n"
HEADER_JOINER = " - "


def build_project_base_context(base: ProjectBase) -> str:
    """
    Render the multi-section context block.

    Order: identity, tech stack, languages, primary directories, component
    directories, entity directories, notable files, key scripts, package
    manager, warnings.

    Args:
        base: Validated project base.

    Returns:
        str: Sections joined by blank lines; empty if nothing is known.
    """
    candidates = [
        _identity(base),
        _inline("Tech stack", base.tech_stack),
        _languages(base.languages),
        _directories("Primary directories", base.primary_directories),
        _bullets("Component directories", base.component_directories),
        _bullets("Entity directories", base.entity_directories),
        _bullets("Notable files", base.notable_files),
        _scripts(base.scripts),
        f"Package manager: {base.package_manager}" if base.package_manager else None,
        _bullets("Structure warnings", base.warnings),
    ]
    return SECTION_SEPARATOR.join(s for s in candidates if s)


def _identity(base: ProjectBase) -> Optional[str]:
    parts = [p for p in (base.project_name, base.description) if p]
    if not parts:
        return None
    return f"Project base summary: {HEADER_JOINER.join(parts)}"


def _inline(label: str, values: List[str]) -> Optional[str]:
    if not values:
        return None
    return f"{label}: {', '.join(values)}"


def _languages(languages: List[LanguageSummary]) -> Optional[str]:
    if not languages:
        return None
    entries = [
        f"{item.language} ({item.count} files)" if item.count > 0 else item.language
        for item in languages
    ]
    return f"Languages: {', '.join(entries)}"


def _bullets(label: str, values: List[str]) -> Optional[str]:
    if not values:
        return None
    lines = "\n".join(f"- {v}" for v in values)
    return f"{label}:\n{lines}"


def _directories(label: str, directories: List[DirectorySummary]) -> Optional[str]:
    if not directories:
        return None
    return _bullets(label, [
        d.path + (" (truncated view)" if d.truncated else "") for d in directories
    ])


def _scripts(scripts: List[ScriptSummary]) -> Optional[str]:
    if not scripts:
        return None
    return _bullets("Key scripts", [f"{s.name}: {s.command}" for s in scripts])
