from __future__ import annotations

"""
Unit tests for Tech Stack Inference.

Verifies language aggregation from the extension histogram, manual
language merging and duplicate-free tech stack composition.
"""

from projectscope.core.analysis.tech_stack import (
    derive_languages,
    derive_tech_stack,
    merge_manual_languages,
)
from projectscope.domain.project_models import LanguageSummary


def test_derive_languages_groups_extension_families() -> None:
    counts = {".ts": 3, ".tsx": 2, ".js": 1, ".md": 4, "<none>": 7, ".xyz": 9}

    languages = derive_languages(counts)

    assert languages == [
        LanguageSummary("TypeScript", 5),
        LanguageSummary("Markdown", 4),
        LanguageSummary("JavaScript", 1),
    ]


def test_derive_languages_empty() -> None:
    assert derive_languages({}) == []


def test_merge_manual_languages_appends_missing_with_zero_count() -> None:
    detected = [LanguageSummary("TypeScript", 2)]

    merged = merge_manual_languages(detected, ["Rust", " TypeScript ", ""])

    assert merged == [LanguageSummary("TypeScript", 2), LanguageSummary("Rust", 0)]


def test_tech_stack_combines_all_signals() -> None:
    languages = [LanguageSummary("TypeScript", 2)]

    stack = derive_tech_stack(languages, ["react", "left-pad", "Vitest"], ["Docker"])

    assert stack == ["TypeScript", "Node.js", "React", "Vitest", "Docker"]


def test_tech_stack_has_no_duplicates() -> None:
    """A manual label equal to a detected language appears once."""
    languages = [LanguageSummary("TypeScript", 2)]

    stack = derive_tech_stack(languages, ["typescript", "react", "react"], ["TypeScript", " React "])

    assert sorted(stack) == ["Node.js", "React", "TypeScript"]
    assert len(stack) == len(set(stack))


def test_tech_stack_without_dependencies_has_no_ecosystem_label() -> None:
    stack = derive_tech_stack([LanguageSummary("Python", 3)], [])
    assert stack == ["Python"]
