from __future__ import annotations

"""
Tech Stack Inference.

Derives the language breakdown from the extension histogram and merges
languages, declared dependencies and manual hints into one deduplicated
list of technology labels.
"""

from typing import Dict, Iterable, List, Optional

from projectscope.core.scanning.classifier import infer_language
from projectscope.domain.constants import KNOWN_TECH_LABELS, MANIFEST_ECOSYSTEM_LABEL, NO_EXTENSION_KEY
from projectscope.domain.project_models import LanguageSummary


def _clean_labels(values: Optional[Iterable[str]]) -> List[str]:
    """Trim labels and drop empty ones, preserving order."""
    out: List[str] = []
    for v in values or []:
        s = v.strip()
        if s:
            out.append(s)
    return out


def _by_count(items: List[LanguageSummary]) -> List[LanguageSummary]:
    # sorted() is stable: ties keep first-seen order
    return sorted(items, key=lambda i: i.count, reverse=True)


def derive_languages(extension_counts: Dict[str, int]) -> List[LanguageSummary]:
    """
    Aggregate extension counts into language counts.

    Extensions without a known language (and the no-extension sentinel)
    are skipped.

    Returns:
        List[LanguageSummary]: Sorted by file count, highest first.
    """
    totals: Dict[str, int] = {}
    for ext, count in extension_counts.items():
        if ext == NO_EXTENSION_KEY:
            continue
        language = infer_language(ext)
        if language is None:
            continue
        totals[language] = totals.get(language, 0) + count

    return _by_count([LanguageSummary(language=k, count=v) for k, v in totals.items()])


def merge_manual_languages(
        languages: List[LanguageSummary],
        manual_languages: Optional[Iterable[str]],
) -> List[LanguageSummary]:
    """Append manual language hints not already detected, with a zero count."""
    merged: Dict[str, LanguageSummary] = {i.language: i for i in languages}
    for label in _clean_labels(manual_languages):
        if label not in merged:
            merged[label] = LanguageSummary(language=label, count=0)
    return _by_count(list(merged.values()))


def derive_tech_stack(
        languages: List[LanguageSummary],
        dependency_names: Iterable[str],
        manual_tech_stack: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Combine every signal into a duplicate-free list of technology labels.

    Signals, in insertion order: detected languages, the manifest ecosystem
    label (when any dependency is declared), well-known labels for
    dependency names, then trimmed manual labels. Callers that need a
    display order must sort the result themselves.

    Args:
        languages: Languages, including merged manual hints.
        dependency_names: Names from dependencies and dev dependencies.
        manual_tech_stack: Caller-supplied labels.

    Returns:
        List[str]: Unique labels.
    """
    stack: Dict[str, None] = {}

    for item in languages:
        stack.setdefault(item.language)

    names = list(dict.fromkeys(dependency_names))
    if names:
        stack.setdefault(MANIFEST_ECOSYSTEM_LABEL)

    for name in names:
        label = KNOWN_TECH_LABELS.get(name.lower())
        if label:
            stack.setdefault(label)

    for label in _clean_labels(manual_tech_stack):
        stack.setdefault(label)

    return list(stack)
