from __future__ import annotations

"""
Unit tests for the Scan Configuration Validation Service.

Verifies default filling, type coercion, range clamping and strict mode.
"""

from typing import Any, Dict

import pytest

from projectscope.core.services.validator import validate_config
from projectscope.domain.config import get_default_config


def test_valid_config_passes_unchanged(mock_config_dict: Dict[str, Any]) -> None:
    clean, warnings = validate_config(mock_config_dict)
    assert clean == mock_config_dict
    assert warnings == []


def test_missing_keys_take_defaults() -> None:
    clean, warnings = validate_config({"max_depth": 5})
    defaults = get_default_config()

    assert clean["max_depth"] == 5
    assert clean["max_entries_per_directory"] == defaults["max_entries_per_directory"]
    assert clean["output_directory"] == ".projectscope"
    assert warnings == []


def test_non_dict_config_falls_back_to_defaults() -> None:
    clean, warnings = validate_config("not a dict")
    assert clean == get_default_config()
    assert len(warnings) == 1


@pytest.mark.parametrize("field, value, expected", [
    ("max_depth", 0, 1),
    ("max_depth", 99, 10),
    ("max_entries_per_directory", -4, 1),
    ("max_entries_per_directory", 10_000, 500),
])
def test_out_of_range_bounds_are_clamped(field: str, value: int, expected: int) -> None:
    clean, warnings = validate_config({field: value})
    assert clean[field] == expected
    assert any("Clamped" in w for w in warnings)


def test_strict_mode_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        validate_config({"max_depth": 0}, strict=True)


def test_strict_mode_rejects_wrong_types() -> None:
    with pytest.raises(TypeError):
        validate_config({"include_hidden": "yes"}, strict=True)


def test_lenient_coercions() -> None:
    clean, warnings = validate_config({
        "max_depth": "4",
        "include_hidden": "yes",
        "ignore": "dist, fixtures ,",
        "manual_tech_stack": ["Docker", 3, " "],
        "project_description": "   ",
    })

    assert clean["max_depth"] == 4
    assert clean["include_hidden"] is True
    assert clean["ignore"] == ["dist", "fixtures"]
    assert clean["manual_tech_stack"] == ["Docker"]
    assert clean["project_description"] is None
    assert len(warnings) == 4


def test_invalid_int_uses_fallback() -> None:
    clean, warnings = validate_config({"max_depth": "deep"})
    assert clean["max_depth"] == 3
    assert warnings
