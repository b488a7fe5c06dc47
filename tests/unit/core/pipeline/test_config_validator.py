from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Default injection for missing keys.
2. Lenient coercion of booleans, CSV lists and suffixes (with warnings).
3. Strict mode raising on type mismatches.
"""

import pytest

from featuredocs.core.pipeline.validator import validate_config
from featuredocs.domain.config import get_default_config


def test_valid_config_passes_without_warnings(mock_config_dict):
    cfg, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert cfg == mock_config_dict


def test_missing_keys_use_defaults():
    cfg, warnings = validate_config({})

    assert warnings == []
    assert cfg == get_default_config()


def test_non_dict_config_falls_back_to_defaults():
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg == get_default_config()
    assert len(warnings) == 1


def test_non_dict_config_strict_raises():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


@pytest.mark.parametrize("raw, expected", [
    ("yes", True),
    ("off", False),
    (1, True),
    (0, False),
])
def test_boolean_coercion(raw, expected):
    cfg, warnings = validate_config({"add_implemented_tags": raw})

    assert cfg["add_implemented_tags"] is expected
    assert len(warnings) == 1


def test_invalid_boolean_uses_fallback():
    cfg, warnings = validate_config({"print_tree": "maybe"})

    assert cfg["print_tree"] is False
    assert "expected bool" in warnings[0]


def test_steps_from_csv_string():
    cfg, warnings = validate_config({"steps": "steps/, other/*.py ,"})

    assert cfg["steps"] == ["steps/", "other/*.py"]
    assert "CSV" in warnings[0]


def test_non_string_step_items_are_discarded():
    cfg, warnings = validate_config({"steps": ["a.py", 3, "  "]})

    assert cfg["steps"] == ["a.py"]
    assert len(warnings) == 1


def test_suffix_gets_a_leading_dot():
    cfg, warnings = validate_config({"feature_suffix": "story"})

    assert cfg["feature_suffix"] == ".story"
    assert len(warnings) == 1


def test_suffix_without_dot_strict_raises():
    with pytest.raises(ValueError):
        validate_config({"feature_suffix": "story"}, strict=True)


def test_empty_output_file_is_kept():
    cfg, _ = validate_config({"output_file": "", "output_dir": "  "})

    assert cfg["output_file"] == ""
    # Blank required paths fall back to defaults
    assert cfg["output_dir"] == get_default_config()["output_dir"]


def test_wrong_string_type_strict_raises():
    with pytest.raises(TypeError):
        validate_config({"input_path": 42}, strict=True)
