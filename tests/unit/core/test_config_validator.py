from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Default value injection.
2. Type coercion (String to Bool/Int).
3. Strict mode validation.
"""

import pytest

from sbomtree.core.validator import validate_config
from sbomtree.infra.logging import LEVEL_NAMES


def test_validate_none_returns_defaults() -> None:
    cfg, warnings = validate_config(None)

    assert cfg == {
        "unknown_label": "Unknown",
        "max_depth": None,
        "case_sensitive": False,
        "log_level": "INFO",
    }
    assert warnings == []


def test_validate_non_dict_falls_back_with_warning() -> None:
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg["unknown_label"] == "Unknown"
    assert len(warnings) == 1


def test_validate_coerces_strings() -> None:
    raw = {"case_sensitive": "yes", "max_depth": "3", "log_level": "debug"}

    cfg, warnings = validate_config(raw)

    assert cfg["case_sensitive"] is True
    assert cfg["max_depth"] == 3
    assert cfg["log_level"] == "DEBUG"
    assert len(warnings) == 2


def test_validate_invalid_values_use_fallback() -> None:
    raw = {"case_sensitive": "maybe", "max_depth": -1, "unknown_label": 5, "log_level": "LOUD"}

    cfg, warnings = validate_config(raw)

    assert cfg["case_sensitive"] is False
    assert cfg["max_depth"] is None
    assert cfg["unknown_label"] == "Unknown"
    assert cfg["log_level"] == "INFO"
    assert len(warnings) == 4


def test_validate_reports_unknown_keys() -> None:
    cfg, warnings = validate_config({"colour": "blue"})

    assert "colour" not in cfg
    assert warnings == ["Unknown config key 'colour' ignored."]


def test_validate_blank_label_keeps_default() -> None:
    cfg, _ = validate_config({"unknown_label": "   ", "max_depth": "none"})

    assert cfg["unknown_label"] == "Unknown"
    assert cfg["max_depth"] is None


def test_strict_mode_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)
    with pytest.raises(TypeError):
        validate_config({"case_sensitive": "yes"}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"max_depth": -2}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"log_level": "LOUD"}, strict=True)


@pytest.mark.parametrize("level", sorted(LEVEL_NAMES))
def test_every_logging_level_name_is_accepted(level) -> None:
    cfg, warnings = validate_config({"log_level": level.lower()})

    assert cfg["log_level"] == level
    assert warnings == []
