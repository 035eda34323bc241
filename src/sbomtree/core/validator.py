from __future__ import annotations

"""
Configuration Validator.

Acts as a gatekeeper to ensure that the configuration dictionary passed
to the forest builder and the filter contains valid types and normalized
values. Uses a schema-driven approach to minimize boilerplate.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sbomtree.domain.config import DEFAULT_LOG_LEVEL, get_default_config
from sbomtree.infra.logging import LEVEL_NAMES

logger = logging.getLogger(__name__)


def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the configuration dictionary.

    Ensures types are correct (converting strings to bools/ints if needed)
    and fills in missing values with defaults using a declarative schema.

    Args:
        config: The raw configuration dictionary (or untrusted input).
        strict: If True, raises TypeError/ValueError on invalid data.

    Returns:
        Tuple[Dict, List[str]]: (Normalized Config, List of Warnings).
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # None simply means "use defaults"
    if config is None:
        return defaults, warnings

    # Base Validation: Type Check
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    unknown_keys = sorted(set(config) - set(defaults))
    for key in unknown_keys:
        warnings.append(f"Unknown config key '{key}' ignored.")

    # Start with defaults and update with provided config
    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # Declarative Schema Definition
    string_fields = ["unknown_label"]
    bool_fields = ["case_sensitive"]
    optional_int_fields = ["max_depth"]

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in optional_int_fields:
        merged[field] = _as_optional_int(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_level"] = _as_log_level(merged.get("log_level"), warnings, strict)

    for w in warnings:
        logger.debug(w)
    return merged, warnings


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Ensure value is a non-blank string."""
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


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce value to boolean."""
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


def _as_optional_int(
        value: Any,
        fallback: Optional[int],
        field: str,
        warnings: List[str],
        strict: bool,
) -> Optional[int]:
    """Ensure value is None or a non-negative integer."""
    if value is None:
        return None

    number: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and not strict:
        s = value.strip()
        if not s or s.lower() == "none":
            warnings.append(f"Field '{field}' converted from '{value}' to None.")
            return None
        if s.isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            number = int(s)

    if number is None:
        msg = f"Invalid field '{field}': expected int or None, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < 0:
        msg = f"Invalid field '{field}': must be >= 0, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return number


def _as_log_level(value: Any, warnings: List[str], strict: bool) -> str:
    """Ensure value names a known logging level."""
    if value is None:
        return DEFAULT_LOG_LEVEL
    if isinstance(value, str) and value.strip().upper() in LEVEL_NAMES:
        return value.strip().upper()

    msg = f"Invalid field 'log_level': '{value}' is not a known level."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return DEFAULT_LOG_LEVEL
